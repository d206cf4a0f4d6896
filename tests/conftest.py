from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from weather_note.schemas import DataSource


class FakeClock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class StubRegistry:
    """Stands in for ProviderRegistry; records every provider it is asked for."""

    def __init__(self, text: str = "Sunny, 20°C", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.calls: List[DataSource] = []

    async def fetch(self, provider: DataSource) -> str:
        self.calls.append(provider)
        if self.error is not None:
            raise self.error
        return self.text


def make_http_client(response=None, error: Optional[Exception] = None) -> AsyncMock:
    """Async-context-manager mock usable as a patched `httpx.AsyncClient` instance."""
    client = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    if error is not None:
        client.get = AsyncMock(side_effect=error)
    else:
        client.get = AsyncMock(return_value=response)
    return client


def make_response(text: str, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000)


@pytest.fixture
def registry() -> StubRegistry:
    return StubRegistry()

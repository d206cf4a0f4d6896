import logging
from typing import Awaitable, Callable, Dict, Optional, Union

import httpx

from .errors import ConfigurationError, NetworkError, ProviderNotImplementedError
from .schemas import DataSource
from .settings import Settings

logger = logging.getLogger(__name__)

FetchStrategy = Callable[[], Awaitable[str]]


class WttrClient:
    """Thin async client for the wttr.in one-line format.

    Parameters
    ----------
    url : str
        Endpoint to GET. The body is returned as-is.
    timeout : float
        Per-request timeout in seconds.

    Notes
    -----
    - Opens a fresh `httpx.AsyncClient` per call; nothing is kept between calls.
    - No retries.
    """

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout

    async def fetch(self) -> str:
        """Perform a GET request and return the response body verbatim.

        Raises
        ------
        NetworkError
            If the response has a 4xx/5xx status code, or for transport-level
            errors (DNS, timeouts, malformed URL, etc.). The httpx error is
            chained. Redirects are followed.
        """

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                r = await client.get(self.url)
                r.raise_for_status()
                return r.text
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"{self.url} answered {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"request to {self.url} failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise NetworkError(f"invalid url {self.url!r}: {exc}") from exc


class ProviderRegistry:
    """Map every `DataSource` to the coroutine that fetches its weather text.

    Parameters
    ----------
    settings : Settings
        Runtime configuration (endpoint and timeout).
    strategies : Optional[Dict[DataSource, FetchStrategy]]
        Overrides for individual providers, mostly for tests.

    Raises
    ------
    ValueError
        If a `DataSource` member ends up without a strategy.
    """

    def __init__(self, settings: Settings, strategies: Optional[Dict[DataSource, FetchStrategy]] = None):
        wttr = WttrClient(settings.wttr_url, settings.http_timeout)
        self._strategies: Dict[DataSource, FetchStrategy] = {
            DataSource.NOT_SELECTED: _not_selected,
            DataSource.WTTR: wttr.fetch,
            DataSource.OPENWEATHERMAP: _not_implemented(DataSource.OPENWEATHERMAP),
        }
        self._strategies.update(strategies or {})
        missing = [p.value for p in DataSource if p not in self._strategies]
        if missing:
            raise ValueError(f"no fetch strategy for: {', '.join(missing)}")

    async def fetch(self, provider: Union[DataSource, str]) -> str:
        """Return the current weather text from `provider`.

        Raises
        ------
        ConfigurationError
            No provider selected, or `provider` is not a known value.
        NetworkError
            Transport failure or non-success status.
        ProviderNotImplementedError
            Known provider without an implementation.
        """

        try:
            provider = DataSource(provider)
        except ValueError as exc:
            raise ConfigurationError(f"unknown provider {provider!r}") from exc
        logger.debug("Fetching weather from %s", provider.value)
        return await self._strategies[provider]()


async def _not_selected() -> str:
    raise ConfigurationError("no provider configured")


def _not_implemented(provider: DataSource) -> FetchStrategy:
    async def fetch() -> str:
        raise ProviderNotImplementedError(provider.value)

    return fetch

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class DataSource(str, Enum):
    """Weather data providers a user can pick in the settings.

    Notes
    -----
    - Values are the strings stored in the persisted settings blob.
    - `NOT_SELECTED` is the default and disables fetching entirely.
    """

    NOT_SELECTED = "not-selected"
    WTTR = "wttr"
    OPENWEATHERMAP = "openweathermap"


class CachedItem(BaseModel):
    """One successful fetch, as held in the cache table.

    Notes
    -----
    - Serialized with the keys `source`, `timestampInMs` and `info`, which is
      what the debug dump of the cache shows.
    - Frozen: a refresh replaces the whole item.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: DataSource = Field(alias="source")
    fetched_at_ms: int = Field(alias="timestampInMs")
    text: str = Field(alias="info")


CacheTable = Dict[DataSource, CachedItem]

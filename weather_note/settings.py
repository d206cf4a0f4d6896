import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .schemas import DataSource

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Immutable runtime configuration for the weather client.

    Notes
    -----
    - Values here are not read from environment variables. The host builds
      one `Settings` and hands it to the orchestrator; there is no
      module-level instance.
    - `http_timeout` is in seconds and applies to each outbound request.
    """

    model_config = ConfigDict(frozen=True)

    wttr_url: str = "https://wttr.in/?format=4"
    http_timeout: float = 20.0


class PluginSettings(BaseModel):
    """User-editable settings, persisted by the host as a single blob.

    Notes
    -----
    - Field aliases are the keys of the persisted blob
      (`source`, `cacheSeconds`, `addRibbon`).
    - Unknown keys in the blob are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    source: DataSource = DataSource.NOT_SELECTED
    cache_seconds: int = Field(default=300, ge=0, alias="cacheSeconds")
    add_ribbon: bool = Field(default=True, alias="addRibbon")

    @classmethod
    def from_data(cls, data: Optional[Dict[str, Any]]) -> "PluginSettings":
        """Merge a persisted (possibly partial or missing) blob onto the defaults.

        Parameters
        ----------
        data : Optional[Dict[str, Any]]
            Whatever the host stored last time, or `None` on first run.

        Returns
        -------
        PluginSettings
            Defaults with every persisted key overriding its default.

        Notes
        -----
        - A key whose value does not validate is logged and falls back to its
          default; a blob that is not a mapping falls back to all defaults.
        """

        data = data or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring persisted settings of type %s", type(data).__name__)
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
            logger.warning("Invalid persisted settings %s, using defaults for them: %s", sorted(bad), exc)
            return cls.model_validate({k: v for k, v in data.items() if k not in bad})

    def to_data(self) -> Dict[str, Any]:
        """Return the blob to persist, keyed by alias with JSON-compatible values."""

        return self.model_dump(by_alias=True, mode="json")

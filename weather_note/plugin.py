import logging
from typing import Any, Callable, Dict, Optional, Protocol

from .cache import WeatherCache
from .errors import WeatherError
from .providers import ProviderRegistry
from .schemas import DataSource
from .settings import PluginSettings, Settings

logger = logging.getLogger(__name__)

NO_EDITOR = "No active editor, no output."
FETCHING = "Fetching weather..."
FETCH_FAILED = "Something goes wrong while fetching weather info."
NO_CACHE = "No cached weather info, no output."


class SettingsStore(Protocol):
    async def load_data(self) -> Optional[Dict[str, Any]]:
        ...

    async def save_data(self, data: Dict[str, Any]) -> None:
        ...


class Editor(Protocol):
    def get_cursor(self) -> Any:
        ...

    def replace_range(self, text: str, position: Any) -> None:
        ...


class WeatherPlugin:
    """Owns the settings and the cache table on behalf of the host shell.

    The host calls `load()` once, wires its UI to `insert_weather` and
    `output_cache`, and forwards settings changes to the `set_*` methods.
    `commands_enabled` and `ribbon_enabled` tell the host which controls
    should currently be shown.
    """

    def __init__(self, store: SettingsStore, notify: Callable[[str], Any],
                 config: Optional[Settings] = None, cache: Optional[WeatherCache] = None):
        self.store = store
        self.notify = notify
        self.config = config or Settings()
        self.settings = PluginSettings()
        self.cache = cache or WeatherCache(ProviderRegistry(self.config))
        self.commands_enabled = False
        self.ribbon_enabled = False

    async def load(self) -> None:
        logger.info("loading WeatherPlugin")
        self.settings = PluginSettings.from_data(await self.store.load_data())
        self._sync_controls()

    async def save_settings(self) -> None:
        await self.store.save_data(self.settings.to_data())

    async def set_source(self, source: DataSource) -> None:
        self.settings.source = source
        await self.save_settings()
        self._sync_controls()

    async def set_cache_seconds(self, seconds: int) -> None:
        self.settings.cache_seconds = seconds
        await self.save_settings()

    async def set_add_ribbon(self, flag: bool) -> None:
        self.settings.add_ribbon = flag
        await self.save_settings()
        self._sync_controls()

    def _sync_controls(self) -> None:
        selected = self.settings.source != DataSource.NOT_SELECTED
        self.commands_enabled = selected
        self.ribbon_enabled = selected and self.settings.add_ribbon

    async def insert_weather(self, editor: Optional[Editor]) -> None:
        """Fetch (or reuse) the weather text and insert it at the cursor.

        Weather errors are logged and reported through a notice, never raised
        to the host.
        """

        if editor is None:
            self.notify(NO_EDITOR)
            return
        self.notify(FETCHING)
        try:
            item = await self.cache.get(self.settings.source, self.settings.cache_seconds)
        except WeatherError:
            logger.exception("Weather fetch from %s failed", self.settings.source.value)
            self.notify(FETCH_FAILED)
            return
        editor.replace_range(item.text, editor.get_cursor())

    def output_cache(self, editor: Editor) -> None:
        """Insert the cache table as a fenced JSON block, for debugging."""

        if self.cache.is_empty():
            self.notify(NO_CACHE)
            return
        editor.replace_range("\n```json\n" + self.cache.dump() + "\n```\n", editor.get_cursor())

from .cache import WeatherCache
from .errors import ConfigurationError, NetworkError, ProviderNotImplementedError, WeatherError
from .plugin import WeatherPlugin
from .providers import ProviderRegistry
from .schemas import CachedItem, DataSource
from .settings import PluginSettings, Settings

__all__ = [
    "CachedItem",
    "ConfigurationError",
    "DataSource",
    "NetworkError",
    "PluginSettings",
    "ProviderNotImplementedError",
    "ProviderRegistry",
    "Settings",
    "WeatherCache",
    "WeatherError",
    "WeatherPlugin",
]

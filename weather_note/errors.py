class WeatherError(Exception):
    """Base class for every error raised while fetching weather text."""


class ConfigurationError(WeatherError):
    """No provider (or an unusable one) is selected in the settings."""


class NetworkError(WeatherError):
    """The outbound request failed or the endpoint answered with a 4xx/5xx status."""


class ProviderNotImplementedError(WeatherError, NotImplementedError):
    """The provider is a known `DataSource` member without a fetch strategy yet."""

    def __init__(self, provider: str):
        super().__init__(f"not implemented for {provider} yet!")
        self.provider = provider

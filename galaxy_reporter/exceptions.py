# galaxy_reporter/exceptions.py


class GalaxyReporterError(Exception):
    """Base class for errors raised by galaxy_reporter."""


class ConfigurationError(GalaxyReporterError, ValueError):
    def __init__(self, detail: str = "Invalid configuration"):
        self.detail = detail
        super().__init__(detail)

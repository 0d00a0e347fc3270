class ConfigurationError(Exception):
    """Raised when required configuration is absent or invalid."""

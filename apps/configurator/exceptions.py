"""
Domain exceptions for the configurator app.

None of these cross the service boundary: normalization and money formatting
raise them internally and degrade to a safe value where they are caught.
"""


class ConfiguratorError(Exception):
    """Base class for configurator failures."""
    pass


class CatalogError(ConfiguratorError):
    """Raised when a catalog document (or one of its variants) cannot be normalized."""
    pass


class MoneyFormatError(ConfiguratorError):
    """Raised when a money formatting stage cannot produce output."""
    pass

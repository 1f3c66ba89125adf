"""mockdrills exception hierarchy.

Raised by infrastructure adapters and caught at the command boundary.
ThingCache and FileSender never raise these themselves.
"""


class MockdrillsError(Exception):
    """Base exception for all mockdrills errors."""


class ConfigurationError(MockdrillsError):
    """Raised for missing or invalid configuration."""


class CatalogError(MockdrillsError):
    """Raised when a thing catalog cannot be read or parsed."""


class SigningError(MockdrillsError):
    """Raised when a credential cannot be used for signing."""


class DeliveryError(MockdrillsError):
    """Raised when the delivery target cannot be prepared."""

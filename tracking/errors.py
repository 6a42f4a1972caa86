"""Exception hierarchy for the tracking relay."""


class TrackingError(Exception):
    """Base class for tracking relay errors."""


class ConfigurationError(TrackingError):
    """A required setting is missing or malformed.

    Raised before any provider call is attempted.
    """


class ProviderError(TrackingError):
    """The tracking provider could not be used."""


class TransportError(ProviderError):
    """A provider call failed at the network/HTTP level."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NormalizationError(TrackingError):
    """An accepted record could not be turned into a summary."""

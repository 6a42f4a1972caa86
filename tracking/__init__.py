"""Tracking lookup core: carrier resolution and response normalization."""

from .errors import ConfigurationError, NormalizationError, TrackingError, TransportError
from .models import CarrierCode, TrackingQuery, TrackingSummary
from .normalizer import ResponseNormalizer
from .resolver import CarrierResolver, NotFound, RegistrationDelayPolicy, Resolved
from .service import TrackingService, build_tracking_service

__all__ = [
    "CarrierCode",
    "CarrierResolver",
    "ConfigurationError",
    "NormalizationError",
    "NotFound",
    "RegistrationDelayPolicy",
    "Resolved",
    "ResponseNormalizer",
    "TrackingError",
    "TrackingQuery",
    "TrackingService",
    "TrackingSummary",
    "TransportError",
    "build_tracking_service",
]

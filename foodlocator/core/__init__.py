"""
Core infrastructure for the healthy food locator.
Provides exceptions, error handling, logging, metrics and dependency wiring.
"""

from .exceptions import (
    ErrorCode,
    FoodLocatorException,
    InputInvalidError,
    LocationNotFoundError,
    ServiceUnavailableError,
    PartialEnrichmentFailure,
)

__all__ = [
    "ErrorCode",
    "FoodLocatorException",
    "InputInvalidError",
    "LocationNotFoundError",
    "ServiceUnavailableError",
    "PartialEnrichmentFailure",
]

"""
Custom exceptions for the healthy food locator.
Covers input validation, geocoding misses, upstream outages and per-venue enrichment failures.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Search errors
    LOCATION_REQUIRED = "LOCATION_REQUIRED"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    PARTIAL_ENRICHMENT_FAILURE = "PARTIAL_ENRICHMENT_FAILURE"

    # Upstream errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Generic errors
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    HTTP_ERROR = "HTTP_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class FoodLocatorException(Exception):
    """Base exception for the healthy food locator."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class InputInvalidError(FoodLocatorException):
    """Raised when the place name is empty or whitespace only."""

    def __init__(self, message: str = "Please enter a location name."):
        super().__init__(
            message=message,
            error_code=ErrorCode.LOCATION_REQUIRED,
            status_code=400
        )


class LocationNotFoundError(FoodLocatorException):
    """Raised when the geocoder returns zero matches."""

    def __init__(self, place_name: str):
        super().__init__(
            message="Location not found.",
            error_code=ErrorCode.LOCATION_NOT_FOUND,
            details={"place_name": place_name},
            status_code=404
        )


class ServiceUnavailableError(FoodLocatorException):
    """Raised when an upstream service fails (transport, auth, timeout or bad payload)."""

    def __init__(self, service_name: str, details: Optional[Dict[str, Any]] = None):
        merged = {"service_name": service_name}
        if details:
            merged.update(details)
        super().__init__(
            message=f"Service '{service_name}' is temporarily unavailable",
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            details=merged,
            status_code=503
        )
        self.service_name = service_name


class PartialEnrichmentFailure(FoodLocatorException):
    """
    Raised when the detail fetch for a single venue fails.
    Never leaves the enricher: the venue is kept with default detail fields.
    """

    def __init__(self, venue_id: str, reason: Optional[str] = None):
        details = {"venue_id": venue_id}
        if reason:
            details["reason"] = reason
        super().__init__(
            message=f"Enrichment failed for venue '{venue_id}'",
            error_code=ErrorCode.PARTIAL_ENRICHMENT_FAILURE,
            details=details,
        )
        self.venue_id = venue_id

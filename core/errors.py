"""
Error taxonomy for the pricing and optimization engines.

Callers receive a structured failure description via ``to_dict()``:
- InvalidArgumentError: missing or malformed identifier or list
- FlightNotFoundError: referenced flight id is not in the catalog
- InternalEngineError: unexpected failure inside a computation
"""

from typing import Any, Dict, Optional


class PricingEngineError(RuntimeError):
    """Base class for all engine failures."""

    code = "internal"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        error = {'code': self.code, 'message': self.message}
        if self.details:
            error['details'] = dict(self.details)
        return {'error': error}


class InvalidArgumentError(PricingEngineError):
    """Raised when a required identifier or list is missing or malformed."""

    code = "invalid_argument"


class FlightNotFoundError(PricingEngineError):
    """Raised when a flight id does not resolve against the catalog."""

    code = "not_found"

    def __init__(self, flight_id: str):
        super().__init__(f"Flight not found: {flight_id}", {'flight_id': flight_id})
        self.flight_id = flight_id


class InternalEngineError(PricingEngineError):
    """Raised when a computation fails unexpectedly."""

    code = "internal"

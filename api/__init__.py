"""Request-level service and HTTP API."""

from .service import PricingService

__all__ = ['PricingService']

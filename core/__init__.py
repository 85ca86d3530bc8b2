"""Core pricing engine components."""

from core.models import *
from core.errors import (
    PricingEngineError,
    InvalidArgumentError,
    FlightNotFoundError,
    InternalEngineError
)
from core.config import PricingConfig, setup_logging
from core.catalog import FlightCatalog
from core.events import Subscription, SubscriptionRegistry, PriceAlertRegistry
from core.data_export import PricingDataExporter

__all__ = [
    'PricingConfig',
    'setup_logging',
    'FlightCatalog',
    'Subscription',
    'SubscriptionRegistry',
    'PriceAlertRegistry',
    'PricingDataExporter',
    'PricingEngineError',
    'InvalidArgumentError',
    'FlightNotFoundError',
    'InternalEngineError',
]

"""
Real-time pricing engine.

This package provides:
- Market condition generation
- Multi-factor price calculation
- Price history and trend analysis
- Batch pricing and deal rankings
- Seat utilization prediction and community pricing
"""

from .market import MarketConditionsGenerator
from .calculator import PriceCalculator, calculate_discount, round_half_up
from .history import PriceHistoryStore, TrendAnalyzer
from .state import PricingState
from .batch import (
    BatchPricingOrchestrator,
    BatchPricingResult,
    BatchFailure,
    CommunityDeal,
    best_current_deals
)
from .utilization import (
    SeatUtilizationPredictor,
    CommunityPricingEngine,
    CancellationRiskAssessor
)

__all__ = [
    'MarketConditionsGenerator',
    'PriceCalculator',
    'calculate_discount',
    'round_half_up',
    'PriceHistoryStore',
    'TrendAnalyzer',
    'PricingState',
    'BatchPricingOrchestrator',
    'BatchPricingResult',
    'BatchFailure',
    'CommunityDeal',
    'best_current_deals',
    'SeatUtilizationPredictor',
    'CommunityPricingEngine',
    'CancellationRiskAssessor'
]

"""
Core data models for the airline pricing and route optimization engine.

This module defines the fundamental data structures representing flights,
routes, market conditions, price updates, optimization scenarios and
what-if simulation results.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, time, timedelta
from enum import Enum
from typing import Optional, List, Dict, Any


class FlightStatus(Enum):
    """Operational status of a flight."""
    SCHEDULED = "scheduled"
    DELAYED = "delayed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class DemandLevel(Enum):
    """Demand tier derived from route popularity and time to departure."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Seasonality(Enum):
    """Seasonal demand profile of a route."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrendDirection(Enum):
    """Direction of recent price movement."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ComplexityTier(Enum):
    """Implementation complexity of an optimization scenario."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(Enum):
    """Empty-seat risk of a flight."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TargetAudience(Enum):
    """Audience a pricing recommendation is aimed at."""
    COMMUNITY = "community"
    BUSINESS = "business"
    LEISURE = "leisure"


class Urgency(Enum):
    """How soon a pricing recommendation should be acted on."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImplementationHorizon(Enum):
    """When a route optimization should be rolled out."""
    IMMEDIATE = "immediate"
    NEXT_SEASON = "next-season"
    LONG_TERM = "long-term"


@dataclass(frozen=True)
class Flight:
    """
    Scheduled flight instance.

    Flights are owned by the external catalog and treated as read-only by
    the engines. Derived copies are created with ``dataclasses.replace``.
    """
    id: str
    flight_number: str
    airline: str
    origin: str  # IATA code (e.g., "JFK")
    destination: str
    departure_time: time  # Local times
    arrival_time: time
    aircraft: str
    total_seats: int
    booked_seats: int
    price: float  # Base fare
    date: date
    status: FlightStatus = FlightStatus.SCHEDULED

    def __post_init__(self):
        if self.total_seats <= 0:
            raise ValueError(f"Flight {self.id}: total_seats must be positive")
        if not 0 <= self.booked_seats <= self.total_seats:
            raise ValueError(
                f"Flight {self.id}: booked_seats {self.booked_seats} outside "
                f"[0, {self.total_seats}]"
            )
        if self.price <= 0:
            raise ValueError(f"Flight {self.id}: price must be positive")

    @property
    def route_key(self) -> str:
        """Origin-destination key (e.g., 'JFK-LAX')."""
        return f"{self.origin}-{self.destination}"

    @property
    def departure_datetime(self) -> datetime:
        """Full scheduled departure datetime."""
        return datetime.combine(self.date, self.departure_time)

    @property
    def load_factor(self) -> float:
        """Current load factor (0.0 to 1.0)."""
        return self.booked_seats / self.total_seats

    @property
    def occupancy(self) -> float:
        """Current load factor as a percentage."""
        return self.load_factor * 100

    @property
    def empty_seats(self) -> int:
        """Seats still unsold."""
        return self.total_seats - self.booked_seats

    def hours_until_departure(self, now: datetime) -> float:
        """Hours from ``now`` until departure, floored at zero."""
        delta = self.departure_datetime - now
        return max(0.0, delta.total_seconds() / 3600)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'flight_number': self.flight_number,
            'airline': self.airline,
            'origin': self.origin,
            'destination': self.destination,
            'departure_time': self.departure_time.strftime("%H:%M"),
            'arrival_time': self.arrival_time.strftime("%H:%M"),
            'aircraft': self.aircraft,
            'total_seats': self.total_seats,
            'booked_seats': self.booked_seats,
            'price': self.price,
            'status': self.status.value,
            'date': self.date.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.flight_number} {self.route_key} on {self.date} {self.departure_time:%H:%M}"


@dataclass(frozen=True)
class Route:
    """Route (origin-destination pair) with aggregate performance data."""
    id: str
    origin: str
    destination: str
    distance: float  # km
    average_load_factor: float  # Percentage (0-100)
    frequency: int  # Flights per week
    seasonality: Seasonality = Seasonality.MEDIUM
    profitability: float = 0.0

    @property
    def route_key(self) -> str:
        return f"{self.origin}-{self.destination}"

    def serves(self, flight: Flight) -> bool:
        """Check if a flight operates on this route."""
        return flight.origin == self.origin and flight.destination == self.destination

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'origin': self.origin,
            'destination': self.destination,
            'distance': self.distance,
            'average_load_factor': self.average_load_factor,
            'frequency': self.frequency,
            'seasonality': self.seasonality.value,
            'profitability': self.profitability,
        }

    def __str__(self) -> str:
        return f"{self.route_key} ({self.frequency}/week)"


@dataclass(frozen=True)
class MarketConditions:
    """Transient market signals for a flight, recomputed on every call."""
    demand_level: DemandLevel
    competitor_price: float
    seasonal_multiplier: float
    hours_to_departure: float
    weather_impact: float  # -0.1 to 0.1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'demand_level': self.demand_level.value,
            'competitor_price': self.competitor_price,
            'seasonal_multiplier': self.seasonal_multiplier,
            'hours_to_departure': self.hours_to_departure,
            'weather_impact': self.weather_impact,
        }

    def __str__(self) -> str:
        return (f"Market(demand={self.demand_level.value}, "
                f"competitor=${self.competitor_price:.0f}, "
                f"seasonality={self.seasonal_multiplier:.2f})")


@dataclass(frozen=True)
class PriceUpdate:
    """A computed price for a flight. Immutable once created."""
    flight_id: str
    old_price: float
    new_price: int
    discount: int  # Percentage, never negative
    reason: str
    timestamp: datetime
    valid_until: datetime
    adjustment_factor: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flight_id': self.flight_id,
            'old_price': self.old_price,
            'new_price': self.new_price,
            'discount': self.discount,
            'reason': self.reason,
            'timestamp': self.timestamp.isoformat(),
            'valid_until': self.valid_until.isoformat(),
            'adjustment_factor': round(self.adjustment_factor, 4),
        }

    def __str__(self) -> str:
        return f"{self.flight_id}: ${self.old_price:.0f} -> ${self.new_price} ({self.reason})"


@dataclass(frozen=True)
class PriceTrend:
    """Trend summary over a flight's price history."""
    trend: TrendDirection = TrendDirection.STABLE
    average_price: float = 0.0
    price_volatility: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'trend': self.trend.value,
            'average_price': self.average_price,
            'price_volatility': self.price_volatility,
        }


@dataclass(frozen=True)
class ScheduleAdjustment:
    """Move a flight to a new departure/arrival time."""
    flight_id: str
    new_departure_time: time
    new_arrival_time: time


@dataclass(frozen=True)
class FrequencyChange:
    """New weekly frequency for a route."""
    route_id: str
    new_frequency: int


@dataclass(frozen=True)
class AircraftChange:
    """Swap the aircraft operating a flight."""
    flight_id: str
    new_aircraft: str
    new_capacity: int


@dataclass(frozen=True)
class RouteConsolidation:
    """Merge several flights into one consolidated service."""
    flight_ids: List[str]
    consolidated_flight_id: str


@dataclass(frozen=True)
class ScenarioChanges:
    """Optional change lists carried by a scenario."""
    schedule_adjustments: Optional[List[ScheduleAdjustment]] = None
    frequency_changes: Optional[List[FrequencyChange]] = None
    aircraft_changes: Optional[List[AircraftChange]] = None
    route_consolidations: Optional[List[RouteConsolidation]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.schedule_adjustments is not None:
            result['schedule_adjustments'] = [
                {
                    'flight_id': a.flight_id,
                    'new_departure_time': a.new_departure_time.strftime("%H:%M"),
                    'new_arrival_time': a.new_arrival_time.strftime("%H:%M"),
                }
                for a in self.schedule_adjustments
            ]
        if self.frequency_changes is not None:
            result['frequency_changes'] = [
                {'route_id': c.route_id, 'new_frequency': c.new_frequency}
                for c in self.frequency_changes
            ]
        if self.aircraft_changes is not None:
            result['aircraft_changes'] = [
                {
                    'flight_id': c.flight_id,
                    'new_aircraft': c.new_aircraft,
                    'new_capacity': c.new_capacity,
                }
                for c in self.aircraft_changes
            ]
        if self.route_consolidations is not None:
            result['route_consolidations'] = [
                {
                    'flight_ids': list(c.flight_ids),
                    'consolidated_flight_id': c.consolidated_flight_id,
                }
                for c in self.route_consolidations
            ]
        return result


@dataclass(frozen=True)
class ProjectedImpact:
    """Declared impact of a scenario (not derived from flight data)."""
    load_factor_improvement: float
    revenue_increase: float
    cost_savings: float
    empty_seats_reduction: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'load_factor_improvement': self.load_factor_improvement,
            'revenue_increase': self.revenue_increase,
            'cost_savings': self.cost_savings,
            'empty_seats_reduction': self.empty_seats_reduction,
        }


@dataclass(frozen=True)
class OptimizationScenario:
    """A named bundle of proposed operational changes."""
    id: str
    name: str
    description: str
    changes: ScenarioChanges
    projected_impact: ProjectedImpact
    implementation_complexity: ComplexityTier
    time_to_implement: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'changes': self.changes.to_dict(),
            'projected_impact': self.projected_impact.to_dict(),
            'implementation_complexity': self.implementation_complexity.value,
            'time_to_implement': self.time_to_implement,
        }

    def __str__(self) -> str:
        return f"Scenario {self.id} ({self.implementation_complexity.value})"


@dataclass(frozen=True)
class FleetMetrics:
    """Aggregate metrics over a set of flights."""
    total_revenue: float
    average_load_factor: float  # Percentage
    total_empty_seats: int
    operating_costs: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_revenue': self.total_revenue,
            'average_load_factor': self.average_load_factor,
            'total_empty_seats': self.total_empty_seats,
            'operating_costs': self.operating_costs,
        }


@dataclass(frozen=True)
class SimulationImprovements:
    """Deltas between baseline and simulated metrics."""
    revenue_gain: float
    load_factor_gain: float
    empty_seats_reduction: int
    cost_savings: float
    roi: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'revenue_gain': self.revenue_gain,
            'load_factor_gain': self.load_factor_gain,
            'empty_seats_reduction': self.empty_seats_reduction,
            'cost_savings': self.cost_savings,
            'roi': self.roi,
        }


@dataclass(frozen=True)
class WhatIfSimulation:
    """Baseline vs simulated comparison for one scenario."""
    scenario_id: str
    baseline_metrics: FleetMetrics
    simulated_metrics: FleetMetrics
    improvements: SimulationImprovements

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scenario_id': self.scenario_id,
            'baseline_metrics': self.baseline_metrics.to_dict(),
            'simulated_metrics': self.simulated_metrics.to_dict(),
            'improvements': self.improvements.to_dict(),
        }


@dataclass(frozen=True)
class RoadmapPhase:
    """Group of scenarios rolled out together."""
    phase: str
    complexity: ComplexityTier
    scenarios: List[OptimizationScenario]
    duration: str
    expected_benefits: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'phase': self.phase,
            'complexity': self.complexity.value,
            'scenarios': [s.to_dict() for s in self.scenarios],
            'duration': self.duration,
            'expected_benefits': self.expected_benefits,
        }


@dataclass
class SeatUtilization:
    """Occupancy prediction for a flight."""
    flight_id: str
    predicted_occupancy: int  # Percentage
    confidence: int  # Percentage
    empty_seats: int
    risk_level: RiskLevel
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flight_id': self.flight_id,
            'predicted_occupancy': self.predicted_occupancy,
            'confidence': self.confidence,
            'empty_seats': self.empty_seats,
            'risk_level': self.risk_level.value,
            'recommendations': list(self.recommendations),
        }


@dataclass
class PricingRecommendation:
    """Discount recommendation for filling a flight."""
    flight_id: str
    current_price: float
    recommended_price: int
    discount: int
    target_audience: TargetAudience
    urgency: Urgency

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flight_id': self.flight_id,
            'current_price': self.current_price,
            'recommended_price': self.recommended_price,
            'discount': self.discount,
            'target_audience': self.target_audience.value,
            'urgency': self.urgency.value,
        }


@dataclass
class CancellationRisk:
    """Risk that a flight ends up cancelled or consolidated."""
    flight_id: str
    risk_score: int  # 0-100
    factors: List[str] = field(default_factory=list)
    recommendation: str = "Monitor closely"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flight_id': self.flight_id,
            'risk_score': self.risk_score,
            'factors': list(self.factors),
            'recommendation': self.recommendation,
        }


@dataclass
class RouteOptimization:
    """Suggested schedule, frequency and aircraft for a route."""
    route_id: str
    current_performance: float
    departure_time: str
    frequency: int
    aircraft: str
    expected_improvement: int
    implementation: ImplementationHorizon

    def to_dict(self) -> Dict[str, Any]:
        return {
            'route_id': self.route_id,
            'current_performance': self.current_performance,
            'optimized_schedule': {
                'departure_time': self.departure_time,
                'frequency': self.frequency,
                'aircraft': self.aircraft,
            },
            'expected_improvement': self.expected_improvement,
            'implementation': self.implementation.value,
        }


@dataclass
class DashboardAnalytics:
    """Headline numbers over the whole catalog."""
    total_flights: int = 0
    average_load_factor: int = 0
    empty_seats_today: int = 0
    revenue_opportunity: int = 0
    routes_at_risk: int = 0
    community_bookings: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_flights': self.total_flights,
            'average_load_factor': self.average_load_factor,
            'empty_seats_today': self.empty_seats_today,
            'revenue_opportunity': self.revenue_opportunity,
            'routes_at_risk': self.routes_at_risk,
            'community_bookings': self.community_bookings,
        }


# Type aliases for clarity
Price = float
Percentage = float
FlightId = str

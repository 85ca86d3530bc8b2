"""
Request-level operations over the pricing and optimization engines.

PricingService owns one PricingState and wires together the market
generator, price calculator, batch orchestrator and optimization
components. Every response is a plain, JSON-ready dict stamped with the
time it was produced.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import logging
import numpy as np

from core.catalog import FlightCatalog
from core.config import PricingConfig
from core.errors import InvalidArgumentError, FlightNotFoundError, InternalEngineError
from core.events import Subscription, PriceListener, AlertCallback
from core.models import Flight, DashboardAnalytics
from pricing.batch import BatchPricingOrchestrator
from pricing.calculator import PriceCalculator, round_half_up
from pricing.market import MarketConditionsGenerator
from pricing.state import PricingState
from pricing.utilization import (
    SeatUtilizationPredictor, CommunityPricingEngine, CancellationRiskAssessor
)
from optimization.scenarios import ScenarioGenerator
from optimization.whatif import WhatIfSimulator
from optimization.roadmap import RoadmapPlanner
from optimization.route_analyzer import RouteAnalyzer


# Share of each empty seat's average fare counted as recoverable revenue
REVENUE_OPPORTUNITY_SHARE = 0.6
AT_RISK_LOAD_FACTOR = 0.6
COMMUNITY_BOOKING_RATE = 0.15


class PricingService:
    """
    Entry point for callers of the pricing and optimization engines.

    Features:
    - Single-flight and batch real-time pricing
    - Price history with trend
    - Optimization scenarios, what-if simulations and roadmap
    - Dashboard analytics and community deals
    - Price subscriptions and alerts
    """

    def __init__(
        self,
        catalog: FlightCatalog,
        config: Optional[PricingConfig] = None,
        state: Optional[PricingState] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize service.

        Args:
            catalog: Flights and routes to serve
            config: Engine configuration
            state: Shared pricing state (created from config if omitted)
            rng: Random source (seeded from config.random_seed if omitted)
            clock: Time source (defaults to datetime.now)
        """
        self.catalog = catalog
        self.config = config or PricingConfig()
        self.state = state or PricingState.from_config(self.config)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)
        self.clock = clock or datetime.now

        self.market = MarketConditionsGenerator(config=self.config, rng=self.rng, clock=self.clock)
        self.calculator = PriceCalculator(state=self.state, config=self.config, clock=self.clock)
        self.utilization = SeatUtilizationPredictor(clock=self.clock)
        self.community_pricing = CommunityPricingEngine(rng=self.rng)
        self.risk = CancellationRiskAssessor(clock=self.clock)
        self.orchestrator = BatchPricingOrchestrator(
            self.calculator,
            self.market,
            config=self.config,
            utilization=self.utilization,
            community_pricing=self.community_pricing
        )

        self.scenarios = ScenarioGenerator()
        self.simulator = WhatIfSimulator(config=self.config)
        self.roadmap = RoadmapPlanner()
        self.route_analyzer = RouteAnalyzer()

        self.logger = logging.getLogger('PricingService')
        self.logger.info(f"Pricing service ready: {self.catalog}")

    def _timestamp(self) -> str:
        return self.clock().isoformat()

    @staticmethod
    def _require_flight_id(flight_id: Optional[str]) -> str:
        if not isinstance(flight_id, str) or not flight_id.strip():
            raise InvalidArgumentError("Flight ID is required")
        return flight_id

    def _resolve_flight(self, flight_id: Optional[str]) -> Flight:
        flight_id = self._require_flight_id(flight_id)
        flight = self.catalog.get_flight(flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def get_flight_price(self, flight_id: str) -> Dict[str, Any]:
        """
        Price a single flight.

        Raises:
            InvalidArgumentError: flight id is empty
            FlightNotFoundError: flight id is unknown
        """
        flight = self._resolve_flight(flight_id)

        try:
            conditions = self.market.generate(flight)
            update = self.calculator.calculate(flight, conditions, flight.occupancy)
        except Exception as e:
            self.logger.exception(f"Pricing failed for {flight.id}")
            raise InternalEngineError(f"Pricing failed for {flight.id}: {e}") from e

        return {
            'price_update': update.to_dict(),
            'market_conditions': conditions.to_dict(),
            'timestamp': self._timestamp(),
        }

    def get_batch_prices(self, flight_ids: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Price several flights, or the whole catalog when no ids are given.

        Unknown ids are skipped with a warning. Updates follow the order
        of the requested ids.

        Raises:
            InvalidArgumentError: flight_ids is given but is not a list
        """
        if flight_ids is None:
            flights = self.catalog.flights
        else:
            if not isinstance(flight_ids, (list, tuple)):
                raise InvalidArgumentError("Invalid flight IDs")
            flights = []
            for flight_id in flight_ids:
                flight = self.catalog.get_flight(flight_id) if isinstance(flight_id, str) else None
                if flight is None:
                    self.logger.warning(f"Skipping unknown flight id: {flight_id!r}")
                    continue
                flights.append(flight)

        result = self.orchestrator.run(flights)
        best_deals = self.orchestrator.best_current_deals(result.updates)

        return {
            'price_updates': [u.to_dict() for u in result.updates],
            'best_deals': [u.to_dict() for u in best_deals],
            'failures': [f.to_dict() for f in result.failures],
            'timestamp': self._timestamp(),
        }

    def get_price_history(self, flight_id: str) -> Dict[str, Any]:
        """
        Recorded prices and trend for a flight.

        A flight that was never priced has an empty history.

        Raises:
            InvalidArgumentError: flight id is empty
        """
        flight_id = self._require_flight_id(flight_id)
        history = self.state.history.get(flight_id)
        trend = self.state.trends.analyze_prices([u.new_price for u in history])

        return {
            'flight_id': flight_id,
            'price_history': [u.to_dict() for u in history],
            'price_trend': trend.to_dict(),
            'timestamp': self._timestamp(),
        }

    # ------------------------------------------------------------------
    # Optimization
    # ------------------------------------------------------------------

    def get_optimization_overview(self) -> Dict[str, Any]:
        """Scenarios, their what-if simulations and the phased roadmap."""
        flights = self.catalog.flights
        scenarios = self.scenarios.generate(flights, self.catalog.routes)
        simulations = self.simulator.simulate_all(flights, scenarios)
        roadmap = self.roadmap.plan(scenarios)

        return {
            'scenarios': [s.to_dict() for s in scenarios],
            'simulations': {sid: s.to_dict() for sid, s in simulations.items()},
            'roadmap': [phase.to_dict() for phase in roadmap],
            'timestamp': self._timestamp(),
        }

    def get_route_analysis(self) -> Dict[str, Any]:
        """Optimized schedule recommendation for every route."""
        analyses = self.route_analyzer.analyze_all(self.catalog.routes, self.catalog.flights)
        return {
            'routes': [a.to_dict() for a in analyses],
            'timestamp': self._timestamp(),
        }

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def analyze_flight(self, flight_id: str) -> Dict[str, Any]:
        """Utilization prediction, pricing recommendation and cancellation risk."""
        flight = self._resolve_flight(flight_id)
        utilization = self.utilization.predict(flight)
        recommendation = self.community_pricing.recommend(flight, utilization)
        risk = self.risk.assess(flight, utilization)

        return {
            'flight_id': flight.id,
            'utilization': utilization.to_dict(),
            'pricing': recommendation.to_dict(),
            'revenue_impact': self.community_pricing.revenue_impact(flight, recommendation),
            'risk': risk.to_dict(),
            'timestamp': self._timestamp(),
        }

    def dashboard_analytics(self) -> DashboardAnalytics:
        flights = self.catalog.flights
        if not flights:
            return DashboardAnalytics()

        total_seats = sum(f.total_seats for f in flights)
        booked_seats = sum(f.booked_seats for f in flights)
        empty_seats = total_seats - booked_seats
        avg_price = sum(f.price for f in flights) / len(flights)

        return DashboardAnalytics(
            total_flights=len(flights),
            average_load_factor=round_half_up(booked_seats / total_seats * 100),
            empty_seats_today=empty_seats,
            revenue_opportunity=round_half_up(empty_seats * avg_price * REVENUE_OPPORTUNITY_SHARE),
            routes_at_risk=sum(1 for f in flights if f.load_factor < AT_RISK_LOAD_FACTOR),
            community_bookings=round_half_up(len(flights) * COMMUNITY_BOOKING_RATE * self.rng.random())
        )

    def get_dashboard_analytics(self) -> Dict[str, Any]:
        result = self.dashboard_analytics().to_dict()
        result['timestamp'] = self._timestamp()
        return result

    def get_community_deals(self) -> Dict[str, Any]:
        deals = self.orchestrator.best_community_deals(self.catalog.flights)
        return {
            'deals': [d.to_dict() for d in deals],
            'timestamp': self._timestamp(),
        }

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, flight_id: str, listener: PriceListener) -> Subscription:
        """Register a listener for every new price of a known flight."""
        flight = self._resolve_flight(flight_id)
        return self.state.subscriptions.subscribe(flight.id, listener)

    def create_price_alert(self, flight_id: str, threshold: float, callback: AlertCallback) -> Subscription:
        """Call back with the new price whenever it drops to ``threshold`` or below."""
        flight = self._resolve_flight(flight_id)
        return self.state.alerts.create_alert(flight.id, threshold, callback)

    def get_statistics(self) -> Dict[str, Any]:
        stats = {'flights': len(self.catalog), 'routes': len(self.catalog.routes)}
        stats.update(self.state.get_statistics())
        return stats

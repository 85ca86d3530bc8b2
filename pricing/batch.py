"""
Batch pricing across a set of flights.

Each flight is priced independently: market conditions are generated,
a naive occupancy estimate (booked / total) is used as the prediction,
and the price calculator records and publishes the result. A failure on
one flight is logged and reported without aborting the others.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Sequence
import logging
from tqdm import tqdm

from core.config import PricingConfig
from core.models import Flight, PriceUpdate, TargetAudience
from pricing.calculator import PriceCalculator
from pricing.market import MarketConditionsGenerator
from pricing.utilization import SeatUtilizationPredictor, CommunityPricingEngine


@dataclass
class BatchFailure:
    """A flight that could not be priced."""
    flight_id: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {'flight_id': self.flight_id, 'error': self.error}


@dataclass
class BatchPricingResult:
    """Outcome of a batch run: updates in input order plus failures."""
    updates: List[PriceUpdate] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.updates)


@dataclass
class CommunityDeal:
    """A flight offered to the community at a discounted price."""
    flight: Flight
    discount: int
    community_price: int

    def to_dict(self) -> Dict[str, Any]:
        result = self.flight.to_dict()
        result['discount'] = self.discount
        result['community_price'] = self.community_price
        return result


def best_current_deals(
    updates: Sequence[PriceUpdate],
    min_discount: int = 15,
    limit: int = 10
) -> List[PriceUpdate]:
    """Updates with a discount above ``min_discount``, largest first."""
    deals = [u for u in updates if u.discount > min_discount]
    deals.sort(key=lambda u: u.discount, reverse=True)
    return deals[:limit]


class BatchPricingOrchestrator:
    """
    Drive market generation and price calculation over many flights.

    Features:
    - Output order matches input order
    - Per-flight failure isolation
    - Optional thread pool execution
    - Best-deal rankings
    """

    def __init__(
        self,
        calculator: PriceCalculator,
        market: MarketConditionsGenerator,
        config: Optional[PricingConfig] = None,
        utilization: Optional[SeatUtilizationPredictor] = None,
        community_pricing: Optional[CommunityPricingEngine] = None
    ):
        self.calculator = calculator
        self.market = market
        self.config = config or calculator.config
        self.utilization = utilization or SeatUtilizationPredictor(clock=market.clock)
        self.community_pricing = community_pricing or CommunityPricingEngine(rng=market.rng)
        self.logger = logging.getLogger('BatchPricingOrchestrator')

    def price_flight(self, flight: Flight) -> PriceUpdate:
        """Price a single flight with a naive occupancy estimate."""
        conditions = self.market.generate(flight)
        predicted_occupancy = flight.booked_seats / flight.total_seats * 100
        return self.calculator.calculate(flight, conditions, predicted_occupancy)

    def _price_safely(self, flight: Flight):
        try:
            return self.price_flight(flight), None
        except Exception as e:
            self.logger.exception(f"Pricing failed for {flight.id}")
            return None, BatchFailure(flight_id=flight.id, error=str(e))

    def run(self, flights: Sequence[Flight]) -> BatchPricingResult:
        """
        Price every flight.

        Args:
            flights: Flights to price

        Returns:
            BatchPricingResult with one update per successfully priced flight,
            in input order, and the failures
        """
        flights = list(flights)
        result = BatchPricingResult()
        if not flights:
            return result

        pbar = None
        if self.config.progress_bar:
            pbar = tqdm(total=len(flights), desc="Pricing Flights")

        try:
            if self.config.enable_parallel and len(flights) > 1:
                with ThreadPoolExecutor(max_workers=self.config.num_workers) as executor:
                    outcomes = []
                    # map() yields results in submission order
                    for outcome in executor.map(self._price_safely, flights):
                        outcomes.append(outcome)
                        if pbar:
                            pbar.update(1)
            else:
                outcomes = []
                for flight in flights:
                    outcomes.append(self._price_safely(flight))
                    if pbar:
                        pbar.update(1)
        finally:
            if pbar:
                pbar.close()

        for update, failure in outcomes:
            if update is not None:
                result.updates.append(update)
            if failure is not None:
                result.failures.append(failure)

        self.logger.info(
            f"Priced {len(result.updates)}/{len(flights)} flights "
            f"({len(result.failures)} failures)"
        )
        return result

    def update_prices(self, flights: Sequence[Flight]) -> List[PriceUpdate]:
        """Price every flight and return the updates in input order."""
        return self.run(flights).updates

    def best_current_deals(self, updates: Sequence[PriceUpdate]) -> List[PriceUpdate]:
        return best_current_deals(
            updates,
            min_discount=self.config.best_deal_min_discount,
            limit=self.config.deals_limit
        )

    def best_community_deals(self, flights: Sequence[Flight]) -> List[CommunityDeal]:
        """
        Community-targeted deals, largest discount first.

        Uses the occupancy-based pricing recommendation rather than the
        real-time price, keeping only community-audience offers.
        """
        deals = []
        for flight in flights:
            utilization = self.utilization.predict(flight)
            recommendation = self.community_pricing.recommend(flight, utilization)

            if (recommendation.discount > self.config.community_deal_min_discount
                    and recommendation.target_audience == TargetAudience.COMMUNITY):
                deals.append(CommunityDeal(
                    flight=flight,
                    discount=recommendation.discount,
                    community_price=recommendation.recommended_price
                ))

        deals.sort(key=lambda d: d.discount, reverse=True)
        return deals[:self.config.deals_limit]

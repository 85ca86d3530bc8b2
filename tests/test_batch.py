"""
Tests for BatchPricingOrchestrator
==================================
"""

from datetime import date, datetime, timedelta
import itertools

from core.config import PricingConfig
from core.models import PriceUpdate
from pricing.batch import BatchPricingOrchestrator, best_current_deals
from pricing.calculator import PriceCalculator
from pricing.market import MarketConditionsGenerator


class FailingCalculator(PriceCalculator):
    """Calculator that cannot price one specific flight."""

    def calculate(self, flight, conditions, predicted_occupancy):
        if flight.id == "BAD":
            raise ValueError("no fare filed")
        return super().calculate(flight, conditions, predicted_occupancy)


def make_orchestrator(clock, rng, config=None, calculator_cls=PriceCalculator):
    config = config or PricingConfig()
    calculator = calculator_cls(config=config, clock=clock)
    market = MarketConditionsGenerator(config=config, rng=rng, clock=clock)
    return BatchPricingOrchestrator(calculator, market, config=config)


def make_update(flight_id: str, discount: int) -> PriceUpdate:
    timestamp = datetime(2025, 7, 15, 12, 0)
    return PriceUpdate(
        flight_id=flight_id,
        old_price=100,
        new_price=100 - discount,
        discount=discount,
        reason="Market-based pricing update",
        timestamp=timestamp,
        valid_until=timestamp + timedelta(minutes=30)
    )


class TestBatchRun:

    def test_preserves_order_and_count(self, clock, stub_rng, sample_flights):
        orchestrator = make_orchestrator(clock, stub_rng)

        updates = orchestrator.update_prices(sample_flights)

        assert [u.flight_id for u in updates] == [f.id for f in sample_flights]

    def test_empty_batch(self, clock, stub_rng):
        result = make_orchestrator(clock, stub_rng).run([])
        assert len(result) == 0
        assert result.succeeded

    def test_records_history(self, clock, stub_rng, sample_flights):
        orchestrator = make_orchestrator(clock, stub_rng)
        orchestrator.run(sample_flights)

        history = orchestrator.calculator.state.history
        assert sorted(history.flight_ids()) == sorted(f.id for f in sample_flights)

    def test_failure_isolated(self, clock, stub_rng, sample_flights, make_flight):
        orchestrator = make_orchestrator(clock, stub_rng, calculator_cls=FailingCalculator)
        flights = [sample_flights[0], make_flight(id="BAD"), sample_flights[1]]

        result = orchestrator.run(flights)

        assert [u.flight_id for u in result.updates] == ["F1", "F2"]
        assert len(result.failures) == 1
        assert result.failures[0].flight_id == "BAD"
        assert "no fare filed" in result.failures[0].error
        assert not result.succeeded

    def test_parallel_preserves_order(self, clock, make_flight):
        config = PricingConfig(random_seed=5, enable_parallel=True, num_workers=4)
        flights = [make_flight(id=f"F{i}", booked_seats=i * 10) for i in range(20)]
        orchestrator = make_orchestrator(clock, None, config=config)

        updates = orchestrator.update_prices(flights)

        assert [u.flight_id for u in updates] == [f.id for f in flights]
        assert len(orchestrator.calculator.state.history) == 20

    def test_parallel_same_flight_serialized(self, fixed_now, make_flight):
        ticks = itertools.count()

        def ticking_clock():
            return fixed_now + timedelta(seconds=next(ticks))

        config = PricingConfig(random_seed=11, enable_parallel=True, num_workers=8)
        orchestrator = make_orchestrator(ticking_clock, None, config=config)
        state = orchestrator.calculator.state
        flight = make_flight(id="F1")

        received = []
        events = []

        def listener(update):
            events.append(("start", update))
            received.append(update)
            events.append(("end", update))

        state.subscriptions.subscribe("F1", listener)

        updates = orchestrator.update_prices([flight] * 50)

        history = state.history.get("F1")
        assert len(updates) == 50
        assert len(history) == 50
        timestamps = [u.timestamp for u in history]
        assert timestamps == sorted(timestamps)
        assert [id(u) for u in received] == [id(u) for u in history]

        # Each delivery completes before the next one for the flight begins
        assert [kind for kind, _ in events] == ["start", "end"] * 50
        assert all(events[i][1] is events[i + 1][1] for i in range(0, 100, 2))


class TestBestDeals:

    def test_sorted_limited_and_filtered(self):
        updates = [make_update(f"F{i}", d) for i, d in enumerate(
            [5, 16, 40, 15, 22, 30, 18, 50, 17, 19, 25, 33, 21, 60, 20, 14]
        )]

        deals = best_current_deals(updates)

        assert len(deals) == 10
        discounts = [d.discount for d in deals]
        assert discounts == sorted(discounts, reverse=True)
        assert all(d > 15 for d in discounts)

    def test_no_deals(self):
        assert best_current_deals([make_update("F1", 15)]) == []


class TestCommunityDeals:

    def test_only_community_offers(self, clock, stub_rng, make_flight):
        orchestrator = make_orchestrator(clock, stub_rng)
        flights = [
            make_flight(id="EMPTY", booked_seats=40),  # Very low predicted occupancy
            make_flight(id="FULL", booked_seats=200, date=date(2025, 7, 15)),
        ]

        deals = orchestrator.best_community_deals(flights)

        assert [d.flight.id for d in deals] == ["EMPTY"]
        assert deals[0].discount == 50
        assert deals[0].community_price == 150
        assert deals[0].to_dict()['community_price'] == 150

"""
Tests for SubscriptionRegistry and PriceAlertRegistry
=====================================================
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

from core.events import SubscriptionRegistry, PriceAlertRegistry
from core.models import PriceUpdate


def make_update(flight_id: str = "F1", new_price: int = 100) -> PriceUpdate:
    timestamp = datetime(2025, 7, 15, 12, 0)
    return PriceUpdate(
        flight_id=flight_id,
        old_price=120,
        new_price=new_price,
        discount=0,
        reason="Market-based pricing update",
        timestamp=timestamp,
        valid_until=timestamp + timedelta(minutes=30)
    )


class TestSubscriptionRegistry:

    def test_delivery_in_registration_order(self):
        registry = SubscriptionRegistry()
        calls = []
        registry.subscribe("F1", lambda u: calls.append("first"))
        registry.subscribe("F1", lambda u: calls.append("second"))

        delivered = registry.notify(make_update())

        assert calls == ["first", "second"]
        assert delivered == 2

    def test_only_matching_flight_notified(self):
        registry = SubscriptionRegistry()
        received = []
        registry.subscribe("F2", received.append)

        registry.notify(make_update("F1"))

        assert received == []

    def test_double_unsubscribe_is_noop(self):
        registry = SubscriptionRegistry()
        received = []
        subscription = registry.subscribe("F1", received.append)

        assert subscription.cancel() is True
        assert subscription.cancel() is False
        assert registry.unsubscribe(subscription) is False
        assert not subscription.active

        registry.notify(make_update())
        assert received == []

    def test_same_listener_registered_twice(self):
        registry = SubscriptionRegistry()
        received = []
        first = registry.subscribe("F1", received.append)
        registry.subscribe("F1", received.append)

        first.cancel()
        registry.notify(make_update())

        assert len(received) == 1
        assert registry.subscriber_count("F1") == 1

    def test_listener_failure_isolated(self):
        registry = SubscriptionRegistry()
        received = []

        def broken(update):
            raise RuntimeError("boom")

        registry.subscribe("F1", broken)
        registry.subscribe("F1", received.append)

        delivered = registry.notify(make_update())

        assert delivered == 1
        assert len(received) == 1

    def test_statistics(self):
        registry = SubscriptionRegistry()
        registry.subscribe("F1", lambda u: None)
        registry.subscribe("F2", lambda u: None)
        registry.notify(make_update("F1"))

        stats = registry.get_statistics()
        assert stats['subscribers'] == 2
        assert stats['notifications_sent'] == 1
        assert len(registry) == 2

    def test_statistics_under_concurrent_notify(self):
        registry = SubscriptionRegistry()
        flight_ids = [f"F{i}" for i in range(8)]
        for flight_id in flight_ids:
            registry.subscribe(flight_id, lambda u: None)

        updates = [make_update(flight_ids[i % 8]) for i in range(4000)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(registry.notify, updates))

        assert registry.get_statistics()['notifications_sent'] == 4000


class TestPriceAlertRegistry:

    def test_fires_at_or_below_threshold(self):
        registry = PriceAlertRegistry()
        fired = []
        registry.create_alert("F1", 100, fired.append)

        registry.check(make_update(new_price=120))
        registry.check(make_update(new_price=100))
        registry.check(make_update(new_price=95))

        assert fired == [100, 95]

    def test_alert_removed(self):
        registry = PriceAlertRegistry()
        fired = []
        subscription = registry.create_alert("F1", 100, fired.append)

        assert registry.remove_alert(subscription) is True
        assert subscription.cancel() is False

        registry.check(make_update(new_price=50))
        assert fired == []
        assert registry.alert_count() == 0

    def test_alert_failure_isolated(self):
        registry = PriceAlertRegistry()
        fired = []

        def broken(price):
            raise RuntimeError("boom")

        registry.create_alert("F1", 100, broken)
        registry.create_alert("F1", 100, fired.append)

        assert registry.check(make_update(new_price=90)) == 1
        assert fired == [90]

    def test_statistics_under_concurrent_checks(self):
        registry = PriceAlertRegistry()
        flight_ids = [f"F{i}" for i in range(8)]
        for flight_id in flight_ids:
            registry.create_alert(flight_id, 100, lambda price: None)

        updates = [make_update(flight_ids[i % 8], new_price=90) for i in range(4000)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(registry.check, updates))

        assert registry.get_statistics()['alerts_fired'] == 4000

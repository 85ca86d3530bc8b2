"""
Shared mutable state of the pricing engine.

All engine entry points receive the same PricingState instead of reaching
for module-level globals. The per-flight lock serializes the
append-then-notify sequence so subscribers see one flight's updates in
creation order.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import threading

from core.config import PricingConfig
from core.events import SubscriptionRegistry, PriceAlertRegistry
from pricing.history import PriceHistoryStore, TrendAnalyzer


class PricingState:
    """Owns price history, subscriptions and alerts."""

    def __init__(
        self,
        history: Optional[PriceHistoryStore] = None,
        subscriptions: Optional[SubscriptionRegistry] = None,
        alerts: Optional[PriceAlertRegistry] = None
    ):
        self.history = history or PriceHistoryStore()
        self.subscriptions = subscriptions or SubscriptionRegistry()
        self.alerts = alerts or PriceAlertRegistry()
        self.trends = TrendAnalyzer(self.history)

        self._flight_locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    @classmethod
    def from_config(cls, config: PricingConfig) -> "PricingState":
        return cls(history=PriceHistoryStore(retention=config.history_retention))

    @contextmanager
    def flight_lock(self, flight_id: str) -> Iterator[None]:
        """Hold the single-writer lock for one flight id. Only write paths take it."""
        with self._guard:
            lock = self._flight_locks.get(flight_id)
            if lock is None:
                lock = self._flight_locks[flight_id] = threading.RLock()
        with lock:
            yield

    def flight_lock_count(self) -> int:
        with self._guard:
            return len(self._flight_locks)

    def get_statistics(self) -> Dict[str, int]:
        stats = {
            'flights_with_history': len(self.history.flight_ids()),
            'price_updates': len(self.history),
        }
        stats.update(self.subscriptions.get_statistics())
        stats.update(self.alerts.get_statistics())
        return stats

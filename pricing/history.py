"""
Price history retention and trend analysis.
"""

from collections import defaultdict
from typing import Dict, List, Optional
import logging
import threading
import numpy as np

from core.models import PriceUpdate, PriceTrend, TrendDirection


TREND_WINDOW = 5  # Last N price points
TREND_THRESHOLD = 0.05  # +/-5% relative change


class PriceHistoryStore:
    """
    Append-only, per-flight log of price updates.

    Insertion order is preserved per flight. Appends for the same flight
    are serialized; different flights never contend.
    """

    def __init__(self, retention: Optional[int] = None):
        """
        Initialize store.

        Args:
            retention: Keep at most this many entries per flight (oldest dropped).
                None keeps everything for the process lifetime.
        """
        if retention is not None and retention < 1:
            raise ValueError("retention must be at least 1")
        self.retention = retention
        self._history: Dict[str, List[PriceUpdate]] = defaultdict(list)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self.logger = logging.getLogger('PriceHistoryStore')

    def _lock_for(self, flight_id: str) -> threading.Lock:
        """Writer lock for a flight, created on first append."""
        with self._locks_guard:
            lock = self._locks.get(flight_id)
            if lock is None:
                lock = self._locks[flight_id] = threading.Lock()
            return lock

    def _existing_lock(self, flight_id: str) -> Optional[threading.Lock]:
        with self._locks_guard:
            return self._locks.get(flight_id)

    def append(self, update: PriceUpdate) -> None:
        """Record a price update for its flight."""
        with self._lock_for(update.flight_id):
            entries = self._history[update.flight_id]
            entries.append(update)

            # Keep only recent history when retention is capped
            if self.retention is not None and len(entries) > self.retention:
                del entries[:len(entries) - self.retention]

    def get(self, flight_id: str) -> List[PriceUpdate]:
        """Price history for a flight, oldest first. Empty if unknown."""
        # Lookups never register a lock, so unknown ids leave no trace
        lock = self._existing_lock(flight_id)
        if lock is None:
            return []
        with lock:
            return list(self._history.get(flight_id, []))

    def lock_count(self) -> int:
        """Number of flights with a writer lock."""
        with self._locks_guard:
            return len(self._locks)

    def latest(self, flight_id: str) -> Optional[PriceUpdate]:
        history = self.get(flight_id)
        return history[-1] if history else None

    def prices(self, flight_id: str) -> List[int]:
        return [update.new_price for update in self.get(flight_id)]

    def flight_ids(self) -> List[str]:
        with self._locks_guard:
            return [fid for fid in self._locks if self._history.get(fid)]

    def clear(self) -> None:
        with self._locks_guard:
            self._history.clear()
            self._locks.clear()

    def __len__(self) -> int:
        """Total number of entries across all flights."""
        return sum(len(self.get(fid)) for fid in self.flight_ids())

    def __contains__(self, flight_id: object) -> bool:
        return bool(self._history.get(flight_id))


class TrendAnalyzer:
    """Derive price direction and volatility from a flight's history."""

    def __init__(self, history: PriceHistoryStore):
        self.history = history

    @staticmethod
    def analyze_prices(prices: List[float]) -> PriceTrend:
        """
        Analyze a sequence of prices.

        Average and volatility (population standard deviation) cover all
        prices; direction compares the first and last of the last five.
        """
        if len(prices) < 2:
            return PriceTrend()

        values = np.asarray(prices, dtype=float)
        average_price = float(values.mean())
        price_volatility = float(values.std())

        recent = values[-TREND_WINDOW:]
        first_price, last_price = recent[0], recent[-1]
        price_change = (last_price - first_price) / first_price if first_price else 0.0

        trend = TrendDirection.STABLE
        if price_change > TREND_THRESHOLD:
            trend = TrendDirection.INCREASING
        elif price_change < -TREND_THRESHOLD:
            trend = TrendDirection.DECREASING

        return PriceTrend(
            trend=trend,
            average_price=average_price,
            price_volatility=price_volatility
        )

    def analyze(self, flight_id: str) -> PriceTrend:
        """Analyze the recorded history of a flight."""
        return self.analyze_prices(self.history.prices(flight_id))

"""
Price update notification system.

This module implements the per-flight observer registries used by the
pricing engine:
- SubscriptionRegistry: listeners notified on every price update
- PriceAlertRegistry: listeners notified when a price drops to a threshold

Registrations are identified by explicit tokens, so registering the same
callable twice yields two independent registrations.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import itertools
import logging
import threading

from core.models import PriceUpdate


PriceListener = Callable[[PriceUpdate], None]
AlertCallback = Callable[[int], None]

logger = logging.getLogger(__name__)

_token_counter = itertools.count(1)


@dataclass(eq=False)
class Subscription:
    """
    Handle returned by a registration.

    Calling ``cancel()`` removes exactly this registration. Cancelling an
    already removed registration is a no-op.
    """
    flight_id: str
    token: int = field(default_factory=lambda: next(_token_counter))
    _registry: Optional["_ListenerRegistry"] = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._registry is not None and self._registry.contains(self)

    def cancel(self) -> bool:
        """Deregister. Returns True if something was removed."""
        if self._registry is None:
            return False
        return self._registry.remove(self)


@dataclass(eq=False)
class PriceAlert:
    """A threshold alert on a flight's price."""
    threshold: float
    callback: AlertCallback
    subscription: Subscription

    def triggered_by(self, update: PriceUpdate) -> bool:
        return update.new_price <= self.threshold


class _ListenerRegistry:
    """Ordered per-flight entries keyed by subscription token."""

    def __init__(self):
        self._entries: Dict[str, List[tuple]] = {}
        self._lock = threading.Lock()

    def add(self, flight_id: str, payload) -> Subscription:
        subscription = Subscription(flight_id=flight_id, _registry=self)
        self.register(subscription, payload)
        return subscription

    def register(self, subscription: Subscription, payload) -> None:
        with self._lock:
            self._entries.setdefault(subscription.flight_id, []).append((subscription, payload))

    def remove(self, subscription: Subscription) -> bool:
        with self._lock:
            entries = self._entries.get(subscription.flight_id)
            if not entries:
                return False
            for index, (existing, _) in enumerate(entries):
                if existing is subscription:
                    del entries[index]
                    if not entries:
                        del self._entries[subscription.flight_id]
                    return True
        return False

    def contains(self, subscription: Subscription) -> bool:
        with self._lock:
            entries = self._entries.get(subscription.flight_id, [])
            return any(existing is subscription for existing, _ in entries)

    def snapshot(self, flight_id: str) -> List[tuple]:
        """Copy of the entries for a flight, in registration order."""
        with self._lock:
            return list(self._entries.get(flight_id, []))

    def count(self, flight_id: Optional[str] = None) -> int:
        with self._lock:
            if flight_id is not None:
                return len(self._entries.get(flight_id, []))
            return sum(len(entries) for entries in self._entries.values())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class SubscriptionRegistry:
    """
    Per-flight price update subscribers.

    Features:
    - Registration-order delivery
    - Token-based unsubscribe
    - Listener failures isolated and logged
    """

    def __init__(self):
        self._registry = _ListenerRegistry()
        self._notifications_sent = 0
        self._counter_lock = threading.Lock()

    def subscribe(self, flight_id: str, listener: PriceListener) -> Subscription:
        """
        Register a listener for a flight's price updates.

        Args:
            flight_id: Flight to watch
            listener: Called with each new PriceUpdate

        Returns:
            Subscription token; call ``cancel()`` to unsubscribe
        """
        subscription = self._registry.add(flight_id, listener)
        logger.debug(f"Subscribed token {subscription.token} to {flight_id}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription. Idempotent."""
        return self._registry.remove(subscription)

    def notify(self, update: PriceUpdate) -> int:
        """
        Deliver an update to every subscriber of its flight.

        Returns:
            Number of listeners that completed without error
        """
        delivered = 0
        for subscription, listener in self._registry.snapshot(update.flight_id):
            try:
                listener(update)
                delivered += 1
            except Exception:
                logger.exception(
                    f"Subscriber {subscription.token} failed on update for {update.flight_id}"
                )
        with self._counter_lock:
            self._notifications_sent += delivered
        return delivered

    def subscriber_count(self, flight_id: Optional[str] = None) -> int:
        return self._registry.count(flight_id)

    def clear(self) -> None:
        self._registry.clear()

    def get_statistics(self) -> Dict[str, int]:
        return {
            'subscribers': self._registry.count(),
            'notifications_sent': self._notifications_sent,
        }

    def __len__(self) -> int:
        return self._registry.count()


class PriceAlertRegistry:
    """Per-flight threshold alerts, fired when ``new_price <= threshold``."""

    def __init__(self):
        self._registry = _ListenerRegistry()
        self._alerts_fired = 0
        self._counter_lock = threading.Lock()

    def create_alert(self, flight_id: str, threshold: float, callback: AlertCallback) -> Subscription:
        """
        Register a price alert.

        Args:
            flight_id: Flight to watch
            threshold: Fire when the new price is at or below this value
            callback: Called with the new price

        Returns:
            Subscription token; call ``cancel()`` to remove the alert
        """
        subscription = Subscription(flight_id=flight_id, _registry=self._registry)
        alert = PriceAlert(threshold=threshold, callback=callback, subscription=subscription)
        self._registry.register(subscription, alert)
        logger.debug(f"Alert {subscription.token} on {flight_id} at ${threshold:.0f}")
        return subscription

    def remove_alert(self, subscription: Subscription) -> bool:
        """Remove an alert. Idempotent."""
        return self._registry.remove(subscription)

    def check(self, update: PriceUpdate) -> int:
        """
        Fire every alert on the update's flight whose threshold is met.

        Returns:
            Number of alerts fired successfully
        """
        fired = 0
        for subscription, alert in self._registry.snapshot(update.flight_id):
            if not alert.triggered_by(update):
                continue
            try:
                alert.callback(update.new_price)
                fired += 1
            except Exception:
                logger.exception(
                    f"Price alert {subscription.token} failed for {update.flight_id}"
                )
        with self._counter_lock:
            self._alerts_fired += fired
        return fired

    def alert_count(self, flight_id: Optional[str] = None) -> int:
        return self._registry.count(flight_id)

    def clear(self) -> None:
        self._registry.clear()

    def get_statistics(self) -> Dict[str, int]:
        return {
            'alerts': self._registry.count(),
            'alerts_fired': self._alerts_fired,
        }

    def __len__(self) -> int:
        return self._registry.count()

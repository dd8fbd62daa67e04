"""
Price alert management.

Alerts live in an explicit AlertState owned by an AlertController. The
controller loads persisted alerts on construction and writes the full list
back to the store after every mutation.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Optional, Union

import structlog

from .data.models import AlertCondition, PriceAlert, PriceSnapshot, Ticker
from .data.parsers import parse_numeric_input
from .errors import MalformedDataError
from .persistence.alert_store import AlertStore

logger = structlog.get_logger(__name__)


@dataclass
class AlertState:
    """Current set of user alerts."""
    alerts: list[PriceAlert] = field(default_factory=list)

    def active(self) -> list[PriceAlert]:
        return [a for a in self.alerts if not a.triggered]

    def triggered(self) -> list[PriceAlert]:
        return [a for a in self.alerts if a.triggered]

    def find(self, alert_id: str) -> Optional[PriceAlert]:
        return next((a for a in self.alerts if a.id == alert_id), None)


@dataclass(frozen=True)
class TriggeredAlert:
    """Alert that fired during a check, with the price that fired it."""
    alert: PriceAlert
    current_price: float

    @property
    def message(self) -> str:
        return (
            f"{self.alert.ticker.value} is now {self.alert.condition.value} "
            f"{self.alert.price:.2f} (Current: {self.current_price:.2f})"
        )


class AlertController:
    """Applies alert mutations to an AlertState and persists each change."""

    def __init__(self, state: AlertState, store: AlertStore):
        self.state = state
        self.store = store
        self.logger = logger

        self.state.alerts = self.store.load()
        self.logger.info("Alerts loaded", count=len(self.state.alerts))

    def _commit(self, alerts: list[PriceAlert]) -> None:
        """Save the new list, then adopt it. State is untouched when the save fails."""
        self.store.save(alerts)
        self.state.alerts = alerts

    def add_alert(self, ticker: Union[str, Ticker], condition: Union[str, AlertCondition],
                  price: Union[str, float]) -> PriceAlert:
        """
        Create and persist a new untriggered alert.

        Raises:
            UnknownTickerError: If the ticker is not supported
            MalformedDataError: If the condition is not 'above' or 'below'
            InvalidNumericInputError: If the price is not a finite number
        """
        try:
            parsed_condition = AlertCondition(condition)
        except ValueError:
            raise MalformedDataError(
                f"Invalid alert condition: {condition}", expected_format="above|below"
            ) from None

        alert = PriceAlert(
            id=str(uuid.uuid4()),
            ticker=Ticker.parse(ticker),
            condition=parsed_condition,
            price=parse_numeric_input(price),
        )
        self._commit([*self.state.alerts, alert])

        self.logger.info(
            "Alert created",
            alert_id=alert.id,
            ticker=alert.ticker.value,
            condition=alert.condition.value,
            price=alert.price,
        )
        return alert

    def remove_alert(self, alert_id: str) -> bool:
        """Remove an alert by id. Returns False when no alert matched."""
        remaining = [a for a in self.state.alerts if a.id != alert_id]
        if len(remaining) == len(self.state.alerts):
            return False

        self._commit(remaining)
        self.logger.info("Alert removed", alert_id=alert_id)
        return True

    def clear_triggered(self) -> int:
        """Drop every triggered alert and return how many were removed."""
        remaining = self.state.active()
        removed = len(self.state.alerts) - len(remaining)
        if removed:
            self._commit(remaining)
            self.logger.info("Triggered alerts cleared", removed=removed)
        return removed

    def check_alerts(self, snapshot: PriceSnapshot) -> list[TriggeredAlert]:
        """
        Mark alerts whose condition is met by the snapshot as triggered.

        Already-triggered alerts are skipped. The store is written only when
        at least one alert fired.

        Returns:
            Alerts that fired during this check
        """
        fired = []
        updated = []

        for alert in self.state.alerts:
            if alert.triggered:
                updated.append(alert)
                continue

            current_price = snapshot.price(alert.ticker)
            if alert.is_hit(current_price):
                alert = replace(alert, triggered=True)
                fired.append(TriggeredAlert(alert=alert, current_price=current_price))
            updated.append(alert)

        if fired:
            self._commit(updated)
            for event in fired:
                self.logger.info("Price alert triggered", alert_id=event.alert.id, message=event.message)

        return fired

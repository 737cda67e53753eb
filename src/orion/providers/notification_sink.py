"""Notification sink for price alerts."""

import logging
from typing import Protocol

from orion.domain.models import AlertDirection
from orion.domain.views import PriceAlert

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """
    Platform-specific delivery of a price alert.

    Returns True when the alert was delivered.
    """

    def deliver(self, alert: PriceAlert) -> bool:
        ...


def format_alert_title(alert: PriceAlert) -> str:
    """Title such as ``"▲ AAPL +10.00%"``."""
    arrow = "▲" if alert.direction == AlertDirection.UP else "▼"
    sign = "+" if alert.direction == AlertDirection.UP else ""
    return f"{arrow} {alert.symbol.upper()} {sign}{alert.change_pct:.2f}%"


def format_alert_body(alert: PriceAlert) -> str:
    """Body such as ``"Apple Inc is now $123.45"``."""
    return f"{alert.name} is now ${alert.current_price:,.2f}"


class LoggingNotificationSink:
    """Sink that writes alerts to the application log."""

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self.delivered: list[PriceAlert] = []

    def deliver(self, alert: PriceAlert) -> bool:
        if not self._enabled:
            return False
        logger.info("%s - %s", format_alert_title(alert), format_alert_body(alert))
        self.delivered.append(alert)
        return True

"""Alert kinds and an in-memory alert sink."""
from __future__ import annotations

import logging
from typing import List, Optional

from .abstractions import Alert, Notifier

logger = logging.getLogger(__name__)

VALIDATION = "validation"
TRANSPORT = "transport"
NOT_FOUND = "not_found"
UNEXPECTED = "unexpected"


class AlertCollector(Notifier):
    """Keeps alerts in order so the caller can render them after the request."""

    def __init__(self) -> None:
        self.alerts: List[Alert] = []

    def notify(self, alert: Alert) -> None:
        logger.info("Alert from %s (%s): %s", alert.source, alert.kind, alert.message)
        self.alerts.append(alert)

    @property
    def first(self) -> Optional[Alert]:
        return self.alerts[0] if self.alerts else None

    def messages(self) -> List[str]:
        return [alert.message for alert in self.alerts]

    def __bool__(self) -> bool:
        return bool(self.alerts)


__all__ = ["AlertCollector", "NOT_FOUND", "TRANSPORT", "UNEXPECTED", "VALIDATION"]

"""
Audit Logger

DESIGN DECISION: Every change to the expense list is logged.
This provides:
1. Traceability of what the user did
2. Debugging information when a load or save fails
3. A short in-memory history the UI can show

The audit logger:
- Subscribes to the expense store and logs each event it publishes
- Runs as a store subscriber, so a logging failure never blocks a change
- Keeps only the most recent events in memory
"""

import logging
from collections import deque
from typing import Callable, Optional

import structlog

from expense_tracker.models.events import EventSeverity, ExpenseEvent
from expense_tracker.store import ExpenseStore


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the standard library at `level`.

    structlog renders each entry to a JSON line; the stdlib handler
    only needs to print the message.
    """
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger().setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. A bounded in-memory history (for display)
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep. 0 keeps none.
        """
        self._history: deque[ExpenseEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("expense_tracker.audit")

    def log(self, event: ExpenseEvent) -> None:
        """Log a store event at its own severity and remember it."""
        log_dict = event.to_log_dict()

        if event.severity == EventSeverity.ERROR:
            self._logger.error("expense_event", **log_dict)
        elif event.severity == EventSeverity.WARNING:
            self._logger.warning("expense_event", **log_dict)
        elif event.severity == EventSeverity.DEBUG:
            self._logger.debug("expense_event", **log_dict)
        else:
            self._logger.info("expense_event", **log_dict)

        self._history.append(event)

    def attach(self, store: ExpenseStore) -> Callable[[], None]:
        """
        Start auditing a store.

        Returns:
            A function that stops auditing
        """
        return store.subscribe(self.log)

    def recent_events(self, limit: Optional[int] = None) -> list[ExpenseEvent]:
        """Return remembered events, newest first."""
        events = list(reversed(self._history))
        if limit is not None:
            return events[:limit]
        return events

    def clear(self) -> None:
        self._history.clear()

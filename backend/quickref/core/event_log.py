"""Event Log — bounded in-process record of lifecycle and deferred-work events.

Invariants:
    - Entries kept in insertion order; oldest dropped once maxlen is reached
    - record() never raises: it is called from background tasks and teardown code

Design Decisions:
    - Module-level logs (one per concern) instead of DB rows: state is lost on restart,
      acceptable for a single-process reference service
"""

import logging
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Event:
    kind: str
    detail: str
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["at"] = self.at.isoformat()
        return data


class EventLog:
    """Append-only, bounded list of events with a name used in log lines."""

    def __init__(self, name: str, maxlen: int = 500) -> None:
        self.name = name
        self._events: deque[Event] = deque(maxlen=maxlen)

    def record(self, kind: str, detail: str = "") -> Event:
        event = Event(kind=kind, detail=detail)
        self._events.append(event)
        logger.debug(f"[{self.name}] {kind}: {detail}")
        return event

    def entries(self, kind: str | None = None) -> list[Event]:
        if kind is None:
            return list(self._events)
        return [e for e in self._events if e.kind == kind]

    def kinds(self) -> list[str]:
        return [e.kind for e in self._events]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


lifecycle_log = EventLog("lifecycle")
notification_log = EventLog("notifications")
resource_log = EventLog("resources")

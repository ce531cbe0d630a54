from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel

class EventKind(str, Enum):
    START = "Start"
    STOP = "Stop"
    BACKUP = "Backup"
    UPDATE = "Update"
    INSTALL = "Install"
    BROADCAST = "Broadcast"

class EventStatus(str, Enum):
    RUNNING = "Running"
    SUCCESSFUL = "Successful"
    FAILED = "Failed"

class EventType(BaseModel):
    name: str
    status: str

@dataclass(frozen=True)
class NotificationEvent:
    """
    A lifecycle transition: one kind, one status.

    Broadcast has no lifecycle status of its own and always carries
    ``Successful``; any other status for it is rejected.
    """
    kind: EventKind
    status: EventStatus = EventStatus.SUCCESSFUL

    def __post_init__(self):
        if not isinstance(self.kind, EventKind):
            raise TypeError(f"kind must be an EventKind, got {self.kind!r}")
        if not isinstance(self.status, EventStatus):
            raise TypeError(f"status must be an EventStatus, got {self.status!r}")
        if self.kind is EventKind.BROADCAST and self.status is not EventStatus.SUCCESSFUL:
            raise ValueError("Broadcast events have no status")

    @classmethod
    def broadcast(cls) -> "NotificationEvent":
        return cls(EventKind.BROADCAST)

    def __str__(self) -> str:
        if self.kind is EventKind.BROADCAST:
            return self.kind.value
        return f"{self.kind.value} {self.status.value}"

    def to_event_type(self) -> EventType:
        return EventType(name=self.kind.value, status=self.status.value)

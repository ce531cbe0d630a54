from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel
from ..casing import title_case
from .events import EventType, NotificationEvent

class NotificationMessage(BaseModel):
    event_type: EventType
    event_message: str
    timestamp: str

    @classmethod
    def for_event(cls, event: NotificationEvent) -> "NotificationMessage":
        return cls(
            event_type=event.to_event_type(),
            event_message=f"Server Status: {title_case(str(event))}",
            timestamp=datetime.now().astimezone().isoformat(),
        )

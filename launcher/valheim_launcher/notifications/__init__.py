from .dispatcher import NotificationDispatcher, parse_override_key
from .errors import MissingChatIdError, NotificationError
from .events import EventKind, EventStatus, EventType, NotificationEvent
from .message import NotificationMessage
from .providers import Provider, build_payload, classify
from .webhook import fetch_webhook_url, is_webhook_enabled

__all__ = [
    "NotificationDispatcher", "parse_override_key",
    "MissingChatIdError", "NotificationError",
    "EventKind", "EventStatus", "EventType", "NotificationEvent",
    "NotificationMessage",
    "Provider", "build_payload", "classify",
    "fetch_webhook_url", "is_webhook_enabled",
]

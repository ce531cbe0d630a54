"""
Notification dispatch
---------------------
Turns lifecycle events into a single webhook POST. Delivery problems are
logged and swallowed here so that a broken webhook never aborts the server
command that fired the event.
"""
from __future__ import annotations
import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Dict, Optional, Tuple
from ..casing import constant_case
from ..config_resolver import ConfigResolver
from ..logging_setup import get_logger
from .errors import NotificationError
from .events import EventType, NotificationEvent
from .message import NotificationMessage
from .providers import build_payload, classify
from .webhook import fetch_webhook_url, is_valid_url, is_webhook_enabled

log = get_logger("valheim.launcher.notify")

SUCCESS_STATUSES = {200, 201, 204}
FALLBACK_STATUS = 500

def parse_override_key(event_type: EventType) -> str:
    if event_type.name.lower() == "broadcast":
        return constant_case(f"WEBHOOK_{event_type.name}_MESSAGE")
    return constant_case(f"WEBHOOK_{event_type.name}_{event_type.status}_MESSAGE")

class NotificationDispatcher:
    def __init__(self, resolver: ConfigResolver, *, timeout: Optional[float] = 10.0, retries: int = 0):
        self.resolver = resolver
        self.timeout = timeout
        self.retries = max(0, retries)

    @classmethod
    def from_settings(cls, settings, resolver: ConfigResolver) -> "NotificationDispatcher":
        return cls(resolver, timeout=settings.webhook_timeout, retries=settings.webhook_retries)

    def is_enabled(self) -> bool:
        return is_webhook_enabled(self.resolver)

    def send(self, event: NotificationEvent) -> bool:
        """Send ``event`` to WEBHOOK_URL. Returns True when the webhook accepted it."""
        if not self.is_enabled():
            log.debug("Skipping notification, no webhook supplied!")
            return False
        log.debug("Webhook found! Starting notification process...")
        default = NotificationMessage.for_event(event)
        key = parse_override_key(default.event_type)
        message = self.resolver.resolve(key, default.event_message)
        return self.send_custom(event, fetch_webhook_url(self.resolver), message)

    def send_custom(self, event: NotificationEvent, webhook_url: str, message: str) -> bool:
        if not is_valid_url(webhook_url):
            log.warning("[%s]: Skipping notification, webhook does not look valid: %s", event, webhook_url)
            return False
        notification = NotificationMessage.for_event(event)
        notification.event_message = message
        log.debug("Webhook enabled, sending notification %s", event)

        provider = classify(webhook_url)
        try:
            payload = build_payload(provider, notification, self.resolver)
        except NotificationError as e:
            log.error("[%s]: Skipping %s notification: %s", event, provider.value, e)
            return False
        log.info("Sending %s notification", provider.value)
        return self._deliver(event, webhook_url, payload)

    def _deliver(self, event: NotificationEvent, url: str, payload: Dict[str, Any]) -> bool:
        attempts = 1 + self.retries
        for attempt in range(1, attempts + 1):
            status, body = self._post(url, payload)
            if status in SUCCESS_STATUSES:
                log.info("[%s]: Webhook message sent successfully!", event)
                return True
            if status is None:
                log.error("[%s]: Error with webhook! Status %s %s", event, FALLBACK_STATUS, body)
            else:
                log.error("[%s]: Request failed! %s, %s", event, status, body)
            retryable = status is None or status >= 500
            if not retryable or attempt == attempts:
                break
            log.info("[%s]: Retrying webhook (%d/%d)", event, attempt, self.retries)
        return False

    def _post(self, url: str, payload: Dict[str, Any]) -> Tuple[Optional[int], str]:
        """Returns (status, body); status is None on transport failure."""
        data = json.dumps(payload).encode("utf-8")
        log.debug("Webhook URL: %s", url)
        try:
            request = urllib.request.Request(url, data=data, method="POST")
            request.add_header("Content-Type", "application/json")
            with urllib.request.urlopen(request, timeout=self.timeout) as resp:
                return resp.status, resp.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            return e.code, e.read().decode("utf-8", errors="replace")
        except (OSError, ValueError, http.client.HTTPException) as e:
            return None, str(e)

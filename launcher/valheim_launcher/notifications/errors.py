from __future__ import annotations

class NotificationError(Exception):
    """A notification could not be prepared or delivered."""

class MissingChatIdError(NotificationError):
    pass

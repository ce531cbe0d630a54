from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator
from .notifications import EventKind, EventStatus, NotificationDispatcher, NotificationEvent

@contextmanager
def lifecycle(dispatcher: NotificationDispatcher, kind: EventKind) -> Iterator[None]:
    """Fire Running before the block and Successful or Failed after it. Errors are re-raised."""
    dispatcher.send(NotificationEvent(kind, EventStatus.RUNNING))
    try:
        yield
    except BaseException:
        dispatcher.send(NotificationEvent(kind, EventStatus.FAILED))
        raise
    dispatcher.send(NotificationEvent(kind, EventStatus.SUCCESSFUL))

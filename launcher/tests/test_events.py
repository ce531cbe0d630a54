"""
Tests for the lifecycle event model and override key derivation.
"""

import pytest

from valheim_launcher.notifications import (
    EventKind,
    EventStatus,
    EventType,
    NotificationEvent,
    NotificationMessage,
    parse_override_key,
)


class TestNotificationEvent:

    def test_display_string(self):
        event = NotificationEvent(EventKind.STOP, EventStatus.RUNNING)
        assert str(event) == "Stop Running"

    def test_broadcast_display_has_no_status(self):
        assert str(NotificationEvent.broadcast()) == "Broadcast"

    def test_event_type_matches_display(self):
        event = NotificationEvent(EventKind.BACKUP, EventStatus.FAILED)
        et = event.to_event_type()
        assert (et.name, et.status) == ("Backup", "Failed")
        assert f"{et.name} {et.status}" == str(event)

    def test_broadcast_rejects_status(self):
        with pytest.raises(ValueError):
            NotificationEvent(EventKind.BROADCAST, EventStatus.FAILED)

    def test_rejects_plain_strings(self):
        with pytest.raises(TypeError):
            NotificationEvent("Start", EventStatus.RUNNING)

    def test_events_are_immutable(self):
        event = NotificationEvent(EventKind.START, EventStatus.RUNNING)
        with pytest.raises(Exception):
            event.status = EventStatus.FAILED


class TestNotificationMessage:

    def test_default_message_is_title_cased(self):
        msg = NotificationMessage.for_event(NotificationEvent(EventKind.STOP, EventStatus.SUCCESSFUL))
        assert msg.event_message == "Server Status: Stop Successful"
        assert msg.event_type == EventType(name="Stop", status="Successful")

    def test_timestamp_is_rfc3339_with_offset(self):
        from datetime import datetime
        msg = NotificationMessage.for_event(NotificationEvent.broadcast())
        parsed = datetime.fromisoformat(msg.timestamp)
        assert parsed.utcoffset() is not None

    def test_wire_shape(self):
        msg = NotificationMessage.for_event(NotificationEvent(EventKind.START, EventStatus.RUNNING))
        dumped = msg.model_dump()
        assert set(dumped) == {"event_type", "event_message", "timestamp"}
        assert dumped["event_type"] == {"name": "Start", "status": "Running"}


class TestParseOverrideKey:

    @pytest.mark.parametrize("name", ["Broadcast", "broadcast", "BROADCAST"])
    @pytest.mark.parametrize("status", ["Running", "Successful", "Failed"])
    def test_broadcast_any_case(self, name, status):
        assert parse_override_key(EventType(name=name, status=status)) == "WEBHOOK_BROADCAST_MESSAGE"

    def test_stop_running(self):
        assert parse_override_key(EventType(name="Stop", status="Running")) == "WEBHOOK_STOP_RUNNING_MESSAGE"

    def test_from_event(self):
        event = NotificationEvent(EventKind.UPDATE, EventStatus.FAILED)
        assert parse_override_key(event.to_event_type()) == "WEBHOOK_UPDATE_FAILED_MESSAGE"

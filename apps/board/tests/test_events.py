import pytest

from apps.board.events import (
    CommentAdded,
    Connected,
    InvalidEvent,
    Other,
    Pong,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
    parse_event,
)


@pytest.mark.parametrize(
    ("payload", "cls"),
    [
        ({"type": "connected", "agentId": "alice"}, Connected),
        ({"type": "pong"}, Pong),
        ({"type": "task_created", "taskId": "abc"}, TaskCreated),
        ({"type": "task_updated", "taskId": "abc", "changes": {"status": "done"}}, TaskUpdated),
        ({"type": "task_deleted", "taskId": "abc"}, TaskDeleted),
        ({"type": "comment_added", "taskId": "abc", "commentId": "c1"}, CommentAdded),
    ],
)
def test_parse_known_variants(payload, cls):
    event = parse_event(payload)

    assert isinstance(event, cls)
    assert event.to_payload() == payload


def test_unknown_type_is_forwarded_as_other():
    payload = {"type": "cursor_moved", "x": 10, "y": 20}
    event = parse_event(payload)

    assert isinstance(event, Other)
    assert event.to_payload() == payload


def test_payload_without_type_is_other():
    assert isinstance(parse_event({"taskId": "abc"}), Other)


def test_known_type_missing_task_id_is_other():
    event = parse_event({"type": "task_created"})

    assert isinstance(event, Other)
    assert event.to_payload() == {"type": "task_created"}


def test_extra_fields_are_preserved():
    event = parse_event({"type": "task_created", "taskId": "abc", "title": "Deploy", "sprint": "s1"})

    assert event.task_id == "abc"
    assert event.extra == {"title": "Deploy", "sprint": "s1"}
    assert event.to_payload() == {"type": "task_created", "taskId": "abc", "title": "Deploy", "sprint": "s1"}


def test_timestamp_is_overwritten_when_stamped():
    known = parse_event({"type": "task_deleted", "taskId": "abc", "timestamp": 1})
    other = parse_event({"type": "custom", "timestamp": 1})

    assert known.to_payload(timestamp=99)["timestamp"] == 99
    assert other.to_payload(timestamp=99)["timestamp"] == 99


@pytest.mark.parametrize("payload", [None, [], ["task_created"], "task_created", 42])
def test_non_object_payload_is_rejected(payload):
    with pytest.raises(InvalidEvent):
        parse_event(payload)


def test_events_pass_through_parse():
    event = TaskCreated(task_id="abc")

    assert parse_event(event) is event


@pytest.mark.parametrize("kind", [{"name": "task_created"}, ["task_created"], 7, None])
def test_non_string_type_becomes_other(kind):
    payload = {"type": kind, "taskId": "abc"}

    event = parse_event(payload)

    assert isinstance(event, Other)
    assert event.to_payload() == payload

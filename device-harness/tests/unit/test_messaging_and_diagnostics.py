from __future__ import annotations

import logging

import pytest

from device_harness.diagnostics import ChannelLogHandler, get_debug, null_logger
from device_harness.messaging import MAX_MESSAGES, InMemoryChannel, MessageBox, MessageChannel


def _update(content: str, time: str = "12:00:00") -> dict:
    return {
        "action": "updateWebpageMessage",
        "data": {"content": content, "time": time, "type": "info"},
    }


def test_message_box_keeps_last_fifty() -> None:
    channel = InMemoryChannel()
    box = MessageBox()
    box.attach(channel)
    assert isinstance(channel, MessageChannel)

    for i in range(MAX_MESSAGES + 7):
        assert channel.publish(_update(f"msg {i}")) == [{"success": True}]

    contents = [m.content for m in box.messages]
    assert len(contents) == MAX_MESSAGES
    assert contents[0] == "msg 7"
    assert contents[-1] == f"msg {MAX_MESSAGES + 6}"


def test_message_box_ignores_other_actions() -> None:
    channel = InMemoryChannel()
    box = MessageBox()
    box.attach(channel)

    assert channel.publish({"action": "ping"}) == [None]
    assert box.messages == []


def test_detach_unsubscribes() -> None:
    channel = InMemoryChannel()
    box = MessageBox()
    box.attach(channel)
    box.detach()

    assert len(channel) == 0
    assert channel.publish(_update("late")) == []
    assert box.messages == []


def test_message_box_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        MessageBox(max_messages=0)


def test_channel_log_handler_publishes_records() -> None:
    channel = InMemoryChannel()
    box = MessageBox(max_messages=3)
    box.attach(channel)

    logger = logging.getLogger("device_harness.test.channel")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ChannelLogHandler(channel)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    try:
        logger.debug("Mock tap action: %r", {"x": 1, "y": 2})
    finally:
        logger.removeHandler(handler)

    assert [m.content for m in box.messages] == [
        "device_harness.test.channel: Mock tap action: {'x': 1, 'y': 2}"
    ]
    assert box.messages[0].time


def test_get_debug_namespaces_under_package_logger() -> None:
    assert get_debug("mock-device").name == "device_harness.mock-device"
    assert get_debug("").name == "device_harness"


def test_null_logger_does_not_propagate() -> None:
    logger = null_logger("unit")
    assert logger.propagate is False
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
    assert null_logger("unit").handlers == logger.handlers

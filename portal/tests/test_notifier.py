"""
Unit tests for TicketNotifier
"""
import asyncio
import time

import pytest

from portal.models.schemas import Message
from portal.services.notifier import TicketNotifier


class FakeConnection:
    """Collects frames sent to it"""

    def __init__(self, fail: bool = False):
        self.frames = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)


class StalledConnection(FakeConnection):
    """Never gets around to accepting a frame in time"""

    async def send_json(self, data):
        await asyncio.sleep(1)
        self.frames.append(data)


@pytest.fixture
def notifier():
    return TicketNotifier()


@pytest.fixture
def message():
    return Message(timestamp="2025-01-01T00:00:00.000Z", author="alice", text="hi")


class TestPublish:
    """Delivery to subscriber sets"""

    @pytest.mark.asyncio
    async def test_subscriber_receives_new_message(self, notifier, message):
        conn = FakeConnection()
        notifier.subscribe(conn, "1")

        delivered = await notifier.publish("1", message)

        assert delivered == 1
        assert conn.frames == [{
            "event": "newMessage",
            "data": {"timestamp": "2025-01-01T00:00:00.000Z", "author": "alice", "text": "hi"},
        }]

    @pytest.mark.asyncio
    async def test_other_tickets_not_notified(self, notifier, message):
        conn = FakeConnection()
        notifier.subscribe(conn, "2")

        assert await notifier.publish("1", message) == 0
        assert conn.frames == []

    @pytest.mark.asyncio
    async def test_late_subscriber_gets_no_backlog(self, notifier, message):
        await notifier.publish("1", message)

        conn = FakeConnection()
        notifier.subscribe(conn, "1")
        assert conn.frames == []

    @pytest.mark.asyncio
    async def test_order_matches_publish_order(self, notifier):
        conn = FakeConnection()
        notifier.subscribe(conn, "1")

        for i in range(5):
            await notifier.publish("1", Message(author="a", text=str(i)))

        assert [f["data"]["text"] for f in conn.frames] == ["0", "1", "2", "3", "4"]

    @pytest.mark.asyncio
    async def test_double_subscribe_delivers_once(self, notifier, message):
        conn = FakeConnection()
        notifier.subscribe(conn, "1")
        notifier.subscribe(conn, "1")

        await notifier.publish("1", message)
        assert len(conn.frames) == 1

    @pytest.mark.asyncio
    async def test_failing_connection_is_dropped(self, notifier, message):
        good, bad = FakeConnection(), FakeConnection(fail=True)
        notifier.subscribe(good, "1")
        notifier.subscribe(bad, "1")
        notifier.subscribe(bad, "2")

        assert await notifier.publish("1", message) == 1
        assert notifier.subscribers("1") == [good]
        assert notifier.subscribers("2") == []

    @pytest.mark.asyncio
    async def test_stalled_connection_is_dropped(self, message):
        notifier = TicketNotifier(send_timeout=0.05)
        stalled, good = StalledConnection(), FakeConnection()
        notifier.subscribe(stalled, "1")
        notifier.subscribe(good, "1")

        started = time.monotonic()
        delivered = await notifier.publish("1", message)

        assert time.monotonic() - started < 0.5
        assert delivered == 1
        assert len(good.frames) == 1
        assert stalled.frames == []
        assert notifier.subscribers("1") == [good]

    @pytest.mark.asyncio
    async def test_stalled_connection_does_not_block_later_publishes(self, message):
        notifier = TicketNotifier(send_timeout=0.05)
        good = FakeConnection()
        notifier.subscribe(StalledConnection(), "1")
        notifier.subscribe(good, "1")

        await notifier.publish("1", message)
        await notifier.publish("1", Message(author="bob", text="second"))

        assert [f["data"]["text"] for f in good.frames] == ["hi", "second"]


class TestDisconnect:
    """Membership cleanup"""

    @pytest.mark.asyncio
    async def test_disconnect_removes_from_all_tickets(self, notifier, message):
        conn = FakeConnection()
        notifier.subscribe(conn, "1")
        notifier.subscribe(conn, "2")

        notifier.disconnect(conn)

        assert notifier.subscribers("1") == []
        assert notifier.subscribers("2") == []
        assert await notifier.publish("1", message) == 0

    def test_disconnect_reports_joined_count(self, notifier):
        conn = FakeConnection()
        notifier.subscribe(conn, "1")
        notifier.subscribe(conn, "2")

        assert notifier.disconnect(conn) == 2
        assert notifier.disconnect(conn) == 0

    def test_disconnect_unknown_connection(self, notifier):
        assert notifier.disconnect(FakeConnection()) == 0
        assert notifier.subscribers("1") == []

    def test_disconnect_keeps_other_subscribers(self, notifier):
        first, second = FakeConnection(), FakeConnection()
        notifier.subscribe(first, "1")
        notifier.subscribe(second, "1")

        notifier.disconnect(first)
        assert notifier.subscribers("1") == [second]

#!/usr/bin/env python3
"""
Notification Test Script

Tests:
1. In-memory inbox: peek, consume, ordering, blank messages ignored, aware timestamps
2. A failing sink never breaks the operation that triggered it
3. MongoDB sink document shape (mocked collection, no server needed)
4. Staff workload reminder

Run: python scripts/test_notifications.py
"""
import sys
sys.path.insert(0, '.')

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from internship_portal.core.clock import FixedClock, SystemClock
from internship_portal.models.enums import ApplicationStatus
from internship_portal.services.notification_service import (
    InMemoryNotificationSink, MongoNotificationSink, NotificationDispatcher, NotificationSink
)

from sample_data import TODAY, make_engine, seed_people, post_internship


class BrokenSink(NotificationSink):
    """Sink whose delivery always fails."""

    def __init__(self):
        self.attempts = 0

    def notify(self, recipient_id, message):
        self.attempts += 1
        raise ConnectionError("inbox unavailable")

    def peek(self, recipient_id):
        return []

    def consume(self, recipient_id):
        return []


def test_in_memory_inbox():
    print("\n[1] Testing in-memory inbox...")
    clock = FixedClock(TODAY)
    sink = InMemoryNotificationSink(clock=clock)

    sink.notify("u1", "  first  ")
    sink.notify("u1", "")
    sink.notify("", "nobody")
    sink.notify("u2", "other user")

    assert sink.has_notifications("u1")
    peeked = sink.peek("u1")
    assert [n.message for n in peeked] == ["first"]
    assert peeked[0].created_at == clock.now()

    # Timestamps are timezone-aware UTC
    assert clock.now().tzinfo is not None
    assert SystemClock().now().tzinfo is not None
    unclocked = InMemoryNotificationSink()
    unclocked.notify("u3", "hello")
    assert unclocked.peek("u3")[0].created_at.tzinfo is not None

    consumed = sink.consume("u1")
    assert [n.message for n in consumed] == ["first"]
    assert not sink.has_notifications("u1")
    assert sink.consume("u1") == []
    assert [n.message for n in sink.peek("u2")] == ["other user"]
    print("    ✅ Inbox OK")


def test_failure_isolation():
    print("\n[2] Testing delivery failure isolation...")
    sink = BrokenSink()
    engine = make_engine(notification_sink=sink)
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    internship = post_internship(engine, rep, staff)
    application = engine.applications.submit(student, internship)
    engine.applications.set_status(application, ApplicationStatus.successful)

    assert application.status == ApplicationStatus.successful
    assert internship in engine.catalog.all()
    assert sink.attempts >= 3
    assert engine.notifier.send("u1", "hello") is False
    print(f"    ✅ {sink.attempts} failed deliveries, state changes kept")


def test_mongo_sink():
    print("\n[3] Testing MongoDB sink (mocked collection)...")
    collection = MagicMock()
    sink = MongoNotificationSink(collection=collection)

    sink.notify("u1", "  Offer waiting  ")
    document = collection.insert_one.call_args[0][0]
    assert document["recipient_id"] == "u1"
    assert document["message"] == "Offer waiting"
    assert isinstance(document["created_at"], datetime)
    assert document["created_at"].tzinfo is not None

    sink.notify("u1", "   ")
    assert collection.insert_one.call_count == 1

    stamp = datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc)
    docs = [
        {"_id": 1, "recipient_id": "u1", "message": "a", "created_at": stamp},
        {"_id": 2, "recipient_id": "u1", "message": "b", "created_at": stamp + timedelta(minutes=1)},
    ]
    collection.find.return_value.sort.return_value = docs

    consumed = sink.consume("u1")
    assert [n.message for n in consumed] == ["a", "b"]
    collection.find.assert_called_with({"recipient_id": "u1"})
    collection.find.return_value.sort.assert_called_with("created_at", 1)
    collection.delete_many.assert_called_once_with({"_id": {"$in": [1, 2]}})
    print("    ✅ Mongo sink OK")


def test_dispatcher_and_reminder():
    print("\n[4] Testing dispatcher and workload reminder...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    second_staff = engine.add_staff("staff2", "Dana Lee")
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    engine.catalog.create(rep, "Review Me", "", "Basic")
    internship = post_internship(engine, rep, staff)
    application = engine.applications.submit(student, internship)
    engine.withdrawals.request(application, "Changed plans")

    for member in (staff, second_staff):
        messages = [n.message for n in engine.sink.consume(member.user_id)]
        assert "Withdrawal request submitted by Alex Lim for Review Me." not in messages
        assert "Withdrawal request submitted by Alex Lim for Backend Intern." in messages

    engine.workload_reminder(staff)
    messages = [n.message for n in engine.sink.consume(staff.user_id)]
    assert messages == [
        "1 internship submission(s) awaiting review.",
        "1 withdrawal request(s) awaiting action.",
    ]

    quiet = NotificationDispatcher(InMemoryNotificationSink())
    assert quiet.send_to_staff("nobody listens") == 0
    print("    ✅ Staff pool and reminder OK")


def main():
    print("=" * 60)
    print("NOTIFICATIONS - TEST SUITE")
    print("=" * 60)

    test_in_memory_inbox()
    test_failure_isolation()
    test_mongo_sink()
    test_dispatcher_and_reminder()

    print("\n" + "=" * 60)
    print("✅ ALL NOTIFICATION TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()

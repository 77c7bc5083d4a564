"""
Notification Service

PURPOSE:
Deliver lifecycle events (new application, offer awaiting acceptance,
internship submitted, withdrawal requested, staff decisions) to users.

HOW IT WORKS:
1. Core services talk to a NotificationDispatcher, never to a sink directly
2. The dispatcher formats the message and hands it to a NotificationSink
3. Sinks store per-recipient inboxes (in memory, or MongoDB)

Delivery is fire-and-forget: a failing sink is logged here and never
reaches the operation that triggered it.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from internship_portal.core.clock import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    recipient_id: str
    message: str
    created_at: datetime


# ============================================================
# SINKS
# ============================================================

class NotificationSink:
    """Receives `notify(recipient_id, message)` calls."""

    def notify(self, recipient_id: str, message: str) -> None:
        raise NotImplementedError

    def peek(self, recipient_id: str) -> List[Notification]:
        raise NotImplementedError

    def consume(self, recipient_id: str) -> List[Notification]:
        raise NotImplementedError

    def has_notifications(self, recipient_id: str) -> bool:
        return bool(self.peek(recipient_id))


class InMemoryNotificationSink(NotificationSink):
    """Per-recipient inbox kept in process memory."""

    def __init__(self, clock=None):
        self._clock = clock
        self._inbox: Dict[str, List[Notification]] = {}
        self._lock = threading.Lock()

    def _now(self) -> datetime:
        return self._clock.now() if self._clock else utc_now()

    def notify(self, recipient_id: str, message: str) -> None:
        if not recipient_id or not message or not message.strip():
            return
        with self._lock:
            self._inbox.setdefault(recipient_id, []).append(
                Notification(recipient_id, message.strip(), self._now())
            )

    def peek(self, recipient_id: str) -> List[Notification]:
        with self._lock:
            return sorted(self._inbox.get(recipient_id, []), key=lambda n: n.created_at)

    def consume(self, recipient_id: str) -> List[Notification]:
        with self._lock:
            notifications = self._inbox.pop(recipient_id, [])
        return sorted(notifications, key=lambda n: n.created_at)


class MongoNotificationSink(NotificationSink):
    """
    Inbox stored in the `notifications` MongoDB collection.

    Document shape:
        {"recipient_id": "...", "message": "...", "created_at": datetime}
    """

    def __init__(self, collection=None):
        if collection is None:
            from internship_portal.db.mongodb import get_collection, COLLECTIONS
            collection = get_collection(COLLECTIONS["notifications"])
        self.collection = collection

    def notify(self, recipient_id: str, message: str) -> None:
        if not recipient_id or not message or not message.strip():
            return
        self.collection.insert_one({
            "recipient_id": recipient_id,
            "message": message.strip(),
            "created_at": utc_now()
        })

    def _find(self, recipient_id: str) -> List[dict]:
        return list(self.collection.find({"recipient_id": recipient_id}).sort("created_at", 1))

    def peek(self, recipient_id: str) -> List[Notification]:
        return [
            Notification(doc["recipient_id"], doc["message"], doc["created_at"])
            for doc in self._find(recipient_id)
        ]

    def consume(self, recipient_id: str) -> List[Notification]:
        docs = self._find(recipient_id)
        if docs:
            self.collection.delete_many({"_id": {"$in": [doc["_id"] for doc in docs]}})
        return [Notification(doc["recipient_id"], doc["message"], doc["created_at"]) for doc in docs]


def get_notification_sink(settings, clock=None) -> NotificationSink:
    """Build the sink named by `settings.notification_backend`."""
    if settings.notification_backend == "mongo":
        return MongoNotificationSink()
    return InMemoryNotificationSink(clock=clock)


# ============================================================
# DISPATCHER
# Formats lifecycle events and routes them to recipients
# ============================================================

class NotificationDispatcher:
    """
    Event-level notification API used by the core services.

    Args:
        sink: where messages are delivered
        staff_ids: callable returning the ids of the career-center staff pool
    """

    def __init__(self, sink: NotificationSink, staff_ids: Optional[Callable[[], Iterable[str]]] = None):
        self.sink = sink
        self._staff_ids = staff_ids or (lambda: [])

    def send(self, recipient_id: str, message: str) -> bool:
        """Deliver one message. Returns False if the sink failed."""
        try:
            self.sink.notify(recipient_id, message)
            return True
        except Exception:
            logger.exception("Notification delivery to %s failed", recipient_id)
            return False

    def send_to_staff(self, message: str) -> int:
        return sum(1 for staff_id in self._staff_ids() if self.send(staff_id, message))

    # --- Representatives ---

    def new_application(self, application):
        rep = application.internship.representative
        if rep is None:
            return
        self.send(
            rep.user_id,
            f"New application received from {application.student.name} "
            f"for {application.internship.title}."
        )

    def internship_decision(self, internship, approved: bool):
        outcome = "approved" if approved else "rejected"
        self.send(
            internship.representative.user_id,
            f"Your internship {internship.title} was {outcome} by the career center."
        )

    def account_decision(self, rep, approved: bool, notes: Optional[str] = None):
        if approved:
            message = "Your company representative account was approved."
        else:
            message = "Your company representative account was rejected."
            if notes and notes.strip():
                message += f" Reason: {notes.strip()}"
        self.send(rep.user_id, message)

    # --- Students ---

    def offer_awaiting_acceptance(self, application):
        internship = application.internship
        self.send(
            application.student.user_id,
            f"Application for {internship.title} at {internship.company_name} "
            f"is awaiting your acceptance."
        )

    # --- Staff pool ---

    def internship_submitted(self, internship):
        self.send_to_staff(
            f"New internship submission pending review: {internship.title} "
            f"from {internship.company_name}."
        )

    def withdrawal_requested(self, request):
        self.send_to_staff(
            f"Withdrawal request submitted by {request.student.name} "
            f"for {request.application.internship.title}."
        )

    def account_requested(self, rep):
        self.send_to_staff(
            f"New company representative registration awaiting approval: "
            f"{rep.name} ({rep.user_id}) from {rep.company_name}."
        )

    def staff_workload_reminder(self, staff, pending_internships: int, pending_withdrawals: int):
        if pending_internships > 0:
            self.send(staff.user_id, f"{pending_internships} internship submission(s) awaiting review.")
        if pending_withdrawals > 0:
            self.send(staff.user_id, f"{pending_withdrawals} withdrawal request(s) awaiting action.")

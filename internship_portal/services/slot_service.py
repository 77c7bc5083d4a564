"""
Slot Service - assigns and releases the capacity slots of an internship.

Callers hold the internship's lock (see core/locking.py); the allocator
itself only enforces slot-level invariants.
"""

from typing import Optional

from internship_portal.core.errors import NoCapacity
from internship_portal.models.enums import InternshipStatus
from internship_portal.models.internship import Slot


class SlotAllocator:

    def is_full(self, internship) -> bool:
        """True iff the internship has slots and every one is occupied."""
        return internship.is_full()

    def assign(self, internship, student) -> Slot:
        """
        Place the student in the first free slot, in slot-number order.

        A student already holding a slot here keeps it; no second slot is
        handed out.

        Raises:
            NoCapacity: every slot is occupied by other students
        """
        existing = internship.slot_of(student)
        if existing is not None:
            return existing
        if self.is_full(internship):
            raise NoCapacity(f"Internship {internship.title} has no free slots.")
        for slot in internship.slots:
            if not slot.occupied:
                slot.assign(student)
                return slot
        raise NoCapacity(f"Internship {internship.title} has no free slots.")

    def release(self, internship, student) -> Optional[Slot]:
        """
        Free the slot held by the student. No-op when they hold none.

        A filled internship goes back to Approved once a slot frees up.
        Returns the released slot, or None.
        """
        slot = internship.slot_of(student)
        if slot is None:
            return None
        slot.release()
        if internship.status == InternshipStatus.filled:
            internship.status = InternshipStatus.approved
        return slot

"""
Internship aggregate and its capacity slots.

An internship exclusively owns its slots and its application list. Slots
hold a non-owning reference to the student placed in them. The slot
count is fixed when the internship is built.
"""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from internship_portal.core.clock import utc_now
from internship_portal.core.errors import InvalidTransition
from internship_portal.models.enums import InternshipLevel, InternshipStatus

MAX_SLOTS = 10


@dataclass(eq=False)
class Slot:
    number: int
    student: Optional["Student"] = None

    @property
    def occupied(self) -> bool:
        return self.student is not None

    def assign(self, student):
        if self.student is not None:
            raise InvalidTransition(f"Slot {self.number} is already assigned.")
        self.student = student

    def release(self):
        self.student = None


@dataclass(eq=False)
class Internship:
    title: str
    description: str
    level: InternshipLevel
    representative: "CompanyRep"
    slot_count: int = 1
    preferred_major: Optional[str] = None
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    internship_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: InternshipStatus = InternshipStatus.pending
    visible: bool = False
    created_at: datetime = field(default_factory=utc_now)
    slots: List[Slot] = field(init=False, repr=False)
    applications: List["Application"] = field(default_factory=list, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def __post_init__(self):
        if not 1 <= self.slot_count <= MAX_SLOTS:
            raise ValueError(f"Slot count must be between 1 and {MAX_SLOTS}")
        # Blank means "any major"
        if self.preferred_major is not None:
            self.preferred_major = self.preferred_major.strip() or None
        self.slots = [Slot(number) for number in range(1, self.slot_count + 1)]

    @property
    def company_name(self) -> str:
        return self.representative.company_name

    def accepts_major(self, major: Optional[str]) -> bool:
        if not self.preferred_major:
            return True
        if not major or not major.strip():
            return False
        return self.preferred_major.casefold() == major.strip().casefold()

    def is_full(self) -> bool:
        return bool(self.slots) and all(slot.occupied for slot in self.slots)

    def slot_of(self, student) -> Optional[Slot]:
        for slot in self.slots:
            if slot.student is student:
                return slot
        return None

    def filled_slot_count(self) -> int:
        return sum(1 for slot in self.slots if slot.occupied)

"""
Actors of the placement system.

A Student is an aggregate: it owns its application list and its
accepted-placement marker, and carries the lock that serializes writes
to both.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from internship_portal.models.enums import ACTIVE_APPLICATION_STATUSES


@dataclass(eq=False)
class Student:
    user_id: str
    name: str
    year_of_study: int
    major: str
    applications: List["Application"] = field(default_factory=list, repr=False)
    accepted_placement: Optional["Application"] = field(default=None, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    role = "student"

    def active_applications(self) -> List["Application"]:
        """Applications counted toward the active-application ceiling."""
        return [a for a in self.applications if a.status in ACTIVE_APPLICATION_STATUSES]

    def has_accepted_placement(self) -> bool:
        return self.accepted_placement is not None

    def owns(self, application) -> bool:
        return any(a is application for a in self.applications)


@dataclass(eq=False)
class CompanyRep:
    user_id: str
    name: str
    company_name: str
    department: str = ""
    position: str = ""
    approved: bool = False

    role = "company"


@dataclass(eq=False)
class CareerCenterStaff:
    user_id: str
    name: str
    department: str = ""

    role = "staff"

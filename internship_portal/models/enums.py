"""
Status and level enums shared by entities, services and API schemas.
"""

from enum import Enum


class InternshipLevel(str, Enum):
    basic = "Basic"
    intermediate = "Intermediate"
    advanced = "Advanced"


class InternshipStatus(str, Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"
    filled = "Filled"


class ApplicationStatus(str, Enum):
    pending = "Pending"
    successful = "Successful"
    unsuccessful = "Unsuccessful"
    withdrawn = "Withdrawn"


class WithdrawalStatus(str, Enum):
    pending = "Pending"
    withdrawn = "Withdrawn"
    rejected = "Rejected"


class AccountRequestStatus(str, Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


# Applications that count toward a student's active-application ceiling
ACTIVE_APPLICATION_STATUSES = frozenset({ApplicationStatus.pending, ApplicationStatus.successful})

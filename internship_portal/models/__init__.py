"""
Models module - in-memory domain entities of the placement engine.

These are the aggregates the services mutate:
- Student (owns applications + accepted placement)
- Internship (owns slots + application list)
- Application, WithdrawalRequest, AccountRequest
"""
from internship_portal.models.enums import (
    InternshipLevel, InternshipStatus, ApplicationStatus,
    WithdrawalStatus, AccountRequestStatus, ACTIVE_APPLICATION_STATUSES
)
from internship_portal.models.users import Student, CompanyRep, CareerCenterStaff
from internship_portal.models.internship import Internship, Slot, MAX_SLOTS
from internship_portal.models.application import Application, WithdrawalRequest
from internship_portal.models.account_request import AccountRequest

__all__ = [
    "InternshipLevel",
    "InternshipStatus",
    "ApplicationStatus",
    "WithdrawalStatus",
    "AccountRequestStatus",
    "ACTIVE_APPLICATION_STATUSES",
    "Student",
    "CompanyRep",
    "CareerCenterStaff",
    "Internship",
    "Slot",
    "MAX_SLOTS",
    "Application",
    "WithdrawalRequest",
    "AccountRequest",
]

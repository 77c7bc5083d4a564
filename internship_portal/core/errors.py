"""
Placement errors - typed failures raised by the allocation engine.

Every error carries a human-readable message and the HTTP status the API
boundary maps it to. Only RuleViolation messages are meant to be shown to
end users verbatim; the rest surface as "Operation not permitted".
"""


class PlacementError(Exception):
    """Base class for all placement engine failures."""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class RuleViolation(PlacementError):
    """An eligibility rule failed. `reason` names the first failing rule."""

    status_code = 422

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotOwned(PlacementError):
    status_code = 403


class AlreadyPlaced(PlacementError):
    status_code = 409


class NoCapacity(PlacementError):
    status_code = 409


class AlreadyRequested(PlacementError):
    status_code = 409


class Unapproved(PlacementError):
    status_code = 403


class QuotaExceeded(PlacementError):
    status_code = 409


class InvalidTransition(PlacementError):
    status_code = 409

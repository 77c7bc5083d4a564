"""
Id -> entity lookups shared by the routers. Unknown ids are 404s.
"""

from fastapi import HTTPException

from internship_portal.services.engine import PlacementEngine


def find_internship(engine: PlacementEngine, internship_id: str):
    internship = engine.catalog.get(internship_id)
    if internship is None:
        raise HTTPException(status_code=404, detail="Internship not found")
    return internship


def find_application(engine: PlacementEngine, application_id: str):
    application = engine.applications.get(application_id)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


def find_withdrawal(engine: PlacementEngine, request_id: str):
    request = engine.withdrawals.get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Withdrawal request not found")
    return request


def find_account_request(engine: PlacementEngine, request_id: str):
    request = engine.accounts.get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Account request not found")
    return request

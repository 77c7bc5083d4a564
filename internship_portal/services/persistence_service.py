"""
Persistence Service - durable record of engine state.

The engine never writes here on its own. Boundary code calls
PlacementEngine.persist(...) after a mutation succeeded; every save is an
idempotent upsert keyed by the entity id.
"""

from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from internship_portal.db.database import execute_raw_sql, get_db_session, get_engine, init_schema


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class PersistenceSink:
    """Receives entities after successful mutations."""

    def init_schema(self) -> None:
        pass

    def save_internship(self, internship) -> None:
        raise NotImplementedError

    def save_application(self, application) -> None:
        raise NotImplementedError

    def save_withdrawal(self, request) -> None:
        raise NotImplementedError

    def save_account_request(self, request) -> None:
        raise NotImplementedError


class SqlPersistence(PersistenceSink):

    def __init__(self, engine: Engine = None):
        self.engine = engine or get_engine()

    def init_schema(self):
        init_schema(self.engine)

    def save_internship(self, internship) -> None:
        with get_db_session(self.engine) as db:
            db.execute(
                text("""
                    INSERT INTO internships (internship_id, title, description, level, preferred_major,
                        open_date, close_date, status, visible, rep_id, company_name, slot_count, created_at)
                    VALUES (:id, :title, :description, :level, :major, :open_date, :close_date,
                        :status, :visible, :rep_id, :company_name, :slot_count, :created_at)
                    ON CONFLICT (internship_id) DO UPDATE SET
                        title = excluded.title, description = excluded.description,
                        level = excluded.level, preferred_major = excluded.preferred_major,
                        open_date = excluded.open_date, close_date = excluded.close_date,
                        status = excluded.status, visible = excluded.visible
                """),
                {
                    "id": internship.internship_id, "title": internship.title,
                    "description": internship.description, "level": internship.level.value,
                    "major": internship.preferred_major, "open_date": _iso(internship.open_date),
                    "close_date": _iso(internship.close_date), "status": internship.status.value,
                    "visible": bool(internship.visible), "rep_id": internship.representative.user_id,
                    "company_name": internship.company_name, "slot_count": len(internship.slots),
                    "created_at": _iso(internship.created_at)
                }
            )
            for slot in internship.slots:
                db.execute(
                    text("""
                        INSERT INTO internship_slots (internship_id, slot_number, student_id)
                        VALUES (:id, :number, :student_id)
                        ON CONFLICT (internship_id, slot_number) DO UPDATE SET student_id = excluded.student_id
                    """),
                    {
                        "id": internship.internship_id, "number": slot.number,
                        "student_id": slot.student.user_id if slot.student else None
                    }
                )

    def save_application(self, application) -> None:
        with get_db_session(self.engine) as db:
            db.execute(
                text("""
                    INSERT INTO applications (application_id, student_id, internship_id, status, created_at)
                    VALUES (:id, :student_id, :internship_id, :status, :created_at)
                    ON CONFLICT (application_id) DO UPDATE SET status = excluded.status
                """),
                {
                    "id": application.application_id, "student_id": application.student.user_id,
                    "internship_id": application.internship.internship_id,
                    "status": application.status.value, "created_at": _iso(application.created_at)
                }
            )

    def save_withdrawal(self, request) -> None:
        with get_db_session(self.engine) as db:
            db.execute(
                text("""
                    INSERT INTO withdrawal_requests (request_id, application_id, student_id, reason,
                        status, requested_at, resolved_by, resolved_at)
                    VALUES (:id, :application_id, :student_id, :reason, :status, :requested_at,
                        :resolved_by, :resolved_at)
                    ON CONFLICT (request_id) DO UPDATE SET
                        status = excluded.status, resolved_by = excluded.resolved_by,
                        resolved_at = excluded.resolved_at
                """),
                {
                    "id": request.request_id, "application_id": request.application.application_id,
                    "student_id": request.student.user_id, "reason": request.reason,
                    "status": request.status.value, "requested_at": _iso(request.requested_at),
                    "resolved_by": request.resolved_by.user_id if request.resolved_by else None,
                    "resolved_at": _iso(request.resolved_at)
                }
            )

    def save_account_request(self, request) -> None:
        with get_db_session(self.engine) as db:
            db.execute(
                text("""
                    INSERT INTO account_requests (request_id, rep_id, status, submitted_at,
                        approver_id, decided_at, decision_notes)
                    VALUES (:id, :rep_id, :status, :submitted_at, :approver_id, :decided_at, :notes)
                    ON CONFLICT (request_id) DO UPDATE SET
                        status = excluded.status, approver_id = excluded.approver_id,
                        decided_at = excluded.decided_at, decision_notes = excluded.decision_notes
                """),
                {
                    "id": request.request_id, "rep_id": request.representative.user_id,
                    "status": request.status.value, "submitted_at": _iso(request.submitted_at),
                    "approver_id": request.approver.user_id if request.approver else None,
                    "decided_at": _iso(request.decided_at), "notes": request.decision_notes
                }
            )

    # --- Reads for reporting / audit ---

    def load_internship_rows(self, status: Optional[str] = None) -> List[dict]:
        sql = "SELECT * FROM internships"
        params = {}
        if status:
            sql += " WHERE status = :status"
            params["status"] = status
        sql += " ORDER BY title"
        return execute_raw_sql(sql, params, engine=self.engine)

    def load_slot_rows(self, internship_id: str) -> List[dict]:
        return execute_raw_sql(
            "SELECT slot_number, student_id FROM internship_slots WHERE internship_id = :id ORDER BY slot_number",
            {"id": internship_id}, engine=self.engine
        )

    def load_application_rows(self, student_id: Optional[str] = None) -> List[dict]:
        sql = "SELECT * FROM applications"
        params = {}
        if student_id:
            sql += " WHERE student_id = :sid"
            params["sid"] = student_id
        return execute_raw_sql(sql, params, engine=self.engine)

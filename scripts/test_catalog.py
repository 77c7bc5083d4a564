#!/usr/bin/env python3
"""
Internship Catalog Test Script

Tests:
1. create/submit -> Pending + hidden, staff pool notified
2. Unapproved representatives and the 5-posting quota
3. Creation date checks
4. Staff approve / reject (with rep notification)
5. Visibility toggle and auto-approval
6. refresh_statuses: Filled <=> full, idempotent
7. Reads: sorting, visible, pending review, per representative, eligible

Run: python scripts/test_catalog.py
"""
import sys
sys.path.insert(0, '.')

from datetime import timedelta

from internship_portal.core.errors import (
    InvalidTransition, NotOwned, QuotaExceeded, RuleViolation, Unapproved
)
from internship_portal.models.enums import ApplicationStatus, InternshipLevel, InternshipStatus

from sample_data import YESTERDAY, NEXT_MONTH, make_engine, seed_people, post_internship


def test_submit_pending_hidden():
    print("\n[1] Testing submission...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    engine.sink.consume(staff.user_id)

    internship = engine.catalog.create(
        rep, "  Backend Intern  ", "APIs", InternshipLevel.basic, close_date=NEXT_MONTH, slot_count=3
    )

    assert internship.title == "Backend Intern"
    assert internship.status == InternshipStatus.pending
    assert internship.visible is False
    assert len(internship.slots) == 3
    assert engine.catalog.get(internship.internship_id) is internship

    inbox = engine.sink.consume(staff.user_id)
    assert inbox[0].message == "New internship submission pending review: Backend Intern from Acme Corp."
    print("    ✅ Stored as Pending and hidden")


def test_unapproved_and_quota():
    print("\n[2] Testing approval and quota...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    newcomer = engine.add_representative("rep2", "Jo Tan", "Beta Ltd")

    try:
        engine.catalog.create(newcomer, "Intern", "", InternshipLevel.basic)
        assert False, "Unapproved rep should be refused"
    except Unapproved:
        pass

    postings = [
        engine.catalog.create(rep, f"Intern {n}", "", InternshipLevel.basic) for n in range(5)
    ]
    try:
        engine.catalog.create(rep, "Intern 6", "", InternshipLevel.basic)
        assert False, "Sixth posting should exceed the quota"
    except QuotaExceeded as e:
        print(f"    Refused: {e.message}")

    # Rejected postings free up the quota
    engine.catalog.reject(postings[0], staff)
    sixth = engine.catalog.create(rep, "Intern 6", "", InternshipLevel.basic)
    assert sixth.status == InternshipStatus.pending
    print("    ✅ Unapproved and QuotaExceeded enforced")


def test_creation_dates():
    print("\n[3] Testing creation date checks...")
    engine = make_engine()
    staff, rep = seed_people(engine)

    try:
        engine.catalog.create(rep, "Late", "", InternshipLevel.basic, close_date=YESTERDAY)
        assert False, "Past closing date should be refused"
    except RuleViolation as e:
        assert e.reason == "Closing date cannot be in the past."

    try:
        engine.catalog.create(
            rep, "Backwards", "", InternshipLevel.basic, open_date=NEXT_MONTH, close_date=engine.clock.today()
        )
        assert False, "Closing before opening should be refused"
    except RuleViolation as e:
        assert e.reason == "Closing date cannot be earlier than the opening date."
    assert engine.catalog.all() == []
    print("    ✅ Date checks OK")


def test_staff_review():
    print("\n[4] Testing staff review...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    first = engine.catalog.create(rep, "First", "", InternshipLevel.basic)
    second = engine.catalog.create(rep, "Second", "", InternshipLevel.basic)
    engine.sink.consume(rep.user_id)

    try:
        engine.catalog.approve(first, rep)
        assert False, "Representatives cannot approve"
    except NotOwned:
        pass

    engine.catalog.approve(first, staff)
    engine.catalog.reject(second, staff)
    assert (first.status, first.visible) == (InternshipStatus.approved, True)
    assert (second.status, second.visible) == (InternshipStatus.rejected, False)

    messages = [n.message for n in engine.sink.consume(rep.user_id)]
    assert messages == [
        "Your internship First was approved by the career center.",
        "Your internship Second was rejected by the career center.",
    ]

    for action in (engine.catalog.approve, engine.catalog.reject):
        try:
            action(second, staff)
            assert False, "Rejected is terminal"
        except InvalidTransition:
            pass
    print("    ✅ Approve/reject OK")


def test_visibility_toggle():
    print("\n[5] Testing visibility toggle...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    other_rep = engine.add_representative("rep2", "Jo Tan", "Beta Ltd", approved=True)

    pending = engine.catalog.create(rep, "Pending One", "", InternshipLevel.basic)
    try:
        engine.catalog.toggle_visibility(other_rep, pending, True)
        assert False, "Only the owning rep may toggle"
    except NotOwned:
        pass

    engine.catalog.toggle_visibility(rep, pending, True)
    assert pending.status == InternshipStatus.approved
    assert pending.visible is True

    engine.catalog.toggle_visibility(rep, pending, False)
    assert pending.visible is False
    assert pending.status == InternshipStatus.approved

    rejected = engine.catalog.create(rep, "Rejected One", "", InternshipLevel.basic)
    engine.catalog.reject(rejected, staff)
    try:
        engine.catalog.toggle_visibility(rep, rejected, True)
        assert False, "Rejected internships cannot be toggled"
    except InvalidTransition:
        pass

    strict = make_engine(visibility_auto_approve=False)
    strict_staff, strict_rep = seed_people(strict)
    waiting = strict.catalog.create(strict_rep, "Needs Review", "", InternshipLevel.basic)
    try:
        strict.catalog.toggle_visibility(strict_rep, waiting, True)
        assert False, "Auto-approval disabled"
    except InvalidTransition:
        pass
    assert waiting.status == InternshipStatus.pending
    print("    ✅ Toggle and auto-approval OK")


def test_refresh_statuses():
    print("\n[6] Testing refresh_statuses...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    internship = post_internship(engine, rep, staff, slot_count=1)
    other = post_internship(engine, rep, staff, title="Other", slot_count=2)

    engine.slots.assign(internship, student)
    engine.catalog.refresh_statuses()
    assert internship.status == InternshipStatus.filled
    assert internship.visible is False
    assert other.status == InternshipStatus.approved

    snapshot = [(i.status, i.visible) for i in engine.catalog.all()]
    engine.catalog.refresh_statuses()
    engine.catalog.refresh_statuses()
    assert [(i.status, i.visible) for i in engine.catalog.all()] == snapshot

    for i in engine.catalog.all():
        assert i.is_full() == (i.status == InternshipStatus.filled)
    print("    ✅ Filled iff full, idempotent")


def test_expiry():
    print("\n[7] Testing expiry...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    internship = post_internship(engine, rep, staff, close_date=NEXT_MONTH)
    pending = engine.catalog.create(rep, "Not Reviewed", "", InternshipLevel.basic, close_date=NEXT_MONTH)

    engine.clock.set(NEXT_MONTH)
    engine.catalog.refresh_statuses()
    assert internship.status == InternshipStatus.approved  # closing day is inclusive

    engine.clock.set(NEXT_MONTH + timedelta(days=1))
    engine.catalog.refresh_statuses()
    assert (internship.status, internship.visible) == (InternshipStatus.filled, False)
    # Only Approved postings expire
    assert pending.status == InternshipStatus.pending
    print("    ✅ Expiry OK")


def test_reads():
    print("\n[8] Testing reads...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    other_rep = engine.add_representative("rep2", "Jo Tan", "Beta Ltd", approved=True)
    junior = engine.add_student("s1", "Alex Lim", 1, "Computer Science")

    zeta = post_internship(engine, rep, staff, title="zeta Intern")
    alpha = post_internship(engine, rep, staff, title="Alpha Intern", level=InternshipLevel.advanced)
    waiting = engine.catalog.create(other_rep, "Middle Intern", "", InternshipLevel.basic)

    assert [i.title for i in engine.catalog.all()] == ["Alpha Intern", "Middle Intern", "zeta Intern"]
    assert engine.catalog.visible() == [alpha, zeta]
    assert engine.catalog.pending_review() == [waiting]
    assert engine.catalog.for_representative(other_rep) == [waiting]
    assert engine.catalog.eligible_for(junior, engine.validator) == [zeta]

    application = engine.applications.submit(junior, zeta)
    assert engine.catalog.applications_for(rep, zeta) == [application]
    try:
        engine.catalog.applications_for(other_rep, zeta)
        assert False, "Other reps cannot read applications"
    except NotOwned:
        pass
    assert application.status == ApplicationStatus.pending
    print("    ✅ Reads OK")


def main():
    print("=" * 60)
    print("INTERNSHIP CATALOG - TEST SUITE")
    print("=" * 60)

    test_submit_pending_hidden()
    test_unapproved_and_quota()
    test_creation_dates()
    test_staff_review()
    test_visibility_toggle()
    test_refresh_statuses()
    test_expiry()
    test_reads()

    print("\n" + "=" * 60)
    print("✅ ALL CATALOG TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()

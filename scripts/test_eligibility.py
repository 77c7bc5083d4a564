#!/usr/bin/env python3
"""
Eligibility Rules Test Script

Tests:
1. Each rule fails with its own reason, in rule order
2. Major matching is case-insensitive; blank preferred major accepts anyone
3. Year-1/2 students are limited to Basic level (Scenario E)
4. Application window uses the injected clock
5. Expired internships read as closed after a status refresh (Scenario C)

No database or MongoDB needed.

Run: python scripts/test_eligibility.py
"""
import sys
sys.path.insert(0, '.')

from internship_portal.core.errors import RuleViolation
from internship_portal.models.enums import InternshipLevel
from internship_portal.services.eligibility_service import EligibilityValidator

from sample_data import TODAY, YESTERDAY, NEXT_MONTH, make_engine, seed_people, post_internship


def test_rule_order():
    """The first failing rule is the one reported."""
    print("\n[1] Testing rule order...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 1, "Computer Science")

    # Pending + hidden, wrong major and wrong level: only the first rule shows
    internship = engine.catalog.create(
        rep, "Data Intern", "Analytics", InternshipLevel.advanced, preferred_major="Biology",
        close_date=NEXT_MONTH
    )
    result = engine.validator.can_apply(student, internship)
    print(f"    Pending internship: {result.reason}")
    assert not result.ok
    assert result.reason == "Internship has not been approved yet."

    engine.catalog.approve(internship, staff)
    engine.catalog.toggle_visibility(rep, internship, False)
    assert engine.validator.can_apply(student, internship).reason == "Internship is currently hidden."

    engine.catalog.toggle_visibility(rep, internship, True)
    result = engine.validator.can_apply(student, internship)
    assert result.reason == "Major does not match the preferred major for this internship."

    assert engine.validator.can_apply(None, internship).reason == "Student and internship are required."
    print("    ✅ Rules reported in order")


def test_major_matching():
    """Preferred major compares case-insensitively."""
    print("\n[2] Testing major matching...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "computer science")

    internship = post_internship(engine, rep, staff, major="Computer Science")
    assert engine.validator.can_apply(student, internship).ok

    open_to_all = post_internship(engine, rep, staff, title="Ops Intern", major="   ")
    assert open_to_all.preferred_major is None
    assert engine.validator.can_apply(student, open_to_all).ok
    print("    ✅ Major matching OK")


def test_lower_year_level_rule():
    """Scenario E: year-1 student is limited to Basic internships."""
    print("\n[3] Testing year/level rule...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 1, "Computer Science")

    intermediate = post_internship(
        engine, rep, staff, title="Platform Intern", level=InternshipLevel.intermediate,
        major="Computer Science"
    )
    basic = post_internship(engine, rep, staff, title="Support Intern", major="Computer Science")

    try:
        engine.applications.submit(student, intermediate)
        assert False, "Year-1 student should not apply to an Intermediate internship"
    except RuleViolation as e:
        print(f"    Intermediate refused: {e.reason}")
        assert e.reason == "Lower-year students may only apply for BASIC level internships."
    assert student.applications == []

    application = engine.applications.submit(student, basic)
    assert application.status.value == "Pending"

    senior = engine.add_student("s2", "Sam Goh", 3, "Computer Science")
    assert engine.validator.can_apply(senior, intermediate).ok
    print("    ✅ Year/level rule OK")


def test_application_window():
    """Open and close dates are checked against the clock."""
    print("\n[4] Testing application window...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    internship = post_internship(engine, rep, staff, open_date=NEXT_MONTH, close_date=None)
    result = engine.validator.can_apply(student, internship)
    assert result.reason == "Internship is not open for applications yet."

    engine.clock.set(NEXT_MONTH)
    assert engine.validator.can_apply(student, internship).ok
    print("    ✅ Window OK")


def test_closed_after_refresh():
    """Scenario C: closing date yesterday, refresh, then submit."""
    print("\n[5] Testing closed internship...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    engine.clock.set(YESTERDAY)
    internship = post_internship(engine, rep, staff, close_date=YESTERDAY)
    engine.clock.set(TODAY)

    # Without a refresh the window rule catches it
    assert engine.validator.can_apply(student, internship).reason == "Internship is already closed."

    engine.catalog.refresh_statuses()
    assert internship.status.value == "Filled"
    assert internship.visible is False

    try:
        engine.applications.submit(student, internship)
        assert False, "Submission to a closed internship should fail"
    except RuleViolation as e:
        print(f"    Refused: {e.reason}")
        assert e.reason == "Internship is already closed."
    assert internship.applications == []
    print("    ✅ Closed internship refused")


def test_ceiling_duplicate_and_placement():
    """Scenario B, duplicate applications and accepted placements."""
    print("\n[6] Testing ceiling, duplicates and placement rules...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    student = engine.add_student("s1", "Alex Lim", 3, "Computer Science")

    internships = [post_internship(engine, rep, staff, title=f"Intern {n}") for n in range(4)]
    for internship in internships[:3]:
        engine.applications.submit(student, internship)

    result = engine.validator.can_apply(student, internships[0])
    assert result.reason == "Maximum of 3 active applications reached."

    try:
        engine.applications.submit(student, internships[3])
        assert False, "Fourth active application should fail"
    except RuleViolation as e:
        assert e.reason == "Maximum of 3 active applications reached."
    assert len(student.applications) == 3

    # Dropping one under the ceiling exposes the duplicate rule
    engine.applications.set_status(student.applications[1], "Unsuccessful")
    assert engine.validator.can_apply(student, internships[0]).reason == \
        "You have already applied for this internship."
    # An Unsuccessful application does not block re-applying
    assert engine.validator.can_apply(student, internships[1]).ok

    student.accepted_placement = student.applications[0]
    assert engine.validator.can_apply(student, internships[3]).reason == \
        "You have already accepted a placement."
    print("    ✅ Ceiling, duplicate and placement rules OK")


def test_full_internship():
    """The capacity rule is last."""
    print("\n[7] Testing full internship...")
    engine = make_engine()
    staff, rep = seed_people(engine)
    placed = engine.add_student("s1", "Alex Lim", 3, "Computer Science")
    other = engine.add_student("s2", "Sam Goh", 3, "Computer Science")

    internship = post_internship(engine, rep, staff)
    engine.slots.assign(internship, placed)

    validator = EligibilityValidator(engine.clock)
    assert validator.can_apply(other, internship).reason == "Internship slots have been filled."
    print("    ✅ Full internship refused")


def main():
    print("=" * 60)
    print("ELIGIBILITY RULES - TEST SUITE")
    print("=" * 60)

    test_rule_order()
    test_major_matching()
    test_lower_year_level_rule()
    test_application_window()
    test_closed_after_refresh()
    test_ceiling_duplicate_and_placement()
    test_full_internship()

    print("\n" + "=" * 60)
    print("✅ ALL ELIGIBILITY TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()

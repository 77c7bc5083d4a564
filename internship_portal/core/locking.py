"""
Aggregate locking.

Students and internships are the two aggregates of the engine. Each one
owns a reentrant lock; any operation that checks-then-writes holds the
locks of every aggregate it touches.

Lock order is global and fixed: all students (by user_id), then all
internships (by internship_id). Acquiring through `aggregate_locks`
keeps every caller on that order so cross-aggregate operations cannot
deadlock.
"""

from contextlib import ExitStack, contextmanager
from typing import Iterable


def _unique(aggregates, key):
    seen = {}
    for aggregate in aggregates:
        if aggregate is not None:
            seen[key(aggregate)] = aggregate
    return [seen[k] for k in sorted(seen)]


@contextmanager
def aggregate_locks(students: Iterable = (), internships: Iterable = ()):
    """
    Hold the locks of the given students and internships.

    Usage:
        with aggregate_locks(students=[student], internships=[internship]):
            ...
    """
    ordered = _unique(students, lambda s: s.user_id) + _unique(internships, lambda i: i.internship_id)
    with ExitStack() as stack:
        for aggregate in ordered:
            stack.enter_context(aggregate.lock)
        yield

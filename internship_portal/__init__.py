"""
Internship Placement Portal
Matches students to company internships through a career center.

Architecture:
- In-process engine: eligibility, slot allocation, application lifecycle
- SQLAlchemy (SQLite/PostgreSQL): durable record of postings and decisions
- MongoDB: optional notification inbox store
"""

__version__ = "1.0.0"

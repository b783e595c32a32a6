"""
UPICONNECT
Job-matching platform connecting students and recruiters of an institution.

Architecture:
- PostgreSQL: all records (users, students, recruiters, jobs, applications, messages)
- Identity: password auth + JWT sessions on top of the same store
- Resend: transactional email when an application is accepted
"""

__version__ = "1.0.0"

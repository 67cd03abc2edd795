"""
Database Models Package

SQLAlchemy ORM models for the Clarvoy decision service.
"""

from .audit_models import AuditAction, AuditLog
from .database import Base, create_tables, get_session, init_database
from .decision_models import Attachment, Comment, Decision, DecisionStatus, Judgment

__all__ = [
    # Database
    "Base",
    "init_database",
    "create_tables",
    "get_session",
    # Decision Models
    "Decision",
    "DecisionStatus",
    "Judgment",
    "Comment",
    "Attachment",
    # Audit
    "AuditLog",
    "AuditAction",
]

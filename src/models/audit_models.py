"""
Audit Models

Append-only record of governance actions (decision created, judgment
submitted, attachment removed, ...).
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String

from .database import Base


class AuditAction:
    """Action names written to the audit log"""

    DECISION_CREATED = "DECISION_CREATED"
    DECISION_UPDATED = "DECISION_UPDATED"
    DECISION_DELETED = "DECISION_DELETED"
    JUDGMENT_SUBMITTED = "JUDGMENT_SUBMITTED"
    COMMENT_POSTED = "COMMENT_POSTED"
    ATTACHMENT_ADDED = "ATTACHMENT_ADDED"
    ATTACHMENT_TEXT_UPDATED = "ATTACHMENT_TEXT_UPDATED"
    ATTACHMENT_DELETED = "ATTACHMENT_DELETED"
    BIAS_ALERT = "BIAS_ALERT"


class AuditLog(Base):
    """
    Audit Log

    System activity log for governance review.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), index=True)  # None for system actions

    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False, index=True)  # 'decision', 'judgment', 'attachment', ...
    entity_id = Column(Integer, nullable=False, index=True)

    details = Column(JSON)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    __table_args__ = (
        Index("idx_audit_action_created", "action", "created_at"),
        Index("idx_audit_entity", "entity_type", "entity_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog(id={self.id}, user={self.user_id}, action={self.action}, "
            f"entity={self.entity_type}:{self.entity_id})>"
        )

    @staticmethod
    def create_log(
        user_id: Optional[str],
        action: str,
        entity_type: str,
        entity_id: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> "AuditLog":
        """Factory method to create audit log"""
        return AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
            created_at=datetime.utcnow(),
        )

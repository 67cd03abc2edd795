"""
Audit Service Layer

Writes the governance audit trail and computes the admin analytics
(decision counts, high-noise decisions).
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.core.variance_engine import DEFAULT_HIGH_NOISE_THRESHOLD, calculate_variance
from src.models.audit_models import AuditLog
from src.models.decision_models import Attachment, Comment, Decision, Judgment

logger = logging.getLogger(__name__)


class AuditServiceError(Exception):
    """Audit Service operation errors"""

    pass


class AuditService:
    """
    Service for the audit trail and admin analytics.

    ``record`` only adds the entry to the session; the calling service commits
    it together with the change it describes.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: int,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> AuditLog:
        entry = AuditLog.create_log(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        self.db.add(entry)
        logger.debug(f"Audit: {action} {entity_type}:{entity_id} by {user_id}")
        return entry

    def list_logs(
        self,
        action: Optional[str] = None,
        entity_type: Optional[str] = None,
        user_id: Optional[str] = None,
        limit: int = 500,
    ) -> List[AuditLog]:
        """
        List audit entries, oldest first.

        Args:
            action: Filter by action name
            entity_type: Filter by entity type
            user_id: Filter by acting user
            limit: Maximum number of most recent entries to return

        Returns:
            List of AuditLog instances
        """
        try:
            query = self.db.query(AuditLog)

            if action:
                query = query.filter(AuditLog.action == action)
            if entity_type:
                query = query.filter(AuditLog.entity_type == entity_type)
            if user_id:
                query = query.filter(AuditLog.user_id == user_id)

            # Take the newest ``limit`` rows, then present them chronologically
            newest = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
            return list(reversed(newest))

        except SQLAlchemyError as e:
            logger.error(f"Database error listing audit logs: {e}")
            raise AuditServiceError(f"Failed to list audit logs: {e}") from e

    def decision_stats(self, high_noise_threshold: float = DEFAULT_HIGH_NOISE_THRESHOLD) -> Dict[str, Any]:
        """
        Organization-wide decision analytics.

        Returns:
            {
                "total_decisions": 12,
                "status_counts": {"open": 5, "closed": 7},
                "category_counts": {"Hiring": 4, ...},
                "total_judgments": 40,
                "total_comments": 18,
                "total_attachments": 6,
                "high_noise_threshold": 2.0,
                "high_noise_decisions": [{"decision_id": 3, "title": ..., "variance": {...}}]
            }
        """
        try:
            total_decisions = self.db.query(func.count(Decision.id)).scalar() or 0

            status_rows = (
                self.db.query(Decision.status, func.count(Decision.id)).group_by(Decision.status).all()
            )
            status_counts = {status.value: count for status, count in status_rows if status is not None}

            category_rows = (
                self.db.query(Decision.category, func.count(Decision.id)).group_by(Decision.category).all()
            )
            category_counts = {category: count for category, count in category_rows}

            total_judgments = self.db.query(func.count(Judgment.id)).scalar() or 0
            total_comments = self.db.query(func.count(Comment.id)).scalar() or 0
            total_attachments = self.db.query(func.count(Attachment.id)).scalar() or 0

            decisions = (
                self.db.query(Decision)
                .options(selectinload(Decision.judgments))
                .order_by(Decision.created_at, Decision.id)
                .all()
            )

        except SQLAlchemyError as e:
            logger.error(f"Database error computing decision stats: {e}")
            raise AuditServiceError(f"Failed to compute decision stats: {e}") from e

        high_noise_decisions = []
        for decision in decisions:
            result = calculate_variance(decision.scores(), high_noise_threshold=high_noise_threshold)
            if result.is_high_noise:
                high_noise_decisions.append(
                    {
                        "decision_id": decision.id,
                        "title": decision.title,
                        "category": decision.category,
                        "variance": result,
                    }
                )

        return {
            "total_decisions": total_decisions,
            "status_counts": status_counts,
            "category_counts": category_counts,
            "total_judgments": total_judgments,
            "total_comments": total_comments,
            "total_attachments": total_attachments,
            "high_noise_threshold": high_noise_threshold,
            "high_noise_decisions": high_noise_decisions,
        }

"""
Decision Service Layer

Creates, updates and removes decisions and records each change in the
audit trail.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.audit_models import AuditAction
from src.models.decision_models import Decision, DecisionStatus
from src.services.audit_service import AuditService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "category", "status", "deadline", "consensus_reached", "outcome")


class DecisionServiceError(Exception):
    """Decision Service operation errors"""

    pass


class DecisionNotFoundError(DecisionServiceError):
    """Raised when a decision ID does not exist"""

    def __init__(self, decision_id: int):
        super().__init__(f"Decision not found: id={decision_id}")
        self.decision_id = decision_id


def _coerce_status(value: Any) -> DecisionStatus:
    if isinstance(value, DecisionStatus):
        return value
    raw = getattr(value, "value", value)
    try:
        return DecisionStatus(str(raw).lower())
    except ValueError:
        raise DecisionServiceError(f"Invalid decision status: {raw}")


class DecisionService:
    """
    Service for Decision management.

    Responsibilities:
    - Create, update, delete decisions
    - Query decisions with optional filters
    - Audit logging for all mutations
    """

    def __init__(self, db_session: Session):
        self.db = db_session
        self.audit = AuditService(db_session)

    def create_decision(
        self,
        title: str,
        description: str,
        category: str,
        author_id: Optional[str] = None,
        status: Any = DecisionStatus.DRAFT,
        deadline: Optional[datetime] = None,
        consensus_reached: bool = False,
        outcome: Optional[str] = None,
    ) -> Decision:
        """
        Create a new decision.

        Args:
            title: Decision title
            description: Decision description
            category: Category label
            author_id: Creating user
            status: Initial status (default draft)
            deadline: Optional judgment deadline
            consensus_reached: Consensus flag
            outcome: Optional outcome text

        Returns:
            Decision: Created decision

        Raises:
            DecisionServiceError: If creation fails
        """
        try:
            now = datetime.utcnow()
            decision = Decision(
                title=title,
                description=description,
                category=category,
                status=_coerce_status(status),
                deadline=deadline,
                author_id=author_id,
                consensus_reached=consensus_reached,
                outcome=outcome,
                created_at=now,
                updated_at=now,
            )
            self.db.add(decision)
            self.db.flush()  # Get decision.id

            self.audit.record(
                action=AuditAction.DECISION_CREATED,
                entity_type="decision",
                entity_id=decision.id,
                user_id=author_id,
                details={"title": title, "category": category, "status": decision.status.value},
            )

            self.db.commit()
            self.db.refresh(decision)

            logger.info(f"Decision created: id={decision.id}, category={category}")
            return decision

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating decision: {e}", exc_info=True)
            raise DecisionServiceError(f"Database error: {e}") from e
        except DecisionServiceError:
            self.db.rollback()
            raise

    def get_decision(self, decision_id: int) -> Optional[Decision]:
        try:
            return self.db.query(Decision).filter(Decision.id == decision_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving decision {decision_id}: {e}")
            raise DecisionServiceError(f"Failed to retrieve decision: {e}") from e

    def require_decision(self, decision_id: int) -> Decision:
        decision = self.get_decision(decision_id)
        if decision is None:
            raise DecisionNotFoundError(decision_id)
        return decision

    def list_decisions(self, status: Any = None, category: Optional[str] = None) -> List[Decision]:
        """
        List decisions, oldest first.

        Args:
            status: Filter by status (optional)
            category: Filter by category (optional)

        Returns:
            List of Decision instances
        """
        try:
            query = self.db.query(Decision)

            if status:
                query = query.filter(Decision.status == _coerce_status(status))

            if category:
                query = query.filter(Decision.category == category)

            return query.order_by(Decision.created_at, Decision.id).all()

        except SQLAlchemyError as e:
            logger.error(f"Database error listing decisions: {e}")
            raise DecisionServiceError(f"Failed to list decisions: {e}") from e

    def update_decision(self, decision_id: int, changes: Dict[str, Any], user_id: Optional[str] = None) -> Decision:
        """
        Apply a partial update. Unknown keys are ignored.

        Raises:
            DecisionNotFoundError: If the decision does not exist
            DecisionServiceError: If the update fails
        """
        decision = self.require_decision(decision_id)

        try:
            changed: Dict[str, Any] = {}
            for field in UPDATABLE_FIELDS:
                if field not in changes:
                    continue
                value = changes[field]
                if field == "status":
                    value = _coerce_status(value)
                if getattr(decision, field) != value:
                    setattr(decision, field, value)
                    if isinstance(value, DecisionStatus):
                        value = value.value
                    elif isinstance(value, datetime):
                        value = value.isoformat()
                    changed[field] = value

            decision.updated_at = datetime.utcnow()

            self.audit.record(
                action=AuditAction.DECISION_UPDATED,
                entity_type="decision",
                entity_id=decision.id,
                user_id=user_id,
                details={"changed_fields": sorted(changed), "after": changed},
            )

            self.db.commit()
            self.db.refresh(decision)

            logger.info(f"Decision updated: id={decision_id}, fields={sorted(changed)}")
            return decision

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating decision {decision_id}: {e}", exc_info=True)
            raise DecisionServiceError(f"Database error: {e}") from e
        except DecisionServiceError:
            self.db.rollback()
            raise

    def delete_decision(self, decision_id: int, user_id: Optional[str] = None) -> None:
        """Delete a decision with its judgments, comments and attachments"""
        decision = self.require_decision(decision_id)

        try:
            details = {
                "title": decision.title,
                "judgments": len(decision.judgments),
                "comments": len(decision.comments),
                "attachments": len(decision.attachments),
            }
            self.db.delete(decision)
            self.audit.record(
                action=AuditAction.DECISION_DELETED,
                entity_type="decision",
                entity_id=decision_id,
                user_id=user_id,
                details=details,
            )
            self.db.commit()

            logger.info(f"Decision deleted: id={decision_id}")

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting decision {decision_id}: {e}", exc_info=True)
            raise DecisionServiceError(f"Database error: {e}") from e

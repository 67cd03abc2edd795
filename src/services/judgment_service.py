"""
Judgment Service Layer

Blind judgment intake, debate comments and the per-decision noise summary.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.variance_engine import DEFAULT_HIGH_NOISE_THRESHOLD, VarianceResult, calculate_variance
from src.models.audit_models import AuditAction
from src.models.decision_models import Comment, Judgment
from src.services.audit_service import AuditService
from src.services.decision_service import DecisionService

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10


class JudgmentServiceError(Exception):
    """Judgment Service operation errors"""

    pass


class JudgmentValidationError(JudgmentServiceError):
    pass


class DuplicateJudgmentError(JudgmentServiceError):
    def __init__(self, decision_id: int, user_id: str):
        super().__init__("You have already submitted a judgment for this decision.")
        self.decision_id = decision_id
        self.user_id = user_id


class DecisionClosedError(JudgmentServiceError):
    pass


class BlindJudgmentError(JudgmentServiceError):
    """Caller asked to see peers' judgments before submitting their own"""

    pass


def validate_score(score) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise JudgmentValidationError(f"Score must be an integer, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise JudgmentValidationError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}")
    return score


class JudgmentService:
    """
    Service for judgments and comments.

    Responsibilities:
    - Accept one blind judgment per user per decision
    - Reveal judgments only to users who already submitted, or after close
    - Compute the decision's noise summary from current judgments
    - Post and list debate comments
    """

    def __init__(self, db_session: Session, high_noise_threshold: float = DEFAULT_HIGH_NOISE_THRESHOLD):
        self.db = db_session
        self.high_noise_threshold = high_noise_threshold
        self.decisions = DecisionService(db_session)
        self.audit = AuditService(db_session)

    # ================================
    # Judgments
    # ================================

    def get_user_judgment(self, decision_id: int, user_id: str) -> Optional[Judgment]:
        try:
            return (
                self.db.query(Judgment)
                .filter(Judgment.decision_id == decision_id, Judgment.user_id == user_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving judgment for decision {decision_id}: {e}")
            raise JudgmentServiceError(f"Failed to retrieve judgment: {e}") from e

    def submit_judgment(self, decision_id: int, user_id: str, score: int, rationale: str) -> Judgment:
        """
        Submit a blind judgment.

        Workflow:
        1. Validate score and rationale
        2. Check the decision exists and still accepts judgments
        3. Reject a second judgment from the same user
        4. Store the judgment and an audit entry
        5. Raise a BIAS_ALERT audit entry when this judgment tips the decision into high noise

        Raises:
            DecisionNotFoundError: Unknown decision
            JudgmentValidationError: Score outside 1-10 or empty rationale
            DecisionClosedError: Decision closed or archived
            DuplicateJudgmentError: User already judged this decision
        """
        validate_score(score)
        if not rationale or not rationale.strip():
            raise JudgmentValidationError("Rationale is required")

        decision = self.decisions.require_decision(decision_id)

        if not decision.accepts_judgments:
            raise DecisionClosedError(
                f"Decision {decision_id} is {decision.status.value} and no longer accepts judgments"
            )

        if self.get_user_judgment(decision_id, user_id) is not None:
            raise DuplicateJudgmentError(decision_id, user_id)

        before = self._variance_for(decision_id)

        try:
            judgment = Judgment(
                decision_id=decision_id,
                user_id=user_id,
                score=score,
                rationale=rationale,
                submitted_at=datetime.utcnow(),
            )
            self.db.add(judgment)
            self.db.flush()

            # Rationale stays out of the audit trail to keep the judgment blind
            self.audit.record(
                action=AuditAction.JUDGMENT_SUBMITTED,
                entity_type="judgment",
                entity_id=judgment.id,
                user_id=user_id,
                details={"decision_id": decision_id},
            )

            after = self._variance_for(decision_id)
            if after.is_high_noise and not before.is_high_noise:
                self.audit.record(
                    action=AuditAction.BIAS_ALERT,
                    entity_type="decision",
                    entity_id=decision_id,
                    user_id=None,
                    details={
                        "message": "High variance detected",
                        "count": after.count,
                        "mean": after.mean,
                        "std_dev": after.std_dev,
                        "threshold": self.high_noise_threshold,
                    },
                )
                logger.warning(
                    f"High judgment noise on decision {decision_id}: "
                    f"std_dev={after.std_dev:.2f} > {self.high_noise_threshold}"
                )

            self.db.commit()
            self.db.refresh(judgment)

            logger.info(f"Judgment submitted: decision={decision_id}, judgment={judgment.id}")
            return judgment

        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateJudgmentError(decision_id, user_id) from e
        except JudgmentServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error submitting judgment: {e}", exc_info=True)
            raise JudgmentServiceError(f"Database error: {e}") from e

    def list_judgments(self, decision_id: int, viewer_id: Optional[str] = None) -> List[Judgment]:
        """
        List judgments for a decision, respecting blindness.

        A viewer sees all judgments once they have submitted their own or the
        decision is closed/archived. ``viewer_id=None`` skips the check
        (internal callers).

        Raises:
            DecisionNotFoundError: Unknown decision
            BlindJudgmentError: Viewer has not judged yet and the decision is still open
        """
        decision = self.decisions.require_decision(decision_id)

        if viewer_id is not None and not decision.is_revealed:
            if self.get_user_judgment(decision_id, viewer_id) is None:
                raise BlindJudgmentError("Submit your own judgment before viewing others")

        try:
            return (
                self.db.query(Judgment)
                .filter(Judgment.decision_id == decision_id)
                .order_by(Judgment.submitted_at, Judgment.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error listing judgments for decision {decision_id}: {e}")
            raise JudgmentServiceError(f"Failed to list judgments: {e}") from e

    def get_scores(self, decision_id: int) -> List[int]:
        try:
            rows = self.db.query(Judgment.score).filter(Judgment.decision_id == decision_id).all()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading scores for decision {decision_id}: {e}")
            raise JudgmentServiceError(f"Failed to read scores: {e}") from e
        return [score for (score,) in rows]

    def get_variance(self, decision_id: int) -> VarianceResult:
        """Noise summary of the decision's current judgments"""
        self.decisions.require_decision(decision_id)
        return calculate_variance(self.get_scores(decision_id), high_noise_threshold=self.high_noise_threshold)

    def _variance_for(self, decision_id: int) -> VarianceResult:
        return calculate_variance(self.get_scores(decision_id), high_noise_threshold=self.high_noise_threshold)

    # ================================
    # Comments
    # ================================

    def add_comment(self, decision_id: int, user_id: str, content: str, is_ai_generated: bool = False) -> Comment:
        if not content or not content.strip():
            raise JudgmentValidationError("Comment content is required")

        self.decisions.require_decision(decision_id)

        try:
            comment = Comment(
                decision_id=decision_id,
                user_id=user_id,
                content=content,
                is_ai_generated=is_ai_generated,
                created_at=datetime.utcnow(),
            )
            self.db.add(comment)
            self.db.flush()

            self.audit.record(
                action=AuditAction.COMMENT_POSTED,
                entity_type="comment",
                entity_id=comment.id,
                user_id=user_id,
                details={"decision_id": decision_id, "is_ai_generated": is_ai_generated},
            )

            self.db.commit()
            self.db.refresh(comment)
            return comment

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error posting comment: {e}", exc_info=True)
            raise JudgmentServiceError(f"Database error: {e}") from e

    def list_comments(self, decision_id: int) -> List[Comment]:
        """Comments for a decision, oldest first"""
        self.decisions.require_decision(decision_id)
        try:
            return (
                self.db.query(Comment)
                .filter(Comment.decision_id == decision_id)
                .order_by(Comment.created_at, Comment.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error listing comments for decision {decision_id}: {e}")
            raise JudgmentServiceError(f"Failed to list comments: {e}") from e

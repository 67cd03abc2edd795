"""
Decision Models

SQLAlchemy models for decisions and the judgments, comments and
attachments attached to them.
"""

import enum
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base


def _iso(value: datetime) -> Any:
    return value.isoformat() if value else None


class DecisionStatus(enum.Enum):
    """Decision lifecycle"""

    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"
    ARCHIVED = "archived"


class Decision(Base):
    """
    Decision

    A case under evaluation. Judgments, comments and attachments hang off it
    and are removed together with it.
    """

    __tablename__ = "decisions"

    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)  # Grant, Strategy, Hiring, ...
    status = Column(Enum(DecisionStatus), nullable=False, default=DecisionStatus.DRAFT, index=True)
    deadline = Column(DateTime)
    author_id = Column(String(100), index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Consensus tracking
    consensus_reached = Column(Boolean, nullable=False, default=False)
    outcome = Column(Text)  # Approved, Rejected, ...

    judgments = relationship(
        "Judgment", back_populates="decision", cascade="all, delete-orphan", order_by="Judgment.submitted_at"
    )
    comments = relationship(
        "Comment", back_populates="decision", cascade="all, delete-orphan", order_by="Comment.created_at"
    )
    attachments = relationship(
        "Attachment", back_populates="decision", cascade="all, delete-orphan", order_by="Attachment.created_at"
    )

    __table_args__ = (Index("idx_decision_status_category", "status", "category"),)

    def __repr__(self) -> str:
        return (
            f"<Decision(id={self.id}, title={self.title!r}, "
            f"status={self.status.value if self.status else None})>"
        )

    @property
    def accepts_judgments(self) -> bool:
        """Closed and archived decisions are frozen"""
        return self.status not in (DecisionStatus.CLOSED, DecisionStatus.ARCHIVED)

    @property
    def is_revealed(self) -> bool:
        """Judgments are visible to everyone once the decision is closed"""
        return self.status in (DecisionStatus.CLOSED, DecisionStatus.ARCHIVED)

    def scores(self) -> List[int]:
        return [j.score for j in self.judgments]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status.value if self.status else None,
            "deadline": _iso(self.deadline),
            "author_id": self.author_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "consensus_reached": bool(self.consensus_reached),
            "outcome": self.outcome,
        }


class Judgment(Base):
    """
    Judgment

    Blind score (1-10) plus rationale. One per user per decision.
    """

    __tablename__ = "judgments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    decision_id = Column(Integer, ForeignKey("decisions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(100), nullable=False, index=True)

    score = Column(Integer, nullable=False)  # 1-10
    rationale = Column(Text, nullable=False)
    submitted_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    decision = relationship("Decision", back_populates="judgments")

    __table_args__ = (UniqueConstraint("decision_id", "user_id", name="uq_judgment_decision_user"),)

    def __repr__(self) -> str:
        return f"<Judgment(id={self.id}, decision={self.decision_id}, user={self.user_id}, score={self.score})>"


class Comment(Base):
    """Debate comment on a decision"""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    decision_id = Column(Integer, ForeignKey("decisions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(100), nullable=False, index=True)

    content = Column(Text, nullable=False)
    is_ai_generated = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    decision = relationship("Decision", back_populates="comments")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, decision={self.decision_id}, user={self.user_id})>"


class Attachment(Base):
    """
    Attachment

    Metadata for a file held in object storage. ``extracted_text`` is filled
    by the document extractor when the file type is parseable.
    """

    __tablename__ = "attachments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    decision_id = Column(Integer, ForeignKey("decisions.id", ondelete="CASCADE"), index=True)
    user_id = Column(String(100), nullable=False, index=True)

    file_name = Column(String(500), nullable=False)
    file_type = Column(String(200), nullable=False)  # MIME type
    file_size = Column(Integer, nullable=False)  # bytes
    object_path = Column(String(1000), nullable=False)
    extracted_text = Column(Text)
    context = Column(String(50), nullable=False, default="decision")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    decision = relationship("Decision", back_populates="attachments")

    def __repr__(self) -> str:
        return f"<Attachment(id={self.id}, decision={self.decision_id}, file={self.file_name})>"

    @property
    def has_text(self) -> bool:
        return bool(self.extracted_text)

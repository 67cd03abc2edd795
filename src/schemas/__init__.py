"""
API Schemas Package

Pydantic models for request/response validation in FastAPI.
"""

from .admin_schemas import AuditLogListResponse, AuditLogResponse, DecisionStatsResponse, NoisyDecision
from .attachment_schemas import (
    AttachmentCreateRequest,
    AttachmentListResponse,
    AttachmentResponse,
    AttachmentTextResponse,
    AttachmentTextUpdateRequest,
)
from .coaching_schemas import CoachingPromptRequest, CoachingPromptResponse, ProviderInfo
from .decision_schemas import (
    DecisionCreateRequest,
    DecisionListResponse,
    DecisionResponse,
    DecisionStatusEnum,
    DecisionUpdateRequest,
)
from .judgment_schemas import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    JudgmentCreateRequest,
    JudgmentListResponse,
    JudgmentResponse,
    VarianceResponse,
)

__all__ = [
    # Decision Schemas
    "DecisionCreateRequest",
    "DecisionUpdateRequest",
    "DecisionResponse",
    "DecisionListResponse",
    "DecisionStatusEnum",
    # Judgment Schemas
    "JudgmentCreateRequest",
    "JudgmentResponse",
    "JudgmentListResponse",
    "VarianceResponse",
    "CommentCreateRequest",
    "CommentResponse",
    "CommentListResponse",
    # Attachment Schemas
    "AttachmentCreateRequest",
    "AttachmentResponse",
    "AttachmentListResponse",
    "AttachmentTextUpdateRequest",
    "AttachmentTextResponse",
    # Coaching Schemas
    "ProviderInfo",
    "CoachingPromptRequest",
    "CoachingPromptResponse",
    # Admin Schemas
    "AuditLogResponse",
    "AuditLogListResponse",
    "DecisionStatsResponse",
    "NoisyDecision",
]

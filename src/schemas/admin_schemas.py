"""
Admin Schemas

Audit log listing and decision analytics.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.schemas.judgment_schemas import VarianceResponse


class AuditLogResponse(BaseModel):
    id: int
    user_id: Optional[str] = None
    action: str
    entity_type: str
    entity_id: int
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuditLogListResponse(BaseModel):
    total: int
    items: List[AuditLogResponse]


class NoisyDecision(BaseModel):
    decision_id: int
    title: str
    category: str
    variance: VarianceResponse


class DecisionStatsResponse(BaseModel):
    """Organization-wide decision analytics"""

    total_decisions: int = Field(..., description="Number of decisions")
    status_counts: Dict[str, int] = Field(default_factory=dict)
    category_counts: Dict[str, int] = Field(default_factory=dict)
    total_judgments: int = 0
    total_comments: int = 0
    total_attachments: int = 0
    high_noise_threshold: float
    high_noise_decisions: List[NoisyDecision] = Field(default_factory=list)

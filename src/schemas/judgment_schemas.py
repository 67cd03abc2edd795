"""
Judgment Schemas

Pydantic models for blind judgments, debate comments and the noise
(variance) summary.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, StrictInt

from src.core.variance_engine import VarianceResult


class JudgmentCreateRequest(BaseModel):
    """Blind judgment submission"""

    score: StrictInt = Field(..., description="Score on the 1-10 scale", ge=1, le=10)
    rationale: str = Field(..., description="Reasoning behind the score", min_length=1)

    class Config:
        json_schema_extra = {"example": {"score": 7, "rationale": "Strong team, unclear market size."}}


class JudgmentResponse(BaseModel):
    id: int
    decision_id: int
    user_id: str
    score: int
    rationale: str
    submitted_at: datetime

    class Config:
        from_attributes = True


class JudgmentListResponse(BaseModel):
    total: int = Field(..., description="Number of judgments")
    items: List[JudgmentResponse]


class VarianceResponse(BaseModel):
    """
    Judgment noise summary.

    Serialized with camelCase keys: count, mean, stdDev, isHighNoise.
    """

    count: int = Field(..., description="Number of judgments")
    mean: float = Field(..., description="Mean score (0 when no judgments)")
    std_dev: float = Field(..., alias="stdDev", description="Population std dev (0 when fewer than 2)")
    is_high_noise: bool = Field(..., alias="isHighNoise", description="Std dev above the noise threshold")

    class Config:
        populate_by_name = True
        json_schema_extra = {"example": {"count": 4, "mean": 5.5, "stdDev": 4.5, "isHighNoise": True}}

    @classmethod
    def from_result(cls, result: VarianceResult) -> "VarianceResponse":
        return cls(
            count=result.count,
            mean=result.mean,
            std_dev=result.std_dev,
            is_high_noise=result.is_high_noise,
        )


class CommentCreateRequest(BaseModel):
    content: str = Field(..., description="Comment text", min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    id: int
    decision_id: int
    user_id: str
    content: str
    is_ai_generated: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class CommentListResponse(BaseModel):
    total: int
    items: List[CommentResponse]

"""
Decision Pydantic Schemas

Request/Response models for Decision API.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DecisionStatusEnum(str, Enum):
    """Decision status enumeration"""

    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"
    ARCHIVED = "archived"


class DecisionCreateRequest(BaseModel):
    """Decision creation request"""

    title: str = Field(..., description="Decision title", min_length=1, max_length=500)
    description: str = Field(..., description="What is being decided and why", min_length=1)
    category: str = Field(..., description="Category (Grant, Strategy, Hiring, ...)", min_length=1, max_length=100)
    status: DecisionStatusEnum = Field(DecisionStatusEnum.DRAFT, description="Initial status")
    deadline: Optional[datetime] = Field(None, description="Judgment deadline")
    consensus_reached: bool = Field(False, description="Consensus flag")
    outcome: Optional[str] = Field(None, description="Outcome (Approved, Rejected, ...)")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Q4 Budget",
                "description": "Allocate the Q4 discretionary budget across three programs.",
                "category": "Strategy",
                "status": "open",
                "deadline": "2026-11-30T17:00:00",
            }
        }


class DecisionUpdateRequest(BaseModel):
    """Partial decision update; omitted fields are left untouched"""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[DecisionStatusEnum] = None
    deadline: Optional[datetime] = None
    consensus_reached: Optional[bool] = None
    outcome: Optional[str] = None


class DecisionResponse(BaseModel):
    """Decision detail"""

    id: int = Field(..., description="Decision ID")
    title: str
    description: str
    category: str
    status: DecisionStatusEnum
    deadline: Optional[datetime] = None
    author_id: Optional[str] = Field(None, description="Author user ID")
    created_at: datetime
    updated_at: datetime
    consensus_reached: bool = False
    outcome: Optional[str] = None

    class Config:
        from_attributes = True


class DecisionListResponse(BaseModel):
    """Decision list response"""

    total: int = Field(..., description="Total number of items")
    items: List[DecisionResponse] = Field(..., description="Decisions, oldest first")

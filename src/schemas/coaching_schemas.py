"""
Coaching Schemas

Pydantic models for the AI decision coach prompt endpoint.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProviderInfo(BaseModel):
    id: str = Field(..., description="Provider key (openai, claude, gemini)")
    name: str = Field(..., description="Display name")
    model: str = Field(..., description="Model used for coaching")


class CoachingPromptRequest(BaseModel):
    message: str = Field("", description="User question for the coach")
    decision_id: Optional[int] = Field(None, alias="decisionId", description="Decision to use as context")
    provider: Optional[str] = Field(None, description="Requested provider; unknown values fall back to default")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"message": "Are we anchoring on last year's numbers?", "decisionId": 3, "provider": "claude"}
        }


class CoachingPromptResponse(BaseModel):
    provider: str
    model: str
    system_prompt: str = Field(..., alias="systemPrompt")
    user_message: str = Field(..., alias="userMessage")

    class Config:
        populate_by_name = True

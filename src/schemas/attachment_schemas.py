"""
Attachment Pydantic Schemas

Request/Response models for decision attachments.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AttachmentCreateRequest(BaseModel):
    """Register a file already uploaded to object storage"""

    file_name: str = Field(..., description="Original file name", min_length=1, max_length=500)
    file_type: str = Field(..., description="MIME type", min_length=1, max_length=200)
    file_size: int = Field(..., description="File size in bytes", gt=0)
    object_path: str = Field(..., description="Normalized object path (/objects/...)", min_length=1)
    context: Optional[str] = Field(None, description="Where the file is used (default: decision)", max_length=50)
    extracted_text: Optional[str] = Field(None, description="Text extracted from the document, if any")

    class Config:
        json_schema_extra = {
            "example": {
                "file_name": "market_study.pdf",
                "file_type": "application/pdf",
                "file_size": 482133,
                "object_path": "/objects/uploads/6f1c2a9e",
                "context": "decision",
            }
        }


class AttachmentResponse(BaseModel):
    id: int
    decision_id: Optional[int] = None
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    object_path: str
    context: str
    has_text: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class AttachmentListResponse(BaseModel):
    total: int
    items: List[AttachmentResponse]


class AttachmentTextUpdateRequest(BaseModel):
    extracted_text: str = Field(..., alias="extractedText", description="Replacement extracted text")

    class Config:
        populate_by_name = True


class AttachmentTextResponse(BaseModel):
    extracted_text: str = Field("", alias="extractedText")

    class Config:
        populate_by_name = True

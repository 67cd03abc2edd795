"""
Attachment API Router

Registers uploaded documents against decisions and serves their extracted
text.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.schemas.attachment_schemas import (
    AttachmentCreateRequest,
    AttachmentListResponse,
    AttachmentResponse,
    AttachmentTextResponse,
    AttachmentTextUpdateRequest,
)
from src.services.attachment_service import (
    AttachmentNotFoundError,
    AttachmentService,
    AttachmentServiceError,
    AttachmentValidationError,
)
from src.services.decision_service import DecisionNotFoundError
from src.web.dependencies import get_attachment_service, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Attachments"])


@router.post(
    "/decisions/{decision_id}/attachments", response_model=AttachmentResponse, status_code=status.HTTP_201_CREATED
)
def create_attachment(
    decision_id: int,
    request: AttachmentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentResponse:
    try:
        logger.info(f"Attachment registration: decision={decision_id}, type={request.file_type}")
        attachment = attachment_service.create_attachment(
            decision_id=decision_id,
            user_id=user_id,
            file_name=request.file_name,
            file_type=request.file_type,
            file_size=request.file_size,
            object_path=request.object_path,
            extracted_text=request.extracted_text,
            context=request.context,
        )
        return AttachmentResponse.model_validate(attachment)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AttachmentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AttachmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/decisions/{decision_id}/attachments", response_model=AttachmentListResponse)
def list_attachments(
    decision_id: int,
    user_id: str = Depends(get_current_user_id),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentListResponse:
    try:
        items = [AttachmentResponse.model_validate(a) for a in attachment_service.list_attachments(decision_id)]
        return AttachmentListResponse(total=len(items), items=items)
    except AttachmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/attachments/{attachment_id}/text", response_model=AttachmentTextResponse)
def get_attachment_text(
    attachment_id: int,
    user_id: str = Depends(get_current_user_id),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentTextResponse:
    try:
        attachment = attachment_service.require_attachment(attachment_id)
        return AttachmentTextResponse(extracted_text=attachment.extracted_text or "")
    except AttachmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AttachmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/attachments/{attachment_id}/text", response_model=AttachmentTextResponse)
def update_attachment_text(
    attachment_id: int,
    request: AttachmentTextUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentTextResponse:
    try:
        attachment = attachment_service.update_attachment_text(attachment_id, request.extracted_text, user_id=user_id)
        return AttachmentTextResponse(extracted_text=attachment.extracted_text or "")
    except AttachmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AttachmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/attachments/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attachment(
    attachment_id: int,
    user_id: str = Depends(get_current_user_id),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> Response:
    try:
        attachment_service.delete_attachment(attachment_id, user_id=user_id)
    except AttachmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

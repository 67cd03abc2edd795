"""
Judgment API Router

Blind judgment submission, the decision noise summary and debate comments.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.schemas.judgment_schemas import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    JudgmentCreateRequest,
    JudgmentListResponse,
    JudgmentResponse,
    VarianceResponse,
)
from src.services.decision_service import DecisionNotFoundError
from src.services.judgment_service import (
    BlindJudgmentError,
    DecisionClosedError,
    DuplicateJudgmentError,
    JudgmentService,
    JudgmentServiceError,
    JudgmentValidationError,
)
from src.web.dependencies import get_current_user_id, get_judgment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/decisions", tags=["Judgments & Debate"])


@router.post(
    "/{decision_id}/judgments", response_model=JudgmentResponse, status_code=status.HTTP_201_CREATED
)
def submit_judgment(
    decision_id: int,
    request: JudgmentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    judgment_service: JudgmentService = Depends(get_judgment_service),
) -> JudgmentResponse:
    try:
        judgment = judgment_service.submit_judgment(
            decision_id=decision_id, user_id=user_id, score=request.score, rationale=request.rationale
        )
        return JudgmentResponse.model_validate(judgment)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except JudgmentValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except (DuplicateJudgmentError, DecisionClosedError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except JudgmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{decision_id}/judgments", response_model=JudgmentListResponse)
def list_judgments(
    decision_id: int,
    user_id: str = Depends(get_current_user_id),
    judgment_service: JudgmentService = Depends(get_judgment_service),
) -> JudgmentListResponse:
    try:
        judgments = judgment_service.list_judgments(decision_id, viewer_id=user_id)
        items = [JudgmentResponse.model_validate(j) for j in judgments]
        return JudgmentListResponse(total=len(items), items=items)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BlindJudgmentError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except JudgmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{decision_id}/variance", response_model=VarianceResponse)
def get_variance(
    decision_id: int, judgment_service: JudgmentService = Depends(get_judgment_service)
) -> VarianceResponse:
    """Noise summary: {count, mean, stdDev, isHighNoise}"""
    try:
        return VarianceResponse.from_result(judgment_service.get_variance(decision_id))
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except JudgmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/{decision_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def post_comment(
    decision_id: int,
    request: CommentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    judgment_service: JudgmentService = Depends(get_judgment_service),
) -> CommentResponse:
    try:
        comment = judgment_service.add_comment(decision_id, user_id=user_id, content=request.content)
        return CommentResponse.model_validate(comment)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except JudgmentValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except JudgmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{decision_id}/comments", response_model=CommentListResponse)
def list_comments(
    decision_id: int, judgment_service: JudgmentService = Depends(get_judgment_service)
) -> CommentListResponse:
    try:
        comments = judgment_service.list_comments(decision_id)
        items = [CommentResponse.model_validate(c) for c in comments]
        return CommentListResponse(total=len(items), items=items)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except JudgmentServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

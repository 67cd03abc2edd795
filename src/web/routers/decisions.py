"""
Decision API Router

Endpoints for creating, querying, updating and deleting decisions.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.schemas.decision_schemas import (
    DecisionCreateRequest,
    DecisionListResponse,
    DecisionResponse,
    DecisionStatusEnum,
    DecisionUpdateRequest,
)
from src.services.decision_service import DecisionNotFoundError, DecisionService, DecisionServiceError
from src.web.dependencies import get_current_user_id, get_decision_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/decisions", tags=["Decision Management"])

NULLABLE_FIELDS = ("deadline", "outcome")


def to_response(decision) -> DecisionResponse:
    return DecisionResponse(**decision.to_dict())


@router.get("", response_model=DecisionListResponse)
def list_decisions(
    status_filter: Optional[DecisionStatusEnum] = Query(None, alias="status"),
    category: Optional[str] = None,
    decision_service: DecisionService = Depends(get_decision_service),
) -> DecisionListResponse:
    try:
        decisions = decision_service.list_decisions(
            status=status_filter.value if status_filter else None, category=category
        )
        items = [to_response(d) for d in decisions]
        return DecisionListResponse(total=len(items), items=items)
    except DecisionServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{decision_id}", response_model=DecisionResponse)
def get_decision(
    decision_id: int, decision_service: DecisionService = Depends(get_decision_service)
) -> DecisionResponse:
    decision = decision_service.get_decision(decision_id)
    if decision is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Decision not found: id={decision_id}")
    return to_response(decision)


@router.post("", response_model=DecisionResponse, status_code=status.HTTP_201_CREATED)
def create_decision(
    request: DecisionCreateRequest,
    user_id: str = Depends(get_current_user_id),
    decision_service: DecisionService = Depends(get_decision_service),
) -> DecisionResponse:
    try:
        logger.info(f"Decision creation request: category={request.category}, author={user_id}")
        decision = decision_service.create_decision(
            title=request.title,
            description=request.description,
            category=request.category,
            author_id=user_id,
            status=request.status.value,
            deadline=request.deadline,
            consensus_reached=request.consensus_reached,
            outcome=request.outcome,
        )
        return to_response(decision)
    except DecisionServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{decision_id}", response_model=DecisionResponse)
def update_decision(
    decision_id: int,
    request: DecisionUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    decision_service: DecisionService = Depends(get_decision_service),
) -> DecisionResponse:
    # deadline and outcome may be cleared with null; other fields ignore it
    changes = {
        k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None or k in NULLABLE_FIELDS
    }
    if changes.get("status") is not None:
        changes["status"] = changes["status"].value
    try:
        decision = decision_service.update_decision(decision_id, changes, user_id=user_id)
        return to_response(decision)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DecisionServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{decision_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_decision(
    decision_id: int,
    user_id: str = Depends(get_current_user_id),
    decision_service: DecisionService = Depends(get_decision_service),
) -> Response:
    try:
        decision_service.delete_decision(decision_id, user_id=user_id)
    except DecisionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DecisionServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

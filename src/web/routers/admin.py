"""
Admin API Router

Governance audit trail and organization-wide decision analytics.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.config.settings import AppSettings, get_settings
from src.schemas.admin_schemas import AuditLogListResponse, AuditLogResponse, DecisionStatsResponse, NoisyDecision
from src.schemas.judgment_schemas import VarianceResponse
from src.services.audit_service import AuditService, AuditServiceError
from src.web.dependencies import get_audit_service, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def build_stats_response(stats: Dict[str, Any]) -> DecisionStatsResponse:
    noisy = [
        NoisyDecision(
            decision_id=item["decision_id"],
            title=item["title"],
            category=item["category"],
            variance=VarianceResponse.from_result(item["variance"]),
        )
        for item in stats["high_noise_decisions"]
    ]
    return DecisionStatsResponse(**{**stats, "high_noise_decisions": noisy})


@router.get("/audit-logs", response_model=AuditLogListResponse)
def list_audit_logs(
    action: Optional[str] = Query(None, description="Filter by action, e.g. JUDGMENT_SUBMITTED"),
    entity_type: Optional[str] = Query(None, description="Filter by entity type"),
    limit: int = Query(500, ge=1, le=5000, description="Most recent entries to return"),
    user_id: str = Depends(get_current_user_id),
    audit_service: AuditService = Depends(get_audit_service),
) -> AuditLogListResponse:
    try:
        logs = audit_service.list_logs(action=action, entity_type=entity_type, limit=limit)
        items = [AuditLogResponse.model_validate(log) for log in logs]
        return AuditLogListResponse(total=len(items), items=items)
    except AuditServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/stats", response_model=DecisionStatsResponse)
def get_stats(
    user_id: str = Depends(get_current_user_id),
    audit_service: AuditService = Depends(get_audit_service),
    settings: AppSettings = Depends(get_settings),
) -> DecisionStatsResponse:
    """
    Decision analytics.

    Returns counts by status and category, judgment/comment/attachment
    totals and every decision whose judgments are currently high-noise.
    """
    try:
        stats = audit_service.decision_stats(high_noise_threshold=settings.high_noise_threshold)
        return build_stats_response(stats)
    except AuditServiceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

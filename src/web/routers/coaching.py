"""
Coaching API Router

Provider catalogue and prompt assembly for the AI decision coach. The LLM
call itself happens downstream of this service.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from src.schemas.coaching_schemas import CoachingPromptRequest, CoachingPromptResponse, ProviderInfo
from src.services.coaching_service import CoachingService, CoachingServiceError, list_providers
from src.services.decision_service import DecisionServiceError
from src.services.judgment_service import JudgmentServiceError
from src.web.dependencies import get_coaching_service, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/coaching", tags=["AI Coaching"])


@router.get("/providers", response_model=List[ProviderInfo])
def get_providers() -> List[ProviderInfo]:
    return [ProviderInfo(id=p.id, name=p.name, model=p.model) for p in list_providers()]


@router.post("/prompt", response_model=CoachingPromptResponse)
def build_prompt(
    request: CoachingPromptRequest,
    user_id: str = Depends(get_current_user_id),
    coaching_service: CoachingService = Depends(get_coaching_service),
) -> CoachingPromptResponse:
    try:
        prompt = coaching_service.build_prompt(
            message=request.message, decision_id=request.decision_id, provider=request.provider
        )
    except CoachingServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (DecisionServiceError, JudgmentServiceError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Coaching prompt built: provider={prompt.provider.id}, decision={request.decision_id}, user={user_id}")
    return CoachingPromptResponse(
        provider=prompt.provider.id,
        model=prompt.provider.model,
        system_prompt=prompt.system_prompt,
        user_message=prompt.user_message,
    )

"""
Shared FastAPI dependencies: caller identity and service factories.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from src.config.settings import AppSettings, get_settings
from src.models.database import get_session
from src.services.attachment_service import AttachmentService
from src.services.audit_service import AuditService
from src.services.coaching_service import CoachingService
from src.services.decision_service import DecisionService
from src.services.judgment_service import JudgmentService
from src.utils.security import SecurityError, validate_user_identifier

logger = logging.getLogger(__name__)


def get_optional_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    """Caller ID from the ``X-User-Id`` header set by the auth proxy, if any"""
    if x_user_id is None or not x_user_id.strip():
        return None
    try:
        return validate_user_identifier(x_user_id.strip())
    except SecurityError as e:
        logger.warning(f"Rejected user identifier: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_current_user_id(user_id: Optional[str] = Depends(get_optional_user_id)) -> str:
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


def get_decision_service(db: Session = Depends(get_session)) -> DecisionService:
    return DecisionService(db_session=db)


def get_judgment_service(
    db: Session = Depends(get_session), settings: AppSettings = Depends(get_settings)
) -> JudgmentService:
    return JudgmentService(db_session=db, high_noise_threshold=settings.high_noise_threshold)


def get_attachment_service(
    db: Session = Depends(get_session), settings: AppSettings = Depends(get_settings)
) -> AttachmentService:
    return AttachmentService(
        db_session=db,
        allowed_types=settings.allowed_attachment_types,
        max_size_mb=settings.max_attachment_mb,
        max_text_chars=settings.max_extracted_text_chars,
    )


def get_coaching_service(
    db: Session = Depends(get_session), settings: AppSettings = Depends(get_settings)
) -> CoachingService:
    return CoachingService(
        db_session=db,
        high_noise_threshold=settings.high_noise_threshold,
        default_provider=settings.default_provider,
        excerpt_chars=settings.prompt_excerpt_chars,
    )


def get_audit_service(db: Session = Depends(get_session)) -> AuditService:
    return AuditService(db_session=db)

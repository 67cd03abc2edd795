"""
Attachment Service Layer

Registers files uploaded to object storage against a decision and keeps
the text an upstream extractor pulled out of them.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config.settings import ALLOWED_ATTACHMENT_TYPES
from src.models.audit_models import AuditAction
from src.models.decision_models import Attachment
from src.services.audit_service import AuditService
from src.services.decision_service import DecisionService
from src.utils.security import (
    SecurityError,
    normalize_object_path,
    sanitize_filename,
    validate_file_size,
    validate_mime_type,
)

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n[...truncated]"


class AttachmentServiceError(Exception):
    """Attachment Service operation errors"""

    pass


class AttachmentValidationError(AttachmentServiceError):
    pass


class AttachmentNotFoundError(AttachmentServiceError):
    def __init__(self, attachment_id: int):
        super().__init__(f"Attachment not found: id={attachment_id}")
        self.attachment_id = attachment_id


def truncate_text(text: Optional[str], max_chars: int) -> Optional[str]:
    """Cap extracted text at ``max_chars`` and mark the cut"""
    if text is None:
        return None
    if len(text) > max_chars:
        return text[:max_chars] + TRUNCATION_MARKER
    return text


class AttachmentService:
    """
    Service for decision attachments.

    Responsibilities:
    - Validate MIME type, size and object path of uploaded files
    - Store attachment metadata and (truncated) extracted text
    - Audit logging for additions and removals
    """

    def __init__(
        self,
        db_session: Session,
        allowed_types: Iterable[str] = ALLOWED_ATTACHMENT_TYPES,
        max_size_mb: int = 10,
        max_text_chars: int = 50000,
    ):
        self.db = db_session
        self.allowed_types = tuple(allowed_types)
        self.max_size_mb = max_size_mb
        self.max_text_chars = max_text_chars
        self.decisions = DecisionService(db_session)
        self.audit = AuditService(db_session)

    def validate_upload(self, file_type: Optional[str], file_size: Optional[int]) -> None:
        """
        Check an upload's MIME type and size.

        Raises:
            AttachmentValidationError: "Unsupported file type" or "File too large"
        """
        if not validate_mime_type(file_type, self.allowed_types):
            raise AttachmentValidationError("Unsupported file type")
        if file_size is None or not validate_file_size(int(file_size), max_size_mb=self.max_size_mb):
            raise AttachmentValidationError(f"File too large. Maximum {self.max_size_mb}MB.")

    def create_attachment(
        self,
        decision_id: int,
        user_id: str,
        file_name: str,
        file_type: str,
        file_size: int,
        object_path: str,
        extracted_text: Optional[str] = None,
        context: Optional[str] = None,
    ) -> Attachment:
        """
        Register an uploaded file against a decision.

        Args:
            decision_id: Owning decision
            user_id: Uploading user
            file_name: Original file name (sanitized before storing)
            file_type: MIME type, must be in the allow-list
            file_size: Size in bytes
            object_path: Object storage path (``/objects/...``)
            extracted_text: Text pulled from the document, truncated to the configured limit
            context: Usage context (default "decision")

        Returns:
            Attachment

        Raises:
            DecisionNotFoundError: Unknown decision
            AttachmentValidationError: Invalid metadata
            AttachmentServiceError: Database failure
        """
        self.decisions.require_decision(decision_id)

        self.validate_upload(file_type, file_size)
        try:
            normalized_path = normalize_object_path(object_path)
        except SecurityError as e:
            raise AttachmentValidationError(str(e)) from e

        try:
            attachment = Attachment(
                decision_id=decision_id,
                user_id=user_id,
                file_name=sanitize_filename(file_name),
                file_type=file_type.split(";", 1)[0].strip().lower(),
                file_size=int(file_size),
                object_path=normalized_path,
                extracted_text=truncate_text(extracted_text, self.max_text_chars),
                context=context or "decision",
                created_at=datetime.utcnow(),
            )
            self.db.add(attachment)
            self.db.flush()

            self.audit.record(
                action=AuditAction.ATTACHMENT_ADDED,
                entity_type="attachment",
                entity_id=attachment.id,
                user_id=user_id,
                details={
                    "decision_id": decision_id,
                    "file_name": attachment.file_name,
                    "file_type": attachment.file_type,
                    "file_size": attachment.file_size,
                },
            )

            self.db.commit()
            self.db.refresh(attachment)

            logger.info(f"Attachment registered: id={attachment.id}, decision={decision_id}")
            return attachment

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating attachment: {e}", exc_info=True)
            raise AttachmentServiceError(f"Failed to create attachment: {e}") from e

    def get_attachment(self, attachment_id: int) -> Optional[Attachment]:
        try:
            return self.db.query(Attachment).filter(Attachment.id == attachment_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving attachment {attachment_id}: {e}")
            raise AttachmentServiceError(f"Failed to retrieve attachment: {e}") from e

    def require_attachment(self, attachment_id: int) -> Attachment:
        attachment = self.get_attachment(attachment_id)
        if attachment is None:
            raise AttachmentNotFoundError(attachment_id)
        return attachment

    def list_attachments(self, decision_id: int) -> List[Attachment]:
        """Attachments of a decision, oldest first"""
        try:
            return (
                self.db.query(Attachment)
                .filter(Attachment.decision_id == decision_id)
                .order_by(Attachment.created_at, Attachment.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error listing attachments for decision {decision_id}: {e}")
            raise AttachmentServiceError(f"Failed to list attachments: {e}") from e

    def update_attachment_text(self, attachment_id: int, extracted_text: str, user_id: Optional[str] = None) -> Attachment:
        attachment = self.require_attachment(attachment_id)

        try:
            attachment.extracted_text = truncate_text(extracted_text, self.max_text_chars)
            self.audit.record(
                action=AuditAction.ATTACHMENT_TEXT_UPDATED,
                entity_type="attachment",
                entity_id=attachment_id,
                user_id=user_id,
                details={"chars": len(attachment.extracted_text or "")},
            )
            self.db.commit()
            self.db.refresh(attachment)
            return attachment

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating attachment text {attachment_id}: {e}", exc_info=True)
            raise AttachmentServiceError(f"Failed to update attachment text: {e}") from e

    def delete_attachment(self, attachment_id: int, user_id: Optional[str] = None) -> None:
        """Delete attachment metadata; a missing ID is a no-op"""
        attachment = self.get_attachment(attachment_id)
        if attachment is None:
            logger.info(f"Attachment {attachment_id} already absent, nothing to delete")
            return

        try:
            details = {"decision_id": attachment.decision_id, "file_name": attachment.file_name}
            self.db.delete(attachment)
            self.audit.record(
                action=AuditAction.ATTACHMENT_DELETED,
                entity_type="attachment",
                entity_id=attachment_id,
                user_id=user_id,
                details=details,
            )
            self.db.commit()

            logger.info(f"Attachment deleted: id={attachment_id}")

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting attachment {attachment_id}: {e}", exc_info=True)
            raise AttachmentServiceError(f"Failed to delete attachment: {e}") from e

"""
Coaching Service Layer

Builds the system prompt for the AI decision coach. The decision's noise
summary and attachment excerpts are rendered into the prompt so the model
can reference group disagreement.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from src.core.variance_engine import DEFAULT_HIGH_NOISE_THRESHOLD, VarianceResult
from src.models.decision_models import Attachment, Decision
from src.services.attachment_service import AttachmentService
from src.services.judgment_service import JudgmentService

logger = logging.getLogger(__name__)

COACH_PERSONA = (
    "You are Clarvoy's AI Decision Coach. You help leaders make better decisions by identifying "
    "cognitive biases, reducing noise in group judgments, and applying structured decision-making "
    "frameworks. You reference concepts like pre-mortem analysis, reference class forecasting, "
    "base rates, and adversarial debate. Be concise, practical, and direct."
)


@dataclass(frozen=True)
class Provider:
    id: str
    name: str
    model: str


PROVIDERS: Dict[str, Provider] = {
    "openai": Provider(id="openai", name="OpenAI", model="gpt-5.2"),
    "claude": Provider(id="claude", name="Claude", model="claude-sonnet-4-5"),
    "gemini": Provider(id="gemini", name="Gemini", model="gemini-2.5-flash"),
}

DEFAULT_PROVIDER = "openai"


class CoachingServiceError(Exception):
    """Coaching Service operation errors"""

    pass


@dataclass
class CoachingPrompt:
    provider: Provider
    system_prompt: str
    user_message: str


def list_providers() -> List[Provider]:
    return list(PROVIDERS.values())


def resolve_provider(requested: Optional[str], default: str = DEFAULT_PROVIDER) -> Provider:
    """Unknown or missing providers fall back to the default"""
    key = (requested or "").strip().lower()
    if key in PROVIDERS:
        return PROVIDERS[key]
    if requested:
        logger.info(f"Unknown coaching provider '{requested}', falling back to {default}")
    return PROVIDERS.get(default, PROVIDERS[DEFAULT_PROVIDER])


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".") if value else "0"


def build_decision_context(
    decision: Decision,
    variance: VarianceResult,
    attachments: Optional[List[Attachment]] = None,
    excerpt_chars: int = 3000,
) -> str:
    """
    Render decision facts, judgment noise and document excerpts as prompt text.

    Example:
        Decision context: "Q4 Budget" - Allocate... Category: Strategy. Status: open.
        4 judgments submitted. Mean score: 5.5, Std Dev: 4.5, High noise: true.
    """
    status = decision.status.value if decision.status else "unknown"
    context = (
        f'Decision context: "{decision.title}" - {decision.description}. '
        f"Category: {decision.category}. Status: {status}. "
        f"{variance.count} judgments submitted. "
        f"Mean score: {_format_number(variance.mean)}, "
        f"Std Dev: {_format_number(variance.std_dev)}, "
        f"High noise: {'true' if variance.is_high_noise else 'false'}."
    )

    if variance.is_high_noise:
        context += (
            " The group's judgments disagree strongly; help them surface the sources of "
            "disagreement before converging."
        )

    docs = [a for a in (attachments or []) if a.extracted_text]
    if docs:
        summaries = "\n\n".join(f"[{a.file_name}]: {a.extracted_text[:excerpt_chars]}" for a in docs)
        context += f"\n\nAttached documents:\n{summaries}"

    return context


def build_system_prompt(context: str = "") -> str:
    return f"{COACH_PERSONA} {context}".strip()


class CoachingService:
    """
    Service assembling coaching prompts.

    Responsibilities:
    - Resolve the LLM provider/model for a request
    - Gather decision, judgment noise and attachment text as context
    """

    def __init__(
        self,
        db_session: Session,
        high_noise_threshold: float = DEFAULT_HIGH_NOISE_THRESHOLD,
        default_provider: str = DEFAULT_PROVIDER,
        excerpt_chars: int = 3000,
    ):
        self.db = db_session
        self.judgments = JudgmentService(db_session, high_noise_threshold=high_noise_threshold)
        self.attachments = AttachmentService(db_session)
        self.default_provider = default_provider
        self.excerpt_chars = excerpt_chars

    def build_prompt(
        self, message: str, decision_id: Optional[int] = None, provider: Optional[str] = None
    ) -> CoachingPrompt:
        """
        Build the coaching prompt for a user message.

        A decision ID that does not exist is ignored and the prompt carries no
        decision context.

        Raises:
            CoachingServiceError: If the message is empty
        """
        if not message or not message.strip():
            raise CoachingServiceError("Message is required")

        selected = resolve_provider(provider, default=self.default_provider)

        context = ""
        if decision_id is not None:
            decision = self.judgments.decisions.get_decision(decision_id)
            if decision is not None:
                variance = self.judgments.get_variance(decision_id)
                attachments = self.attachments.list_attachments(decision_id)
                context = build_decision_context(decision, variance, attachments, excerpt_chars=self.excerpt_chars)
            else:
                logger.info(f"Coaching context requested for unknown decision {decision_id}")

        return CoachingPrompt(provider=selected, system_prompt=build_system_prompt(context), user_message=message)

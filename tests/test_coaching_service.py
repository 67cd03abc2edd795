"""
Coaching Service Tests

Provider resolution and prompt context assembly.
"""

import pytest

from src.core.variance_engine import calculate_variance
from src.services.attachment_service import AttachmentService
from src.services.coaching_service import (
    COACH_PERSONA,
    CoachingService,
    CoachingServiceError,
    build_decision_context,
    build_system_prompt,
    list_providers,
    resolve_provider,
)
from src.services.decision_service import DecisionService
from src.services.judgment_service import JudgmentService


@pytest.fixture
def decision(db_session):
    return DecisionService(db_session).create_decision(
        title="Q4 Budget",
        description="Allocate the discretionary budget",
        category="Strategy",
        author_id="alice",
        status="open",
    )


class TestProviders:
    def test_catalogue(self):
        assert [(p.id, p.name, p.model) for p in list_providers()] == [
            ("openai", "OpenAI", "gpt-5.2"),
            ("claude", "Claude", "claude-sonnet-4-5"),
            ("gemini", "Gemini", "gemini-2.5-flash"),
        ]

    @pytest.mark.parametrize("requested, expected", [("claude", "claude"), ("GEMINI", "gemini"), ("openai", "openai")])
    def test_known(self, requested, expected):
        assert resolve_provider(requested).id == expected

    @pytest.mark.parametrize("requested", [None, "", "llama", "gpt"])
    def test_fallback_to_openai(self, requested):
        assert resolve_provider(requested).id == "openai"

    def test_configured_default(self):
        assert resolve_provider("unknown", default="gemini").id == "gemini"


class TestContext:
    def test_context_carries_noise_summary(self, decision):
        context = build_decision_context(decision, calculate_variance([1, 10, 1, 10]))
        assert 'Decision context: "Q4 Budget" - Allocate the discretionary budget.' in context
        assert "Category: Strategy. Status: open." in context
        assert "4 judgments submitted." in context
        assert "Mean score: 5.5, Std Dev: 4.5, High noise: true." in context

    def test_quiet_decision(self, decision):
        context = build_decision_context(decision, calculate_variance([]))
        assert "0 judgments submitted." in context
        assert "High noise: false." in context
        assert "Attached documents" not in context

    def test_system_prompt_without_context(self):
        assert build_system_prompt() == COACH_PERSONA


class TestBuildPrompt:
    def test_empty_message(self, db_session):
        with pytest.raises(CoachingServiceError, match="Message is required"):
            CoachingService(db_session).build_prompt("   ")

    def test_without_decision(self, db_session):
        prompt = CoachingService(db_session).build_prompt("How do I avoid anchoring?", provider="claude")
        assert prompt.provider.id == "claude"
        assert prompt.system_prompt == COACH_PERSONA
        assert prompt.user_message == "How do I avoid anchoring?"

    def test_unknown_decision_ignored(self, db_session):
        prompt = CoachingService(db_session).build_prompt("Help", decision_id=9999)
        assert prompt.system_prompt == COACH_PERSONA

    def test_with_decision_and_attachments(self, db_session, decision):
        judgments = JudgmentService(db_session)
        judgments.submit_judgment(decision.id, "u1", 2, "weak")
        judgments.submit_judgment(decision.id, "u2", 9, "strong")

        attachments = AttachmentService(db_session)
        attachments.create_attachment(
            decision_id=decision.id,
            user_id="alice",
            file_name="forecast.txt",
            file_type="text/plain",
            file_size=100,
            object_path="/objects/uploads/f1",
            extracted_text="R" * 5000,
        )
        attachments.create_attachment(
            decision_id=decision.id,
            user_id="alice",
            file_name="photo.png",
            file_type="image/png",
            file_size=100,
            object_path="/objects/uploads/f2",
        )

        prompt = CoachingService(db_session, excerpt_chars=3000).build_prompt("What are we missing?", decision.id)

        assert prompt.system_prompt.startswith(COACH_PERSONA)
        assert "2 judgments submitted." in prompt.system_prompt
        assert "High noise: true." in prompt.system_prompt
        assert "\n\nAttached documents:\n[forecast.txt]: " in prompt.system_prompt
        assert "R" * 3000 in prompt.system_prompt
        assert "R" * 3001 not in prompt.system_prompt
        assert "photo.png" not in prompt.system_prompt

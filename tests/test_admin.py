"""
Admin Tests

Audit trail listing, decision analytics and the dashboard page.
"""

import pytest

from src.models import AuditAction
from src.services.audit_service import AuditService
from src.services.decision_service import DecisionService
from src.services.judgment_service import JudgmentService


@pytest.fixture
def seeded(db_session):
    """Two decisions: one polarized (high noise), one in agreement"""
    decisions = DecisionService(db_session)
    judgments = JudgmentService(db_session)

    noisy = decisions.create_decision("Enter market B", "Expansion", "Strategy", author_id="alice", status="open")
    calm = decisions.create_decision("Hire engineer", "Backfill", "Hiring", author_id="alice", status="open")

    for user, score in [("u1", 1), ("u2", 10), ("u3", 1), ("u4", 10)]:
        judgments.submit_judgment(noisy.id, user, score, "r")
    for user, score in [("u1", 5), ("u2", 6)]:
        judgments.submit_judgment(calm.id, user, score, "r")
    decisions.update_decision(calm.id, {"status": "closed"})
    judgments.add_comment(noisy.id, "u1", "Why so far apart?")

    return {"noisy": noisy, "calm": calm}


class TestAuditService:
    def test_logs_chronological(self, db_session, seeded):
        logs = AuditService(db_session).list_logs()
        assert logs[0].action == AuditAction.DECISION_CREATED
        assert [log.id for log in logs] == sorted(log.id for log in logs)

    def test_filters(self, db_session, seeded):
        service = AuditService(db_session)
        submitted = service.list_logs(action=AuditAction.JUDGMENT_SUBMITTED)
        assert len(submitted) == 6
        assert all(log.entity_type == "judgment" for log in submitted)
        assert len(service.list_logs(entity_type="comment")) == 1
        assert len(service.list_logs(user_id="u2")) == 2

    def test_limit_keeps_newest(self, db_session, seeded):
        logs = AuditService(db_session).list_logs(limit=1)
        assert len(logs) == 1
        assert logs[0].action == AuditAction.COMMENT_POSTED

    def test_single_bias_alert(self, db_session, seeded):
        alerts = AuditService(db_session).list_logs(action=AuditAction.BIAS_ALERT)
        assert [a.entity_id for a in alerts] == [seeded["noisy"].id]

    def test_decision_stats(self, db_session, seeded):
        stats = AuditService(db_session).decision_stats()
        assert stats["total_decisions"] == 2
        assert stats["status_counts"] == {"open": 1, "closed": 1}
        assert stats["category_counts"] == {"Strategy": 1, "Hiring": 1}
        assert stats["total_judgments"] == 6
        assert stats["total_comments"] == 1
        assert stats["total_attachments"] == 0
        assert [d["decision_id"] for d in stats["high_noise_decisions"]] == [seeded["noisy"].id]
        assert stats["high_noise_decisions"][0]["variance"].std_dev == 4.5

    def test_stats_threshold(self, db_session, seeded):
        stats = AuditService(db_session).decision_stats(high_noise_threshold=0.1)
        assert len(stats["high_noise_decisions"]) == 2


class TestAdminApi:
    def test_audit_logs(self, client, alice, seeded):
        response = client.get("/api/admin/audit-logs", params={"action": "BIAS_ALERT"}, headers=alice)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["entity_type"] == "decision"
        assert body["items"][0]["user_id"] is None

    def test_audit_logs_limit_validation(self, client, alice):
        assert client.get("/api/admin/audit-logs", params={"limit": 0}, headers=alice).status_code == 422

    def test_stats(self, client, alice, seeded):
        response = client.get("/api/admin/stats", headers=alice)
        assert response.status_code == 200
        body = response.json()
        assert body["total_decisions"] == 2
        assert body["high_noise_threshold"] == 2.0
        noisy = body["high_noise_decisions"]
        assert len(noisy) == 1
        assert noisy[0]["title"] == "Enter market B"
        assert noisy[0]["variance"] == {"count": 4, "mean": 5.5, "stdDev": 4.5, "isHighNoise": True}

    def test_requires_auth(self, client):
        assert client.get("/api/admin/stats").status_code == 401
        assert client.get("/api/admin/audit-logs").status_code == 401
        assert client.get("/admin").status_code == 401

    def test_dashboard_page(self, client, alice, seeded):
        response = client.get("/admin", headers=alice)
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Governance Dashboard" in response.text
        assert "Enter market B" in response.text
        assert "HIGH noise" in response.text

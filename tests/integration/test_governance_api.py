"""
Integration tests for the governance API: full HTTP stack through the
FastAPI app with the real checks and fixtures.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from rule_agent.api.dependencies import get_agent_factory, notice_board
from rule_agent.core.config import RuleAgentConfig
from rule_agent.engine import RuleAgent
from rule_agent.main import app


def _payload(file, **overrides):
    body = {"module": "core", "files": [file.model_dump(mode="json")], "preset": "ci"}
    body.update(overrides)
    return body


class TestGovernanceAPI:
    @pytest.fixture
    def client(self):
        notice_board.clear()
        yield TestClient(app)
        app.dependency_overrides.clear()
        notice_board.clear()

    def test_health(self, client) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "Rule Agent is running."}

    def test_evaluate_returns_full_result(self, client, bad_component) -> None:
        response = client.post("/api/v1/governance/evaluate", json=_payload(bad_component))

        assert response.status_code == 200
        data = response.json()
        assert data["gate_status"] == "fail"
        assert data["passed"] is False
        assert [c["check_name"] for c in data["checks"]] == [
            "Branding & UX Premium",
            "Architecture & Security",
            "Integration & Workflow",
        ]
        assert data["summary"]["error_count"] > 0

    def test_enforce_answers_422(self, client, bad_component) -> None:
        response = client.post("/api/v1/governance/evaluate", json=_payload(bad_component, enforce=True))

        assert response.status_code == 422
        data = response.json()
        assert data["error"] is True
        assert data["code"] == "gate_failed"
        assert data["module"] == "core"
        assert data["details"]["messages"]
        assert data["details"]["result"]["gate_status"] == "fail"

    def test_unknown_preset_answers_400(self, client, bad_component) -> None:
        response = client.post("/api/v1/governance/evaluate", json=_payload(bad_component, preset="yolo"))
        assert response.status_code == 400
        assert response.json()["code"] == "unknown_preset"

    def test_empty_module_rejected(self, client, bad_component) -> None:
        response = client.post("/api/v1/governance/evaluate", json=_payload(bad_component, module=""))
        assert response.status_code == 422

    def test_timeout_answers_504(self, client, bad_component) -> None:
        class SlowCheck:
            name = "Slow"
            family = "style"
            threshold = 80

            async def run(self, context):
                await asyncio.sleep(1)

        def build_agent(preset=None):
            return RuleAgent(RuleAgentConfig(execution_timeout=0.01), checks={"slow": SlowCheck()}, reporters={})

        app.dependency_overrides[get_agent_factory] = lambda: build_agent
        response = client.post("/api/v1/governance/evaluate", json=_payload(bad_component))
        assert response.status_code == 504
        assert response.json()["code"] == "execution_timeout"

    def test_notice_lifecycle(self, client, good_component) -> None:
        response = client.post("/api/v1/governance/evaluate", json=_payload(good_component, preset="development"))
        assert response.status_code == 200

        notices = client.get("/api/v1/governance/notices").json()
        assert [n["module"] for n in notices] == ["core"]
        notice_id = notices[0]["id"]

        banner = client.get("/api/v1/governance/notices/core")
        assert banner.status_code == 200
        assert "text/html" in banner.headers["content-type"]
        assert f'data-notice-id="{notice_id}"' in banner.text

        assert client.delete(f"/api/v1/governance/notices/{notice_id}").json() == {"dismissed": notice_id}
        assert client.delete(f"/api/v1/governance/notices/{notice_id}").status_code == 404
        assert client.get("/api/v1/governance/notices/core").status_code == 404

"""
Tests for the selector ledger REST API.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from selfheal.api import create_app, router


@pytest.fixture
def client(learner):
    """Test client serving the in-memory learner."""
    return TestClient(create_app(learner))


class TestQueryEndpoints:
    """Test reading the ledger."""

    def test_list_elements_empty(self, client):
        response = client.get("/api/selectors")

        assert response.status_code == 200
        assert response.json() == {"elements": {}}

    def test_list_elements(self, client, learner):
        learner.report_result("submitButton", "#a", True)
        learner.report_result("submitButton", "#b", False)

        response = client.get("/api/selectors")

        assert response.json() == {"elements": {"submitButton": 2}}

    def test_best_selector(self, client, learner):
        learner.report_result("submitButton", "#a", False)
        learner.report_result("submitButton", "#b", True)

        response = client.get("/api/selectors/submitButton/best")

        assert response.status_code == 200
        assert response.json() == {"element": "submitButton", "selector": "#b"}

    def test_best_selector_unknown_element(self, client):
        response = client.get("/api/selectors/noSuchElement/best")

        assert response.status_code == 404

    def test_ranked_selectors(self, client, learner):
        learner.report_result("submitButton", "#a", False)
        learner.report_result("submitButton", "#b", True)

        response = client.get("/api/selectors/submitButton/ranked", params={"count": 1})

        assert response.json() == {"element": "submitButton", "selectors": ["#b"]}

    def test_ranked_count_must_be_positive(self, client):
        response = client.get("/api/selectors/submitButton/ranked", params={"count": 0})

        assert response.status_code == 422

    def test_records(self, client, learner):
        learner.report_result("submitButton", "#a", True)
        learner.report_result("submitButton", "#a", False)

        response = client.get("/api/selectors/submitButton/records")

        assert response.status_code == 200
        records = response.json()
        assert len(records) == 1
        assert records[0]["selector"] == "#a"
        assert records[0]["attempts"] == 2
        assert records[0]["successes"] == 1
        assert records[0]["success_rate"] == 0.5

    def test_records_unknown_element(self, client):
        response = client.get("/api/selectors/noSuchElement/records")

        assert response.status_code == 404


class TestReportingEndpoints:
    """Test feeding outcomes through the API."""

    def test_report_result(self, client, learner, memory_store):
        response = client.post(
            "/api/selectors/submitButton/results",
            json={"selector": "#login-submit", "success": True}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["selector"] == "#login-submit"
        assert body["attempts"] == 1
        assert body["success_rate"] == 1.0
        assert learner.get_best_selector("submitButton") == "#login-submit"
        assert memory_store.save_count == 1

    def test_report_result_requires_success_flag(self, client):
        response = client.post("/api/selectors/submitButton/results", json={"selector": "#a"})

        assert response.status_code == 422


class TestNoLearner:
    """Test an app without a learner attached."""

    def test_service_unavailable(self):
        app = FastAPI()
        app.include_router(router)

        response = TestClient(app).get("/api/selectors")

        assert response.status_code == 503

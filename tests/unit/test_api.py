"""
Unit tests for the HTTP API.
"""

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from portfolio_tracker.api.main import app
from portfolio_tracker.core.models import Portfolio
from portfolio_tracker.infrastructure.serialization import serialize_portfolio


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def document(portfolio: Portfolio) -> dict[str, Any]:
    """The sample portfolio as it is stored on disk."""
    return json.loads(serialize_portfolio(portfolio))


class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_should_describe_service(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Portfolio Tracker API"

    def test_should_report_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "healthy"}

    def test_should_document_error_responses(self, client: TestClient) -> None:
        """Test that error statuses reference the shared error schema."""
        paths = client.get("/openapi.json").json()["paths"]

        asset = paths["/api/reports/asset"]["post"]["responses"]
        xirr = paths["/api/analytics/xirr"]["post"]["responses"]
        for responses, status in ((asset, "400"), (asset, "404"), (xirr, "409")):
            schema = responses[status]["content"]["application/json"]["schema"]
            assert schema["$ref"].endswith("/ErrorResponse")


class TestReportEndpoints:
    """Tests for report endpoints."""

    def test_should_return_asset_report(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/asset",
            json={"document": document, "entity_index": 0, "asset_index": 0, "as_of": "2023-06-30"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Fund A"
        assert [row["date"] for row in body["rows"]] == ["2020", "2021", "2022", "2023"]
        assert body["totalRow"]["endUnits"] == -5.0

    def test_should_return_quarterly_asset_report(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/asset",
            json={
                "document": document,
                "entity_index": 1,
                "asset_index": 0,
                "aggregate_by": "quarter",
                "fill_gaps": False,
            },
        )

        assert response.status_code == 200
        assert [row["date"] for row in response.json()["rows"]] == ["2021-Q2"]

    def test_should_return_404_for_unknown_asset(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/asset", json={"document": document, "entity_index": 0, "asset_index": 3}
        )

        assert response.status_code == 404

    def test_should_return_portfolio_report(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/portfolio",
            json={"document": document, "year": 2021, "as_of": "2023-06-30"},
        )

        assert response.status_code == 200
        body = response.json()
        assert [row["assetName"] for row in body["rows"]] == ["Fund A", "Fund B"]
        assert body["totalRow"]["netAssetValueInBaseCurrency"] == pytest.approx(-3100.0)

    def test_should_return_year_range(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/years", json={"document": document, "today": "2023-06-30"}
        )

        assert response.json() == {"years": [2020, 2021, 2022, 2023]}

    def test_should_reject_malformed_document(self, client: TestClient) -> None:
        """Test that structurally invalid documents map to 400."""
        response = client.post("/api/reports/years", json={"document": {"entities": []}})

        assert response.status_code == 400
        assert "baseCurrency" in response.json()["detail"]

    def test_should_accept_date_shaped_text_that_is_no_date(
        self, client: TestClient, document: dict
    ) -> None:
        document["entities"][0]["assets"][0]["investments"][0]["description"] = (
            "2024-02-30T00:00:00.000Z"
        )

        response = client.post("/api/reports/years", json={"document": document})

        assert response.status_code == 200

    def test_should_reject_invalid_request(self, client: TestClient, document: dict) -> None:
        response = client.post(
            "/api/reports/asset",
            json={
                "document": document,
                "entity_index": 0,
                "asset_index": 0,
                "aggregate_by": "week",
            },
        )

        assert response.status_code == 422


class TestXirrEndpoint:
    """Tests for the XIRR endpoint."""

    def test_should_calculate_xirr(self, client: TestClient) -> None:
        response = client.post(
            "/api/analytics/xirr",
            json={
                "cashflows": [
                    {"date": "2021-01-01T00:00:00Z", "amount": -1000},
                    {"date": "2022-01-01T00:00:00Z", "amount": 1100},
                ]
            },
        )

        assert response.status_code == 200
        assert response.json()["rate"] == pytest.approx(0.10, abs=1e-6)
        assert response.json()["flow_count"] == 2

    def test_should_map_invalid_flows_to_422(self, client: TestClient) -> None:
        response = client.post(
            "/api/analytics/xirr",
            json={"cashflows": [{"date": "2021-01-01T00:00:00Z", "amount": -1000}]},
        )

        assert response.status_code == 422
        assert "at least 2" in response.json()["detail"]

    def test_should_map_non_convergence_to_409(self, client: TestClient) -> None:
        response = client.post(
            "/api/analytics/xirr",
            json={
                "cashflows": [
                    {"date": "2021-01-01T00:00:00Z", "amount": 1000},
                    {"date": "2022-01-01T00:00:00Z", "amount": -3000},
                    {"date": "2023-01-01T00:00:00Z", "amount": 3000},
                ]
            },
        )

        assert response.status_code == 409

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Books API and health endpoints."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from src.api.app import create_app
from src.api.dependencies import get_db
from src.api.routes.health import ComponentHealth
from src.infrastructure.database.models import BookSource


@pytest.fixture
def app(mock_db):
    """Create test FastAPI app with a mocked store session."""
    app = create_app()

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


class TestListBooks:
    """Tests for GET /api/v1/books."""

    def test_list_books(self, client, mock_db, sample_book):
        """Test books are listed with name and code."""
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [
            sample_book,
            BookSource(id=2, name="Irodov", code="IRO"),
        ]
        mock_db.execute.return_value = mock_result

        response = client.get("/api/v1/books")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [(b["name"], b["code"]) for b in data] == [
            ("HC Verma Vol 1", "HCV"),
            ("Irodov", "IRO"),
        ]

    def test_store_failure(self, client, mock_db):
        """Test store errors return 500."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        response = client.get("/api/v1/books")

        assert response.status_code == 500
        assert "error" in response.json()


class TestListChapters:
    """Tests for GET /api/v1/chapters."""

    def test_list_chapters(self, client, mock_db, sample_book):
        """Test chapters are listed with their question counts."""
        book_result = MagicMock()
        book_result.scalar_one_or_none.return_value = sample_book
        rows_result = MagicMock()
        rows_result.all.return_value = [
            SimpleNamespace(chapter_name="Kinematics", count=42),
            SimpleNamespace(chapter_name="Optics", count=17),
        ]
        mock_db.execute.side_effect = [book_result, rows_result]

        response = client.get("/api/v1/chapters", params={"bookCode": "HCV"})

        assert response.status_code == 200
        assert response.json() == {
            "data": [
                {"chapter_name": "Kinematics", "count": 42},
                {"chapter_name": "Optics", "count": 17},
            ]
        }

    def test_missing_book_code(self, client, mock_db):
        """Test bookCode is required."""
        response = client.get("/api/v1/chapters")

        assert response.status_code == 400
        assert response.json()["error"] == "Book code is required"
        mock_db.execute.assert_not_called()

    def test_unknown_book(self, client, mock_db):
        """Test an unknown book returns 404."""
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = mock_result

        response = client.get("/api/v1/chapters", params={"bookCode": "NOPE"})

        assert response.status_code == 404
        assert response.json() == {"error": "Book not found"}


class TestHealth:
    """Tests for health endpoints."""

    @patch("src.api.routes.health.check_database", new_callable=AsyncMock)
    def test_health_healthy(self, mock_check, client):
        """Test health reports healthy when the store answers."""
        mock_check.return_value = ComponentHealth(status="healthy", latency_ms=1.5)

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["database"]["status"] == "healthy"
        assert "X-Request-ID" in response.headers

    @patch("src.api.routes.health.check_database", new_callable=AsyncMock)
    def test_readiness_unhealthy(self, mock_check, client):
        """Test readiness is false when the store is unreachable."""
        mock_check.return_value = ComponentHealth(status="unhealthy", message="refused")

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is False

    def test_unknown_route(self, client):
        """Test unknown routes return the error payload."""
        response = client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestMetrics:
    """Tests for the metrics endpoint."""

    def test_metrics_exposes_request_counters(self, client, mock_db):
        """Test handled requests show up in the Prometheus output."""
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db.execute.return_value = mock_result
        client.get("/api/v1/books")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "practice_portal_http_requests_total" in response.text
        assert 'route="/api/v1/books"' in response.text

import pytest
from fastapi.testclient import TestClient

from tagcloud.config import settings
from tagcloud.main import app


@pytest.mark.unit
class TestCors:
    def test_preflight_from_allowed_origin(self, client):
        """Test that the configured origin may call the API with credentials."""
        response = client.options(
            "/api/tags",
            headers={
                "Origin": settings.cors_origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == settings.cors_origin
        assert response.headers["access-control-allow-credentials"] == "true"
        allowed = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "PUT", "DELETE", "OPTIONS"):
            assert method in allowed

    def test_preflight_from_other_origin(self, client):
        """Test that other origins are not granted access."""
        response = client.options(
            "/api/tags",
            headers={"Origin": "http://evil.example.com", "Access-Control-Request-Method": "GET"},
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_from_allowed_origin(self, client):
        """Test that responses carry the allow-origin header."""
        response = client.get("/api/tags", headers={"Origin": settings.cors_origin})
        assert response.headers["access-control-allow-origin"] == settings.cors_origin


@pytest.mark.unit
class TestStartupWithoutDatabase:
    @pytest.fixture
    def unreachable_database(self, tmp_path, monkeypatch, static_dir):
        monkeypatch.setattr(settings, "database_url", f"sqlite:///{tmp_path}/missing/dir/tags.db")

    def test_server_starts_and_reports_errors(self, unreachable_database, caplog):
        """Test that an unreachable database is logged and requests still get answers."""
        with TestClient(app) as client:
            assert "Error connecting to the database" in caplog.text

            response = client.get("/api/tags")
            assert response.status_code == 500
            assert response.json()["error"] == "Server error"
            assert "unable to open database file" in response.json()["details"]

            response = client.get("/test-db")
            assert response.status_code == 500
            assert response.json() == {"success": False, "error": "Database connection failed"}

            assert client.get("/health").status_code == 200


@pytest.mark.unit
class TestUnhandledErrors:
    def test_unexpected_exception_is_hidden(self, static_dir, monkeypatch):
        """Test that unexpected errors return a generic message."""
        from tagcloud.services.tag_service import TagService

        def explode(self):
            raise RuntimeError("/srv/app/secret/path exploded")

        monkeypatch.setattr(TagService, "list_tags", explode)
        with TestClient(app, raise_server_exceptions=False) as raw_client:
            response = raw_client.get("/api/tags")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "secret" not in response.text

"""Tests for the server API."""

import pytest
from fastapi.testclient import TestClient

from wordshield.server import create_app


@pytest.fixture
def client():
    """Create test client."""
    app = create_app()
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["words_loaded"] == 6
        assert data["namespaces"] == ["default"]


class TestFilterEndpoint:
    """Tests for /filter endpoint."""

    def test_filter_with_matches(self, client):
        """Test filter endpoint with matches."""
        response = client.post(
            "/filter",
            json={"text": "双十一在淘宝买东西，也可以在拼&x多x多买。"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["text"] == "双十一在**买东西，也可以在*&x*x*买。"
        assert data["keywords"] == ["淘宝", "拼多多"]
        assert data["count"] == 2
        assert data["all_clear"] is False

    def test_filter_no_matches(self, client):
        """Test filter endpoint with no matches."""
        response = client.post("/filter", json={"text": "今天天气很好"})
        assert response.status_code == 200

        data = response.json()
        assert data["count"] == 0
        assert data["text"] == "今天天气很好"
        assert data["all_clear"] is True

    def test_filter_without_redaction(self, client):
        """Test reporting matches without redacting."""
        response = client.post("/filter", json={"text": "去京东", "redact": False})
        assert response.status_code == 200

        data = response.json()
        assert data["text"] == "去京东"
        assert data["keywords"] == ["京东"]

    def test_filter_missing_text(self, client):
        """Test that the text field is required."""
        response = client.post("/filter", json={})
        assert response.status_code == 422


class TestCheckEndpoint:
    """Tests for /check endpoint."""

    def test_check_clean(self, client):
        """Test check endpoint with clean text."""
        response = client.post("/check", json={"text": "今天天气很好"})
        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_check_flagged(self, client):
        """Test check endpoint with a dictionary word in lower case."""
        response = client.post("/check", json={"text": "this is a test"})
        assert response.status_code == 200
        assert response.json()["ok"] is False


class TestConfiguration:
    """Tests for server configuration."""

    def test_replacement_and_neglect_from_config(self):
        """Test filter settings taken from the config dictionary."""
        client = TestClient(
            create_app({"filter": {"replacement": "#", "neglect_words": ["-"]}})
        )

        response = client.post("/filter", json={"text": "京-东"})
        assert response.json()["text"] == "#-#"

    def test_fold_case_from_config(self, tmp_path):
        """Test loading a custom dictionary with case folding."""
        words = tmp_path / "words.txt"
        words.write_text("secret\n", encoding="utf-8")
        client = TestClient(
            create_app({"dictionary": {"paths": [str(words)], "fold_case": True}})
        )

        response = client.post("/filter", json={"text": "top Secret"})
        data = response.json()
        assert data["text"] == "top ******"
        assert data["keywords"] == ["Secret"]


class TestReloadEndpoint:
    """Tests for /reload endpoint."""

    def test_reload_dictionary(self, client):
        """Test reload endpoint."""
        response = client.post("/reload")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["words_loaded"] == 6

    def test_reload_picks_up_changes(self, tmp_path):
        """Test that reload rebuilds the filter from the files."""
        words = tmp_path / "words.txt"
        words.write_text("京东\n", encoding="utf-8")
        client = TestClient(create_app({"dictionary": {"paths": [str(words)]}}))
        assert client.post("/check", json={"text": "淘宝"}).json()["ok"] is True

        words.write_text("京东\n淘宝\n", encoding="utf-8")
        assert client.post("/reload").json()["words_loaded"] == 2
        assert client.post("/check", json={"text": "淘宝"}).json()["ok"] is False


class TestMetricsEndpoint:
    """Tests for /metrics endpoint."""

    def test_metrics_endpoint(self, client):
        """Test Prometheus metrics endpoint."""
        client.post("/filter", json={"text": "去京东"})

        response = client.get("/metrics")
        assert response.status_code == 200
        assert "wordshield_requests_total" in response.text
        assert "wordshield_keyword_matches_total" in response.text

"""Tests for the JSON API routes."""

from unittest.mock import patch

import pytest

from deepwork.app import create_app


@pytest.fixture
def app(temp_dir):
    """Create a Flask app over a temporary data directory."""
    config_file = temp_dir / "config.yaml"
    config_file.write_text(
        f"""
data_dir: {temp_dir / "data"}
tick_interval: 60
notifications:
  enabled: false
audio:
  enabled: false
"""
    )
    app = create_app(str(config_file))
    app.config["TESTING"] = True
    yield app
    app.extensions["controller"].shutdown()


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def identified(client):
    """A client whose user has already entered a name."""
    client.post("/api/command", json={"input": "neo"})
    return client


class TestSessionRoutes:
    """Tests for /api/session endpoints."""

    def test_get_session(self, client):
        """GET /api/session returns the full snapshot."""
        response = client.get("/api/session")

        assert response.status_code == 200
        data = response.get_json()
        assert data["session"]["phase"] == "WORK"
        assert data["session"]["remaining_seconds"] == 1500
        assert data["session"]["display"] == "25:00"
        assert data["settings"]["work_minutes"] == 25
        assert data["identity"]["username"] is None

    def test_toggle(self, client):
        """POST /api/session/toggle starts and pauses."""
        data = client.post("/api/session/toggle").get_json()
        assert data["changed"] is True
        assert data["session"]["running"] is True

        data = client.post("/api/session/toggle").get_json()
        assert data["session"]["running"] is False

    def test_reset(self, client, app):
        """POST /api/session/reset refills the phase."""
        client.post("/api/session/toggle")
        app.extensions["controller"].tick()

        data = client.post("/api/session/reset").get_json()

        assert data["session"]["running"] is False
        assert data["session"]["remaining_seconds"] == 1500

    def test_skip(self, client):
        """POST /api/session/skip completes the phase."""
        data = client.post("/api/session/skip").get_json()

        assert data["transition"]["from_phase"] == "WORK"
        assert data["transition"]["to_phase"] == "SHORT_BREAK"
        assert data["transition"]["xp_awarded"] == 100
        assert data["session"]["phase"] == "SHORT_BREAK"
        assert data["session"]["remaining_seconds"] == 300


class TestCommandRoute:
    """Tests for POST /api/command."""

    def test_first_input_sets_identity(self, client):
        """The first line becomes the username."""
        data = client.post("/api/command", json={"input": "buy coffee"}).get_json()

        assert data["kind"] == "identity"
        assert data["input"] == ""
        assert client.get("/api/tasks").get_json()["tasks"] == []
        assert client.get("/api/session").get_json()["identity"]["username"] == "buy coffee"

    def test_free_text_adds_task(self, identified):
        """Free text becomes a task."""
        data = identified.post("/api/command", json={"input": "buy coffee"}).get_json()

        assert data["kind"] == "task"
        assert data["task"]["text"] == "buy coffee"

    def test_slash_command(self, identified):
        """Commands report their name and whether they were known."""
        data = identified.post("/api/command", json={"input": "/start"}).get_json()
        assert data["kind"] == "command"
        assert data["command"] == "start"
        assert data["known"] is True

        data = identified.post("/api/command", json={"input": "/warp 9"}).get_json()
        assert data["known"] is False

    def test_missing_input(self, client):
        """A body without input is rejected."""
        assert client.post("/api/command", json={}).status_code == 400

    def test_bad_json(self, client):
        """A malformed body is rejected."""
        response = client.post(
            "/api/command", data="{not json", content_type="application/json"
        )
        assert response.status_code == 400


class TestTaskRoutes:
    """Tests for /api/tasks endpoints."""

    def test_toggle_and_delete(self, identified):
        """Tasks can be toggled and deleted by id."""
        task = identified.post("/api/command", json={"input": "/add ship it"}).get_json()["task"]

        data = identified.post(f"/api/tasks/{task['id']}/toggle").get_json()
        assert data["completed"] is True

        response = identified.delete(f"/api/tasks/{task['id']}")
        assert response.status_code == 200
        assert identified.get("/api/tasks").get_json()["tasks"] == []

    def test_unknown_task_404(self, client):
        """Unknown ids return 404."""
        assert client.post("/api/tasks/1/toggle").status_code == 404
        assert client.delete("/api/tasks/1").status_code == 404


class TestLogRoute:
    """Tests for GET /api/log."""

    def test_get_log(self, client):
        """The log lists entries oldest first with its capacity."""
        data = client.get("/api/log").get_json()

        assert data["capacity"] == 50
        assert data["entries"][0]["message"] == "Terminal initialized."
        assert data["entries"][0]["kind"] == "SYSTEM"

    def test_clear(self, identified):
        """/clear empties the log."""
        identified.post("/api/command", json={"input": "/clear"})
        assert identified.get("/api/log").get_json()["entries"] == []


class TestSettingsRoutes:
    """Tests for /api/settings endpoints."""

    def test_get_settings(self, identified):
        """GET returns timer settings plus username, ambience and volume."""
        data = identified.get("/api/settings").get_json()

        assert data["work_minutes"] == 25
        assert data["username"] == "neo"
        assert data["ambience"] == "NONE"
        assert data["volume"] == 0.5

    def test_update_settings(self, identified):
        """POST coerces values and adjusts an idle timer."""
        data = identified.post(
            "/api/settings",
            json={"work_minutes": "50", "long_break_minutes": "", "ambience": "RAIN"},
        ).get_json()

        assert data["work_minutes"] == 50
        assert data["long_break_minutes"] == 0
        assert data["ambience"] == "RAIN"

        session = identified.get("/api/session").get_json()["session"]
        assert session["remaining_seconds"] == 3000
        log = identified.get("/api/log").get_json()["entries"]
        assert log[-1]["message"] == "Configuration applied. Timer adjusted."

    def test_update_while_running_defers(self, identified):
        """Changes made while running wait for the next cycle."""
        identified.post("/api/session/toggle")
        identified.post("/api/settings", json={"work_minutes": 50})

        session = identified.get("/api/session").get_json()["session"]
        assert session["remaining_seconds"] == 1500

    def test_bad_ambience(self, client):
        """An unknown ambience is rejected."""
        response = client.post("/api/settings", json={"ambience": "WHALES"})
        assert response.status_code == 400

    def test_non_object_body(self, client):
        """The body must be a JSON object."""
        assert client.post("/api/settings", json=[1, 2]).status_code == 400


class TestHelpRoutes:
    """Tests for /api/help endpoints."""

    def test_help_lifecycle(self, identified):
        """/help opens the surface and POST /api/help/close hides it."""
        assert identified.get("/api/help").get_json()["visible"] is False

        identified.post("/api/command", json={"input": "/help"})
        data = identified.get("/api/help").get_json()
        assert data["visible"] is True
        assert any(c["usage"].startswith("/add") for c in data["commands"])

        data = identified.post("/api/help/close").get_json()
        assert data["visible"] is False


class TestNotificationRoutes:
    """Tests for /api/notifications endpoints."""

    def test_get_settings(self, client):
        """GET returns enabled flag and permission."""
        data = client.get("/api/notifications").get_json()

        assert data["enabled"] is False
        assert data["permission"] == "denied"

    def test_enable(self, client):
        """Enabling clears the denial so permission is asked again."""
        data = client.post("/api/notifications", json={"enabled": True}).get_json()

        assert data["enabled"] is True
        assert data["permission"] == "default"

    def test_enable_requires_field(self, client):
        """'enabled' is required."""
        assert client.post("/api/notifications", json={}).status_code == 400

    @patch("deepwork.services.notification_service.shutil.which", return_value=None)
    def test_test_notification_without_notifier(self, mock_which, client):
        """Test notification fails cleanly without a notifier."""
        assert client.post("/api/notifications/test").status_code == 500


class TestEventsRoute:
    """Tests for GET /api/events."""

    def test_sse_headers(self, client):
        """The SSE endpoint streams event-stream content."""
        response = client.get("/api/events", buffered=False)
        try:
            assert response.status_code == 200
            assert response.mimetype == "text/event-stream"
            assert response.headers["Cache-Control"] == "no-cache"
            first = next(response.iter_encoded())
            assert first.startswith(b"event: ")
        finally:
            response.close()

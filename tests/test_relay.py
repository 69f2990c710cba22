"""
Tests for the notification relay and the API-side relay client.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from app.relay.main import app as relay_app
from app.services.notification_service import notify_application_submitted

EVENT = {
    "userId": 7,
    "fullName": "Jane Doe",
    "email": "jane.doe@example.com",
    "course": "MSc Computer Science",
    "university": "University of Toronto",
    "applicationId": 42,
    "documents": [{"document_type": "cv", "file_path": "p1"}],
}


@pytest.fixture
def relay_client():
    return TestClient(relay_app)


def provider_response(status_code=200, body=None):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.json.return_value = body if body is not None else {"id": "email_123"}
    return response


def test_missing_field_returns_400_without_calling_provider(relay_client):
    body = {k: v for k, v in EVENT.items() if k != "email"}

    with patch("app.relay.email_client.requests.post") as post:
        response = relay_client.post("/send-email", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    post.assert_not_called()


def test_empty_required_field_returns_400(relay_client):
    with patch("app.relay.email_client.requests.post") as post:
        response = relay_client.post("/send-email", json={**EVENT, "fullName": ""})

    assert response.status_code == 400
    post.assert_not_called()


def test_zero_and_null_required_fields_count_as_missing(relay_client):
    with patch("app.relay.email_client.requests.post") as post:
        zero_id = relay_client.post("/send-email", json={**EVENT, "userId": 0})
        null_course = relay_client.post("/send-email", json={**EVENT, "course": None})

    assert zero_id.status_code == 400
    assert zero_id.json() == {"error": "Missing required fields"}
    assert null_course.status_code == 400
    post.assert_not_called()


def test_numeric_text_fields_are_accepted(relay_client):
    with patch("app.relay.email_client.requests.post", return_value=provider_response()) as post:
        response = relay_client.post("/send-email", json={**EVENT, "fullName": 123, "documents": None})

    assert response.status_code == 200
    assert post.call_args.kwargs["json"]["subject"] == "New Application Submitted - 123"


def test_malformed_body_is_reported_as_invalid(relay_client):
    with patch("app.relay.email_client.requests.post") as post:
        response = relay_client.post("/send-email", json={**EVENT, "documents": "cv"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}
    post.assert_not_called()


def test_valid_event_sends_one_email(relay_client):
    with patch("app.relay.email_client.requests.post", return_value=provider_response()) as post:
        response = relay_client.post("/send-email", json=EVENT)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Email sent successfully"}

    post.assert_called_once()
    email = post.call_args.kwargs["json"]
    assert email["subject"] == "New Application Submitted - Jane Doe"
    assert "- cv: p1" in email["html"]
    assert "University of Toronto" in email["html"]
    assert post.call_args.kwargs["headers"]["Authorization"].startswith("Bearer ")
    assert post.call_args.kwargs["timeout"] > 0


def test_event_without_documents_is_accepted(relay_client):
    body = {k: v for k, v in EVENT.items() if k != "documents"}

    with patch("app.relay.email_client.requests.post", return_value=provider_response()):
        response = relay_client.post("/send-email", json=body)

    assert response.status_code == 200


def test_provider_error_returns_500_with_error_body(relay_client):
    failure = provider_response(422, {"message": "Invalid `to` field"})

    with patch("app.relay.email_client.requests.post", return_value=failure):
        response = relay_client.post("/send-email", json=EVENT)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": {"message": "Invalid `to` field"}}


def test_unreachable_provider_returns_500(relay_client):
    with patch("app.relay.email_client.requests.post", side_effect=requests.ConnectionError("connection refused")):
        response = relay_client.post("/send-email", json=EVENT)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "connection refused" in response.json()["error"]


def test_relay_health(relay_client):
    assert relay_client.get("/health").json()["status"] == "ok"


def test_notify_skips_when_relay_not_configured():
    with patch("app.core.config.NOTIFY_RELAY_URL", None), \
            patch("app.services.notification_service.requests.post") as post:
        assert notify_application_submitted(EVENT) is False
    post.assert_not_called()


def test_notify_posts_event_to_relay():
    with patch("app.services.notification_service.requests.post") as post:
        assert notify_application_submitted(EVENT, relay_url="http://relay:5000/") is True

    post.assert_called_once()
    assert post.call_args.args[0] == "http://relay:5000/send-email"
    assert post.call_args.kwargs["json"] == EVENT


def test_notify_failure_is_swallowed():
    with patch("app.services.notification_service.requests.post", side_effect=requests.Timeout("timed out")):
        assert notify_application_submitted(EVENT, relay_url="http://relay:5000") is False

"""
Tests for log setup and log payload redaction.
"""
import logging

import pytest

from app.core.logging_config import sanitize_log_data, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_outbound_email_payload_is_redacted():
    email = {
        "from": "admin@yourdomain.com",
        "to": "admin@yourdomain.com",
        "subject": "New Application Submitted - Jane Doe",
        "html": "<h2>New Application Submission</h2>",
        "headers": {"Authorization": "Bearer re_123"},
    }

    sanitized = sanitize_log_data(email)

    assert sanitized["subject"] == email["subject"]
    assert sanitized["html"] == "<35 chars>"
    assert sanitized["headers"]["Authorization"] == "***REDACTED***"
    assert email["headers"]["Authorization"] == "Bearer re_123"


def test_lists_of_dicts_are_sanitized():
    sanitized = sanitize_log_data({"documents": [{"document_type": "cv", "api_key": "x"}, "plain"]})
    assert sanitized["documents"] == [{"document_type": "cv", "api_key": "***REDACTED***"}, "plain"]


def test_setup_logging_writes_to_rotating_file(tmp_path, restore_root_logger):
    setup_logging("debug", log_file="relay.log", log_dir=str(tmp_path / "logs"))

    logging.getLogger("app.relay.main").info("relay started")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.WARNING
    assert "relay started" in (tmp_path / "logs" / "relay.log").read_text()

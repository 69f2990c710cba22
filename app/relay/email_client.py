"""
Formatting and delivery of application-submitted emails through the provider API.
"""
import json
import logging
from html import escape
from typing import Any, Dict, Tuple

import requests

from app.core import config
from app.core.logging_config import sanitize_log_data
from app.relay.schemas import SendEmailRequest

logger = logging.getLogger(__name__)


def document_lines(request: SendEmailRequest) -> str:
    return "\n".join(f"- {doc.document_type}: {doc.file_path}" for doc in request.documents or [])


def build_email(request: SendEmailRequest) -> Dict[str, str]:
    """Provider payload: sender, recipient, subject and an HTML summary."""
    fields = [
        ("User ID", request.userId),
        ("Full Name", request.fullName),
        ("Email", request.email),
        ("University", request.university),
        ("Course", request.course),
        ("Application ID", request.applicationId),
    ]
    rows = "\n".join(f"<p><strong>{label}:</strong> {escape(str(value))}</p>" for label, value in fields)
    html = (
        "<h2>New Application Submission</h2>\n"
        f"{rows}\n"
        "<h3>Documents:</h3>\n"
        f"<pre>{escape(document_lines(request))}</pre>"
    )
    return {
        "from": config.EMAIL_FROM,
        "to": config.EMAIL_TO,
        "subject": f"New Application Submitted - {request.fullName}",
        "html": html,
    }


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def send_email(email: Dict[str, str]) -> Tuple[bool, Any]:
    """
    Forward one email to the provider. No retry.

    Returns:
        (True, provider body) on success, (False, provider error or exception message) on failure
    """
    logger.info(f"Sending email with data: {json.dumps(sanitize_log_data(email))}")
    try:
        response = requests.post(
            config.EMAIL_API_URL,
            json=email,
            headers={
                "Authorization": f"Bearer {config.RESEND_API_KEY}",
                "Content-Type": "application/json",
            },
            timeout=config.RELAY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"Email provider unreachable: {e}")
        return False, str(e)

    if not response.ok:
        error = _error_body(response)
        logger.error(f"Email provider error: status={response.status_code}, error={error}")
        return False, error

    body = _error_body(response)
    logger.info(f"Email sent successfully: {body}")
    return True, body

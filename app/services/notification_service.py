"""
Client side of the notification relay.

After a completed submission the API posts the application summary to the
relay. Failures are logged and never affect the submission itself.
"""
import logging
from typing import Any, Dict, Optional

import requests

from app.core import config
from app.services.submission_service import SubmissionResult

logger = logging.getLogger(__name__)


def build_relay_payload(result: SubmissionResult, user, course) -> Dict[str, Any]:
    application = result.application
    profile = user.profile
    return {
        "userId": user.id,
        "fullName": profile.full_name if profile else user.email,
        "email": user.email,
        "course": course.name,
        "university": course.university.name if course.university else str(course.university_id),
        "applicationId": application.id,
        "documents": [
            {"document_type": doc.document_type, "file_path": doc.file_path}
            for doc in result.documents
        ],
    }


def notify_application_submitted(payload: Dict[str, Any], relay_url: Optional[str] = None) -> bool:
    relay_url = relay_url or config.NOTIFY_RELAY_URL
    if not relay_url:
        logger.debug("NOTIFY_RELAY_URL not configured - skipping notification")
        return False

    try:
        response = requests.post(
            f"{relay_url.rstrip('/')}/send-email",
            json=payload,
            timeout=config.RELAY_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error sending email: application_id={payload.get('applicationId')}, error={e}")
        return False

    logger.info(f"Email sent successfully: application_id={payload.get('applicationId')}")
    return True

"""
Notification relay: receives application-submitted events and forwards them
to the email provider.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.relay.email_client import build_email, send_email
from app.relay.schemas import SendEmailRequest

logger = logging.getLogger(__name__)

app = FastAPI(title="UniSearch Notification Relay")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Invalid request body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.post("/send-email")
def send_application_email(payload: SendEmailRequest):
    missing = payload.missing_fields()
    if missing:
        logger.error(f"Missing required fields: {missing}")
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    ok, detail = send_email(build_email(payload))
    if not ok:
        return JSONResponse(status_code=500, content={"success": False, "error": detail})
    return {"success": True, "message": "Email sent successfully"}


@app.get("/health")
def health():
    return {"status": "ok", "service": "UniSearch Notification Relay"}

"""
Run the notification relay on $PORT.
Run: python -m scripts.run_relay
"""
import uvicorn

from app.core import config
from app.core.logging_config import setup_logging


if __name__ == "__main__":
    setup_logging(config.LOG_LEVEL, log_file="relay.log")
    uvicorn.run("app.relay.main:app", host="0.0.0.0", port=config.PORT)

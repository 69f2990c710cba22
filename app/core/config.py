import os

from dotenv import load_dotenv

load_dotenv()

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./unisearch.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
ADMIN_EMAILS = [
    e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()
]

# ✅ Object storage (S3-compatible)
STORAGE_ENDPOINT_URL = os.getenv("STORAGE_ENDPOINT_URL")
STORAGE_ACCESS_KEY = os.getenv("STORAGE_ACCESS_KEY")
STORAGE_SECRET_KEY = os.getenv("STORAGE_SECRET_KEY")
STORAGE_REGION = os.getenv("STORAGE_REGION", "us-east-1")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "applications")
UPLOAD_TIMEOUT_SECONDS = int(os.getenv("UPLOAD_TIMEOUT_SECONDS", "30"))
UPLOAD_MAX_WORKERS = int(os.getenv("UPLOAD_MAX_WORKERS", "6"))

# ✅ Notification relay
NOTIFY_RELAY_URL = os.getenv("NOTIFY_RELAY_URL")
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_API_URL = os.getenv("EMAIL_API_URL", "https://api.resend.com/emails")
EMAIL_FROM = os.getenv("EMAIL_FROM", "admin@yourdomain.com")
EMAIL_TO = os.getenv("EMAIL_TO", "admin@yourdomain.com")
RELAY_TIMEOUT_SECONDS = int(os.getenv("RELAY_TIMEOUT_SECONDS", "10"))
PORT = int(os.getenv("PORT", "5000"))

# ✅ Web
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]

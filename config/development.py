import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "eventcheck_db"),
}

# Local mail catcher (e.g. MailHog) by default.
SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", "localhost"),
    "port": int(os.getenv("SMTP_PORT", "1025")),
    "username": os.getenv("SMTP_USERNAME", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "from_email": os.getenv("SMTP_FROM", "no-reply@eventcheck.local"),
    "from_name": os.getenv("SMTP_FROM_NAME", "EventCheck"),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "0"))),
}

DELIVERY_TIMEOUT_SECONDS = float(os.getenv("DELIVERY_TIMEOUT_SECONDS", "15"))
QR_IMAGE_SIZE = int(os.getenv("QR_IMAGE_SIZE", "256"))
CSV_FIRST_ERROR_ONLY = bool(int(os.getenv("CSV_FIRST_ERROR_ONLY", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

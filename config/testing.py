import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "eventcheck_test"),
}

SMTP_CONFIG = {
    "host": "localhost",
    "port": 1025,
    "username": "",
    "password": "",
    "from_email": "test@eventcheck.local",
    "use_tls": False,
}

DELIVERY_TIMEOUT_SECONDS = 2.0
QR_IMAGE_SIZE = 256
CSV_FIRST_ERROR_ONLY = False

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False

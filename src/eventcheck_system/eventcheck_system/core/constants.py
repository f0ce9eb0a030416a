"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

REQUIRED_CSV_COLUMNS = ("name", "email", "phone")

TOKEN_BYTES = 16
TOKEN_LENGTH = TOKEN_BYTES * 2
SCANNER_PIN_LENGTH = 4

QR_IMAGE_SIZE = 256
RECENT_CHECKINS_LIMIT = 10
DEFAULT_DELIVERY_TIMEOUT_SECONDS = 15

# Column widths of participants.name / email / phone in database/schema.sql.
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 50

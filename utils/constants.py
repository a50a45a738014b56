"""
utils/constants.py

Purpose: Centralized static values

- Gateway endpoints and result codes
- Recipient and message limits
- All caller-facing error messages

(Prevents hardcoding across the codebase)
"""

SERVICE_NAME = "BulkSMSBD Proxy"
SERVICE_VERSION = "1.0.0"

# ============================================================
# GATEWAY
# ============================================================

GATEWAY_BALANCE_PATH = "getBalanceApi"
GATEWAY_SEND_PATH = "smsapi"

GATEWAY_SUCCESS_CODE = "202"

GATEWAY_CODE_MESSAGES = {
    "202": "SMS Submitted Successfully",
    "1001": "Invalid Number",
    "1002": "Sender ID not correct/disabled",
    "1007": "Balance Insufficient",
    "1032": "IP Not whitelisted. Please contact BulkSMSBD to whitelist your server IP address.",
}

# ============================================================
# RECIPIENTS
# ============================================================

COUNTRY_CODE = "88"
MIN_NUMBER_DIGITS = 10
MAX_BULK_COUNT = 100

# ============================================================
# MESSAGE ENCODING
# ============================================================

MAX_ASCII_CODE_POINT = 127

TEXT_TYPE = "text"
UNICODE_TYPE = "unicode"

TEXT_CHAR_LIMIT = 160
UNICODE_CHAR_LIMIT = 70

ENCODING_LABELS = {
    TEXT_TYPE: "plain text",
    UNICODE_TYPE: "Unicode",
}

# Bulk sends travel as query parameters; keep the URL under common server limits
MAX_REQUEST_SIZE = 2000
REQUEST_OVERHEAD = 200
UNICODE_SIZE_FACTOR = 3

# ============================================================
# ERROR MESSAGES
# ============================================================

ERROR_SINGLE_FIELDS_REQUIRED = "Number and message are required"
ERROR_BULK_FIELDS_REQUIRED = "Numbers (array) and message are required"
ERROR_BULK_EMPTY = "Numbers array cannot be empty"
ERROR_BULK_TOO_MANY = "Maximum {limit} numbers allowed per bulk request. Received {count} numbers."
ERROR_NO_VALID_NUMBERS = "No valid phone numbers found in the array"
ERROR_MESSAGE_TOO_LONG = "Message too long. Maximum {limit} characters allowed for {encoding} messages. Received {length}."
ERROR_REQUEST_TOO_LARGE = "Request too large. Reduce number of recipients or message length."
ERROR_API_KEY_MISSING = "BULKSMS_API_KEY is not configured"

# ============================================================
# TRANSPORT ERRORS
# ============================================================

TRANSPORT_CONNECTION_RESET = "Connection reset by the SMS gateway. Please try again."
TRANSPORT_TIMEOUT = "Request to the SMS gateway timed out or was aborted."
TRANSPORT_UNREACHABLE = "SMS gateway host could not be reached (DNS lookup or connection failed)."
TRANSPORT_HTTP_STATUS = "SMS gateway responded with HTTP {status_code} {reason}"
TRANSPORT_NO_RESPONSE = "Request was sent but no response was received from the SMS gateway."
TRANSPORT_UNKNOWN = "Unknown error while contacting the SMS gateway."

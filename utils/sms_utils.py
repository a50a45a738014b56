"""
utils/sms_utils.py

Purpose: Recipient and message preparation

- Normalizes phone numbers to the 88-prefixed international form
- Classifies message encoding (text vs Unicode) and its character budget
- Estimates the size of an outbound bulk request
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from utils.constants import (
    COUNTRY_CODE,
    MIN_NUMBER_DIGITS,
    MAX_ASCII_CODE_POINT,
    TEXT_TYPE,
    UNICODE_TYPE,
    TEXT_CHAR_LIMIT,
    UNICODE_CHAR_LIMIT,
    ENCODING_LABELS,
    REQUEST_OVERHEAD,
    UNICODE_SIZE_FACTOR,
)

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class MessageEncoding:
    """Encoding decision for a message body."""
    type: str
    limit: int
    is_unicode: bool

    @property
    def label(self) -> str:
        return ENCODING_LABELS[self.type]


TEXT_ENCODING = MessageEncoding(type=TEXT_TYPE, limit=TEXT_CHAR_LIMIT, is_unicode=False)
UNICODE_ENCODING = MessageEncoding(type=UNICODE_TYPE, limit=UNICODE_CHAR_LIMIT, is_unicode=True)


def clean_number(raw: Any) -> str:
    """Strips every non-digit character from the string form of `raw`."""
    return _NON_DIGITS.sub("", str(raw))


def add_country_code(digits: str) -> str:
    """
    Prefixes the country code unless the number already carries it.

    A local number with a leading zero keeps the zero:
    "01712345678" becomes "8801712345678".
    """
    if digits.startswith("0"):
        return COUNTRY_CODE + digits
    if not digits.startswith(COUNTRY_CODE):
        return COUNTRY_CODE + digits
    return digits


def normalize_number(raw: Any) -> str:
    """
    Normalizes a single-send recipient.

    No minimum length is enforced here, unlike normalize_bulk_number().

    Args:
        raw: Number as received (string or number)

    Returns:
        Digit string prefixed with the country code
    """
    return add_country_code(clean_number(raw))


def normalize_bulk_number(raw: Any) -> Optional[str]:
    """
    Normalizes a bulk-send recipient.

    Args:
        raw: Entry from the numbers array (may be null or empty)

    Returns:
        Normalized number, or None if the entry is empty or has
        fewer than MIN_NUMBER_DIGITS digits after cleaning
    """
    if not raw:
        return None

    digits = clean_number(raw)
    if len(digits) < MIN_NUMBER_DIGITS:
        return None

    return add_country_code(digits)


def normalize_bulk_numbers(raw_numbers: List[Any]) -> Tuple[List[str], int]:
    """
    Normalizes every bulk entry and drops the invalid ones.

    Returns:
        (valid numbers in input order, count of dropped entries)
    """
    valid = []
    for raw in raw_numbers:
        number = normalize_bulk_number(raw)
        if number is not None:
            valid.append(number)
    return valid, len(raw_numbers) - len(valid)


def classify_message(message: str) -> MessageEncoding:
    """
    Picks the gateway message type for `message`.

    Any code point above 127 forces Unicode (70 chars),
    otherwise plain text (160 chars).
    """
    if any(ord(char) > MAX_ASCII_CODE_POINT for char in message):
        return UNICODE_ENCODING
    return TEXT_ENCODING


def estimate_request_size(numbers_string: str, message: str, encoding: MessageEncoding) -> int:
    """
    Rough size of the outbound query string for a bulk send.

    Unicode text is counted three times over for its percent-encoded form.
    """
    message_size = len(message) * UNICODE_SIZE_FACTOR if encoding.is_unicode else len(message)
    return len(numbers_string) + message_size + REQUEST_OVERHEAD

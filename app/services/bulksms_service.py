"""
app/services/bulksms_service.py

Purpose: BulkSMSBD gateway integration

- Validates and normalizes send requests before forwarding
- Issues exactly one outbound call per operation (no retries)
- Interprets gateway replies into a uniform result
- Translates network failures into readable transport errors
"""

import asyncio
import errno
import socket
import httpx
from typing import Any, Optional

from app.core.config import Settings, settings
from app.core.exceptions import ValidationError, TransportError, ConfigurationError
from app.core.logging import get_logger, log_context
from app.schemas.gateway import parse_gateway_reply
from app.schemas.sms import SendSmsResponse, BulkSendSmsResponse, BalanceResponse
from utils.sms_utils import (
    classify_message,
    estimate_request_size,
    normalize_number,
    normalize_bulk_numbers,
    MessageEncoding,
)
from utils.constants import (
    GATEWAY_BALANCE_PATH,
    GATEWAY_SEND_PATH,
    MAX_BULK_COUNT,
    MAX_REQUEST_SIZE,
    ERROR_SINGLE_FIELDS_REQUIRED,
    ERROR_BULK_FIELDS_REQUIRED,
    ERROR_BULK_EMPTY,
    ERROR_BULK_TOO_MANY,
    ERROR_NO_VALID_NUMBERS,
    ERROR_MESSAGE_TOO_LONG,
    ERROR_REQUEST_TOO_LARGE,
    ERROR_API_KEY_MISSING,
    TRANSPORT_CONNECTION_RESET,
    TRANSPORT_TIMEOUT,
    TRANSPORT_UNREACHABLE,
    TRANSPORT_HTTP_STATUS,
    TRANSPORT_NO_RESPONSE,
    TRANSPORT_UNKNOWN,
)

logger = get_logger(__name__)


def _exception_chain(exc: BaseException):
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_connection_reset(exc: Exception) -> bool:
    for item in _exception_chain(exc):
        if isinstance(item, ConnectionResetError):
            return True
        if isinstance(item, OSError) and item.errno == errno.ECONNRESET:
            return True
    return isinstance(exc, httpx.NetworkError) and "reset" in str(exc).lower()


def _is_dns_failure(exc: Exception) -> bool:
    return any(isinstance(item, socket.gaierror) for item in _exception_chain(exc))


def describe_transport_error(exc: Exception) -> str:
    """
    Turns a failed outbound call into a message for the caller.

    Checked in order: connection reset, timeout, unreachable host / DNS,
    non-2xx status, sent without reply, anything else.
    """
    if _is_connection_reset(exc):
        return TRANSPORT_CONNECTION_RESET

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return TRANSPORT_TIMEOUT

    if isinstance(exc, httpx.ConnectError) or _is_dns_failure(exc):
        return TRANSPORT_UNREACHABLE

    if isinstance(exc, httpx.HTTPStatusError):
        return TRANSPORT_HTTP_STATUS.format(
            status_code=exc.response.status_code,
            reason=exc.response.reason_phrase
        ).strip()

    if isinstance(exc, httpx.RequestError):
        return TRANSPORT_NO_RESPONSE

    return str(exc) or TRANSPORT_UNKNOWN


class BulkSmsService:
    """
    Service for sending SMS and checking balance via BulkSMSBD.
    Holds only read-only configuration, so one instance serves all requests.
    """

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport
        self._timeout = config.BULKSMS_TIMEOUT

    @property
    def default_sender_id(self) -> Optional[str]:
        return self._config.BULKSMS_SENDER_ID

    async def _get(self, url: str, query: dict) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(url, params=query)
            response.raise_for_status()
            return response

    async def _request(self, path: str, params: dict) -> Any:
        """
        Sends one GET to the gateway and returns the decoded payload.

        Raises:
            ConfigurationError: If no API key is configured
            TransportError: If the call fails or returns a non-2xx status
        """
        if not self._config.BULKSMS_API_KEY:
            raise ConfigurationError(ERROR_API_KEY_MISSING)

        url = f"{self._config.BULKSMS_BASE_URL}/{path}"
        query = {"api_key": self._config.BULKSMS_API_KEY}
        query.update({key: value for key, value in params.items() if value is not None})

        try:
            # httpx applies its timeout per phase; wait_for caps the whole call
            response = await asyncio.wait_for(self._get(url, query), timeout=self._timeout)
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            message = describe_transport_error(e)
            logger.error(f"Gateway call to {path} failed: {message} ({type(e).__name__})")
            raise TransportError(message) from e

        try:
            return response.json()
        except ValueError:
            return response.text

    async def get_balance(self) -> BalanceResponse:
        """
        Fetches the account balance.

        Returns:
            {"success": True, "data": <gateway payload>}
        """
        with log_context(endpoint="balance"):
            logger.info("Checking gateway balance")
            data = await self._request(GATEWAY_BALANCE_PATH, {})
            return BalanceResponse(success=True, data=data)

    def _check_length(self, message: str) -> MessageEncoding:
        encoding = classify_message(message)
        if len(message) > encoding.limit:
            raise ValidationError(
                ERROR_MESSAGE_TOO_LONG.format(
                    limit=encoding.limit,
                    encoding=encoding.label,
                    length=len(message)
                ),
                details={"type": encoding.type, "limit": encoding.limit, "length": len(message)}
            )
        return encoding

    async def _send(self, number: str, message: str, encoding: MessageEncoding, sender_id: Optional[str]):
        payload = await self._request(GATEWAY_SEND_PATH, {
            "type": encoding.type,
            "number": number,
            "senderid": sender_id or self.default_sender_id,
            "message": message,
        })
        reply = parse_gateway_reply(payload)

        with log_context(gateway_code=reply.code):
            if reply.success:
                logger.info("✅ Gateway accepted message")
            else:
                logger.warning(f"Gateway rejected message: {reply.message}")

        return reply

    async def send_sms(self, number: Any, message: Optional[str], sender_id: Optional[str] = None) -> SendSmsResponse:
        """
        Sends one SMS.

        Args:
            number: Recipient in any local or international form
            message: Message text
            sender_id: Optional sender ID (falls back to the configured one)

        Returns:
            SendSmsResponse; success is False when the gateway rejects the message

        Raises:
            ValidationError: Missing fields or message over its character budget
            TransportError: Gateway unreachable or failed
        """
        if not number or not message:
            raise ValidationError(ERROR_SINGLE_FIELDS_REQUIRED)

        clean_number = normalize_number(number)
        encoding = self._check_length(message)

        with log_context(endpoint="send-sms", recipient_count=1, encoding=encoding.type):
            logger.info(f"📤 Forwarding SMS to {clean_number}")
            reply = await self._send(clean_number, message, encoding, sender_id)

        return SendSmsResponse(
            success=reply.success,
            code=reply.code,
            message=reply.message,
            data=reply.raw
        )

    async def send_bulk_sms(self, numbers: Any, message: Optional[str], sender_id: Optional[str] = None) -> BulkSendSmsResponse:
        """
        Sends the same SMS to up to MAX_BULK_COUNT recipients in one gateway call.

        Entries that are empty or shorter than 10 digits are dropped;
        the response reports how many were sent and how many were invalid.

        Raises:
            ValidationError: Missing fields, empty/oversized list, no valid
                numbers, message too long or request too large
            TransportError: Gateway unreachable or failed
        """
        if numbers is None or not isinstance(numbers, list) or not message:
            raise ValidationError(ERROR_BULK_FIELDS_REQUIRED)

        if len(numbers) == 0:
            raise ValidationError(ERROR_BULK_EMPTY)

        if len(numbers) > MAX_BULK_COUNT:
            raise ValidationError(
                ERROR_BULK_TOO_MANY.format(limit=MAX_BULK_COUNT, count=len(numbers)),
                details={"limit": MAX_BULK_COUNT, "received": len(numbers)}
            )

        valid_numbers, invalid_count = normalize_bulk_numbers(numbers)
        if not valid_numbers:
            raise ValidationError(ERROR_NO_VALID_NUMBERS)

        numbers_string = ",".join(valid_numbers)
        encoding = self._check_length(message)

        estimated_size = estimate_request_size(numbers_string, message, encoding)
        if estimated_size > MAX_REQUEST_SIZE:
            raise ValidationError(
                ERROR_REQUEST_TOO_LARGE,
                details={"estimated_size": estimated_size, "limit": MAX_REQUEST_SIZE}
            )

        with log_context(endpoint="send-sms-bulk", recipient_count=len(valid_numbers), encoding=encoding.type):
            logger.info(f"📤 Forwarding bulk SMS ({invalid_count} invalid numbers dropped)")
            reply = await self._send(numbers_string, message, encoding, sender_id)

        return BulkSendSmsResponse(
            success=reply.success,
            code=reply.code,
            message=reply.message,
            count=len(valid_numbers),
            original_count=len(numbers),
            invalid_count=invalid_count,
            data=reply.raw
        )


# Global BulkSMS service instance
_bulksms_service: Optional[BulkSmsService] = None


def get_bulksms_service() -> BulkSmsService:
    """Get or create the global BulkSMS service instance."""
    global _bulksms_service
    if _bulksms_service is None:
        _bulksms_service = BulkSmsService(settings)
    return _bulksms_service


async def close_bulksms_service():
    """Drop the global service instance."""
    global _bulksms_service
    _bulksms_service = None

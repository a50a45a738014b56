"""
app/schemas/gateway.py

Purpose: BulkSMSBD reply parsing

- The gateway answers with either a bare code ("202") or a JSON object
- The shape is resolved once here into a GatewayReply
- Maps result codes to readable messages
"""

from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

from utils.constants import GATEWAY_CODE_MESSAGES, GATEWAY_SUCCESS_CODE


class GatewayReply(BaseModel):
    """
    Normalized gateway reply.
    `format` records which payload shape it was parsed from.
    """
    format: Literal["bare", "structured"]
    success: bool
    code: str
    message: str
    raw: Any = Field(default=None, description="Payload exactly as returned by the gateway")


def describe_gateway_code(code: str) -> str:
    """Looks up the readable message for a gateway result code."""
    return GATEWAY_CODE_MESSAGES.get(code, f"Error code: {code}")


def _first_code(payload: dict, *keys: str) -> Optional[str]:
    # 0 is a real code; None and "" are not
    for key in keys:
        value = payload.get(key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return None


def _first_non_empty(payload: dict, *keys: str) -> str:
    for key in keys:
        value = payload.get(key)
        if value:
            return str(value)
    return ""


def parse_structured_reply(payload: dict) -> GatewayReply:
    """
    Parses an object reply

    BulkSMSBD format (JSON):
    {
        "response_code": 1032,
        "success_message": "",
        "error_message": "IP Not whitelisted"
    }

    Some deployments answer with "code" / "message" instead.
    """
    code = _first_code(payload, "response_code", "code") or "unknown"
    message = _first_non_empty(payload, "error_message", "message")

    return GatewayReply(
        format="structured",
        success=code == GATEWAY_SUCCESS_CODE,
        code=code,
        message=message or describe_gateway_code(code),
        raw=payload
    )


def parse_bare_reply(payload: Any) -> GatewayReply:
    """
    Parses a plain reply where the whole body is the code, e.g. "1001\\n".
    """
    code = "" if payload is None else str(payload).strip()

    return GatewayReply(
        format="bare",
        success=code == GATEWAY_SUCCESS_CODE,
        code=code,
        message=describe_gateway_code(code),
        raw=payload
    )


def parse_gateway_reply(payload: Any) -> GatewayReply:
    """
    Detects the reply shape and parses it.

    Structured: a JSON object
    Bare: anything else (string, number)
    """
    if isinstance(payload, dict):
        return parse_structured_reply(payload)
    return parse_bare_reply(payload)

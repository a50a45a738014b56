"""
app/schemas/sms.py

Purpose: Request and response bodies for the proxy endpoints

- Fields are optional at the schema level; presence and limits are
  checked by the service so callers get descriptive 400 messages
- Response keys follow the JSON contract (camelCase counts)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union


class SendSmsRequest(BaseModel):
    """Body of POST /api/send-sms"""
    number: Optional[Union[str, int]] = None
    message: Optional[str] = None
    senderid: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "number": "01712345678",
                "message": "Your order has shipped",
                "senderid": "8809601234567"
            }
        }
    )


class BulkSendSmsRequest(BaseModel):
    """Body of POST /api/send-sms-bulk"""
    numbers: Optional[Any] = Field(default=None, description="Array of recipient numbers")
    message: Optional[str] = None
    senderid: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "numbers": ["01712345678", "01812345678"],
                "message": "Office closed tomorrow",
            }
        }
    )


class SendSmsResponse(BaseModel):
    success: bool
    code: str
    message: str
    data: Any = None


class BulkSendSmsResponse(SendSmsResponse):
    count: int
    original_count: int = Field(alias="originalCount")
    invalid_count: int = Field(alias="invalidCount")

    model_config = ConfigDict(populate_by_name=True)


class BalanceResponse(BaseModel):
    success: bool
    data: Any = None

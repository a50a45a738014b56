"""
app/api/sms.py

Purpose: Proxy endpoints

- Balance check, single send and bulk send
- Parses JSON bodies and hands off to the BulkSMS service
- Errors are raised as SmsProxyError and rendered by app.core.errors
"""

from fastapi import APIRouter, Depends

from app.core.logging import get_logger
from app.schemas.sms import (
    SendSmsRequest,
    BulkSendSmsRequest,
    SendSmsResponse,
    BulkSendSmsResponse,
    BalanceResponse,
)
from app.services.bulksms_service import BulkSmsService, get_bulksms_service

logger = get_logger(__name__)
router = APIRouter()


@router.get("/balance", response_model=BalanceResponse)
async def check_balance(service: BulkSmsService = Depends(get_bulksms_service)):
    """
    Returns the gateway account balance as reported by BulkSMSBD.
    """
    return await service.get_balance()


@router.post("/send-sms", response_model=SendSmsResponse)
async def send_sms(
    body: SendSmsRequest,
    service: BulkSmsService = Depends(get_bulksms_service),
):
    """
    Sends one SMS.

    A gateway rejection (invalid number, low balance, ...) is still a 200
    with success=false; only network failures produce a 500.
    """
    return await service.send_sms(body.number, body.message, body.senderid)


@router.post("/send-sms-bulk", response_model=BulkSendSmsResponse)
async def send_sms_bulk(
    body: BulkSendSmsRequest,
    service: BulkSmsService = Depends(get_bulksms_service),
):
    """
    Sends one SMS to up to 100 recipients in a single gateway call.
    """
    return await service.send_bulk_sms(body.numbers, body.message, body.senderid)

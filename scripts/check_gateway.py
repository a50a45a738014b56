"""
Check BulkSMSBD Gateway Configuration

Run this script to verify the gateway credentials are set
and the balance endpoint answers from this machine's IP.

Usage: python scripts/check_gateway.py
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables before settings are read
load_dotenv()

from app.core.config import settings
from app.core.exceptions import SmsProxyError
from app.schemas.gateway import parse_gateway_reply
from app.services.bulksms_service import BulkSmsService


def check_config() -> bool:
    """Print which gateway settings are present"""
    print("=" * 60)
    print("  BulkSMSBD Configuration")
    print("=" * 60 + "\n")

    print(f"API Key: {settings.BULKSMS_API_KEY[:6]}..." if settings.BULKSMS_API_KEY else "API Key: ❌ Not set")
    print(f"Sender ID: {settings.BULKSMS_SENDER_ID or '❌ Not set'}")
    print(f"Base URL: {settings.BULKSMS_BASE_URL}")
    print(f"Timeout: {settings.BULKSMS_TIMEOUT}s\n")

    if not settings.BULKSMS_API_KEY:
        print("⚠️  Please set BULKSMS_API_KEY in the .env file")
        return False

    return True


async def check_balance():
    """Call the balance endpoint once"""
    print("=" * 60)
    print("  Balance Check")
    print("=" * 60 + "\n")

    service = BulkSmsService(settings)

    try:
        result = await service.get_balance()
    except SmsProxyError as e:
        print(f"❌ {e.code}: {e.message}")
        return

    print(f"📥 Gateway replied: {result.data}")

    # Errors such as 1032 come back as a code instead of a balance
    if isinstance(result.data, dict) and ("response_code" in result.data or "code" in result.data):
        reply = parse_gateway_reply(result.data)
        print(f"⚠️  {reply.code}: {reply.message}")


async def main():
    print("\n🧪 BulkSMSBD Proxy Gateway Check\n")

    if not check_config():
        print("\n❌ Configuration check failed. Please fix .env file and try again.")
        return

    await check_balance()
    print("\n" + "=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())

"""Send one SMS through the configured routing, for manual checks.

    python -m sms_delivery.send_test_sms +233201234567 "hello"
"""
import asyncio
import sys
import uuid

from sms_delivery.client import create_sms_client
from sms_delivery.logging import set_log_request
from sms_delivery.types import SendRequest


async def run(to: str, message: str) -> int:
    set_log_request(f"test-sms-{uuid.uuid4().hex[:8]}")
    client = create_sms_client()
    print(f"Configured providers: {', '.join(v.value for v in client.configured_providers) or 'none'}")
    result = await client.send(SendRequest(to=to, message=message))
    if result.success:
        print(f"Sent via {result.provider.value}: id={result.id} cost={result.cost}")
        return 0
    provider = result.provider.value if result.provider else "-"
    print(f"Failed via {provider}: {result.code.value} {result.message} (retryable={result.retryable})")
    return 1


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m sms_delivery.send_test_sms <phone> [message]")
        sys.exit(2)
    sys.exit(asyncio.run(run(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "Test message")))

import pytest

from sms_delivery import send_test_sms
from sms_delivery.client import SMSClient
from sms_delivery.types import (
    ErrorCode, RoutingConfig, RoutingRule, SendFailure, SendSuccess, VendorConfigSet, VendorId,
)


class StubProvider:
    type = VendorId.ZEND

    def __init__(self, result):
        self.result = result

    async def send(self, request):
        return self.result


def stub_client(result):
    routing = RoutingConfig(rules=(RoutingRule("default", VendorId.ZEND),), fallback=VendorId.ZEND)
    return SMSClient(routing, VendorConfigSet(), adapters={VendorId.ZEND: StubProvider(result)})


@pytest.mark.asyncio
async def test_run_reports_success(monkeypatch, capsys):
    client = stub_client(SendSuccess(id="zmsg_1", provider=VendorId.ZEND, cost=0.02))
    monkeypatch.setattr(send_test_sms, "create_sms_client", lambda: client)

    assert await send_test_sms.run("+233201234567", "hi") == 0
    out = capsys.readouterr().out
    assert "Configured providers: zend" in out
    assert "Sent via zend: id=zmsg_1" in out


@pytest.mark.asyncio
async def test_run_reports_failure(monkeypatch, capsys):
    failure = SendFailure(code=ErrorCode.INVALID_RECIPIENT, message="bad number", provider=VendorId.ZEND, retryable=False)
    monkeypatch.setattr(send_test_sms, "create_sms_client", lambda: stub_client(failure))

    assert await send_test_sms.run("+233000", "hi") == 1
    assert "INVALID_RECIPIENT bad number" in capsys.readouterr().out

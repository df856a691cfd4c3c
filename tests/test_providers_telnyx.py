import json

import httpx
import pytest
import respx

from sms_delivery.providers.telnyx import TelnyxProvider
from sms_delivery.types import ErrorCode, SendRequest, TelnyxConfig, VendorId

URL = "https://api.telnyx.com/v2/messages"
REQUEST = SendRequest(to="+14155551212", message="Hello SF")


def make_provider():
    return TelnyxProvider(TelnyxConfig(api_key="telnyx-key", from_number="+15550001111"))


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_send_success_reads_nested_data():
    route = respx.post(URL).mock(return_value=httpx.Response(200, json={"data": {
        "id": "40385f64-5717-4562-b3fc-2c963f66afa6",
        "to": [{"phone_number": "+14155551212", "status": "queued"}],
        "cost": {"amount": "0.0051", "currency": "USD"},
    }}))
    result = await make_provider().send(REQUEST)

    assert result.success is True
    assert result.id == "40385f64-5717-4562-b3fc-2c963f66afa6"
    assert result.cost == pytest.approx(0.0051)
    assert result.provider == VendorId.TELNYX

    req = route.calls.last.request
    assert req.headers["authorization"] == "Bearer telnyx-key"
    assert json.loads(req.content) == {
        "from": "+15550001111", "to": "+14155551212", "text": "Hello SF", "type": "SMS",
    }


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_success_without_cost():
    respx.post(URL).mock(return_value=httpx.Response(200, json={"data": {"id": "m1", "cost": None}}))
    result = await make_provider().send(REQUEST)
    assert result.success is True
    assert result.cost is None


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_error_detail_from_errors_list():
    respx.post(URL).mock(return_value=httpx.Response(400, json={"errors": [
        {"code": "40300", "title": "Invalid parameter", "detail": "The 'to' parameter is invalid"},
    ]}))
    result = await make_provider().send(REQUEST)
    assert result.code == ErrorCode.INVALID_PARAMS
    assert result.message == "The 'to' parameter is invalid"
    assert result.retryable is False


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_5xx_retryable_with_status_detail():
    respx.post(URL).mock(return_value=httpx.Response(502, text="bad gateway"))
    result = await make_provider().send(REQUEST)
    assert result.code == ErrorCode.NETWORK_ERROR
    assert result.message == "HTTP 502"
    assert result.retryable is True


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_403_invalid_key():
    respx.post(URL).mock(return_value=httpx.Response(403, json={"errors": []}))
    result = await make_provider().send(REQUEST)
    assert result.code == ErrorCode.INVALID_API_KEY
    assert result.retryable is False


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_missing_data_is_unknown():
    respx.post(URL).mock(return_value=httpx.Response(200, json={"unexpected": True}))
    result = await make_provider().send(REQUEST)
    assert result.code == ErrorCode.UNKNOWN
    assert result.retryable is True


@pytest.mark.asyncio
@respx.mock
async def test_telnyx_unparseable_cost_is_still_success():
    respx.post(URL).mock(return_value=httpx.Response(200, json={"data": {"id": "m2", "cost": {"amount": "N/A", "currency": "USD"}}}))
    result = await make_provider().send(REQUEST)
    assert result.success is True
    assert result.id == "m2"
    assert result.cost is None

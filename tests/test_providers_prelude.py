import json

import httpx
import pytest
import respx

from sms_delivery.providers.prelude import PreludeProvider
from sms_delivery.types import ErrorCode, PreludeConfig, SendRequest, VendorId

TRANSACTIONAL_URL = "https://api.prelude.dev/v2/transactional"
VERIFICATION_URL = "https://api.prelude.dev/v2/verification"
REQUEST = SendRequest(to="+33612345678", message="Votre colis arrive")


@pytest.mark.asyncio
@respx.mock
async def test_prelude_transactional_with_template():
    route = respx.post(TRANSACTIONAL_URL).mock(return_value=httpx.Response(200, json={"id": "tx_01", "to": "+33612345678"}))
    result = await PreludeProvider(PreludeConfig(api_token="tok", template_id="tpl_9")).send(REQUEST)

    assert result.success is True
    assert result.id == "tx_01"
    assert result.cost is None
    assert result.provider == VendorId.PRELUDE
    req = route.calls.last.request
    assert req.headers["authorization"] == "Bearer tok"
    assert json.loads(req.content) == {
        "template_id": "tpl_9", "to": "+33612345678", "variables": {"message": "Votre colis arrive"},
    }


@pytest.mark.asyncio
@respx.mock
async def test_prelude_without_template_uses_verification():
    transactional = respx.post(TRANSACTIONAL_URL).mock(return_value=httpx.Response(200, json={"id": "x"}))
    verification = respx.post(VERIFICATION_URL).mock(return_value=httpx.Response(200, json={"id": "vrf_01", "status": "success"}))
    result = await PreludeProvider(PreludeConfig(api_token="tok")).send(REQUEST)

    assert result.success is True
    assert result.id == "vrf_01"
    assert not transactional.called
    assert json.loads(verification.calls.last.request.content) == {
        "target": {"type": "phone_number", "value": "+33612345678"},
    }


@pytest.mark.asyncio
@respx.mock
async def test_prelude_429_is_retryable():
    respx.post(TRANSACTIONAL_URL).mock(return_value=httpx.Response(429, json={"message": "Rate limited"}))
    result = await PreludeProvider(PreludeConfig(api_token="tok", template_id="tpl")).send(REQUEST)
    assert result.code == ErrorCode.NETWORK_ERROR
    assert result.message == "Rate limited"
    assert result.retryable is True


@pytest.mark.asyncio
@respx.mock
async def test_prelude_422_invalid_recipient():
    respx.post(VERIFICATION_URL).mock(return_value=httpx.Response(422, json={"code": "invalid_phone_number", "message": "Invalid phone number"}))
    result = await PreludeProvider(PreludeConfig(api_token="tok")).send(REQUEST)
    assert result.code == ErrorCode.INVALID_RECIPIENT
    assert result.retryable is False


@pytest.mark.asyncio
@respx.mock
async def test_prelude_read_timeout_is_retryable():
    respx.post(TRANSACTIONAL_URL).mock(side_effect=httpx.ReadTimeout("read timed out"))
    result = await PreludeProvider(PreludeConfig(api_token="tok", template_id="tpl")).send(REQUEST)
    assert result.code == ErrorCode.TIMEOUT
    assert result.retryable is True

"""Prelude adapter.

Prelude is template-driven: with a template id configured, messages go out as
transactional sends carrying the text in the ``message`` variable. Without one,
the adapter falls back to Prelude's verification flow, which delivers Prelude's
own OTP text to the target number.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from ..types import PreludeConfig, SendRequest, SendResult, SendSuccess, VendorConfigSet, VendorId
from .base import exception_failure, http_failure, safe_json

logger = logging.getLogger("prelude_provider")

PRELUDE_API_BASE = "https://api.prelude.dev/v2"
PRELUDE_TIMEOUT = 30.0


class PreludeProvider:
    type = VendorId.PRELUDE

    def __init__(self, config: PreludeConfig):
        self.api_token = config.api_token
        self.template_id = config.template_id or None

    async def send(self, request: SendRequest) -> SendResult:
        if not self.template_id:
            return await self.send_via_verification(request)
        payload = {
            "template_id": self.template_id,
            "to": request.to,
            "variables": {"message": request.message},
        }
        return await self._post("/transactional", payload, request.to)

    async def send_via_verification(self, request: SendRequest) -> SendResult:
        payload = {"target": {"type": "phone_number", "value": request.to}}
        return await self._post("/verification", payload, request.to)

    async def _post(self, path: str, payload: Dict[str, Any], to: str) -> SendResult:
        headers = {"Authorization": f"Bearer {self.api_token}"}
        try:
            async with httpx.AsyncClient(timeout=PRELUDE_TIMEOUT) as client:
                resp = await client.post(f"{PRELUDE_API_BASE}{path}", json=payload, headers=headers)
            if not resp.is_success:
                body = safe_json(resp)
                detail = body.get('message') if isinstance(body, dict) else None
                logger.error("Prelude API error %s path=%s to=%s", resp.status_code, path, to)
                # Prelude throttling is transient; other vendors treat 429 as final.
                return http_failure(self.type, resp.status_code, detail, retry_on_429=True)
            data = resp.json()
            return SendSuccess(id=str(data['id']), provider=self.type)
        except Exception as e:
            logger.error("Prelude request failed path=%s to=%s: %s", path, to, e.__class__.__name__)
            return exception_failure(self.type, e)


def create_prelude_provider(configs: VendorConfigSet) -> PreludeProvider | None:
    if not configs.prelude:
        return None
    return PreludeProvider(configs.prelude)

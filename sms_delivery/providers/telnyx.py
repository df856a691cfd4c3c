"""Telnyx SMS adapter (international numbers)."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..types import SendRequest, SendResult, SendSuccess, TelnyxConfig, VendorConfigSet, VendorId
from .base import as_float, exception_failure, http_failure, safe_json

logger = logging.getLogger("telnyx_provider")

TELNYX_API_BASE = "https://api.telnyx.com/v2"
TELNYX_TIMEOUT = 15.0


def _error_detail(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    errors = body.get('errors') or []
    if errors and isinstance(errors[0], dict):
        return errors[0].get('detail')
    return None


def _cost_amount(data: dict) -> float | None:
    cost = data.get('cost')
    if not isinstance(cost, dict):
        return None
    return as_float(cost.get('amount'))


class TelnyxProvider:
    type = VendorId.TELNYX

    def __init__(self, config: TelnyxConfig):
        self.config = config

    async def send(self, request: SendRequest) -> SendResult:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "from": self.config.from_number,
            "to": request.to,
            "text": request.message,
            "type": "SMS",
        }
        try:
            async with httpx.AsyncClient(timeout=TELNYX_TIMEOUT) as client:
                resp = await client.post(f"{TELNYX_API_BASE}/messages", json=payload, headers=headers)
            if not resp.is_success:
                detail = _error_detail(safe_json(resp))
                logger.error("Telnyx HTTP error %s to=%s detail=%s", resp.status_code, request.to, detail)
                return http_failure(self.type, resp.status_code, detail)

            data = resp.json()['data']
            return SendSuccess(id=str(data['id']), provider=self.type, cost=_cost_amount(data))
        except Exception as e:
            logger.error("Telnyx request failed to=%s: %s", request.to, e.__class__.__name__)
            return exception_failure(self.type, e)


def create_telnyx_provider(configs: VendorConfigSet) -> TelnyxProvider | None:
    if not configs.telnyx:
        return None
    return TelnyxProvider(configs.telnyx)

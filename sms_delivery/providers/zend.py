from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from ..errors import SMSError
from ..types import ErrorCode, SendRequest, SendResult, SendSuccess, VendorConfigSet, VendorId, ZendConfig
from .base import as_float, exception_failure, http_failure, safe_json

logger = logging.getLogger("zend_provider")

ZEND_API_BASE = "https://api.tryzend.com"
ZEND_TIMEOUT = 15.0

# Statuses Zend can report on an accepted (2xx) request that was nonetheless rejected.
ZEND_FAILURE_STATUSES: Dict[str, ErrorCode] = {
    "rejected": ErrorCode.INVALID_PARAMS,
    "invalid_recipient": ErrorCode.INVALID_RECIPIENT,
    "insufficient_balance": ErrorCode.INSUFFICIENT_BALANCE,
    "sender_not_approved": ErrorCode.SENDER_NOT_APPROVED,
    "failed": ErrorCode.UNKNOWN,
}


def _error_detail(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    return body.get('error') or body.get('message')


class ZendProvider:
    type = VendorId.ZEND

    def __init__(self, config: ZendConfig):
        self.config = config

    async def send(self, request: SendRequest) -> SendResult:
        headers = {"x-api-key": self.config.api_key, "Content-Type": "application/json"}
        payload = {"to": request.to, "body": request.message, "preferred_channels": ["sms"]}
        try:
            async with httpx.AsyncClient(timeout=ZEND_TIMEOUT) as client:
                resp = await client.post(f"{ZEND_API_BASE}/messages", json=payload, headers=headers)
            if not resp.is_success:
                detail = _error_detail(safe_json(resp))
                logger.error("Zend HTTP error %s to=%s detail=%s", resp.status_code, request.to, detail)
                return http_failure(self.type, resp.status_code, detail)

            data = resp.json()
            status = str(data.get('status') or '').lower()
            if status in ZEND_FAILURE_STATUSES:
                code = ZEND_FAILURE_STATUSES[status]
                raise SMSError(code, data.get('message') or f"Zend status {status}", self.type, retryable=False)

            return SendSuccess(id=str(data['id']), provider=self.type, cost=as_float(data.get('estimated_cost')))
        except Exception as e:
            failure = exception_failure(self.type, e)
            logger.error("Zend send failed to=%s code=%s: %s", request.to, failure.code.value, e.__class__.__name__)
            return failure


def create_zend_provider(configs: VendorConfigSet) -> ZendProvider | None:
    if not configs.zend:
        return None
    return ZendProvider(configs.zend)

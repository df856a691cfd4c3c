"""Pilo SMS adapter.

Pilo answers HTTP 200 for most outcomes and reports the real result in a
numeric ``status`` field, so the body has to be checked even on success.
"""
from __future__ import annotations

import logging
import random
import string
import time
from typing import Any, Dict

import httpx

from ..errors import SMSError
from ..types import (
    BalanceInfo,
    BalanceTopup,
    ErrorCode,
    PiloConfig,
    SendRequest,
    SendResult,
    SendSuccess,
    VendorConfigSet,
    VendorId,
)
from .base import as_float, as_int, exception_failure, http_failure, safe_json

logger = logging.getLogger("pilo_provider")

PILO_API_BASE = "https://api.pilosms.com/v1"
PILO_TIMEOUT = 15.0


class PiloResponseCode:
    SUCCESS = 1001
    MISSING_PARAMS = 1002
    INVALID_API_KEY = 1003
    API_KEY_INACTIVE = 1004
    INSUFFICIENT_BALANCE = 1005
    INVALID_NUMBERS = 1006
    SENDER_NOT_APPROVED = 1007


PILO_ERROR_CODES: Dict[int, ErrorCode] = {
    PiloResponseCode.MISSING_PARAMS: ErrorCode.INVALID_PARAMS,
    PiloResponseCode.INVALID_API_KEY: ErrorCode.INVALID_API_KEY,
    PiloResponseCode.API_KEY_INACTIVE: ErrorCode.API_KEY_INACTIVE,
    PiloResponseCode.INSUFFICIENT_BALANCE: ErrorCode.INSUFFICIENT_BALANCE,
    PiloResponseCode.INVALID_NUMBERS: ErrorCode.INVALID_RECIPIENT,
    PiloResponseCode.SENDER_NOT_APPROVED: ErrorCode.SENDER_NOT_APPROVED,
}


def map_pilo_status(status: Any) -> ErrorCode:
    try:
        return PILO_ERROR_CODES.get(int(status), ErrorCode.UNKNOWN)
    except (TypeError, ValueError):
        return ErrorCode.UNKNOWN


def _local_message_id() -> str:
    # Pilo does not return a message id.
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"pilo-{int(time.time() * 1000)}-{suffix}"


class PiloProvider:
    type = VendorId.PILO

    def __init__(self, config: PiloConfig):
        self.config = config

    async def send(self, request: SendRequest) -> SendResult:
        form = {
            "sender": (None, self.config.sender_id.encode("utf-8")),
            "message": (None, request.message.encode("utf-8")),
            "receipients": (None, request.to.encode("utf-8")),
        }
        try:
            async with httpx.AsyncClient(timeout=PILO_TIMEOUT) as client:
                resp = await client.post(
                    f"{PILO_API_BASE}/send-message",
                    params={"apikey": self.config.api_key},
                    files=form,
                )
            if not resp.is_success:
                logger.error("Pilo HTTP error %s to=%s", resp.status_code, request.to)
                return http_failure(self.type, resp.status_code, None)

            data = resp.json()
            status = data.get('status')
            if status == PiloResponseCode.SUCCESS:
                return SendSuccess(id=_local_message_id(), provider=self.type, cost=as_float(data.get('total_cost')))

            code = map_pilo_status(status)
            raise SMSError(code, data.get('detail') or f"Pilo status {status}", self.type, retryable=False)
        except Exception as e:
            failure = exception_failure(self.type, e)
            logger.error("Pilo send failed to=%s code=%s: %s", request.to, failure.code.value, e.__class__.__name__)
            return failure

    async def check_balance(self) -> BalanceInfo | None:
        try:
            async with httpx.AsyncClient(timeout=PILO_TIMEOUT) as client:
                resp = await client.get(f"{PILO_API_BASE}/balance", params={"apikey": self.config.api_key})
        except httpx.HTTPError as e:
            logger.warning("Pilo balance request failed: %s", e.__class__.__name__)
            return None
        if resp.status_code >= 400:
            logger.warning("Pilo balance failed %s", resp.status_code)
            return None
        body = safe_json(resp)
        if not isinstance(body, dict) or body.get('status') != PiloResponseCode.SUCCESS:
            logger.warning("Pilo balance rejected status=%s", body.get('status') if isinstance(body, dict) else None)
            return None
        data = body.get('data') or {}
        if not isinstance(data, dict):
            logger.warning("Pilo balance response has no data object")
            return None
        balance = as_float(data.get('balance') or 0)
        units = as_int(data.get('units') or 0)
        if balance is None or units is None:
            logger.warning("Pilo balance response has non-numeric balance or units")
            return None
        topup = data.get('last_topup')
        return BalanceInfo(
            balance=balance,
            units=units,
            last_topup=BalanceTopup(
                date=str(topup.get('date', '')),
                amount=str(topup.get('amount', '')),
                status=str(topup.get('status', '')),
            ) if isinstance(topup, dict) else None,
        )


def create_pilo_provider(configs: VendorConfigSet) -> PiloProvider | None:
    if not configs.pilo:
        return None
    return PiloProvider(configs.pilo)

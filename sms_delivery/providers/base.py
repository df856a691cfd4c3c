from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from ..errors import SMSError, error_code_for_status, status_is_retryable
from ..types import BalanceInfo, SendFailure, SendRequest, SendResult, VendorConfigSet, VendorId


@runtime_checkable
class SMSProvider(Protocol):
    type: VendorId

    async def send(self, request: SendRequest) -> SendResult: ...


@runtime_checkable
class SupportsBalance(Protocol):
    """Optional capability; check with ``isinstance(provider, SupportsBalance)`` before calling."""

    async def check_balance(self) -> BalanceInfo | None: ...


class ProviderFactory(Protocol):
    def __call__(self, configs: VendorConfigSet) -> SMSProvider | None: ...


def http_failure(provider: VendorId, status: int, detail: str | None, *, retry_on_429: bool = False) -> SendFailure:
    return SendFailure(
        code=error_code_for_status(status),
        message=detail or f"HTTP {status}",
        provider=provider,
        retryable=status_is_retryable(status, retry_on_429=retry_on_429),
    )


def exception_failure(provider: VendorId, exc: BaseException) -> SendFailure:
    return SMSError.from_exception(exc, provider).to_failure()


def safe_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def as_float(val: Any) -> float | None:
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def as_int(val: Any) -> int | None:
    if val is None:
        return None
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


__all__ = ['SMSProvider', 'SupportsBalance', 'ProviderFactory', 'http_failure', 'exception_failure', 'safe_json', 'as_float', 'as_int']

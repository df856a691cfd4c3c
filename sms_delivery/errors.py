from __future__ import annotations

from typing import Optional

import httpx

from .types import ErrorCode, SendFailure, VendorId


class SMSError(Exception):
    """Failure raised inside an adapter; converted to a `SendFailure` before it leaves `send`."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        provider: Optional[VendorId] = None,
        retryable: Optional[bool] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.provider = provider
        # None means: follow the code's taxonomy class.
        self.retryable = code.retryable if retryable is None else retryable

    @classmethod
    def from_exception(cls, exc: BaseException, provider: Optional[VendorId] = None) -> 'SMSError':
        if isinstance(exc, SMSError):
            return exc
        if isinstance(exc, httpx.TimeoutException):
            return cls(ErrorCode.TIMEOUT, str(exc) or "Request timed out", provider)
        if isinstance(exc, httpx.TransportError):
            return cls(ErrorCode.NETWORK_ERROR, str(exc) or exc.__class__.__name__, provider)
        return cls(ErrorCode.UNKNOWN, str(exc) or "Unknown error", provider)

    def to_failure(self) -> SendFailure:
        return SendFailure(code=self.code, message=self.message, provider=self.provider, retryable=self.retryable)


def error_code_for_status(status: int) -> ErrorCode:
    if status in (401, 403):
        return ErrorCode.INVALID_API_KEY
    if status == 400:
        return ErrorCode.INVALID_PARAMS
    if status == 422:
        return ErrorCode.INVALID_RECIPIENT
    if status == 429 or status >= 500:
        return ErrorCode.NETWORK_ERROR
    return ErrorCode.UNKNOWN


def status_is_retryable(status: int, *, retry_on_429: bool = False) -> bool:
    return status >= 500 or (retry_on_429 and status == 429)


__all__ = ['SMSError', 'error_code_for_status', 'status_is_retryable']

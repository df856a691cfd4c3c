"""Shared types for outbound SMS delivery.

Every adapter speaks these shapes: a send attempt always produces a
`SendSuccess` or a `SendFailure`, never an exception.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class VendorId(str, Enum):
    PILO = "pilo"
    ZEND = "zend"
    TELNYX = "telnyx"
    PRELUDE = "prelude"


class ErrorCode(str, Enum):
    # Config
    INVALID_CONFIG = "INVALID_CONFIG"
    PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"

    # Request
    INVALID_PARAMS = "INVALID_PARAMS"
    INVALID_RECIPIENT = "INVALID_RECIPIENT"
    INVALID_SENDER = "INVALID_SENDER"

    # Auth
    INVALID_API_KEY = "INVALID_API_KEY"
    API_KEY_INACTIVE = "API_KEY_INACTIVE"
    SENDER_NOT_APPROVED = "SENDER_NOT_APPROVED"

    # Balance
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"

    # Transient
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    UNKNOWN = "UNKNOWN"

    @property
    def retryable(self) -> bool:
        return self not in NON_RETRYABLE_CODES


# Deterministic rejections: sending the same request again, to any vendor, fails the same way.
NON_RETRYABLE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.INVALID_CONFIG,
    ErrorCode.PROVIDER_NOT_CONFIGURED,
    ErrorCode.INVALID_PARAMS,
    ErrorCode.INVALID_RECIPIENT,
    ErrorCode.INVALID_SENDER,
    ErrorCode.INVALID_API_KEY,
    ErrorCode.API_KEY_INACTIVE,
    ErrorCode.SENDER_NOT_APPROVED,
    ErrorCode.INSUFFICIENT_BALANCE,
})


@dataclass(frozen=True)
class SendRequest:
    """One outbound text message. `to` is the destination number (E.164 expected)."""
    to: str
    message: str


@dataclass(frozen=True)
class SendSuccess:
    id: str
    provider: VendorId
    cost: Optional[float] = None
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class SendFailure:
    code: ErrorCode
    message: str
    retryable: bool
    provider: Optional[VendorId] = None
    success: bool = field(default=False, init=False)


SendResult = Union[SendSuccess, SendFailure]


@dataclass(frozen=True)
class BalanceTopup:
    date: str
    amount: str
    status: str


@dataclass(frozen=True)
class BalanceInfo:
    balance: float
    units: int
    last_topup: Optional[BalanceTopup] = None


# -------------------------
# Vendor credentials
# -------------------------

@dataclass(frozen=True)
class PiloConfig:
    api_key: str
    sender_id: str


@dataclass(frozen=True)
class ZendConfig:
    api_key: str


@dataclass(frozen=True)
class TelnyxConfig:
    api_key: str
    from_number: str


@dataclass(frozen=True)
class PreludeConfig:
    api_token: str
    template_id: Optional[str] = None


VendorConfig = Union[PiloConfig, ZendConfig, TelnyxConfig, PreludeConfig]


@dataclass(frozen=True)
class VendorConfigSet:
    """Credentials for whichever vendors this deployment uses. Unset vendors are simply unavailable."""
    pilo: Optional[PiloConfig] = None
    zend: Optional[ZendConfig] = None
    telnyx: Optional[TelnyxConfig] = None
    prelude: Optional[PreludeConfig] = None

    def get(self, vendor: VendorId) -> Optional[VendorConfig]:
        return getattr(self, VendorId(vendor).value)

    def configured(self) -> list[VendorId]:
        return [v for v in VendorId if self.get(v) is not None]


# -------------------------
# Routing
# -------------------------

DEFAULT_PREFIX = "default"


@dataclass(frozen=True)
class RoutingRule:
    prefix: str
    provider: VendorId

    @property
    def is_default(self) -> bool:
        return self.prefix == DEFAULT_PREFIX


@dataclass(frozen=True)
class RoutingConfig:
    rules: tuple[RoutingRule, ...]
    fallback: VendorId


__all__ = [
    'VendorId', 'ErrorCode', 'NON_RETRYABLE_CODES',
    'SendRequest', 'SendSuccess', 'SendFailure', 'SendResult',
    'BalanceTopup', 'BalanceInfo',
    'PiloConfig', 'ZendConfig', 'TelnyxConfig', 'PreludeConfig', 'VendorConfig', 'VendorConfigSet',
    'DEFAULT_PREFIX', 'RoutingRule', 'RoutingConfig',
]

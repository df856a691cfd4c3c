"""SMS delivery configuration using pydantic-settings.

Environment variables are the sole source of truth (12-factor). No secrets committed.
Vendor credentials are all optional: a vendor missing any required value is simply
left unconfigured. Use `get_settings()` for a cached instance.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..routing import parse_routing_rules
from ..types import (
    PiloConfig,
    PreludeConfig,
    RoutingConfig,
    TelnyxConfig,
    VendorConfigSet,
    VendorId,
    ZendConfig,
)


class Settings(BaseSettings):
    # Routing
    SMS_ROUTES: str = Field("default:pilo", description="Comma-separated prefix:vendor rules, e.g. '+233:zend,+1:telnyx,default:prelude'")
    SMS_FALLBACK_PROVIDER: VendorId = Field(VendorId.PILO, description="Vendor tried once after a retryable failure")
    SMS_VERIFICATION_TEMPLATE: str = Field("Your verification code is {code}", description="Verification message; {code} is substituted")

    # Vendor credentials
    PILO_API_KEY: Optional[str] = None
    PILO_SENDER_ID: Optional[str] = None

    ZEND_API_KEY: Optional[str] = None

    TELNYX_API_KEY: Optional[str] = None
    TELNYX_FROM_NUMBER: Optional[str] = None

    PRELUDE_API_TOKEN: Optional[str] = None
    PRELUDE_TEMPLATE_ID: Optional[str] = None

    model_config = SettingsConfigDict(env_file=None, case_sensitive=False, extra="ignore")

    @field_validator("SMS_FALLBACK_PROVIDER", mode="before")
    @classmethod
    def normalize_vendor(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("SMS_VERIFICATION_TEMPLATE")
    @classmethod
    def check_verification_template(cls, v: str) -> str:
        try:
            v.format(code="000000")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"SMS_VERIFICATION_TEMPLATE may only use the {{code}} placeholder: {e!r}") from e
        return v

    def routing_config(self) -> RoutingConfig:
        return RoutingConfig(rules=tuple(parse_routing_rules(self.SMS_ROUTES)), fallback=self.SMS_FALLBACK_PROVIDER)

    def vendor_configs(self) -> VendorConfigSet:
        pilo = zend = telnyx = prelude = None
        if self.PILO_API_KEY and self.PILO_SENDER_ID:
            pilo = PiloConfig(api_key=self.PILO_API_KEY, sender_id=self.PILO_SENDER_ID)
        if self.ZEND_API_KEY:
            zend = ZendConfig(api_key=self.ZEND_API_KEY)
        if self.TELNYX_API_KEY and self.TELNYX_FROM_NUMBER:
            telnyx = TelnyxConfig(api_key=self.TELNYX_API_KEY, from_number=self.TELNYX_FROM_NUMBER)
        if self.PRELUDE_API_TOKEN:
            prelude = PreludeConfig(api_token=self.PRELUDE_API_TOKEN, template_id=self.PRELUDE_TEMPLATE_ID or None)
        return VendorConfigSet(pilo=pilo, zend=zend, telnyx=telnyx, prelude=prelude)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton settings instance."""
    return Settings()  # pydantic-settings loads from environment automatically


__all__ = ["Settings", "get_settings"]

"""SMS delivery client: route a message to a vendor, fail over once.

Per request:

    route -> primary.send -> success                      -> return
                          -> non-retryable failure        -> return
                          -> retryable failure -> fallback.send -> return

At most two vendor calls happen per request, one after the other. Results
from adapters are returned exactly as received.
"""
from __future__ import annotations

from typing import Mapping, Optional

from .core.settings import Settings, get_settings
from .logging import (
    log_provider_not_configured,
    log_sms_failed,
    log_sms_fallback,
    log_sms_sent,
)
from .providers.base import ProviderFactory, SMSProvider, SupportsBalance
from .providers.pilo import create_pilo_provider
from .providers.prelude import create_prelude_provider
from .providers.telnyx import create_telnyx_provider
from .providers.zend import create_zend_provider
from .routing import match_provider
from .types import (
    BalanceInfo,
    ErrorCode,
    RoutingConfig,
    SendFailure,
    SendRequest,
    SendResult,
    VendorConfigSet,
    VendorId,
)

DEFAULT_VERIFICATION_TEMPLATE = "Your verification code is {code}"

# Adapters are built straight from credentials; the registry cache is not involved.
ADAPTER_FACTORIES: Mapping[VendorId, ProviderFactory] = {
    VendorId.PILO: create_pilo_provider,
    VendorId.ZEND: create_zend_provider,
    VendorId.TELNYX: create_telnyx_provider,
    VendorId.PRELUDE: create_prelude_provider,
}


class SMSClient:
    def __init__(
        self,
        routing: RoutingConfig,
        configs: VendorConfigSet,
        *,
        adapters: Optional[Mapping[VendorId, SMSProvider]] = None,
        verification_template: str = DEFAULT_VERIFICATION_TEMPLATE,
    ):
        self.routing = routing
        self.verification_template = verification_template
        if adapters is not None:
            self._providers: dict[VendorId, SMSProvider] = dict(adapters)
        else:
            self._providers = {}
            for vendor in configs.configured():
                provider = ADAPTER_FACTORIES[vendor](configs)
                if provider is not None:
                    self._providers[vendor] = provider

    @property
    def fallback(self) -> VendorId:
        return self.routing.fallback

    @property
    def configured_providers(self) -> list[VendorId]:
        return list(self._providers)

    def get_provider(self, vendor: VendorId) -> Optional[SMSProvider]:
        return self._providers.get(vendor)

    async def send(self, request: SendRequest) -> SendResult:
        primary_type = match_provider(request.to, self.routing.rules) or self.fallback
        primary = self._providers.get(primary_type)
        if primary is None:
            log_provider_not_configured(request.to, primary_type.value, leg="primary")
            return _not_configured(primary_type)

        result = await primary.send(request)
        if result.success:
            log_sms_sent(request.to, primary_type.value, result.id)
            return result

        log_sms_failed(request.to, primary_type.value, result.code.value, result.retryable)
        if not result.retryable or self.fallback == primary_type:
            return result

        fallback = self._providers.get(self.fallback)
        if fallback is None:
            log_provider_not_configured(request.to, self.fallback.value, leg="fallback")
            return _not_configured(self.fallback)

        log_sms_fallback(request.to, primary_type.value, self.fallback.value, result.code.value)
        result = await fallback.send(request)
        if result.success:
            log_sms_sent(request.to, self.fallback.value, result.id, fallback=True)
        else:
            log_sms_failed(request.to, self.fallback.value, result.code.value, result.retryable, fallback=True)
        return result

    async def send_verification(self, phone: str, code: str) -> SendResult:
        message = self.verification_template.format(code=code)
        return await self.send(SendRequest(to=phone, message=message))

    async def check_balance(self, vendor: VendorId) -> Optional[BalanceInfo]:
        provider = self._providers.get(vendor)
        if provider is None or not isinstance(provider, SupportsBalance):
            return None
        return await provider.check_balance()


def _not_configured(vendor: VendorId) -> SendFailure:
    return SendFailure(
        code=ErrorCode.PROVIDER_NOT_CONFIGURED,
        message=f"SMS provider '{vendor.value}' is not configured",
        provider=vendor,
        retryable=False,
    )


def create_sms_client(settings: Settings | None = None) -> SMSClient:
    """Build a client from environment settings (see `sms_delivery.core.settings`)."""
    settings = settings or get_settings()
    return SMSClient(
        settings.routing_config(),
        settings.vendor_configs(),
        verification_template=settings.SMS_VERIFICATION_TEMPLATE,
    )


__all__ = ['SMSClient', 'create_sms_client', 'DEFAULT_VERIFICATION_TEMPLATE']

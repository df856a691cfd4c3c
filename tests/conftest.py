"""Shared fixtures for the SMS delivery tests.

No network access is needed: vendor HTTP calls are mocked with respx and the
client tests use in-memory adapters.
"""
from __future__ import annotations

import pytest

from sms_delivery import registry
from sms_delivery.types import PiloConfig, PreludeConfig, TelnyxConfig, VendorConfigSet, ZendConfig


@pytest.fixture(autouse=True)
def _fresh_factory_cache():
    registry.clear_factory_cache()
    yield
    registry.clear_factory_cache()


@pytest.fixture
def all_configs() -> VendorConfigSet:
    return VendorConfigSet(
        pilo=PiloConfig(api_key="pilo-key", sender_id="Acme"),
        zend=ZendConfig(api_key="zend-key"),
        telnyx=TelnyxConfig(api_key="telnyx-key", from_number="+15550001111"),
        prelude=PreludeConfig(api_token="prelude-token", template_id="tpl_123"),
    )

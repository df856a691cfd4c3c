"""Vendor registry: resolve a vendor id to its adapter factory.

Each vendor's module is imported the first time that vendor is asked for and
the resolved factory is cached for the life of the process. Two threads racing
on the first lookup may both import; whichever stores first wins and every
caller gets that same factory.
"""
from __future__ import annotations

import importlib
import threading
from typing import Callable, Dict

from .logging import log_provider_unregistered
from .providers.base import ProviderFactory, SMSProvider
from .routing import parse_vendor_id
from .types import VendorConfigSet, VendorId

LazyProviderLoader = Callable[[], ProviderFactory]


def _module_loader(module: str, factory_name: str) -> LazyProviderLoader:
    def load() -> ProviderFactory:
        return getattr(importlib.import_module(module, __package__), factory_name)
    return load


provider_loaders: Dict[VendorId, LazyProviderLoader] = {
    VendorId.PILO: _module_loader(".providers.pilo", "create_pilo_provider"),
    VendorId.ZEND: _module_loader(".providers.zend", "create_zend_provider"),
    VendorId.TELNYX: _module_loader(".providers.telnyx", "create_telnyx_provider"),
    VendorId.PRELUDE: _module_loader(".providers.prelude", "create_prelude_provider"),
}

_factory_cache: Dict[VendorId, ProviderFactory] = {}
_factory_lock = threading.Lock()


def get_registered_providers() -> list[VendorId]:
    return list(provider_loaders)


def is_provider_registered(vendor: VendorId | str) -> bool:
    vid = parse_vendor_id(vendor) if isinstance(vendor, str) else vendor
    return vid in provider_loaders


def get_factory(vendor: VendorId) -> ProviderFactory | None:
    factory = _factory_cache.get(vendor)
    if factory is not None:
        return factory
    loader = provider_loaders.get(vendor)
    if loader is None:
        return None
    loaded = loader()
    with _factory_lock:
        return _factory_cache.setdefault(vendor, loaded)


def create_provider(vendor: VendorId | str, configs: VendorConfigSet) -> SMSProvider | None:
    """Build the adapter for `vendor` from `configs`.

    Returns None when the vendor is unknown (logged) or has no credentials in `configs`.
    """
    vid = parse_vendor_id(vendor) if isinstance(vendor, str) else vendor
    factory = get_factory(vid) if vid is not None else None
    if factory is None:
        log_provider_unregistered(str(getattr(vendor, 'value', vendor)))
        return None
    return factory(configs)


def clear_factory_cache() -> None:
    """Forget resolved factories. Test helper; production code never evicts."""
    with _factory_lock:
        _factory_cache.clear()


__all__ = [
    'create_provider', 'get_factory', 'get_registered_providers', 'is_provider_registered',
    'clear_factory_cache', 'provider_loaders',
]

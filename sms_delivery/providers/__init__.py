"""Vendor adapters. Vendor modules are imported on demand by `sms_delivery.registry`."""
from .base import SMSProvider, SupportsBalance, ProviderFactory

__all__ = ['SMSProvider', 'SupportsBalance', 'ProviderFactory']

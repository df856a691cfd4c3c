from .client import SMSClient, create_sms_client
from .errors import SMSError
from .registry import create_provider, get_registered_providers, is_provider_registered
from .routing import match_provider, parse_routing_rules
from .types import (
    BalanceInfo, ErrorCode, RoutingConfig, RoutingRule, SendFailure, SendRequest, SendResult,
    SendSuccess, VendorConfigSet, VendorId,
)

__all__ = [
    'SMSClient', 'create_sms_client', 'SMSError',
    'create_provider', 'get_registered_providers', 'is_provider_registered',
    'match_provider', 'parse_routing_rules',
    'BalanceInfo', 'ErrorCode', 'RoutingConfig', 'RoutingRule', 'SendFailure', 'SendRequest', 'SendResult',
    'SendSuccess', 'VendorConfigSet', 'VendorId',
]

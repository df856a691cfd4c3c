"""Prefix routing: pick a vendor for a destination number.

Rules come from text like ``"+233:zend,+1:telnyx,default:prelude"``. Order is
significant and is never re-sorted: put more specific prefixes first.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .logging import log_routing_rule_dropped
from .types import RoutingRule, VendorId


def parse_vendor_id(value: str) -> Optional[VendorId]:
    try:
        return VendorId(value.strip().lower())
    except ValueError:
        return None


def parse_routing_rules(raw: str | None) -> list[RoutingRule]:
    """Parse routing text into rules. Never raises; malformed entries are skipped."""
    rules: list[RoutingRule] = []
    for entry in (raw or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        if ":" not in entry:
            log_routing_rule_dropped(entry, "missing_separator")
            continue
        # Split on the last colon so the prefix itself may contain one.
        prefix, _, vendor_token = entry.rpartition(":")
        prefix = prefix.strip()
        vendor_token = vendor_token.strip()
        if not prefix or not vendor_token:
            log_routing_rule_dropped(entry, "empty_prefix_or_vendor")
            continue
        vendor = parse_vendor_id(vendor_token)
        if vendor is None:
            log_routing_rule_dropped(entry, "unknown_vendor", vendor=vendor_token)
            continue
        rules.append(RoutingRule(prefix=prefix, provider=vendor))
    return rules


def match_provider(phone: str, rules: Iterable[RoutingRule]) -> Optional[VendorId]:
    default: Optional[VendorId] = None
    for rule in rules:
        if rule.is_default:
            if default is None:
                default = rule.provider
            continue
        if phone.startswith(rule.prefix):
            return rule.provider
    return default


__all__ = ['parse_routing_rules', 'match_provider', 'parse_vendor_id']

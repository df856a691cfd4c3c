"""Centralized logging utilities wrapping structlog configuration and reusable event helpers.

Import order safety: this file has no side-effects beyond logging config, so routing,
registry and client modules can all import it without cycles.

Never pass message bodies or credentials to these helpers; recipient, vendor and
error code are enough to trace a delivery.
"""
from __future__ import annotations

import contextvars
import logging
import os
from typing import Any

import structlog

# -------------------------
# ContextVars for request-scoped data
# -------------------------
_request_id_var = contextvars.ContextVar("request_id", default=None)


def _add_context(logger, method_name: str, event_dict: dict[str, Any]):  # noqa: D401
    rid = _request_id_var.get()
    if rid:
        event_dict["request_id"] = rid
    return event_dict


def _log_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


# -------------------------
# One-time structlog configuration (idempotent)
# -------------------------
if not getattr(structlog, "_SMS_DELIVERY_CONFIGURED", False):
    logging_logger = logging.getLogger("sms_delivery")
    logging_logger.setLevel(_log_level())
    if not logging_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_context,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_log_level()),
        cache_logger_on_first_use=True,
    )
    structlog._SMS_DELIVERY_CONFIGURED = True  # type: ignore[attr-defined]

slog = structlog.get_logger()

# -------------------------
# Public helper functions
# -------------------------

def set_log_request(request_id: str | None):
    _request_id_var.set(request_id)

# Event helpers reused across modules

def log_sms_sent(to: str, provider: str, sms_id: str, fallback: bool = False, **extra):
    slog.info("sms_sent", to=to, provider=provider, sms_id=sms_id, fallback=fallback, **extra)

def log_sms_failed(to: str, provider: str | None, code: str, retryable: bool, **extra):
    slog.warning("sms_failed", to=to, provider=provider, code=code, retryable=retryable, **extra)

def log_sms_fallback(to: str, primary: str, fallback: str, code: str, **extra):
    slog.warning("sms_fallback", to=to, primary=primary, fallback=fallback, code=code, **extra)

def log_provider_not_configured(to: str, provider: str, leg: str, **extra):
    slog.error("sms_provider_not_configured", to=to, provider=provider, leg=leg, **extra)

def log_routing_rule_dropped(entry: str, reason: str, **extra):
    slog.warning("sms_routing_rule_dropped", entry=entry, reason=reason, **extra)

def log_provider_unregistered(provider: str, **extra):
    slog.error("sms_provider_unregistered", provider=provider, **extra)

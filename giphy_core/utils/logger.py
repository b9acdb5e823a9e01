"""Logging configuration and log redaction"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Optional

from giphy_core.config.settings import settings

REDACTED = "***REDACTED***"
MAX_LOG_STRING_LENGTH = 512

_SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "authorization",
        "access_token",
        "token",
        "secret",
        "password",
        "session",
        "cookie",
    }
)
_PAYLOAD_KEYS = frozenset({"body", "content", "payload", "raw"})
_INLINE_SECRET_PATTERN = re.compile(
    r"(?i)\b(api_key|apikey|access_token|token|secret|password)=([^&\s\"']+)"
)
_BEARER_PATTERN = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9._~+/=-]+")


def setup_logger(
    name: str,
    level: int | str | None = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with consistent formatting

    Args:
        name: Logger name
        level: Logging level (int or name such as "DEBUG"); defaults to LOG_LEVEL
        format_string: Custom format string

    Returns:
        Configured logger
    """
    if level is None:
        level = settings.LOG_LEVEL.upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if format_string is None:
        format_string = (
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    return logger


def sanitize_for_log(value: Any, key: str | None = None) -> Any:
    """
    Return a copy of ``value`` that is safe to write to logs.

    Credential-like keys are masked, payload bodies are replaced by a size
    marker, and ``api_key=...`` / ``Bearer ...`` fragments inside strings
    (URLs included) are masked.

    Args:
        value: Arbitrary value (mappings and sequences are walked)
        key: Key under which the value was found, if any

    Returns:
        Sanitized value
    """
    normalized_key = (key or "").lower()
    if normalized_key in _SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, dict):
        return {item_key: sanitize_for_log(item, key=str(item_key)) for item_key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_log(item) for item in value)
    if isinstance(value, bytes):
        return f"<redacted payload: {len(value)} bytes>"
    if isinstance(value, str):
        if normalized_key in _PAYLOAD_KEYS:
            return f"<redacted payload: {len(value)} chars>"
        return _mask_inline_secrets(value)
    return value


def sanitize_log_extra(**fields: Any) -> dict[str, Any]:
    """Sanitize structured fields passed through ``extra=``."""
    return {key: sanitize_for_log(value, key=key) for key, value in fields.items() if value is not None}


def _mask_inline_secrets(text: str) -> str:
    masked = _INLINE_SECRET_PATTERN.sub(lambda match: f"{match.group(1)}={REDACTED}", text)
    masked = _BEARER_PATTERN.sub(lambda match: f"{match.group(1)} {REDACTED}", masked)
    if len(masked) > MAX_LOG_STRING_LENGTH:
        return masked[:MAX_LOG_STRING_LENGTH - 3] + "..."
    return masked

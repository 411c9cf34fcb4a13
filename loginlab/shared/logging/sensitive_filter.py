# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

# (pattern, replacement); applied in order to every rendered log message
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Compact JWS before anything else so bearer values lose their payload too
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)([\w.~+/-]{8,}=*)", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)([^'\",}]+)", re.IGNORECASE), rf"\1{_MASK}"),
    # Form and JSON credentials: password=..., "passwordCheck": "..."
    (
        re.compile(r"(password(?:_?check)?['\"]?\s*[:=]\s*['\"]?)([^'\"\s,}&]+)", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    # Cookie header values and the SESSION key
    (re.compile(r"(cookie['\"]?\s*[:=]\s*['\"]?)([^'\"}]+)", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(SESSION=)([\w-]{16,})"), rf"\1{_MASK}"),
    (re.compile(r"(session[_-]?key['\"]?\s*[:=]\s*['\"]?)([\w-]{16,})", re.IGNORECASE), rf"\1{_MASK}"),
    # Configuration secrets
    (
        re.compile(r"((?:jwt[_-]?secret|secret[_-]?key)['\"]?\s*[:=]\s*['\"]?)([^'\"\s,}]+)", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    (re.compile(r"\b(postgresql|postgres|mysql)(\+\w+)?://([^:/@]+):([^@]+)@"), rf"\1\2://\3:{_MASK}@"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: rewrites the message in place and never drops a record."""
    record["message"] = sanitize_message(record["message"])
    return True

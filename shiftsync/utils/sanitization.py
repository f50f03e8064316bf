import re
from typing import Any, Optional

import bleach

# Tags whose content is dropped entirely rather than kept as text
_STRIP_BODY_TAGS = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

SQL_INJECTION_PATTERNS = [
    re.compile(r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE)\b", re.IGNORECASE),
    re.compile(r"(;|--|/\*|\*/)"),
    re.compile(r"\bOR\b.*=.*", re.IGNORECASE),
    re.compile(r"\bAND\b.*=.*", re.IGNORECASE),
]


def strip_html(value: Optional[str]) -> Optional[str]:
    """
    Remove all HTML from a string to prevent stored XSS.
    script/style blocks are removed together with their content.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    value = _STRIP_BODY_TAGS.sub("", value)
    value = bleach.clean(value, tags=[], attributes={}, strip=True)
    return _CONTROL_CHARS.sub("", value)


def looks_like_sql_injection(value: Any) -> bool:
    """True if any string inside `value` matches a common SQL injection pattern"""
    if isinstance(value, str):
        return any(pattern.search(value) for pattern in SQL_INJECTION_PATTERNS)
    if isinstance(value, (list, tuple)):
        return any(looks_like_sql_injection(item) for item in value)
    if isinstance(value, dict):
        return any(looks_like_sql_injection(item) for item in value.values())
    return False


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim and strip HTML; empty strings become None"""
    if value is None:
        return None
    value = strip_html(value).strip()
    return value or None

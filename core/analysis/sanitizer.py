"""
core/analysis/sanitizer.py - 리소스 Properties 민감정보 마스킹

키 이름에 민감 키워드(대소문자 구분 부분 일치)가 포함되면 값을 "[REDACTED]"로 바꿉니다.
중첩 dict는 재귀 처리하고, 리스트와 원시값은 그대로 둡니다.
"""

from __future__ import annotations

from typing import Any

from core.config import REDACTED

SENSITIVE_KEYWORDS = ("Password", "Secret", "Key", "Token", "Credential")


def is_sensitive_key(key: str) -> bool:
    return any(keyword in key for keyword in SENSITIVE_KEYWORDS)


def sanitize_properties(properties: dict[str, Any] | None) -> dict[str, Any]:
    """민감 키 값을 마스킹한 새 dict 반환 (멱등)"""
    if not properties:
        return {}

    sanitized: dict[str, Any] = {}
    for key, value in properties.items():
        if is_sensitive_key(str(key)):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_properties(value)
        else:
            sanitized[key] = value
    return sanitized

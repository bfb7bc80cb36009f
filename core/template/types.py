"""
core/template/types.py - 템플릿 리소스 타입
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def to_number(value: Any) -> float | None:
    """숫자 또는 숫자 문자열 → 숫자 (그 외는 None)"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value) if "." in value else int(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class ResourceDescriptor:
    """템플릿 Resources 섹션의 단일 리소스

    Attributes:
        logical_id: 논리 ID (Resources 맵의 키)
        resource_type: 리소스 타입 식별자 (예: "AWS::RDS::DBInstance")
        properties: Properties 맵 (없으면 빈 dict)
    """

    logical_id: str
    resource_type: str
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_template(cls, logical_id: str, entry: dict[str, Any]) -> ResourceDescriptor:
        properties = entry.get("Properties")
        resource_type = entry.get("Type")
        return cls(
            logical_id=logical_id,
            resource_type=resource_type if isinstance(resource_type, str) else "",
            properties=properties if isinstance(properties, dict) else {},
        )

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def get_number(self, key: str, default: float | None = None) -> float | None:
        """숫자 속성 조회 (숫자 문자열 허용, !Ref 등은 default)"""
        value = to_number(self.properties.get(key))
        return default if value is None else value

    def get_tag(self, key: str) -> str | None:
        """Tags에서 값 조회 (CFN 리스트 [{Key, Value}] 또는 SAM 맵 {Key: Value})"""
        tags = self.properties.get("Tags")
        if isinstance(tags, dict):
            value = tags.get(key)
            return value if isinstance(value, str) else None
        if not isinstance(tags, list):
            return None
        for tag in tags:
            if isinstance(tag, dict) and tag.get("Key") == key:
                value = tag.get("Value")
                return value if isinstance(value, str) else None
        return None

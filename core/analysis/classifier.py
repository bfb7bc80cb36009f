"""
core/analysis/classifier.py - 리소스 분류

템플릿 Resources를 지원/미지원으로 나눕니다. 순수 함수이며 실패하지 않습니다.

분류 규칙 (템플릿 순서대로):
    1. 허용 목록이 있고 타입이 목록에 없으면 → 미지원 (레지스트리 조회 안 함)
    2. 레지스트리에 생성기가 있으면 → 지원
    3. 그 외 → 미지원
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from typing import Any

from core.generators.registry import GeneratorRegistry
from core.template.types import ResourceDescriptor


@dataclass
class ClassificationResult:
    supported: list[ResourceDescriptor] = field(default_factory=list)
    unsupported: list[str] = field(default_factory=list)
    total_count: int = 0


def classify_resources(
    resources: Mapping[str, Any] | None,
    registry: GeneratorRegistry,
    allowed_types: Collection[str] | None = None,
) -> ClassificationResult:
    result = ClassificationResult()
    if not resources:
        return result

    allowed = set(allowed_types) if allowed_types is not None else None

    for logical_id, entry in resources.items():
        result.total_count += 1
        resource = ResourceDescriptor.from_template(str(logical_id), entry if isinstance(entry, dict) else {})

        if allowed is not None and resource.resource_type not in allowed:
            result.unsupported.append(resource.logical_id)
            continue

        if resource.resource_type in registry:
            result.supported.append(resource)
        else:
            result.unsupported.append(resource.logical_id)

    return result

"""
core/generators - 리소스 타입별 메트릭 생성기 기반

- MetricsGenerator / BaseMetricsGenerator: 생성기 인터페이스와 템플릿 메서드
- GeneratorRegistry: 타입 식별자 → 생성기 O(1) 조회
- build_default_registry: plugins/* 내장 생성기 등록
"""

from .base import (
    BaseMetricsGenerator,
    MetricsGenerator,
    ValidationResult,
    calculate_threshold,
    is_lower_worse,
    validate_metric_definition,
)
from .registry import GeneratorRegistry, build_default_registry

__all__ = [
    "BaseMetricsGenerator",
    "MetricsGenerator",
    "ValidationResult",
    "calculate_threshold",
    "is_lower_worse",
    "validate_metric_definition",
    "GeneratorRegistry",
    "build_default_registry",
]

"""
core/generators/catalog.py - 메트릭 카탈로그 헬퍼

- metric_factory: 네임스페이스를 고정한 MetricConfig 생성 함수 (plugins/*/metrics.py 에서 사용)
- get_metrics_for_resource_type: 타입별 카탈로그 조회
- get_catalog_statistics: 리소스 타입/카테고리/중요도별 카탈로그 통계
"""

from __future__ import annotations

import importlib
from collections import Counter
from collections.abc import Callable
from functools import partial
from typing import Any

from core.metrics.types import (
    ImportanceLevel,
    MetricCategory,
    MetricConfig,
    MetricStatistic,
    ThresholdConfig,
)

from .registry import BUILTIN_PLUGINS

DEFAULT_EVALUATION_PERIOD = 300


def _define_metric(
    namespace: str,
    name: str,
    unit: str,
    description: str,
    statistic: str,
    category: str,
    importance: str,
    base: float,
    warning: float,
    critical: float,
    applicable_when: Callable[..., bool] | None = None,
    evaluation_period: int = DEFAULT_EVALUATION_PERIOD,
) -> MetricConfig:
    return MetricConfig(
        name=name,
        namespace=namespace,
        unit=unit,
        description=description,
        statistic=MetricStatistic(statistic),
        evaluation_period=evaluation_period,
        category=MetricCategory(category),
        importance=ImportanceLevel(importance),
        threshold=ThresholdConfig(base=base, warning_multiplier=warning, critical_multiplier=critical),
        applicable_when=applicable_when,
    )


def metric_factory(namespace: str) -> Callable[..., MetricConfig]:
    """네임스페이스가 고정된 MetricConfig 생성 함수

    Example:
        metric = metric_factory("AWS/RDS")
        CPU = metric("CPUUtilization", "Percent", "CPU 사용률", "Average", "Performance", "High", 70, 1.0, 1.3)
    """
    return partial(_define_metric, namespace)


def get_metrics_config_map() -> dict[str, list[MetricConfig]]:
    """리소스 타입 → 카탈로그 (SAM 타입은 같은 카탈로그 공유)"""
    config_map: dict[str, list[MetricConfig]] = {}
    for plugin in BUILTIN_PLUGINS:
        module = importlib.import_module(f"plugins.{plugin}")
        for resource_type in module.RESOURCE_TYPES:
            config_map[resource_type] = list(module.METRICS)
    return config_map


def get_metrics_for_resource_type(resource_type: str) -> list[MetricConfig]:
    return get_metrics_config_map().get(resource_type, [])


def get_catalog_statistics() -> dict[str, Any]:
    """카탈로그 통계 (서비스 단위, SAM 타입 중복 제외)"""
    by_resource_type: dict[str, int] = {}
    all_metrics: list[MetricConfig] = []
    for plugin in BUILTIN_PLUGINS:
        module = importlib.import_module(f"plugins.{plugin}")
        by_resource_type[module.CATEGORY["display_name"]] = len(module.METRICS)
        all_metrics.extend(module.METRICS)

    categories = Counter(m.category.value for m in all_metrics)
    importances = Counter(m.importance.value for m in all_metrics)

    return {
        "total_count": len(all_metrics),
        "conditional_count": sum(1 for m in all_metrics if m.applicable_when is not None),
        "by_resource_type": by_resource_type,
        "by_category": {c.value: categories.get(c.value, 0) for c in MetricCategory},
        "by_importance": {i.value: importances.get(i.value, 0) for i in ImportanceLevel},
    }

"""
core/metrics/types.py - 메트릭/분석 결과 데이터 타입

메트릭 카탈로그 항목(MetricConfig), 생성된 메트릭(MetricDefinition),
분석 결과(AnalysisResult)와 통계(AnalysisStatistics)를 정의합니다.

JSON 출력 스키마는 각 타입의 to_dict()가 결정합니다 (snake_case 키).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.template.types import ResourceDescriptor


class MetricStatistic(str, Enum):
    AVERAGE = "Average"
    SUM = "Sum"
    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"


class MetricCategory(str, Enum):
    PERFORMANCE = "Performance"
    ERROR = "Error"
    SATURATION = "Saturation"
    LATENCY = "Latency"


class ImportanceLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# =============================================================================
# 카탈로그 항목
# =============================================================================


@dataclass(frozen=True)
class ThresholdConfig:
    """임계값 계산 파라미터

    warning = round(base * scale * warning_multiplier)
    critical = round(base * scale * critical_multiplier)
    """

    base: float
    warning_multiplier: float = 1.0
    critical_multiplier: float = 1.0


@dataclass(frozen=True)
class MetricConfig:
    """메트릭 카탈로그 항목

    Attributes:
        applicable_when: 리소스별 적용 조건 (None이면 항상 적용)
    """

    name: str
    namespace: str
    unit: str
    description: str
    statistic: MetricStatistic
    evaluation_period: int
    category: MetricCategory
    importance: ImportanceLevel
    threshold: ThresholdConfig
    applicable_when: Callable[[ResourceDescriptor], bool] | None = None

    def with_changes(self, **changes: Any) -> MetricConfig:
        return replace(self, **changes)


# =============================================================================
# 생성된 메트릭
# =============================================================================


@dataclass(frozen=True)
class MetricThreshold:
    warning: float
    critical: float

    def to_dict(self) -> dict[str, float]:
        return {"warning": self.warning, "critical": self.critical}


@dataclass(frozen=True)
class MetricDimension:
    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class MetricDefinition:
    """리소스 하나에 대한 권장 CloudWatch 메트릭"""

    metric_name: str
    namespace: str
    unit: str
    description: str
    statistic: MetricStatistic
    recommended_threshold: MetricThreshold
    evaluation_period: int
    category: MetricCategory
    importance: ImportanceLevel
    dimensions: tuple[MetricDimension, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric_name": self.metric_name,
            "namespace": self.namespace,
            "unit": self.unit,
            "description": self.description,
            "statistic": self.statistic.value,
            "recommended_threshold": self.recommended_threshold.to_dict(),
            "evaluation_period": self.evaluation_period,
            "category": self.category.value,
            "importance": self.importance.value,
            "dimensions": [d.to_dict() for d in self.dimensions],
        }


@dataclass(frozen=True)
class ResourceWithMetrics:
    """메트릭 생성에 성공한 리소스 (Properties는 민감정보 마스킹 완료)"""

    logical_id: str
    resource_type: str
    resource_properties: dict[str, Any]
    metrics: tuple[MetricDefinition, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "logical_id": self.logical_id,
            "resource_type": self.resource_type,
            "resource_properties": self.resource_properties,
            "metrics": [m.to_dict() for m in self.metrics],
        }


@dataclass(frozen=True)
class AnalysisError:
    """리소스 단위 메트릭 생성 실패 기록"""

    resource_id: str
    resource_type: str
    error: str
    stack: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resource_id": self.resource_id,
            "resource_type": self.resource_type,
            "error": self.error,
        }
        if self.stack:
            data["stack"] = self.stack
        return data


# =============================================================================
# 분석 결과
# =============================================================================


@dataclass(frozen=True)
class AnalysisMetadata:
    version: str
    generated_at: str
    template_path: str
    total_resources: int
    supported_resources: int
    processing_time_ms: int
    parse_time_ms: int
    extract_time_ms: int
    generator_time_ms: int
    total_time_ms: int
    memory_peak_mb: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "generated_at": self.generated_at,
            "template_path": self.template_path,
            "total_resources": self.total_resources,
            "supported_resources": self.supported_resources,
            "processing_time_ms": self.processing_time_ms,
            "parse_time_ms": self.parse_time_ms,
            "extract_time_ms": self.extract_time_ms,
            "generator_time_ms": self.generator_time_ms,
            "total_time_ms": self.total_time_ms,
            "memory_peak_mb": self.memory_peak_mb,
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    parse_time: int
    generator_time: int
    formatter_time: int
    total_time: int
    memory_peak: int
    resource_count: int
    concurrent_tasks: int

    def to_dict(self) -> dict[str, int]:
        return {
            "parse_time": self.parse_time,
            "generator_time": self.generator_time,
            "formatter_time": self.formatter_time,
            "total_time": self.total_time,
            "memory_peak": self.memory_peak,
            "resource_count": self.resource_count,
            "concurrent_tasks": self.concurrent_tasks,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """분석 1회의 최종 결과 (생성 후 변경 불가)"""

    metadata: AnalysisMetadata
    resources: tuple[ResourceWithMetrics, ...]
    unsupported_resources: tuple[str, ...]
    errors: tuple[AnalysisError, ...] | None = None
    performance_metrics: PerformanceMetrics | None = None

    @property
    def metric_count(self) -> int:
        return sum(len(r.metrics) for r in self.resources)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "metadata": self.metadata.to_dict(),
            "resources": [r.to_dict() for r in self.resources],
            "unsupported_resources": list(self.unsupported_resources),
        }
        if self.errors is not None:
            data["errors"] = [e.to_dict() for e in self.errors]
        if self.performance_metrics is not None:
            data["performance_metrics"] = self.performance_metrics.to_dict()
        return data


@dataclass
class AnalysisStatistics:
    """가장 최근 분석의 요약 통계"""

    total_resources: int
    supported_resources: int
    unsupported_resources: int
    resources_by_type: dict[str, int] = field(default_factory=dict)
    processing_time_ms: int = 0
    memory_usage_mb: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_resources": self.total_resources,
            "supported_resources": self.supported_resources,
            "unsupported_resources": self.unsupported_resources,
            "resources_by_type": dict(self.resources_by_type),
            "processing_time_ms": self.processing_time_ms,
            "memory_usage_mb": self.memory_usage_mb,
        }

"""
core/metrics - 메트릭 및 분석 결과 데이터 타입
"""

from .types import (
    AnalysisError,
    AnalysisMetadata,
    AnalysisResult,
    AnalysisStatistics,
    ImportanceLevel,
    MetricCategory,
    MetricConfig,
    MetricDefinition,
    MetricDimension,
    MetricStatistic,
    MetricThreshold,
    PerformanceMetrics,
    ResourceWithMetrics,
    ThresholdConfig,
)

__all__ = [
    "AnalysisError",
    "AnalysisMetadata",
    "AnalysisResult",
    "AnalysisStatistics",
    "ImportanceLevel",
    "MetricCategory",
    "MetricConfig",
    "MetricDefinition",
    "MetricDimension",
    "MetricStatistic",
    "MetricThreshold",
    "PerformanceMetrics",
    "ResourceWithMetrics",
    "ThresholdConfig",
]

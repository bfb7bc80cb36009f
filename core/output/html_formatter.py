"""
core/output/html_formatter.py - HTML 출력 포매터

AnalysisResult를 MetricsReport 한 장으로 변환합니다.

구성:
    - 메타데이터 (버전, 생성 시각, 템플릿, 처리 시간)
    - 요약 카드 (전체/지원/미지원 리소스, 메트릭 수, High 메트릭 수, 실패 수)
    - 카테고리/중요도 분포, 리소스별 중요도 막대 차트
    - 리소스 섹션: 카테고리별 메트릭 표, 중요도에 따른 임계값 강조
    - 미지원 리소스 / 실패 리소스 표
"""

from __future__ import annotations

import logging
from collections import Counter

from core.exceptions import CWMError, OutputError
from core.generators.base import is_lower_worse
from core.metrics.types import AnalysisResult, ImportanceLevel, MetricCategory, MetricDefinition, ResourceWithMetrics

from .report import (
    CATEGORY_COLORS,
    HORIZONTAL_BAR_MIN,
    IMPORTANCE_COLORS,
    CategoryGroup,
    MetricRow,
    MetricsReport,
    ResourceSection,
    importance_bar_option,
    pie_option,
)

logger = logging.getLogger(__name__)

UNIT_SUFFIXES = {
    "Seconds": "s",
    "Milliseconds": "ms",
    "Percent": "%",
    "Count": "",
    "Count/Second": "/s",
    "Bytes": "B",
    "Bytes/Second": "B/s",
}

IMPORTANCE_ORDER = {level.value: index for index, level in enumerate(ImportanceLevel)}


def format_threshold_value(value: float, unit: str) -> str:
    """임계값 표시 문자열 (예: 1,048,576B, 0.02s, 70%)"""
    suffix = UNIT_SUFFIXES.get(unit, unit)
    if value >= 1000:
        text = f"{value:,.0f}" if float(value).is_integer() else f"{value:,}"
    elif 0 < value < 1:
        text = f"{value:.3g}"
    elif float(value).is_integer():
        text = str(int(value))
    else:
        text = str(value)
    return f"{text}{suffix}"


def build_metric_row(metric: MetricDefinition) -> MetricRow:
    threshold = metric.recommended_threshold
    return MetricRow(
        metric_name=metric.metric_name,
        statistic=metric.statistic.value,
        warning=format_threshold_value(threshold.warning, metric.unit),
        critical=format_threshold_value(threshold.critical, metric.unit),
        comparison="≤" if is_lower_worse(metric.metric_name) else "≥",
        period=f"{metric.evaluation_period}s",
        importance=metric.importance.value,
        dimensions=", ".join(f"{d.name}={d.value}" for d in metric.dimensions),
        description=metric.description,
    )


def build_resource_section(resource: ResourceWithMetrics) -> ResourceSection:
    """리소스 → 섹션 (카테고리는 MetricCategory 순서, 카테고리 안에서는 중요도 순)"""
    groups = []
    for category in MetricCategory:
        metrics = [m for m in resource.metrics if m.category == category]
        if not metrics:
            continue
        metrics.sort(key=lambda m: IMPORTANCE_ORDER[m.importance.value])
        groups.append(CategoryGroup(category.value, tuple(build_metric_row(m) for m in metrics)))

    namespaces = tuple(dict.fromkeys(m.namespace for m in resource.metrics))
    return ResourceSection(resource.logical_id, resource.resource_type, namespaces, tuple(groups))


class HTMLOutputFormatter:
    """AnalysisResult → HTML 문서"""

    def format(self, result: AnalysisResult) -> str:
        try:
            return self.build_report(result).render()
        except CWMError:
            raise
        except (AttributeError, TypeError, ValueError, KeyError) as e:
            raise OutputError(
                f"Failed to format HTML output: {e}",
                cause=e,
                details={"original_error": str(e)},
            ) from e

    def build_report(self, result: AnalysisResult) -> MetricsReport:
        if not isinstance(result, AnalysisResult):
            raise OutputError(
                "Invalid analysis result provided",
                details={"received": type(result).__name__},
            )

        metadata = result.metadata
        report = MetricsReport("CloudWatch 메트릭 추천 리포트", subtitle=metadata.template_path)
        report.add_badge("버전", metadata.version)
        report.add_badge("생성 시각", metadata.generated_at)
        report.add_badge("처리 시간", f"{metadata.processing_time_ms}ms")
        report.add_badge("메모리 최대", f"{metadata.memory_peak_mb}MB")

        sections = [build_resource_section(resource) for resource in result.resources]
        importance: Counter[str] = Counter()
        categories: Counter[str] = Counter()
        for resource in result.resources:
            for metric in resource.metrics:
                importance[metric.importance.value] += 1
                categories[metric.category.value] += 1

        error_count = len(result.errors) if result.errors else 0
        unsupported_count = len(result.unsupported_resources)
        report.add_card("전체 리소스", metadata.total_resources)
        report.add_card("지원 리소스", metadata.supported_resources, "good")
        report.add_card("미지원 리소스", unsupported_count, "warn" if unsupported_count else None)
        report.add_card("추천 메트릭", result.metric_count)
        high_count = importance[ImportanceLevel.HIGH.value]
        report.add_card("High 메트릭", high_count, "bad" if high_count else None)
        report.add_card("생성 실패", error_count, "bad" if error_count else None)

        if result.metric_count:
            category_counts = {c.value: categories[c.value] for c in MetricCategory}
            importance_counts = {level.value: importance[level.value] for level in ImportanceLevel}
            report.add_chart(pie_option("카테고리 분포", category_counts, CATEGORY_COLORS))
            report.add_chart(pie_option("중요도 분포", importance_counts, IMPORTANCE_COLORS, ring=True))
            horizontal = len(sections) >= HORIZONTAL_BAR_MIN
            report.add_chart(
                importance_bar_option("리소스별 메트릭 수", sections),
                height=max(320, len(sections) * 28) if horizontal else 320,
                wide=horizontal,
            )

        for section in sections:
            report.add_resource(section)

        if result.unsupported_resources:
            report.add_notice("미지원 리소스", ["논리 ID"], [[logical_id] for logical_id in result.unsupported_resources])

        if result.errors:
            report.add_notice(
                "메트릭 생성 실패",
                ["논리 ID", "리소스 타입", "오류"],
                [[e.resource_id, e.resource_type, e.error] for e in result.errors],
            )

        logger.debug(f"HTML 리포트 구성 완료: 리소스 {len(sections)}개, 메트릭 {result.metric_count}개")
        return report

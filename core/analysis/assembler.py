"""
core/analysis/assembler.py - 분석 결과 조립

단계별 소요 시간과 메모리 최대치를 정리하여 AnalysisResult와 통계 스냅샷을 만듭니다.
모든 수치 반올림은 여기서 끝내며, 포매터는 추가 계산 없이 결과를 그대로 출력합니다.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from core.config import RESULT_SCHEMA_VERSION
from core.metrics.types import (
    AnalysisError,
    AnalysisMetadata,
    AnalysisResult,
    AnalysisStatistics,
    PerformanceMetrics,
    ResourceWithMetrics,
)

from .classifier import ClassificationResult
from .options import AnalysisOptions

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass
class PhaseTimings:
    """단계별 소요 시간 (ms, 반올림 전)

    started_at은 time.perf_counter() 기준 분석 시작 시각입니다.
    """

    started_at: float = field(default_factory=time.perf_counter)
    parse_ms: float = 0.0
    extract_ms: float = 0.0
    generator_ms: float = 0.0

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def count_resources_by_type(resources: Mapping[str, Any] | None) -> dict[str, int]:
    """템플릿 Resources의 타입별 개수"""
    if not resources:
        return {}
    counter: Counter[str] = Counter()
    for entry in resources.values():
        resource_type = entry.get("Type") if isinstance(entry, dict) else None
        counter[resource_type if isinstance(resource_type, str) else "Unknown"] += 1
    return dict(counter)


class ResultAssembler:
    """AnalysisResult / AnalysisStatistics 생성기"""

    def assemble(
        self,
        template_path: str,
        template_resources: Mapping[str, Any],
        classification: ClassificationResult,
        resources: list[ResourceWithMetrics],
        errors: list[AnalysisError],
        options: AnalysisOptions,
        timings: PhaseTimings,
        memory_peak_bytes: int,
    ) -> tuple[AnalysisResult, AnalysisStatistics]:
        total_ms = round(timings.elapsed_ms())

        metadata = AnalysisMetadata(
            version=RESULT_SCHEMA_VERSION,
            generated_at=_utc_timestamp(),
            template_path=template_path,
            total_resources=classification.total_count,
            supported_resources=len(classification.supported),
            processing_time_ms=total_ms,
            parse_time_ms=round(timings.parse_ms),
            extract_time_ms=round(timings.extract_ms),
            generator_time_ms=round(timings.generator_ms),
            total_time_ms=total_ms,
            memory_peak_mb=round(memory_peak_bytes / MB),
        )

        performance = None
        if options.collect_metrics:
            performance = PerformanceMetrics(
                parse_time=round(timings.parse_ms),
                generator_time=round(timings.generator_ms),
                formatter_time=0,
                total_time=round(timings.elapsed_ms()),
                memory_peak=memory_peak_bytes,
                resource_count=len(classification.supported),
                concurrent_tasks=options.concurrency,
            )

        result = AnalysisResult(
            metadata=metadata,
            resources=tuple(resources),
            unsupported_resources=tuple(classification.unsupported) if options.include_unsupported else (),
            errors=tuple(errors) if errors else None,
            performance_metrics=performance,
        )

        statistics = AnalysisStatistics(
            total_resources=classification.total_count,
            supported_resources=len(classification.supported),
            unsupported_resources=len(classification.unsupported),
            resources_by_type=count_resources_by_type(template_resources),
            processing_time_ms=round(timings.elapsed_ms()),
            memory_usage_mb=round(memory_peak_bytes / MB),
        )

        logger.info(f"분석 완료: {metadata.processing_time_ms}ms, 메모리 최대 {metadata.memory_peak_mb}MB")
        return result, statistics

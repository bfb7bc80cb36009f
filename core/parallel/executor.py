"""
core/parallel/executor.py - 병렬 메트릭 생성 실행기

지원 리소스 목록을 ThreadPoolExecutor로 팬아웃하여 리소스별 생성기를 호출하고,
입력 순서대로 결과를 모읍니다 (팬인).

주요 구성 요소:
- ParallelConfig: 워커 수, 실패 정책, Low 중요도 포함 여부
- ParallelGenerationExecutor: 리소스 목록 병렬 처리

실패 정책:
- continue_on_error=False: 첫 실패를 기록하고 대기 중 작업을 취소한 뒤 그대로 전파
- continue_on_error=True: 실패를 ErrorCollector에 기록하고 해당 리소스만 결과에서 제외

Example:
    executor = ParallelGenerationExecutor(registry, ParallelConfig(max_workers=6))
    collector = ErrorCollector()
    resources_with_metrics = executor.execute(classification.supported, collector)
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from core.analysis.sanitizer import sanitize_properties
from core.config import DEFAULT_CONCURRENCY, MAX_CONCURRENCY
from core.exceptions import ResourceError
from core.generators.registry import GeneratorRegistry
from core.metrics.types import ImportanceLevel, MetricDefinition, ResourceWithMetrics
from core.template.types import ResourceDescriptor

from .errors import ErrorCollector

logger = logging.getLogger(__name__)


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100)
        continue_on_error: 리소스 단위 실패 허용 여부
        include_low_importance: Low 중요도 메트릭 포함 여부
    """

    max_workers: int = DEFAULT_CONCURRENCY
    continue_on_error: bool = False
    include_low_importance: bool = True

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > MAX_CONCURRENCY:
            self.max_workers = MAX_CONCURRENCY


class ParallelGenerationExecutor:
    """병렬 메트릭 생성 실행기

    레지스트리는 읽기 전용으로만 사용하며, 생성기 인스턴스는 여러 스레드가 공유합니다.
    """

    def __init__(self, registry: GeneratorRegistry, config: ParallelConfig | None = None):
        self.registry = registry
        self.config = config or ParallelConfig()

    def execute(
        self,
        resources: list[ResourceDescriptor],
        error_collector: ErrorCollector | None = None,
    ) -> list[ResourceWithMetrics]:
        """지원 리소스 전체에 대해 메트릭 생성

        Args:
            resources: 분류기가 지원으로 판정한 리소스 목록
            error_collector: 실패 기록 대상 (None이면 내부 생성)

        Returns:
            성공한 리소스의 ResourceWithMetrics 목록 (입력 순서 유지)

        Raises:
            Exception: continue_on_error=False일 때 첫 번째 생성 실패를 그대로 전파
        """
        if not resources:
            return []

        collector = error_collector if error_collector is not None else ErrorCollector()
        max_workers = min(self.config.max_workers, len(resources))
        logger.info(f"메트릭 생성 시작: {len(resources)}개 리소스, max_workers={max_workers}")

        start_time = time.monotonic()
        results: list[ResourceWithMetrics | None] = [None] * len(resources)

        executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="cwm-generate")
        aborted = False
        try:
            futures: dict[Future[ResourceWithMetrics], int] = {
                executor.submit(self._generate_single, resource): index for index, resource in enumerate(resources)
            }

            for future in as_completed(futures):
                index = futures[future]
                resource = resources[index]
                try:
                    results[index] = future.result()
                except Exception as e:
                    collector.collect(resource, e)
                    if not self.config.continue_on_error:
                        aborted = True
                        logger.error(f"메트릭 생성 실패로 중단: {resource.logical_id} ({e})")
                        raise
                    logger.warning(f"메트릭 생성 실패, 계속 진행: {resource.logical_id} ({e})")
        finally:
            # 중단 시 대기 중 작업은 취소하고 실행 중 작업은 기다리지 않음
            executor.shutdown(wait=not aborted, cancel_futures=aborted)

        succeeded = [r for r in results if r is not None]
        total_time = (time.monotonic() - start_time) * 1000
        logger.info(
            f"메트릭 생성 완료: 성공 {len(succeeded)}, 실패 {len(resources) - len(succeeded)}, 총 {total_time:.0f}ms"
        )
        return succeeded

    def _generate_single(self, resource: ResourceDescriptor) -> ResourceWithMetrics:
        generator = self.registry.lookup(resource.resource_type)
        if generator is None:
            raise ResourceError(
                f"No generator found for resource type: {resource.resource_type}",
                details={"resource_id": resource.logical_id, "resource_type": resource.resource_type},
            )

        metrics = generator.generate(resource)
        if not isinstance(metrics, list):
            raise ResourceError(
                f"Invalid metrics type: expected list, got {type(metrics).__name__}",
                details={"resource_id": resource.logical_id, "resource_type": resource.resource_type},
            )

        return ResourceWithMetrics(
            logical_id=resource.logical_id,
            resource_type=resource.resource_type,
            resource_properties=sanitize_properties(resource.properties),
            metrics=tuple(self._filter_importance(metrics)),
        )

    def _filter_importance(self, metrics: list[MetricDefinition]) -> list[MetricDefinition]:
        if self.config.include_low_importance:
            return metrics
        return [m for m in metrics if m.importance != ImportanceLevel.LOW]

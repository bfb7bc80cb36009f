"""
core/analysis/analyzer.py - 분석 오케스트레이터

템플릿 하나에 대한 전체 분석 흐름을 조율합니다.

    메모리 사전 점검 → 파싱 → 분류 → 병렬 메트릭 생성 → 결과 조립

memory_limit이 설정되면 파싱부터 조립까지의 작업을 데몬 스레드에서 실행하고,
메모리 감시기의 future와 경쟁시킵니다 (먼저 끝나는 쪽 채택). 감시기가 이기면 진행 중인
작업은 버려지고 MemoryLimitError가 전파됩니다. 버려진 작업 스레드는 데몬이므로
인터프리터 종료를 막지 않습니다. 감시기는 모든 종료 경로에서 중지됩니다.

에러 정책:
    - CWMError 계열: 그대로 재전파
    - 그 외 예외: ResourceError("Analysis failed: ...")로 감싸서 전파

Example:
    analyzer = MetricsAnalyzer()
    result = analyzer.analyze("template.yaml", AnalysisOptions(continue_on_error=True))
    print(result.metadata.supported_resources, len(result.resources))
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import FIRST_COMPLETED, Future, wait
from pathlib import Path
from typing import Any, TypeVar

from core.config import PROCESSING_TIME_WARNING_MS
from core.exceptions import CWMError, ResourceError
from core.generators.registry import GeneratorRegistry, build_default_registry
from core.metrics.types import AnalysisResult, AnalysisStatistics
from core.parallel import ErrorCollector, MemoryBudgetMonitor, ParallelConfig, ParallelGenerationExecutor
from core.parallel.budget import get_memory_usage
from core.template.parser import TemplateParser

from .assembler import PhaseTimings, ResultAssembler
from .classifier import classify_resources
from .options import AnalysisOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_in_daemon_thread(fn: Callable[..., T], *args: Any) -> Future[T]:
    """fn을 데몬 스레드에서 실행하고 결과를 담을 Future 반환"""
    future: Future[T] = Future()

    def runner() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args)
        except BaseException as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    threading.Thread(target=runner, name="cwm-analysis", daemon=True).start()
    return future


class MetricsAnalyzer:
    """CloudFormation 템플릿 → 권장 CloudWatch 메트릭 분석기

    레지스트리와 마지막 통계는 호출 간에 유지되며, 그 외 상태는 호출마다 새로 만듭니다.
    마지막 통계 슬롯은 잠금 없이 덮어쓰므로 동시 호출 시 마지막으로 끝난 호출이 남습니다.
    """

    def __init__(
        self,
        parser: TemplateParser | None = None,
        registry: GeneratorRegistry | None = None,
        memory_sampler: Callable[[], int] | None = None,
    ):
        self.parser = parser or TemplateParser()
        self.registry = registry if registry is not None else build_default_registry()
        self.memory_sampler = memory_sampler or get_memory_usage
        self.assembler = ResultAssembler()
        self._last_statistics: AnalysisStatistics | None = None

    def analyze(self, template_path: str | Path, options: AnalysisOptions | None = None) -> AnalysisResult:
        """템플릿 분석

        Args:
            template_path: CloudFormation 템플릿 경로 (YAML/JSON)
            options: 분석 옵션 (None이면 기본값)

        Returns:
            AnalysisResult

        Raises:
            TemplateFileError: 파일 없음/읽기 실패/크기 초과
            TemplateParseError: 문법 오류/구조 오류
            MemoryLimitError: 메모리 한도 초과
            ResourceError: 리소스 생성 실패 (continue_on_error=False) 또는 예기치 않은 오류
        """
        options = options or AnalysisOptions()
        path = str(template_path)
        timings = PhaseTimings()
        monitor: MemoryBudgetMonitor | None = None

        logger.info(f"템플릿 분석 시작: {path}")

        try:
            if options.memory_limit is not None:
                monitor = MemoryBudgetMonitor(options.memory_limit, sampler=self.memory_sampler)
                monitor.check_upfront()
                monitor.start()
                result, statistics = self._race_with_monitor(monitor, path, options, timings)
            else:
                result, statistics = self._perform_analysis(path, options, timings, None)
        except CWMError as e:
            logger.error(f"분석 실패: {e.message}")
            raise
        except Exception as e:
            logger.error(f"분석 중 예기치 않은 오류: {e}")
            raise ResourceError(
                f"Analysis failed: {e}",
                cause=e,
                details={"original_error": str(e)},
            ) from e
        finally:
            if monitor is not None:
                monitor.stop()

        self._last_statistics = statistics

        processing_ms = result.metadata.processing_time_ms
        if processing_ms > PROCESSING_TIME_WARNING_MS:
            logger.warning(f"처리 시간이 목표({PROCESSING_TIME_WARNING_MS}ms)를 초과했습니다: {processing_ms}ms")
        return result

    def _race_with_monitor(
        self,
        monitor: MemoryBudgetMonitor,
        path: str,
        options: AnalysisOptions,
        timings: PhaseTimings,
    ) -> tuple[AnalysisResult, AnalysisStatistics]:
        work = _run_in_daemon_thread(self._perform_analysis, path, options, timings, monitor)
        done, _ = wait([work, monitor.future], return_when=FIRST_COMPLETED)
        if work in done:
            return work.result()
        # 작업 스레드는 기다리지 않고 결과를 버림
        logger.warning("메모리 한도 초과로 진행 중인 분석을 중단합니다")
        monitor.future.result()
        raise ResourceError("Memory monitor finished without a violation")

    def _perform_analysis(
        self,
        path: str,
        options: AnalysisOptions,
        timings: PhaseTimings,
        monitor: MemoryBudgetMonitor | None,
    ) -> tuple[AnalysisResult, AnalysisStatistics]:
        # 1. 파싱
        phase_start = time.perf_counter()
        template = self.parser.parse(path)
        timings.parse_ms = (time.perf_counter() - phase_start) * 1000

        # 2. 분류
        phase_start = time.perf_counter()
        template_resources = template.get("Resources") or {}
        classification = classify_resources(template_resources, self.registry, options.resource_types)
        timings.extract_ms = (time.perf_counter() - phase_start) * 1000

        if options.verbose:
            logger.info(
                f"리소스 분류: 지원 {len(classification.supported)}개, 미지원 {len(classification.unsupported)}개"
            )

        # 3. 병렬 메트릭 생성
        phase_start = time.perf_counter()
        collector = ErrorCollector()
        executor = ParallelGenerationExecutor(
            self.registry,
            ParallelConfig(
                max_workers=options.concurrency,
                continue_on_error=options.continue_on_error,
                include_low_importance=options.include_low_importance,
            ),
        )
        resources = executor.execute(classification.supported, collector)
        timings.generator_ms = (time.perf_counter() - phase_start) * 1000

        # 4. 결과 조립
        memory_peak = self.memory_sampler()
        if monitor is not None:
            memory_peak = max(memory_peak, monitor.peak_bytes)

        return self.assembler.assemble(
            template_path=path,
            template_resources=template_resources,
            classification=classification,
            resources=resources,
            errors=collector.errors,
            options=options,
            timings=timings,
            memory_peak_bytes=memory_peak,
        )

    def get_registered_generators(self) -> list[str]:
        """등록된 생성기 이름 목록 (진단용)"""
        return self.registry.generator_names()

    def get_analysis_statistics(self) -> AnalysisStatistics | None:
        """가장 최근에 성공한 분석의 통계"""
        return self._last_statistics

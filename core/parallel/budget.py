"""
core/parallel/budget.py - 메모리 예산 감시

분석 작업과 나란히 실행되는 감시 스레드입니다. 일정 주기(기본 50ms)로 프로세스 메모리를
확인하고, 한도를 넘으면 스스로 멈춘 뒤 future를 MemoryLimitError로 실패시킵니다.
정상 상태에서는 future가 완료되지 않으므로, 호출자는 본 작업과 future 중 먼저 끝나는 쪽을 기다립니다.

Example:
    monitor = MemoryBudgetMonitor(limit_bytes=512 * 1024 * 1024)
    monitor.check_upfront()
    monitor.start()
    try:
        done, _ = wait([work_future, monitor.future], return_when=FIRST_COMPLETED)
    finally:
        monitor.stop()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future

import psutil

from core.config import MEMORY_CHECK_INTERVAL_SEC
from core.exceptions import MemoryLimitError

logger = logging.getLogger(__name__)

MB = 1024 * 1024


def get_memory_usage() -> int:
    """프로세스 현재 상주 메모리(RSS, bytes)

    매 호출 시점의 값을 반환하므로 메모리를 해제하면 줄어듭니다.
    최대값은 MemoryBudgetMonitor.peak_bytes가 따로 기록합니다.
    """
    return psutil.Process().memory_info().rss


def _mb(value: int) -> str:
    return f"{value / MB:.1f}"


class MemoryBudgetMonitor:
    """메모리 한도 감시기

    Attributes:
        limit_bytes: 메모리 한도 (bytes)
        interval: 점검 주기 (초)
        future: 한도 초과 시에만 MemoryLimitError로 완료되는 Future
        peak_bytes: 관측된 최대 사용량
    """

    def __init__(
        self,
        limit_bytes: int,
        interval: float = MEMORY_CHECK_INTERVAL_SEC,
        sampler: Callable[[], int] = get_memory_usage,
    ):
        self.limit_bytes = limit_bytes
        self.interval = interval
        self.sampler = sampler
        self.future: Future[None] = Future()
        self.peak_bytes = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def _sample(self) -> int:
        usage = self.sampler()
        if usage > self.peak_bytes:
            self.peak_bytes = usage
        return usage

    def check_upfront(self) -> None:
        """작업 시작 전 1회 점검

        Raises:
            MemoryLimitError: 현재 사용량이 이미 한도를 넘은 경우
        """
        usage = self._sample()
        if usage > self.limit_bytes:
            raise MemoryLimitError(
                f"Memory usage already exceeds limit: {_mb(usage)}MB (limit: {self.limit_bytes / MB:.0f}MB)",
                usage_bytes=usage,
                limit_bytes=self.limit_bytes,
            )

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="cwm-memory-monitor", daemon=True)
        self._thread.start()
        logger.debug(f"메모리 감시 시작: limit={_mb(self.limit_bytes)}MB, interval={self.interval * 1000:.0f}ms")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            usage = self._sample()
            logger.debug(f"메모리 사용량: {_mb(usage)}MB")
            if usage > self.limit_bytes:
                self._stop_event.set()
                error = MemoryLimitError(
                    f"Memory usage exceeded: {_mb(usage)}MB (limit: {self.limit_bytes / MB:.0f}MB)",
                    usage_bytes=usage,
                    limit_bytes=self.limit_bytes,
                )
                logger.error(error.message)
                self.future.set_exception(error)
                return

    def stop(self) -> None:
        """감시 중지 (여러 번 호출해도 안전)"""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(self.interval * 4, 0.5))

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> MemoryBudgetMonitor:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

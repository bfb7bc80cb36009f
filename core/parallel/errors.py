"""
core/parallel/errors.py - 리소스 단위 에러 수집

병렬 메트릭 생성 중 여러 워커 스레드에서 발생하는 실패를 안전하게 모읍니다.

Example:
    collector = ErrorCollector()

    try:
        metrics = generator.generate(resource)
    except Exception as e:
        collector.collect(resource, e)

    if collector.has_errors:
        print(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
import traceback

from core.metrics.types import AnalysisError
from core.template.types import ResourceDescriptor

logger = logging.getLogger(__name__)


def _format_stack(error: BaseException) -> str | None:
    if error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class ErrorCollector:
    """스레드 세이프 에러 수집기"""

    def __init__(self) -> None:
        self._errors: list[AnalysisError] = []
        self._lock = threading.Lock()

    def collect(self, resource: ResourceDescriptor, error: BaseException) -> AnalysisError:
        """실패한 리소스의 에러 기록

        Args:
            resource: 메트릭 생성에 실패한 리소스
            error: 발생한 예외

        Returns:
            기록된 AnalysisError
        """
        entry = AnalysisError(
            resource_id=resource.logical_id,
            resource_type=resource.resource_type,
            error=str(error),
            stack=_format_stack(error),
        )
        with self._lock:
            self._errors.append(entry)
        logger.debug(f"에러 수집: {resource.logical_id} ({resource.resource_type}) - {error}")
        return entry

    @property
    def errors(self) -> list[AnalysisError]:
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return bool(self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)

    def get_summary(self) -> str:
        errors = self.errors
        if not errors:
            return "에러 없음"

        lines = [f"메트릭 생성 실패 {len(errors)}건:"]
        for err in errors[:5]:
            lines.append(f"  - {err.resource_id} ({err.resource_type}): {err.error}")
        if len(errors) > 5:
            lines.append(f"  ... 외 {len(errors) - 5}건")
        return "\n".join(lines)

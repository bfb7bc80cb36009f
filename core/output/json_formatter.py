"""
core/output/json_formatter.py - JSON 출력 포매터
"""

from __future__ import annotations

import json
import logging
import time

from core.config import JSON_OUTPUT_WARNING_BYTES
from core.exceptions import CWMError, OutputError
from core.generators.base import validate_metric_definition
from core.metrics.types import AnalysisResult

logger = logging.getLogger(__name__)

FORMAT_WARNING_MS = 2_000


class JSONOutputFormatter:
    """AnalysisResult → JSON 문자열

    AnalysisResult.to_dict() 스키마를 그대로 직렬화합니다 (indent 2, 비ASCII 유지).
    출력 전에 모든 메트릭 정의를 검증하며, 위반이 있으면 OutputError를 발생시킵니다.
    """

    def format(self, result: AnalysisResult) -> str:
        start_time = time.perf_counter()

        try:
            if not isinstance(result, AnalysisResult):
                raise OutputError(
                    "Invalid analysis result provided",
                    details={"received": type(result).__name__},
                )

            errors = self._validate(result)
            if errors:
                raise OutputError(
                    f"JSON output validation failed: {'; '.join(errors)}",
                    details={"validation_errors": errors},
                )

            json_string = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
        except CWMError:
            raise
        except (TypeError, ValueError) as e:
            raise OutputError(
                f"Failed to format JSON output: {e}",
                cause=e,
                details={"original_error": str(e)},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        if duration_ms > FORMAT_WARNING_MS:
            logger.warning(f"JSON 포맷팅 지연: {duration_ms:.0f}ms")

        size = len(json_string.encode("utf-8"))
        if size > JSON_OUTPUT_WARNING_BYTES:
            logger.warning(f"JSON 출력 크기가 큽니다: {size / 1024 / 1024:.1f}MB")

        return json_string

    @staticmethod
    def _validate(result: AnalysisResult) -> list[str]:
        errors: list[str] = []
        for resource in result.resources:
            for index, metric in enumerate(resource.metrics):
                validation = validate_metric_definition(metric)
                errors.extend(f"{resource.logical_id}.metrics[{index}]: {e}" for e in validation.errors)
        return errors

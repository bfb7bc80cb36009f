"""
core/analysis/options.py - 분석 옵션
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import DEFAULT_CONCURRENCY, MAX_CONCURRENCY


@dataclass
class AnalysisOptions:
    """분석 옵션

    Attributes:
        output_format: 출력 형식 ("json" | "html" | "cdk"), 분석 자체에는 영향 없음
        resource_types: 허용 리소스 타입 목록 (None이면 전체)
        include_unsupported: False면 결과의 unsupported_resources를 비움
        include_low_importance: False면 Low 중요도 메트릭 제외
        concurrency: 메트릭 생성 워커 수 (1~100)
        verbose: 상세 로그
        collect_metrics: 결과에 performance_metrics 포함
        continue_on_error: True면 리소스 단위 실패를 errors에 기록하고 계속 진행
        memory_limit: 메모리 한도 (bytes), 설정 시 메모리 감시 활성화
    """

    output_format: str = "json"
    resource_types: list[str] | None = None
    include_unsupported: bool = True
    include_low_importance: bool = True
    concurrency: int = DEFAULT_CONCURRENCY
    verbose: bool = False
    collect_metrics: bool = False
    continue_on_error: bool = False
    memory_limit: int | None = None

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.concurrency > MAX_CONCURRENCY:
            self.concurrency = MAX_CONCURRENCY
        if self.memory_limit is not None and self.memory_limit <= 0:
            raise ValueError(f"memory_limit must be > 0, got {self.memory_limit}")

"""
core/parallel - 병렬 처리 모듈

메트릭 생성을 워커 스레드로 팬아웃하고, 실패 수집과 메모리 예산 감시를 제공합니다.

주요 구성 요소:
- ParallelGenerationExecutor: 리소스별 메트릭 생성 병렬 실행기
- ErrorCollector: 스레드 세이프 에러 수집기
- MemoryBudgetMonitor: 메모리 한도 감시 스레드

Example:
    from core.parallel import ErrorCollector, ParallelConfig, ParallelGenerationExecutor

    executor = ParallelGenerationExecutor(registry, ParallelConfig(max_workers=6, continue_on_error=True))
    collector = ErrorCollector()
    resources = executor.execute(supported, collector)
    print(f"성공: {len(resources)}, 실패: {len(collector)}")
"""

from .budget import MemoryBudgetMonitor, get_memory_usage
from .errors import ErrorCollector
from .executor import ParallelConfig, ParallelGenerationExecutor

__all__ = [
    "ErrorCollector",
    "MemoryBudgetMonitor",
    "ParallelConfig",
    "ParallelGenerationExecutor",
    "get_memory_usage",
]

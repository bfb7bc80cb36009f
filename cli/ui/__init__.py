# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

안내 메시지, 통계 패널, 로깅 핸들러 설정 등 CLI 전용 출력 유틸리티
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    configure_logging,
    console,
    get_console,
    print_error,
    print_info,
    print_statistics,
    print_success,
    print_table,
    print_warning,
)

__all__: list[str] = [
    "console",
    "get_console",
    "configure_logging",
    # 표준 출력 심볼
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "SYMBOL_INFO",
    # 메시지 출력
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_table",
    "print_statistics",
]

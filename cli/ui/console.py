"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들.
stdout은 분석 결과(JSON/HTML) 전용이므로 안내 메시지와 로그는 모두 stderr 콘솔로 출력합니다.
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# 로그를 출력할 최상위 로거
LOGGER_NAMES = ("core", "plugins", "shared", "cli")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다 (stderr)."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=True,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def configure_logging(verbose: bool = False, level: str | None = None) -> int:
    """CLI 로깅 설정

    core/plugins/shared/cli 로거에 RichHandler를 연결합니다. 여러 번 호출해도
    핸들러는 하나만 유지됩니다.

    Args:
        verbose: True면 DEBUG
        level: 로그 레벨 이름 ("debug", "info", "warning", "error"), verbose보다 우선순위 낮음

    Returns:
        적용된 로그 레벨
    """
    log_level = logging.DEBUG if verbose else LOG_LEVELS.get((level or "warning").lower(), logging.WARNING)

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    handler.set_name("cwm-rich")

    for name in LOGGER_NAMES:
        target = logging.getLogger(name)
        for existing in list(target.handlers):
            if existing.get_name() == "cwm-rich":
                target.removeHandler(existing)
        target.addHandler(handler)
        target.setLevel(log_level)

    return log_level


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력"""
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_table(title: str, columns: list[str], rows: list[list]) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_statistics(stats: dict[str, object], title: str = "분석 통계") -> None:
    """키-값 통계 패널 출력"""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    for key, value in stats.items():
        table.add_row(key, str(value))
    console.print(Panel(table, title=title, border_style="cyan"))

"""출력 파일 헬퍼 함수

Usage:
    from shared.io.output import write_output

    path = write_output(json_text, "reports/metrics.json")
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.exceptions import OutputError

logger = logging.getLogger(__name__)


def write_output(content: str, output_file: str | Path) -> Path:
    """출력 문자열을 파일로 저장 (상위 디렉토리 자동 생성)

    Args:
        content: 저장할 문자열
        output_file: 출력 파일 경로

    Returns:
        저장된 파일 경로

    Raises:
        OutputError: 디렉토리 생성/쓰기 실패
    """
    path = Path(output_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(
            f"Failed to write output file: {e}",
            cause=e,
            file_path=str(path),
            details={"original_error": str(e)},
        ) from e

    logger.info(f"출력 저장: {path} ({len(content.encode('utf-8')):,} bytes)")
    return path


def default_output_filename(template_path: str | Path, format_name: str) -> str:
    """템플릿 이름 기반 기본 출력 파일명 (예: stack.yaml → stack-metrics.html)"""
    return f"{Path(template_path).stem}-metrics.{format_name}"

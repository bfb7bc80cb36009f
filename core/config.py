"""
core/config.py - 중앙 설정 관리

버전 정보와 분석 파이프라인 전반에서 사용하는 기본값/한계값을 정의합니다.

Usage:
    from core.config import get_version, DEFAULT_CONCURRENCY

    version = get_version()  # "1.0.0"
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
VERSION_FILE = PROJECT_ROOT / "version.txt"
DEFAULT_VERSION = "1.0.0"

# =============================================================================
# 분석 기본값
# =============================================================================

RESULT_SCHEMA_VERSION = "1.0.0"

DEFAULT_CONCURRENCY = 6
PERFORMANCE_MODE_CONCURRENCY = 10
MAX_CONCURRENCY = 100

# 메모리 감시 주기 (초)
MEMORY_CHECK_INTERVAL_SEC = 0.05

# 소프트 목표치 - 초과 시 경고 로그만 남김
PROCESSING_TIME_WARNING_MS = 30_000
TEMPLATE_READ_WARNING_MS = 5_000
GENERATION_WARNING_MS = 1_000
JSON_OUTPUT_WARNING_BYTES = 5 * 1024 * 1024

MAX_TEMPLATE_SIZE_BYTES = 50 * 1024 * 1024

REDACTED = "[REDACTED]"

# 로그 레벨 기본값 환경변수
LOG_LEVEL_ENV = "CWM_LOG_LEVEL"


@lru_cache(maxsize=1)
def get_version() -> str:
    """버전 문자열 반환

    version.txt 파일에서 버전을 읽고, 없으면 기본값을 사용합니다.
    """
    try:
        version = VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug(f"version.txt 읽기 실패, 기본값 사용: {e}")
        return DEFAULT_VERSION
    return version or DEFAULT_VERSION


def get_default_log_level() -> str:
    """환경변수 CWM_LOG_LEVEL 기반 기본 로그 레벨 (기본: warning)"""
    return os.environ.get(LOG_LEVEL_ENV, "warning").lower()

"""
tests/core/test_core_config.py - core/config.py 테스트
"""

from unittest.mock import patch

import pytest

from core import config
from core.config import (
    DEFAULT_CONCURRENCY,
    MAX_CONCURRENCY,
    PERFORMANCE_MODE_CONCURRENCY,
    RESULT_SCHEMA_VERSION,
    get_default_log_level,
    get_version,
)


class TestGetVersion:
    """get_version 함수 테스트"""

    @pytest.fixture(autouse=True)
    def clear_cache(self):
        get_version.cache_clear()
        yield
        get_version.cache_clear()

    def test_reads_version_file(self, tmp_path):
        """version.txt 내용 반환"""
        version_file = tmp_path / "version.txt"
        version_file.write_text("2.3.4\n", encoding="utf-8")

        with patch.object(config, "VERSION_FILE", version_file):
            assert get_version() == "2.3.4"

    def test_missing_file_returns_default(self, tmp_path):
        """파일이 없으면 기본값"""
        with patch.object(config, "VERSION_FILE", tmp_path / "missing.txt"):
            assert get_version() == config.DEFAULT_VERSION

    def test_empty_file_returns_default(self, tmp_path):
        """빈 파일이면 기본값"""
        version_file = tmp_path / "version.txt"
        version_file.write_text("   \n", encoding="utf-8")

        with patch.object(config, "VERSION_FILE", version_file):
            assert get_version() == config.DEFAULT_VERSION


class TestDefaultLogLevel:
    """get_default_log_level 함수 테스트"""

    def test_default_is_warning(self, monkeypatch):
        monkeypatch.delenv("CWM_LOG_LEVEL", raising=False)
        assert get_default_log_level() == "warning"

    def test_env_override_is_lowercased(self, monkeypatch):
        monkeypatch.setenv("CWM_LOG_LEVEL", "DEBUG")
        assert get_default_log_level() == "debug"


class TestConstants:
    """분석 기본값 상수 테스트"""

    def test_concurrency_defaults(self):
        assert DEFAULT_CONCURRENCY == 6
        assert PERFORMANCE_MODE_CONCURRENCY == 10
        assert MAX_CONCURRENCY == 100

    def test_schema_version(self):
        assert RESULT_SCHEMA_VERSION == "1.0.0"

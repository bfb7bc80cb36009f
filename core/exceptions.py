"""
core/exceptions.py - 통합 예외 계층 구조

분석 파이프라인 전체에서 사용되는 예외 클래스들을 정의합니다.
모든 예외는 ErrorType으로 분류되며, CLI는 이 분류로 종료 코드와 안내 문구를 결정합니다.

예외 계층 구조:
    CWMError (베이스)
    ├── TemplateFileError (FILE_ERROR) - 파일 없음/읽기 실패/크기 초과
    ├── TemplateParseError (PARSE_ERROR) - 문법 오류/구조 검증 실패
    ├── ResourceError (RESOURCE_ERROR) - 메트릭 생성 실패, 분석 실패
    │   └── MemoryLimitError - 메모리 한도 초과
    └── OutputError (OUTPUT_ERROR) - 출력 포맷팅 실패

Usage:
    from core.exceptions import ResourceError, get_exit_code

    try:
        result = analyzer.analyze("template.yaml")
    except CWMError as e:
        print(format_error_for_user(e))
        sys.exit(get_exit_code(e))
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorType(str, Enum):
    """에러 분류"""

    FILE_ERROR = "FILE_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    RESOURCE_ERROR = "RESOURCE_ERROR"
    OUTPUT_ERROR = "OUTPUT_ERROR"


EXIT_CODES: dict[ErrorType, int] = {
    ErrorType.FILE_ERROR: 1,
    ErrorType.PARSE_ERROR: 2,
    ErrorType.RESOURCE_ERROR: 3,
    ErrorType.OUTPUT_ERROR: 4,
}

SUGGESTIONS: dict[ErrorType, str] = {
    ErrorType.FILE_ERROR: "파일이 존재하는지, 읽기 권한이 있는지 확인하세요",
    ErrorType.PARSE_ERROR: "'cfn-lint' 등으로 CloudFormation 템플릿 문법을 검증하세요",
    ErrorType.RESOURCE_ERROR: "리소스 설정과 지원 리소스 타입을 확인하세요",
    ErrorType.OUTPUT_ERROR: "출력 경로와 쓰기 권한을 확인하세요",
}

# =============================================================================
# 베이스 예외
# =============================================================================


class CWMError(Exception):
    """CloudWatch 메트릭 분석기 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        error_type: 에러 분류
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
        file_path: 관련 파일 경로
        line_number: 관련 라인 번호
    """

    error_type: ErrorType = ErrorType.RESOURCE_ERROR

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
        file_path: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        self.file_path = file_path
        self.line_number = line_number
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """구조화된 에러 출력용 딕셔너리"""
        return {
            "error": self.error_type.value,
            "message": self.message,
            "details": self.details,
            "file_path": self.file_path,
            "line_number": self.line_number,
            "timestamp": self.timestamp.isoformat(),
        }


class TemplateFileError(CWMError):
    """템플릿 파일 접근 실패 (없음, 읽기 불가, 크기 초과)"""

    error_type = ErrorType.FILE_ERROR


class TemplateParseError(CWMError):
    """템플릿 문법/구조 오류"""

    error_type = ErrorType.PARSE_ERROR


class ResourceError(CWMError):
    """리소스 단위 메트릭 생성 실패 또는 분석 전체 실패"""

    error_type = ErrorType.RESOURCE_ERROR


class MemoryLimitError(ResourceError):
    """메모리 한도 초과"""

    def __init__(self, message: str, usage_bytes: int, limit_bytes: int):
        super().__init__(
            message,
            details={
                "memory_usage_mb": round(usage_bytes / 1024 / 1024, 1),
                "memory_limit_mb": round(limit_bytes / 1024 / 1024, 1),
            },
        )
        self.usage_bytes = usage_bytes
        self.limit_bytes = limit_bytes


class OutputError(CWMError):
    """출력 포맷팅/저장 실패"""

    error_type = ErrorType.OUTPUT_ERROR


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_file_error(error: BaseException) -> bool:
    return isinstance(error, CWMError) and error.error_type == ErrorType.FILE_ERROR


def is_parse_error(error: BaseException) -> bool:
    return isinstance(error, CWMError) and error.error_type == ErrorType.PARSE_ERROR


def is_resource_error(error: BaseException) -> bool:
    return isinstance(error, CWMError) and error.error_type == ErrorType.RESOURCE_ERROR


def is_output_error(error: BaseException) -> bool:
    return isinstance(error, CWMError) and error.error_type == ErrorType.OUTPUT_ERROR


def get_exit_code(error: BaseException) -> int:
    """에러 분류별 프로세스 종료 코드

    Returns:
        FILE 1, PARSE 2, RESOURCE 3, OUTPUT 4, 그 외 1
    """
    if isinstance(error, CWMError):
        return EXIT_CODES[error.error_type]
    return 1


def get_suggestion(error_type: ErrorType) -> str:
    """에러 분류별 해결 안내 문구"""
    return SUGGESTIONS[error_type]


def format_error_for_user(error: BaseException) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        "<분류 라벨>: <메시지>" 형식의 문자열
    """
    if not isinstance(error, CWMError):
        return f"Unexpected error: {error}"

    labels = {
        ErrorType.FILE_ERROR: "File error",
        ErrorType.PARSE_ERROR: "Template parse error",
        ErrorType.RESOURCE_ERROR: "Resource error",
        ErrorType.OUTPUT_ERROR: "Output error",
    }
    text = f"{labels[error.error_type]}: {error.message}"
    if error.file_path:
        location = error.file_path
        if error.line_number is not None:
            location = f"{location}:{error.line_number}"
        text = f"{text} ({location})"
    return text

"""출력 설정 모듈

분석 결과 출력 형식 및 옵션 설정

Usage:
    from shared.io.config import OutputConfig, OutputFormat

    config = OutputConfig.from_string("html")
    config.output_file = "reports/metrics.html"

    if config.should_output_html():
        # HTML 출력
        pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag, auto

from core.exceptions import OutputError


class OutputFormat(Flag):
    """출력 형식 플래그

    Usage:
        fmt = OutputFormat.JSON

        if OutputFormat.HTML in fmt:
            ...
    """

    NONE = 0
    JSON = auto()
    HTML = auto()
    CDK = auto()

    @property
    def format_name(self) -> str:
        """포매터 이름 ("json" | "html" | "cdk")"""
        return (self.name or "none").lower()


FORMAT_MAP = {
    "json": OutputFormat.JSON,
    "html": OutputFormat.HTML,
    "cdk": OutputFormat.CDK,
}


@dataclass
class OutputConfig:
    """출력 설정

    Attributes:
        format: 출력 형식 (기본 JSON)
        output_file: 출력 파일 경로 (None이면 stdout)
        auto_open: HTML 저장 후 브라우저 자동 열기
    """

    format: OutputFormat = field(default=OutputFormat.JSON)
    output_file: str | None = None
    auto_open: bool = False

    def should_output_json(self) -> bool:
        """JSON 출력 여부"""
        return OutputFormat.JSON in self.format

    def should_output_html(self) -> bool:
        """HTML 출력 여부"""
        return OutputFormat.HTML in self.format

    def should_output_cdk(self) -> bool:
        """CDK 코드 출력 여부"""
        return OutputFormat.CDK in self.format

    @property
    def writes_to_stdout(self) -> bool:
        return not self.output_file

    @classmethod
    def from_string(cls, format_str: str, output_file: str | None = None, auto_open: bool = False) -> OutputConfig:
        """문자열에서 OutputConfig 생성

        Args:
            format_str: 형식 문자열 ("json", "html", "cdk")
            output_file: 출력 파일 경로
            auto_open: 브라우저 자동 열기

        Raises:
            OutputError: 지원하지 않는 형식
        """
        output_format = FORMAT_MAP.get(format_str.lower())
        if output_format is None:
            raise OutputError(
                f"Unsupported output format: {format_str}",
                details={"supported_formats": list(FORMAT_MAP)},
            )
        return cls(format=output_format, output_file=output_file, auto_open=auto_open)

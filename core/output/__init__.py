"""
core/output - 분석 결과 출력

Usage:
    from core.output import get_formatter

    formatter = get_formatter("html")
    text = formatter.format(result)

    code = CDKOutputFormatter(CDKOptions(stack_name="my-alarms")).format(result)
"""

from __future__ import annotations

from core.exceptions import OutputError

from .cdk_formatter import CDKOptions, CDKOutputFormatter
from .cdk_validator import CDKValidationResult, validate_cdk_code
from .html_formatter import HTMLOutputFormatter, format_threshold_value
from .json_formatter import JSONOutputFormatter
from .report import MetricsReport, open_in_browser

FORMATTERS = {
    "json": JSONOutputFormatter,
    "html": HTMLOutputFormatter,
    "cdk": CDKOutputFormatter,
}


def get_formatter(output_format: str) -> JSONOutputFormatter | HTMLOutputFormatter | CDKOutputFormatter:
    """출력 형식 이름으로 포매터 생성

    Raises:
        OutputError: 지원하지 않는 형식
    """
    formatter_cls = FORMATTERS.get(str(output_format).lower())
    if formatter_cls is None:
        raise OutputError(
            f"Unsupported output format: {output_format}",
            details={"supported_formats": list(FORMATTERS)},
        )
    return formatter_cls()


__all__ = [
    "CDKOptions",
    "CDKOutputFormatter",
    "CDKValidationResult",
    "FORMATTERS",
    "HTMLOutputFormatter",
    "JSONOutputFormatter",
    "MetricsReport",
    "format_threshold_value",
    "get_formatter",
    "open_in_browser",
    "validate_cdk_code",
]

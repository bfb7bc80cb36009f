"""
tests/shared/io/test_io_config.py - 출력 설정 테스트
"""

import pytest

from core.exceptions import OutputError
from shared.io.config import OutputConfig, OutputFormat


class TestOutputFormat:
    def test_format_name(self):
        assert OutputFormat.JSON.format_name == "json"
        assert OutputFormat.HTML.format_name == "html"
        assert OutputFormat.CDK.format_name == "cdk"

    def test_flag_membership(self):
        fmt = OutputFormat.JSON | OutputFormat.HTML

        assert OutputFormat.JSON in fmt
        assert OutputFormat.HTML in fmt


class TestOutputConfig:
    """OutputConfig 테스트"""

    def test_defaults(self):
        config = OutputConfig()

        assert config.should_output_json()
        assert not config.should_output_html()
        assert config.writes_to_stdout

    @pytest.mark.parametrize("format_str", ["html", "HTML", "Html"])
    def test_from_string_case_insensitive(self, format_str):
        config = OutputConfig.from_string(format_str, output_file="out.html", auto_open=True)

        assert config.format == OutputFormat.HTML
        assert config.should_output_html()
        assert not config.writes_to_stdout
        assert config.auto_open

    def test_from_string_cdk(self):
        config = OutputConfig.from_string("cdk")

        assert config.should_output_cdk()
        assert not config.should_output_json()
        assert config.writes_to_stdout

    def test_unsupported_format(self):
        with pytest.raises(OutputError) as exc_info:
            OutputConfig.from_string("csv")

        assert exc_info.value.message == "Unsupported output format: csv"
        assert exc_info.value.details["supported_formats"] == ["json", "html", "cdk"]

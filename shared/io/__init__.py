"""입출력 유틸리티.

하위 모듈:
- config: 출력 설정 (OutputConfig, OutputFormat)
- output: 출력 파일 저장
"""

from . import output
from .config import OutputConfig, OutputFormat

__all__: list[str] = [
    "output",
    "OutputConfig",
    "OutputFormat",
]

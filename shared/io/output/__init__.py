"""
shared/io/output - 출력 파일 관리
"""

from .helpers import default_output_filename, write_output

__all__ = ["default_output_filename", "write_output"]

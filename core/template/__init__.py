"""
core/template - CloudFormation 템플릿 파싱

- TemplateParser: YAML/JSON 템플릿 → dict
- ResourceDescriptor: 단일 리소스 (논리 ID, 타입, Properties)
"""

from .parser import TemplateParser, is_json_file, is_supported_template_file, is_yaml_file
from .types import ResourceDescriptor, to_number

__all__ = [
    "TemplateParser",
    "ResourceDescriptor",
    "is_json_file",
    "is_yaml_file",
    "is_supported_template_file",
    "to_number",
]

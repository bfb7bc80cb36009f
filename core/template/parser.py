"""
core/template/parser.py - CloudFormation 템플릿 파서

YAML/JSON 템플릿 파일을 읽어 dict 트리로 변환하고, 분석에 필요한 최소 구조를 검증합니다.

처리 단계:
    1. 파일 검증 (존재, 일반 파일, 50MB 이하)
    2. UTF-8 읽기
    3. 확장자 기반 파싱 (.json → json, 그 외 → YAML)
    4. 구조 검증 (Resources 존재/비어있지 않음, 각 리소스의 Type)

YAML 단축 태그(!Ref, !GetAtt, !Sub 등)는 긴 형식({"Ref": ...}, {"Fn::GetAtt": [...]})으로 변환됩니다.

Usage:
    from core.template.parser import TemplateParser

    template = TemplateParser().parse("stack.yaml")
    resources = template["Resources"]
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

import yaml

from core.config import MAX_TEMPLATE_SIZE_BYTES, TEMPLATE_READ_WARNING_MS
from core.exceptions import CWMError, TemplateFileError, TemplateParseError

logger = logging.getLogger(__name__)

JSON_EXTENSIONS = (".json",)
YAML_EXTENSIONS = (".yaml", ".yml", ".template")

# 단축 태그 → 긴 형식 키
_INTRINSIC_TAGS = {
    "Ref": "Ref",
    "Condition": "Condition",
    "GetAtt": "Fn::GetAtt",
    "Sub": "Fn::Sub",
    "Join": "Fn::Join",
    "If": "Fn::If",
    "Equals": "Fn::Equals",
    "Not": "Fn::Not",
    "And": "Fn::And",
    "Or": "Fn::Or",
    "FindInMap": "Fn::FindInMap",
    "Select": "Fn::Select",
    "Split": "Fn::Split",
    "Base64": "Fn::Base64",
    "Cidr": "Fn::Cidr",
    "ImportValue": "Fn::ImportValue",
    "GetAZs": "Fn::GetAZs",
    "Transform": "Fn::Transform",
    "Length": "Fn::Length",
    "ToJsonString": "Fn::ToJsonString",
}


class CloudFormationLoader(yaml.SafeLoader):
    """CloudFormation 단축 태그를 이해하는 SafeLoader"""


# 날짜 형태 값(2010-09-09)은 문자열로 유지
CloudFormationLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_intrinsic(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> dict[str, Any]:
    key = _INTRINSIC_TAGS.get(tag_suffix)
    if key is None:
        raise yaml.constructor.ConstructorError(
            None, None, f"알 수 없는 CloudFormation 태그: !{tag_suffix}", node.start_mark
        )

    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
        # !GetAtt Resource.Attribute
        if key == "Fn::GetAtt" and isinstance(value, str):
            value = value.split(".", 1)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)

    return {key: value}


CloudFormationLoader.add_multi_constructor("!", _construct_intrinsic)


def is_json_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in JSON_EXTENSIONS


def is_yaml_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in YAML_EXTENSIONS


def is_supported_template_file(path: str | Path) -> bool:
    return is_json_file(path) or is_yaml_file(path)


class TemplateParser:
    """템플릿 파일 → dict 파서"""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        """템플릿 파일 파싱

        Args:
            file_path: 템플릿 파일 경로

        Returns:
            파싱된 템플릿 dict

        Raises:
            TemplateFileError: 파일 접근 실패, 크기 초과
            TemplateParseError: 문법 오류, 구조 검증 실패
        """
        path = Path(file_path)
        try:
            self._validate_file(path)
            content = self._read_file(path)
            template = self._parse_content(content, path)
            self._validate_structure(template, path)
            return template
        except CWMError:
            raise
        except Exception as e:
            raise TemplateFileError(
                f"Failed to parse template: {e}",
                cause=e,
                details={"original_error": str(e)},
                file_path=str(path),
            ) from e

    def _validate_file(self, path: Path) -> None:
        try:
            stat = path.stat()
        except OSError as e:
            code = type(e).__name__
            raise TemplateFileError(
                f"Cannot access file: {code}",
                cause=e,
                details={"error": code},
                file_path=str(path),
            ) from e

        if not path.is_file():
            raise TemplateFileError(f"Path is not a file: {path}", file_path=str(path))

        if stat.st_size > MAX_TEMPLATE_SIZE_BYTES:
            size_mb = stat.st_size / 1024 / 1024
            raise TemplateFileError(
                f"File too large: {size_mb:.1f}MB (max: {MAX_TEMPLATE_SIZE_BYTES // 1024 // 1024}MB)",
                details={"file_size": stat.st_size},
                file_path=str(path),
            )

    def _read_file(self, path: Path) -> str:
        start = time.perf_counter()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateFileError(
                f"Failed to read file: {e}",
                cause=e,
                details={"original_error": str(e)},
                file_path=str(path),
            ) from e

        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms > TEMPLATE_READ_WARNING_MS:
            logger.warning(f"템플릿 읽기 지연: {duration_ms:.0f}ms ({path})")
        return content

    def _parse_content(self, content: str, path: Path) -> Any:
        if is_json_file(path):
            try:
                return json.loads(content)
            except json.JSONDecodeError as e:
                raise TemplateParseError(
                    f"JSON syntax error: {e.msg}",
                    cause=e,
                    details={"line_number": e.lineno, "column_number": e.colno, "near_text": e.msg},
                    file_path=str(path),
                    line_number=e.lineno,
                ) from e

        try:
            return yaml.load(content, Loader=CloudFormationLoader)  # noqa: S506
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_number = mark.line + 1 if mark is not None else None
            details: dict[str, Any] = {"near_text": str(getattr(e, "problem", None) or e)}
            if mark is not None:
                details["line_number"] = line_number
                details["column_number"] = mark.column + 1
            raise TemplateParseError(
                f"YAML syntax error: {e}",
                cause=e,
                details=details,
                file_path=str(path),
                line_number=line_number,
            ) from e

    def _validate_structure(self, template: Any, path: Path) -> None:
        if not isinstance(template, dict):
            raise TemplateParseError("Template must be a valid object", file_path=str(path))

        resources = template.get("Resources")
        if not resources or not isinstance(resources, dict):
            if isinstance(resources, dict):
                raise TemplateParseError(
                    "Template Resources section is empty",
                    details={"near_text": "CloudFormation template must contain at least one resource definition"},
                    file_path=str(path),
                )
            raise TemplateParseError(
                'Template must contain "Resources" section',
                details={"near_text": 'CloudFormation template requires "Resources" section with at least one resource'},
                file_path=str(path),
            )

        if not template.get("AWSTemplateFormatVersion"):
            logger.warning("AWSTemplateFormatVersion 누락, 2010-09-09로 간주합니다")

        for logical_id, resource in resources.items():
            if not isinstance(resource, dict):
                raise TemplateParseError(
                    f'Resource "{logical_id}" must be an object',
                    details={"near_text": f"Resource {logical_id} has invalid structure"},
                    file_path=str(path),
                )
            resource_type = resource.get("Type")
            if not resource_type or not isinstance(resource_type, str):
                raise TemplateParseError(
                    f'Resource "{logical_id}" missing required "Type" property',
                    details={"near_text": f'Resource {logical_id} must have a Type property (e.g., "AWS::S3::Bucket")'},
                    file_path=str(path),
                )

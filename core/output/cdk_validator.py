"""
core/output/cdk_validator.py - 생성된 CDK 코드 검증

두 단계로 나뉩니다.

    - check_code_safety: 생성 직후 항상 실행. 위험한 호출이나 자격 증명 형태의 문자열이
      섞여 있으면 문제 목록을 반환하고, 포매터가 OutputError로 중단합니다.
    - validate_cdk_code: --validate-cdk 요청 시 실행하는 품질 점검.
      기본 구조, CloudWatch 알람 수 한도, construct ID 규칙, 사용되지 않는 import를 확인합니다.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# 계정당 알람 한도 관련
MAX_ALARMS_PER_STACK = 5_000
ALARM_COUNT_WARNING = 1_000
CONSTRUCT_COUNT_WARNING = 500

UNSAFE_CODE_PATTERNS = {
    r"\beval\(": "eval() call",
    r"\bFunction\(": "Function() constructor",
    r"\binnerHTML\b": "innerHTML access",
    r"document\.write": "document.write call",
}

SENSITIVE_PATTERNS = {
    r"AKIA[0-9A-Z]{16}": "AWS access key id",
    r"sk_live_[0-9a-zA-Z]+": "live API secret key",
    r"eyJ[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]+": "JWT token",
    r"arn:aws:iam::\d{12}:": "IAM ARN with account id",
}

CONSTRUCT_ID_PATTERN = re.compile(r'new cloudwatch\.Alarm\(this, "([^"]+)"')
CONSTRUCT_ID_RULE = re.compile(r"^[A-Z][a-zA-Z0-9]*Alarm$")
NEW_CONSTRUCT_PATTERN = re.compile(r"new \w+\.\w+\(")
IMPORT_PATTERN = re.compile(r"^import .+;$", re.M)
LOOSE_EQUALITY_PATTERN = re.compile(r"[^=!<>]==[^=]|!=[^=]")


def check_code_safety(code: str) -> list[str]:
    """생성 코드 안전성 점검 (발견된 문제 설명 목록, 없으면 빈 리스트)"""
    issues = [
        f"Unsafe code pattern detected: {label}"
        for pattern, label in UNSAFE_CODE_PATTERNS.items()
        if re.search(pattern, code)
    ]
    issues.extend(
        f"Sensitive information detected: {label}"
        for pattern, label in SENSITIVE_PATTERNS.items()
        if re.search(pattern, code)
    )
    return issues


@dataclass
class CDKValidationResult:
    """CDK 코드 품질 점검 결과

    Attributes:
        errors: 배포 전에 반드시 고쳐야 하는 문제
        warnings: 동작은 하지만 확인이 필요한 항목
        suggestions: 개선 제안
        metrics: code_length / alarm_count / import_count
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    metrics: dict[str, int] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "metrics": self.metrics,
        }


def validate_cdk_code(code: str) -> CDKValidationResult:
    """생성된 CDK TypeScript 코드 품질 점검"""
    result = CDKValidationResult()
    construct_ids = CONSTRUCT_ID_PATTERN.findall(code)

    _check_structure(code, result)
    _check_limits(code, construct_ids, result)
    _check_construct_ids(construct_ids, result)
    _check_imports(code, result)

    if 'ClusterName: "default"' in code:
        result.suggestions.append("Replace the placeholder ECS ClusterName \"default\" with the actual cluster name")

    result.metrics = {
        "code_length": len(code),
        "alarm_count": len(construct_ids),
        "import_count": len(IMPORT_PATTERN.findall(code)),
    }
    logger.debug(
        f"CDK 코드 점검: 오류 {len(result.errors)}건, 경고 {len(result.warnings)}건, 알람 {len(construct_ids)}개"
    )
    return result


def _check_structure(code: str, result: CDKValidationResult) -> None:
    if "import * as cdk from" not in code:
        result.errors.append("Missing aws-cdk-lib import")
    if "export class" not in code:
        result.errors.append("Missing exported stack class")
    if "extends cdk.Stack" not in code:
        result.errors.append("Stack class must extend cdk.Stack")

    if re.search(r"\bvar ", code):
        result.warnings.append("Use const or let instead of var")
    if LOOSE_EQUALITY_PATTERN.search(code):
        result.warnings.append("Use strict equality (=== / !==)")


def _check_limits(code: str, construct_ids: list[str], result: CDKValidationResult) -> None:
    alarm_count = len(construct_ids)
    if alarm_count > MAX_ALARMS_PER_STACK:
        result.errors.append(f"Too many alarms in one stack: {alarm_count} (limit: {MAX_ALARMS_PER_STACK})")
    elif alarm_count > ALARM_COUNT_WARNING:
        result.warnings.append(f"Large number of alarms: {alarm_count}. Consider splitting the stack")

    construct_count = len(NEW_CONSTRUCT_PATTERN.findall(code))
    if construct_count > CONSTRUCT_COUNT_WARNING:
        result.warnings.append(f"Large number of constructs: {construct_count}")


def _check_construct_ids(construct_ids: list[str], result: CDKValidationResult) -> None:
    for construct_id, count in Counter(construct_ids).items():
        if count > 1:
            result.errors.append(f"Duplicate construct ID: {construct_id}")
        if not CONSTRUCT_ID_RULE.match(construct_id):
            result.warnings.append(f"Construct ID should be PascalCase and end with 'Alarm': {construct_id}")


def _check_imports(code: str, result: CDKValidationResult) -> None:
    if "import * as sns from" in code and "sns.Topic" not in code:
        result.warnings.append("Unused import: aws-sns")
    if "import * as cloudwatch_actions from" in code and "cloudwatch_actions.SnsAction" not in code:
        result.warnings.append("Unused import: aws-cloudwatch-actions")

"""
core/output/cdk_formatter.py - AWS CDK(TypeScript) 알람 스택 출력 포매터

분석 결과의 메트릭마다 Warning/Critical 알람 두 개를 만드는 cdk.Stack 소스를 생성합니다.
코드는 templates/cdk_stack.ts.j2 (Jinja2)로 렌더링합니다.

    - construct ID: <논리 ID><메트릭 이름><Warning|Critical>Alarm (영숫자 PascalCase)
    - 비교 연산자: 낮을수록 나쁜 메트릭은 LESS_THAN_THRESHOLD, 나머지는 GREATER_THAN_THRESHOLD
    - SNS: 기존 토픽 ARN 연결 또는 새 토픽 생성 (선택)

렌더링 후 코드 정리(연속 빈 줄 축소, 줄 끝 공백 제거)와 안전성 점검을 거칩니다.

Example:
    formatter = CDKOutputFormatter(CDKOptions(stack_name="my-alarms", enable_sns=True))
    code = formatter.format(result)
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from core.exceptions import CWMError, OutputError
from core.generators.base import is_lower_worse
from core.metrics.types import AnalysisResult, ImportanceLevel, MetricDefinition, ResourceWithMetrics

from .cdk_validator import check_code_safety

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).with_name("templates")
TEMPLATE_NAME = "cdk_stack.ts.j2"

DEFAULT_STACK_NAME = "CloudWatchAlarmsStack"
MAX_STACK_NAME_LENGTH = 128
STACK_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
SNS_TOPIC_ARN_PATTERN = re.compile(r"^arn:(aws|aws-cn|aws-us-gov):sns:[a-z0-9-]+:\d{12}:[A-Za-z0-9_-]{1,256}$")

SEVERITIES = ("Warning", "Critical")

# 주 디멘션만으로는 메트릭이 식별되지 않는 타입의 추가 디멘션 (배포 전 실제 값으로 교체)
EXTRA_DIMENSIONS = {
    "AWS::ECS::Service": {"ClusterName": "default"},
}

DIGIT_WORDS = ("Zero", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")


# =============================================================================
# 입력 검증
# =============================================================================


def validate_stack_name(name: str) -> None:
    """CloudFormation 스택 이름 규칙 검사

    Raises:
        OutputError: 규칙 위반
    """
    if not name or not name.strip():
        raise OutputError("CDK stack name cannot be empty")
    if len(name) > MAX_STACK_NAME_LENGTH:
        raise OutputError(f"CDK stack name too long: {len(name)} characters (max: {MAX_STACK_NAME_LENGTH})")
    if not STACK_NAME_PATTERN.match(name):
        raise OutputError(
            f"Invalid CDK stack name: {name}",
            details={"rule": "must start with a letter and contain only letters, digits and hyphens"},
        )
    if name.endswith("-") or "--" in name:
        raise OutputError(f"Invalid CDK stack name: {name}", details={"rule": "no trailing or consecutive hyphens"})


def validate_sns_topic_arn(arn: str) -> None:
    """SNS 토픽 ARN 형식 검사 (arn:<partition>:sns:<region>:<account>:<topic>)

    Raises:
        OutputError: 형식 오류
    """
    parts = arn.split(":")
    if len(parts) != 6:
        raise OutputError(f"Invalid SNS topic ARN: expected 6 colon-separated parts, got {len(parts)}")
    if parts[0] != "arn":
        raise OutputError("Invalid SNS topic ARN: must start with 'arn:'")
    if parts[2] != "sns":
        raise OutputError(f"Invalid SNS topic ARN: service must be 'sns', got '{parts[2]}'")
    if not SNS_TOPIC_ARN_PATTERN.match(arn):
        raise OutputError(
            f"Invalid SNS topic ARN: {arn}",
            details={"expected": "arn:aws:sns:<region>:<12-digit account>:<topic name>"},
        )


# =============================================================================
# 이름 변환
# =============================================================================


def sanitize_identifier(value: str) -> str:
    """임의 문자열 → 영숫자 PascalCase 식별자 조각

    숫자로 시작하면 첫 자리를 영단어로 바꿉니다 (5XXError → FiveXXError).
    """
    parts = re.split(r"[^A-Za-z0-9]+", value)
    text = "".join(part[:1].upper() + part[1:] for part in parts if part)
    if text[:1].isdigit():
        text = DIGIT_WORDS[int(text[0])] + text[1:]
    return text or "Resource"


def stack_class_name(stack_name: str) -> str:
    """스택 이름 → TypeScript 클래스 이름 (my-alarms → MyAlarms)"""
    return sanitize_identifier(stack_name)


def ts_string(value: Any) -> str:
    """TypeScript 문자열 리터럴 (JSON 문자열 규칙과 호환)"""
    return json.dumps(str(value), ensure_ascii=False)


def ts_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# =============================================================================
# 포매터
# =============================================================================


@dataclass
class CDKOptions:
    """CDK 출력 옵션

    Attributes:
        stack_name: 스택 이름 (클래스 이름의 기반)
        include_low_importance: Low 중요도 메트릭 알람 포함 여부
        resource_types: 알람을 만들 리소스 타입 (None이면 전체)
        enable_sns: 새 SNS 토픽을 만들어 알람 액션으로 연결
        sns_topic_arn: 기존 SNS 토픽 ARN (지정 시 enable_sns보다 우선)
    """

    stack_name: str = DEFAULT_STACK_NAME
    include_low_importance: bool = True
    resource_types: list[str] | None = None
    enable_sns: bool = False
    sns_topic_arn: str | None = None

    def __post_init__(self):
        validate_stack_name(self.stack_name)
        if self.sns_topic_arn:
            validate_sns_topic_arn(self.sns_topic_arn)

    @property
    def notify(self) -> bool:
        return self.enable_sns or bool(self.sns_topic_arn)


@dataclass(frozen=True)
class CDKAlarm:
    construct_id: str
    metric_name: str
    namespace: str
    statistic: str
    period: int
    threshold: float
    comparison_operator: str
    description: str
    dimensions: dict[str, str] = field(default_factory=dict)

    @property
    def variable_name(self) -> str:
        return self.construct_id[:1].lower() + self.construct_id[1:]


@dataclass(frozen=True)
class CDKResource:
    logical_id: str
    resource_type: str
    alarms: tuple[CDKAlarm, ...]


class CDKOutputFormatter:
    """AnalysisResult → CDK TypeScript 스택 소스"""

    def __init__(self, options: CDKOptions | None = None):
        self.options = options or CDKOptions()
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["ts_string"] = ts_string
        self.env.filters["ts_number"] = ts_number

    def format(self, result: AnalysisResult) -> str:
        if not isinstance(result, AnalysisResult):
            raise OutputError(
                "Invalid analysis result provided",
                details={"received": type(result).__name__},
            )

        try:
            resources = self.build_resources(result)
            alarm_count = sum(len(r.alarms) for r in resources)
            code = self.env.get_template(TEMPLATE_NAME).render(
                version=result.metadata.version,
                template_path=result.metadata.template_path.replace("*/", "*\\/"),
                class_name=stack_class_name(self.options.stack_name),
                resources=resources,
                alarm_count=alarm_count,
                notify=self.options.notify,
                enable_sns=self.options.enable_sns,
                sns_topic_arn=self.options.sns_topic_arn,
            )
        except CWMError:
            raise
        except (TemplateError, OSError, TypeError, ValueError) as e:
            raise OutputError(
                f"CDK code generation failed: {e}",
                cause=e,
                details={"original_error": str(e)},
            ) from e

        code = format_code(code)
        issues = check_code_safety(code)
        if issues:
            raise OutputError(
                f"CDK code generation failed: {'; '.join(issues)}",
                details={"security_issues": issues},
            )

        logger.info(f"CDK 코드 생성: 리소스 {len(resources)}개, 알람 {alarm_count}개")
        return code

    def build_resources(self, result: AnalysisResult) -> list[CDKResource]:
        """알람을 만들 리소스와 알람 목록 (입력 순서 유지, 알람이 없는 리소스는 제외)"""
        used_ids: set[str] = set()
        resources = []
        for resource in result.resources:
            if self.options.resource_types and resource.resource_type not in self.options.resource_types:
                continue
            alarms = []
            for metric in resource.metrics:
                if not self.options.include_low_importance and metric.importance == ImportanceLevel.LOW:
                    continue
                alarms.extend(self._build_alarms(resource, metric, used_ids))
            if alarms:
                resources.append(CDKResource(resource.logical_id, resource.resource_type, tuple(alarms)))
        return resources

    @staticmethod
    def _build_alarms(resource: ResourceWithMetrics, metric: MetricDefinition, used_ids: set[str]) -> list[CDKAlarm]:
        base_id = sanitize_identifier(resource.logical_id) + sanitize_identifier(metric.metric_name)
        if any(f"{base_id}{severity}Alarm" in used_ids for severity in SEVERITIES):
            suffix = 2
            while any(f"{base_id}{suffix}{severity}Alarm" in used_ids for severity in SEVERITIES):
                suffix += 1
            base_id = f"{base_id}{suffix}"

        dimensions = {d.name: d.value for d in metric.dimensions}
        for name, value in EXTRA_DIMENSIONS.get(resource.resource_type, {}).items():
            dimensions.setdefault(name, value)

        operator = "LESS_THAN_THRESHOLD" if is_lower_worse(metric.metric_name) else "GREATER_THAN_THRESHOLD"
        thresholds = {
            "Warning": metric.recommended_threshold.warning,
            "Critical": metric.recommended_threshold.critical,
        }

        alarms = []
        for severity in SEVERITIES:
            construct_id = f"{base_id}{severity}Alarm"
            used_ids.add(construct_id)
            alarms.append(
                CDKAlarm(
                    construct_id=construct_id,
                    metric_name=metric.metric_name,
                    namespace=metric.namespace,
                    statistic=metric.statistic.value,
                    period=metric.evaluation_period,
                    threshold=thresholds[severity],
                    comparison_operator=operator,
                    description=f"[{severity}] {resource.logical_id} {metric.metric_name}: {metric.description}",
                    dimensions=dimensions,
                )
            )
        return alarms


def format_code(code: str) -> str:
    """줄바꿈 정규화, 줄 끝 공백 제거, 3줄 이상 빈 줄 축소"""
    code = code.replace("\r\n", "\n")
    code = "\n".join(line.rstrip() for line in code.split("\n"))
    code = re.sub(r"\n{3,}", "\n\n", code)
    return code.strip() + "\n"

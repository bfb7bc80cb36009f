"""
core/generators/base.py - 메트릭 생성기 베이스

리소스 타입별 생성기가 공유하는 템플릿 메서드를 제공합니다.

생성 흐름:
    1. 리소스 검증 (타입 문자열, 지원 타입 여부)
    2. 카탈로그에서 applicable_when 조건을 만족하는 메트릭 선별
    3. 리소스 스케일 기반 임계값 계산 및 방향성 보정
    4. 1차 디멘션(예: DBInstanceIdentifier)에 논리 ID 할당

하위 클래스는 get_supported_types / get_metrics_config / get_resource_scale 만 구현합니다.

Example:
    class RDSMetricsGenerator(BaseMetricsGenerator):
        def get_supported_types(self):
            return ["AWS::RDS::DBInstance"]

        def get_metrics_config(self, resource):
            return RDS_METRICS

        def get_resource_scale(self, resource):
            return INSTANCE_CLASS_SCALE.get(resource.get_property("DBInstanceClass"), 1.0)
"""

from __future__ import annotations

import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from core.config import GENERATION_WARNING_MS
from core.exceptions import ResourceError
from core.metrics.types import (
    ImportanceLevel,
    MetricCategory,
    MetricConfig,
    MetricDefinition,
    MetricDimension,
    MetricThreshold,
)
from core.template.types import ResourceDescriptor

logger = logging.getLogger(__name__)

# 값이 낮을수록 나쁜 메트릭 이름 패턴
LOWER_IS_WORSE_PATTERNS = (
    "CreditBalance",
    "HitRatio",
    "HealthyHost",
    "FreeableMemory",
    "FreeStorageSpace",
    "AvailabilityZone",
    "Available",
    "Healthy",
    "Buffer",
    "Cache",
    "Free",
)

# 위 패턴과 겹치지만 높을수록 나쁜 메트릭 (예: UnHealthyHostCount)
HIGHER_IS_WORSE_PATTERNS = ("UnHealthy",)

PRIMARY_DIMENSIONS = {
    "AWS::RDS::DBInstance": "DBInstanceIdentifier",
    "AWS::Lambda::Function": "FunctionName",
    "AWS::Serverless::Function": "FunctionName",
    "AWS::ECS::Service": "ServiceName",
    "AWS::ElasticLoadBalancingV2::LoadBalancer": "LoadBalancer",
    "AWS::DynamoDB::Table": "TableName",
    "AWS::ApiGateway::RestApi": "ApiName",
    "AWS::Serverless::Api": "ApiName",
}
DEFAULT_DIMENSION = "ResourceId"

# CloudWatch 표준 평가 주기 (초)
VALID_EVALUATION_PERIODS = (60, 300, 900, 3600, 21600, 86400)


def is_lower_worse(metric_name: str) -> bool:
    """값이 낮을수록 나쁜 메트릭인지 (예: FreeableMemory, CPUCreditBalance)"""
    if any(pattern in metric_name for pattern in HIGHER_IS_WORSE_PATTERNS):
        return False
    return any(pattern in metric_name for pattern in LOWER_IS_WORSE_PATTERNS)


def get_primary_dimension(resource_type: str) -> str:
    return PRIMARY_DIMENSIONS.get(resource_type, DEFAULT_DIMENSION)


def round_half_up(value: float) -> int:
    """0.5를 올림하는 반올림 (Python round()의 banker's rounding 회피)"""
    return math.floor(value + 0.5)


def calculate_threshold(config: MetricConfig, scale: float) -> MetricThreshold:
    """스케일 기반 임계값 계산 + 방향성 보정

    높을수록 나쁜 메트릭은 warning < critical, 낮을수록 나쁜 메트릭은 warning > critical 이어야 하며,
    순서가 어긋나거나 0이 나오면 최소 1 간격으로 보정합니다.
    """
    base = config.threshold.base
    warning = round_half_up(base * scale * config.threshold.warning_multiplier)
    critical = round_half_up(base * scale * config.threshold.critical_multiplier)

    lower_worse = is_lower_worse(config.name)
    invalid = warning <= critical if lower_worse else warning >= critical

    if not invalid and warning != 0 and critical != 0:
        return MetricThreshold(warning=warning, critical=critical)

    if lower_worse:
        corrected_critical = max(min(warning, critical), 1)
        corrected_warning = max(corrected_critical + 1, warning)
    else:
        corrected_warning = max(min(warning, critical), 1)
        corrected_critical = max(corrected_warning + 1, critical)

    logger.debug(
        f"임계값 보정 [{config.name}]: warning={warning}→{corrected_warning}, critical={critical}→{corrected_critical}"
    )
    return MetricThreshold(warning=corrected_warning, critical=corrected_critical)


class MetricsGenerator(ABC):
    """메트릭 생성기 인터페이스

    상태를 갖지 않으며, 같은 인스턴스로 여러 리소스를 동시에 처리할 수 있어야 합니다.
    """

    @abstractmethod
    def get_supported_types(self) -> list[str]:
        """지원하는 리소스 타입 식별자 목록"""

    @abstractmethod
    def generate(self, resource: ResourceDescriptor) -> list[MetricDefinition]:
        """리소스 하나에 대한 메트릭 생성"""


class BaseMetricsGenerator(MetricsGenerator):
    """카탈로그 기반 메트릭 생성기 (템플릿 메서드)"""

    @abstractmethod
    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        """리소스에 대한 카탈로그 (조건 필터링 전)"""

    @abstractmethod
    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        """임계값 스케일 계수 (1.0 = 기준)"""

    def generate(self, resource: ResourceDescriptor) -> list[MetricDefinition]:
        start = time.perf_counter()
        try:
            self._validate_resource(resource)
            scale = self.get_resource_scale(resource)
            metrics = [
                self._build_metric_definition(resource, config, scale)
                for config in self._get_applicable_metrics(resource)
            ]
        except Exception as e:
            logger.error(f"메트릭 생성 실패: {resource.logical_id} ({e})")
            raise ResourceError(
                f"Metrics generation failed for {resource.logical_id}: {e}",
                cause=e,
                details={"resource_type": resource.resource_type, "original_error": str(e)},
            ) from e

        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms > GENERATION_WARNING_MS:
            logger.warning(f"메트릭 생성 지연: {resource.logical_id} {duration_ms:.0f}ms")
        else:
            logger.debug(f"{resource.logical_id}: 메트릭 {len(metrics)}개 생성 ({duration_ms:.1f}ms)")
        return metrics

    def _validate_resource(self, resource: ResourceDescriptor) -> None:
        if not resource.resource_type or not isinstance(resource.resource_type, str):
            raise ResourceError("Resource must have a valid Type property")

        if resource.resource_type not in self.get_supported_types():
            raise ResourceError(
                f"Unsupported resource type: {resource.resource_type}",
                details={"resource_type": resource.resource_type, "supported_types": self.get_supported_types()},
            )

    def _get_applicable_metrics(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        applicable = []
        for config in self.get_metrics_config(resource):
            if config.applicable_when is None:
                applicable.append(config)
                continue
            try:
                if config.applicable_when(resource):
                    applicable.append(config)
            except Exception as e:
                # 조건 평가 실패 시 해당 메트릭 제외
                logger.warning(f"메트릭 적용 조건 평가 실패: {config.name} ({e})")
        return applicable

    def _build_metric_definition(
        self,
        resource: ResourceDescriptor,
        config: MetricConfig,
        scale: float,
    ) -> MetricDefinition:
        return MetricDefinition(
            metric_name=config.name,
            namespace=config.namespace,
            unit=config.unit,
            description=config.description,
            statistic=config.statistic,
            recommended_threshold=calculate_threshold(config, scale),
            evaluation_period=config.evaluation_period,
            category=config.category,
            importance=config.importance,
            dimensions=(
                MetricDimension(name=get_primary_dimension(resource.resource_type), value=resource.logical_id),
            ),
        )


# =============================================================================
# 메트릭 정의 검증
# =============================================================================


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def validate_metric_definition(metric: MetricDefinition) -> ValidationResult:
    """메트릭 정의 형식 검증

    임계값 순서는 메트릭 방향성(is_lower_worse)을 기준으로 검사합니다.
    """
    errors: list[str] = []

    for name in ("metric_name", "namespace", "unit", "description"):
        value = getattr(metric, name, None)
        if not value or not isinstance(value, str):
            errors.append(f"{name} must be a non-empty string")

    if not isinstance(metric.evaluation_period, int) or metric.evaluation_period <= 0:
        errors.append("evaluation_period must be a positive number")
    elif metric.evaluation_period not in VALID_EVALUATION_PERIODS:
        errors.append(f"evaluation_period must be one of: {', '.join(map(str, VALID_EVALUATION_PERIODS))}")

    threshold = metric.recommended_threshold
    if not isinstance(threshold, MetricThreshold):
        errors.append("recommended_threshold must be an object")
    elif threshold.warning and threshold.critical:
        if is_lower_worse(metric.metric_name):
            if threshold.warning <= threshold.critical:
                errors.append("recommended_threshold.warning must be greater than critical")
        elif threshold.warning >= threshold.critical:
            errors.append("recommended_threshold.warning must be less than critical")

    if not isinstance(metric.category, MetricCategory):
        errors.append(f"category must be one of: {', '.join(c.value for c in MetricCategory)}")

    if not isinstance(metric.importance, ImportanceLevel):
        errors.append(f"importance must be one of: {', '.join(i.value for i in ImportanceLevel)}")

    for index, dimension in enumerate(metric.dimensions):
        if not dimension.name or not isinstance(dimension.name, str):
            errors.append(f"dimensions[{index}].name must be a non-empty string")
        if not dimension.value or not isinstance(dimension.value, str):
            errors.append(f"dimensions[{index}].value must be a non-empty string")

    return ValidationResult(is_valid=not errors, errors=errors)

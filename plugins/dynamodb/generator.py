"""
plugins/dynamodb/generator.py - DynamoDB 테이블 메트릭 생성기

온디맨드(PAY_PER_REQUEST) 테이블은 프로비저닝 전용 메트릭을 제외하고 스케일 1.0을 사용합니다.
프로비저닝 테이블은 테이블+GSI 총 용량 구간별로 스케일을 조정합니다.
"""

from __future__ import annotations

from core.generators.base import BaseMetricsGenerator
from core.metrics.types import MetricConfig
from core.template.types import ResourceDescriptor, to_number

from .metrics import METRICS, PROVISIONED_ONLY_METRICS

RESOURCE_TYPES = ["AWS::DynamoDB::Table"]
PAY_PER_REQUEST = "PAY_PER_REQUEST"
DEFAULT_CAPACITY_UNITS = 5

# (총 용량 상한, 스케일)
CAPACITY_SCALE_BANDS = (
    (2, 0.5),
    (10, 0.8),
    (50, 1.0),
    (100, 1.5),
    (500, 2.0),
)
MAX_CAPACITY_SCALE = 3.0


def is_on_demand(resource: ResourceDescriptor) -> bool:
    return resource.get_property("BillingMode") == PAY_PER_REQUEST


def _units(throughput: object, key: str, default: int) -> float:
    if not isinstance(throughput, dict):
        return default
    value = to_number(throughput.get(key))
    return default if value is None else value


def total_capacity(resource: ResourceDescriptor) -> float:
    """테이블 읽기/쓰기 + 모든 GSI 읽기/쓰기 용량 합계"""
    throughput = resource.get_property("ProvisionedThroughput")
    total = _units(throughput, "ReadCapacityUnits", DEFAULT_CAPACITY_UNITS) + _units(
        throughput, "WriteCapacityUnits", DEFAULT_CAPACITY_UNITS
    )

    indexes = resource.get_property("GlobalSecondaryIndexes")
    if isinstance(indexes, list):
        for index in indexes:
            if isinstance(index, dict) and isinstance(index.get("ProvisionedThroughput"), dict):
                gsi_throughput = index["ProvisionedThroughput"]
                total += _units(gsi_throughput, "ReadCapacityUnits", 0) + _units(gsi_throughput, "WriteCapacityUnits", 0)
    return total


class DynamoDBMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        if is_on_demand(resource):
            return [c for c in METRICS if c.name not in PROVISIONED_ONLY_METRICS]
        return METRICS

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        if is_on_demand(resource):
            return 1.0

        capacity = total_capacity(resource)
        for upper, scale in CAPACITY_SCALE_BANDS:
            if capacity <= upper:
                return scale
        return MAX_CAPACITY_SCALE

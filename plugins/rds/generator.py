"""
plugins/rds/generator.py - RDS DB 인스턴스 메트릭 생성기

인스턴스 클래스(vCPU/메모리 규모)에 따라 임계값 스케일을 조정합니다.
"""

from __future__ import annotations

from core.generators.base import BaseMetricsGenerator
from core.metrics.types import MetricConfig
from core.template.types import ResourceDescriptor

from .metrics import METRICS

RESOURCE_TYPES = ["AWS::RDS::DBInstance"]
DEFAULT_INSTANCE_CLASS = "db.t3.micro"

INSTANCE_CLASS_SCALE = {
    # T3/T4g (버스터블)
    "db.t3.micro": 0.5,
    "db.t3.small": 0.7,
    "db.t3.medium": 1.0,
    "db.t3.large": 1.2,
    "db.t3.xlarge": 1.5,
    "db.t3.2xlarge": 2.0,
    "db.t4g.micro": 0.5,
    "db.t4g.small": 0.7,
    "db.t4g.medium": 1.0,
    "db.t4g.large": 1.2,
    "db.t4g.xlarge": 1.5,
    "db.t4g.2xlarge": 2.0,
    # M5/M6i (범용)
    "db.m5.large": 1.5,
    "db.m5.xlarge": 2.0,
    "db.m5.2xlarge": 3.0,
    "db.m5.4xlarge": 4.0,
    "db.m5.8xlarge": 6.0,
    "db.m5.12xlarge": 8.0,
    "db.m5.16xlarge": 10.0,
    "db.m5.24xlarge": 14.0,
    "db.m6i.large": 1.5,
    "db.m6i.xlarge": 2.0,
    "db.m6i.2xlarge": 3.0,
    "db.m6i.4xlarge": 4.0,
    "db.m6i.8xlarge": 6.0,
    "db.m6i.12xlarge": 8.0,
    "db.m6i.16xlarge": 10.0,
    "db.m6i.24xlarge": 14.0,
    "db.m6i.32xlarge": 18.0,
    # R5/R6i (메모리 최적화)
    "db.r5.large": 1.8,
    "db.r5.xlarge": 2.5,
    "db.r5.2xlarge": 3.5,
    "db.r5.4xlarge": 5.0,
    "db.r5.8xlarge": 7.0,
    "db.r5.12xlarge": 9.0,
    "db.r5.16xlarge": 12.0,
    "db.r5.24xlarge": 16.0,
    "db.r6i.large": 1.8,
    "db.r6i.xlarge": 2.5,
    "db.r6i.2xlarge": 3.5,
    "db.r6i.4xlarge": 5.0,
    "db.r6i.8xlarge": 7.0,
    "db.r6i.12xlarge": 9.0,
    "db.r6i.16xlarge": 12.0,
    "db.r6i.24xlarge": 16.0,
    "db.r6i.32xlarge": 20.0,
    # X2iedn
    "db.x2iedn.large": 3.0,
    "db.x2iedn.xlarge": 4.0,
    "db.x2iedn.2xlarge": 6.0,
    "db.x2iedn.4xlarge": 9.0,
    "db.x2iedn.8xlarge": 14.0,
    "db.x2iedn.16xlarge": 20.0,
    "db.x2iedn.24xlarge": 28.0,
    "db.x2iedn.32xlarge": 35.0,
}


class RDSMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        return METRICS

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        instance_class = resource.get_property("DBInstanceClass") or DEFAULT_INSTANCE_CLASS
        if not isinstance(instance_class, str):
            # !Ref 파라미터 참조
            instance_class = DEFAULT_INSTANCE_CLASS
        return INSTANCE_CLASS_SCALE.get(instance_class, 1.0)

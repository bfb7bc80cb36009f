"""
plugins/elb/generator.py - Application Load Balancer 메트릭 생성기

Type이 application(또는 생략)인 로드밸런서만 지원합니다.
"""

from __future__ import annotations

from core.exceptions import ResourceError
from core.generators.base import BaseMetricsGenerator
from core.metrics.types import MetricConfig, MetricDefinition
from core.template.types import ResourceDescriptor

from .metrics import METRICS

RESOURCE_TYPES = ["AWS::ElasticLoadBalancingV2::LoadBalancer"]


def is_application_load_balancer(resource: ResourceDescriptor) -> bool:
    return resource.get_property("Type") in (None, "application")


class ALBMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def generate(self, resource: ResourceDescriptor) -> list[MetricDefinition]:
        if not is_application_load_balancer(resource):
            raise ResourceError(
                "Only Application Load Balancers are supported",
                details={
                    "resource_type": resource.resource_type,
                    "load_balancer_type": resource.get_property("Type") or "Unknown",
                },
            )
        return super().generate(resource)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        return METRICS

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        if resource.get_tag("Scale") == "Large":
            return 1.5
        if resource.get_property("Scheme") == "internet-facing":
            return 1.2
        return 1.0

"""
plugins/ecs/generator.py - ECS 서비스 메트릭 생성기

Fargate 서비스만 지원합니다 (LaunchType: FARGATE 또는 FARGATE/FARGATE_SPOT 용량 공급자).
DesiredCount 구간별로 임계값 스케일을 조정합니다.
"""

from __future__ import annotations

from core.exceptions import ResourceError
from core.generators.base import BaseMetricsGenerator
from core.metrics.types import ImportanceLevel, MetricConfig, MetricDefinition
from core.template.types import ResourceDescriptor

from .metrics import GPU_METRICS, METRICS, TASK_COUNT_METRICS

RESOURCE_TYPES = ["AWS::ECS::Service"]
FARGATE_PROVIDERS = ("FARGATE", "FARGATE_SPOT")
LARGE_SERVICE_DESIRED_COUNT = 10

# (DesiredCount 상한, 스케일)
DESIRED_COUNT_SCALE_BANDS = (
    (2, 0.7),
    (5, 1.0),
    (10, 1.3),
    (20, 1.7),
    (50, 2.0),
)
MAX_DESIRED_COUNT_SCALE = 2.5


def is_fargate_service(resource: ResourceDescriptor) -> bool:
    if resource.get_property("LaunchType") == "FARGATE":
        return True

    strategy = resource.get_property("CapacityProviderStrategy")
    if isinstance(strategy, list):
        return any(isinstance(s, dict) and s.get("CapacityProvider") in FARGATE_PROVIDERS for s in strategy)
    return False


def _desired_count(resource: ResourceDescriptor, default: int) -> float:
    return resource.get_number("DesiredCount", default)


def requires_gpu(resource: ResourceDescriptor) -> bool:
    compatibilities = resource.get_property("RequiresCompatibilities")
    return isinstance(compatibilities, list) and "GPU" in compatibilities


class ECSMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def generate(self, resource: ResourceDescriptor) -> list[MetricDefinition]:
        if not is_fargate_service(resource):
            launch_type = resource.get_property("LaunchType") or "Unknown"
            raise ResourceError(
                "Only Fargate services are supported",
                details={"resource_type": resource.resource_type, "launch_type": launch_type},
            )
        return super().generate(resource)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        large_service = _desired_count(resource, 0) >= LARGE_SERVICE_DESIRED_COUNT
        gpu = requires_gpu(resource)

        configs = []
        for config in METRICS:
            if config.name in TASK_COUNT_METRICS and large_service:
                config = config.with_changes(importance=ImportanceLevel.HIGH)
            elif config.name in GPU_METRICS and not gpu:
                config = config.with_changes(applicable_when=lambda _resource: False)
            configs.append(config)
        return configs

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        desired_count = _desired_count(resource, 1)
        for upper, scale in DESIRED_COUNT_SCALE_BANDS:
            if desired_count <= upper:
                return scale
        return MAX_DESIRED_COUNT_SCALE

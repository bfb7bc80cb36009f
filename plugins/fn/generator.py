"""
plugins/fn/generator.py - Lambda 함수 메트릭 생성기

MemorySize 구간별로 임계값 스케일을 조정하고,
컨테이너 이미지 함수/예약 동시성 함수는 관련 메트릭 중요도를 High로 올립니다.
"""

from __future__ import annotations

from core.generators.base import BaseMetricsGenerator
from core.metrics.types import ImportanceLevel, MetricConfig
from core.template.types import ResourceDescriptor

from .metrics import METRICS

RESOURCE_TYPES = ["AWS::Lambda::Function", "AWS::Serverless::Function"]
DEFAULT_MEMORY_SIZE = 128

# (MemorySize 상한 MB, 스케일)
MEMORY_SCALE_BANDS = (
    (256, 0.5),
    (512, 0.7),
    (1024, 1.0),
    (1536, 1.3),
    (2048, 1.7),
    (3008, 2.0),
    (4096, 2.5),
    (6144, 3.0),
    (8192, 3.5),
)
MAX_MEMORY_SCALE = 4.0


def is_container_function(resource: ResourceDescriptor) -> bool:
    return resource.get_property("PackageType") == "Image"


def has_reserved_concurrency(resource: ResourceDescriptor) -> bool:
    return (resource.get_number("ReservedConcurrentExecutions") or 0) > 0


class LambdaMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        configs = []
        for config in METRICS:
            if config.name == "InitDuration" and is_container_function(resource):
                config = config.with_changes(importance=ImportanceLevel.HIGH)
            elif config.name == "ProvisionedConcurrencyUtilization" and has_reserved_concurrency(resource):
                config = config.with_changes(importance=ImportanceLevel.HIGH)
            configs.append(config)
        return configs

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        # !Ref 등 파라미터 참조는 기본값으로 간주
        memory_size = resource.get_number("MemorySize") or DEFAULT_MEMORY_SIZE
        for upper, scale in MEMORY_SCALE_BANDS:
            if memory_size <= upper:
                return scale
        return MAX_MEMORY_SCALE

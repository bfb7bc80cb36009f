"""
plugins/apigateway/generator.py - API Gateway 메트릭 생성기

Environment 태그, 커스텀 도메인 태그, 리소스 정책 유무로 임계값 스케일을 조정합니다.
"""

from __future__ import annotations

from core.generators.base import BaseMetricsGenerator
from core.metrics.types import MetricConfig
from core.template.types import ResourceDescriptor

from .metrics import METRICS

RESOURCE_TYPES = ["AWS::ApiGateway::RestApi", "AWS::Serverless::Api"]

ENVIRONMENT_SCALE = {
    "Production": 1.5,
    "Development": 0.5,
}


class APIGatewayMetricsGenerator(BaseMetricsGenerator):
    def get_supported_types(self) -> list[str]:
        return list(RESOURCE_TYPES)

    def get_metrics_config(self, resource: ResourceDescriptor) -> list[MetricConfig]:
        return METRICS

    def get_resource_scale(self, resource: ResourceDescriptor) -> float:
        environment = resource.get_tag("Environment")
        if environment in ENVIRONMENT_SCALE:
            return ENVIRONMENT_SCALE[environment]
        if resource.get_tag("HasCustomDomain") == "true":
            return 1.2
        if resource.get_property("Policy"):
            return 1.1
        return 1.0

"""
plugins/ecs - ECS 메트릭 생성기

Fargate 기반 ECS 서비스(AWS::ECS::Service)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, ECSMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "ecs",
    "display_name": "ECS",
    "description": "ECS Fargate 서비스 메트릭",
    "description_en": "ECS Fargate service metrics",
    "aliases": ["fargate", "container"],
}

GENERATOR = ECSMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "ECSMetricsGenerator"]

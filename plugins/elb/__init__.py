"""
plugins/elb - ALB 메트릭 생성기

Application Load Balancer(AWS::ElasticLoadBalancingV2::LoadBalancer)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, ALBMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "elb",
    "display_name": "ALB",
    "description": "Application Load Balancer 메트릭",
    "description_en": "Application Load Balancer metrics",
    "aliases": ["alb", "loadbalancer", "lb"],
}

GENERATOR = ALBMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "ALBMetricsGenerator"]

"""
plugins/rds - RDS 메트릭 생성기

RDS/Aurora DB 인스턴스(AWS::RDS::DBInstance)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, RDSMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "rds",
    "display_name": "RDS",
    "description": "RDS 및 Aurora DB 인스턴스 메트릭",
    "description_en": "RDS and Aurora DB instance metrics",
    "aliases": ["database", "aurora", "db"],
}

GENERATOR = RDSMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "RDSMetricsGenerator"]

"""
plugins/fn - Lambda 메트릭 생성기

Lambda 함수와 SAM 함수(AWS::Serverless::Function)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, LambdaMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "fn",
    "display_name": "Lambda",
    "description": "Lambda 함수 메트릭",
    "description_en": "Lambda function metrics",
    "aliases": ["lambda", "function", "sam"],
}

GENERATOR = LambdaMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "LambdaMetricsGenerator"]

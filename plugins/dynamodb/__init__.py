"""
plugins/dynamodb - DynamoDB 메트릭 생성기

DynamoDB 테이블(AWS::DynamoDB::Table)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, DynamoDBMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "dynamodb",
    "display_name": "DynamoDB",
    "description": "DynamoDB 테이블 메트릭",
    "description_en": "DynamoDB table metrics",
    "aliases": ["ddb", "dynamo"],
}

GENERATOR = DynamoDBMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "DynamoDBMetricsGenerator"]

"""
plugins/apigateway - API Gateway 메트릭 생성기

REST API(AWS::ApiGateway::RestApi)와 SAM API(AWS::Serverless::Api)의 권장 CloudWatch 메트릭
"""

from .generator import RESOURCE_TYPES, APIGatewayMetricsGenerator
from .metrics import METRICS

CATEGORY = {
    "name": "apigateway",
    "display_name": "API Gateway",
    "description": "API Gateway REST API 메트릭",
    "description_en": "API Gateway REST API metrics",
    "aliases": ["api", "apigw"],
}

GENERATOR = APIGatewayMetricsGenerator

__all__ = ["CATEGORY", "GENERATOR", "METRICS", "RESOURCE_TYPES", "APIGatewayMetricsGenerator"]

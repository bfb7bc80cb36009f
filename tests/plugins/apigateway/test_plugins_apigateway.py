"""
tests/plugins/apigateway/test_plugins_apigateway.py - API Gateway 메트릭 생성기 테스트
"""

import pytest

from core.metrics.types import MetricThreshold
from core.template.types import ResourceDescriptor
from plugins.apigateway import GENERATOR, METRICS, RESOURCE_TYPES
from plugins.apigateway.generator import APIGatewayMetricsGenerator


def rest_api(resource_type="AWS::ApiGateway::RestApi", **properties):
    return ResourceDescriptor("Api", resource_type, properties)


def by_name(metrics):
    return {m.metric_name: m for m in metrics}


@pytest.fixture
def generator():
    return APIGatewayMetricsGenerator()


class TestPluginExports:
    def test_exports(self):
        assert GENERATOR is APIGatewayMetricsGenerator
        assert RESOURCE_TYPES == ["AWS::ApiGateway::RestApi", "AWS::Serverless::Api"]
        assert len(METRICS) == 13


class TestResourceScale:
    """태그/정책 기반 스케일 테스트"""

    def test_production_tag(self, generator):
        resource = rest_api(Tags=[{"Key": "Environment", "Value": "Production"}], Policy={"Statement": []})

        assert generator.get_resource_scale(resource) == 1.5

    def test_development_tag_map(self, generator):
        resource = rest_api("AWS::Serverless::Api", Tags={"Environment": "Development"})

        assert generator.get_resource_scale(resource) == 0.5

    def test_custom_domain(self, generator):
        assert generator.get_resource_scale(rest_api(Tags=[{"Key": "HasCustomDomain", "Value": "true"}])) == 1.2

    def test_policy(self, generator):
        assert generator.get_resource_scale(rest_api(Policy={"Statement": [{"Effect": "Allow"}]})) == 1.1

    def test_default(self, generator):
        assert generator.get_resource_scale(rest_api(Tags=[{"Key": "Environment", "Value": "Staging"}])) == 1.0


class TestGenerate:
    def test_all_metrics(self, generator):
        metrics = generator.generate(rest_api())

        assert len(metrics) == 13
        assert all(m.namespace == "AWS/ApiGateway" for m in metrics)
        assert all(m.dimensions[0].name == "ApiName" for m in metrics)

    def test_cache_hit_is_lower_worse(self, generator):
        metrics = by_name(generator.generate(rest_api()))

        assert metrics["CacheHitCount"].recommended_threshold == MetricThreshold(warning=10, critical=1)

    def test_serverless_api(self, generator):
        metrics = generator.generate(rest_api("AWS::Serverless::Api", Name="sam-api"))

        assert len(metrics) == 13

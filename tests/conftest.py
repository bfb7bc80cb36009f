"""
tests/conftest.py - pytest 공통 픽스처

템플릿 파일 생성 헬퍼와 테스트용 가짜 생성기를 제공합니다.

Usage:
    def test_something(write_template, sample_resources):
        path = write_template(sample_resources)
        result = MetricsAnalyzer().analyze(path)
"""

import json
import sys
import threading
import time
from pathlib import Path
from typing import Any

import pytest
import yaml

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.generators.base import MetricsGenerator  # noqa: E402
from core.generators.registry import GeneratorRegistry  # noqa: E402
from core.metrics.types import (  # noqa: E402
    ImportanceLevel,
    MetricCategory,
    MetricDefinition,
    MetricDimension,
    MetricStatistic,
    MetricThreshold,
)

# =============================================================================
# 템플릿 픽스처
# =============================================================================


@pytest.fixture
def sample_resources() -> dict[str, Any]:
    """지원 타입 6종 리소스 (각 1개)"""
    return {
        "Database": {
            "Type": "AWS::RDS::DBInstance",
            "Properties": {
                "DBInstanceClass": "db.t3.medium",
                "Engine": "mysql",
                "MasterUsername": "admin",
                "MasterUserPassword": "super-secret-password",
                "BackupRetentionPeriod": 7,
            },
        },
        "Function": {
            "Type": "AWS::Lambda::Function",
            "Properties": {"Runtime": "python3.12", "MemorySize": 512, "Handler": "index.handler"},
        },
        "Service": {
            "Type": "AWS::ECS::Service",
            "Properties": {"LaunchType": "FARGATE", "DesiredCount": 3},
        },
        "LoadBalancer": {
            "Type": "AWS::ElasticLoadBalancingV2::LoadBalancer",
            "Properties": {"Type": "application", "Scheme": "internet-facing"},
        },
        "Table": {
            "Type": "AWS::DynamoDB::Table",
            "Properties": {"BillingMode": "PAY_PER_REQUEST"},
        },
        "Api": {
            "Type": "AWS::ApiGateway::RestApi",
            "Properties": {"Name": "orders-api"},
        },
    }


@pytest.fixture
def write_template(tmp_path):
    """Resources 맵으로 템플릿 파일 생성

    Usage:
        path = write_template({"Bucket": {"Type": "AWS::S3::Bucket"}})
        path = write_template(resources, fmt="json", name="stack.json")
    """

    def _write(
        resources: dict[str, Any] | None,
        fmt: str = "yaml",
        name: str | None = None,
        include_version: bool = True,
    ) -> Path:
        template: dict[str, Any] = {}
        if include_version:
            template["AWSTemplateFormatVersion"] = "2010-09-09"
        if resources is not None:
            template["Resources"] = resources

        path = tmp_path / (name or f"template.{fmt}")
        if fmt == "json":
            path.write_text(json.dumps(template, indent=2), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(template, sort_keys=False), encoding="utf-8")
        return path

    return _write


# =============================================================================
# 가짜 생성기
# =============================================================================


def make_metric(
    name: str = "TestMetric",
    warning: float = 10,
    critical: float = 20,
    importance: ImportanceLevel = ImportanceLevel.HIGH,
    logical_id: str = "Resource",
) -> MetricDefinition:
    """테스트용 MetricDefinition"""
    return MetricDefinition(
        metric_name=name,
        namespace="Test/Namespace",
        unit="Count",
        description="테스트 메트릭",
        statistic=MetricStatistic.AVERAGE,
        recommended_threshold=MetricThreshold(warning=warning, critical=critical),
        evaluation_period=300,
        category=MetricCategory.PERFORMANCE,
        importance=importance,
        dimensions=(MetricDimension(name="ResourceId", value=logical_id),),
    )


class FakeGenerator(MetricsGenerator):
    """설정한 대로 동작하는 테스트용 생성기

    Args:
        types: 지원 타입 목록
        metrics: 반환할 메트릭 목록 (None이면 메트릭 1개)
        fail_ids: 예외를 발생시킬 논리 ID
        delays: 논리 ID별 지연 시간 (초)
        result: 지정 시 metrics 대신 그대로 반환 (잘못된 반환 타입 테스트용)
    """

    def __init__(
        self,
        types: list[str],
        metrics: list[MetricDefinition] | None = None,
        fail_ids: set[str] | None = None,
        delays: dict[str, float] | None = None,
        result: Any = None,
    ):
        self.types = types
        self.metrics = metrics
        self.fail_ids = fail_ids or set()
        self.delays = delays or {}
        self.result = result
        self.calls: list[str] = []
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def get_supported_types(self) -> list[str]:
        return list(self.types)

    def generate(self, resource):
        with self._lock:
            self.calls.append(resource.logical_id)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            delay = self.delays.get(resource.logical_id, 0)
            if delay:
                time.sleep(delay)
            if resource.logical_id in self.fail_ids:
                raise RuntimeError(f"generation failed for {resource.logical_id}")
            if self.result is not None:
                return self.result
            if self.metrics is not None:
                return list(self.metrics)
            return [make_metric(logical_id=resource.logical_id)]
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def fake_generator_factory():
    """FakeGenerator 생성 팩토리"""
    return FakeGenerator


@pytest.fixture
def fake_registry():
    """AWS::Test::A / AWS::Test::B 를 지원하는 레지스트리와 생성기"""
    generator = FakeGenerator(["AWS::Test::A", "AWS::Test::B"])
    registry = GeneratorRegistry()
    registry.register(generator)
    return registry, generator

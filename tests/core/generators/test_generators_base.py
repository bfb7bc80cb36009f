"""
tests/core/generators/test_generators_base.py - core/generators/base.py 테스트

임계값 계산/방향성 보정, 템플릿 메서드, 메트릭 정의 검증
"""

from dataclasses import replace

import pytest

from core.exceptions import ResourceError
from core.generators.base import (
    BaseMetricsGenerator,
    calculate_threshold,
    get_primary_dimension,
    is_lower_worse,
    round_half_up,
    validate_metric_definition,
)
from core.generators.catalog import metric_factory
from core.metrics.types import ImportanceLevel, MetricThreshold
from core.template.types import ResourceDescriptor

metric = metric_factory("Test/Namespace")


class SampleGenerator(BaseMetricsGenerator):
    """테스트용 카탈로그 기반 생성기"""

    def __init__(self, configs, scale=1.0):
        self.configs = configs
        self.scale = scale

    def get_supported_types(self):
        return ["AWS::Test::Sample"]

    def get_metrics_config(self, resource):
        return self.configs

    def get_resource_scale(self, resource):
        if self.scale is None:
            raise KeyError("scale")
        return self.scale


# =============================================================================
# 임계값 계산
# =============================================================================


class TestRoundHalfUp:
    """round_half_up 함수 테스트"""

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (0.0, 0)])
    def test_half_rounds_up(self, value, expected):
        assert round_half_up(value) == expected


class TestIsLowerWorse:
    """is_lower_worse 함수 테스트"""

    @pytest.mark.parametrize(
        "name",
        ["CPUCreditBalance", "BufferCacheHitRatio", "HealthyHostCount", "FreeableMemory", "FreeStorageSpace"],
    )
    def test_lower_worse(self, name):
        assert is_lower_worse(name)

    @pytest.mark.parametrize("name", ["CPUUtilization", "Errors", "UnHealthyHostCount", "Latency"])
    def test_higher_worse(self, name):
        assert not is_lower_worse(name)


class TestCalculateThreshold:
    """calculate_threshold 함수 테스트"""

    def test_scaled_values(self):
        config = metric("CPUUtilization", "Percent", "CPU", "Average", "Performance", "High", 70, 1.0, 1.3)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=70, critical=91)
        assert calculate_threshold(config, 0.5) == MetricThreshold(warning=35, critical=46)

    def test_lower_worse_valid(self):
        config = metric("CPUCreditBalance", "Count", "크레딧", "Average", "Performance", "Medium", 30, 1.0, 0.5)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=30, critical=15)

    def test_zero_values_corrected(self):
        """0 값은 최소 1 간격으로 보정"""
        config = metric("SwapUsage", "Bytes", "스왑", "Average", "Saturation", "Medium", 0, 1.0, 1000.0)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=1, critical=2)

    def test_higher_worse_inverted_corrected(self):
        """warning >= critical 이면 보정"""
        config = metric("TaskCount", "Count", "태스크", "Average", "Performance", "Medium", 1, 0.5, 0.1)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=1, critical=2)

    def test_lower_worse_inverted_corrected(self):
        """낮을수록 나쁜 메트릭에서 warning <= critical 이면 보정"""
        config = metric("HealthyHostCount", "Count", "정상 타겟", "Average", "Performance", "High", 2, 0.5, 0.25)

        # warning=round(1.2)=1, critical=round(0.6)=1
        assert calculate_threshold(config, 1.2) == MetricThreshold(warning=2, critical=1)

    def test_unhealthy_host_count_is_higher_worse(self):
        config = metric("UnHealthyHostCount", "Count", "비정상 타겟", "Average", "Error", "High", 0, 1.0, 2.0)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=1, critical=2)

    def test_small_base_rounds_to_zero(self):
        """0.02 * 1.0 → 0 이므로 1/2로 보정"""
        config = metric("ReadLatency", "Seconds", "읽기 지연", "Average", "Latency", "High", 0.02, 1.0, 2.5)

        assert calculate_threshold(config, 1.0) == MetricThreshold(warning=1, critical=2)


class TestPrimaryDimension:
    def test_known_and_unknown(self):
        assert get_primary_dimension("AWS::RDS::DBInstance") == "DBInstanceIdentifier"
        assert get_primary_dimension("AWS::Serverless::Function") == "FunctionName"
        assert get_primary_dimension("AWS::S3::Bucket") == "ResourceId"


# =============================================================================
# 템플릿 메서드
# =============================================================================


class TestBaseMetricsGenerator:
    """BaseMetricsGenerator.generate 테스트"""

    def test_generate_builds_definitions(self):
        generator = SampleGenerator(
            [metric("CPUUtilization", "Percent", "CPU", "Average", "Performance", "High", 70, 1.0, 1.3)]
        )
        resource = ResourceDescriptor("Sample", "AWS::Test::Sample")

        metrics = generator.generate(resource)

        assert len(metrics) == 1
        definition = metrics[0]
        assert definition.metric_name == "CPUUtilization"
        assert definition.namespace == "Test/Namespace"
        assert definition.recommended_threshold == MetricThreshold(warning=70, critical=91)
        assert definition.dimensions[0].name == "ResourceId"
        assert definition.dimensions[0].value == "Sample"

    def test_applicable_when_filters(self):
        """조건이 False이거나 예외를 던지면 제외"""

        def raises(_resource):
            raise RuntimeError("condition error")

        generator = SampleGenerator(
            [
                metric("Always", "Count", "항상", "Sum", "Error", "High", 1, 1.0, 2.0),
                metric("Never", "Count", "없음", "Sum", "Error", "High", 1, 1.0, 2.0, applicable_when=lambda r: False),
                metric("Broken", "Count", "실패", "Sum", "Error", "High", 1, 1.0, 2.0, applicable_when=raises),
                metric(
                    "Conditional", "Count", "조건부", "Sum", "Error", "High", 1, 1.0, 2.0,
                    applicable_when=lambda r: r.get_property("Enabled") is True,
                ),
            ]
        )

        names = [m.metric_name for m in generator.generate(ResourceDescriptor("S", "AWS::Test::Sample"))]
        assert names == ["Always"]

        enabled = ResourceDescriptor("S", "AWS::Test::Sample", {"Enabled": True})
        assert [m.metric_name for m in generator.generate(enabled)] == ["Always", "Conditional"]

    def test_unsupported_type(self):
        generator = SampleGenerator([])

        with pytest.raises(ResourceError) as exc_info:
            generator.generate(ResourceDescriptor("Bucket", "AWS::S3::Bucket"))

        assert exc_info.value.message == (
            "Metrics generation failed for Bucket: Unsupported resource type: AWS::S3::Bucket"
        )

    def test_scale_failure_wrapped(self):
        """하위 클래스 예외는 ResourceError로 감싸짐"""
        generator = SampleGenerator([], scale=None)

        with pytest.raises(ResourceError, match="Metrics generation failed for S") as exc_info:
            generator.generate(ResourceDescriptor("S", "AWS::Test::Sample"))

        assert isinstance(exc_info.value.cause, KeyError)
        assert exc_info.value.details["resource_type"] == "AWS::Test::Sample"


# =============================================================================
# 메트릭 정의 검증
# =============================================================================


class TestValidateMetricDefinition:
    """validate_metric_definition 함수 테스트"""

    @pytest.fixture
    def definition(self):
        generator = SampleGenerator(
            [metric("CPUUtilization", "Percent", "CPU", "Average", "Performance", "High", 70, 1.0, 1.3)]
        )
        return generator.generate(ResourceDescriptor("S", "AWS::Test::Sample"))[0]

    def test_valid(self, definition):
        result = validate_metric_definition(definition)

        assert result.is_valid
        assert result.errors == []

    def test_empty_name(self, definition):
        result = validate_metric_definition(replace(definition, metric_name=""))

        assert not result.is_valid
        assert "metric_name must be a non-empty string" in result.errors

    def test_invalid_period(self, definition):
        result = validate_metric_definition(replace(definition, evaluation_period=120))

        assert any(e.startswith("evaluation_period must be one of") for e in result.errors)

    def test_threshold_order(self, definition):
        result = validate_metric_definition(
            replace(definition, recommended_threshold=MetricThreshold(warning=90, critical=80))
        )

        assert "recommended_threshold.warning must be less than critical" in result.errors

    def test_lower_worse_threshold_order(self, definition):
        inverted = replace(
            definition,
            metric_name="FreeableMemory",
            recommended_threshold=MetricThreshold(warning=100, critical=200),
        )

        assert "recommended_threshold.warning must be greater than critical" in validate_metric_definition(
            inverted
        ).errors

    def test_invalid_importance(self, definition):
        result = validate_metric_definition(replace(definition, importance="Urgent"))

        assert any(e.startswith("importance must be one of") for e in result.errors)
        assert isinstance(definition.importance, ImportanceLevel)

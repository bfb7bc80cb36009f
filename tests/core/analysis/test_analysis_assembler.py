"""
tests/core/analysis/test_analysis_assembler.py - core/analysis/assembler.py 테스트
"""

import re
import time

import pytest
from conftest import make_metric

from core.analysis.assembler import PhaseTimings, ResultAssembler, count_resources_by_type
from core.analysis.classifier import ClassificationResult
from core.analysis.options import AnalysisOptions
from core.metrics.types import AnalysisError, ResourceWithMetrics
from core.template.types import ResourceDescriptor

MB = 1024 * 1024

TEMPLATE_RESOURCES = {
    "Function": {"Type": "AWS::Lambda::Function"},
    "Other": {"Type": "AWS::Lambda::Function"},
    "Bucket": {"Type": "AWS::S3::Bucket"},
}


@pytest.fixture
def classification():
    return ClassificationResult(
        supported=[
            ResourceDescriptor("Function", "AWS::Lambda::Function"),
            ResourceDescriptor("Other", "AWS::Lambda::Function"),
        ],
        unsupported=["Bucket"],
        total_count=3,
    )


@pytest.fixture
def resources():
    return [
        ResourceWithMetrics(
            logical_id="Function",
            resource_type="AWS::Lambda::Function",
            resource_properties={},
            metrics=(make_metric(logical_id="Function"), make_metric("Second", logical_id="Function")),
        )
    ]


@pytest.fixture
def errors():
    return [AnalysisError(resource_id="Other", resource_type="AWS::Lambda::Function", error="boom")]


@pytest.fixture
def timings():
    return PhaseTimings(started_at=time.perf_counter() - 0.25, parse_ms=12.4, extract_ms=0.6, generator_ms=101.5)


def assemble(classification, resources, errors, timings, options=None, peak=150 * MB):
    return ResultAssembler().assemble(
        template_path="stack.yaml",
        template_resources=TEMPLATE_RESOURCES,
        classification=classification,
        resources=resources,
        errors=errors,
        options=options or AnalysisOptions(),
        timings=timings,
        memory_peak_bytes=peak,
    )


class TestCountResourcesByType:
    def test_counts(self):
        assert count_resources_by_type(TEMPLATE_RESOURCES) == {"AWS::Lambda::Function": 2, "AWS::S3::Bucket": 1}

    def test_invalid_type_counted_as_unknown(self):
        assert count_resources_by_type({"A": {"Type": 1}, "B": "x"}) == {"Unknown": 2}

    def test_empty(self):
        assert count_resources_by_type(None) == {}


class TestResultAssembler:
    """ResultAssembler.assemble 테스트"""

    def test_metadata(self, classification, resources, errors, timings):
        result, _ = assemble(classification, resources, errors, timings)
        metadata = result.metadata

        assert metadata.version == "1.0.0"
        assert metadata.template_path == "stack.yaml"
        assert metadata.total_resources == 3
        assert metadata.supported_resources == 2
        assert metadata.parse_time_ms == 12
        assert metadata.extract_time_ms == 1
        assert metadata.generator_time_ms == 102
        assert metadata.processing_time_ms >= 250
        assert metadata.total_time_ms == metadata.processing_time_ms
        assert metadata.memory_peak_mb == 150
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", metadata.generated_at)

    def test_resources_and_errors(self, classification, resources, errors, timings):
        result, _ = assemble(classification, resources, errors, timings)

        assert [r.logical_id for r in result.resources] == ["Function"]
        assert result.metric_count == 2
        assert result.unsupported_resources == ("Bucket",)
        assert result.errors == tuple(errors)

    def test_no_errors_is_none(self, classification, resources, timings):
        result, _ = assemble(classification, resources, [], timings)

        assert result.errors is None
        assert "errors" not in result.to_dict()

    def test_exclude_unsupported(self, classification, resources, timings):
        result, statistics = assemble(
            classification, resources, [], timings, options=AnalysisOptions(include_unsupported=False)
        )

        assert result.unsupported_resources == ()
        # 통계는 옵션과 무관하게 실제 개수
        assert statistics.unsupported_resources == 1

    def test_performance_metrics_only_when_collected(self, classification, resources, timings):
        result, _ = assemble(classification, resources, [], timings)
        assert result.performance_metrics is None

        result, _ = assemble(
            classification, resources, [], timings, options=AnalysisOptions(collect_metrics=True, concurrency=4)
        )
        performance = result.performance_metrics

        assert performance.parse_time == 12
        assert performance.generator_time == 102
        assert performance.formatter_time == 0
        assert performance.memory_peak == 150 * MB
        assert performance.resource_count == 2
        assert performance.concurrent_tasks == 4
        assert "performance_metrics" in result.to_dict()

    def test_statistics(self, classification, resources, timings):
        _, statistics = assemble(classification, resources, [], timings, peak=int(2.6 * MB))

        assert statistics.total_resources == 3
        assert statistics.supported_resources == 2
        assert statistics.unsupported_resources == 1
        assert statistics.resources_by_type == {"AWS::Lambda::Function": 2, "AWS::S3::Bucket": 1}
        assert statistics.memory_usage_mb == 3
        assert statistics.processing_time_ms >= 250

"""
tests/core/analysis/test_analysis_analyzer.py - core/analysis/analyzer.py 테스트

파싱부터 결과 조립까지의 전체 흐름, 실패 정책, 메모리 감시 경쟁을 검증합니다.
"""

import threading
from unittest.mock import Mock, patch

import pytest
from conftest import FakeGenerator

from core.analysis import AnalysisOptions, MetricsAnalyzer
from core.exceptions import MemoryLimitError, ResourceError, TemplateFileError, TemplateParseError
from core.generators.registry import GeneratorRegistry
from core.metrics.types import ImportanceLevel
from core.parallel import MemoryBudgetMonitor

GB = 1024 * 1024 * 1024
MB = 1024 * 1024


def registry_with(generator):
    registry = GeneratorRegistry()
    registry.register(generator)
    return registry


# =============================================================================
# 기본 흐름
# =============================================================================


class TestAnalyzeBuiltinGenerators:
    """내장 생성기로 전체 분석"""

    def test_six_supported_types(self, write_template, sample_resources):
        sample_resources["Bucket"] = {"Type": "AWS::S3::Bucket"}
        path = write_template(sample_resources)

        result = MetricsAnalyzer().analyze(path)

        assert result.metadata.total_resources == 7
        assert result.metadata.supported_resources == 6
        assert result.metadata.template_path == str(path)
        assert [r.logical_id for r in result.resources] == [
            "Database",
            "Function",
            "Service",
            "LoadBalancer",
            "Table",
            "Api",
        ]
        assert result.unsupported_resources == ("Bucket",)
        assert result.errors is None
        assert all(r.metrics for r in result.resources)

    def test_sensitive_properties_redacted(self, write_template, sample_resources):
        result = MetricsAnalyzer().analyze(write_template(sample_resources))

        database = result.resources[0]
        assert database.resource_properties["MasterUserPassword"] == "[REDACTED]"
        assert database.resource_properties["MasterUsername"] == "admin"

    def test_primary_dimension(self, write_template, sample_resources):
        result = MetricsAnalyzer().analyze(write_template(sample_resources))

        dimensions = {r.logical_id: r.metrics[0].dimensions[0] for r in result.resources}
        assert dimensions["Database"].name == "DBInstanceIdentifier"
        assert dimensions["Database"].value == "Database"
        assert dimensions["Table"].name == "TableName"

    def test_exclude_unsupported(self, write_template, sample_resources):
        sample_resources["Bucket"] = {"Type": "AWS::S3::Bucket"}

        result = MetricsAnalyzer().analyze(write_template(sample_resources), AnalysisOptions(include_unsupported=False))

        assert result.unsupported_resources == ()
        assert result.metadata.total_resources == 7

    def test_resource_type_filter(self, write_template, sample_resources):
        options = AnalysisOptions(resource_types=["AWS::Lambda::Function", "AWS::DynamoDB::Table"])

        result = MetricsAnalyzer().analyze(write_template(sample_resources), options)

        assert [r.logical_id for r in result.resources] == ["Function", "Table"]
        assert result.unsupported_resources == ("Database", "Service", "LoadBalancer", "Api")

    def test_exclude_low_importance(self, write_template, sample_resources):
        result = MetricsAnalyzer().analyze(
            write_template(sample_resources), AnalysisOptions(include_low_importance=False)
        )

        for resource in result.resources:
            assert all(m.importance != ImportanceLevel.LOW for m in resource.metrics)

    def test_non_fargate_service_strict(self, write_template, sample_resources):
        """EC2 기반 ECS 서비스는 strict 모드에서 분석 실패"""
        sample_resources["Service"]["Properties"]["LaunchType"] = "EC2"

        with pytest.raises(ResourceError, match="Only Fargate services are supported"):
            MetricsAnalyzer().analyze(write_template(sample_resources))

    def test_non_fargate_service_continue(self, write_template, sample_resources):
        sample_resources["Service"]["Properties"]["LaunchType"] = "EC2"

        result = MetricsAnalyzer().analyze(write_template(sample_resources), AnalysisOptions(continue_on_error=True))

        assert "Service" not in [r.logical_id for r in result.resources]
        assert len(result.errors) == 1
        assert result.errors[0].resource_id == "Service"
        assert result.errors[0].resource_type == "AWS::ECS::Service"
        assert result.errors[0].error == "Only Fargate services are supported"

    def test_collect_metrics(self, write_template, sample_resources):
        result = MetricsAnalyzer().analyze(
            write_template(sample_resources), AnalysisOptions(collect_metrics=True, concurrency=3)
        )

        assert result.performance_metrics is not None
        assert result.performance_metrics.resource_count == 6
        assert result.performance_metrics.concurrent_tasks == 3


# =============================================================================
# 실패 정책 / 순서 / 동시성
# =============================================================================


class TestFailurePolicy:
    """continue_on_error 정책 테스트"""

    def test_failure_isolated(self, write_template):
        generator = FakeGenerator(["AWS::Test::A"], fail_ids={"Bad"})
        path = write_template({name: {"Type": "AWS::Test::A"} for name in ("First", "Bad", "Last")})

        result = MetricsAnalyzer(registry=registry_with(generator)).analyze(
            path, AnalysisOptions(continue_on_error=True)
        )

        assert [r.logical_id for r in result.resources] == ["First", "Last"]
        assert len(result.errors) == 1
        assert result.errors[0].resource_id == "Bad"
        assert result.errors[0].error == "generation failed for Bad"
        assert "RuntimeError" in result.errors[0].stack
        assert result.metadata.supported_resources == 3

    def test_strict_mode_wraps_unexpected_error(self, write_template):
        generator = FakeGenerator(["AWS::Test::A"], fail_ids={"Bad"})
        path = write_template({"Bad": {"Type": "AWS::Test::A"}})

        with pytest.raises(ResourceError) as exc_info:
            MetricsAnalyzer(registry=registry_with(generator)).analyze(path)

        assert exc_info.value.message == "Analysis failed: generation failed for Bad"
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_invalid_generator_result(self, write_template):
        generator = FakeGenerator(["AWS::Test::A"], result="not-a-list")
        path = write_template({"Weird": {"Type": "AWS::Test::A"}})

        result = MetricsAnalyzer(registry=registry_with(generator)).analyze(
            path, AnalysisOptions(continue_on_error=True)
        )

        assert result.resources == ()
        assert result.errors[0].error == "Invalid metrics type: expected list, got str"

    def test_output_order_matches_template(self, write_template):
        """완료 순서와 무관하게 템플릿 순서 유지"""
        names = [f"R{i}" for i in range(6)]
        generator = FakeGenerator(["AWS::Test::A"], delays={name: 0.05 * (6 - i) for i, name in enumerate(names)})
        path = write_template({name: {"Type": "AWS::Test::A"} for name in names})

        result = MetricsAnalyzer(registry=registry_with(generator)).analyze(path, AnalysisOptions(concurrency=6))

        assert [r.logical_id for r in result.resources] == names

    def test_concurrency_bound(self, write_template):
        names = [f"R{i}" for i in range(8)]
        generator = FakeGenerator(["AWS::Test::A"], delays={name: 0.03 for name in names})
        path = write_template({name: {"Type": "AWS::Test::A"} for name in names})

        MetricsAnalyzer(registry=registry_with(generator)).analyze(path, AnalysisOptions(concurrency=2))

        assert sorted(generator.calls) == sorted(names)
        assert generator.max_active <= 2


# =============================================================================
# 에러 전파
# =============================================================================


class TestErrorPropagation:
    def test_missing_template(self, tmp_path):
        with pytest.raises(TemplateFileError):
            MetricsAnalyzer().analyze(tmp_path / "missing.yaml")

    def test_unexpected_parser_error_wrapped(self):
        parser = Mock()
        parser.parse.side_effect = KeyError("Resources")

        with pytest.raises(ResourceError) as exc_info:
            MetricsAnalyzer(parser=parser, registry=GeneratorRegistry()).analyze("stack.yaml")

        assert exc_info.value.message.startswith("Analysis failed:")
        assert exc_info.value.details["original_error"] == "'Resources'"

    def test_failed_analysis_keeps_previous_statistics(self, write_template, sample_resources, tmp_path):
        analyzer = MetricsAnalyzer()
        analyzer.analyze(write_template(sample_resources))
        previous = analyzer.get_analysis_statistics()

        with pytest.raises(TemplateFileError):
            analyzer.analyze(tmp_path / "missing.yaml")

        assert analyzer.get_analysis_statistics() is previous


# =============================================================================
# 메모리 감시
# =============================================================================


class TestMemoryLimit:
    """memory_limit 옵션 테스트"""

    def test_upfront_check_skips_parsing(self):
        """이미 한도를 넘었으면 파싱 전에 실패"""
        parser = Mock()
        analyzer = MetricsAnalyzer(parser=parser, registry=GeneratorRegistry(), memory_sampler=lambda: 2 * GB)

        with pytest.raises(MemoryLimitError) as exc_info:
            analyzer.analyze("stack.yaml", AnalysisOptions(memory_limit=GB))

        assert exc_info.value.message == "Memory usage already exceeds limit: 2048.0MB (limit: 1024MB)"
        parser.parse.assert_not_called()
        assert analyzer.get_analysis_statistics() is None

    def test_monitor_wins_race(self, sample_resources):
        """분석 도중 한도를 넘으면 감시기가 먼저 완료되어 MemoryLimitError"""
        release = threading.Event()
        calls = {"count": 0}

        def sampler():
            calls["count"] += 1
            return 0 if calls["count"] == 1 else 2 * GB

        def slow_parse(path):
            release.wait(timeout=5)
            return {"Resources": sample_resources}

        parser = Mock()
        parser.parse.side_effect = slow_parse
        analyzer = MetricsAnalyzer(parser=parser, registry=GeneratorRegistry(), memory_sampler=sampler)

        try:
            with pytest.raises(MemoryLimitError, match="Memory usage exceeded"):
                analyzer.analyze("stack.yaml", AnalysisOptions(memory_limit=GB))
        finally:
            release.set()

        assert analyzer.get_analysis_statistics() is None

    def test_within_limit(self, write_template, sample_resources):
        analyzer = MetricsAnalyzer(memory_sampler=lambda: 100 * 1024 * 1024)

        result = analyzer.analyze(write_template(sample_resources), AnalysisOptions(memory_limit=GB))

        assert result.metadata.memory_peak_mb == 100
        assert len(result.resources) == 6

    def test_released_memory_does_not_fail_next_analysis(self, write_template, sample_resources):
        """앞선 급증이 해제된 뒤의 분석은 현재 사용량 기준으로 통과"""
        readings = iter([400 * MB])

        def sampler():
            return next(readings, 40 * MB)

        analyzer = MetricsAnalyzer(memory_sampler=sampler)
        template = write_template(sample_resources)
        analyzer.analyze(template)

        result = analyzer.analyze(template, AnalysisOptions(memory_limit=190 * MB))

        assert result.metadata.memory_peak_mb == 40
        assert len(result.resources) == 6

    def test_work_runs_on_daemon_thread(self, sample_resources):
        """버려질 수 있는 분석 작업은 데몬 스레드에서 실행"""
        seen = {}

        def parse(path):
            seen["daemon"] = threading.current_thread().daemon
            return {"Resources": sample_resources}

        parser = Mock()
        parser.parse.side_effect = parse
        analyzer = MetricsAnalyzer(parser=parser, memory_sampler=lambda: 10 * MB)

        analyzer.analyze("stack.yaml", AnalysisOptions(memory_limit=GB))

        assert seen["daemon"] is True


@pytest.fixture
def recorded_monitors():
    """analyze가 만든 감시기를 기록"""
    monitors = []

    class RecordingMonitor(MemoryBudgetMonitor):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            monitors.append(self)

    with patch("core.analysis.analyzer.MemoryBudgetMonitor", RecordingMonitor):
        yield monitors


class TestMonitorStoppedOnExit:
    """모든 종료 경로에서 감시기 중지"""

    def test_after_success(self, recorded_monitors, write_template, sample_resources):
        analyzer = MetricsAnalyzer(memory_sampler=lambda: 10 * MB)

        analyzer.analyze(write_template(sample_resources), AnalysisOptions(memory_limit=GB))

        (monitor,) = recorded_monitors
        assert monitor._thread is not None
        assert monitor.is_running is False

    def test_after_parse_error(self, recorded_monitors):
        parser = Mock()
        parser.parse.side_effect = TemplateParseError("Template must contain a Resources section")
        analyzer = MetricsAnalyzer(parser=parser, registry=GeneratorRegistry(), memory_sampler=lambda: 10 * MB)

        with pytest.raises(TemplateParseError):
            analyzer.analyze("stack.yaml", AnalysisOptions(memory_limit=GB))

        (monitor,) = recorded_monitors
        assert monitor.is_running is False

    def test_after_unexpected_error(self, recorded_monitors):
        parser = Mock()
        parser.parse.side_effect = RuntimeError("boom")
        analyzer = MetricsAnalyzer(parser=parser, registry=GeneratorRegistry(), memory_sampler=lambda: 10 * MB)

        with pytest.raises(ResourceError, match="Analysis failed: boom"):
            analyzer.analyze("stack.yaml", AnalysisOptions(memory_limit=GB))

        (monitor,) = recorded_monitors
        assert monitor.is_running is False


# =============================================================================
# 통계 / 진단
# =============================================================================


class TestStatistics:
    def test_no_statistics_before_analysis(self):
        assert MetricsAnalyzer(registry=GeneratorRegistry()).get_analysis_statistics() is None

    def test_statistics_snapshot(self, write_template, sample_resources):
        sample_resources["Bucket"] = {"Type": "AWS::S3::Bucket"}
        analyzer = MetricsAnalyzer(memory_sampler=lambda: 64 * 1024 * 1024)

        analyzer.analyze(write_template(sample_resources))
        stats = analyzer.get_analysis_statistics()

        assert stats.total_resources == 7
        assert stats.supported_resources == 6
        assert stats.unsupported_resources == 1
        assert stats.resources_by_type["AWS::S3::Bucket"] == 1
        assert stats.resources_by_type["AWS::RDS::DBInstance"] == 1
        assert stats.memory_usage_mb == 64

    def test_registered_generators(self):
        assert "RDSMetricsGenerator" in MetricsAnalyzer().get_registered_generators()
        assert MetricsAnalyzer(registry=GeneratorRegistry()).get_registered_generators() == []

"""
tests/core/parallel/test_parallel_errors.py - core/parallel/errors.py 테스트
"""

import threading

from core.parallel.errors import ErrorCollector
from core.template.types import ResourceDescriptor


def raised(error):
    """traceback이 채워진 예외 반환"""
    try:
        raise error
    except Exception as e:
        return e


class TestErrorCollector:
    """ErrorCollector 테스트"""

    def test_collect(self):
        collector = ErrorCollector()
        resource = ResourceDescriptor("Function", "AWS::Lambda::Function")

        entry = collector.collect(resource, raised(ValueError("bad memory size")))

        assert entry.resource_id == "Function"
        assert entry.resource_type == "AWS::Lambda::Function"
        assert entry.error == "bad memory size"
        assert "ValueError" in entry.stack
        assert collector.errors == [entry]
        assert collector.has_errors
        assert len(collector) == 1

    def test_stack_none_without_traceback(self):
        collector = ErrorCollector()

        entry = collector.collect(ResourceDescriptor("A", "AWS::Test::A"), RuntimeError("x"))

        assert entry.stack is None
        assert "stack" not in entry.to_dict()

    def test_errors_returns_copy(self):
        collector = ErrorCollector()
        collector.collect(ResourceDescriptor("A", "AWS::Test::A"), RuntimeError("x"))

        collector.errors.clear()

        assert len(collector) == 1

    def test_thread_safety(self):
        collector = ErrorCollector()

        def worker(index):
            for j in range(50):
                collector.collect(ResourceDescriptor(f"R{index}-{j}", "AWS::Test::A"), RuntimeError("x"))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(collector) == 400

    def test_summary(self):
        collector = ErrorCollector()
        assert collector.get_summary() == "에러 없음"

        for i in range(7):
            collector.collect(ResourceDescriptor(f"R{i}", "AWS::Test::A"), RuntimeError("boom"))

        summary = collector.get_summary()
        assert summary.startswith("메트릭 생성 실패 7건:")
        assert "  - R0 (AWS::Test::A): boom" in summary
        assert "... 외 2건" in summary

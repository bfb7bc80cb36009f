"""
core/analysis - 템플릿 분석 파이프라인

분류 → 병렬 생성 → 결과 조립을 묶는 MetricsAnalyzer와 그 구성 요소입니다.

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    core.parallel이 sanitizer를 참조하므로 패키지 로드 시점에 analyzer를 import하지 않습니다.
"""

__all__ = [
    "AnalysisOptions",
    "ClassificationResult",
    "MetricsAnalyzer",
    "PhaseTimings",
    "ResultAssembler",
    "classify_resources",
    "sanitize_properties",
]

_IMPORT_MAPPING = {
    "AnalysisOptions": (".options", "AnalysisOptions"),
    "ClassificationResult": (".classifier", "ClassificationResult"),
    "classify_resources": (".classifier", "classify_resources"),
    "sanitize_properties": (".sanitizer", "sanitize_properties"),
    "PhaseTimings": (".assembler", "PhaseTimings"),
    "ResultAssembler": (".assembler", "ResultAssembler"),
    "MetricsAnalyzer": (".analyzer", "MetricsAnalyzer"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

# core/__init__.py
"""
core - CloudFormation → CloudWatch 메트릭 추천 분석 코어

템플릿 파싱, 리소스 분류, 병렬 메트릭 생성, 결과 출력을 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── template/       # 템플릿 파서 (YAML/JSON, CloudFormation 단축 태그)
    ├── metrics/        # 메트릭/분석 결과 데이터 타입
    ├── generators/     # 생성기 인터페이스, 임계값 계산, 레지스트리, 카탈로그
    ├── parallel/       # 병렬 생성 실행기, 에러 수집, 메모리 감시
    ├── analysis/       # 분류, 민감정보 마스킹, 결과 조립, MetricsAnalyzer
    ├── output/         # JSON / HTML 포매터
    ├── config.py       # 중앙 설정 (버전, 상수)
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 분석
    from core.analysis import AnalysisOptions, MetricsAnalyzer
    analyzer = MetricsAnalyzer()
    result = analyzer.analyze("stack.yaml", AnalysisOptions(continue_on_error=True))

    # 출력
    from core.output import get_formatter
    print(get_formatter("json").format(result))

    # 예외 처리
    from core.exceptions import CWMError, get_exit_code
    try:
        analyzer.analyze("missing.yaml")
    except CWMError as e:
        print(e.message, get_exit_code(e))
"""

from core import analysis, config, exceptions, generators, metrics, output, parallel, template

__all__: list[str] = [
    # 서브패키지
    "analysis",
    "generators",
    "metrics",
    "output",
    "parallel",
    "template",
    # 모듈
    "config",
    "exceptions",
]

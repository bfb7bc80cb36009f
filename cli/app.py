"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    cwm --version                       # 버전 표시
    cwm analyze TEMPLATE [옵션]         # 템플릿 분석 → 권장 메트릭 출력
    cwm generators [--json]             # 등록된 생성기 / 지원 리소스 타입
    cwm catalog [--json]                # 메트릭 카탈로그 통계

    예시:
    cwm analyze stack.yaml                          # JSON을 stdout으로
    cwm analyze stack.yaml -o html -f report.html   # HTML 파일로 저장
    cwm analyze stack.yaml --continue-on-error -v   # 실패 리소스 건너뛰기 + 상세 로그
    cwm analyze stack.yaml -o cdk --cdk-output-dir infra/lib --validate-cdk

종료 코드:
    0 성공, 1 파일 오류/예기치 않은 오류, 2 파싱 오류, 3 리소스 오류, 4 출력 오류

Usage:
    $ cwm analyze template.yaml
    $ python -m cli.app analyze template.yaml
"""

import json
import logging
import time
from pathlib import Path

import click

from core.config import PERFORMANCE_MODE_CONCURRENCY, get_default_log_level, get_version
from core.exceptions import CWMError, format_error_for_user, get_exit_code, get_suggestion

logger = logging.getLogger(__name__)

VERSION = get_version()

MB = 1024 * 1024


def _parse_resource_types(value: str | None) -> list[str] | None:
    """콤마 구분 리소스 타입 목록 파싱 (빈 값이면 None)"""
    if not value:
        return None
    types = [item.strip() for item in value.split(",") if item.strip()]
    return types or None


def _print_cdk_validation(validation) -> None:
    """CDK 코드 점검 결과 출력 (오류가 있어도 생성된 코드는 저장)"""
    from cli.ui.console import print_error, print_info, print_success, print_warning

    for message in validation.errors:
        print_error(message)
    for message in validation.warnings:
        print_warning(message)
    for message in validation.suggestions:
        print_info(message)
    if validation.is_valid:
        print_success(f"CDK 코드 점검 통과: 알람 {validation.metrics['alarm_count']}개")


def _report_error(error: BaseException, verbose: bool) -> int:
    """에러 출력 후 종료 코드 반환"""
    from cli.ui.console import console, print_error, print_info

    print_error(format_error_for_user(error))

    if isinstance(error, CWMError):
        if verbose and error.details:
            console.print_json(json.dumps(error.details, ensure_ascii=False, default=str))
        print_info(get_suggestion(error.error_type))
    elif verbose:
        console.print_exception()

    return get_exit_code(error)


@click.group()
@click.version_option(VERSION, prog_name="cwm")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=get_default_log_level,
    show_default="warning (CWM_LOG_LEVEL)",
    help="로그 레벨",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """cwm - CloudFormation 템플릿 기반 CloudWatch 메트릭 추천 도구"""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command("analyze")
@click.argument("template", type=click.Path(dir_okay=False))
@click.option(
    "-o", "--output", "output_format", type=click.Choice(["json", "html", "cdk"]), default="json", help="출력 형식"
)
@click.option("-f", "--file", "output_file", default=None, help="출력 파일 경로 (기본: stdout)")
@click.option("--resource-types", default=None, help="분석할 리소스 타입 (콤마 구분)")
@click.option(
    "--include-unsupported/--exclude-unsupported",
    default=True,
    help="미지원 리소스 목록 포함 여부",
)
@click.option("--include-low/--exclude-low", default=True, help="Low 중요도 메트릭 포함 여부")
@click.option(
    "--concurrency",
    type=click.IntRange(1, 100),
    default=6,
    show_default=True,
    help="메트릭 생성 동시 실행 수",
)
@click.option("--continue-on-error", is_flag=True, help="리소스 단위 실패를 기록하고 계속 진행")
@click.option("--memory-limit", type=click.IntRange(min=1), default=None, help="메모리 한도 (MB)")
@click.option("--collect-metrics", is_flag=True, help="결과에 성능 지표(performance_metrics) 포함")
@click.option("--performance-mode", is_flag=True, help=f"고성능 모드 (동시 실행 {PERFORMANCE_MODE_CONCURRENCY})")
@click.option("--open", "auto_open", is_flag=True, help="HTML 저장 후 브라우저 열기")
@click.option("--cdk-stack-name", default="CloudWatchAlarmsStack", show_default=True, help="CDK 스택 이름")
@click.option("--cdk-output-dir", default=None, help="CDK 코드 저장 디렉토리 (<스택 이름>.ts)")
@click.option("--cdk-enable-sns", is_flag=True, help="새 SNS 토픽을 만들어 알람 액션으로 연결")
@click.option("--cdk-sns-topic-arn", default=None, help="알람 액션으로 연결할 기존 SNS 토픽 ARN")
@click.option("--validate-cdk", is_flag=True, help="생성한 CDK 코드 품질 점검 결과 출력")
@click.option("-v", "--verbose", is_flag=True, help="상세 로그 및 통계 출력")
@click.pass_context
def analyze_command(
    ctx: click.Context,
    template: str,
    output_format: str,
    output_file: str | None,
    resource_types: str | None,
    include_unsupported: bool,
    include_low: bool,
    concurrency: int,
    continue_on_error: bool,
    memory_limit: int | None,
    collect_metrics: bool,
    performance_mode: bool,
    auto_open: bool,
    cdk_stack_name: str,
    cdk_output_dir: str | None,
    cdk_enable_sns: bool,
    cdk_sns_topic_arn: str | None,
    validate_cdk: bool,
    verbose: bool,
) -> None:
    """CloudFormation 템플릿 분석

    \b
    Examples:
        cwm analyze stack.yaml
        cwm analyze stack.yaml -o html -f out/metrics.html
        cwm analyze stack.json --resource-types AWS::RDS::DBInstance,AWS::Lambda::Function
        cwm analyze stack.yaml -o cdk --cdk-stack-name my-alarms --cdk-enable-sns
    """
    from cli.ui.console import configure_logging, print_statistics, print_success, print_warning
    from core.analysis import AnalysisOptions, MetricsAnalyzer
    from core.output import CDKOptions, CDKOutputFormatter, get_formatter, open_in_browser, validate_cdk_code
    from shared.io import OutputConfig
    from shared.io.output import default_output_filename, write_output

    log_level = (ctx.obj or {}).get("log_level", "warning")
    configure_logging(verbose=verbose, level=log_level)

    try:
        output_config = OutputConfig.from_string(output_format, output_file=output_file, auto_open=auto_open)
        if output_config.auto_open and output_config.should_output_html() and output_config.writes_to_stdout:
            # 브라우저로 열 파일이 필요하므로 템플릿 옆에 저장
            output_config.output_file = str(Path(template).with_name(default_output_filename(template, "html")))
        if output_config.should_output_cdk():
            # 스택 이름/SNS ARN 검증을 분석 전에 수행
            formatter = CDKOutputFormatter(
                CDKOptions(
                    stack_name=cdk_stack_name,
                    include_low_importance=include_low,
                    enable_sns=cdk_enable_sns,
                    sns_topic_arn=cdk_sns_topic_arn,
                )
            )
            if cdk_output_dir and not output_config.output_file:
                output_config.output_file = str(Path(cdk_output_dir) / f"{cdk_stack_name}.ts")
        else:
            formatter = get_formatter(output_config.format.format_name)
        options = AnalysisOptions(
            output_format=output_format,
            resource_types=_parse_resource_types(resource_types),
            include_unsupported=include_unsupported,
            include_low_importance=include_low,
            concurrency=PERFORMANCE_MODE_CONCURRENCY if performance_mode else concurrency,
            verbose=verbose,
            collect_metrics=collect_metrics,
            continue_on_error=continue_on_error,
            memory_limit=memory_limit * MB if memory_limit else None,
        )

        analyzer = MetricsAnalyzer()
        result = analyzer.analyze(template, options)

        format_start = time.perf_counter()
        text = formatter.format(result)
        logger.debug(f"출력 포맷팅: {(time.perf_counter() - format_start) * 1000:.0f}ms")
    except (CWMError, ValueError) as e:
        raise SystemExit(_report_error(e, verbose)) from e

    if output_config.should_output_cdk() and validate_cdk:
        _print_cdk_validation(validate_cdk_code(text))

    if result.errors:
        print_warning(f"메트릭 생성 실패 {len(result.errors)}건 (결과의 errors 항목 참고)")

    if verbose:
        stats = analyzer.get_analysis_statistics()
        if stats is not None:
            print_statistics(
                {
                    "전체 리소스": stats.total_resources,
                    "지원 리소스": stats.supported_resources,
                    "미지원 리소스": stats.unsupported_resources,
                    "추천 메트릭": result.metric_count,
                    "실패": len(result.errors or ()),
                    "처리 시간": f"{stats.processing_time_ms}ms",
                    "메모리 최대": f"{stats.memory_usage_mb}MB",
                }
            )

    if output_config.writes_to_stdout:
        click.echo(text)
        return

    try:
        path = write_output(text, output_config.output_file)
    except CWMError as e:
        raise SystemExit(_report_error(e, verbose)) from e

    print_success(f"결과 저장: {path}")
    if output_config.should_output_html() and output_config.auto_open:
        open_in_browser(str(path))


@cli.command("generators")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def generators_command(as_json: bool) -> None:
    """등록된 메트릭 생성기 목록

    \b
    Examples:
        cwm generators          # 테이블 출력
        cwm generators --json   # JSON 출력
    """
    from core.generators import build_default_registry
    from core.generators.catalog import get_metrics_for_resource_type

    registry = build_default_registry()

    rows: list[dict[str, object]] = []
    for resource_type in registry.supported_types():
        generator = registry.lookup(resource_type)
        rows.append(
            {
                "resource_type": resource_type,
                "generator": type(generator).__name__,
                "metric_count": len(get_metrics_for_resource_type(resource_type)),
            }
        )

    if as_json:
        click.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    console = Console()

    table = Table(title="메트릭 생성기", show_header=True)
    table.add_column("리소스 타입", style="cyan")
    table.add_column("생성기", style="white")
    table.add_column("메트릭 수", style="yellow", justify="right")

    for row in rows:
        table.add_row(str(row["resource_type"]), str(row["generator"]), str(row["metric_count"]))

    console.print(table)
    console.print()
    console.print(f"[dim]생성기 {len(registry.generator_names())}개, 리소스 타입 {len(rows)}개[/dim]")


@cli.command("catalog")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def catalog_command(as_json: bool) -> None:
    """메트릭 카탈로그 통계 (서비스/카테고리/중요도별)"""
    from core.generators.catalog import get_catalog_statistics

    stats = get_catalog_statistics()

    if as_json:
        click.echo(json.dumps(stats, ensure_ascii=False, indent=2))
        return

    from cli.ui.console import print_statistics, print_table

    print_statistics(
        {"전체 메트릭": stats["total_count"], "조건부 메트릭": stats["conditional_count"]},
        title="메트릭 카탈로그",
    )
    print_table("서비스별", ["서비스", "메트릭 수"], [[k, v] for k, v in stats["by_resource_type"].items()])
    print_table("카테고리별", ["카테고리", "메트릭 수"], [[k, v] for k, v in stats["by_category"].items()])
    print_table("중요도별", ["중요도", "메트릭 수"], [[k, v] for k, v in stats["by_importance"].items()])


if __name__ == "__main__":
    cli()

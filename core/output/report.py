"""
core/output/report.py - 메트릭 추천 HTML 리포트 모델과 렌더러

리포트는 리소스 단위 섹션으로 구성되며, 각 섹션 안에서 메트릭을 카테고리별로 묶고
중요도에 따라 임계값 셀의 강조가 달라집니다. 상단에는 요약 카드와 ECharts 분포 차트가 들어갑니다.

HTML은 templates/metrics_report.html.j2 (Jinja2, 자동 이스케이프)로 렌더링하므로
논리 ID나 설명 같은 템플릿 유래 문자열은 그대로 넘기면 됩니다.

Example:
    report = MetricsReport("CloudWatch 메트릭 추천 리포트", subtitle="stack.yaml")
    report.add_badge("버전", "1.0.0")
    report.add_card("추천 메트릭", 42)
    report.add_chart(pie_option("중요도 분포", {"High": 20, "Low": 3}, colors=IMPORTANCE_COLORS))
    report.add_resource(section)
    html_text = report.render()
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import webbrowser
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).with_name("templates")
TEMPLATE_NAME = "metrics_report.html.j2"

IMPORTANCE_COLORS = {"High": "#d9534f", "Medium": "#f0ad4e", "Low": "#9ca3af"}
CATEGORY_COLORS = {"Performance": "#4e79a7", "Error": "#e15759", "Saturation": "#f28e2b", "Latency": "#76b7b2"}

DEFAULT_CHART_HEIGHT = 320
# 이 개수 이상이면 리소스 막대 차트를 가로로 눕힘
HORIZONTAL_BAR_MIN = 8


def open_in_browser(filepath: str) -> bool:
    """저장된 리포트를 기본 브라우저로 열기 (OS 명령 실패 시 webbrowser 사용)"""
    if sys.platform == "win32":
        command = None
    elif sys.platform == "darwin":
        command = ["open", filepath]
    else:
        command = ["xdg-open", filepath]

    try:
        if command is None:
            os.startfile(filepath)  # noqa: S606
        else:
            subprocess.run(command, check=True)  # noqa: S603
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"브라우저 열기 실패, webbrowser로 재시도: {e}")
        return webbrowser.open(Path(filepath).resolve().as_uri())


# =============================================================================
# 리포트 구성 요소
# =============================================================================


@dataclass(frozen=True)
class MetricRow:
    """메트릭 테이블 한 행 (표시용 문자열로 변환 완료)

    comparison은 알람 방향 기호입니다 (높을수록 나쁨 "≥", 낮을수록 나쁨 "≤").
    """

    metric_name: str
    statistic: str
    warning: str
    critical: str
    comparison: str
    period: str
    importance: str
    dimensions: str
    description: str


@dataclass(frozen=True)
class CategoryGroup:
    category: str
    rows: tuple[MetricRow, ...]


@dataclass(frozen=True)
class ResourceSection:
    logical_id: str
    resource_type: str
    namespaces: tuple[str, ...]
    groups: tuple[CategoryGroup, ...]

    @property
    def metric_count(self) -> int:
        return sum(len(group.rows) for group in self.groups)

    @property
    def high_count(self) -> int:
        return sum(1 for group in self.groups for row in group.rows if row.importance == "High")


@dataclass(frozen=True)
class NoticeTable:
    """미지원 리소스, 실패 목록 같은 보조 표"""

    title: str
    headers: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]


@dataclass
class ChartSpec:
    chart_id: str
    option: dict[str, Any]
    height: int = DEFAULT_CHART_HEIGHT
    wide: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.chart_id, "option": self.option, "height": self.height}


# =============================================================================
# ECharts 옵션
# =============================================================================


def pie_option(
    title: str,
    counts: dict[str, int],
    colors: dict[str, str] | None = None,
    ring: bool = False,
) -> dict[str, Any]:
    """분포 파이 차트 옵션 (0건 항목 제외, colors에 있는 항목은 고정 색상)"""
    data = []
    for name, value in counts.items():
        if not value:
            continue
        entry: dict[str, Any] = {"name": name, "value": value}
        if colors and name in colors:
            entry["itemStyle"] = {"color": colors[name]}
        data.append(entry)

    return {
        "title": {"text": title, "left": "center", "textStyle": {"fontSize": 14}},
        "tooltip": {"trigger": "item", "formatter": "{b}: {c}개 ({d}%)"},
        "legend": {"bottom": 0},
        "series": [
            {
                "type": "pie",
                "radius": ["45%", "68%"] if ring else "62%",
                "center": ["50%", "48%"],
                "data": data,
                "label": {"formatter": "{b}\n{c}"},
            }
        ],
    }


def importance_bar_option(title: str, sections: list[ResourceSection]) -> dict[str, Any]:
    """리소스별 메트릭 수를 중요도로 쌓은 막대 차트 옵션"""
    names = [section.logical_id for section in sections]
    series = []
    for level, color in IMPORTANCE_COLORS.items():
        values = [
            sum(1 for group in section.groups for row in group.rows if row.importance == level)
            for section in sections
        ]
        series.append(
            {"name": level, "type": "bar", "stack": "importance", "data": values, "itemStyle": {"color": color}}
        )

    category_axis = {"type": "category", "data": names, "axisLabel": {"interval": 0}}
    value_axis = {"type": "value", "minInterval": 1}
    horizontal = len(names) >= HORIZONTAL_BAR_MIN
    return {
        "title": {"text": title, "textStyle": {"fontSize": 14}},
        "tooltip": {"trigger": "axis", "axisPointer": {"type": "shadow"}},
        "legend": {"right": 0},
        "grid": {"left": 8, "right": 16, "bottom": 8, "containLabel": True},
        "xAxis": value_axis if horizontal else category_axis,
        "yAxis": category_axis if horizontal else value_axis,
        "series": series,
    }


# =============================================================================
# 리포트
# =============================================================================


class MetricsReport:
    """메트릭 추천 리포트

    Attributes:
        badges: 헤더 오른쪽 메타데이터 (라벨, 값)
        cards: 요약 카드 (라벨, 값, 톤: "good" | "warn" | "bad" | None)
        charts: 분포 차트
        resources: 리소스 섹션 (입력 순서)
        notices: 보조 표
    """

    def __init__(self, title: str, subtitle: str | None = None, generated_at: datetime | None = None):
        self.title = title
        self.subtitle = subtitle
        self.generated_at = generated_at or datetime.now()
        self.badges: list[tuple[str, Any]] = []
        self.cards: list[tuple[str, Any, str | None]] = []
        self.charts: list[ChartSpec] = []
        self.resources: list[ResourceSection] = []
        self.notices: list[NoticeTable] = []

    def add_badge(self, label: str, value: Any) -> MetricsReport:
        self.badges.append((label, value))
        return self

    def add_card(self, label: str, value: Any, tone: str | None = None) -> MetricsReport:
        self.cards.append((label, value, tone))
        return self

    def add_chart(self, option: dict[str, Any], height: int = DEFAULT_CHART_HEIGHT, wide: bool = False) -> str:
        """차트 추가 후 차트 요소 id 반환"""
        chart_id = f"chart-{len(self.charts) + 1}"
        self.charts.append(ChartSpec(chart_id, option, height, wide))
        return chart_id

    def add_resource(self, section: ResourceSection) -> MetricsReport:
        self.resources.append(section)
        return self

    def add_notice(self, title: str, headers: list[str], rows: list[list[Any]]) -> MetricsReport:
        self.notices.append(NoticeTable(title, tuple(headers), tuple(tuple(row) for row in rows)))
        return self

    def render(self) -> str:
        env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["display"] = lambda value: "-" if value is None else value
        html_text = env.get_template(TEMPLATE_NAME).render(
            report=self,
            generated_at=self.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
            chart_data=[chart.to_dict() for chart in self.charts],
            has_low=any(row.importance == "Low" for s in self.resources for g in s.groups for row in g.rows),
        )
        logger.debug(f"HTML 렌더링: 리소스 섹션 {len(self.resources)}개, 차트 {len(self.charts)}개")
        return html_text

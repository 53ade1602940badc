"""Text, Markdown and HTML charts of numeric data pulled from analysis results."""

from __future__ import annotations

import json
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CHART_HEIGHT = 15
MAX_CHART_WIDTH = 50
LABEL_WIDTH = 8

_BAR_LEGEND = ("█", "▓", "▒", "░", "▄", "▀")
_LINE_LEGEND = ("●", "◆", "▲", "■", "★", "♦")


class ChartType(str, Enum):
    """Kinds of charts that can be rendered or suggested."""

    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    AREA = "area"
    TABLE = "table"
    ASCII = "ascii"
    HTML = "html"

    def __str__(self) -> str:
        return self.value


@dataclass
class Series:
    """A named sequence of values, one per label."""

    name: str = ""
    values: list[float] = field(default_factory=list)
    color: str = ""


@dataclass
class ChartData:
    """Labels, series and captions of a chart."""

    labels: list[str] = field(default_factory=list)
    series: list[Series] = field(default_factory=list)
    title: str = ""
    x_axis: str = ""
    y_axis: str = ""
    chart_type: ChartType | str = ""


def render_chart(data: ChartData) -> str:
    """Render a chart according to its type; unknown types are drawn as text."""
    if data.chart_type == ChartType.HTML:
        return render_html_chart(data)
    if data.chart_type == ChartType.TABLE:
        return render_table(data)
    return render_ascii_chart(data)


def _plot(
    data: ChartData,
    max_value: float,
    width: int,
    mark: str,
    hit: Callable[[float, float], bool],
    legend: tuple[str, ...],
) -> list[str]:
    lines = ["```\n", f"  {data.y_axis}\n", "  │\n"]
    for step in range(CHART_HEIGHT, -1, -1):
        level = max_value * step / CHART_HEIGHT
        row = [f"{level:6.1f}│"]
        for column in range(min(width, len(data.labels))):
            marked = any(
                column < len(series.values) and hit(series.values[column], level)
                for series in data.series
            )
            row.append(mark if marked else " ")
        lines.append("".join(row) + "\n")

    lines.append("      └" + "─" * width + "\n      ")
    lines.extend(
        f"{label[:LABEL_WIDTH]:<{LABEL_WIDTH}}" for label in data.labels[:width]
    )
    lines.append("\n")
    lines.append(f"      {data.x_axis}\n")
    lines.append("\n  Legenda:\n")
    lines.extend(
        f"    {legend[index % len(legend)]} {series.name}\n"
        for index, series in enumerate(data.series)
    )
    lines.append("```\n\n")
    return lines


def render_ascii_chart(data: ChartData) -> str:
    """Render bar or line charts as text inside a Markdown code block.

    Bars are drawn for the ``bar`` type or no type, points for ``line``;
    other types yield only the heading.
    """
    heading = f"\n### 📊 {data.title}\n\n"
    if not data.series or not data.labels:
        return "```\n⚠️ Dados insuficientes para gerar gráfico\n```"

    max_value = max(
        (value for series in data.series for value in series.values), default=0.0
    )
    max_value = max(max_value, 0.0)
    if max_value == 0:
        return "```\n⚠️ Todos os valores são zero\n```"

    width = min(len(data.labels), MAX_CHART_WIDTH)
    parts = [heading]
    if data.chart_type in (ChartType.BAR, ""):
        parts.extend(
            _plot(data, max_value, width, "█", lambda v, level: v >= level, _BAR_LEGEND)
        )
    if data.chart_type == ChartType.LINE:
        tolerance = max_value / CHART_HEIGHT
        parts.extend(
            _plot(
                data,
                max_value,
                width,
                "●",
                lambda v, level: abs(v - level) < tolerance,
                _LINE_LEGEND,
            )
        )
    return "".join(parts)


def _js_json(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def _js_number(value: float) -> str:
    number = float(value)
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def render_html_chart(data: ChartData) -> str:
    """Render a standalone HTML page that draws the chart with Chart.js."""
    datasets = []
    for series in data.series:
        entry = (
            "{\n"
            f"                    label: '{series.name}',\n"
            f"                    data: [{','.join(_js_number(v) for v in series.values)}]"
        )
        if series.color:
            entry += (
                ",\n"
                f"                    backgroundColor: '{series.color}',\n"
                f"                    borderColor: '{series.color}'"
            )
        entry += "\n                }"
        datasets.append(entry)

    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{data.title}</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; }}
        .chart-container {{ width: 800px; height: 400px; margin: 20px 0; }}
    </style>
</head>
<body>
    <h1>{data.title}</h1>
    <div class="chart-container">
        <canvas id="chart"></canvas>
    </div>
    <script>
        const ctx = document.getElementById('chart').getContext('2d');
        const chart = new Chart(ctx, {{
            type: '{data.chart_type}',
            data: {{
                labels: {_js_json(list(data.labels))},
                datasets: [{",".join(datasets)}
            ]
            }},
            options: {{
                responsive: true,
                maintainAspectRatio: false,
                scales: {{
                    y: {{
                        beginAtZero: true,
                        title: {{
                            display: true,
                            text: '{data.y_axis}'
                        }}
                    }},
                    x: {{
                        title: {{
                            display: true,
                            text: '{data.x_axis}'
                        }}
                    }}
                }}
            }}
        }});
    </script>
</body>
</html>"""


def _table_value(value: float) -> str:
    if math.isfinite(value) and float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}"


def render_table(data: ChartData) -> str:
    """Render the data as a Markdown table, one column per series."""
    if not data.labels:
        return "```\n⚠️ Sem dados para exibir\n```"

    lines = [f"\n### 📋 {data.title}\n\n"]
    header = [data.x_axis] + [series.name for series in data.series]
    lines.append("| " + " | ".join(header) + " |\n")
    lines.append("|" + " --- |" * (len(data.series) + 1) + "\n")
    for index, label in enumerate(data.labels):
        cells = [label] + [
            _table_value(series.values[index]) if index < len(series.values) else "N/A"
            for series in data.series
        ]
        lines.append("| " + " | ".join(cells) + " |\n")
    lines.append("\n")
    return "".join(lines)


def _strip_fences(response: str) -> str:
    text = response.strip()
    text = text.removeprefix("```json")
    text = text.removeprefix("```")
    text = text.removesuffix("```")
    return text.strip()


def _load_object(response: str) -> dict[str, Any]:
    try:
        payload = json.loads(_strip_fences(response))
    except json.JSONDecodeError as exc:
        raise ValueError(f"failed to parse JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("failed to parse JSON: expected an object")
    return payload


def parse_chart_data(response: str, chart_type: ChartType | str) -> ChartData:
    """Read chart data from a JSON reply, possibly wrapped in a code fence.

    The chart type of the result is always ``chart_type``.
    """
    payload = _load_object(response)
    series = [
        Series(
            name=raw.get("name") or "",
            values=[float(v) for v in raw.get("values") or []],
            color=raw.get("color") or "",
        )
        for raw in payload.get("series") or []
    ]
    return ChartData(
        labels=[str(label) for label in payload.get("labels") or []],
        series=series,
        title=payload.get("title") or "",
        x_axis=payload.get("x_axis") or "",
        y_axis=payload.get("y_axis") or "",
        chart_type=chart_type,
    )


def parse_chart_suggestion(response: str) -> tuple[ChartType | str, str]:
    """Read a suggested chart type and the reason for it from a JSON reply."""
    payload = _load_object(response)
    suggested = str(payload.get("chart_type") or "")
    reason = str(payload.get("reason") or "")
    try:
        return ChartType(suggested), reason
    except ValueError:
        return suggested, reason
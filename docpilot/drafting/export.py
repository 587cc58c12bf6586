"""Markdown memo export of an executive summary."""

from __future__ import annotations

from pathlib import PurePath

from docpilot.drafting.models import ExecutiveSummary

MARKDOWN_MEDIA_TYPE = "text/markdown"


def export_filename(file_name: str) -> str:
    """``report.pdf`` becomes ``Summary_report.md``."""
    return f"Summary_{PurePath(file_name).stem}.md"


def render_summary_markdown(summary: ExecutiveSummary, file_name: str) -> str:
    highlights = "\n".join(
        f"- {bullet.text} (Pg {bullet.page_number})" for bullet in summary.bullets
    )
    metric_rows = "\n".join(
        f"| {metric.label} | {metric.value} | {metric.confidence} |"
        for metric in summary.metrics
    )

    risk_sections = []
    for risk in summary.risks:
        section = f"### {risk.impact} Risk: {risk.description}"
        if risk.mitigation:
            section += f"\nMitigation: {risk.mitigation}"
        risk_sections.append(section)

    return (
        f"# Executive Summary: {file_name}\n\n"
        f"## Key Highlights\n{highlights}\n\n"
        "## Metrics\n"
        "| Label | Value | Confidence |\n"
        "|---|---|---|\n"
        f"{metric_rows}\n\n"
        "## Risks\n" + "\n\n".join(risk_sections)
    )

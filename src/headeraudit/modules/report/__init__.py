"""Reporting module for headeraudit."""

from .builder import build
from .json_report import parse_json, render_json, render_json_many, report_from_dict, report_to_dict
from .models import FORMATS, Report
from .text_report import render_human


def render(report: Report, format: str = "human") -> str:
    """Render a report as ``json`` or ``human`` text. Output is deterministic."""
    if format == "json":
        return render_json(report)
    if format == "human":
        return render_human(report)
    raise ValueError(f"Unsupported format: {format}")


def parse(text: str) -> Report:
    """Inverse of ``render(report, "json")``."""
    return parse_json(text)


__all__ = [
    "FORMATS",
    "Report",
    "build",
    "parse",
    "render",
    "render_human",
    "render_json",
    "render_json_many",
    "report_from_dict",
    "report_to_dict",
]

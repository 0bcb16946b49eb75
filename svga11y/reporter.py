"""Report generation — JSON and Markdown output."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from svga11y.models import AnalysisResult, FixResult, WCAGAnalysis


def build_json_report(result: AnalysisResult) -> str:
    """Serialize an analysis result as JSON text."""
    data = {
        "source_path": str(result.source_path) if result.source_path else None,
        "svg_count": len(result.svg_nodes),
        "img_count": len(result.img_nodes),
        "error_count": result.error_count,
        "warning_count": result.warning_count,
        "issues": [asdict(issue) for issue in result.issues],
    }
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def build_markdown_report(result: AnalysisResult) -> str:
    """Render an analysis result as Markdown text."""
    name = result.source_path.name if result.source_path else "(text)"
    lines: list[str] = [
        f"# Accessibility Report: {name}",
        "",
        f"- **SVG elements:** {len(result.svg_nodes)}",
        f"- **Images:** {len(result.img_nodes)}",
        "",
        f"## Issues ({result.error_count} errors, {result.warning_count} warnings)",
        "",
    ]

    for issue in result.issues:
        marker = "ERROR" if issue.severity.value == "error" else "WARN"
        where = f" (line {issue.line}, col {issue.column})" if issue.line else ""
        lines.append(f"- **[{marker}]** `{issue.rule}`{where}: {issue.message}")

    lines.append("")
    return "\n".join(lines)


def write_json_report(result: AnalysisResult, output: Path) -> None:
    """Write an analysis result as a JSON report."""
    output.write_text(build_json_report(result), encoding="utf-8")


def write_markdown_report(result: AnalysisResult, output: Path) -> None:
    """Write an analysis result as a Markdown report."""
    output.write_text(build_markdown_report(result), encoding="utf-8")


def wcag_classification(analysis: WCAGAnalysis) -> str:
    """Image category label, falling back to the raw value the provider sent."""
    if analysis.image_type.classification is not None:
        return analysis.image_type.classification.value
    raw = analysis.raw.get("tipoImagem") or {}
    return str(raw.get("classificacao") or "?")


def format_wcag(analysis: WCAGAnalysis) -> str:
    """One-line WCAG 1.1.1 verdict, e.g. ``WCAG 1.1.1: Imagem Informativa (Não conforme)``."""
    text = f"WCAG 1.1.1: Imagem {wcag_classification(analysis)}"
    if analysis.conformance.status:
        text += f" ({analysis.conformance.status})"
    return text


def format_fix_summary(result: FixResult, source: Path | None = None, output: Path | None = None) -> str:
    """Return a human-readable summary of a fix run."""
    lines: list[str] = []
    if source is not None and output is not None:
        lines.append(f"Fix: {source.name} -> {output.name}")
    lines.append(f"Total changes: {result.total_changes}")
    for fix in result.fixes:
        suggestion = fix.result.suggestion
        label = "decorative" if suggestion.is_decorative else f'"{suggestion.title_text}"'
        status = "DEGRADED" if fix.result.degraded else "OK"
        line = f"  [{status}] <{fix.element}> @{fix.start}: {label} ({fix.result.strategy.value})"
        if suggestion.wcag_analysis is not None:
            line += f" [{format_wcag(suggestion.wcag_analysis)}]"
        lines.append(line)
    for warning in result.warnings:
        lines.append(f"  Warning: {warning}")
    return "\n".join(lines)

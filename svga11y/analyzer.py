"""Markup accessibility analyzer.

Reads a document and produces an AnalysisResult listing its ``<svg>`` and
``<img>`` elements and the ones that lack an accessible name.
"""

from __future__ import annotations

import bisect
import logging
from pathlib import Path

from svga11y.models import AccessibilityIssue, AnalysisResult, Severity
from svga11y.scanner import img_needs_fix, scan_img_nodes, scan_svg_nodes, svg_needs_fix

logger = logging.getLogger(__name__)

_SNIPPET_LIMIT = 80


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            starts.append(i + 1)
    return starts


def _snippet(markup: str) -> str:
    flat = " ".join(markup.split())
    if len(flat) > _SNIPPET_LIMIT:
        return flat[:_SNIPPET_LIMIT - 3] + "..."
    return flat


class MarkupAnalyzer:
    """Analyzes markup for non-text content without an accessible name.

    Usage::

        analyzer = MarkupAnalyzer()
        result = analyzer.analyze(Path("index.html"))
    """

    def analyze(self, path: Path) -> AnalysisResult:
        """Run the analysis on the file at *path* (read as UTF-8)."""
        text = path.read_text(encoding="utf-8")
        return self.analyze_text(text, source=path)

    def analyze_text(self, text: str, source: Path | None = None) -> AnalysisResult:
        """Run the analysis on in-memory *text*."""
        result = AnalysisResult(source_path=source)
        result.svg_nodes = scan_svg_nodes(text)
        result.img_nodes = scan_img_nodes(text)

        starts = _line_starts(text)

        def position(offset: int) -> tuple[int, int]:
            index = bisect.bisect_right(starts, offset) - 1
            return index + 1, offset - starts[index] + 1

        for svg in result.svg_nodes:
            if not svg_needs_fix(svg):
                continue
            line, column = position(svg.start)
            result.issues.append(AccessibilityIssue(
                rule="svg-missing-name",
                severity=Severity.WARNING,
                message="SVG has no <title>/<desc> and is not hidden with aria-hidden.",
                line=line,
                column=column,
                element=_snippet(svg.raw_markup[:svg.open_tag.end - svg.open_tag.start]),
            ))

        for img in result.img_nodes:
            if not img_needs_fix(img):
                continue
            line, column = position(img.start)
            result.issues.append(AccessibilityIssue(
                rule="img-missing-alt",
                severity=Severity.WARNING,
                message=f"Image '{img.src or '(no src)'}' has no alt attribute.",
                line=line,
                column=column,
                element=_snippet(img.raw_markup),
            ))

        result.issues.sort(key=lambda i: (i.line or 0, i.column or 0))
        logger.debug(
            "Found %d svg, %d img, %d issue(s)",
            len(result.svg_nodes), len(result.img_nodes), len(result.issues),
        )
        return result

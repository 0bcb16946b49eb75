"""Local SVG classifier.

Classification is an ordered cascade.  Structural chart signatures are
checked before icon signatures so that a bar chart made of lines and
rectangles is never taken for a menu or close icon, and icon geometry is
checked before keywords so that an explicit shape wins over a class name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from svga11y.heuristics.keywords import SVG_KEYWORDS
from svga11y.models import Suggestion
from svga11y.scanner import Tag, iter_tags

_CHART_WORDS = re.compile(r"axis|chart|bar|graph|data|legend", re.IGNORECASE)
_ICON_VIEWBOX = re.compile(
    r"viewbox\s*=\s*[\"']?\s*0\s+0\s+(24|16|20|32|48)\s+(24|16|20|32|48)",
    re.IGNORECASE,
)
_VIEWBOX_24 = re.compile(r"viewBox\s*=\s*[\"']0\s+0\s+24\s+24[\"']", re.IGNORECASE)
_STROKE_ATTRS = re.compile(r"stroke-width|stroke-linecap|stroke-linejoin", re.IGNORECASE)
_ICON_FILL = re.compile(r"fill=\"(none|currentColor)\"", re.IGNORECASE)
_ARC_COMMAND = re.compile(r"[Aa]\s*[-+.\d]")
_STYLE_FILL = re.compile(r"fill\s*:\s*([^;\"']+)", re.IGNORECASE)

_HEART_COORDS = re.compile(r"21\.35|8\.5.*5\.42")
_HEART_START = re.compile(r"^M\s*12\s")
_HEART_TAIL = re.compile(r"21\.\d|l\s*-?\d+\.?\d*\s+-?\d+\.?\d*\s*[Cc]", re.IGNORECASE)
_REDDISH = re.compile(r"^#[ef][0-9][0-5a-f][0-9a-f]{3}$", re.IGNORECASE)
_WARM_HEX = re.compile(r"^#[ef][0-9a-f]{5}$", re.IGNORECASE)
_WARM_PAIRS = re.compile(r"e9|e5|f4|ff|d3|c6")

# Attributes whose values name or describe the graphic rather than draw it.
_HINT_ATTRS = frozenset({
    "class", "id", "name", "href", "xlink:href", "aria-label", "title", "role",
})

_FAVORITE = "Adicionar aos favoritos"
_SMALL_RADIUS = 5.0
_COMPLEX_PATH_LEN = 100


@dataclass
class _Features:
    """Everything the cascade needs, collected in one pass over the tags."""

    counts: dict[str, int] = field(default_factory=dict)
    lines: list[Tag] = field(default_factory=list)
    path_data: list[str] = field(default_factory=list)
    radii: list[float] = field(default_factory=list)
    fills: list[str] = field(default_factory=list)
    first_text: str = ""
    hint_text: str = ""

    def count(self, name: str) -> int:
        return self.counts.get(name, 0)


def _collect(markup: str) -> _Features:
    feats = _Features()
    hints: list[str] = []
    prev_end = 0

    for tag in iter_tags(markup):
        gap = markup[prev_end:tag.start]
        if gap.strip():
            hints.append(gap)
        prev_end = tag.end
        if tag.closing:
            continue

        feats.counts[tag.name] = feats.counts.get(tag.name, 0) + 1
        if tag.name == "line":
            feats.lines.append(tag)
        elif tag.name == "path":
            feats.path_data.append(tag.get("d") or "")
        elif tag.name == "circle":
            radius = _to_float(tag.get("r"))
            if radius is not None:
                feats.radii.append(radius)
        elif tag.name == "text" and not feats.first_text:
            nxt = markup.find("<", tag.end)
            body = markup[tag.end:nxt if nxt != -1 else len(markup)].strip()
            feats.first_text = body

        for name, value in tag.attrs:
            if not value:
                continue
            if name == "fill":
                feats.fills.append(value.strip())
            elif name == "style":
                feats.fills.extend(m.strip() for m in _STYLE_FILL.findall(value))
            if name in _HINT_ATTRS or name.startswith("data-"):
                hints.append(value)

    if markup[prev_end:].strip():
        hints.append(markup[prev_end:])
    feats.hint_text = " ".join(hints)
    return feats


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    match = re.match(r"\s*([-+]?\d*\.?\d+)", value)
    return float(match.group(1)) if match else None


def _same_coord(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    fa, fb = _to_float(a), _to_float(b)
    if fa is not None and fb is not None:
        return fa == fb
    return a.strip() == b.strip()


# ── Cascade phases ──────────────────────────────────────────────────────────


def _chart_structure(markup: str, f: _Features) -> Suggestion | None:
    rects, lines, paths, texts = f.count("rect"), f.count("line"), f.count("path"), f.count("text")

    if rects >= 3 and lines >= 1:
        return Suggestion.informative(
            "Gráfico de barras",
            "Gráfico de barras comparando valores de diferentes categorias.",
        )
    if rects >= 4 and lines == 0 and paths == 0:
        return Suggestion.informative("Gráfico de barras", "Gráfico de barras comparando valores.")
    if paths >= 3:
        arcs = sum(1 for d in f.path_data if _ARC_COMMAND.search(d))
        if arcs >= 2:
            return Suggestion.informative(
                "Gráfico de distribuição",
                "Gráfico circular mostrando proporções de diferentes categorias.",
            )
    if rects >= 2 and lines >= 1 and texts >= 1:
        return Suggestion.informative("Diagrama de fluxo", "Diagrama mostrando etapas de um processo.")
    return None


def _icon_structure(markup: str, f: _Features) -> Suggestion | None:
    if f.count("rect"):
        return None
    lines, circles, paths = f.count("line"), f.count("circle"), f.count("path")

    if circles == 1 and lines == 1 and paths == 0:
        return Suggestion.informative("Pesquisar")
    if lines == 3 and paths == 0 and circles == 0:
        horizontal = sum(1 for t in f.lines if _same_coord(t.get("y1"), t.get("y2")))
        if horizontal == 3:
            return Suggestion.informative("Abrir menu de navegação")
    if lines == 2 and paths == 0 and circles == 0:
        return Suggestion.informative("Fechar")
    if paths >= 1 and circles >= 1 and any(0 < r <= _SMALL_RADIUS for r in f.radii):
        return Suggestion.informative("Ver notificações")
    return None


def _path_signature(markup: str, f: _Features) -> Suggestion | None:
    if not f.path_data:
        return None
    d = f.path_data[0]
    if _HEART_COORDS.search(d):
        return Suggestion.informative(_FAVORITE)
    if _HEART_START.match(d) and re.search(r"[Cc]", d) and len(d) > _COMPLEX_PATH_LEN:
        if _HEART_TAIL.search(d):
            return Suggestion.informative(_FAVORITE)
    return None


def _fill_signature(markup: str, f: _Features) -> Suggestion | None:
    reddish = any(
        _REDDISH.match(c) or (_WARM_HEX.match(c) and _WARM_PAIRS.search(c.lower()))
        for c in f.fills
    )
    if not reddish or not _VIEWBOX_24.search(markup):
        return None
    if f.path_data and len(f.path_data[0]) > 50:
        return Suggestion.informative(_FAVORITE)
    return None


def _keyword_scan(markup: str, f: _Features) -> Suggestion | None:
    for pattern, label in SVG_KEYWORDS:
        if pattern.search(f.hint_text):
            return Suggestion.informative(label)
    return None


_PHASES = (_chart_structure, _icon_structure, _path_signature, _fill_signature, _keyword_scan)


def classify_svg(markup: str) -> Suggestion:
    """Classify raw SVG markup without any network access."""
    f = _collect(markup)

    for phase in _PHASES:
        found = phase(markup, f)
        if found is not None:
            return found

    has_text = f.count("text") > 0
    shapes = sum(f.count(n) for n in ("rect", "circle", "ellipse", "polygon", "path", "line"))
    multi_shape = shapes >= 3
    chart_like = multi_shape and bool(_CHART_WORDS.search(markup))
    icon_box = bool(_ICON_VIEWBOX.search(markup))
    complex_path = any(len(d) >= _COMPLEX_PATH_LEN for d in f.path_data)
    logo_like = has_text or (complex_path and icon_box)
    action_icon = bool(
        _STROKE_ATTRS.search(markup)
        or _ICON_FILL.search(markup)
        or f.radii
        or f.count("line")
    )
    small_icon = icon_box and (complex_path or action_icon)
    simple_shapes = sum(f.count(n) for n in ("rect", "circle", "ellipse"))

    if (not has_text and not chart_like and not small_icon and not logo_like
            and simple_shapes <= 1 and not complex_path):
        return Suggestion.decorative()

    if chart_like:
        return Suggestion.informative(
            "Gráfico de dados",
            "Gráfico ou diagrama com múltiplos elementos visuais representando dados.",
        )
    if logo_like and has_text:
        if f.first_text:
            return Suggestion.informative(f"Logotipo {f.first_text}")
        return Suggestion.informative("Logotipo da empresa")
    if multi_shape:
        return Suggestion.informative(
            "Ilustração", "Imagem vetorial com múltiplos elementos gráficos.",
        )
    return Suggestion.informative("Elemento gráfico")

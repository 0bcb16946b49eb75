"""Apply accessibility suggestions back to markup.

Edits are computed against the original text and applied in one pass, so
offsets from the scanner stay valid no matter how many elements change.
"""

from __future__ import annotations

import asyncio
import hashlib
import html
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from svga11y.models import AppliedFix, FixResult, ImgNode, ScannedNode, Suggestion, SvgNode
from svga11y.scanner import Tag, iter_tags, scan_flagged_nodes

if TYPE_CHECKING:
    from svga11y.pipeline import SuggestionPipeline

logger = logging.getLogger(__name__)

FALLBACK_SVG_TITLE = "Gráfico"
FALLBACK_IMG_ALT = "Imagem"


@dataclass(frozen=True)
class TextEdit:
    """Replace ``text[start:end]`` with *new_text* (start == end inserts)."""

    start: int
    end: int
    new_text: str


def escape_text(text: str, *, quote: bool = False) -> str:
    """Escape text for element content, or for an attribute when *quote*."""
    return html.escape(text, quote=quote)


def apply_edits(text: str, edits: list[TextEdit]) -> str:
    """Apply non-overlapping *edits* to *text*.

    Inserts at the same offset keep their list order.  Raises ``ValueError``
    on overlapping or out-of-range edits.
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    parts: list[str] = []
    pos = 0
    for edit in ordered:
        if edit.start < pos or edit.end < edit.start or edit.end > len(text):
            raise ValueError(f"Invalid or overlapping edit at {edit.start}:{edit.end}")
        parts.append(text[pos:edit.start])
        parts.append(edit.new_text)
        pos = edit.end
    parts.append(text[pos:])
    return "".join(parts)


def _open_tag(node: ScannedNode) -> Tag:
    length = node.open_tag.end - node.open_tag.start
    tag = next(iter_tags(node.raw_markup[:length]), None)
    if tag is None:
        raise ValueError(f"No opening tag at offset {node.start}")
    return tag


def _attr_insert_offset(node: ScannedNode) -> int:
    """Absolute offset just before the ``>`` or ``/>`` that ends the opening tag."""
    length = node.open_tag.end - node.open_tag.start
    head = node.raw_markup[:length - 1]
    if head.endswith("/"):
        head = head[:-1]
    return node.start + len(head.rstrip())


def _attrs_edit(node: ScannedNode, attrs: list[tuple[str, str]]) -> TextEdit:
    rendered = "".join(f' {name}="{escape_text(value, quote=True)}"' for name, value in attrs)
    offset = _attr_insert_offset(node)
    return TextEdit(offset, offset, rendered)


def title_id_for(node: SvgNode) -> str:
    """Stable id for the ``<title>`` inserted into *node*."""
    length = node.open_tag.end - node.open_tag.start
    seed = f"{node.start}:{node.raw_markup[:length]}"
    return "svg-title-" + hashlib.md5(seed.encode("utf-8")).hexdigest()[:6]


def build_svg_edits(node: SvgNode, suggestion: Suggestion) -> list[TextEdit]:
    """Edits that give *node* an accessible name or hide it."""
    tag = _open_tag(node)

    if suggestion.is_decorative:
        if tag.has("aria-hidden"):
            return []
        return [_attrs_edit(node, [("aria-hidden", "true")])]

    title_id = title_id_for(node)
    attrs: list[tuple[str, str]] = []
    if not tag.has("role"):
        attrs.append(("role", "img"))
    if not tag.has("aria-labelledby"):
        attrs.append(("aria-labelledby", title_id))

    title = suggestion.title_text or FALLBACK_SVG_TITLE
    content = f'<title id="{title_id}">{escape_text(title)}</title>'
    if suggestion.desc_text:
        content += f"<desc>{escape_text(suggestion.desc_text)}</desc>"

    edits = [TextEdit(node.open_tag.end, node.open_tag.end, content)]
    if attrs:
        edits.insert(0, _attrs_edit(node, attrs))
    return edits


def build_img_edits(node: ImgNode, suggestion: Suggestion) -> list[TextEdit]:
    """Edit that adds an ``alt`` attribute to *node*."""
    if suggestion.is_decorative:
        alt = ""
    else:
        alt = suggestion.title_text or FALLBACK_IMG_ALT
    return [_attrs_edit(node, [("alt", alt)])]


async def fix_markup(
    text: str,
    pipeline: SuggestionPipeline,
    document_path: Path | None = None,
    cancel: asyncio.Event | None = None,
) -> FixResult:
    """Suggest and apply fixes for every flagged element in *text*.

    Elements are handled one at a time in document order.
    ``SuggestionCancelled`` propagates and leaves *text* untouched.
    """
    nodes = scan_flagged_nodes(text)
    logger.info("%d element(s) need an accessible name", len(nodes))

    edits: list[TextEdit] = []
    fixes: list[AppliedFix] = []
    for node in nodes:
        result = await pipeline.suggest_for_node(node, document_path=document_path, cancel=cancel)
        if isinstance(node, SvgNode):
            edits.extend(build_svg_edits(node, result.suggestion))
            fixes.append(AppliedFix(element="svg", start=node.start, result=result))
        else:
            edits.extend(build_img_edits(node, result.suggestion))
            fixes.append(AppliedFix(element="img", start=node.start, result=result))

    return FixResult(text=apply_edits(text, edits), fixes=fixes)

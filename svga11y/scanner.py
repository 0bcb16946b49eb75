"""Markup scanner for <svg> and <img> elements.

This is not an HTML parser.  ``iter_tags`` is a small tokenizer that knows
just enough of the grammar to find tag boundaries reliably: quoted
attribute values (so ``>`` inside a value does not end the tag), comments,
CDATA sections, doctypes and processing instructions.  Everything else is
plain text and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from svga11y.models import ImgNode, Span, SvgNode

logger = logging.getLogger(__name__)

_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_:."
)
_SPACE = " \t\n\r\f"


@dataclass(frozen=True)
class Tag:
    """One start or end tag found by the tokenizer."""

    name: str  # lower-cased
    start: int
    end: int  # exclusive, just past '>'
    attrs: tuple[tuple[str, str | None], ...] = ()
    closing: bool = False
    self_closing: bool = False

    def get(self, attr: str) -> str | None:
        """Value of the first attribute named *attr* (case-insensitive).

        Returns ``""`` for a bare attribute and ``None`` when absent.
        """
        attr = attr.lower()
        for name, value in self.attrs:
            if name == attr:
                return value if value is not None else ""
        return None

    def has(self, attr: str) -> bool:
        return self.get(attr) is not None


def iter_tags(text: str) -> Iterator[Tag]:
    """Yield every start/end tag in *text* in document order.

    An unterminated tag at the end of the text stops the scan.
    """
    pos = 0
    length = len(text)
    while True:
        lt = text.find("<", pos)
        if lt == -1 or lt + 1 >= length:
            return

        if text.startswith("<!--", lt):
            close = text.find("-->", lt + 4)
            if close == -1:
                return
            pos = close + 3
            continue
        if text.startswith("<![CDATA[", lt):
            close = text.find("]]>", lt + 9)
            if close == -1:
                return
            pos = close + 3
            continue

        nxt = text[lt + 1]
        if nxt in "!?":
            close = text.find(">", lt + 2)
            if close == -1:
                return
            pos = close + 1
            continue

        if nxt == "/":
            name_end = _read_name(text, lt + 2)
            if name_end == lt + 2:
                pos = lt + 1
                continue
            close = text.find(">", name_end)
            if close == -1:
                return
            yield Tag(
                name=text[lt + 2:name_end].lower(),
                start=lt,
                end=close + 1,
                closing=True,
            )
            pos = close + 1
            continue

        if not nxt.isalpha():
            pos = lt + 1
            continue

        tag = _read_start_tag(text, lt)
        if tag is None:
            return
        yield tag
        pos = tag.end


def _read_name(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _NAME_CHARS:
        pos += 1
    return pos


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _SPACE:
        pos += 1
    return pos


def _read_start_tag(text: str, start: int) -> Tag | None:
    """Parse ``<name attr=value ...>`` beginning at *start*."""
    name_end = _read_name(text, start + 1)
    name = text[start + 1:name_end].lower()
    attrs: list[tuple[str, str | None]] = []
    pos = name_end
    length = len(text)

    while pos < length:
        pos = _skip_space(text, pos)
        if pos >= length:
            break
        ch = text[pos]
        if ch == ">":
            return Tag(name=name, start=start, end=pos + 1, attrs=tuple(attrs))
        if ch == "/":
            if text.startswith("/>", pos):
                return Tag(
                    name=name, start=start, end=pos + 2,
                    attrs=tuple(attrs), self_closing=True,
                )
            pos += 1
            continue

        attr_start = pos
        while pos < length and text[pos] not in _SPACE and text[pos] not in "=>" \
                and not text.startswith("/>", pos):
            pos += 1
        attr_name = text[attr_start:pos].lower()
        pos = _skip_space(text, pos)

        if pos < length and text[pos] == "=":
            pos = _skip_space(text, pos + 1)
            if pos >= length:
                break
            quote = text[pos]
            if quote in "\"'":
                close = text.find(quote, pos + 1)
                if close == -1:
                    # unmatched quote: the value runs to the end of the tag
                    close = text.find(">", pos + 1)
                    if close == -1:
                        return None
                    value = text[pos + 1:close]
                    pos = close
                else:
                    value = text[pos + 1:close]
                    pos = close + 1
            else:
                value_start = pos
                while pos < length and text[pos] not in _SPACE and text[pos] != ">":
                    pos += 1
                value = text[value_start:pos]
            attrs.append((attr_name, value))
        elif attr_name:
            attrs.append((attr_name, None))

    return None


# ── Element scans ───────────────────────────────────────────────────────────


def scan_svg_nodes(text: str) -> list[SvgNode]:
    """Find every ``<svg>...</svg>`` element in *text*.

    Opening tags are paired with their closing tag by nesting depth.  An
    opening tag that is never closed is dropped.  Self-closing ``<svg/>``
    has no content and is ignored.
    """
    stack: list[list] = []  # [open_tag, has_title, has_desc]
    nodes: list[SvgNode] = []

    for tag in iter_tags(text):
        if tag.name == "svg":
            if tag.closing:
                if not stack:
                    continue
                open_tag, has_title, has_desc = stack.pop()
                hidden = (open_tag.get("aria-hidden") or "").lower() == "true"
                nodes.append(SvgNode(
                    start=open_tag.start,
                    end=tag.end,
                    raw_markup=text[open_tag.start:tag.end],
                    open_tag=Span(open_tag.start, open_tag.end),
                    has_title=has_title,
                    has_desc=has_desc,
                    has_aria_hidden=hidden,
                ))
            elif not tag.self_closing:
                stack.append([tag, False, False])
        elif stack and not tag.closing and tag.name in ("title", "desc"):
            slot = 1 if tag.name == "title" else 2
            for entry in stack:
                entry[slot] = True

    if stack:
        logger.debug("Dropped %d unterminated <svg> element(s)", len(stack))

    nodes.sort(key=lambda n: n.start)
    return nodes


def scan_img_nodes(text: str) -> list[ImgNode]:
    """Find every ``<img>`` tag in *text* (void element, no closing tag)."""
    nodes: list[ImgNode] = []
    for tag in iter_tags(text):
        if tag.name != "img" or tag.closing:
            continue
        role = (tag.get("role") or "").strip().lower()
        nodes.append(ImgNode(
            start=tag.start,
            end=tag.end,
            raw_markup=text[tag.start:tag.end],
            open_tag=Span(tag.start, tag.end),
            src=tag.get("src") or "",
            alt=tag.get("alt"),
            has_aria_hidden=(tag.get("aria-hidden") or "").lower() == "true",
            has_role=role in ("presentation", "none"),
        ))
    return nodes


# ── Predicates ──────────────────────────────────────────────────────────────


def svg_needs_fix(node: SvgNode) -> bool:
    """True if the SVG is exposed to assistive technology without a name."""
    return not node.has_aria_hidden and not (node.has_title or node.has_desc)


def img_needs_fix(node: ImgNode) -> bool:
    """True if the image has no alt attribute and is not hidden/presentational.

    An empty ``alt=""`` is a valid decorative marker.
    """
    if node.has_aria_hidden:
        return False
    if node.has_role:
        return False
    return not node.has_alt


def scan_flagged_nodes(text: str) -> list[SvgNode | ImgNode]:
    """Every ``<svg>`` and ``<img>`` in *text* that needs a fix, in document order."""
    nodes: list[SvgNode | ImgNode] = [n for n in scan_svg_nodes(text) if svg_needs_fix(n)]
    nodes += [n for n in scan_img_nodes(text) if img_needs_fix(n)]
    nodes.sort(key=lambda n: n.start)
    return nodes

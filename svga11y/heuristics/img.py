"""Local <img> classifier driven by the file name and tag text."""

from __future__ import annotations

import re

from svga11y.heuristics.keywords import IMG_CONTENT, IMG_DECORATIVE, IMG_ICONS, IMG_LOGO
from svga11y.models import Suggestion

PLACEHOLDER_ALT = "[Descrição da imagem]"

_BRAND_AFTER = re.compile(r"logo[-_]?([a-z0-9]+)", re.IGNORECASE)
_BRAND_BEFORE = re.compile(r"([a-z0-9]+)[-_]?logo", re.IGNORECASE)


def file_name(src: str) -> str:
    """Last path segment of *src* without query string."""
    return src.split("/")[-1].split("?")[0]


def _readable_stem(src: str) -> str:
    stem = re.sub(r"\.[^.]+$", "", file_name(src))
    return re.sub(r"[-_]", " ", stem)


def classify_img(src: str, tag: str = "") -> Suggestion:
    """Suggest an alt text for an image from its source path alone."""
    src_lower = src.lower()
    tag_lower = tag.lower()
    stem = _readable_stem(src)

    for pattern in IMG_DECORATIVE:
        if pattern.search(src_lower) or pattern.search(tag_lower):
            return Suggestion.decorative()

    for pattern, label in IMG_ICONS:
        if pattern.search(src_lower) or pattern.search(tag_lower):
            return Suggestion.informative(label)

    for pattern in IMG_LOGO:
        if pattern.search(src_lower):
            match = _BRAND_AFTER.search(src_lower) or _BRAND_BEFORE.search(src_lower)
            if match:
                return Suggestion.informative(f"Logo {match.group(1).capitalize()}")
            return Suggestion.informative("Logo da empresa")

    for pattern, prefix in IMG_CONTENT:
        if pattern.search(src_lower):
            rest = pattern.sub("", stem, count=1).strip()
            return Suggestion.informative(f"{prefix}: {rest}" if rest else prefix)

    if len(stem) > 2:
        clean = re.sub(r"\s+", " ", re.sub(r"[0-9]+", " ", stem)).strip()
        if len(clean) > 2:
            return Suggestion.informative(clean[0].upper() + clean[1:])

    return Suggestion.informative(PLACEHOLDER_ALT)

"""Turn SVG markup and image files into payloads for vision models."""

from __future__ import annotations

import io
import logging
import math
import re
from pathlib import Path
from typing import Protocol

from PIL import Image

from svga11y.providers.base import ImagePayload

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
    ".ico": "image/x-icon",
}
DEFAULT_MIME = "image/jpeg"

_SVG_NS = "http://www.w3.org/2000/svg"
_WIDTH = re.compile(r"(?<![-\w])width\s*=\s*[\"']?(\d+)", re.IGNORECASE)
_HEIGHT = re.compile(r"(?<![-\w])height\s*=\s*[\"']?(\d+)", re.IGNORECASE)
_VIEWBOX = re.compile(
    r"viewBox\s*=\s*[\"']?\s*[-\d.]+[\s,]+[-\d.]+[\s,]+([\d.]+)[\s,]+([\d.]+)", re.IGNORECASE,
)
_SVG_OPEN = re.compile(r"<svg\b", re.IGNORECASE)

# Formats Pillow should not try to re-encode.
_PASSTHROUGH = {"image/svg+xml", "image/x-icon"}


class FileReader(Protocol):
    """Byte source for local images."""

    def exists(self, path: Path) -> bool:
        ...

    def read_bytes(self, path: Path) -> bytes:
        ...


class LocalFileReader:
    """Reads images straight from the filesystem."""

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()


def mime_type_for(path: str | Path) -> str:
    """MIME type from the file extension, JPEG when unknown."""
    return MIME_TYPES.get(Path(str(path)).suffix.lower(), DEFAULT_MIME)


def is_external_source(src: str) -> bool:
    """True for sources a provider can fetch itself (or that carry their data)."""
    return src.startswith(("http://", "https://", "data:"))


def svg_dimensions(svg_code: str) -> tuple[int, int]:
    """Width and height from attributes, then the viewBox, else 100x100."""
    width = _WIDTH.search(svg_code)
    height = _HEIGHT.search(svg_code)
    if width and height:
        return int(width.group(1)), int(height.group(1))

    viewbox = _VIEWBOX.search(svg_code)
    if viewbox:
        return math.ceil(float(viewbox.group(1))), math.ceil(float(viewbox.group(2)))

    return 100, 100


def normalize_svg(svg_code: str) -> str:
    """Ensure the root element has the SVG namespace and explicit dimensions."""
    width, height = svg_dimensions(svg_code)
    normalized = svg_code
    if "xmlns=" not in normalized:
        normalized = _SVG_OPEN.sub(f'<svg xmlns="{_SVG_NS}"', normalized, count=1)
    extra = []
    if not _WIDTH.search(normalized):
        extra.append(f'width="{width}"')
    if not _HEIGHT.search(normalized):
        extra.append(f'height="{height}"')
    if extra:
        normalized = _SVG_OPEN.sub("<svg " + " ".join(extra), normalized, count=1)
    return normalized


def render_svg(svg_code: str) -> ImagePayload:
    """Package SVG markup as an inline ``image/svg+xml`` payload."""
    return ImagePayload.from_bytes(normalize_svg(svg_code).encode("utf-8"), "image/svg+xml")


def load_local_image(
    path: Path,
    reader: FileReader | None = None,
    *,
    max_dim: int = 1024,
) -> ImagePayload:
    """Read a local image and return it as an inline payload.

    Raster images larger than *max_dim* on their longest side are resized
    and re-encoded as PNG.  Raises ``FileNotFoundError`` if *path* does not
    exist.
    """
    reader = reader or LocalFileReader()
    if not reader.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")

    raw = reader.read_bytes(path)
    mime = mime_type_for(path)
    if mime in _PASSTHROUGH:
        return ImagePayload.from_bytes(raw, mime)

    resized = _downscale(raw, max_dim)
    if resized is not None:
        return ImagePayload.from_bytes(resized, "image/png")
    return ImagePayload.from_bytes(raw, mime)


def _downscale(raw: bytes, max_dim: int) -> bytes | None:
    """PNG bytes of a resized copy, or None if no resize is needed or possible."""
    try:
        with Image.open(io.BytesIO(raw)) as img:
            w, h = img.size
            if max(w, h) <= max_dim:
                return None
            scale = max_dim / max(w, h)
            new_size = (max(1, int(w * scale)), max(1, int(h * scale)))
            resized = _ensure_png_mode(img).resize(new_size, Image.LANCZOS)
            logger.debug("Resized image from %dx%d to %dx%d", w, h, *new_size)
            buf = io.BytesIO()
            resized.save(buf, format="PNG")
            return buf.getvalue()
    except (OSError, ValueError):
        logger.debug("Pillow could not decode image, sending raw bytes", exc_info=True)
        return None


def _ensure_png_mode(img: Image.Image) -> Image.Image:
    """Convert modes PNG cannot store (CMYK, etc.) to RGB or RGBA."""
    if img.mode in ("RGB", "RGBA", "L"):
        return img
    if img.mode in ("LA", "PA", "P"):
        return img.convert("RGBA")
    return img.convert("RGB")

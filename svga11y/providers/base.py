"""Base protocol and shared types for AI provider adapters."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable
from urllib.parse import unquote_to_bytes

from svga11y.models import ProviderTag

DEFAULT_MAX_TOKENS = 500


class ProviderError(Exception):
    """A remote call failed (transport error or non-2xx status)."""


class ResponseParseError(ProviderError):
    """A response arrived but did not have the expected shape."""


@dataclass(frozen=True)
class ImagePayload:
    """Image data to embed in a vision request: inline base64 or a URL."""

    mime_type: str = "image/png"
    data: str = ""  # base64, empty when sent by URL
    url: str = ""

    @property
    def is_inline(self) -> bool:
        return bool(self.data)

    @property
    def data_uri(self) -> str:
        if self.is_inline:
            return f"data:{self.mime_type};base64,{self.data}"
        return self.url

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> ImagePayload:
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    @classmethod
    def from_url(cls, url: str, mime_type: str = "image/jpeg") -> ImagePayload:
        """Wrap a remote URL; ``data:`` URIs are unpacked into inline data."""
        if not url.startswith("data:"):
            return cls(mime_type=mime_type, url=url)

        header, _, payload = url[5:].partition(",")
        params = header.split(";")
        mime = params[0] or "text/plain"
        if "base64" in params[1:]:
            try:
                base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError(f"Invalid base64 data URI: {exc}") from exc
            return cls(mime_type=mime, data=payload)
        return cls.from_bytes(unquote_to_bytes(payload), mime)


@dataclass
class ProviderRequest:
    """Everything needed for one HTTP POST to a provider."""

    url: str
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class ProviderAdapter(Protocol):
    """Interface every provider wire format implements.

    Adapters live in ``svga11y/providers/``, one file per wire format.
    No vendor-specific field names should exist outside that directory.
    """

    @property
    def tag(self) -> ProviderTag:
        """Which wire format this adapter speaks."""
        ...

    def build_text_request(self, prompt: str) -> ProviderRequest:
        """Shape a text-only chat request."""
        ...

    def build_vision_request(self, image_block: dict[str, Any], prompt: str) -> ProviderRequest:
        """Shape a request carrying one image block (see ``build_image_payload``)."""
        ...

    def build_image_payload(self, image: ImagePayload) -> dict[str, Any]:
        """Translate an image into this vendor's content block."""
        ...

    def extract_response_text(self, data: Any) -> str:
        """Pull the model's free text out of a decoded response body.

        Raises ``ResponseParseError`` when the expected field is missing.
        """
        ...


def dig(data: Any, *path: str | int) -> Any:
    """Follow *path* through nested dicts/lists, returning None on any miss."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current

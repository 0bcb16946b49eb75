"""Fallback for endpoints that match no known vendor.

Requests use the OpenAI-compatible shape most gateways accept; responses
are probed for every known layout before giving up.
"""

from __future__ import annotations

import json
from typing import Any

from svga11y.models import ProviderTag
from svga11y.providers.base import ImagePayload, dig
from svga11y.providers.openai import OpenAIProvider

_KNOWN_PATHS: list[tuple[str | int, ...]] = [
    ("choices", 0, "message", "content"),
    ("content", 0, "text"),
    ("candidates", 0, "content", "parts", 0, "text"),
    ("response",),
]


class GenericProvider(OpenAIProvider):
    """OpenAI-like gateway (LiteLLM, OpenRouter, self-hosted proxies, ...)."""

    default_model = "auto"

    @property
    def tag(self) -> ProviderTag:
        return ProviderTag.UNKNOWN

    def _body(self, content: str | list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": content}],
        }

    def build_image_payload(self, image: ImagePayload) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": image.data_uri}}

    def extract_response_text(self, data: Any) -> str:
        for path in _KNOWN_PATHS:
            text = dig(data, *path)
            if isinstance(text, str) and text:
                return text
        return json.dumps(data, ensure_ascii=False)

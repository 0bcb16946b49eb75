"""Anthropic messages wire format."""

from __future__ import annotations

from typing import Any

from svga11y.models import ProviderTag
from svga11y.providers.base import (
    DEFAULT_MAX_TOKENS,
    ImagePayload,
    ProviderRequest,
    ResponseParseError,
    dig,
)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider:
    """Claude ``/v1/messages`` endpoint.  Authenticates with ``x-api-key``."""

    default_model = "claude-3-5-sonnet-20241022"

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str = "",
        model: str = "",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        **_kwargs: object,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._model = model or self.default_model
        self._max_tokens = max_tokens

    @property
    def tag(self) -> ProviderTag:
        return ProviderTag.ANTHROPIC

    def _headers(self) -> dict[str, str]:
        # No Authorization header: the API rejects Bearer tokens here.
        return {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _body(self, content: str | list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": [{"role": "user", "content": content}],
        }

    def build_text_request(self, prompt: str) -> ProviderRequest:
        return ProviderRequest(url=self._endpoint, body=self._body(prompt), headers=self._headers())

    def build_vision_request(self, image_block: dict[str, Any], prompt: str) -> ProviderRequest:
        content = [image_block, {"type": "text", "text": prompt}]
        return ProviderRequest(url=self._endpoint, body=self._body(content), headers=self._headers())

    def build_image_payload(self, image: ImagePayload) -> dict[str, Any]:
        if image.is_inline:
            source = {"type": "base64", "media_type": image.mime_type, "data": image.data}
        else:
            source = {"type": "url", "url": image.url}
        return {"type": "image", "source": source}

    def extract_response_text(self, data: Any) -> str:
        text = dig(data, "content", 0, "text")
        if not isinstance(text, str):
            raise ResponseParseError("Anthropic response has no content[0].text")
        return text

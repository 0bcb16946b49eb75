"""OpenAI chat-completions wire format."""

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


class OpenAIProvider:
    """GPT-4o style ``/v1/chat/completions`` endpoint."""

    default_model = "gpt-4o"

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
        return ProviderTag.OPENAI

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def _body(self, content: str | list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": content}],
            "max_tokens": self._max_tokens,
        }

    def build_text_request(self, prompt: str) -> ProviderRequest:
        return ProviderRequest(url=self._endpoint, body=self._body(prompt), headers=self._headers())

    def build_vision_request(self, image_block: dict[str, Any], prompt: str) -> ProviderRequest:
        content = [{"type": "text", "text": prompt}, image_block]
        return ProviderRequest(url=self._endpoint, body=self._body(content), headers=self._headers())

    def build_image_payload(self, image: ImagePayload) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": image.data_uri, "detail": "high"}}

    def extract_response_text(self, data: Any) -> str:
        text = dig(data, "choices", 0, "message", "content")
        if not isinstance(text, str):
            raise ResponseParseError("OpenAI response has no choices[0].message.content")
        return text

"""Google Gemini ``generateContent`` wire format (REST, no SDK)."""

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


class GeminiProvider:
    """Gemini endpoint such as ``.../v1beta/models/gemini-2.0-flash:generateContent``.

    The model is part of the endpoint URL; the API key travels as the
    ``key`` query parameter unless the endpoint already carries one.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str = "",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        **_kwargs: object,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._max_tokens = max_tokens

    @property
    def tag(self) -> ProviderTag:
        return ProviderTag.GOOGLE

    def _request(self, parts: list[dict[str, Any]]) -> ProviderRequest:
        params = {}
        if self._api_key and "key=" not in self._endpoint:
            params["key"] = self._api_key
        body = {
            "contents": [{"parts": parts}],
            "generationConfig": {"maxOutputTokens": self._max_tokens},
        }
        return ProviderRequest(
            url=self._endpoint,
            body=body,
            headers={"Content-Type": "application/json"},
            params=params,
        )

    def build_text_request(self, prompt: str) -> ProviderRequest:
        return self._request([{"text": prompt}])

    def build_vision_request(self, image_block: dict[str, Any], prompt: str) -> ProviderRequest:
        return self._request([image_block, {"text": prompt}])

    def build_image_payload(self, image: ImagePayload) -> dict[str, Any]:
        if image.is_inline:
            return {"inlineData": {"mimeType": image.mime_type, "data": image.data}}
        return {"fileData": {"mimeType": image.mime_type, "fileUri": image.url}}

    def extract_response_text(self, data: Any) -> str:
        text = dig(data, "candidates", 0, "content", "parts", 0, "text")
        if not isinstance(text, str):
            raise ResponseParseError("Gemini response has no candidates[0].content.parts[0].text")
        return text

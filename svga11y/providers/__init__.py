"""AI provider adapters.

Provider registry: ``detect_provider()`` maps an endpoint URL to a
``ProviderTag`` and ``get_adapter()`` builds the matching adapter once per
pipeline, so vendor detection never happens per call.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from svga11y.models import ProviderTag
from svga11y.providers.base import ProviderAdapter

if TYPE_CHECKING:
    from svga11y.config import ClientConfig

logger = logging.getLogger(__name__)

# Map of provider tag → module path, class name
_PROVIDER_MAP: dict[ProviderTag, tuple[str, str]] = {
    ProviderTag.OPENAI: ("svga11y.providers.openai", "OpenAIProvider"),
    ProviderTag.ANTHROPIC: ("svga11y.providers.anthropic", "AnthropicProvider"),
    ProviderTag.GOOGLE: ("svga11y.providers.gemini", "GeminiProvider"),
    ProviderTag.UNKNOWN: ("svga11y.providers.generic", "GenericProvider"),
}

# Checked in order; first hit wins.
_ENDPOINT_HINTS: list[tuple[tuple[str, ...], ProviderTag]] = [
    (("openai",), ProviderTag.OPENAI),
    (("anthropic", "claude"), ProviderTag.ANTHROPIC),
    (("google", "gemini", "generativelanguage"), ProviderTag.GOOGLE),
]


def detect_provider(endpoint: str) -> ProviderTag:
    """Guess the wire format from the endpoint URL."""
    lower = endpoint.lower()
    for needles, tag in _ENDPOINT_HINTS:
        if any(n in lower for n in needles):
            return tag
    return ProviderTag.UNKNOWN


def get_adapter(config: ClientConfig) -> ProviderAdapter:
    """Create the adapter for *config*'s endpoint."""
    tag = detect_provider(config.endpoint)
    module_path, class_name = _PROVIDER_MAP[tag]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    logger.debug("Endpoint %s uses the %s wire format", config.endpoint, tag.value)
    return cls(
        endpoint=config.endpoint,
        api_key=config.api_key,
        model=config.model,
        max_tokens=config.max_tokens,
    )


__all__ = ["ProviderAdapter", "detect_provider", "get_adapter"]

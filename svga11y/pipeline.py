"""Suggestion pipeline: vision, then text, then the local heuristic.

The strategies a pipeline may try are fixed when it is built from its
``ClientConfig``:

* no endpoint or no key      → heuristic only
* ``use_vision`` enabled     → vision, text, heuristic
* otherwise                  → text, heuristic

Every remote failure is recorded as a warning on the result and the next
strategy runs.  The heuristic cannot fail, so ``suggest_for_*`` always
return a suggestion unless the caller cancels.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

import httpx

from svga11y.config import ClientConfig
from svga11y.heuristics import classify_img, classify_svg
from svga11y.imaging import (
    FileReader,
    LocalFileReader,
    is_external_source,
    load_local_image,
    mime_type_for,
    render_svg,
)
from svga11y.models import ImgNode, Strategy, Suggestion, SuggestionResult, SvgNode
from svga11y.prompts import (
    build_img_text_prompt,
    build_img_vision_prompt,
    build_svg_prompt,
    build_svg_vision_prompt,
)
from svga11y.providers import get_adapter
from svga11y.providers.base import (
    ImagePayload,
    ProviderAdapter,
    ProviderError,
    ProviderRequest,
    ResponseParseError,
)
from svga11y.providers.response import normalize_suggestion

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 200

Attempt = Callable[[], Awaitable[Suggestion]]


class SuggestionCancelled(Exception):
    """The caller's cancel event was set before the next strategy started."""


def strategies_for(config: ClientConfig) -> tuple[Strategy, ...]:
    """Ordered strategies a pipeline built from *config* will try."""
    if not config.has_credentials:
        return (Strategy.HEURISTIC,)
    if config.use_vision:
        return (Strategy.VISION, Strategy.TEXT, Strategy.HEURISTIC)
    return (Strategy.TEXT, Strategy.HEURISTIC)


def _raise_if_cancelled(cancel: asyncio.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise SuggestionCancelled("Suggestion cancelled")


class SuggestionPipeline:
    """Produces accessibility suggestions for ``<svg>`` and ``<img>`` elements.

    Pass an ``httpx.AsyncClient`` to share connections (or to inject a mock
    transport in tests); otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
        reader: FileReader | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._reader = reader or LocalFileReader()
        self._strategies = strategies_for(config)
        self._adapter: ProviderAdapter | None = None
        if config.has_credentials:
            self._adapter = get_adapter(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        return self._strategies

    @property
    def adapter(self) -> ProviderAdapter | None:
        return self._adapter

    # -- public API -------------------------------------------------------

    async def suggest_for_svg(
        self,
        markup: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> SuggestionResult:
        """Suggest a title/description (or decorative) for an SVG element."""
        attempts: dict[Strategy, Attempt] = {
            Strategy.VISION: lambda: self._svg_vision(markup),
            Strategy.TEXT: lambda: self._svg_text(markup),
        }
        return await self._run(attempts, lambda: classify_svg(markup), cancel)

    async def suggest_for_img(
        self,
        src: str,
        tag: str,
        *,
        document_path: Path | None = None,
        cancel: asyncio.Event | None = None,
    ) -> SuggestionResult:
        """Suggest alt text (or decorative) for an ``<img>`` element.

        *document_path* is the file the tag came from; relative ``src``
        values are resolved against its directory.
        """
        attempts: dict[Strategy, Attempt] = {
            Strategy.TEXT: lambda: self._img_text(src, tag),
        }

        if Strategy.VISION in self._strategies:
            try:
                image = self._img_payload(src, document_path)
            except (OSError, ValueError) as exc:
                _raise_if_cancelled(cancel)
                message = f"Image not available for vision analysis: {exc}"
                logger.warning(message)
                return SuggestionResult(
                    suggestion=classify_img(src, tag),
                    strategy=Strategy.HEURISTIC,
                    warnings=[message],
                )
            attempts[Strategy.VISION] = lambda: self._img_vision(image)

        return await self._run(attempts, lambda: classify_img(src, tag), cancel)

    async def suggest_for_node(
        self,
        node: SvgNode | ImgNode,
        *,
        document_path: Path | None = None,
        cancel: asyncio.Event | None = None,
    ) -> SuggestionResult:
        """Dispatch a scanned node to ``suggest_for_svg`` or ``suggest_for_img``."""
        if isinstance(node, SvgNode):
            return await self.suggest_for_svg(node.raw_markup, cancel=cancel)
        return await self.suggest_for_img(
            node.src, node.raw_markup, document_path=document_path, cancel=cancel,
        )

    # -- strategy loop ----------------------------------------------------

    async def _run(
        self,
        attempts: dict[Strategy, Attempt],
        heuristic: Callable[[], Suggestion],
        cancel: asyncio.Event | None,
    ) -> SuggestionResult:
        warnings: list[str] = []
        for strategy in self._strategies:
            _raise_if_cancelled(cancel)
            if strategy is Strategy.HEURISTIC:
                break
            try:
                suggestion = await attempts[strategy]()
            except Exception as exc:
                message = f"{strategy.value.capitalize()} analysis failed: {exc}"
                logger.warning(message)
                logger.debug("%s strategy traceback", strategy.value, exc_info=True)
                warnings.append(message)
                continue
            return SuggestionResult(suggestion=suggestion, strategy=strategy, warnings=warnings)

        return SuggestionResult(suggestion=heuristic(), strategy=Strategy.HEURISTIC, warnings=warnings)

    # -- remote strategies ------------------------------------------------

    async def _svg_text(self, markup: str) -> Suggestion:
        adapter = self._require_adapter()
        return await self._post(adapter.build_text_request(build_svg_prompt(markup)))

    async def _svg_vision(self, markup: str) -> Suggestion:
        adapter = self._require_adapter()
        block = adapter.build_image_payload(render_svg(markup))
        return await self._post(adapter.build_vision_request(block, build_svg_vision_prompt()))

    async def _img_text(self, src: str, tag: str) -> Suggestion:
        adapter = self._require_adapter()
        return await self._post(adapter.build_text_request(build_img_text_prompt(src, tag)))

    async def _img_vision(self, image: ImagePayload) -> Suggestion:
        adapter = self._require_adapter()
        block = adapter.build_image_payload(image)
        return await self._post(adapter.build_vision_request(block, build_img_vision_prompt()))

    def _img_payload(self, src: str, document_path: Path | None) -> ImagePayload:
        """Build the vision payload for *src*.

        Raises ``FileNotFoundError`` for unresolvable or missing local files,
        any other ``OSError`` the reader raises, and ``ValueError`` for
        malformed ``data:`` URIs.
        """
        if is_external_source(src):
            return ImagePayload.from_url(src, mime_type_for(src.split("?", 1)[0]))

        path = Path(src)
        if not path.is_absolute():
            if document_path is None:
                raise FileNotFoundError(f"Cannot resolve relative path without a document: {src}")
            path = document_path.parent / path
        return load_local_image(path, self._reader)

    def _require_adapter(self) -> ProviderAdapter:
        if self._adapter is None:
            raise ProviderError("No AI provider configured")
        return self._adapter

    async def _post(self, request: ProviderRequest) -> Suggestion:
        logger.debug("POST %s", request.url)
        if self._client is not None:
            response = await self._send(self._client, request)
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                response = await self._send(client, request)

        if not response.is_success:
            raise ProviderError(f"HTTP {response.status_code}: {response.text[:_ERROR_BODY_LIMIT]}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ResponseParseError(f"Response body is not JSON: {exc}") from exc

        text = self._require_adapter().extract_response_text(data)
        return normalize_suggestion(text)

    @staticmethod
    async def _send(client: httpx.AsyncClient, request: ProviderRequest) -> httpx.Response:
        return await client.post(
            request.url,
            json=request.body,
            headers=request.headers,
            params=request.params or None,
        )

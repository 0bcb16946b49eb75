"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from svga11y.config import ClientConfig

HAMBURGER_SVG = (
    '<svg viewBox="0 0 24 24">'
    '<line x1="3" y1="6" x2="21" y2="6"/>'
    '<line x1="3" y1="12" x2="21" y2="12"/>'
    '<line x1="3" y1="18" x2="21" y2="18"/>'
    "</svg>"
)

SAMPLE_PAGE = """\
<!DOCTYPE html>
<html>
<body>
  <!-- <svg><rect/></svg> inside a comment is not an element -->
  <svg class="icon-trash" viewBox="0 0 24 24"><path d="M3 6h18"/></svg>
  <svg aria-hidden="true"><circle r="4"/></svg>
  <svg><title>Logo</title><path d="M0 0h10"/></svg>
  <img src="img/spacer.gif">
  <img src="photo.jpg" alt="">
  <img src="logo-acme.png" role="presentation">
</body>
</html>
"""


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def heuristic_config() -> ClientConfig:
    """No credentials: the pipeline never touches the network."""
    return ClientConfig()


@pytest.fixture
def openai_config() -> ClientConfig:
    return ClientConfig(
        api_key="sk-test-1234567890",
        endpoint="https://api.openai.com/v1/chat/completions",
    )


@pytest.fixture
def vision_config() -> ClientConfig:
    return ClientConfig(
        api_key="sk-test-1234567890",
        endpoint="https://api.openai.com/v1/chat/completions",
        use_vision=True,
    )


def openai_reply(payload: dict[str, Any] | str) -> dict[str, Any]:
    """Chat-completions body whose message content is *payload*."""
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def recorded_client() -> Callable[..., tuple[httpx.AsyncClient, list[httpx.Request]]]:
    """Build an AsyncClient on a MockTransport that records every request.

    *responses* are returned in order; an ``Exception`` instance is raised
    instead of answering.
    """

    def factory(*responses: httpx.Response | Exception) -> tuple[httpx.AsyncClient, list[httpx.Request]]:
        seen: list[httpx.Request] = []
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            item = queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), seen

    return factory

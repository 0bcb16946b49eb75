"""Normalize free-text model answers into a ``Suggestion``.

Two answer shapes are understood:

* the flat shape every prompt asks for::

    {"isDecorative": false, "titleText": "...", "descText": "..."}

* the structured WCAG 1.1.1 conformance shape some deployments prompt for::

    {"conformidade": {...}, "tipoImagem": {"classificacao": "Decorativa", ...},
     "recomendacao": {"altText": "...", "descricaoLonga": "..."},
     "codigoSugerido": "<img ...>"}
"""

from __future__ import annotations

import json
from typing import Any

from svga11y.models import (
    Conformance,
    ImageClassification,
    ImageType,
    Suggestion,
    WCAGAnalysis,
)
from svga11y.providers.base import ResponseParseError

_DECODER = json.JSONDecoder()
_STRUCTURED_KEYS = ("conformidade", "tipoImagem", "recomendacao")


def find_json_object(text: str) -> dict[str, Any]:
    """Decode the first top-level JSON object embedded in *text*.

    Surrounding prose and markdown fences are ignored.  Only a ``{`` that
    no earlier ``{`` encloses is a candidate, so a truncated object never
    yields one of its nested members.  Raises ``ResponseParseError`` if no
    candidate decodes.
    """
    if "{" not in text:
        raise ResponseParseError("No JSON object found in response")

    last_error: json.JSONDecodeError | None = None
    depth = 0
    in_string = False
    escaped = False
    for pos, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and depth > 0:
            in_string = True
        elif ch == "{":
            if depth == 0:
                try:
                    obj, _ = _DECODER.raw_decode(text, pos)
                except json.JSONDecodeError as exc:
                    last_error = exc
                else:
                    if isinstance(obj, dict):
                        return obj
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1

    raise ResponseParseError(f"Invalid JSON object in response: {last_error}")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _is_structured(obj: dict[str, Any]) -> bool:
    return all(isinstance(obj.get(key), dict) for key in _STRUCTURED_KEYS)


def _wcag_analysis(obj: dict[str, Any]) -> WCAGAnalysis:
    conf = obj["conformidade"]
    kind = obj["tipoImagem"]
    try:
        classification: ImageClassification | None = ImageClassification(kind.get("classificacao"))
    except ValueError:
        classification = None
    return WCAGAnalysis(
        conformance=Conformance(
            status=_as_text(conf.get("status")),
            alt_required=_as_bool(conf.get("altObrigatorio")),
            justification=_as_text(conf.get("justificativa")),
        ),
        image_type=ImageType(classification=classification, impact=_as_text(kind.get("impacto"))),
        suggested_snippet=_as_text(obj.get("codigoSugerido")),
        raw=obj,
    )


def normalize_suggestion(text: str) -> Suggestion:
    """Parse a model answer into a ``Suggestion``.

    Raises ``ResponseParseError`` when the answer holds no usable JSON.
    """
    obj = find_json_object(text)

    if _is_structured(obj):
        analysis = _wcag_analysis(obj)
        recommendation = obj["recomendacao"]
        return Suggestion(
            is_decorative=analysis.image_type.classification == ImageClassification.DECORATIVE,
            title_text=_as_text(recommendation.get("altText")),
            desc_text=_as_text(recommendation.get("descricaoLonga")),
            wcag_analysis=analysis,
        )

    return Suggestion(
        is_decorative=_as_bool(obj.get("isDecorative")),
        title_text=_as_text(obj.get("titleText")),
        desc_text=_as_text(obj.get("descText")),
    )

"""Tests for turning model answers into suggestions."""

from __future__ import annotations

import json

import pytest

from svga11y.models import ImageClassification
from svga11y.providers.base import ResponseParseError
from svga11y.providers.response import find_json_object, normalize_suggestion


def _structured(classification: str, alt: str = "", long_desc: str = "") -> dict:
    return {
        "conformidade": {
            "status": "Não conforme",
            "altObrigatorio": classification != "Decorativa",
            "justificativa": "A imagem não possui texto alternativo.",
        },
        "tipoImagem": {"classificacao": classification, "impacto": "Alto"},
        "recomendacao": {"altText": alt, "descricaoLonga": long_desc},
        "codigoSugerido": f'<img src="x.png" alt="{alt}">',
    }


class TestFindJsonObject:
    def test_object_inside_prose(self) -> None:
        text = 'Here it is: {"isDecorative":false,"titleText":"Search","descText":""} Thanks!'
        assert find_json_object(text)["titleText"] == "Search"

    def test_markdown_fence(self) -> None:
        text = '```json\n{"isDecorative": true}\n```'
        assert find_json_object(text) == {"isDecorative": True}

    def test_braces_in_prose_before_object(self) -> None:
        text = 'Use {curly} braces: {"titleText": "Menu"}'
        assert find_json_object(text) == {"titleText": "Menu"}

    def test_nested_object_returned_whole(self) -> None:
        obj = _structured("Informativa", "Gráfico de vendas")
        text = "Result:\n" + json.dumps(obj, ensure_ascii=False)
        assert find_json_object(text) == obj

    def test_no_object(self) -> None:
        with pytest.raises(ResponseParseError, match="No JSON object"):
            find_json_object("I cannot help with that.")

    def test_invalid_json(self) -> None:
        with pytest.raises(ResponseParseError, match="Invalid JSON"):
            find_json_object("{isDecorative: false, titleText: 'x'}")

    def test_truncated_object_does_not_yield_nested_member(self) -> None:
        text = (
            '{"conformidade": {"status": "Nao conforme", "altObrigatorio": true}, '
            '"tipoImagem": {"classificacao": "Inform'
        )
        with pytest.raises(ResponseParseError, match="Invalid JSON"):
            find_json_object(text)

    def test_braces_inside_strings_of_a_broken_object(self) -> None:
        text = 'Bad {"a": "} {\\"b\\": 1}", oops} then {"titleText": "Menu"}'
        assert find_json_object(text) == {"titleText": "Menu"}

    def test_truncated_answer_after_complete_prose_object(self) -> None:
        text = '{"x": 1} and then {"titleText": "Me'
        assert find_json_object(text) == {"x": 1}


class TestNormalizeSuggestion:
    def test_flat_shape_with_prose(self) -> None:
        text = 'Here it is: {"isDecorative":false,"titleText":"Search","descText":""}'
        result = normalize_suggestion(text)
        assert result.is_decorative is False
        assert result.title_text == "Search"
        assert result.desc_text == ""
        assert result.wcag_analysis is None

    def test_flat_shape_missing_fields(self) -> None:
        result = normalize_suggestion('{"titleText": "  Fechar  "}')
        assert result.is_decorative is False
        assert result.title_text == "Fechar"
        assert result.desc_text == ""

    def test_flat_shape_string_boolean(self) -> None:
        assert normalize_suggestion('{"isDecorative": "true"}').is_decorative is True
        assert normalize_suggestion('{"isDecorative": "false"}').is_decorative is False

    def test_decorative_drops_text(self) -> None:
        result = normalize_suggestion('{"isDecorative": true, "titleText": "Linha", "descText": "x"}')
        assert result.is_decorative is True
        assert result.title_text == ""
        assert result.desc_text == ""

    def test_structured_decorative(self) -> None:
        result = normalize_suggestion(json.dumps(_structured("Decorativa")))
        assert result.is_decorative is True
        assert result.wcag_analysis is not None
        analysis = result.wcag_analysis
        assert analysis.image_type.classification is ImageClassification.DECORATIVE
        assert analysis.image_type.impact == "Alto"
        assert analysis.conformance.alt_required is False
        assert analysis.conformance.status == "Não conforme"
        assert analysis.suggested_snippet == '<img src="x.png" alt="">'
        assert analysis.raw["tipoImagem"]["classificacao"] == "Decorativa"

    def test_structured_informative(self) -> None:
        payload = _structured("Complexa", "Vendas por trimestre", "Barras de Q1 a Q4.")
        result = normalize_suggestion(json.dumps(payload, ensure_ascii=False))
        assert result.is_decorative is False
        assert result.title_text == "Vendas por trimestre"
        assert result.desc_text == "Barras de Q1 a Q4."
        assert result.wcag_analysis.image_type.classification is ImageClassification.COMPLEX
        assert result.wcag_analysis.conformance.alt_required is True

    def test_structured_unknown_classification(self) -> None:
        result = normalize_suggestion(json.dumps(_structured("Outro", "Foto")))
        assert result.is_decorative is False
        assert result.wcag_analysis.image_type.classification is None

    def test_partial_structured_keys_use_flat_shape(self) -> None:
        text = '{"tipoImagem": {"classificacao": "Decorativa"}, "titleText": "Logo"}'
        result = normalize_suggestion(text)
        assert result.is_decorative is False
        assert result.title_text == "Logo"
        assert result.wcag_analysis is None

    def test_parse_error_propagates(self) -> None:
        with pytest.raises(ResponseParseError):
            normalize_suggestion("no json here")

"""Tests for the local SVG and IMG classifiers."""

from __future__ import annotations

import pytest

from svga11y.heuristics import PLACEHOLDER_ALT, classify_img, classify_svg
from svga11y.heuristics.img import file_name
from tests.conftest import HAMBURGER_SVG


# ── SVG cascade ─────────────────────────────────────────────────────────────


class TestClassifySvgStructure:
    def test_hamburger_menu(self) -> None:
        result = classify_svg(HAMBURGER_SVG)
        assert result.is_decorative is False
        assert result.title_text == "Abrir menu de navegação"

    def test_single_rect_is_decorative(self) -> None:
        result = classify_svg('<svg><rect width="1" height="1"/></svg>')
        assert result.is_decorative is True
        assert result.title_text == ""
        assert result.desc_text == ""

    def test_bar_chart_rects_and_axis(self) -> None:
        svg = (
            "<svg><rect height='10'/><rect height='20'/><rect height='30'/>"
            "<line x1='0' y1='40' x2='100' y2='40'/></svg>"
        )
        result = classify_svg(svg)
        assert result.title_text == "Gráfico de barras"
        assert result.desc_text

    def test_bar_chart_rects_only(self) -> None:
        svg = "<svg>" + "<rect width='5' height='9'/>" * 4 + "</svg>"
        assert classify_svg(svg).title_text == "Gráfico de barras"

    def test_pie_chart_arcs(self) -> None:
        svg = (
            "<svg><path d='M50 50 L50 0 A50 50 0 0 1 100 50 Z'/>"
            "<path d='M50 50 L100 50 a50 50 0 0 1 -50 50 Z'/>"
            "<path d='M50 50 L50 100 Z'/></svg>"
        )
        assert classify_svg(svg).title_text == "Gráfico de distribuição"

    def test_flow_diagram(self) -> None:
        svg = (
            "<svg><rect x='0'/><rect x='50'/>"
            "<line x1='10' y1='5' x2='50' y2='5'/><text>Início</text></svg>"
        )
        assert classify_svg(svg).title_text == "Diagrama de fluxo"

    def test_chart_wins_over_icon_lines(self) -> None:
        # three horizontal lines plus rects: a chart, not a menu
        svg = HAMBURGER_SVG.replace("</svg>", "<rect/><rect/><rect/></svg>")
        assert classify_svg(svg).title_text == "Gráfico de barras"

    def test_search_icon(self) -> None:
        svg = "<svg><circle cx='11' cy='11' r='8'/><line x1='21' y1='21' x2='16.65' y2='16.65'/></svg>"
        assert classify_svg(svg).title_text == "Pesquisar"

    def test_close_icon(self) -> None:
        svg = "<svg><line x1='18' y1='6' x2='6' y2='18'/><line x1='6' y1='6' x2='18' y2='18'/></svg>"
        assert classify_svg(svg).title_text == "Fechar"

    def test_three_diagonal_lines_are_not_menu(self) -> None:
        svg = (
            "<svg><line x1='0' y1='0' x2='5' y2='5'/><line x1='0' y1='1' x2='5' y2='6'/>"
            "<line x1='0' y1='2' x2='5' y2='7'/></svg>"
        )
        assert classify_svg(svg).title_text != "Abrir menu de navegação"

    def test_notification_bell(self) -> None:
        svg = "<svg><path d='M18 8A6 6 0 0 0 6 8c0 7-3 9-3 9h18s-3-2-3-9'/><circle cx='18' cy='5' r='3'/></svg>"
        assert classify_svg(svg).title_text == "Ver notificações"


class TestClassifySvgSignatures:
    def test_heart_path_fingerprint(self) -> None:
        svg = (
            '<svg viewBox="0 0 24 24"><path d="M12 21.35l-1.45-1.32C5.4 15.36 2 12.28 2 8.5 '
            '2 5.42 4.42 3 7.5 3c1.74 0 3.41.81 4.5 2.09"/></svg>'
        )
        assert classify_svg(svg).title_text == "Adicionar aos favoritos"

    def test_red_fill_in_24_box(self) -> None:
        d = "M2 9.5C2 6 4.5 3.5 7.5 3.5c1.9 0 3.4 1 4.5 2.5 1.1-1.5 2.6-2.5 4.5-2.5"
        svg = f'<svg viewBox="0 0 24 24"><path fill="#e91e63" d="{d}"/></svg>'
        assert classify_svg(svg).title_text == "Adicionar aos favoritos"

    def test_keyword_from_class(self) -> None:
        svg = '<svg class="icon-trash" viewBox="0 0 24 24"><path d="M3 6h18"/></svg>'
        assert classify_svg(svg).title_text == "Excluir"

    def test_keyword_from_comment(self) -> None:
        svg = '<svg><!-- settings gear --><path d="M3 6h18"/></svg>'
        assert classify_svg(svg).title_text == "Abrir configurações"

    def test_keyword_table_order(self) -> None:
        # "heart" row precedes "search" row
        svg = '<svg class="search heart"><path d="M1 1h2"/></svg>'
        assert classify_svg(svg).title_text == "Adicionar aos favoritos"

    def test_geometry_attributes_are_not_keywords(self) -> None:
        svg = (
            '<svg xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 10 10">'
            '<rect width="1" height="1"/></svg>'
        )
        assert classify_svg(svg).is_decorative is True


class TestClassifySvgFallbacks:
    def test_logo_with_text(self) -> None:
        svg = '<svg><text x="0" y="10">Acme</text><path d="M0 0h4"/></svg>'
        assert classify_svg(svg).title_text == "Logotipo Acme"

    def test_data_chart_fallback(self) -> None:
        svg = (
            '<svg data-kind="x"><polygon points="0,0 1,1"/><polygon points="1,1 2,2"/>'
            '<ellipse rx="2"/></svg>'
        )
        # "data" appears in the markup and there are three shapes
        assert classify_svg(svg).title_text == "Gráfico de dados"

    def test_illustration_fallback(self) -> None:
        svg = "<svg><polygon points='0,0 1,1'/><ellipse rx='4'/><ellipse rx='2'/></svg>"
        assert classify_svg(svg).title_text == "Ilustração"

    def test_generic_element(self) -> None:
        svg = "<svg><circle r='20'/><ellipse rx='3'/></svg>"
        assert classify_svg(svg).title_text == "Elemento gráfico"

    def test_idempotent(self) -> None:
        inputs = [
            HAMBURGER_SVG,
            '<svg><rect width="1" height="1"/></svg>',
            '<svg class="icon-trash"><path d="M3 6h18"/></svg>',
            "<svg><text>Acme</text></svg>",
        ]
        for svg in inputs:
            assert classify_svg(svg) == classify_svg(svg)


# ── IMG classifier ──────────────────────────────────────────────────────────


class TestClassifyImg:
    @pytest.mark.parametrize("src", [
        "img/spacer.gif",
        "assets/bg-image.jpg",
        "divider.png",
        "https://cdn.example.com/1x1.png",
    ])
    def test_decorative_names(self, src: str) -> None:
        assert classify_img(src).is_decorative is True

    def test_decorative_marker_in_tag(self) -> None:
        result = classify_img("x7.png", '<img src="x7.png" class="decorative">')
        assert result.is_decorative is True

    def test_icon_name(self) -> None:
        assert classify_img("icons/search-icon.png").title_text == "Pesquisar"

    def test_logo_with_brand(self) -> None:
        assert classify_img("/static/logo-acme.png").title_text == "Logo Acme"

    def test_logo_brand_before(self) -> None:
        assert classify_img("acme_logo.svg").title_text == "Logo Acme"

    def test_content_prefix(self) -> None:
        assert classify_img("banner-summer.jpg").title_text == "Banner promocional: summer"

    def test_file_name_fallback(self) -> None:
        assert classify_img("img/sunset-over-lake.jpg").title_text == "Sunset over lake"

    def test_digits_stripped(self) -> None:
        assert classify_img("sunset_2023.jpg").title_text == "Sunset"

    def test_placeholder_for_short_names(self) -> None:
        assert classify_img("a.png").title_text == PLACEHOLDER_ALT

    def test_query_string_ignored(self) -> None:
        assert file_name("https://x.test/a/b/kitten.jpg?w=200") == "kitten.jpg"

    def test_idempotent(self) -> None:
        assert classify_img("logo-acme.png") == classify_img("logo-acme.png")

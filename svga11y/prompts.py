"""Prompt templates sent to AI providers.

Every prompt asks for the same flat JSON object so the response parser can
treat text and vision answers alike.  Generated texts are requested in
Brazilian Portuguese to match the local classifier's labels.
"""

from __future__ import annotations

from svga11y.heuristics.img import file_name

_OUTPUT_FORMAT = """\
Output format (JSON only, no prose):
{
  "isDecorative": true | false,
  "titleText": "short functional name, empty if decorative",
  "descText": "long description for complex graphics, or an empty string"
}

Write titleText and descText in Brazilian Portuguese."""

_SVG_ROLE = (
    "You are a web accessibility (WCAG 2.2) specialist focused on SVG. "
    "Analyze the SVG and decide the most appropriate accessibility structure."
)

_IMG_ROLE = (
    "You are a senior WCAG 2.2 conformance analyst. "
    "Suggest an appropriate text alternative (alt) for the image."
)


def build_svg_prompt(svg_code: str) -> str:
    """Prompt for classifying an SVG from its source code."""
    return f"""{_SVG_ROLE}

Decide:
1. Whether the SVG is informative (needs <title>) or decorative (can be aria-hidden).
2. If informative, write a short title (at most 10 words). If it is complex
   (chart, diagram, several data elements), also write a detailed description.

{_OUTPUT_FORMAT}

Input SVG:
{svg_code}"""


def build_svg_vision_prompt() -> str:
    """Prompt sent alongside a rendered SVG image."""
    return f"""{_SVG_ROLE}

Look at the image and identify what it represents.
- Decorative: separators, abstract shapes, purely aesthetic elements.
- Informative: data charts, action icons, logos, diagrams, meaningful illustrations.

titleText describes purpose, not appearance ("Monthly sales chart", not "Coloured bars").
descText is only for complex graphics; leave it empty for simple icons.

{_OUTPUT_FORMAT}"""


def build_img_text_prompt(img_src: str, img_tag: str) -> str:
    """Prompt for an <img> when only its path and tag are available."""
    name = file_name(img_src) or img_src
    return f"""{_IMG_ROLE}

Image information:
- Path/URL: {img_src}
- File name: {name}
- Full HTML tag: {img_tag}

Determine whether the image is decorative, informative, a functional icon,
a logo or a complex image (chart, diagram).

Rules:
- Names containing "spacer", "background", "decorative" or "pattern" are probably decorative.
- Names containing "logo": extract the brand and answer "Logo <brand>".
- Names containing "banner", "hero" or "product": describe the purpose.
- A hash-like name (e.g. "abc123def.jpg"): answer "[Descrição da imagem]".
- Keep alt text under 125 characters and do not start with "Image of" or "Photo of".

{_OUTPUT_FORMAT}"""


def build_img_vision_prompt() -> str:
    """Prompt sent alongside an <img> payload."""
    return f"""{_IMG_ROLE}

Classify the image as decorative, informative, functional (part of a link
or button) or complex (chart, diagram, infographic).
- Decorative: isDecorative=true and an empty titleText.
- Informative: concise alt text, at most 125 characters.
- Complex: summary in titleText and details in descText.
Do not start with "Image of" or "Photo of".

{_OUTPUT_FORMAT}"""

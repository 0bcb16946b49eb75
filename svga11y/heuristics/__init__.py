"""Network-free classifiers used when no AI provider is configured or reachable."""

from svga11y.heuristics.img import PLACEHOLDER_ALT, classify_img
from svga11y.heuristics.svg import classify_svg

__all__ = ["PLACEHOLDER_ALT", "classify_img", "classify_svg"]

"""SVG A11Y Assist: accessible names for <svg> and <img> elements."""

__version__ = "0.3.0"

"""Shared data models used across the svga11y pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class Severity(str, enum.Enum):
    """Severity level for accessibility issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ProviderTag(str, enum.Enum):
    """Wire-format family of a remote AI endpoint."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    UNKNOWN = "unknown"


class Strategy(str, enum.Enum):
    """How a suggestion was produced."""

    VISION = "vision"
    TEXT = "text"
    HEURISTIC = "heuristic"


class ImageClassification(str, enum.Enum):
    """WCAG image categories, using the labels the structured schema returns."""

    DECORATIVE = "Decorativa"
    FUNCTIONAL = "Funcional"
    INFORMATIVE = "Informativa"
    COMPLEX = "Complexa"
    CAPTCHA = "Captcha"
    TEXT_IN_IMAGE = "Texto em Imagem"


@dataclass(frozen=True)
class Span:
    """Half-open character range into a document."""

    start: int
    end: int


@dataclass(frozen=True)
class ScannedNode:
    """A candidate element found in raw document text."""

    start: int
    end: int  # exclusive
    raw_markup: str
    open_tag: Span


@dataclass(frozen=True)
class SvgNode(ScannedNode):
    has_title: bool = False
    has_desc: bool = False
    has_aria_hidden: bool = False


@dataclass(frozen=True)
class ImgNode(ScannedNode):
    src: str = ""
    alt: str | None = None  # None when the attribute is absent
    has_aria_hidden: bool = False
    has_role: bool = False  # role="presentation" or role="none"

    @property
    def has_alt(self) -> bool:
        return self.alt is not None


@dataclass(frozen=True)
class Conformance:
    status: str = ""
    alt_required: bool = False
    justification: str = ""


@dataclass(frozen=True)
class ImageType:
    classification: ImageClassification | None = None
    impact: str = ""


@dataclass(frozen=True)
class WCAGAnalysis:
    """Structured WCAG 1.1.1 assessment returned by some providers."""

    conformance: Conformance
    image_type: ImageType
    suggested_snippet: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Suggestion:
    """Accessibility suggestion for one element.

    Text fields are plain text; escaping into markup happens in the fixer.
    A decorative suggestion never carries title or description text.
    """

    is_decorative: bool
    title_text: str = ""
    desc_text: str = ""
    wcag_analysis: WCAGAnalysis | None = None

    def __post_init__(self) -> None:
        if self.is_decorative and (self.title_text or self.desc_text):
            object.__setattr__(self, "title_text", "")
            object.__setattr__(self, "desc_text", "")

    @classmethod
    def decorative(cls) -> Suggestion:
        return cls(is_decorative=True)

    @classmethod
    def informative(cls, title: str, desc: str = "") -> Suggestion:
        return cls(is_decorative=False, title_text=title, desc_text=desc)


@dataclass
class SuggestionResult:
    """A suggestion plus how it was obtained and what degraded on the way."""

    suggestion: Suggestion
    strategy: Strategy
    warnings: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)


@dataclass
class AccessibilityIssue:
    """A single accessibility issue found during analysis."""

    rule: str
    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    element: str | None = None


@dataclass
class AnalysisResult:
    """Complete result of scanning a document for non-text content."""

    source_path: Path | None = None
    svg_nodes: list[SvgNode] = field(default_factory=list)
    img_nodes: list[ImgNode] = field(default_factory=list)
    issues: list[AccessibilityIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)


@dataclass
class AppliedFix:
    """One element rewritten by the fixer."""

    element: str  # "svg" or "img"
    start: int
    result: SuggestionResult


@dataclass
class FixResult:
    """Aggregate result of fixing a whole document."""

    text: str
    fixes: list[AppliedFix] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.fixes)

    @property
    def warnings(self) -> list[str]:
        out: list[str] = []
        for fix in self.fixes:
            for w in fix.result.warnings:
                out.append(f"[{fix.element}@{fix.start}] {w}")
        return out

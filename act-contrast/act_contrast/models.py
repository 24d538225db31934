"""
Data Models for Text Contrast Evaluation

Type-safe Pydantic models for colors, backgrounds, style snapshots,
evaluations and configuration. Values produced while evaluating one
element are immutable and never shared across elements.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


Verdict = Literal["passed", "failed", "warning", "inapplicable"]

GradientDirection = Literal["to right", "to left", "other"]

RULE_ID = "QW-ACT-R76"


class Color(BaseModel):
    """
    An sRGB color with alpha.

    Channels are floats so that interpolated and composited colors
    (e.g. the midpoint 127.5) stay exact. Values outside the valid range
    are clamped on construction.

    Attributes:
        red: Red channel, 0-255
        green: Green channel, 0-255
        blue: Blue channel, 0-255
        alpha: Opacity, 0.0-1.0 (defaults to fully opaque)
    """

    model_config = ConfigDict(frozen=True)

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @field_validator("red", "green", "blue")
    @classmethod
    def clamp_channel(cls, v: float) -> float:
        return min(max(v, 0.0), 255.0)

    @field_validator("alpha")
    @classmethod
    def clamp_alpha(cls, v: float) -> float:
        return min(max(v, 0.0), 1.0)

    @property
    def is_transparent(self) -> bool:
        """True for the fully transparent black produced by `transparent`"""
        return self.red == 0 and self.green == 0 and self.blue == 0 and self.alpha == 0

    def __str__(self) -> str:
        return f"rgba({self.red:g}, {self.green:g}, {self.blue:g}, {self.alpha:g})"


WHITE = Color(red=255, green=255, blue=255, alpha=1)
TRANSPARENT = Color(red=0, green=0, blue=0, alpha=0)


class GradientSpec(BaseModel):
    """
    A parsed `linear-gradient(...)` declaration.

    Attributes:
        direction: Normalized direction; only "to right" is evaluated
        raw_direction: Direction token as written in the declaration
        stops: Color stops in source order
    """

    model_config = ConfigDict(frozen=True)

    direction: GradientDirection
    raw_direction: str = ""
    stops: tuple[Color, ...] = ()


class SolidColor(BaseModel):
    """Background that resolved to a single color."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["solid"] = "solid"
    color: Color


class Gradient(BaseModel):
    """Background declared as a CSS gradient.

    `spec` is None for gradients that are not linear (radial, conic, ...).
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["gradient"] = "gradient"
    raw: str
    spec: Optional[GradientSpec] = None


class Image(BaseModel):
    """Background is a raster or vector image; contrast cannot be computed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    value: str


class Unresolved(BaseModel):
    """Background is transparent or unparseable; keep climbing ancestors."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unresolved"] = "unresolved"
    value: str = ""


Background = Union[SolidColor, Gradient, Image, Unresolved]


class StyleSnapshot(BaseModel):
    """
    Computed-style facts for one element, read once per evaluation.

    Missing properties take their CSS initial values.
    """

    model_config = ConfigDict(frozen=True)

    color: str = "rgb(0, 0, 0)"
    background: str = ""
    background_color: str = "rgba(0, 0, 0, 0)"
    background_image: str = "none"
    opacity: float = 1.0
    font_size: str = "16px"
    font_weight: str = "400"
    font_style: str = "normal"
    font_family: str = "serif"
    text_shadow: str = "none"
    width: str = "auto"

    @field_validator("opacity", mode="before")
    @classmethod
    def parse_opacity(cls, v) -> float:
        """CSS opacity arrives as text; anything unparseable means opaque"""
        if v is None or v == "":
            return 1.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return 1.0

    @classmethod
    def from_styles(cls, styles: dict) -> "StyleSnapshot":
        """Build from a `{css-property: value}` mapping."""
        fields = {}
        for name in cls.model_fields:
            value = styles.get(name.replace("_", "-"))
            if value is not None:
                fields[name] = value
        return cls(**fields)


class Evaluation(BaseModel):
    """
    Outcome of evaluating one element.

    Attributes:
        verdict: passed, failed, warning or inapplicable
        result_code: Stable identifier of the branch that fired (RC1..RC16)
        description: Human-readable explanation
        element: Pointer (CSS selector or node path) of the element
        contrast_ratio: Lowest ratio measured, when one was computed
        required_ratio: Threshold the ratio had to exceed
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    result_code: str
    description: str
    element: str = ""
    contrast_ratio: Optional[float] = None
    required_ratio: Optional[float] = None

    def __str__(self) -> str:
        marks = {"passed": "✓", "failed": "✗", "warning": "!", "inapplicable": "-"}
        return f"{marks[self.verdict]} [{self.result_code}] {self.element}: {self.description}"


class RuleReport(BaseModel):
    """
    Ordered, append-only collection of evaluations for one page.

    Evaluations keep DOM traversal order for deterministic reporting.
    """

    rule_id: str = RULE_ID
    evaluations: list[Evaluation] = Field(default_factory=list)

    def add(self, evaluation: Evaluation) -> None:
        self.evaluations.append(evaluation)

    def count(self, verdict: Verdict) -> int:
        return sum(1 for e in self.evaluations if e.verdict == verdict)

    @property
    def passed(self) -> int:
        return self.count("passed")

    @property
    def failed(self) -> int:
        return self.count("failed")

    @property
    def warning(self) -> int:
        return self.count("warning")

    @property
    def inapplicable(self) -> int:
        return self.count("inapplicable")

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    def summary(self) -> str:
        """Generate a human-readable summary"""
        return (
            f"{self.rule_id}: {len(self.evaluations)} elements "
            f"({self.passed} passed, {self.failed} failed, "
            f"{self.warning} warning, {self.inapplicable} inapplicable)"
        )


class Config(BaseModel):
    """
    Configuration for the contrast evaluator.

    Loaded from .env file and environment variables.

    Attributes:
        default_background: CSS color assumed behind the root element
        font_dirs: Extra directories searched for TrueType fonts
        skipped_tags: Structural tags never evaluated
        log_level: Logging level name for the CLI
    """

    default_background: str = "rgb(255, 255, 255)"
    font_dirs: list[str] = Field(default_factory=list)
    skipped_tags: list[str] = Field(
        default_factory=lambda: ["html", "head", "body", "script", "style", "meta"]
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("skipped_tags")
    @classmethod
    def lower_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip().lower() for tag in v if tag.strip()]

"""Shared configuration for glyph tracing.

This module centralizes the tunable values used by:
    - tracing_lib.parsing (curve flattening resolution)
    - tracing_lib.templates (region fitting)
    - tracing_lib.evaluation (proximity and completeness checks)
    - tracing_lib.session (input filtering)

Two parameter sets were in use for otherwise identical evaluators: a
distance threshold of 50 with 98% completeness, and 30 with 95%. Both are
available as presets; neither is hard-wired into the evaluators.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace as _replace

# Maximum distance from the template for a point to count as "on" it
FEEDBACK_DISTANCE_THRESHOLD = 50.0

# Fraction of the template length a stroke must cover
COMPLETENESS_THRESHOLD = 0.98

# Spacing of samples taken along the template when measuring proximity
TEMPLATE_SAMPLE_STEP = 10.0

# Spacing of samples taken along the user's stroke at stroke end
USER_SAMPLE_STEP = 20.0

# Line segments per flattened Bezier curve
CURVE_SEGMENTS = 24

# Fraction of the target region the fitted glyph may occupy
FILL_FRACTION = 0.8

# Padding added around the glyph bbox on top of the stroke half-width
EXTRA_PADDING = 50.0

# Half of the widest paint used for template and ink (25 / 2)
STROKE_HALF_WIDTH = 12.5

# Pointer moves smaller than this on both axes are dropped
TOUCH_TOLERANCE = 4.0

# Alternate parameter set
LENIENT_DISTANCE_THRESHOLD = 30.0
LENIENT_COMPLETENESS_THRESHOLD = 0.95


@dataclass(frozen=True)
class TracingConfig:
    """Bundle of evaluator and fitting parameters.

    Attributes:
        distance_threshold: Proximity threshold in region units.
        completeness_threshold: Minimum user/template length ratio, in (0, 1].
        template_sample_step: Sampling step along template strokes.
        user_sample_step: Sampling step along user strokes.
        curve_segments: Line segments per flattened curve.
        fill_fraction: Fraction of the region used when fitting, in (0, 1].
        extra_padding: Fixed padding around the glyph bbox.
        stroke_half_width: Half the drawn stroke width, added to padding.
        touch_tolerance: Minimum pointer movement before a point is kept.
    """
    distance_threshold: float = FEEDBACK_DISTANCE_THRESHOLD
    completeness_threshold: float = COMPLETENESS_THRESHOLD
    template_sample_step: float = TEMPLATE_SAMPLE_STEP
    user_sample_step: float = USER_SAMPLE_STEP
    curve_segments: int = CURVE_SEGMENTS
    fill_fraction: float = FILL_FRACTION
    extra_padding: float = EXTRA_PADDING
    stroke_half_width: float = STROKE_HALF_WIDTH
    touch_tolerance: float = TOUCH_TOLERANCE

    def __post_init__(self):
        if self.distance_threshold < 0:
            raise ValueError(f"distance_threshold must be >= 0, got {self.distance_threshold}")
        if not 0 < self.completeness_threshold <= 1:
            raise ValueError(f"completeness_threshold must be in (0, 1], got {self.completeness_threshold}")
        if self.template_sample_step <= 0 or self.user_sample_step <= 0:
            raise ValueError("sample steps must be positive")
        if self.curve_segments < 1:
            raise ValueError(f"curve_segments must be >= 1, got {self.curve_segments}")
        if not 0 < self.fill_fraction <= 1:
            raise ValueError(f"fill_fraction must be in (0, 1], got {self.fill_fraction}")
        if self.touch_tolerance < 0:
            raise ValueError(f"touch_tolerance must be >= 0, got {self.touch_tolerance}")

    def replace(self, **changes) -> TracingConfig:
        """Return a copy with the given fields changed."""
        return _replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> TracingConfig:
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})

    @classmethod
    def preset(cls, name: str) -> TracingConfig:
        """Look up a named preset ('default' or 'lenient')."""
        try:
            return PRESETS[name]
        except KeyError:
            raise ValueError(f"Unknown preset {name!r}; choose from {sorted(PRESETS)}") from None


PRESETS: dict[str, TracingConfig] = {
    'default': TracingConfig(),
    'lenient': TracingConfig(
        distance_threshold=LENIENT_DISTANCE_THRESHOLD,
        completeness_threshold=LENIENT_COMPLETENESS_THRESHOLD,
    ),
}

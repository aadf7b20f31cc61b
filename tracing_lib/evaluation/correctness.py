"""Stroke correctness evaluation.

A finished user stroke matches a template stroke when all of these hold:

    1. Neither stroke is empty.
    2. The user stroke covers enough of the template: user length divided by
       template length is at least the completeness threshold (skipped when
       the template has zero length).
    3. For a user stroke shorter than one sampling step, both its start and
       end points are near the template.
    4. Otherwise, points sampled along the user stroke every
       ``user_sample_step`` units (from 0 up to and including the user
       length when it falls on the grid) are all near the template. The
       first failing sample rejects the stroke.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from ..config import (
    COMPLETENESS_THRESHOLD,
    FEEDBACK_DISTANCE_THRESHOLD,
    TEMPLATE_SAMPLE_STEP,
    USER_SAMPLE_STEP,
    TracingConfig,
)
from ..domain.geometry import Point
from ..utils.geometry import as_polylines, point_at_distance, total_length
from .proximity import ProximityIndex

logger = logging.getLogger(__name__)


class VerdictReason(Enum):
    ACCEPTED = 'accepted'
    EMPTY_INPUT = 'empty_input'
    INCOMPLETE = 'incomplete'
    OFF_TEMPLATE = 'off_template'
    NOT_ACTIVE = 'not_active'


@dataclass(frozen=True)
class StrokeVerdict:
    """Outcome of evaluating one user stroke.

    Attributes:
        accepted: Whether the stroke passed every check.
        reason: Which check decided the outcome.
        user_length: Arc length of the user stroke.
        template_length: Arc length of the template stroke.
        completeness: user_length / template_length, or None when the
            template has zero length or an input was empty.
        failed_at: First user point found too far from the template.
    """
    accepted: bool
    reason: VerdictReason
    user_length: float = 0.0
    template_length: float = 0.0
    completeness: float | None = None
    failed_at: Point | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'accepted': self.accepted,
            'reason': self.reason.value,
            'user_length': self.user_length,
            'template_length': self.template_length,
            'completeness': self.completeness,
            'failed_at': self.failed_at.to_list() if self.failed_at else None,
        }


def evaluate_stroke(
    user_polyline,
    template_stroke,
    threshold: float = FEEDBACK_DISTANCE_THRESHOLD,
    completeness_threshold: float = COMPLETENESS_THRESHOLD,
    user_sample_step: float = USER_SAMPLE_STEP,
    template_sample_step: float = TEMPLATE_SAMPLE_STEP,
    index: ProximityIndex | None = None,
) -> StrokeVerdict:
    """Judge a finished user stroke against a template stroke.

    Args:
        user_polyline: The user's stroke, as a GeometricPath or point list.
        template_stroke: The template stroke geometry.
        threshold: Maximum distance from the template for any sample.
        completeness_threshold: Minimum user/template length ratio.
        user_sample_step: Spacing of samples along the user stroke.
        template_sample_step: Spacing of samples along the template; ignored
            when ``index`` is given.
        index: Prebuilt proximity index for ``template_stroke``.

    Returns:
        StrokeVerdict describing the decision.
    """
    if not as_polylines(user_polyline) or not as_polylines(template_stroke):
        logger.debug("Rejecting stroke: empty input")
        return StrokeVerdict(False, VerdictReason.EMPTY_INPUT)

    user_length = total_length(user_polyline)
    template_length = total_length(template_stroke)

    completeness = None
    if template_length > 0:
        completeness = user_length / template_length
        if completeness < completeness_threshold:
            logger.debug("Rejecting stroke: completeness %.3f < %.3f",
                         completeness, completeness_threshold)
            return StrokeVerdict(False, VerdictReason.INCOMPLETE, user_length,
                                 template_length, completeness)
    else:
        logger.warning("Template stroke has zero length, skipping completeness check")

    if index is None:
        index = ProximityIndex(template_stroke, template_sample_step)

    if user_length < user_sample_step:
        distances = [0.0, user_length]
    else:
        n_steps = int(math.floor(user_length / user_sample_step))
        distances = [i * user_sample_step for i in range(n_steps + 1)]

    for d in distances:
        point, _ = point_at_distance(user_polyline, d)
        if not index.is_near(point, threshold):
            logger.debug("Rejecting stroke: (%.1f, %.1f) is %.1f from template",
                         point.x, point.y, index.distance(point))
            return StrokeVerdict(False, VerdictReason.OFF_TEMPLATE, user_length,
                                 template_length, completeness, failed_at=point)

    logger.debug("Stroke accepted: length %.1f of %.1f", user_length, template_length)
    return StrokeVerdict(True, VerdictReason.ACCEPTED, user_length, template_length, completeness)


def evaluate(
    user_polyline,
    template_stroke,
    threshold: float = FEEDBACK_DISTANCE_THRESHOLD,
    completeness_threshold: float = COMPLETENESS_THRESHOLD,
    user_sample_step: float = USER_SAMPLE_STEP,
) -> bool:
    """True when the user stroke matches the template stroke."""
    return evaluate_stroke(user_polyline, template_stroke, threshold,
                           completeness_threshold, user_sample_step).accepted


class StrokeEvaluator:
    """Evaluator bound to a TracingConfig.

    Example:
        >>> evaluator = StrokeEvaluator(TracingConfig.preset('lenient'))
        >>> verdict = evaluator.evaluate(user_points, template.strokes[0].path)
    """

    def __init__(self, config: TracingConfig | None = None):
        self.config = config or TracingConfig()

    def index_for(self, template_stroke) -> ProximityIndex:
        return ProximityIndex(template_stroke, self.config.template_sample_step)

    def is_near(self, point, index: ProximityIndex) -> bool:
        return index.is_near(point, self.config.distance_threshold)

    def evaluate(self, user_polyline, template_stroke,
                 index: ProximityIndex | None = None) -> StrokeVerdict:
        cfg = self.config
        return evaluate_stroke(
            user_polyline, template_stroke,
            threshold=cfg.distance_threshold,
            completeness_threshold=cfg.completeness_threshold,
            user_sample_step=cfg.user_sample_step,
            template_sample_step=cfg.template_sample_step,
            index=index,
        )

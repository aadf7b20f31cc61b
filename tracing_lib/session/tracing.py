"""Tracing session state machine.

States:
    IDLE: No template, or a template with no usable strokes.
    ACTIVE: Waiting for stroke ``stroke_index`` to be traced.
    COMPLETE: Every stroke has been accepted.

Transitions:
    load_template -> ACTIVE(0), or IDLE when the template has no strokes.
    end_stroke accepted -> ACTIVE(n + 1), or COMPLETE after the last stroke.
    end_stroke rejected -> ACTIVE(n), in-progress ink discarded.
    reset_tracing -> ACTIVE(0) with the same template.

Live feedback is advisory: points are recorded whether or not they are near
the template, and only ``end_stroke`` decides acceptance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from ..config import TracingConfig
from ..domain.geometry import GeometricPath, Point
from ..evaluation.correctness import StrokeEvaluator, StrokeVerdict, VerdictReason
from ..evaluation.proximity import ProximityIndex
from ..templates.template import Template, TemplateStroke

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = 'idle'
    ACTIVE = 'active'
    COMPLETE = 'complete'


@dataclass(frozen=True)
class StrokeResult:
    """Outcome of ending a stroke.

    Attributes:
        accepted: Whether the stroke was accepted.
        stroke_index: Index of the template stroke that was evaluated.
        next_index: Active stroke index after this result.
        state: Session state after this result.
        verdict: Detailed evaluation outcome.
    """
    accepted: bool
    stroke_index: int
    next_index: int
    state: SessionState
    verdict: StrokeVerdict

    @property
    def complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    def to_dict(self) -> dict:
        return {
            'accepted': self.accepted,
            'stroke_index': self.stroke_index,
            'next_index': self.next_index,
            'state': self.state.value,
            'verdict': self.verdict.to_dict(),
        }


def _as_point(p) -> Point:
    return p if isinstance(p, Point) else Point.from_tuple(p)


class TracingSession:
    """Tracks one user's progress tracing one template.

    The session borrows its template and owns the user's ink. Accepted
    strokes are stored as immutable GeometricPaths, so nothing done to the
    in-progress stroke can reach them.

    Not thread-safe; callers sharing a session across threads must
    serialize access.

    Example:
        >>> session = TracingSession(template)
        >>> session.begin_stroke((10, 10))
        True
        >>> for p in pointer_samples:
        ...     session.add_point(p)
        >>> result = session.end_stroke()
        >>> result.accepted, session.state
        (True, <SessionState.ACTIVE: 'active'>)
    """

    def __init__(self, template: Template | None = None, config: TracingConfig | None = None):
        self.config = config or TracingConfig()
        self._evaluator = StrokeEvaluator(self.config)
        self._template: Template | None = None
        self._state = SessionState.IDLE
        self._stroke_index = 0
        self._accepted: List[GeometricPath] = []
        self._current: List[Point] = []
        self._index: ProximityIndex | None = None
        self._live = True
        self._stroke_ok = True
        if template is not None:
            self.load_template(template)

    # --- properties ---

    @property
    def template(self) -> Template | None:
        return self._template

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stroke_index(self) -> int:
        return self._stroke_index

    @property
    def stroke_count(self) -> int:
        return len(self._template) if self._template is not None else 0

    @property
    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETE

    @property
    def accepted_strokes(self) -> Tuple[GeometricPath, ...]:
        return tuple(self._accepted)

    @property
    def current_stroke(self) -> Tuple[Point, ...]:
        """Points of the stroke being drawn."""
        return tuple(self._current)

    @property
    def live_feedback(self) -> bool:
        """Whether the most recent point was near the active stroke."""
        return self._live

    @property
    def stroke_feedback(self) -> bool:
        """False once any point of the current stroke strayed off template."""
        return self._stroke_ok

    @property
    def active_template_stroke(self) -> TemplateStroke | None:
        if self._state is not SessionState.ACTIVE:
            return None
        return self._template[self._stroke_index]

    @property
    def progress(self) -> float:
        """Fraction of strokes accepted so far."""
        if not self.stroke_count:
            return 0.0
        return len(self._accepted) / self.stroke_count

    # --- lifecycle ---

    def load_template(self, template: Template | None) -> None:
        """Replace the template and start over."""
        self._template = template
        self.reset_tracing()
        logger.info("Session loaded template %r (%d strokes), state=%s",
                    template.name if template is not None else None,
                    self.stroke_count, self._state.value)

    def reset_tracing(self) -> None:
        """Discard all ink and return to the first stroke."""
        self._accepted = []
        self._clear_current()
        if self.stroke_count:
            self._activate(0)
        else:
            self._state = SessionState.IDLE
            self._stroke_index = 0
            self._index = None

    def _activate(self, index: int) -> None:
        self._state = SessionState.ACTIVE
        self._stroke_index = index
        self._index = self._evaluator.index_for(self._template[index].path)

    def _clear_current(self) -> None:
        self._current = []
        self._live = True
        self._stroke_ok = True

    def _check(self, point: Point) -> bool:
        self._live = self._evaluator.is_near(point, self._index)
        if not self._live:
            self._stroke_ok = False
        return self._live

    # --- input ---

    def begin_stroke(self, point) -> bool | None:
        """Start a new stroke at ``point`` (pen down).

        Any unfinished stroke is discarded.

        Returns:
            Live proximity verdict for the point, or None when not ACTIVE.
        """
        if self._state is not SessionState.ACTIVE:
            return None
        point = _as_point(point)
        self._clear_current()
        self._current.append(point)
        return self._check(point)

    def add_point(self, point) -> bool | None:
        """Extend the current stroke (pen move).

        Moves smaller than ``touch_tolerance`` on both axes are dropped.
        Starts a stroke if none is in progress.

        Returns:
            Live proximity verdict, or None when not ACTIVE.
        """
        if self._state is not SessionState.ACTIVE:
            return None
        if not self._current:
            return self.begin_stroke(point)

        point = _as_point(point)
        last = self._current[-1]
        tol = self.config.touch_tolerance
        if abs(point.x - last.x) < tol and abs(point.y - last.y) < tol:
            return self._live
        self._current.append(point)
        return self._check(point)

    def end_stroke(self, point=None) -> StrokeResult:
        """Finish the current stroke (pen up) and judge it.

        Args:
            point: Optional final pointer position, always appended.

        Returns:
            StrokeResult. When the session is not ACTIVE the result is a
            rejection with reason NOT_ACTIVE and nothing changes.
        """
        index = self._stroke_index
        if self._state is not SessionState.ACTIVE:
            return StrokeResult(False, index, index, self._state,
                                StrokeVerdict(False, VerdictReason.NOT_ACTIVE))

        if point is not None:
            self._current.append(_as_point(point))

        user = GeometricPath.from_points(self._current) if self._current else GeometricPath()
        verdict = self._evaluator.evaluate(user, self._template[index].path, index=self._index)

        if verdict.accepted:
            self._accepted.append(user)
            if index + 1 >= self.stroke_count:
                self._state = SessionState.COMPLETE
                self._stroke_index = self.stroke_count
                self._index = None
                logger.info("Template %r complete", self._template.name)
            else:
                self._activate(index + 1)
                logger.info("Stroke %d accepted, now on stroke %d", index, index + 1)
        else:
            logger.info("Stroke %d rejected (%s)", index, verdict.reason.value)

        self._clear_current()
        return StrokeResult(verdict.accepted, index, self._stroke_index, self._state, verdict)

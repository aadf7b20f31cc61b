"""Service layer for tracing operations.

This module provides a high-level service that hides template parsing,
region fitting and session bookkeeping behind pointer-event methods. Every
method returns plain dictionaries and lists suitable for JSON responses, so
a rendering or UI collaborator never handles the domain objects directly.

Example usage:
    Tracing a glyph from pointer events::

        from tracing_lib.api.services import TracingService

        service = TracingService()
        view = service.load_glyph('T', ['M 0 0 H 100', 'M 50 0 V 120'], 800, 600)

        service.pointer_down(*first_point)
        for x, y in moves:
            feedback = service.pointer_move(x, y)   # {'on_track': True, ...}
        result = service.pointer_up(*last_point)    # {'accepted': ..., 'state': ...}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import TracingConfig
from ..session.tracing import SessionState, TracingSession
from ..templates.store import TemplateStore

# Logger for service errors
_logger = logging.getLogger(__name__)


class TracingService:
    """Service combining a template store with one tracing session.

    Attributes:
        config: Parameters shared by the store and the session.
        store: Registered glyph templates.
        session: Session for the currently loaded glyph.

    Example:
        >>> service = TracingService(TracingConfig.preset('lenient'))
        >>> service.load_glyph('I', ['M 50 0 V 100', 'M 30 100 H 70'], 400, 400)['visible']
        True
    """

    def __init__(self, config: TracingConfig | None = None, store: TemplateStore | None = None):
        """Initialize the service.

        Args:
            config: Tracing parameters. Defaults to TracingConfig().
            store: Existing template store to draw glyphs from. A new empty
                store using ``config`` is created when omitted.
        """
        self.config = config or (store.config if store is not None else TracingConfig())
        self.store = store if store is not None else TemplateStore(self.config)
        self.session = TracingSession(config=self.config)
        self.glyph: Optional[str] = None
        self.region = (0.0, 0.0)

    def load_glyph(self, name: str, strokes: Optional[Iterable[str]] = None,
                   width: float = 0.0, height: float = 0.0) -> Dict[str, Any]:
        """Load a glyph into the session, fitted to a region.

        Args:
            name: Glyph identifier.
            strokes: Path strings to register under ``name``. When omitted
                the glyph must already be in the store.
            width: Region width.
            height: Region height.

        Returns:
            Dictionary with the fitted template (or None when it cannot be
            shown), skipped strokes and the session snapshot. ``visible`` is
            False when the glyph is unknown or its geometry is degenerate.
        """
        if strokes is not None:
            self.store.register(name, strokes)
        self.glyph = name
        self.region = (width, height)
        return self._reload()

    def resize(self, width: float, height: float) -> Dict[str, Any]:
        """Refit the current glyph to a new region size.

        Ink drawn in the old region no longer lines up with the refitted
        template, so tracing restarts from the first stroke.
        """
        self.region = (width, height)
        if self.glyph is None:
            return self.snapshot()
        return self._reload()

    def _reload(self) -> Dict[str, Any]:
        fitted = self.store.scaled(self.glyph, *self.region)
        self.session.load_template(fitted)
        unscaled = self.store.get(self.glyph)
        response = self.snapshot()
        response.update({
            'visible': fitted is not None,
            'template': fitted.to_dict() if fitted is not None else None,
            'skipped': [s.to_dict() for s in unscaled.skipped] if unscaled else [],
        })
        if fitted is None:
            _logger.warning("Glyph %r loaded without a visible template", self.glyph)
        return response

    def pointer_down(self, x: float, y: float) -> Dict[str, Any]:
        """Pen down: start a stroke and report live feedback."""
        return self._feedback(self.session.begin_stroke((x, y)))

    def pointer_move(self, x: float, y: float) -> Dict[str, Any]:
        """Pen move: extend the stroke and report live feedback."""
        return self._feedback(self.session.add_point((x, y)))

    def pointer_up(self, x: float | None = None, y: float | None = None) -> Dict[str, Any]:
        """Pen up: judge the stroke.

        Returns:
            The session snapshot updated with the stroke result, so
            ``stroke_index`` is the stroke that was judged and
            ``next_index`` the one now active.
        """
        point = (x, y) if x is not None and y is not None else None
        result = self.session.end_stroke(point)
        response = self.snapshot()
        response.update(result.to_dict())
        return response

    def reset(self) -> Dict[str, Any]:
        """Clear all ink and restart the current glyph."""
        self.session.reset_tracing()
        return self.snapshot()

    def _feedback(self, on_track: bool | None) -> Dict[str, Any]:
        return {
            'on_track': on_track,
            'stroke_ok': self.session.stroke_feedback,
            'state': self.session.state.value,
            'stroke_index': self.session.stroke_index,
        }

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the session for rendering."""
        session = self.session
        accepted: List[List[List[float]]] = [
            [p.to_list() for p in path[0].points] for path in session.accepted_strokes
        ]
        return {
            'glyph': self.glyph,
            'state': session.state.value,
            'stroke_index': session.stroke_index,
            'stroke_count': session.stroke_count,
            'progress': session.progress,
            'complete': session.state is SessionState.COMPLETE,
            'accepted_strokes': accepted,
            'current_stroke': [p.to_list() for p in session.current_stroke],
            'stroke_feedback': session.stroke_feedback,
        }

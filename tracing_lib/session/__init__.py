"""Tracing sessions.

The module exports:
    TracingSession: Stroke-by-stroke tracing state machine.
    SessionState: IDLE, ACTIVE or COMPLETE.
    StrokeResult: Outcome of ending a stroke.

Example usage:
    Driving a session from pointer events::

        from tracing_lib.session import TracingSession

        session = TracingSession(fitted_template)
        session.begin_stroke((x0, y0))
        for x, y in moves:
            on_track = session.add_point((x, y))
        result = session.end_stroke((x1, y1))
        if result.complete:
            print("Glyph complete")
"""

from .tracing import SessionState, StrokeResult, TracingSession

__all__ = ['TracingSession', 'SessionState', 'StrokeResult']

"""API layer for glyph tracing.

This module provides the service layer for UI integration. The service
turns pointer events into tracing feedback and returns plain dictionaries
that a renderer can draw or announce directly.

The module exports:
    TracingService: Template store plus session behind pointer-event
        methods.

Example usage:
    Load a glyph and trace it::

        from tracing_lib.api import TracingService

        service = TracingService()
        service.load_glyph('L', ['M 10 10 V 90', 'M 10 90 H 60'], 640, 480)
        service.pointer_down(120, 80)
"""

from .services import TracingService

__all__ = ['TracingService']

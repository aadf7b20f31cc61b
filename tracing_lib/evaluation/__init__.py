"""Tracing evaluation.

The module exports:
    is_near: Single-point proximity test against a template stroke.
    ProximityIndex: Reusable KD-tree over a sampled template stroke.
    evaluate: Boolean stroke correctness check.
    evaluate_stroke: Correctness check returning a StrokeVerdict.
    StrokeEvaluator: Evaluator bound to a TracingConfig.

Example usage:
    Live feedback and final judgment::

        from tracing_lib.evaluation import ProximityIndex, evaluate

        index = ProximityIndex(template_stroke)
        live_ok = index.is_near((120, 48), threshold=50)

        passed = evaluate(user_points, template_stroke)
"""

from .correctness import StrokeEvaluator, StrokeVerdict, VerdictReason, evaluate, evaluate_stroke
from .proximity import ProximityIndex, is_near

__all__ = [
    'is_near', 'ProximityIndex',
    'evaluate', 'evaluate_stroke', 'StrokeEvaluator', 'StrokeVerdict', 'VerdictReason',
]

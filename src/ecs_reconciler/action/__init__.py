"""Input loading and output reporting around the reconciliation engine."""

from ecs_reconciler.action.loader import load_request, parse_spec
from ecs_reconciler.action.report import post_outputs, print_result, service_json

__all__ = [
    "load_request",
    "parse_spec",
    "post_outputs",
    "print_result",
    "service_json",
]

# Conditional edges
from .error_handler import route_on_error, mark_failed

__all__ = [
    "route_on_error",
    "mark_failed",
]

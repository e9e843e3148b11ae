"""
Error Handling Edges
Conditional routing logic for failed workflow steps.
"""

import logging
from datetime import datetime
from typing import Literal, Dict, Any

logger = logging.getLogger(__name__)


def route_on_error(state: Dict[str, Any]) -> Literal["continue", "fail"]:
    """
    Route to the next step unless the previous node recorded an error.

    Args:
        state: Current workflow state

    Returns:
        "continue" or "fail"
    """
    last_error = state.get("last_error")
    if last_error:
        logger.debug(f"Routing to failure: {last_error}")
        return "fail"
    return "continue"


def mark_failed(state: Dict[str, Any]) -> dict:
    """
    Mark the run as failed.

    Args:
        state: Current workflow state

    Returns:
        State updates with status and end_time
    """
    logger.error(f"Workflow failed: {state.get('last_error', 'Unknown error')}")
    return {
        "status": "failed",
        "end_time": datetime.now().isoformat(),
    }

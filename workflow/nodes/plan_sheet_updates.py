"""
Node 3: Spreadsheet Update Planning
Turns extracted prices into cell writes for the calculator sheet.
"""

import logging
from datetime import datetime
from typing import Dict, Any

from ..state import ComexState

logger = logging.getLogger(__name__)


def plan_sheet_updates_node(state: ComexState) -> Dict[str, Any]:
    """
    Build one cell write per price entry, in extraction order.

    Args:
        state: Current workflow state

    Returns:
        State updates with cell_updates, status, end_time
    """
    from parsers.sheet_updates import build_cell_updates

    entries = state.get("price_entries") or []
    tab = state.get("sheet_tab") or "Calculator"

    updates = build_cell_updates(entries, tab)
    logger.info(f"Planned {len(updates)} cell updates on tab '{tab}'")

    return {
        "cell_updates": updates,
        "status": "completed",
        "end_time": datetime.now().isoformat(),
    }

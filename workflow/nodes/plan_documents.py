"""
Node 3: Contract Document Planning
Builds template fill plans and output bundles for the delivery batch.
"""

import logging
from datetime import datetime
from typing import Dict, Any

from ..state import DeliveryState

logger = logging.getLogger(__name__)


def plan_documents_node(state: DeliveryState) -> Dict[str, Any]:
    """
    Plan one contract PDF per row and route them into FOB / non-FOB bundles.

    Args:
        state: Current workflow state

    Returns:
        State updates with document_set, status, end_time
    """
    from parsers.contract_documents import plan_documents

    batch = state["batch"]
    document_set = plan_documents(batch, state.get("layout"))

    return {
        "document_set": document_set,
        "status": "completed",
        "end_time": datetime.now().isoformat(),
    }

"""
Node 2: Delivery Transformation
Applies the delivery business rules to the CSV export.
"""

import logging
from typing import Dict, Any

from ..state import DeliveryState

logger = logging.getLogger(__name__)


def transform_delivery_node(state: DeliveryState) -> Dict[str, Any]:
    """
    Tokenize and transform the delivery CSV.

    Args:
        state: Current workflow state

    Returns:
        State updates with batch, or last_error
    """
    from parsers.delivery_transformer import parse_delivery_csv
    from parsers.errors import SchemaError

    try:
        batch = parse_delivery_csv(
            state.get("csv_text") or "",
            state.get("current_date"),
            state.get("recipient_email") or "",
        )
    except SchemaError as e:
        logger.error(f"Invalid delivery CSV: {e}")
        return {"last_error": str(e), "batch": None}

    for warning in batch.skipped:
        logger.debug(f"Skipped row {warning}")

    if not batch.rows:
        logger.warning("No valid rows found in CSV")
        return {"batch": batch, "last_error": "No valid rows found in CSV"}

    return {"batch": batch, "last_error": None}

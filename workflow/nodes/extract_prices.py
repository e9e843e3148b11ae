"""
Node 2: Price Extraction
Finds material prices in the price sheet text.
"""

import logging
from typing import Dict, Any

from ..state import ComexState

logger = logging.getLogger(__name__)


def extract_prices_node(state: ComexState) -> Dict[str, Any]:
    """
    Extract deduplicated material prices from document text.

    A document without any recognizable prices is not an error; it simply
    yields no entries.

    Args:
        state: Current workflow state

    Returns:
        State updates with price_entries, skipped_lines, or last_error
    """
    text = state.get("document_text") or ""
    catalog_path = state.get("catalog_path")
    threshold = state.get("similarity_threshold", 0.85)

    try:
        from parsers.material_catalog import load_catalog
        from parsers.price_extractor import PriceExtractor

        catalog = load_catalog(catalog_path)
        extractor = PriceExtractor(catalog, threshold=threshold)
        result = extractor.extract_report(text)

    except Exception as e:
        logger.error(f"Price extraction failed: {e}")
        return {
            "last_error": f"Price extraction failed: {str(e)}",
            "price_entries": [],
        }

    if not result.entries:
        logger.warning("No material prices found in document")

    for entry in result.entries:
        logger.info(f"Matched: {entry.material} -> {entry.price} -> {entry.cell_reference}")

    return {
        "price_entries": result.entries,
        "skipped_lines": result.warnings,
        "last_error": None,
    }

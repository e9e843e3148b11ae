"""
LangGraph Workflow Definitions
Wires together nodes and edges for the Comex and delivery workflows.
"""

import logging
from typing import Dict, Any, Optional

from langgraph.graph import StateGraph, END

from .state import (
    ComexState,
    DeliveryState,
    create_initial_comex_state,
    create_initial_delivery_state,
)
from .nodes import (
    read_document_node,
    read_delivery_csv_node,
    extract_prices_node,
    plan_sheet_updates_node,
    transform_delivery_node,
    plan_documents_node,
)
from .edges import route_on_error, mark_failed

logger = logging.getLogger(__name__)


def create_comex_graph():
    """
    Create the Comex price sheet workflow.

    Graph structure:
    ```
    read_document
        │ continue        │ fail
        ▼                 ▼
    extract_prices    mark_failed
        │ continue        │
        ▼                 │
    plan_sheet_updates    │
        │                 │
        ▼                 ▼
       END               END
    ```

    Returns:
        Compiled StateGraph
    """
    workflow = StateGraph(ComexState)

    workflow.add_node("read_document", read_document_node)
    workflow.add_node("extract_prices", extract_prices_node)
    workflow.add_node("plan_sheet_updates", plan_sheet_updates_node)
    workflow.add_node("mark_failed", mark_failed)

    workflow.set_entry_point("read_document")

    workflow.add_conditional_edges(
        "read_document",
        route_on_error,
        {
            "continue": "extract_prices",
            "fail": "mark_failed"
        }
    )
    workflow.add_conditional_edges(
        "extract_prices",
        route_on_error,
        {
            "continue": "plan_sheet_updates",
            "fail": "mark_failed"
        }
    )

    workflow.add_edge("plan_sheet_updates", END)
    workflow.add_edge("mark_failed", END)

    return workflow.compile()


def create_delivery_graph():
    """
    Create the delivery contract workflow.

    Graph structure:
    ```
    read_delivery_csv ──fail──┐
        │ continue            │
        ▼                     │
    transform_delivery ──fail─┤
        │ continue            ▼
        ▼                 mark_failed
    plan_documents            │
        │                     │
        ▼                     ▼
       END                   END
    ```

    Returns:
        Compiled StateGraph
    """
    workflow = StateGraph(DeliveryState)

    workflow.add_node("read_delivery_csv", read_delivery_csv_node)
    workflow.add_node("transform_delivery", transform_delivery_node)
    workflow.add_node("plan_documents", plan_documents_node)
    workflow.add_node("mark_failed", mark_failed)

    workflow.set_entry_point("read_delivery_csv")

    workflow.add_conditional_edges(
        "read_delivery_csv",
        route_on_error,
        {
            "continue": "transform_delivery",
            "fail": "mark_failed"
        }
    )
    workflow.add_conditional_edges(
        "transform_delivery",
        route_on_error,
        {
            "continue": "plan_documents",
            "fail": "mark_failed"
        }
    )

    workflow.add_edge("plan_documents", END)
    workflow.add_edge("mark_failed", END)

    return workflow.compile()


def run_comex_workflow(
    document_path: str = None,
    document_text: str = None,
    sheet_tab: str = "Calculator",
    similarity_threshold: float = 0.85,
    catalog_path: Optional[str] = None,
    recipient_email: Optional[str] = None,
    subject_query: str = "comex"
) -> Dict[str, Any]:
    """
    Run the Comex workflow.

    Args:
        document_path: Price sheet PDF or text file
        document_text: Raw price sheet text (used instead of document_path)
        sheet_tab: Spreadsheet tab for the cell writes
        similarity_threshold: Fuzzy material match threshold
        catalog_path: Optional catalog CSV override
        recipient_email: Who should receive the exported sheet
        subject_query: Subject text a .eml input must contain

    Returns:
        Final workflow state with price_entries and cell_updates
    """
    graph = create_comex_graph()

    initial_state = create_initial_comex_state(
        document_path=document_path,
        document_text=document_text,
        sheet_tab=sheet_tab,
        similarity_threshold=similarity_threshold,
        catalog_path=catalog_path,
        recipient_email=recipient_email,
        subject_query=subject_query
    )

    logger.info(f"Starting Comex workflow: {document_path or '<text>'}")

    try:
        final_state = graph.invoke(initial_state)
        logger.info(f"Comex workflow finished: {final_state.get('status')}")
        return final_state
    except Exception as e:
        logger.error(f"Workflow failed: {e}")
        raise


def run_delivery_workflow(
    csv_path: str = None,
    csv_text: str = None,
    current_date: str = None,
    recipient_email: str = "",
    layout: Any = None
) -> Dict[str, Any]:
    """
    Run the delivery contract workflow.

    Args:
        csv_path: Delivery CSV export
        csv_text: Raw CSV text (used instead of csv_path)
        current_date: ISO-8601 run date (defaults to now)
        recipient_email: Who should receive the bundles
        layout: Optional TemplateLayout

    Returns:
        Final workflow state with batch and document_set
    """
    graph = create_delivery_graph()

    initial_state = create_initial_delivery_state(
        csv_path=csv_path,
        csv_text=csv_text,
        current_date=current_date,
        recipient_email=recipient_email,
        layout=layout
    )

    logger.info(f"Starting delivery workflow: {csv_path or '<text>'}")

    try:
        final_state = graph.invoke(initial_state)
        logger.info(f"Delivery workflow finished: {final_state.get('status')}")
        return final_state
    except Exception as e:
        logger.error(f"Workflow failed: {e}")
        raise


def get_workflow_visualization() -> str:
    """
    Get ASCII visualization of the workflow graphs.

    Returns:
        ASCII art representation of both graphs
    """
    return """
    Comex Price Sheet Workflow
    ==========================

        ┌───────────────┐
        │ read_document │  (PDF, text or .eml)
        └───────┬───────┘
                │
        ┌───────▼────────┐
        │ extract_prices │  (same-line → next-line → inline)
        └───────┬────────┘
                │
     ┌──────────▼─────────┐
     │ plan_sheet_updates │  (Tab!Cell ← price)
     └──────────┬─────────┘
                ▼
              END

    Delivery Contract Workflow
    ==========================

      ┌───────────────────┐
      │ read_delivery_csv │
      └─────────┬─────────┘
                │
     ┌──────────▼─────────┐
     │ transform_delivery │  (carry-forward, FOB, lookups)
     └──────────┬─────────┘
                │
      ┌─────────▼──────┐
      │ plan_documents │  (K&L.zip / K&L(FOB).zip)
      └─────────┬──────┘
                ▼
              END

    Any step that records last_error routes to mark_failed → END.
    """

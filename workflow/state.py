"""
Workflow State Schemas for yard paperwork processing
Defines the state that flows through the LangGraph workflows.
"""

from typing import TypedDict, List, Optional, Any
from datetime import datetime


class ComexState(TypedDict):
    """
    State schema for the Comex price sheet workflow.

    read_document -> extract_prices -> plan_sheet_updates
    """

    # ========================
    # Input Configuration
    # ========================
    document_path: Optional[str]       # PDF or text file with the price sheet
    document_text: Optional[str]       # Raw text (skips reading when given)
    sheet_tab: str                     # Spreadsheet tab to write prices into
    similarity_threshold: float        # Fuzzy material match threshold
    catalog_path: Optional[str]        # Optional catalog CSV override
    recipient_email: Optional[str]     # Who gets the exported sheet (defaults to the email sender)
    subject_query: str                 # Required subject text for .eml inputs

    # ========================
    # Results
    # ========================
    price_entries: Optional[List[Any]]     # PriceEntry list
    skipped_lines: Optional[List[Any]]     # ParseWarning list
    cell_updates: Optional[List[Any]]      # CellUpdate list

    # ========================
    # Status
    # ========================
    status: str                        # "pending", "completed" or "failed"
    last_error: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]


class DeliveryState(TypedDict):
    """
    State schema for the delivery contract workflow.

    read_delivery_csv -> transform_delivery -> plan_documents
    """

    # ========================
    # Input Configuration
    # ========================
    csv_path: Optional[str]            # Delivery CSV export
    csv_text: Optional[str]            # Raw CSV (skips reading when given)
    current_date: str                  # ISO-8601 run date
    recipient_email: str               # Who gets the bundles
    layout: Optional[Any]              # TemplateLayout

    # ========================
    # Results
    # ========================
    batch: Optional[Any]               # DeliveryBatch
    document_set: Optional[Any]        # DocumentSet (plans + bundles)

    # ========================
    # Status
    # ========================
    status: str
    last_error: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]


def create_initial_comex_state(
    document_path: str = None,
    document_text: str = None,
    sheet_tab: str = "Calculator",
    similarity_threshold: float = 0.85,
    catalog_path: str = None,
    recipient_email: str = None,
    subject_query: str = "comex"
) -> ComexState:
    """
    Create initial state for a Comex workflow run.

    Either document_path or document_text must be given.
    """
    return ComexState(
        document_path=document_path,
        document_text=document_text,
        sheet_tab=sheet_tab,
        similarity_threshold=similarity_threshold,
        catalog_path=catalog_path,
        recipient_email=recipient_email,
        subject_query=subject_query,
        price_entries=None,
        skipped_lines=None,
        cell_updates=None,
        status="pending",
        last_error=None,
        start_time=datetime.now().isoformat(),
        end_time=None
    )


def create_initial_delivery_state(
    csv_path: str = None,
    csv_text: str = None,
    current_date: str = None,
    recipient_email: str = "",
    layout: Any = None
) -> DeliveryState:
    """
    Create initial state for a delivery workflow run.

    current_date defaults to now.
    """
    return DeliveryState(
        csv_path=csv_path,
        csv_text=csv_text,
        current_date=current_date or datetime.now().isoformat(),
        recipient_email=recipient_email,
        layout=layout,
        batch=None,
        document_set=None,
        status="pending",
        last_error=None,
        start_time=datetime.now().isoformat(),
        end_time=None
    )

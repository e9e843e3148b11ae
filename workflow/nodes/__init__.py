# Workflow nodes
from .read_document import read_document_node, read_delivery_csv_node
from .extract_prices import extract_prices_node
from .plan_sheet_updates import plan_sheet_updates_node
from .transform_delivery import transform_delivery_node
from .plan_documents import plan_documents_node

__all__ = [
    "read_document_node",
    "read_delivery_csv_node",
    "extract_prices_node",
    "plan_sheet_updates_node",
    "transform_delivery_node",
    "plan_documents_node",
]

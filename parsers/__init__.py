# Yard paperwork parsers
from .errors import SchemaError, ParseWarning
from .material_catalog import MaterialCatalog, MaterialCatalogEntry, load_catalog
from .similarity import edit_distance, similarity, find_best_match, SIMILARITY_THRESHOLD
from .price_extractor import PriceEntry, PriceExtractor, extract_prices, normalize_price
from .csv_tokenizer import tokenize
from .delivery_transformer import DeliveryRow, DeliveryBatch, transform, parse_delivery_csv
from .sheet_updates import CellUpdate, build_cell_updates, build_batch_update_body
from .contract_documents import DocumentPlan, BundlePlan, plan_documents, pack_bundle

__all__ = [
    "SchemaError",
    "ParseWarning",
    "MaterialCatalog",
    "MaterialCatalogEntry",
    "load_catalog",
    "edit_distance",
    "similarity",
    "find_best_match",
    "SIMILARITY_THRESHOLD",
    "PriceEntry",
    "PriceExtractor",
    "extract_prices",
    "normalize_price",
    "tokenize",
    "DeliveryRow",
    "DeliveryBatch",
    "transform",
    "parse_delivery_csv",
    "CellUpdate",
    "build_cell_updates",
    "build_batch_update_body",
    "DocumentPlan",
    "BundlePlan",
    "plan_documents",
    "pack_bundle",
]

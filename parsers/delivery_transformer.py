"""
Delivery Transformer - business rules for delivery contract CSV exports

Turns tokenized CSV rows into DeliveryRow records:
- resolves the four required columns by header keywords
- carries contract and reference forward over blank cells
- normalizes material numbers and classifies rows as FOB / non-FOB
- numbers FOB and non-FOB rows independently (data_1, data_2, ...)
- maps descriptions to grade descriptions, file names and stamp coordinates
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from .csv_tokenizer import tokenize
from .errors import ParseWarning, SchemaError
from .lookup_tables import (
    TIN_CAN_BUNDLE_FILE_NAME,
    TIN_CAN_BUNDLE_GRADE,
    TIN_CAN_BUNDLE_REFERENCE,
    Coordinate,
    lookup_coordinate,
    lookup_file_name,
    lookup_grade_description,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

FOB_MARKER = 'FOB'
FOB_FILE_PREFIX = 'FOB '

# field name -> keywords that must all appear in the lower-cased header
REQUIRED_COLUMNS = {
    'contract': ('contract',),
    'material_number': ('material', 'number'),
    'material_description': ('material', 'description'),
    'reference': ('reference',),
}


@dataclass
class DeliveryRow:
    """One delivery contract line, ready for template filling."""
    month: str
    contract: str
    material_number: str
    material_description: str
    reference: str
    fob: str                # "yes" or "no"
    sequence_id: str        # "data_N", numbered per FOB class
    file_name: str
    grade_description: str
    coordinate: Optional[Coordinate] = None

    @property
    def is_fob(self) -> bool:
        return self.fob == 'yes'

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "month": self.month,
            "contract": self.contract,
            "material_number": self.material_number,
            "material_description": self.material_description,
            "reference": self.reference,
            "fob": self.fob,
            "sequence_id": self.sequence_id,
            "file_name": self.file_name,
            "grade_description": self.grade_description,
        }
        if self.coordinate is not None:
            data["x"] = self.coordinate.x
            data["y"] = self.coordinate.y
        return data


@dataclass
class DeliveryBatch:
    """All rows of one CSV plus the per-class sequence id lists."""
    rows: List[DeliveryRow]
    fob_sequence_ids: List[str]
    non_fob_sequence_ids: List[str]
    recipient_email: str
    skipped: List[ParseWarning] = field(default_factory=list)

    @property
    def fob_rows(self) -> List[DeliveryRow]:
        return [row for row in self.rows if row.is_fob]

    @property
    def non_fob_rows(self) -> List[DeliveryRow]:
        return [row for row in self.rows if not row.is_fob]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": [row.to_dict() for row in self.rows],
            "file_list_fob": ",".join(self.fob_sequence_ids),
            "file_list_non_fob": ",".join(self.non_fob_sequence_ids),
            "email": self.recipient_email,
        }


def normalize_material_number(material_number: str) -> str:
    """
    Remove leading zeros that come before the first '5'.

    "0050000246" -> "50000246". Numbers without a '5' are returned unchanged.
    """
    first_five = material_number.find('5')
    if first_five == -1:
        return material_number
    return material_number[:first_five].lstrip('0') + material_number[first_five:]


def month_name(current_date: Union[str, date, datetime]) -> str:
    """English month name for an ISO-8601 date string, date or datetime."""
    if isinstance(current_date, (date, datetime)):
        return MONTH_NAMES[current_date.month - 1]

    text = (current_date or '').strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise SchemaError(f"Invalid current date: {current_date!r}")
    return MONTH_NAMES[parsed.month - 1]


def resolve_columns(header: Sequence[str]) -> Dict[str, int]:
    """
    Find the index of each required column.

    Raises:
        SchemaError: if any required column is missing
    """
    lowered = [h.strip().lower() for h in header]
    indices = {}

    for field_name, keywords in REQUIRED_COLUMNS.items():
        for idx, name in enumerate(lowered):
            if all(kw in name for kw in keywords):
                indices[field_name] = idx
                break

    missing = [name for name in REQUIRED_COLUMNS if name not in indices]
    if missing:
        raise SchemaError(
            "CSV must contain columns: contract, material number, "
            f"material description, reference (missing: {', '.join(missing)})"
        )
    return indices


def is_tin_can_bundle(reference: str) -> bool:
    return reference.strip().upper() == TIN_CAN_BUNDLE_REFERENCE


def transform(
    rows: Sequence[Sequence[str]],
    current_date: Union[str, date, datetime],
    recipient_email: str
) -> DeliveryBatch:
    """
    Apply the delivery business rules to tokenized CSV rows.

    Args:
        rows: Header row followed by data rows (see parsers.csv_tokenizer)
        current_date: Run date; its month is stamped on every row
        recipient_email: Where the generated bundles should be sent

    Returns:
        DeliveryBatch with rows in input order

    Raises:
        SchemaError: fewer than 2 rows, missing columns, or invalid date
    """
    if len(rows) < 2:
        raise SchemaError("CSV must have at least a header row and one data row")

    columns = resolve_columns(rows[0])
    min_fields = max(columns.values()) + 1
    month = month_name(current_date)

    table: List[DeliveryRow] = []
    skipped: List[ParseWarning] = []
    last_contract = ''
    last_reference = ''
    fob_count = 0
    non_fob_count = 0

    for row_number, row in enumerate(rows[1:], start=2):
        if len(row) < min_fields:
            logger.debug(f"Skipping incomplete row {row_number}: {row}")
            skipped.append(ParseWarning(row_number, "incomplete_row", ",".join(row)))
            continue

        contract = row[columns['contract']].strip()
        material_number = row[columns['material_number']].strip()
        material_description = row[columns['material_description']].strip()
        reference = row[columns['reference']].strip()

        if contract:
            last_contract = contract
        else:
            contract = last_contract

        if reference:
            last_reference = reference
        else:
            reference = last_reference

        fob = 'yes' if FOB_MARKER in reference.upper() else 'no'
        if fob == 'yes':
            fob_count += 1
            sequence_id = f"data_{fob_count}"
        else:
            non_fob_count += 1
            sequence_id = f"data_{non_fob_count}"

        if is_tin_can_bundle(reference):
            grade_description = TIN_CAN_BUNDLE_GRADE
            file_name = TIN_CAN_BUNDLE_FILE_NAME
        else:
            grade_description = lookup_grade_description(material_description)
            file_name = lookup_file_name(material_description)

        if fob == 'yes' and not file_name.startswith(FOB_FILE_PREFIX):
            file_name = FOB_FILE_PREFIX + file_name

        normalized_number = normalize_material_number(material_number)

        table.append(DeliveryRow(
            month=month,
            contract=contract,
            material_number=normalized_number,
            material_description=material_description,
            reference=reference,
            fob=fob,
            sequence_id=sequence_id,
            file_name=file_name,
            grade_description=grade_description,
            coordinate=lookup_coordinate(normalized_number),
        ))

    batch = DeliveryBatch(
        rows=table,
        fob_sequence_ids=[r.sequence_id for r in table if r.fob == 'yes'],
        non_fob_sequence_ids=[r.sequence_id for r in table if r.fob == 'no'],
        recipient_email=recipient_email,
        skipped=skipped,
    )

    logger.info(
        f"Transformed {len(table)} delivery rows "
        f"({len(batch.fob_sequence_ids)} FOB, {len(batch.non_fob_sequence_ids)} non-FOB, "
        f"{len(skipped)} skipped)"
    )
    return batch


def parse_delivery_csv(
    csv_text: str,
    current_date: Union[str, date, datetime],
    recipient_email: str
) -> DeliveryBatch:
    """Tokenize CSV text and apply the delivery business rules."""
    return transform(tokenize(csv_text), current_date, recipient_email)

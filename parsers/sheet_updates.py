"""
Spreadsheet write instructions for extracted prices.

Each PriceEntry becomes one cell write on the calculator tab, in extractor
output order. The request body follows the Sheets values.batchUpdate shape;
sending it is up to the caller.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from .price_extractor import PriceEntry

DEFAULT_TAB = 'Calculator'
VALUE_INPUT_OPTION = 'USER_ENTERED'


@dataclass(frozen=True)
class CellUpdate:
    """A single-cell write, e.g. range "Calculator!B3"."""
    range: str
    value: Decimal
    material: str = ""

    def to_value_range(self) -> Dict[str, Any]:
        # USER_ENTERED parses the string back into a number
        return {"range": self.range, "values": [[str(self.value)]]}


def a1_range(tab: str, cell: str) -> str:
    """Build an A1 range, quoting tab names that contain anything but letters, digits and _."""
    if tab and not tab.replace('_', '').isalnum():
        tab = "'" + tab.replace("'", "''") + "'"
    return f"{tab}!{cell}" if tab else cell


def build_cell_updates(entries: Iterable[PriceEntry], tab: str = DEFAULT_TAB) -> List[CellUpdate]:
    """Turn price entries into cell writes, keeping entry order."""
    return [
        CellUpdate(range=a1_range(tab, entry.cell_reference), value=entry.price, material=entry.material)
        for entry in entries
    ]


def build_batch_update_body(updates: Iterable[CellUpdate]) -> Dict[str, Any]:
    """Request body for a single batch write of all updates."""
    return {
        "valueInputOption": VALUE_INPUT_OPTION,
        "data": [update.to_value_range() for update in updates],
    }

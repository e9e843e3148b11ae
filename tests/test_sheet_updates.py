"""
Tests for spreadsheet cell updates built from extracted prices.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parsers.price_extractor import PriceEntry
from parsers.sheet_updates import (
    CellUpdate, a1_range, build_cell_updates, build_batch_update_body, DEFAULT_TAB
)


class TestA1Range:

    def test_plain_tab(self):
        assert a1_range("Calculator", "B3") == "Calculator!B3"

    def test_tab_with_spaces_is_quoted(self):
        assert a1_range("Price Sheet", "B3") == "'Price Sheet'!B3"

    def test_tab_with_apostrophe(self):
        assert a1_range("Bob's", "B3") == "'Bob''s'!B3"

    def test_no_tab(self):
        assert a1_range("", "B3") == "B3"


class TestBuildCellUpdates:

    def test_one_update_per_entry_in_order(self):
        entries = [
            PriceEntry("Aluminum Cans", Decimal("0.79"), "B3"),
            PriceEntry("Bare Bright Copper", Decimal("3.25"), "B23"),
        ]
        updates = build_cell_updates(entries)

        assert DEFAULT_TAB == "Calculator"
        assert updates == [
            CellUpdate("Calculator!B3", Decimal("0.79"), "Aluminum Cans"),
            CellUpdate("Calculator!B23", Decimal("3.25"), "Bare Bright Copper"),
        ]

    def test_custom_tab(self):
        updates = build_cell_updates([PriceEntry("Red Brass", Decimal("2.10"), "B30")], "Prices")
        assert updates[0].range == "Prices!B30"

    def test_batch_body(self):
        body = build_batch_update_body([CellUpdate("Calculator!B3", Decimal("0.79"))])

        assert body == {
            "valueInputOption": "USER_ENTERED",
            "data": [{"range": "Calculator!B3", "values": [["0.79"]]}],
        }

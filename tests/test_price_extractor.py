"""
Tests for Price Extractor

Tests price normalization, each line strategy, and deduplication.
"""

import pytest
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parsers.material_catalog import load_catalog
from parsers.price_extractor import (
    PriceEntry, PriceExtractor, PriceCandidate, extract_prices,
    normalize_price, preprocess_lines, deduplicate_candidates,
    SameLinePrice, NextLinePrice, InlinePrice
)
from parsers.similarity import find_best_match


@pytest.fixture
def resolve():
    catalog = load_catalog()
    return lambda text: find_best_match(text, catalog)


class TestNormalizePrice:
    """Tests for loose price parsing."""

    def test_plain(self):
        assert normalize_price("0.79") == Decimal("0.79")

    def test_currency_and_thousands(self):
        assert normalize_price("$1,234.50") == Decimal("1234.50")

    def test_extra_dots_removed(self):
        assert normalize_price("1.2.3") == Decimal("1.23")

    def test_nothing_numeric(self):
        assert normalize_price("$") is None
        assert normalize_price("abc") is None


class TestPreprocessLines:

    def test_blank_lines_dropped(self):
        assert preprocess_lines("a\n\n  \nb") == ["a", "b"]

    def test_whitespace_collapsed_per_line(self):
        assert preprocess_lines("  Red   Brass\t 2.10 \r\nHard Brass") == [
            "Red Brass 2.10", "Hard Brass"
        ]

    def test_empty(self):
        assert preprocess_lines("") == []


class TestStrategies:
    """Each strategy on its own."""

    def test_same_line_with_dollar(self, resolve):
        hit = SameLinePrice().match(["Aluminum Cans $0.79"], 0, resolve)
        assert hit.entry.cell_reference == "B3"
        assert hit.price == Decimal("0.79")
        assert hit.lines_consumed == 1

    def test_same_line_with_colon(self, resolve):
        hit = SameLinePrice().match(["Bare Bright Copper: 3.25"], 0, resolve)
        assert hit.entry.material_name == "Bare Bright Copper"
        assert hit.price == Decimal("3.25")

    def test_same_line_unknown_material(self, resolve):
        assert SameLinePrice().match(["Scale fee $5.00"], 0, resolve) is None

    def test_same_line_zero_price_rejected(self, resolve):
        assert SameLinePrice().match(["Aluminum Cans $0"], 0, resolve) is None

    def test_next_line(self, resolve):
        hit = NextLinePrice().match(["Heater Core", "$1.20"], 0, resolve)
        assert hit.entry.cell_reference == "B34"
        assert hit.price == Decimal("1.20")
        assert hit.lines_consumed == 2

    def test_next_line_needs_bare_price(self, resolve):
        assert NextLinePrice().match(["Heater Core", "1.20 per lb"], 0, resolve) is None

    def test_next_line_at_end(self, resolve):
        assert NextLinePrice().match(["Heater Core"], 0, resolve) is None

    def test_inline(self, resolve):
        hit = InlinePrice().match(["Aluminum Cans 0.79 per lb (was 0.75)"], 0, resolve)
        assert hit.entry.material_name == "Aluminum Cans"
        assert hit.price == Decimal("0.79")

    def test_inline_joins_short_prefix_with_previous_line(self, resolve):
        hit = InlinePrice().match(["Heater", "Core 1.20 / lb"], 1, resolve)
        assert hit.entry.material_name == "Heater Core"
        assert hit.price == Decimal("1.20")

    def test_inline_price_limit(self, resolve):
        assert InlinePrice().match(["Aluminum Cans 1500 lbs"], 0, resolve) is None

    def test_inline_takes_one_price_per_line(self, resolve):
        hit = InlinePrice().match(["Red Brass 2.10 x Hard Brass 1.90 x"], 0, resolve)
        assert hit.entry.material_name == "Red Brass"
        assert hit.price == Decimal("2.10")


class TestPriceExtractor:
    """End-to-end extraction over document text."""

    def test_two_line_document(self):
        entries = extract_prices("Aluminum Cans $0.79\nBare Bright Copper: 3.25\n")

        assert entries == [
            PriceEntry("Aluminum Cans", Decimal("0.79"), "B3"),
            PriceEntry("Bare Bright Copper", Decimal("3.25"), "B23"),
        ]

    def test_last_mention_wins(self):
        entries = extract_prices("Aluminum Cans $0.70\nAluminum Cans $0.79")

        assert len(entries) == 1
        assert entries[0].price == Decimal("0.79")

    def test_mixed_layouts(self):
        text = (
            "COMEX PRICING\n"
            "Red Brass 2.10\n"
            "Heater Core\n"
            "1.20\n"
            "Aluminum Cans 0.79 per lb (was 0.75)\n"
        )
        entries = extract_prices(text)

        assert {e.cell_reference: e.price for e in entries} == {
            "B30": Decimal("2.10"),
            "B34": Decimal("1.20"),
            "B3": Decimal("0.79"),
        }

    def test_empty_text(self):
        assert extract_prices("") == []

    def test_one_entry_per_line(self):
        """A second material later on the same line is not picked up."""
        entries = extract_prices("Red Brass 2.10 Hard Brass 1.90")

        assert entries == [PriceEntry("Red Brass", Decimal("2.10"), "B30")]

    def test_report_keeps_candidates_and_skipped_lines(self):
        extractor = PriceExtractor()
        result = extractor.extract_report("Yard prices\nRed Brass 2.10\nRed Brass 2.20")

        assert len(result.candidates) == 2
        assert [c.strategy for c in result.candidates] == ["same_line", "same_line"]
        assert len(result.entries) == 1
        assert result.entries[0].price == Decimal("2.20")
        assert len(result.warnings) == 1
        assert result.warnings[0].location == 1

    def test_custom_strategies(self):
        """Only the configured strategies are tried."""
        extractor = PriceExtractor(strategies=[NextLinePrice()])
        assert extractor.extract("Red Brass 2.10") == []
        assert len(extractor.extract("Red Brass\n2.10")) == 1

    def test_to_dict(self):
        entry = PriceEntry("Red Brass", Decimal("2.10"), "B30")
        assert entry.to_dict() == {"material": "Red Brass", "price": "2.10", "cell_reference": "B30"}


class TestDeduplication:

    def test_first_seen_order_last_value(self):
        candidates = [
            PriceCandidate(1, "same_line", "Red Brass", Decimal("2.10"), "B30", ""),
            PriceCandidate(2, "same_line", "Hard Brass", Decimal("1.90"), "B31", ""),
            PriceCandidate(3, "inline", "Red Brass", Decimal("2.25"), "B30", ""),
        ]
        entries = deduplicate_candidates(candidates)

        assert [e.material for e in entries] == ["Red Brass", "Hard Brass"]
        assert entries[0].price == Decimal("2.25")

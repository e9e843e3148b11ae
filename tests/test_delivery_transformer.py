"""
Tests for Delivery Transformer

Tests column resolution, carry-forward, FOB numbering, and lookups.
"""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parsers.csv_tokenizer import tokenize
from parsers.delivery_transformer import (
    normalize_material_number, month_name, resolve_columns,
    transform, parse_delivery_csv
)
from parsers.errors import SchemaError
from parsers.lookup_tables import Coordinate, lookup_grade_description, lookup_file_name


HEADER = "Contract,Material Number,Material Description,Reference"
RUN_DATE = "2024-03-15T10:00:00Z"


def make_csv(*lines):
    return "\n".join((HEADER,) + lines)


class TestNormalizeMaterialNumber:

    def test_leading_zeros_removed(self):
        assert normalize_material_number("0050000246") == "50000246"

    def test_already_normal(self):
        assert normalize_material_number("50000246") == "50000246"

    def test_zeros_after_five_kept(self):
        assert normalize_material_number("500001") == "500001"

    def test_no_five(self):
        assert normalize_material_number("000123") == "000123"


class TestMonthName:

    def test_iso_with_z(self):
        assert month_name(RUN_DATE) == "March"

    def test_date_object(self):
        assert month_name(date(2024, 12, 1)) == "December"

    def test_invalid(self):
        with pytest.raises(SchemaError):
            month_name("not a date")


class TestResolveColumns:

    def test_any_order_any_case(self):
        columns = resolve_columns(["REFERENCE", "material description", "Contract No", "Material Number"])
        assert columns == {
            "contract": 2,
            "material_number": 3,
            "material_description": 1,
            "reference": 0,
        }

    def test_missing_column(self):
        with pytest.raises(SchemaError):
            resolve_columns(["Contract", "Material Number", "Reference"])


class TestLookups:

    def test_known_description(self):
        assert lookup_grade_description("1 HM") == "No.1 Heavy Melt / Short Iron"
        assert lookup_file_name("1 HM") == "#1 Heavy Melt"

    def test_unknown_description_passes_through(self):
        assert lookup_grade_description("MYSTERY") == "MYSTERY"
        assert lookup_file_name("MYSTERY") == "MYSTERY"


class TestTransform:
    """Tests for the delivery business rules."""

    def test_fob_numbering(self):
        """FOB and non-FOB rows are numbered independently."""
        batch = parse_delivery_csv(make_csv(
            "C1,0050000246,1 HM,FOB X",
            "C1,0050000242,2 HM,Y",
            "C2,0050000241,P&S,FOB Z",
        ), RUN_DATE, "office@example.com")

        assert [r.sequence_id for r in batch.rows] == ["data_1", "data_1", "data_2"]
        assert [r.fob for r in batch.rows] == ["yes", "no", "yes"]
        assert batch.fob_sequence_ids == ["data_1", "data_2"]
        assert batch.non_fob_sequence_ids == ["data_1"]

    def test_carry_forward(self):
        """Blank contract and reference cells take the latest non-empty value above them."""
        batch = parse_delivery_csv(make_csv(
            "C1,0050000246,1 HM,FOB X",
            ",0050000242,2 HM,",
            "C2,0050000241,P&S,Y",
            ",0050000245,TURN,",
        ), RUN_DATE, "")

        assert [r.contract for r in batch.rows] == ["C1", "C1", "C2", "C2"]
        assert [r.reference for r in batch.rows] == ["FOB X", "FOB X", "Y", "Y"]

    def test_fob_follows_carried_reference(self):
        batch = parse_delivery_csv(make_csv(
            "C1,0050000246,1 HM,FOB X",
            ",0050000242,2 HM,",
            "C2,0050000241,P&S,Y",
            ",0050000245,TURN,",
        ), RUN_DATE, "")

        assert [r.fob for r in batch.rows] == ["yes", "yes", "no", "no"]
        assert [r.sequence_id for r in batch.rows] == ["data_1", "data_2", "data_1", "data_2"]
        assert batch.rows[1].file_name == "FOB #2 Heavy Melt"
        assert batch.rows[3].file_name == "Turn"

    def test_row_fields(self):
        batch = parse_delivery_csv(make_csv("C1,0050000246,1 HM,FOB X"), RUN_DATE, "")
        row = batch.rows[0]

        assert row.month == "March"
        assert row.material_number == "50000246"
        assert row.material_description == "1 HM"
        assert row.grade_description == "No.1 Heavy Melt / Short Iron"
        assert row.file_name == "FOB #1 Heavy Melt"
        assert row.coordinate == Coordinate(411.31, 678.86)

    def test_non_fob_file_name_unprefixed(self):
        batch = parse_delivery_csv(make_csv("C1,0050000242,2 HM,Y"), RUN_DATE, "")
        assert batch.rows[0].file_name == "#2 Heavy Melt"

    def test_unknown_material_number_has_no_coordinate(self):
        batch = parse_delivery_csv(make_csv("C1,0059999999,2 HM,Y"), RUN_DATE, "")
        row = batch.rows[0]

        assert row.coordinate is None
        assert "x" not in row.to_dict()

    def test_tin_can_bundle(self):
        batch = parse_delivery_csv(make_csv("C1,0050000246,SHD LOG,tin can bund"), RUN_DATE, "")
        row = batch.rows[0]

        assert row.fob == "no"
        assert row.grade_description == "Shredder Bundles"
        assert row.file_name == "Tin Can Bundles"

    def test_short_rows_skipped(self):
        batch = parse_delivery_csv(make_csv(
            "C1,0050000246",
            "C2,0050000242,2 HM,Y",
        ), RUN_DATE, "")

        assert len(batch.rows) == 1
        assert batch.rows[0].contract == "C2"
        assert batch.rows[0].sequence_id == "data_1"
        assert batch.skipped[0].location == 2

    def test_quoted_fields(self):
        csv_text = 'Contract,Material Number,Material Description,Reference\n"C,1",0050000246,"MIX 1 & 2",FOB'
        batch = parse_delivery_csv(csv_text, RUN_DATE, "")
        assert batch.rows[0].contract == "C,1"
        assert batch.rows[0].file_name == "FOB #1&2 Mix Short Iron"

    def test_header_only(self):
        with pytest.raises(SchemaError):
            parse_delivery_csv(HEADER, RUN_DATE, "")

    def test_missing_columns(self):
        with pytest.raises(SchemaError):
            transform(tokenize("Contract,Reference\nC1,FOB"), RUN_DATE, "")

    def test_invalid_date(self):
        with pytest.raises(SchemaError):
            parse_delivery_csv(make_csv("C1,0050000246,1 HM,FOB X"), "yesterday", "")

    def test_to_dict(self):
        batch = parse_delivery_csv(make_csv(
            "C1,0050000246,1 HM,FOB X",
            "C1,0050000242,2 HM,Y",
        ), RUN_DATE, "office@example.com")
        data = batch.to_dict()

        assert data["file_list_fob"] == "data_1"
        assert data["file_list_non_fob"] == "data_1"
        assert data["email"] == "office@example.com"
        assert data["table"][0]["x"] == 411.31
        assert data["table"][0]["fob"] == "yes"

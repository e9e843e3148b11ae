"""
Tests for YAML configuration loading and environment overrides.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import settings
from settings import load_config


@pytest.fixture
def no_default_config(monkeypatch, tmp_path):
    """Point the default search paths somewhere empty."""
    monkeypatch.setattr(settings, "default_search_paths", lambda: [tmp_path / "missing.yaml"])


class TestLoadConfig:

    def test_defaults(self, no_default_config):
        config = load_config(environ={})

        assert config.matching.similarity_threshold == 0.85
        assert config.matching.catalog_path is None
        assert config.sheets.tab == "Calculator"
        assert config.delivery.recipient_email == ""
        assert config.delivery.stamp_scale == 0.75
        assert config.delivery.fob_bundle_name == "K&L(FOB).zip"

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "yard.yaml"
        config_file.write_text(
            "sheets:\n"
            "  sheet_id: abc123\n"
            "  tab: Prices\n"
            "delivery:\n"
            "  recipient_email: office@example.com\n"
            "comex:\n"
        )
        config = load_config(str(config_file), environ={})

        assert config.sheets.sheet_id == "abc123"
        assert config.sheets.tab == "Prices"
        assert config.delivery.recipient_email == "office@example.com"
        assert config.comex.subject_query == "comex"

    def test_env_overrides_yaml(self, tmp_path):
        config_file = tmp_path / "yard.yaml"
        config_file.write_text("sheets:\n  tab: Prices\n")

        config = load_config(str(config_file), environ={
            "GOOGLE_SHEETS_TAB": "Calculator2",
            "DELIVERY_RECIPIENT_EMAIL": "dispatch@example.com",
            "SIMILARITY_THRESHOLD": "0.9",
        })

        assert config.sheets.tab == "Calculator2"
        assert config.delivery.recipient_email == "dispatch@example.com"
        assert config.matching.similarity_threshold == 0.9

    def test_invalid_env_value_ignored(self, no_default_config):
        config = load_config(environ={"SIMILARITY_THRESHOLD": "high"})
        assert config.matching.similarity_threshold == 0.85

    def test_default_search_path_used(self, monkeypatch, tmp_path):
        config_file = tmp_path / "found.yaml"
        config_file.write_text("comex:\n  recipient_email: buyer@example.com\n")
        monkeypatch.setattr(settings, "default_search_paths", lambda: [config_file])

        assert load_config(environ={}).comex.recipient_email == "buyer@example.com"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"), environ={})

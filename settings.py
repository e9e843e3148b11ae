"""Configuration loader for yard paperwork processing."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class MatchingConfig:
    similarity_threshold: float = 0.85
    catalog_path: Optional[str] = None      # CSV with Material,Cell columns


@dataclass
class SheetsConfig:
    sheet_id: str = ""
    tab: str = "Calculator"


@dataclass
class ComexConfig:
    recipient_email: str = ""
    subject_query: str = "comex"


@dataclass
class DeliveryConfig:
    recipient_email: str = ""
    fob_template: str = "fob.pdf"
    non_fob_template: str = "nonfob.pdf"
    stamp_image: str = "circle.png"
    stamp_scale: float = 0.75
    fob_bundle_name: str = "K&L(FOB).zip"
    non_fob_bundle_name: str = "K&L.zip"


@dataclass
class AppConfig:
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    sheets: SheetsConfig = field(default_factory=SheetsConfig)
    comex: ComexConfig = field(default_factory=ComexConfig)
    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)


# env var -> (section, key, type)
ENV_OVERRIDES = {
    'GOOGLE_SHEETS_ID': ('sheets', 'sheet_id', str),
    'GOOGLE_SHEETS_TAB': ('sheets', 'tab', str),
    'COMEX_RECIPIENT_EMAIL': ('comex', 'recipient_email', str),
    'DELIVERY_RECIPIENT_EMAIL': ('delivery', 'recipient_email', str),
    'SIMILARITY_THRESHOLD': ('matching', 'similarity_threshold', float),
    'MATERIAL_CATALOG_PATH': ('matching', 'catalog_path', str),
}


def default_search_paths():
    return [
        Path.cwd() / 'config' / 'yard_config.yaml',
        Path(__file__).parent / 'config' / 'yard_config.yaml',
        Path.home() / '.yard_paperwork' / 'config.yaml',
    ]


def _apply_env_overrides(config: AppConfig, environ: Dict[str, str]):
    for var, (section, key, cast) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        try:
            setattr(getattr(config, section), key, cast(value))
        except ValueError:
            logger.warning(f"Ignoring invalid {var}={value!r}")


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None
) -> AppConfig:
    """
    Load configuration from YAML, then apply environment overrides.

    Args:
        config_path: Path to config file. If None, looks in default locations
            and falls back to built-in defaults when none exists.
        environ: Environment mapping (defaults to os.environ)

    Returns:
        AppConfig object

    Raises:
        FileNotFoundError: if an explicit config_path does not exist
    """
    raw: Dict[str, Any] = {}

    if config_path is not None:
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for path in default_search_paths():
            if path.exists():
                config_path = str(path)
                break

    if config_path is not None:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        logger.debug(f"Loaded config from {config_path}")

    config = AppConfig(
        matching=MatchingConfig(**raw.get('matching') or {}),
        sheets=SheetsConfig(**raw.get('sheets') or {}),
        comex=ComexConfig(**raw.get('comex') or {}),
        delivery=DeliveryConfig(**raw.get('delivery') or {}),
    )

    _apply_env_overrides(config, os.environ if environ is None else environ)
    return config

"""
Central configuration for the purchase order extraction engine.

Thresholds, metadata labels and the buyer profile are defined here.
Override via environment variables or by passing a Config instance directly.

Settings priority (highest wins):
  1. Environment variables
  2. config/pipeline_settings.json  (admin-editable, persisted)
  3. Hardcoded defaults in this file

The buyer profile is organisation data, not document data.  It is read from
config/buyer.json when present and injected into the engine at construction.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from models.order import Buyer

logger = logging.getLogger(__name__)

# Project root (directory containing this file)
PROJECT_ROOT = Path(__file__).parent

DEFAULT_BUYER = Buyer(
    company="CLICK ILUMINACAO LTDA",
    cnpj="06.293.416/0001-21",
    address="AV. BENEDITO ALVES NAZARETH, 883, 40 - CAMPO DO PIRES",
    city="NOVA LIMA (MG)",
    phone="(31) 3589-1424",
)


def _config_dir() -> Path:
    return Path(os.getenv("CONFIG_DIR", str(PROJECT_ROOT / "config")))


def load_buyer_profile(config_dir: Optional[Path] = None) -> Buyer:
    """
    Load the buyer profile from buyer.json.
    Falls back to DEFAULT_BUYER if the file is missing or invalid.
    """
    config_dir = config_dir or _config_dir()
    buyer_file = config_dir / "buyer.json"
    if not buyer_file.exists():
        return DEFAULT_BUYER
    try:
        with open(buyer_file, encoding="utf-8") as f:
            buyer = Buyer.model_validate(json.load(f))
        logger.info("Loaded buyer profile from %s", buyer_file)
        return buyer
    except Exception as exc:
        logger.warning("Could not load buyer.json (%s), using default buyer", exc)
        return DEFAULT_BUYER


@dataclass
class Config:
    # --- Extraction ---
    min_text_length: int = field(
        default_factory=lambda: int(os.getenv("MIN_TEXT_LENGTH", "20"))
    )
    # Documents whose trimmed text is shorter than this are rejected outright.

    extraction_source: str = "Local Engine"
    extraction_method: str = "RegEx & Text Parsing"

    # --- Validation thresholds ---
    total_tolerance: float = field(
        default_factory=lambda: float(os.getenv("TOTAL_TOLERANCE", "1.0"))
    )
    # Absolute R$ tolerance between the sum of item totals and the printed TOTAL.

    currency_prefix: str = "R$"

    # --- Buyer profile ---
    buyer: Buyer = field(default_factory=load_buyer_profile)

    # --- Output settings ---
    pretty_json: bool = True       # Indent JSON output for human readability

    def __post_init__(self) -> None:
        """Overlay runtime-tunable settings from pipeline_settings.json if present."""
        settings_file = _config_dir() / "pipeline_settings.json"
        if not settings_file.exists():
            return
        _type_map: dict[str, type] = {
            "min_text_length":    int,
            "total_tolerance":    float,
            "currency_prefix":    str,
            "extraction_source":  str,
            "extraction_method":  str,
            "pretty_json":        bool,
        }
        try:
            with open(settings_file, encoding="utf-8") as f:
                overrides = {k: v for k, v in json.load(f).items() if not k.startswith("_")}
            for key, val in overrides.items():
                if key in _type_map and hasattr(self, key):
                    setattr(self, key, _type_map[key](val))
        except Exception as exc:
            logger.warning("Failed to load pipeline_settings.json: %s", exc)

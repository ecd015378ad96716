"""
Pytest configuration and shared fixtures for the OC extraction test suite.
"""
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
os.chdir(PROJECT_ROOT)


SAMPLE_OC_TEXT = """\
CLICK ILUMINACAO LTDA
AV. BENEDITO ALVES NAZARETH, 883, 40 - CAMPO DO PIRES - NOVA LIMA (MG)
ORDEM DE COMPRA: Nº 4521
Emissão: 12/03/2024
Fornecedor: ACME LTDA Contato: João Telefone: 31-1234-5678
Codigo Descrição Qtde Un Vlr.Tab Vlr.Desc Vlr.Unit IPI Total Entrega
1001 LUMINARIA LED 60W 10 PC 100,00 100,00 100,00 0,00 1.000,00 15/04/24
1002 REATOR ELETRONICO =>: ver obs 20 UN 25,00 25,00 25,00 0,00 500,00 15/04/2024
Sr. Fornecedor, favor confirmar o recebimento desta ordem.
Condição: 28 DDL
Frete: CIF
TOTAL: 1.500,00
"""


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point CONFIG_DIR at an empty temp directory and clear env overrides."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("MIN_TEXT_LENGTH", raising=False)
    monkeypatch.delenv("TOTAL_TOLERANCE", raising=False)
    return config_dir


@pytest.fixture
def sample_oc_text() -> str:
    """A complete, well-formed purchase order as decoded text."""
    return SAMPLE_OC_TEXT


@pytest.fixture
def test_config() -> "Config":
    """Provide a configuration that ignores any local settings files."""
    from config import Config
    return Config()


@pytest.fixture
def engine(test_config) -> "ExtractionEngine":
    from pipeline.processor import ExtractionEngine
    return ExtractionEngine(test_config)


@pytest.fixture
def make_item() -> Callable[..., "Item"]:
    """Factory for Item models with sensible defaults."""
    from models.order import Item

    def _make(**overrides) -> Item:
        values = {
            "code": "1001",
            "description": "LUMINARIA LED 60W",
            "quantity": 1,
            "unit": "PC",
            "unit_price": 100.0,
            "ipi": 0.0,
            "total": 100.0,
            "delivery_date": "15/04/24",
        }
        values.update(overrides)
        return Item(**values)

    return _make


@pytest.fixture
def make_order() -> Callable[..., "ExtractedOrder"]:
    """Factory for ExtractedOrder models; totals are derived from items."""
    from config import DEFAULT_BUYER
    from models.order import ExtractedOrder, Metadata
    from pipeline.totals import calculate_totals

    def _make(items=None, document_total=None, buyer=None, **overrides) -> ExtractedOrder:
        items = list(items or [])
        values = {
            "buyer": buyer or DEFAULT_BUYER,
            "items": items,
            "totals": calculate_totals(items, document_total),
            "metadata": Metadata(
                file_name="oc.txt",
                extraction_timestamp=datetime.now(timezone.utc).isoformat(),
            ),
        }
        values.update(overrides)
        return ExtractedOrder(**values)

    return _make


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")

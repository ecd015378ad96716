"""
Unit tests for configuration loading.
"""
import json

import pytest

from config import DEFAULT_BUYER, Config, load_buyer_profile


@pytest.mark.unit
class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.min_text_length == 20
        assert config.total_tolerance == 1.0
        assert config.currency_prefix == "R$"
        assert config.buyer == DEFAULT_BUYER

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MIN_TEXT_LENGTH", "50")
        monkeypatch.setenv("TOTAL_TOLERANCE", "0.05")
        config = Config()
        assert config.min_text_length == 50
        assert config.total_tolerance == pytest.approx(0.05)

    def test_settings_file_overlay(self, isolated_config_dir):
        (isolated_config_dir / "pipeline_settings.json").write_text(json.dumps({
            "_comment": "ignored",
            "total_tolerance": "2.5",
            "min_text_length": 10,
            "unknown_key": 1,
        }))
        config = Config()
        assert config.total_tolerance == pytest.approx(2.5)
        assert config.min_text_length == 10
        assert not hasattr(config, "unknown_key")

    def test_malformed_settings_file_keeps_defaults(self, isolated_config_dir):
        (isolated_config_dir / "pipeline_settings.json").write_text("{not json")
        assert Config().total_tolerance == 1.0


@pytest.mark.unit
class TestBuyerProfile:

    def test_default_when_missing(self, isolated_config_dir):
        assert load_buyer_profile(isolated_config_dir) == DEFAULT_BUYER

    def test_loaded_from_buyer_json(self, isolated_config_dir):
        (isolated_config_dir / "buyer.json").write_text(json.dumps({
            "company": "OUTRA EMPRESA SA",
            "cnpj": "11.222.333/0001-44",
            "city": "BELO HORIZONTE (MG)",
        }), encoding="utf-8")
        buyer = Config().buyer
        assert buyer.company == "OUTRA EMPRESA SA"
        assert buyer.cnpj == "11.222.333/0001-44"
        assert buyer.phone is None

    def test_invalid_buyer_json_falls_back(self, isolated_config_dir):
        (isolated_config_dir / "buyer.json").write_text(json.dumps({"cnpj": "sem empresa"}))
        assert load_buyer_profile(isolated_config_dir) == DEFAULT_BUYER

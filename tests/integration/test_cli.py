"""
CLI tests via click's CliRunner.
"""
import json

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def oc_file(tmp_path, sample_oc_text):
    path = tmp_path / "oc_4521.txt"
    path.write_text(sample_oc_text, encoding="utf-8")
    return path


@pytest.mark.integration
class TestExtractCommand:

    def test_writes_json_into_directory(self, runner, oc_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        result = runner.invoke(cli, ["extract", str(oc_file), "-o", str(out_dir)])

        assert result.exit_code == 0, result.output
        data = json.loads((out_dir / "OC_4521.json").read_text(encoding="utf-8"))
        assert data["orderNumber"] == "4521"
        assert data["metadata"]["fileName"] == "oc_4521.txt"
        assert "Result saved to" in result.output

    def test_creates_missing_directory_for_trailing_separator(self, runner, oc_file, tmp_path):
        out_dir = tmp_path / "novo"

        result = runner.invoke(cli, ["extract", str(oc_file), "-f", "xml", "-o", f"{out_dir}/"])

        assert result.exit_code == 0, result.output
        assert out_dir.is_dir()
        assert (out_dir / "OC_4521.xml").read_text(encoding="utf-8").startswith("<?xml")

    def test_writes_csv_to_file(self, runner, oc_file, tmp_path):
        out_file = tmp_path / "itens.csv"

        result = runner.invoke(cli, ["extract", str(oc_file), "-f", "csv", "-o", str(out_file)])

        assert result.exit_code == 0, result.output
        lines = out_file.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("orderNumber,date,supplierName")
        assert len(lines) == 3

    def test_summary_to_stdout(self, runner, oc_file):
        result = runner.invoke(cli, ["extract", str(oc_file), "--format", "summary"])
        assert result.exit_code == 0, result.output
        assert "*OC - 4521 - ACME LTDA - 12/03/2024*" in result.output

    def test_latin1_file(self, runner, tmp_path, sample_oc_text):
        path = tmp_path / "legado.txt"
        path.write_bytes(sample_oc_text.encode("iso-8859-1"))
        out_file = tmp_path / "legado.json"

        result = runner.invoke(cli, ["extract", str(path), "-o", str(out_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(out_file.read_text(encoding="utf-8"))
        assert data["supplier"]["contact"] == "João"
        assert data["payment"]["condition"] == "28 DDL"

    def test_empty_document(self, runner, tmp_path):
        path = tmp_path / "vazio.txt"
        path.write_text("   ", encoding="utf-8")

        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "Erro ao processar" in result.output


@pytest.mark.integration
class TestValidateCommand:

    def test_valid_order(self, runner, oc_file):
        result = runner.invoke(cli, ["validate", str(oc_file)])
        assert result.exit_code == 0, result.output
        assert "No issues found" in result.output
        assert "100%" in result.output

    def test_invalid_order_exits_nonzero(self, runner, tmp_path):
        path = tmp_path / "livre.txt"
        path.write_text("Texto livre sem ordem de compra nem itens.", encoding="utf-8")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Número da OC não identificado" in result.output
        assert "Nenhum item encontrado no documento" in result.output

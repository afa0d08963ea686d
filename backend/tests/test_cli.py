"""
Tests for the command-line interface.

The CLI opens its own sessions on the application engine (in-memory
SQLite under test), so the tables are created there first.
"""

import pytest
from typer.testing import CliRunner

from cli import app
from kitchen_api.core import init_database

runner = CliRunner()


@pytest.fixture
def app_database():
    init_database()


class TestExportCommands:
    def test_ingredients_report_written_to_directory(self, app_database, tmp_path):
        result = runner.invoke(
            app, ["export", "ingredients", "--format", "xlsx", "--out", str(tmp_path)]
        )

        assert result.exit_code == 0, result.output
        files = list(tmp_path.glob("Malzeme_Kutuphanesi_*.xlsx"))
        assert len(files) == 1
        assert files[0].read_bytes()[:2] == b"PK"

    def test_unknown_outlet_exits_with_error(self, app_database, tmp_path):
        result = runner.invoke(app, ["export", "outlet", "999", "--out", str(tmp_path)])

        assert result.exit_code == 1
        assert "Restoran bulunamadı" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_unknown_format(self, tmp_path):
        result = runner.invoke(app, ["export", "ingredients", "-f", "docx", "-o", str(tmp_path)])

        assert result.exit_code == 2
        assert "Unknown format" in result.output


class TestInfoCommands:
    def test_stats(self, app_database):
        result = runner.invoke(app, ["stats"])

        assert result.exit_code == 0, result.output
        assert "Restoranlar" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "ReportLab" in result.output

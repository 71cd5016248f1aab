"""Tests for tabstats.cli."""

import json

import pytest
from click.testing import CliRunner

from tabstats.cli import EXIT_INVALID_INPUT, EXIT_NOT_FOUND, main

DRIVERS = "driver,number,team\r\nMax,1,RedBull\r\nLewis,,Mercedes\r\n"


@pytest.fixture
def runner(monkeypatch):
    for var in ("TABSTATS_DB_PATH", "TABSTATS_FORBIDDEN_PHRASES", "TABSTATS_PROFILE_WORKERS"):
        monkeypatch.delenv(var, raising=False)
    return CliRunner()


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "drivers.csv"
    path.write_bytes(DRIVERS.encode("utf-8"))
    return path


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "cli.db")


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestAnalyze:
    def test_json_output(self, runner, csv_file):
        data = _json(runner.invoke(main, ["--json", "analyze", str(csv_file)]))
        assert data["number_of_rows"] == 2
        assert data["number_of_columns"] == 3
        # CRLF line breaks are counted as read from disk
        assert data["total_characters"] == len(DRIVERS)
        assert data["analysis_id"] is None
        assert "column_profiles" not in data

    def test_with_profile(self, runner, csv_file):
        data = _json(runner.invoke(main, ["--json", "analyze", "--profile", str(csv_file)]))
        types = {p["column_name"]: p["inferred_type"] for p in data["column_profiles"]}
        assert types == {"driver": "STRING", "number": "INTEGER", "team": "STRING"}

    def test_stdin(self, runner):
        data = _json(runner.invoke(main, ["--json", "analyze", "-"], input="a,b\n1,2\n"))
        assert data["number_of_columns"] == 2

    def test_table_output(self, runner, csv_file):
        result = runner.invoke(main, ["analyze", str(csv_file)])
        assert result.exit_code == 0
        assert "Column statistics" in result.stdout

    def test_malformed_exit_code(self, runner):
        result = runner.invoke(main, ["analyze", "-"], input="x\n1\n1,2\n")
        assert result.exit_code == EXIT_INVALID_INPUT

    def test_empty_exit_code(self, runner):
        result = runner.invoke(main, ["analyze", "-"], input="\n\n")
        assert result.exit_code == EXIT_INVALID_INPUT

    def test_undecodable_file_exit_code(self, runner, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"a,b\n\xff\xfe,1\n")
        result = runner.invoke(main, ["analyze", str(path)])
        assert result.exit_code == EXIT_INVALID_INPUT
        assert "not valid utf-8" in result.output

    def test_undecodable_stdin_exit_code(self, runner, db):
        result = runner.invoke(main, ["--db", db, "ingest", "-"], input=b"x\n\xff\n")
        assert result.exit_code == EXIT_INVALID_INPUT

    def test_encoding_option(self, runner, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes("caf\u00e9\n1\n".encode("latin-1"))
        data = _json(runner.invoke(main, ["--json", "analyze", "--encoding", "latin-1", str(path)]))
        assert data["column_statistics"][0]["column_name"] == "caf\u00e9"


class TestStoredAnalyses:
    def test_ingest_show_profile_delete(self, runner, csv_file, db):
        ingested = _json(runner.invoke(main, ["--db", db, "--json", "ingest", str(csv_file)]))
        analysis_id = ingested["analysis_id"]
        assert analysis_id is not None

        shown = _json(runner.invoke(main, ["--db", db, "--json", "show", str(analysis_id)]))
        assert shown == ingested

        profiles = _json(runner.invoke(main, ["--db", db, "--json", "profile", str(analysis_id)]))
        number = next(p for p in profiles if p["column_name"] == "number")
        assert (number["min"], number["max"], number["mean"]) == (1.0, 1.0, 1.0)

        listed = _json(runner.invoke(main, ["--db", db, "--json", "list"]))
        assert [s["analysis_id"] for s in listed] == [analysis_id]

        deleted = runner.invoke(main, ["--db", db, "delete", str(analysis_id)])
        assert deleted.exit_code == 0

        missing = runner.invoke(main, ["--db", db, "show", str(analysis_id)])
        assert missing.exit_code == EXIT_NOT_FOUND

    def test_forbidden_phrase_rejected(self, runner, db):
        result = runner.invoke(
            main, ["--db", db, "ingest", "-"], input="driver\nSonny Hayes\n",
        )
        assert result.exit_code == EXIT_INVALID_INPUT
        listed = _json(runner.invoke(main, ["--db", db, "--json", "list"]))
        assert listed == []

    def test_forbidden_phrases_from_environment(self, runner, db, monkeypatch):
        monkeypatch.setenv("TABSTATS_FORBIDDEN_PHRASES", "")
        data = _json(runner.invoke(
            main, ["--db", db, "--json", "ingest", "-"], input="driver\nSonny Hayes\n",
        ))
        assert data["number_of_rows"] == 1

    def test_profile_missing(self, runner, db):
        result = runner.invoke(main, ["--db", db, "profile", "5"])
        assert result.exit_code == EXIT_NOT_FOUND

    def test_delete_missing(self, runner, db):
        result = runner.invoke(main, ["--db", db, "delete", "5"])
        assert result.exit_code == EXIT_NOT_FOUND

    def test_list_table_output(self, runner, csv_file, db):
        runner.invoke(main, ["--db", db, "ingest", str(csv_file)])
        result = runner.invoke(main, ["--db", db, "list"])
        assert result.exit_code == 0
        assert "1 analysis(es)" in result.stdout

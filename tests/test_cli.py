"""Tests for the conversion CLI (cli/convert.py)."""

import io
import json

import pytest

from entitoon.cli import convert as cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Leave pytest's log handlers in place."""
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)


@pytest.fixture
def records_file(tmp_path, medical_records):
    path = tmp_path / "patients.json"
    path.write_text(json.dumps(medical_records))
    return path


class TestConvertCommand:
    """Test the convert subcommand."""

    def test_convert_file(self, records_file, capsys):
        exit_code = cli.main(["convert", str(records_file), "--key-field", "patient_id"])
        out = capsys.readouterr().out
        assert exit_code == cli.EXIT_OK
        assert out.splitlines()[0].startswith("#Entity[P-101]|Name:John Doe")
        assert len(out.splitlines()) == 2

    def test_convert_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"id": "x", "n": 1}'))
        assert cli.main(["convert"]) == cli.EXIT_OK
        assert capsys.readouterr().out == "#Entity[x]|N:1\n"

    def test_convert_jsonl(self, tmp_path, capsys):
        path = tmp_path / "rows.jsonl"
        path.write_text('{"id": 1}\n\n{"id": 2}\n')
        assert cli.main(["convert", str(path)]) == cli.EXIT_OK
        assert capsys.readouterr().out == "#Entity[1]\n#Entity[2]\n"

    def test_output_file(self, records_file, tmp_path):
        target = tmp_path / "out.toon"
        cli.main(["convert", str(records_file), "-k", "patient_id", "-o", str(target)])
        assert target.read_text().endswith("DiagnosisStatus:Stable\n")

    def test_stats_go_to_stderr(self, records_file, capsys):
        cli.main(["convert", str(records_file), "-k", "patient_id", "--stats"])
        captured = capsys.readouterr()
        assert "records=2" in captured.err
        assert "records=" not in captured.out

    def test_validation_errors_set_exit_code(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"id": 1, "note": "a|b"}))
        assert cli.main(["convert", str(path), "--validate"]) == cli.EXIT_VALIDATION_ERROR
        captured = capsys.readouterr()
        assert "[error] record 0 note" in captured.err
        assert captured.out == "#Entity[1]|Note:a|b\n"

    def test_missing_file(self, capsys):
        assert cli.main(["convert", "/nonexistent/in.json"]) == cli.EXIT_INPUT_ERROR
        assert "Input file not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{oops")
        assert cli.main(["convert", str(path)]) == cli.EXIT_INPUT_ERROR
        assert "Invalid JSON input" in capsys.readouterr().err

    def test_invalid_utf8(self, tmp_path, capsys):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"id": "caf\xe9"}')
        assert cli.main(["convert", str(path)]) == cli.EXIT_INPUT_ERROR
        err = capsys.readouterr().err
        assert err.startswith("Error (input): Cannot decode")

    def test_invalid_utf8_on_stdin(self, monkeypatch, capsys):
        stdin = io.TextIOWrapper(io.BytesIO(b'{"id": "caf\xe9"}'), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", stdin)
        assert cli.main(["convert"]) == cli.EXIT_INPUT_ERROR
        assert "Cannot decode stdin" in capsys.readouterr().err

    def test_empty_input_prints_nothing(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        assert cli.main(["convert", str(path)]) == cli.EXIT_OK
        assert capsys.readouterr().out == ""

    def test_empty_input_writes_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        target = tmp_path / "out.toon"
        cli.main(["convert", str(path), "-o", str(target)])
        assert target.read_text() == ""

    def test_config_file_sets_key_field(self, records_file, tmp_path, capsys):
        config = tmp_path / "toon.yaml"
        config.write_text("default_key_field: patient_id\n")
        cli.main(["--config", str(config), "convert", str(records_file)])
        assert capsys.readouterr().out.startswith("#Entity[P-101]|")

    def test_missing_config_file(self, records_file, capsys):
        assert cli.main(["--config", "/nope.yaml", "convert", str(records_file)]) == 1
        assert "Configuration file not found" in capsys.readouterr().err


class TestParser:
    """Test argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == cli.EXIT_INPUT_ERROR
        assert "usage" in capsys.readouterr().out

    def test_serve_defaults(self):
        args = cli.create_parser().parse_args(["serve"])
        assert args.transport == "stdio"
        assert args.port is None

    def test_serve_dispatches(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "entitoon.mcp_server.run_server",
            lambda **kwargs: calls.append(kwargs),
        )
        assert cli.main(["serve", "--transport", "http", "--port", "9000"]) == cli.EXIT_OK
        assert calls == [{"transport": "http", "host": None, "port": 9000}]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from enforce_direct_access.cli import main as cli_main


def _write_file(path: Path, text: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")


def _run_cli_json(argv: list[str], capsys: pytest.CaptureFixture[str]) -> tuple[int, dict]:
	rc = cli_main([*argv, "--json"])
	out = capsys.readouterr().out
	payload = json.loads(out) if out.strip() else {}
	return rc, payload


def test_clean_source_exits_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "ok.js"
	_write_file(src, "const key = process.env.API_KEY\n")
	rc, payload = _run_cli_json(["--path", "process.env", str(src)], capsys)
	assert rc == 0
	assert payload == {"exit_code": 0, "diagnostics": []}


def test_violation_json_shape(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "bad.js"
	_write_file(src, "const a = 1\nconst { env } = process\n")
	rc, payload = _run_cli_json(["--path", "process.env", str(src)], capsys)
	assert rc == 1
	assert payload["exit_code"] == 1
	assert payload["diagnostics"] == [
		{
			"phase": "policy",
			"code": "E_DESTRUCTURING",
			"message": "Destructuring 'process.env' is unsafe: access it directly so it can be statically replaced",
			"severity": "error",
			"path": "process.env",
			"file": str(src),
			"line": 2,
			"column": 7,
			"notes": [],
		}
	]


def test_human_output_on_stderr(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "bad.js"
	_write_file(src, "const x = process.env?.API_KEY;\n")
	rc = cli_main(["--path", "process.env", str(src)])
	captured = capsys.readouterr()
	assert rc == 1
	assert captured.out == ""
	assert captured.err.startswith(f"{src}:1:11: error: Optional chaining with 'process.env' is unsafe")


def test_config_file_and_extra_paths(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = tmp_path / "policy.json"
	_write_file(config, json.dumps({"paths": ["process.env"], "mode": "strict"}))
	src = tmp_path / "mixed.js"
	_write_file(src, "const a = process?.env\nconst b = import.meta.env?.MODE\n")
	rc, payload = _run_cli_json(["--config", str(config), "--path", "import.meta.env", str(src)], capsys)
	assert rc == 1
	assert [(d["path"], d["line"]) for d in payload["diagnostics"]] == [("process.env", 1), ("import.meta.env", 2)]


def test_warn_downgrades_policy_violations(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "bad.js"
	_write_file(src, "const { env } = process;\n")
	rc, payload = _run_cli_json(["--warn", "--path", "process.env", str(src)], capsys)
	assert rc == 0
	assert payload["exit_code"] == 0
	assert [d["severity"] for d in payload["diagnostics"]] == ["warning"]


def test_warn_keeps_parse_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "broken.js"
	_write_file(src, "const = ;\n")
	rc, payload = _run_cli_json(["--warn", "--path", "process.env", str(src)], capsys)
	assert rc == 1
	diags = payload["diagnostics"]
	assert [(d["phase"], d["code"], d["severity"]) for d in diags] == [("parser", "E_PARSE", "error")]
	assert diags[0]["file"] == str(src)


def test_multiple_sources_are_all_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	first = tmp_path / "a.js"
	second = tmp_path / "b.js"
	_write_file(first, "const { env } = process;\n")
	_write_file(second, "const x = process.env?.HOME;\n")
	rc, payload = _run_cli_json(["--path", "process.env", str(first), str(second)], capsys)
	assert rc == 1
	assert [d["file"] for d in payload["diagnostics"]] == [str(first), str(second)]


def test_missing_source_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	missing = tmp_path / "nope.js"
	rc, payload = _run_cli_json(["--path", "process.env", str(missing)], capsys)
	assert rc == 1
	diags = payload["diagnostics"]
	assert [(d["phase"], d["code"], d["file"]) for d in diags] == [("driver", "source-unreadable", str(missing))]


def test_invalid_config_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = tmp_path / "policy.json"
	_write_file(config, json.dumps({"paths": "process.env"}))
	src = tmp_path / "ok.js"
	_write_file(src, "const a = 1;\n")
	rc, payload = _run_cli_json(["--config", str(config), str(src)], capsys)
	assert rc == 2
	assert payload["exit_code"] == 2
	assert [(d["phase"], d["code"]) for d in payload["diagnostics"]] == [("config", "config-paths-not-list")]


def test_unreadable_config_human_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "ok.js"
	_write_file(src, "const a = 1;\n")
	rc = cli_main(["--config", str(tmp_path / "missing.json"), str(src)])
	err = capsys.readouterr().err
	assert rc == 2
	assert "[config-unreadable]" in err


def test_parse_error_notes_in_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "broken.js"
	_write_file(src, "const = 1;\n")
	rc, payload = _run_cli_json([str(src)], capsys)
	assert rc == 1
	(diag,) = payload["diagnostics"]
	assert diag["code"] == "E_PARSE"
	assert len(diag["notes"]) == 1
	assert diag["notes"][0].startswith("expected one of: ")
	assert "NAME" in diag["notes"][0]


def test_parse_error_notes_in_human_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = tmp_path / "broken.js"
	_write_file(src, "const = 1;\n")
	rc = cli_main([str(src)])
	lines = capsys.readouterr().err.splitlines()
	assert rc == 1
	assert lines[0].startswith(f"{src}:1:7: error: ")
	assert lines[1].startswith(f"{src}:1:7: note: expected one of: ")

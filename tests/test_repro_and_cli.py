from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"
SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    exe = [sys.executable, "-m", "cephalopod.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=stdin, env=env)


def test_cli_solve_from_stdin(tmp_path: Path):
    r = _run_cli(["solve"], cwd=tmp_path, stdin="20\n0 6 0\n2 2 2\n1 6 1\n")
    assert r.returncode == 0, r.stderr
    assert r.stdout.strip() == "322444322"


def test_cli_solve_from_file_checks_expected(tmp_path: Path):
    r = _run_cli(["solve", "--file", str(DATA / "6_paths_one_full_board.txt")], cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert r.stdout.strip() == "951223336"
    assert "Matches expected" in r.stderr


def test_cli_solve_reports_mismatch(tmp_path: Path):
    p = tmp_path / "wrong.txt"
    p.write_text("1\n0 0 0\n0 0 0\n0 0 0\n1\n")
    r = _run_cli(["solve", "--file", str(p)], cwd=tmp_path)
    assert r.returncode == 1
    assert r.stdout.strip() == "111111111"


@pytest.mark.parametrize("bad", [
    "-1\n0 0 0\n0 0 0\n0 0 0\n",
    "2\n0 0\n0 0 0\n0 0 0\n",
    "2\n0 0 0\n0 0 0 0\n0 0 0\n",
    "2\n0 0 0\n0 8 0\n0 0 0\n",
])
def test_cli_solve_invalid_input(tmp_path: Path, bad: str):
    r = _run_cli(["solve"], cwd=tmp_path, stdin=bad)
    assert r.returncode == 2
    assert "Invalid input" in r.stderr
    assert r.stdout.strip() == ""


def test_cli_check_fixtures_and_report(tmp_path: Path):
    out = tmp_path / "report"
    r = _run_cli(["check", str(DATA), "--out", str(out)], cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert "cases passed" in r.stderr
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["failed"] == 0
    assert manifest["cli_argv"][0] == "check"


def test_cli_check_fails_on_mismatch(tmp_path: Path):
    p = tmp_path / "bad.txt"
    p.write_text("0\n0 0 0\n0 0 0\n0 0 0\n7\n")
    r = _run_cli(["check", str(p)], cwd=tmp_path)
    assert r.returncode == 1
    assert "FAIL" in r.stderr


def test_cli_check_empty_dir(tmp_path: Path):
    r = _run_cli(["check", str(tmp_path)], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_explore(tmp_path: Path):
    r = _run_cli(["explore", "--board", "060222161", "--depth", "20"], cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert "distinct_terminals=1 paths=2" in r.stderr
    assert "checksum=322444322" in r.stderr


@pytest.mark.parametrize("bad", ["abc", "00000000", "0000000007"])
def test_cli_explore_invalid_board(tmp_path: Path, bad: str):
    r = _run_cli(["explore", "--board", bad, "--depth", "1"], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_explore_negative_depth(tmp_path: Path):
    r = _run_cli(["explore", "--board", "000000000", "--depth", "-1"], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_solve_has_no_stdin_flag():
    from cephalopod.cli import build_parser

    with pytest.raises(SystemExit):
        build_parser().parse_args(["solve", "--stdin"])
    ns = build_parser().parse_args(["solve"])
    assert ns.file is None
    assert not hasattr(ns, "stdin")


def test_cli_explore_help_warns_about_memory(monkeypatch):
    from cephalopod.cli import build_parser

    monkeypatch.setenv("COLUMNS", "500")
    assert "memory grows" in build_parser().format_help()


def test_cli_in_process_main(capsys):
    from cephalopod.cli import main

    assert main(["solve", "--file", str(DATA / "empty_board_depth_1.txt")]) == 0
    assert capsys.readouterr().out.strip() == "111111111"

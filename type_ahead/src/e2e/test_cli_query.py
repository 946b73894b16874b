import json
from pathlib import Path
import pytest
from frontend.__main__ import main

def _seed(tmp: Path) -> str:
    root = tmp / "Options"; root.mkdir()
    (root / "states.txt").write_text("Alabama\nAlaska\nArizona\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_cli_single_query_json(tmp_path: Path, capsys):
    rc = main(["--options", _seed(tmp_path), "--q", "ala", "--json", "--order-by", "desc"])
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)
    assert [r["value"] for r in rows] == ["Alaska", "Alabama"]

@pytest.mark.e2e
def test_cli_single_query_text_and_no_matches(tmp_path: Path, capsys):
    roots = _seed(tmp_path)
    assert main(["--options", roots, "--q", "ari"]) == 0
    assert "Arizona" in capsys.readouterr().out
    assert main(["--options", roots, "--q", "zzz"]) == 0
    assert "(no matches)" in capsys.readouterr().out

@pytest.mark.e2e
def test_cli_repl_drives_the_pipeline(tmp_path: Path, capsys, monkeypatch):
    lines = iter(["ala", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main(["--options", _seed(tmp_path), "--repl"]) == 0
    out = capsys.readouterr().out
    assert "(loading=True)" in out
    assert "Alabama" in out and "Alaska" in out

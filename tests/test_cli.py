from __future__ import annotations

import json
from pathlib import Path

from finalstate.cli import main


def test_cli_info_json(fixtures_dir: Path, capsys):
    rc = main(["info", str(fixtures_dir / "hadrons_v3.dat"), "--json"])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["n_events"] == 2
    assert data["total_particles"] == 3
    assert data["labels"] == ["Hadron"]
    assert data["header_versions"] == [3]
    assert data["has_pt_hat"] is True
    assert data["sigma_gen"] == 5.2


def test_cli_info_text(fixtures_dir: Path, capsys):
    assert main(["info", str(fixtures_dir / "hadrons_v3.dat")]) == 0
    out = capsys.readouterr().out
    assert "Events:              2" in out
    assert "pi+" in out


def test_cli_check_exit_codes(fixtures_dir: Path, capsys):
    assert main(["check", str(fixtures_dir / "hadrons_v3.dat")]) == 0
    assert main(["check", str(fixtures_dir / "broken.dat"), "--json"]) == 2
    out = capsys.readouterr().out
    report = json.loads(out[out.index("{"):])
    assert report["is_valid"] is False


def test_cli_missing_file(tmp_path: Path, capsys):
    assert main(["info", str(tmp_path / "nope.dat")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_writers(capsys):
    assert main(["writers", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    by_name = {r["name"]: r for r in rows}
    assert by_name["JetScapeWriterFinalStateHadronsAsciiGZ"] == {
        "name": "JetScapeWriterFinalStateHadronsAsciiGZ",
        "kind": "Hadron",
        "encoding": "gz",
    }


def test_cli_malformed_footer_is_an_error(tmp_path: Path, capsys):
    bad = tmp_path / "bad.dat"
    bad.write_text("#\tJETSCAPE_FINAL_STATE\tv3\t|\tN\tpid\tstatus\tE\tPx\tPy\tPz\n#\tsigmaGen\n", encoding="utf-8")
    assert main(["check", str(bad)]) == 1
    assert main(["info", str(bad)]) == 1
    assert "malformed footer" in capsys.readouterr().err

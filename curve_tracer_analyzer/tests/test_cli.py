from __future__ import annotations

from pathlib import Path

import pytest

from curve_tracer_analyzer import cli
from curve_tracer_analyzer.ingest.discovery import resolve_input_paths


def test_cli_csv_batch_with_failure(tmp_path: Path, write_curve, capsys) -> None:
    good = write_curve("CURVE.C01", trace_count=2)
    bad = tmp_path / "CURVE.C02"
    bad.write_bytes(b"\x00" * 10)

    rc = cli.main([str(good), str(bad), "-o", "csv"])
    out = capsys.readouterr().out

    assert rc == 1
    assert (good.parent / "CURVE.C01.csv").exists()
    assert not (good.parent / "CURVE.csv").exists()
    assert "[error]" in out and "TruncatedHeader" in out
    assert "CURVE.C01: 2 traces x 127 samples" in out


def test_cli_none_mode(write_curve, capsys) -> None:
    src = write_curve("CURVE.C03", trace_count=2)
    assert cli.main([str(src), "--output", "none"]) == 0
    out = capsys.readouterr().out
    assert "bias [Vgs] 1..1.5" in out
    assert "[warn]" in out  # 255 % 2 slot ignored


def test_cli_glob_and_out_dir(tmp_path: Path, write_curve) -> None:
    write_curve("CURVE.C01", trace_count=2)
    write_curve("CURVE.C02", trace_count=3)
    out_dir = tmp_path / "exports"
    rc = cli.main([str(tmp_path / "CURVE.C*"), "-o", "svg", "--out-dir", str(out_dir)])
    assert rc == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["CURVE.C01.svg", "CURVE.C02.svg"]


def test_cli_without_files_and_cancelled_dialog(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "select_files_interactively", lambda: None)
    assert cli.main([]) == 2
    assert "no input files" in capsys.readouterr().out


def test_cli_uses_dialog_selection(monkeypatch, write_curve) -> None:
    src = write_curve(trace_count=2)
    monkeypatch.setattr(cli, "select_files_interactively", lambda: [src])
    assert cli.main(["-o", "none"]) == 0


def test_cli_rejects_unknown_mode(write_curve) -> None:
    with pytest.raises(SystemExit):
        cli.main([str(write_curve(trace_count=2)), "-o", "fig"])


@pytest.mark.parametrize("workers", ["0", "-1", "two"])
def test_cli_rejects_bad_worker_count(write_curve, capsys, workers: str) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main([str(write_curve(trace_count=2)), "-o", "none", "--workers", workers])
    assert exc.value.code == 2
    assert "--workers" in capsys.readouterr().err


def test_cli_accepts_worker_count(write_curve) -> None:
    src = write_curve(trace_count=2)
    assert cli.main([str(src), "-o", "none", "--workers", "1"]) == 0


def test_resolve_input_paths(tmp_path: Path) -> None:
    a = tmp_path / "CURVE.C01"
    b = tmp_path / "CURVE.C02"
    a.write_bytes(b"")
    b.write_bytes(b"")
    paths = resolve_input_paths([str(b), str(tmp_path / "CURVE.C0*"), "", str(tmp_path / "x*.C01")])
    assert paths == [b, a, tmp_path / "x*.C01"]

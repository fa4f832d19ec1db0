from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.parsers.job_catalog_parser import SAMPLE_CSV
from scripts.preview_job_catalog import main


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr("sys.argv", ["preview_job_catalog", *argv])
    return main()


def test_valid_catalog_exits_zero_and_prints_report(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    catalog = tmp_path / "catalog.csv"
    catalog.write_text(SAMPLE_CSV, encoding="utf-8")

    exit_code = _run(monkeypatch, str(catalog), "--site-id", "site1")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["site_id"] == "site1"
    assert payload["valid_count"] == 4
    assert payload["invalid_count"] == 0


def test_invalid_row_exits_one(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    catalog = tmp_path / "catalog.csv"
    catalog.write_text(SAMPLE_CSV + "\nCIM-009,EXCAVACIÓN POR MEDIOS,M3,abc,10", encoding="utf-8")

    exit_code = _run(monkeypatch, str(catalog), "--site-id", "site1")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["invalid_count"] == 1
    assert payload["invalid_jobs"][0]["job"]["job_id"] == "CIM-009"


def test_delimiter_flag_overrides_extension(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    catalog = tmp_path / "catalog.csv"
    catalog.write_text(
        "job_id\tdescription\tunit\tquantity\tunit_price\nCIM-001\tEXCAVACIÓN POR MEDIOS\tM3\t1\t2",
        encoding="utf-8",
    )

    exit_code = _run(monkeypatch, str(catalog), "--site-id", "site1", "--delimiter", "tab")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["valid_count"] == 1

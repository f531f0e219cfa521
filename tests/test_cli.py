from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from referral_network.cli import app

runner = CliRunner()


@pytest.fixture
def records_file(tmp_path, sample_records):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": sample_records}), encoding="utf-8")
    return path


def test_stats_command(records_file):
    result = runner.invoke(app, ["stats", str(records_file)])

    assert result.exit_code == 0, result.output
    assert "Members" in result.output
    assert "Orphans" in result.output


def test_export_command_with_filters(records_file, tmp_path):
    out = tmp_path / "export.json"
    result = runner.invoke(
        app,
        ["export", str(records_file), "--tier", "silver", "--mode", "network", "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["mode"] == "network"
    assert [r["key"] for r in data["roots"]] == ["O", "R"]
    assert data["stats"]["totalUsers"] == 6


def test_export_with_query_and_date_range(records_file, tmp_path):
    out = tmp_path / "export.json"
    result = runner.invoke(
        app,
        [
            "export",
            str(records_file),
            "--joined-from",
            "2024-01-15",
            "--joined-to",
            "2024-01-31",
            "--query",
            "olga",
            "-o",
            str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [r["key"] for r in data["roots"]] == ["O", "X"]
    assert data["search"]["highlight"] == ["O"]


def test_missing_file_is_rejected(tmp_path):
    result = runner.invoke(app, ["stats", str(tmp_path / "missing.json")])
    assert result.exit_code != 0

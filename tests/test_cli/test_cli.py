"""
Tests for fleet_optimizer/cli.py via ``typer.testing.CliRunner``.

Each test points ``--config`` at a TOML file in ``tmp_path`` with file
logging disabled, so runs never write under data/.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fleet_optimizer.assistant.client import ERROR_REPLY
from fleet_optimizer.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path) -> Path:
    path = tmp_path / "test.toml"
    path.write_text(
        '[simulation]\ndefault_profile = "gaming"\n'
        "[recommendations]\nlimit = 4\nchat_context_limit = 2\n"
        f'[reporting]\noutput_dir = "{(tmp_path / "out").as_posix()}"\n'
        '[logging]\nlevel = "WARNING"\nlog_file = ""\n',
        encoding="utf-8",
    )
    return path


def test_profiles():
    result = runner.invoke(app, ["profiles"])
    assert result.exit_code == 0
    for profile_id in ("ecommerce", "gaming", "financial"):
        assert profile_id in result.output


def test_validate_config(config_file):
    result = runner.invoke(app, ["validate-config", "--config", str(config_file), "--full"])
    assert result.exit_code == 0
    assert "[OK] Config valid." in result.output
    assert "gaming" in result.output


def test_validate_config_invalid(tmp_path):
    bad = tmp_path / "bad.toml"
    bad.write_text("[chat]\ntemperature = 5.0\n", encoding="utf-8")
    result = runner.invoke(app, ["validate-config", "--config", str(bad)])
    assert result.exit_code == 1


def test_missing_config_exits(tmp_path):
    result = runner.invoke(app, ["stats", "--config", str(tmp_path / "missing.toml")])
    assert result.exit_code == 1


def test_fleet_uses_default_profile(config_file):
    result = runner.invoke(app, ["fleet", "--config", str(config_file), "--top", "5"])
    assert result.exit_code == 0
    assert "Gaming Backend: 45 tables" in result.output
    assert "... and 40 more table(s)." in result.output


def test_fleet_unknown_profile_uses_fallback(config_file):
    result = runner.invoke(
        app, ["fleet", "--config", str(config_file), "--profile", "retail", "-n", "1"]
    )
    assert result.exit_code == 0
    assert "50 tables" in result.output


def test_stats(config_file):
    result = runner.invoke(app, ["stats", "--config", str(config_file), "-p", "financial"])
    assert result.exit_code == 0
    assert "=== Fleet Summary: Financial Services ===" in result.output
    assert "Tables:             90" in result.output


def test_recommend(config_file):
    result = runner.invoke(app, ["recommend", "--config", str(config_file), "--limit", "3"])
    assert result.exit_code == 0
    assert "=== Optimization Recommendations ===" in result.output
    assert " 4. " not in result.output


def test_export_writes_three_files(config_file, tmp_path):
    out = tmp_path / "exports"
    result = runner.invoke(
        app, ["export", "--config", str(config_file), "-p", "ecommerce", "-o", str(out)]
    )
    assert result.exit_code == 0
    assert "[OK] Exported 70 tables" in result.output

    files = sorted(p.name for p in out.iterdir())
    assert len(files) == 3
    assert files[0].startswith("fleet_ecommerce_")
    assert files[1].startswith("recommendations_ecommerce_")
    assert files[2].startswith("report_ecommerce_")

    report = json.loads((out / files[2]).read_text(encoding="utf-8"))
    assert report["profile"] == "ecommerce"
    assert len(report["tables"]) == 70
    assert len(report["recommendations"]) <= 4


def test_export_defaults_to_config_output_dir(config_file, tmp_path):
    result = runner.invoke(app, ["export", "--config", str(config_file)])
    assert result.exit_code == 0
    assert len(list((tmp_path / "out").iterdir())) == 3


def test_ask_without_token_prints_error_reply(config_file, monkeypatch):
    monkeypatch.delenv("AI_BUILDER_TOKEN", raising=False)
    result = runner.invoke(app, ["ask", "Which tables first?", "--config", str(config_file)])
    assert result.exit_code == 0
    assert ERROR_REPLY in result.output

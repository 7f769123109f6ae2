"""Tests for the pocket CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from walletpockets.cli import app

runner = CliRunner()

FUND_ADDRESS = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"


def invoke(data_dir: Path, *args: str):
    return runner.invoke(app, [*args, "--data-dir", str(data_dir)])


def stored_pockets(data_dir: Path) -> list:
    return json.loads((data_dir / "pockets.json").read_text())["pockets"]


class TestListCommand:
    def test_list_fresh_store(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "list")
        assert result.exit_code == 0, result.output
        assert "[0] spending" in result.output
        assert "[1] savings" in result.output
        assert "Multisig funds" not in result.output

    def test_list_shows_funds(self, tmp_path: Path) -> None:
        invoke(tmp_path, "add-fund", FUND_ADDRESS, "Team")
        result = invoke(tmp_path, "list")
        assert result.exit_code == 0, result.output
        assert f"{FUND_ADDRESS} Team" in result.output


class TestCreateDeleteCommands:
    """Tests for create and delete."""

    def test_create_persists(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "create", "vault")
        assert result.exit_code == 0, result.output
        assert "with id 2" in result.output
        assert stored_pockets(tmp_path)[2] == {"name": "vault"}

    def test_create_duplicate_fails(self, tmp_path: Path) -> None:
        invoke(tmp_path, "create", "vault")
        result = invoke(tmp_path, "create", "vault")
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert len(stored_pockets(tmp_path)) == 3

    def test_delete_tombstones(self, tmp_path: Path) -> None:
        invoke(tmp_path, "create", "vault")
        result = invoke(tmp_path, "delete", "2")
        assert result.exit_code == 0, result.output
        assert "Deleted pocket 'vault'" in result.output
        assert stored_pockets(tmp_path) == [{"name": "spending"}, {"name": "savings"}, None]

        listing = invoke(tmp_path, "list")
        assert "vault" not in listing.output

    def test_delete_missing_pocket(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "delete", "9")
        assert result.exit_code == 1
        assert "No hd pocket" in result.output

    def test_delete_rejects_non_numeric_hd_id(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "delete", "vault")
        assert result.exit_code == 1
        assert "numbers" in result.output


class TestShowCommand:
    def test_show_hd(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "show", "1")
        assert result.exit_code == 0, result.output
        assert "savings" in result.output
        assert "Can sign:  yes" in result.output

    @pytest.mark.parametrize(
        ("fund_args", "expected"),
        [
            ([], "unknown (placeholder)"),
            (["--m", "2", "--pubkey", "02aa", "--pubkey", "02bb"], "2-of-2"),
        ],
    )
    def test_show_multisig(self, tmp_path: Path, fund_args: list[str], expected: str) -> None:
        if fund_args:
            invoke(tmp_path, "add-fund", FUND_ADDRESS, "Team", *fund_args)
        result = invoke(tmp_path, "show", FUND_ADDRESS, "--kind", "multisig")
        assert result.exit_code == 0, result.output
        assert expected in result.output

    def test_show_readonly(self, tmp_path: Path) -> None:
        result = invoke(tmp_path, "show", "cold", "--kind", "readonly")
        assert result.exit_code == 0, result.output
        assert "Can sign:  no" in result.output


def test_add_fund_duplicate(tmp_path: Path) -> None:
    invoke(tmp_path, "add-fund", FUND_ADDRESS, "Team")
    result = invoke(tmp_path, "add-fund", FUND_ADDRESS, "Again")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "walletpockets" in result.output

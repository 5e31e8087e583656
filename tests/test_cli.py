"""Tests for the ``modgen`` command line (modgen.cli)."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from modgen.cli import build_parser, load_config, main

pytestmark = pytest.mark.unit


def _run(*argv: str) -> int:
    with patch.dict(os.environ, {}, clear=True):
        return main(list(argv))


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["payment"])
        assert args.name == "payment"
        assert args.display_name == ""
        assert args.import_path is None
        assert not (args.atomic or args.dry_run or args.registry)

    def test_flags(self):
        args = build_parser().parse_args(
            ["order-item", "-d", "Order item", "-m", "shop", "--atomic", "--registry"]
        )
        assert args.display_name == "Order item"
        assert args.import_path == "shop"
        assert args.atomic and args.registry

    def test_name_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestLoadConfig:
    def test_root_flag(self, tmp_path: Path):
        args = build_parser().parse_args(["payment", "--root", str(tmp_path)])
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(args)
        assert config.project_root == tmp_path

    def test_config_file_with_override(self, project_config, tmp_path: Path):
        saved = project_config.model_copy(update={"handler_dir": "api/routes"}).save(
            tmp_path / "modgen.json"
        )
        args = build_parser().parse_args(
            ["payment", "--config", str(saved), "--templates", str(tmp_path / "tpl")]
        )
        config = load_config(args)
        assert config.handler_dir == "api/routes"
        assert config.project_root == project_config.project_root
        assert config.template_dir == tmp_path / "tpl"


class TestMain:
    def test_generates_module(self, sample_project: Path, capsys):
        code = _run("payment", "--root", str(sample_project))

        assert code == 0
        assert (sample_project / "app" / "models" / "payment.py").exists()
        assert "generated successfully" in capsys.readouterr().out

    def test_empty_name(self, sample_project: Path, capsys):
        code = _run("  ", "--root", str(sample_project))

        assert code == 1
        assert "module name is required" in capsys.readouterr().err

    def test_invalid_name(self, sample_project: Path, snapshot):
        before = snapshot(sample_project)
        assert _run("9lives", "--root", str(sample_project)) == 1
        assert snapshot(sample_project) == before

    def test_conflict_exits_non_zero(self, sample_project: Path):
        assert _run("payment", "--root", str(sample_project)) == 0
        assert _run("payment", "--root", str(sample_project)) == 1

    def test_missing_marker_still_exits_zero(self, sample_project: Path, router_file: Path, capsys):
        router_file.write_text("router = None\n", encoding="utf-8")

        assert _run("payment", "--root", str(sample_project)) == 0
        assert "! route" in capsys.readouterr().err

    def test_dry_run_writes_nothing(self, sample_project: Path, snapshot):
        before = snapshot(sample_project)
        assert _run("payment", "--root", str(sample_project), "--dry-run") == 0
        assert snapshot(sample_project) == before

    def test_import_path_flag(self, sample_project: Path):
        _run("payment", "--root", str(sample_project), "--import-path", "shop_api")
        text = (sample_project / "app" / "store" / "store.py").read_text(encoding="utf-8")
        assert "shop_api.models.payment:Payment" in text

    def test_missing_config_file(self, tmp_path: Path, capsys):
        code = _run("payment", "--config", str(tmp_path / "nope.json"))

        assert code == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_invalid_config_file(self, tmp_path: Path, capsys):
        config_file = tmp_path / "modgen.json"
        config_file.write_text('{"handler_dir": 42}', encoding="utf-8")

        assert _run("payment", "--config", str(config_file)) == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_keyword_name(self, sample_project: Path, capsys):
        assert _run("class", "--root", str(sample_project)) == 1
        assert "keyword" in capsys.readouterr().err

"""Tests for folderinfo CLI."""

from __future__ import annotations

import argparse
import logging
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from folderinfo.cli import (
    _attach_list_values,
    _check_graphviz,
    _render_dot,
    _split_list,
    build_parser,
    cmd_report,
    main,
)


def _workspace(tmp_path: Path) -> Path:
    """ws (root) with crates lib and app; app depends on lib and serde."""
    root = tmp_path / "ws"
    for sub in ("lib", "app"):
        (root / sub).mkdir(parents=True)
    (root / "Cargo.toml").write_text('[package]\nname = "root"\n\n[dependencies]\nlib = "1"\n')
    (root / "lib" / "Cargo.toml").write_text('[package]\nname = "lib"\n')
    (root / "app" / "Cargo.toml").write_text(
        '[package]\nname = "app"\n\n[dependencies]\nlib = "1"\nserde = "1"\n'
    )
    return root


def _args(path: Path, **overrides) -> argparse.Namespace:
    args = build_parser().parse_args([str(path)])
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


class TestSplitList:
    """Tests for _split_list helper."""

    def test_none(self) -> None:
        assert _split_list(None) == []

    def test_keeps_order_and_prefixes(self) -> None:
        assert _split_list("+a,-b,c") == ["+a", "-b", "c"]

    def test_drops_empty_entries(self) -> None:
        assert _split_list("a,,b,") == ["a", "b"]


class TestAttachListValues:
    """Tests for _attach_list_values helper."""

    def test_value_starting_with_dash(self) -> None:
        assert _attach_list_values(["--highlight", "-lib,+app", "."]) == [
            "--highlight=-lib,+app",
            ".",
        ]

    def test_ignore_joined(self) -> None:
        assert _attach_list_values(["--ignore", "a,b"]) == ["--ignore=a,b"]

    def test_other_arguments_untouched(self) -> None:
        argv = [".", "--format", "dot", "--highlight=-x"]
        assert _attach_list_values(argv) == argv

    def test_trailing_option_left_for_argparse(self) -> None:
        assert _attach_list_values(["--highlight"]) == ["--highlight"]


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.path == "."
        assert args.format == "text"
        assert args.ignore is None
        assert args.highlight is None
        assert args.manifest == "Cargo.toml"
        assert args.allow_unnamed is False
        assert args.tui is False

    def test_format_is_case_insensitive(self) -> None:
        assert build_parser().parse_args(["--format", "Dot"]).format == "dot"
        assert build_parser().parse_args(["--format", "TEXT"]).format == "text"

    def test_invalid_format(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--format", "svg"])


class TestCmdReport:
    """Tests for cmd_report command."""

    def test_text(self, tmp_path: Path, capsys) -> None:
        result = cmd_report(_args(_workspace(tmp_path)))
        captured = capsys.readouterr()
        assert result == 0
        assert captured.out.startswith("dump format:")
        assert "ws - [root] <no desc>" in captured.out

    def test_text_internal_external(self, tmp_path: Path, capsys) -> None:
        cmd_report(_args(_workspace(tmp_path)))
        out = capsys.readouterr().out
        assert "   |      < lib" in out
        assert "   |      > serde" in out

    def test_dot(self, tmp_path: Path, capsys) -> None:
        result = cmd_report(_args(_workspace(tmp_path), format="dot"))
        out = capsys.readouterr().out
        assert result == 0
        assert out.startswith("digraph G {")
        assert '"app" -> "lib"' in out
        assert '"root" -> "lib"' not in out

    def test_dot_ignore(self, tmp_path: Path, capsys) -> None:
        cmd_report(_args(_workspace(tmp_path), format="dot", ignore="lib"))
        assert "->" not in capsys.readouterr().out

    def test_dot_highlight(self, tmp_path: Path, capsys) -> None:
        cmd_report(_args(_workspace(tmp_path), format="dot", highlight="+app"))
        assert '"app" -> "lib" [color=blue]' in capsys.readouterr().out

    def test_json(self, tmp_path: Path, capsys) -> None:
        import json

        cmd_report(_args(_workspace(tmp_path), format="json"))
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "root"

    def test_ignore_with_text_warns(self, tmp_path: Path, capsys, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            result = cmd_report(_args(_workspace(tmp_path), ignore="lib"))
        assert result == 0
        assert "only apply to --format dot" in caplog.text
        assert "< lib" in capsys.readouterr().out

    def test_output_file(self, tmp_path: Path, capsys) -> None:
        out_file = tmp_path / "graph.dot"
        result = cmd_report(_args(_workspace(tmp_path), format="dot", output=str(out_file)))
        assert result == 0
        assert out_file.read_text().startswith("digraph G {")
        assert capsys.readouterr().out == ""

    def test_no_manifest(self, tmp_path: Path, capsys) -> None:
        result = cmd_report(_args(tmp_path))
        captured = capsys.readouterr()
        assert result == 1
        assert "Cannot process folder" in captured.err

    def test_malformed_manifest(self, tmp_path: Path, capsys) -> None:
        root = _workspace(tmp_path)
        (root / "lib" / "Cargo.toml").write_text("[package\n")
        result = cmd_report(_args(root))
        captured = capsys.readouterr()
        assert result == 1
        assert captured.out == ""
        assert "Error:" in captured.err

    def test_unnamed_crate(self, tmp_path: Path, capsys) -> None:
        root = _workspace(tmp_path)
        (root / "lib" / "Cargo.toml").write_text('[package]\ndescription = "x"\n')
        assert cmd_report(_args(root)) == 1
        assert "Crate without name" in capsys.readouterr().err

        assert cmd_report(_args(root, allow_unnamed=True)) == 0
        assert "lib - [] x" in capsys.readouterr().out

    def test_render_requires_dot(self, tmp_path: Path, capsys) -> None:
        result = cmd_report(_args(_workspace(tmp_path), render="png"))
        assert result == 1
        assert "--render only works" in capsys.readouterr().err

    def test_render(self, tmp_path: Path, capsys) -> None:
        out_file = tmp_path / "out.svg"
        with mock.patch("folderinfo.cli._render_dot", return_value=True) as render:
            result = cmd_report(
                _args(_workspace(tmp_path), format="dot", render="svg", output=str(out_file))
            )
        assert result == 0
        dot_content, path, fmt = render.call_args[0]
        assert dot_content.startswith("digraph G {")
        assert path == out_file
        assert fmt == "svg"

    def test_render_failure(self, tmp_path: Path) -> None:
        with mock.patch("folderinfo.cli._render_dot", return_value=False):
            result = cmd_report(_args(_workspace(tmp_path), format="dot", render="png"))
        assert result == 1

    def test_tui(self, tmp_path: Path) -> None:
        with mock.patch("folderinfo.tui.app.FolderInfoApp") as app_cls:
            result = cmd_report(_args(_workspace(tmp_path), tui=True))
        assert result == 0
        tree = app_cls.call_args[0][0]
        assert tree.name == "root"
        app_cls.return_value.run.assert_called_once()


class TestGraphviz:
    """Tests for Graphviz helpers."""

    def test_check_graphviz(self) -> None:
        with mock.patch("shutil.which", return_value="/usr/bin/dot"):
            assert _check_graphviz() is True
        with mock.patch("shutil.which", return_value=None):
            assert _check_graphviz() is False

    def test_render_without_graphviz(self, tmp_path: Path, capsys) -> None:
        with mock.patch("folderinfo.cli._check_graphviz", return_value=False):
            assert _render_dot("digraph G {}", tmp_path / "g.png", "png") is False
        assert "Graphviz not found" in capsys.readouterr().err

    def test_render_success(self, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with mock.patch("folderinfo.cli._check_graphviz", return_value=True), mock.patch(
            "subprocess.run", return_value=completed
        ) as run:
            assert _render_dot("digraph G {}", tmp_path / "g.png", "png") is True
        assert run.call_args[0][0] == ["dot", "-Tpng", "-o", str(tmp_path / "g.png")]

    def test_render_graphviz_error(self, tmp_path: Path, capsys) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="syntax")
        with mock.patch("folderinfo.cli._check_graphviz", return_value=True), mock.patch(
            "subprocess.run", return_value=completed
        ):
            assert _render_dot("digraph G {", tmp_path / "g.png", "png") is False
        assert "Graphviz error: syntax" in capsys.readouterr().err

    def test_render_timeout(self, tmp_path: Path, capsys) -> None:
        with mock.patch("folderinfo.cli._check_graphviz", return_value=True), mock.patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="dot", timeout=60)
        ):
            assert _render_dot("digraph G {}", tmp_path / "g.png", "png") is False
        assert "timed out" in capsys.readouterr().err


class TestMain:
    """Tests for main entry point."""

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "folderinfo" in capsys.readouterr().out

    def test_text_in_cwd(self, tmp_path: Path, capsys, monkeypatch) -> None:
        monkeypatch.chdir(_workspace(tmp_path))
        assert main([]) == 0
        out = capsys.readouterr().out
        # The root folder "." has no name.
        assert " - [root] <no desc>" in out.splitlines()[5]

    def test_dot_with_options(self, tmp_path: Path, capsys) -> None:
        root = _workspace(tmp_path)
        assert main([str(root), "--format", "dot", "--highlight", "-lib"]) == 0
        assert '"app" -> "lib" [color=red]' in capsys.readouterr().out

    def test_highlight_first_rule_to_form(self, tmp_path: Path, capsys) -> None:
        root = _workspace(tmp_path)
        argv = [str(root), "--format", "dot", "--highlight", "-lib,+root", "--ignore", "-x"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert '"app" -> "lib" [color=red]' in out

    def test_empty_entries_mean_no_highlight(self, tmp_path: Path, capsys) -> None:
        assert main([str(_workspace(tmp_path)), "--format", "dot", "--highlight", ","]) == 0
        out = capsys.readouterr().out
        assert '"app" -> "lib"\n' in out
        assert "color=" not in out

    def test_error_exit_code(self, tmp_path: Path) -> None:
        assert main([str(tmp_path)]) == 1

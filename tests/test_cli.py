"""Tests for the minimaxviz command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from minimaxviz._cli.main import app
from minimaxviz._io import load_tree
from minimaxviz._parse import DEFAULT_TREE, parse_tree_expression

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
CANONICAL = str(EXAMPLES_DIR / "canonical.tree")

runner = CliRunner()


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from a directory with an empty pyproject.toml so no outer config applies."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'trees'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestEvalCommand:
    def test_rtl(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval", CANONICAL, "--direction", "rtl"])

        assert result.exit_code == 0, result.output
        assert "A (4)" in result.stdout
        assert "Root value: 4" in result.stdout
        assert "Pruned: N, L" in result.stdout

    def test_ltr(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval", CANONICAL, "-d", "ltr"])

        assert result.exit_code == 0, result.output
        assert "Pruned: I, K" in result.stdout

    def test_without_pruning(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval", CANONICAL])

        assert result.exit_code == 0, result.output
        assert "Root value: 4" in result.stdout
        assert "Pruned:" not in result.stdout

    def test_min_start(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval", CANONICAL, "--start", "min"])

        assert result.exit_code == 0, result.output
        assert "Root value: 5" in result.stdout

    def test_toml_document(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval", str(EXAMPLES_DIR / "tictactoe_endgame.toml"), "-d", "rtl"])

        assert result.exit_code == 0, result.output
        assert "Root value: 1" in result.stdout
        assert "Pruned: O:c1" in result.stdout

    def test_export_output(self, isolated: Path) -> None:
        output = isolated / "out" / "result.json"

        result = runner.invoke(app, ["eval", CANONICAL, "-d", "rtl", "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["value"] == 4
        assert data["pruned"] == ["N", "L"]

    def test_invalid_tree(self, isolated: Path) -> None:
        broken = isolated / "broken.tree"
        broken.write_text("node('A', [node('B', [])])")

        result = runner.invoke(app, ["eval", str(broken)])

        assert result.exit_code == 1
        assert "Invalid tree" in result.output

    def test_missing_path_without_config(self, isolated: Path) -> None:
        result = runner.invoke(app, ["eval"])

        assert result.exit_code == 1
        assert "Tree file required" in result.output

    def test_uses_config(self, isolated: Path) -> None:
        (isolated / "lecture.tree").write_text(DEFAULT_TREE)
        (isolated / "pyproject.toml").write_text(
            '[tool.minimaxviz]\ninput = "lecture.tree"\ndirection = "ltr"\nstart = "max"\n',
        )

        result = runner.invoke(app, ["eval"])

        assert result.exit_code == 0, result.output
        assert "Pruned: I, K" in result.stdout

    def test_cli_overrides_config(self, isolated: Path) -> None:
        (isolated / "pyproject.toml").write_text('[tool.minimaxviz]\ndirection = "ltr"\n')

        result = runner.invoke(app, ["eval", CANONICAL, "-d", "rtl"])

        assert result.exit_code == 0, result.output
        assert "Pruned: N, L" in result.stdout

    def test_invalid_config(self, isolated: Path) -> None:
        (isolated / "pyproject.toml").write_text('[tool.minimaxviz]\ndirection = "up"\n')

        result = runner.invoke(app, ["eval", CANONICAL])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCompareCommand:
    def test_all_directions_agree(self, isolated: Path) -> None:
        result = runner.invoke(app, ["compare", CANONICAL])

        assert result.exit_code == 0, result.output
        for direction in ("none", "ltr", "rtl"):
            assert direction in result.stdout
        assert "N, L" in result.stdout
        assert "I, K" in result.stdout
        assert "All directions agree" in result.output


class TestTraceCommand:
    def test_trace(self, isolated: Path) -> None:
        result = runner.invoke(app, ["trace", CANONICAL, "-d", "rtl"])

        assert result.exit_code == 0, result.output
        assert "cutoff" in result.stdout
        assert "prune" in result.stdout
        assert "Root value: 4" in result.stdout


class TestCheckCommand:
    def test_valid(self, isolated: Path) -> None:
        result = runner.invoke(app, ["check", str(EXAMPLES_DIR / "canonical.json")])

        assert result.exit_code == 0, result.output
        assert "Tree is valid" in result.output

    def test_invalid(self, isolated: Path) -> None:
        broken = isolated / "broken.json"
        broken.write_text('{"label": "A", "value": true}')

        result = runner.invoke(app, ["check", str(broken)])

        assert result.exit_code == 1
        assert "Invalid tree" in result.output

    def test_invalid_utf8(self, isolated: Path) -> None:
        broken = isolated / "broken.tree"
        broken.write_bytes(b"node('\xff', 3)")

        result = runner.invoke(app, ["check", str(broken)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid tree" in result.output


class TestInitCommand:
    @pytest.mark.parametrize("filename", ["tree.tree", "tree.json", "tree.toml"])
    def test_writes_default_tree(self, isolated: Path, filename: str) -> None:
        output = isolated / filename

        result = runner.invoke(app, ["init", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert load_tree(output) == parse_tree_expression(DEFAULT_TREE)

    def test_refuses_to_overwrite(self, isolated: Path) -> None:
        output = isolated / "tree.tree"
        output.write_text("node('keep', 1)")

        result = runner.invoke(app, ["init", "-o", str(output)])

        assert result.exit_code == 1
        assert "Output file already exists" in result.output
        assert output.read_text() == "node('keep', 1)"

    def test_force(self, isolated: Path) -> None:
        output = isolated / "tree.tree"
        output.write_text("node('keep', 1)")

        result = runner.invoke(app, ["init", "-o", str(output), "--force"])

        assert result.exit_code == 0, result.output
        assert output.read_text() == DEFAULT_TREE + "\n"


class TestExportCommand:
    def test_html(self, isolated: Path) -> None:
        output = isolated / "site" / "tree.html"

        result = runner.invoke(app, ["export", CANONICAL, "-d", "ltr", "-o", str(output), "--title", "Lecture"])

        assert result.exit_code == 0, result.output
        html = output.read_text()
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Lecture</title>" in html

    def test_default_output(self, isolated: Path) -> None:
        result = runner.invoke(app, ["export", CANONICAL])

        assert result.exit_code == 0, result.output
        assert (isolated / "tree.html").exists()

    def test_graph_json(self, isolated: Path) -> None:
        output = isolated / "graph.json"

        result = runner.invoke(app, ["export", CANONICAL, "-d", "rtl", "--format", "json", "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["name"] == "Max: A (4)"
        assert data["keyProp"] == "id"

    def test_unknown_format(self, isolated: Path) -> None:
        result = runner.invoke(app, ["export", CANONICAL, "--format", "svg"])

        assert result.exit_code == 1
        assert "Unknown format" in result.output

"""Tests for tree documents and evaluation export."""

import json
import tomllib
from pathlib import Path

import pytest

from minimaxviz._direction import Direction
from minimaxviz._eval_engine import evaluate
from minimaxviz._io import (
    dump_tree,
    evaluation_to_dict,
    export_evaluation,
    load_tree,
    tree_from_dict,
    tree_to_dict,
)
from minimaxviz._node import Internal, InvalidTreeError, Leaf, node
from minimaxviz._parse import DEFAULT_TREE, TreeSyntaxError, parse_tree_expression

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


class TestTreeFromDict:
    def test_leaf(self):
        assert tree_from_dict({"label": "A", "value": 3}) == Leaf(label="A", value=3)

    def test_internal(self):
        root = tree_from_dict({"label": "A", "children": [{"label": "B", "value": 1}, {"label": "C", "value": 2.5}]})

        assert isinstance(root, Internal)
        assert [child.value for child in root.children] == [1, 2.5]

    def test_missing_value_and_children(self):
        with pytest.raises(InvalidTreeError, match="needs either"):
            tree_from_dict({"label": "A"})

    def test_both_value_and_children(self):
        with pytest.raises(InvalidTreeError, match="cannot have both"):
            tree_from_dict({"label": "A", "value": 1, "children": [{"label": "B", "value": 1}]})

    def test_empty_children(self):
        with pytest.raises(InvalidTreeError, match="empty 'children'"):
            tree_from_dict({"label": "A", "children": []})

    def test_bool_value(self):
        with pytest.raises(InvalidTreeError, match="boolean"):
            tree_from_dict({"label": "A", "value": True})

    def test_string_value(self):
        with pytest.raises(InvalidTreeError):
            tree_from_dict({"label": "A", "value": "three"})

    def test_numeric_string_value(self):
        with pytest.raises(InvalidTreeError):
            tree_from_dict({"label": "A", "value": "3"})

    def test_huge_integer_value(self):
        assert tree_from_dict({"label": "A", "value": 10**400}) == Leaf(label="A", value=10**400)

    def test_non_finite_value(self):
        with pytest.raises(InvalidTreeError, match="finite"):
            tree_from_dict({"label": "A", "value": float("nan")})

    def test_unknown_key(self):
        with pytest.raises(InvalidTreeError):
            tree_from_dict({"label": "A", "value": 1, "score": 2})

    def test_nested_error(self):
        with pytest.raises(InvalidTreeError):
            tree_from_dict({"label": "A", "children": [{"label": "B"}]})

    def test_to_dict_is_inverse(self):
        root = parse_tree_expression(DEFAULT_TREE)
        assert tree_from_dict(tree_to_dict(root)) == root


class TestLoadTree:
    def test_example_files_agree(self):
        expected = parse_tree_expression(DEFAULT_TREE)

        assert load_tree(EXAMPLES_DIR / "canonical.tree") == expected
        assert load_tree(EXAMPLES_DIR / "canonical.json") == expected

    def test_toml_example(self):
        root = load_tree(EXAMPLES_DIR / "tictactoe_endgame.toml")

        assert root.label == "root"
        assert [child.label for child in root.children] == ["X:c1", "X:b2", "X:a3"]
        assert evaluate(root).value == 1

    def test_toml_example_prunes_by_direction(self):
        root = load_tree(EXAMPLES_DIR / "tictactoe_endgame.toml")

        rtl = evaluate(root, Direction.RIGHT_TO_LEFT)
        ltr = evaluate(root, Direction.LEFT_TO_RIGHT)

        assert [n.label for n in rtl.pruned_nodes()] == ["O:c1"]
        assert [n.label for n in ltr.pruned_nodes()] == ["O:a3"]
        assert rtl.value == ltr.value == 1

    def test_string_path(self, tmp_path: Path):
        path = tmp_path / "t.tree"
        path.write_text("node('A', 1)")
        assert load_tree(str(path)) == Leaf(label="A", value=1)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(InvalidTreeError, match="Invalid JSON"):
            load_tree(path)

    def test_json_nan_rejected(self, tmp_path: Path):
        path = tmp_path / "nan.json"
        path.write_text('{"label": "A", "value": NaN}')
        with pytest.raises(InvalidTreeError, match="finite"):
            load_tree(path)

    def test_toml_without_tree_table(self, tmp_path: Path):
        path = tmp_path / "empty.toml"
        path.write_text('title = "nothing here"\n')
        with pytest.raises(InvalidTreeError, match=r"No \[tree\] table"):
            load_tree(path)

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "broken.toml"
        path.write_text("[tree\n")
        with pytest.raises(InvalidTreeError, match="Invalid TOML"):
            load_tree(path)

    def test_invalid_expression(self, tmp_path: Path):
        path = tmp_path / "broken.txt"
        path.write_text("node('A', [")
        with pytest.raises(TreeSyntaxError):
            load_tree(path)

    @pytest.mark.parametrize("filename", ["bad.tree", "bad.json", "bad.toml"])
    def test_invalid_utf8(self, tmp_path: Path, filename: str):
        path = tmp_path / filename
        path.write_bytes(b"node('\xff', 3)")
        with pytest.raises(InvalidTreeError, match="not valid UTF-8"):
            load_tree(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_tree(tmp_path / "missing.tree")


class TestDumpTree:
    @pytest.mark.parametrize("filename", ["tree.json", "tree.toml", "tree.tree"])
    def test_round_trip(self, tmp_path: Path, filename: str):
        root = parse_tree_expression(DEFAULT_TREE)
        path = tmp_path / filename

        dump_tree(root, path)

        assert load_tree(path) == root

    def test_expression_output_is_readable(self, tmp_path: Path):
        path = tmp_path / "tree.tree"
        dump_tree(parse_tree_expression(DEFAULT_TREE), path)
        assert path.read_text() == DEFAULT_TREE + "\n"


class TestExportEvaluation:
    def test_evaluation_to_dict(self):
        evaluation = evaluate(parse_tree_expression(DEFAULT_TREE), Direction.RIGHT_TO_LEFT)

        data = evaluation_to_dict(evaluation)

        assert data["direction"] == "rtl"
        assert data["start"] == "max"
        assert data["value"] == 4
        assert data["pruned"] == ["N", "L"]
        assert data["tree"]["display_label"] == "A (4)"
        assert data["tree"]["role"] == "max"
        assert data["tree"]["alpha"] == "-inf"
        assert data["tree"]["beta"] == "inf"

    def test_huge_integer_bounds(self):
        evaluation = evaluate(node("A", [node("B", 10**400), node("C", 1)]), Direction.RIGHT_TO_LEFT)

        data = evaluation_to_dict(evaluation)

        assert data["value"] == 10**400
        assert data["tree"]["children"][1]["alpha"] == 10**400
        assert data["tree"]["children"][1]["beta"] == "inf"

    def test_json(self, tmp_path: Path):
        evaluation = evaluate(parse_tree_expression(DEFAULT_TREE), Direction.LEFT_TO_RIGHT)
        path = tmp_path / "result.json"

        export_evaluation(evaluation, path)

        data = json.loads(path.read_text())
        assert data["pruned"] == ["I", "K"]
        f_node = data["tree"]["children"][1]["children"][0]
        assert f_node["label"] == "F"
        i_node = f_node["children"][0]
        assert i_node["label"] == "I"
        assert i_node["value"] is None
        assert i_node["pruned"] is True
        assert i_node["visited"] is False

    def test_toml_drops_missing_values(self, tmp_path: Path):
        evaluation = evaluate(parse_tree_expression(DEFAULT_TREE), Direction.LEFT_TO_RIGHT)
        path = tmp_path / "result.toml"

        export_evaluation(evaluation, path)

        with path.open("rb") as f:
            data = tomllib.load(f)
        assert data["value"] == 4
        i_node = data["tree"]["children"][1]["children"][0]["children"][0]
        assert i_node["label"] == "I"
        assert "value" not in i_node
        assert "alpha" not in i_node

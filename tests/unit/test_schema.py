"""Unit tests for bootstrap statement parsing."""

from __future__ import annotations

from socialgraph.graph.schema import load_bootstrap_file
from socialgraph.graph.schema import SCHEMA_STATEMENTS
from socialgraph.graph.schema import split_statements


class TestSplitStatements:
    def test_splits_on_semicolons_and_trims(self):
        text = "CREATE (a:Person {name: 'A'});\n  CREATE (b:Person {name: 'B'}) ;\n"
        assert split_statements(text) == [
            "CREATE (a:Person {name: 'A'})",
            "CREATE (b:Person {name: 'B'})",
        ]

    def test_drops_empty_statements(self):
        assert split_statements(";;  ;\n") == []

    def test_keeps_multiline_statements_whole(self):
        text = "MATCH (p:Person)\nRETURN p;"
        assert split_statements(text) == ["MATCH (p:Person)\nRETURN p"]

    def test_comment_lines_are_ignored(self):
        text = "// header;\nRETURN 1;\n// RETURN 2;\nRETURN 3"
        assert split_statements(text) == ["RETURN 1", "RETURN 3"]


class TestLoadBootstrapFile:
    def test_reads_statements_in_order(self, tmp_path):
        path = tmp_path / "boot.cypher"
        path.write_text("RETURN 1;\nRETURN 2;\n", encoding="utf-8")
        assert load_bootstrap_file(path) == ["RETURN 1", "RETURN 2"]


def test_schema_statements_are_idempotent():
    assert SCHEMA_STATEMENTS
    assert all("IF NOT EXISTS" in stmt for stmt in SCHEMA_STATEMENTS)

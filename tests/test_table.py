"""Tests for the translation table."""

from sitelang.table import MISSING, LookupResult, TranslationTable


TABLE = {
    "a": {"b": {"c": "leaf"}},
    "title": "Top",
    "count": 3,
    "items": ["x", "y"],
    "empty": "",
    "_meta": {"language_name": "English", "flag": "gb"},
}


class TestResolve:
    def test_nested_leaf(self):
        assert TranslationTable(TABLE).resolve("a.b.c") == LookupResult(True, "leaf")

    def test_top_level_leaf(self):
        assert TranslationTable(TABLE).resolve("title").value == "Top"

    def test_missing_segment(self):
        assert TranslationTable(TABLE).resolve("a.x.c") is MISSING

    def test_path_too_deep(self):
        assert TranslationTable(TABLE).resolve("a.b.c.d").found is False

    def test_terminal_mapping_is_missing(self):
        assert TranslationTable(TABLE).resolve("a.b").found is False

    def test_non_string_leaves_are_missing(self):
        table = TranslationTable(TABLE)
        assert table.resolve("count").found is False
        assert table.resolve("items").found is False

    def test_empty_string_is_found(self):
        assert TranslationTable(TABLE).resolve("empty") == LookupResult(True, "")

    def test_empty_key(self):
        assert TranslationTable(TABLE).resolve("").found is False
        assert TranslationTable(TABLE).resolve(None).found is False


class TestTable:
    def test_empty(self):
        table = TranslationTable.empty()
        assert len(table) == 0
        assert table.as_dict() == {}

    def test_meta(self):
        assert TranslationTable(TABLE).meta()["language_name"] == "English"

    def test_meta_missing(self):
        assert TranslationTable({"a": "b"}).meta() == {}

    def test_copy_of_input(self):
        data = {"a": "b"}
        table = TranslationTable(data)
        data["c"] = "d"
        assert "c" not in table.as_dict()

"""Tests for statistics, cursor paths and JSONPath queries."""

import pytest

from jsonbench import get_json_path_at_position, get_json_stats, query_json_path
from jsonbench.errors import ParseError
from jsonbench.jsonpath import WILDCARD, parse_path


class TestStats:

    def test_example_document(self) -> None:
        stats = get_json_stats('{"a":1,"b":[2,3]}')
        # object, 1, array, 2, 3
        assert stats.node_count == 5
        assert stats.depth == 2
        assert stats.byte_size == 17

    def test_scalar(self) -> None:
        stats = get_json_stats("5")
        assert (stats.node_count, stats.depth) == (1, 0)

    def test_byte_size_is_utf8(self) -> None:
        assert get_json_stats('"é"').byte_size == 4

    def test_invalid(self) -> None:
        assert get_json_stats("{") is None

    def test_to_dict(self) -> None:
        assert get_json_stats("[]").to_dict() == {"nodeCount": 1, "depth": 0, "byteSize": 2}


class TestPathAtPosition:

    DOC = '{"a": {"b": [10, 20, 30]}}'

    def test_array_index(self) -> None:
        assert get_json_path_at_position(self.DOC, self.DOC.index("20")) == "$.a.b[1]"

    def test_object_member(self) -> None:
        text = '[{"x": 1}, {"y": 2}]'
        assert get_json_path_at_position(text, text.index("2")) == "$[1].y"

    def test_start(self) -> None:
        assert get_json_path_at_position(self.DOC, 0) == "$"

    def test_offset_past_end(self) -> None:
        assert get_json_path_at_position(self.DOC, 10_000) == "$"

    def test_negative_offset(self) -> None:
        assert get_json_path_at_position(self.DOC, -5) == "$"

    def test_bad_input_never_raises(self) -> None:
        assert get_json_path_at_position(None, 3) == "$"


class TestJsonPath:

    DOC = (
        '{"store": {"book": [{"title": "A", "price": 8}, '
        '{"title": "B", "price": 12}], "name": "shop"}}'
    )

    @pytest.mark.parametrize("path, expected", [
        ("$", [{"store": {"book": [{"title": "A", "price": 8},
                                   {"title": "B", "price": 12}],
                          "name": "shop"}}]),
        ("$.store.book[0].title", ["A"]),
        ("$.store.book[*].price", [8, 12]),
        ("$..title", ["A", "B"]),
        ("$['store']['book'][-1].title", ["B"]),
        ('$.store["name"]', ["shop"]),
        ("$.store.book.*.title", ["A", "B"]),
        ("$.missing", []),
        ("$.store.book[5]", []),
    ])
    def test_query(self, path, expected) -> None:
        res = query_json_path(self.DOC, path)
        assert res.success
        assert res.result == expected

    def test_parse_path(self) -> None:
        assert parse_path("$.a[0][*]..b") == [
            ("a", False), (0, False), (WILDCARD, False), ("b", True),
        ]

    @pytest.mark.parametrize("path", ["store.book", "$.", "$[abc]", "$.a b"])
    def test_bad_paths(self, path) -> None:
        with pytest.raises(ParseError):
            parse_path(path)

    def test_bad_path_envelope(self) -> None:
        res = query_json_path(self.DOC, "store")
        assert not res.success
        assert "JSONPath" in res.error

    def test_bad_json(self) -> None:
        assert not query_json_path("{", "$").success

"""Tests for string escaping and CSV bridging."""

import json

from jsonbench import csv_to_json, escape_string, json_to_csv, unescape_string
from jsonbench.encoding import dec_base64, looks_like_base64, strip_data_uri


class TestEscaping:

    def test_escape(self) -> None:
        res = escape_string('line1\nline2 "q" \\ é')
        assert res.result == 'line1\\nline2 \\"q\\" \\\\ é'

    def test_round_trip(self) -> None:
        text = 'tab\there\r\n"quoted" \\ back'
        assert unescape_string(escape_string(text).result).result == text

    def test_unescape_strict(self) -> None:
        assert unescape_string("a\\u00e9b").result == "aéb"

    def test_unescape_lenient_fallback(self) -> None:
        res = unescape_string("it\\'s\\n")
        assert res.success
        assert res.result == "it's\n"

    def test_unescape_unbalanced_quote(self) -> None:
        res = unescape_string('say "hi\\n')
        assert res.success
        assert res.result == 'say "hi\n'


class TestBase64Helpers:

    def test_strip_data_uri(self) -> None:
        assert strip_data_uri("data:text/plain;base64,QUJD") == "QUJD"
        assert strip_data_uri("QUJD") == "QUJD"

    def test_looks_like_base64(self) -> None:
        assert looks_like_base64("QUJD", 4)
        assert not looks_like_base64("QUJD", 20)
        assert not looks_like_base64("{not}", 1)

    def test_dec_base64(self) -> None:
        assert dec_base64("QUJD") == "ABC"


class TestCsv:

    def test_json_to_csv(self) -> None:
        res = json_to_csv('[{"a": 1, "b": "x"}, {"a": 2, "c": true}]')
        assert res.success
        assert res.result == "a,b,c\n1,x,\n2,,true"

    def test_single_object(self) -> None:
        assert json_to_csv('{"a": 1, "b": null}').result == "a,b\n1,"

    def test_nested_values_serialized(self) -> None:
        res = json_to_csv('[{"a": {"b": 1}}]')
        assert res.result == 'a\n"{""b"":1}"'

    def test_scalar_rows(self) -> None:
        assert json_to_csv("[1, 2]").result == "value\n1\n2"

    def test_empty_array(self) -> None:
        res = json_to_csv("[]")
        assert not res.success
        assert res.error

    def test_csv_to_json(self) -> None:
        res = csv_to_json('name,age,active\nBob,30,true\n"Ann",x,false\nCid,,')
        assert res.success
        assert json.loads(res.result) == [
            {"name": "Bob", "age": 30, "active": True},
            {"name": "Ann", "age": "x", "active": False},
            {"name": "Cid", "age": "", "active": ""},
        ]

    def test_short_rows_padded(self) -> None:
        res = csv_to_json("a,b\n1")
        assert json.loads(res.result) == [{"a": 1, "b": ""}]

    def test_header_only(self) -> None:
        assert not csv_to_json("a,b").success

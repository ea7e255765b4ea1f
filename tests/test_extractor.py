"""Tests for cURL / Base64 / URL / log-line extraction."""

import base64
import json
import urllib.parse

import pytest

from jsonbench import decode_base64_json, extract_from_curl, smart_extract
from jsonbench.curl_parser import parse_curl


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestCurlParser:
    """Tokenising curl commands."""

    def test_basic(self) -> None:
        req = parse_curl(
            "curl -X POST https://api.example.com "
            "-H 'Content-Type: application/json' -d '{\"x\":1}'"
        )
        assert req.url == "https://api.example.com"
        assert req.method == "POST"
        assert req.headers == {"Content-Type": "application/json"}
        assert req.data == '{"x":1}'

    def test_line_continuations(self) -> None:
        req = parse_curl("curl https://a.io \\\n  --data-raw '[1]'")
        assert req.url == "https://a.io"
        assert req.data == "[1]"
        assert req.effective_method == "POST"

    def test_first_data_flag_wins(self) -> None:
        req = parse_curl("curl https://a.io -d '{\"a\":1}' --data-binary '{\"b\":2}'")
        assert req.data == '{"a":1}'

    def test_credentials_and_cookies_are_skipped(self) -> None:
        req = parse_curl(
            "curl -u bob:pw -b 'sid=1' --url https://a.io --json '{}'"
        )
        assert req.url == "https://a.io"
        assert req.data == "{}"
        assert req.headers == {"Content-Type": "application/json"}
        assert req.effective_method == "POST"

    def test_defaults_to_get(self) -> None:
        assert parse_curl("curl https://a.io").effective_method == "GET"

    def test_flag_values_are_not_urls(self) -> None:
        req = parse_curl("curl -e https://ref.io https://real.io")
        assert req.url == "https://real.io"

    def test_unbalanced_quotes(self) -> None:
        req = parse_curl("curl https://a.io -d '{\"a\": 1}")
        assert req.url == "https://a.io"
        assert req.data is not None

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            parse_curl("   ")


class TestExtractFromCurl:
    """Body extraction from curl invocations."""

    def test_json_body(self) -> None:
        res = extract_from_curl(
            'curl -X POST https://api.example.com '
            '-H "Content-Type: application/json" -d \'{"x":1}\''
        )
        assert res.success
        assert json.loads(res.result) == {"x": 1}
        assert res.method == "POST"
        assert res.url == "https://api.example.com"
        assert res.headers == {"Content-Type": "application/json"}

    def test_malformed_body_is_repaired(self) -> None:
        res = extract_from_curl("curl https://x.io -d \"{a: 1,}\"")
        assert res.success
        assert json.loads(res.result) == {"a": 1}

    def test_non_json_body_returned_raw(self) -> None:
        res = extract_from_curl("curl https://x.io -d name=bob")
        assert res.success
        assert res.result == "name=bob"
        assert res.to_dict()["method"] == "POST"

    def test_no_body(self) -> None:
        res = extract_from_curl("curl https://x.io -H 'A: b'")
        assert not res.success
        assert res.url == "https://x.io"
        assert res.method == "GET"
        assert res.headers == {"A": "b"}

    def test_not_curl(self) -> None:
        res = extract_from_curl("wget https://x.io")
        assert not res.success


class TestDecodeBase64:
    """Base64 payloads."""

    def test_json_payload(self) -> None:
        res = decode_base64_json(b64('{"hello": "world"}'))
        assert res.success
        assert json.loads(res.result) == {"hello": "world"}

    def test_data_uri_and_whitespace(self) -> None:
        encoded = b64('[1, 2, 3]')
        res = decode_base64_json(f"data:application/json;base64,{encoded[:4]}\n{encoded[4:]}")
        assert json.loads(res.result) == [1, 2, 3]

    def test_missing_padding(self) -> None:
        res = decode_base64_json(b64('{"a":1}').rstrip("="))
        assert json.loads(res.result) == {"a": 1}

    def test_plain_text_payload(self) -> None:
        res = decode_base64_json(b64("just words"))
        assert res.success
        assert res.result == "just words"

    def test_invalid(self) -> None:
        res = decode_base64_json("not*base64!")
        assert not res.success


class TestSmartExtract:
    """Strategy order and detected types."""

    def test_curl(self) -> None:
        res = smart_extract(
            'curl -X POST https://api.example.com '
            '-H "Content-Type: application/json" -d \'{"x":1}\''
        )
        assert res.detected_type == "cURL"
        assert res.method == "POST"
        assert json.loads(res.result) == {"x": 1}
        assert res.url == "https://api.example.com"
        assert res.headers == {"Content-Type": "application/json"}

    def test_base64(self) -> None:
        res = smart_extract(b64('{"hello": "world"}'))
        assert res.detected_type == "Base64"
        assert json.loads(res.result) == {"hello": "world"}

    def test_url_encoded(self) -> None:
        res = smart_extract(urllib.parse.quote('{"a": [1, 2]}'))
        assert res.detected_type == "URL-encoded"
        assert json.loads(res.result) == {"a": [1, 2]}

    def test_log_line(self) -> None:
        res = smart_extract('2024-01-01 INFO payload={"id": 3}')
        assert res.detected_type == "Log line"
        assert json.loads(res.result) == {"id": 3}

    def test_log_line_fixed(self) -> None:
        res = smart_extract("INFO data {id: 3,}")
        assert res.detected_type == "Log line (fixed)"
        assert json.loads(res.result) == {"id": 3}

    def test_direct(self) -> None:
        res = smart_extract('  {"a": 1}  ')
        assert res.detected_type == "JSON"

    def test_repaired(self) -> None:
        res = smart_extract("{'a': 1}")
        assert res.detected_type == "JSON (fixed)"
        assert json.loads(res.result) == {"a": 1}

    def test_nothing_found(self) -> None:
        res = smart_extract("hello there")
        assert not res.success
        assert res.error
        assert res.detected_type is None

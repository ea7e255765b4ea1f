"""Tests for the jsonbench command line."""

import io
import json

import pytest

from jsonbench.cli import main


@pytest.fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return feed


class TestCli:

    def test_format_file(self, tmp_path, capsys) -> None:
        src = tmp_path / "in.json"
        src.write_text('{"a":[1,2]}', encoding="utf-8")
        assert main(["format", str(src)]) == 0
        out = capsys.readouterr().out
        assert json.loads(out) == {"a": [1, 2]}
        assert '    "a"' in out

    def test_indent_option(self, stdin, capsys) -> None:
        stdin('{"a": 1}')
        assert main(["--indent", "2", "format"]) == 0
        assert capsys.readouterr().out == '{\n  "a": 1\n}\n'

    def test_format_xml(self, stdin, capsys) -> None:
        stdin("<a><b>1</b></a>")
        assert main(["format", "--fmt", "xml", "-"]) == 0
        assert capsys.readouterr().out == "<a>\n    <b>1</b>\n</a>\n"

    def test_minify(self, stdin, capsys) -> None:
        stdin('{ "a" : 1 }')
        assert main(["minify"]) == 0
        assert capsys.readouterr().out == '{"a":1}\n'

    def test_validate(self, stdin, capsys) -> None:
        stdin("{")
        assert main(["validate"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_detect(self, stdin, capsys) -> None:
        stdin("name: x\nlist:\n  - 1\n")
        assert main(["detect"]) == 0
        assert capsys.readouterr().out.strip() == "yaml"

    def test_convert(self, stdin, capsys) -> None:
        stdin("a: 1\nb: [x, y]\n")
        assert main(["convert", "--from", "yaml", "--to", "json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"a": 1, "b": ["x", "y"]}

    def test_fix_reports_fixes(self, stdin, capsys) -> None:
        stdin("{a: 1,}")
        assert main(["fix"]) == 0
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"a": 1}
        assert "Removed trailing commas" in captured.err
        assert "Quoted bare keys" in captured.err

    def test_extract(self, stdin, capsys) -> None:
        stdin("curl https://api.io -d '{\"k\": true}'")
        assert main(["extract"]) == 0
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"k": True}
        assert "cURL" in captured.err

    def test_stats(self, stdin, capsys) -> None:
        stdin('{"a":1,"b":[2,3]}')
        assert main(["stats"]) == 0
        assert json.loads(capsys.readouterr().out) == {
            "nodeCount": 5, "depth": 2, "byteSize": 17,
        }

    def test_path(self, stdin, capsys) -> None:
        stdin('{"a": [1, 2]}')
        assert main(["path", "--offset", "10"]) == 0
        assert capsys.readouterr().out.strip() == "$.a[1]"

    def test_query(self, stdin, capsys) -> None:
        stdin('{"a": [{"b": 1}, {"b": 2}]}')
        assert main(["query", "--path", "$..b"]) == 0
        assert json.loads(capsys.readouterr().out) == [1, 2]

    def test_json2csv(self, stdin, capsys) -> None:
        stdin('[{"a": 1}, {"a": 2}]')
        assert main(["json2csv"]) == 0
        assert capsys.readouterr().out == "a\n1\n2\n"

    def test_failure_exit_code(self, stdin, capsys) -> None:
        stdin("<a>")
        assert main(["convert", "--from", "xml", "--to", "json"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main(["format", str(tmp_path / "nope.json")]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_bad_env_indent(self, stdin, monkeypatch, capsys) -> None:
        monkeypatch.setenv("JSONBENCH_JSON_INDENT", "wide")
        stdin("{}")
        assert main(["format"]) == 1
        assert "JSONBENCH_JSON_INDENT" in capsys.readouterr().err

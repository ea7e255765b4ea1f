# -*- coding: utf-8 -*-
"""命令行入口 — 从文件或标准输入读取文本，调用转换引擎"""

import argparse
import json
import logging
import sys

from . import (
    compress_json, convert_format, csv_to_json, detect_format, escape_string,
    format_json, format_xml, format_yaml, get_json_path_at_position,
    get_json_stats, json_to_csv, query_json_path, smart_extract,
    try_fix_json, unescape_string, validate_json,
)
from .config import WorkbenchConfig
from .serializers import FORMATS, dump_json


# ── 日志 ──────────────────────────────────────────────────────

def log_ok(msg):
    print(msg)


def log_warn(msg):
    print(f"  [WARN] {msg}", file=sys.stderr)


def log_err(msg):
    print(f"  [ERROR] {msg}", file=sys.stderr)


# ── 子命令 ────────────────────────────────────────────────────

def _read_input(path):
    if path in (None, '-'):
        return sys.stdin.read()
    with open(path, encoding='utf-8') as f:
        return f.read()


def _emit(res):
    """打印结果信封，返回退出码"""
    if res.success:
        result = res.result
        if not isinstance(result, str):
            result = dump_json(result, indent=2)
        log_ok(result)
        return 0
    for fix in getattr(res, 'fixes', None) or []:
        log_warn(f"已尝试: {fix}")
    log_err(res.error)
    return 1


def _cmd_format(args, text, cfg):
    formatter = {'json': format_json, 'xml': format_xml, 'yaml': format_yaml}[args.fmt]
    return _emit(formatter(text, cfg))


def _cmd_minify(args, text, cfg):
    res = compress_json(text)
    if res.success:
        log_warn(f"{res.original_size} → {res.compressed_size} 字节")
    return _emit(res)


def _cmd_validate(args, text, cfg):
    res = validate_json(text)
    if res.valid:
        log_ok("有效的 JSON")
        return 0
    log_err(res.error)
    return 1


def _cmd_detect(args, text, cfg):
    log_ok(detect_format(text))
    return 0


def _cmd_convert(args, text, cfg):
    return _emit(convert_format(text, args.from_fmt, args.to_fmt, cfg))


def _cmd_fix(args, text, cfg):
    res = try_fix_json(text, cfg)
    for fix in res.fixes if res.success else []:
        log_warn(fix)
    return _emit(res)


def _cmd_extract(args, text, cfg):
    res = smart_extract(text, cfg)
    if res.success:
        log_warn(f"识别为: {res.detected_type}")
        if res.url:
            log_warn(f"URL: {res.method} {res.url}")
    return _emit(res)


def _cmd_stats(args, text, cfg):
    stats = get_json_stats(text)
    if stats is None:
        log_err("JSON 解析失败，无法统计")
        return 1
    log_ok(json.dumps(stats.to_dict(), ensure_ascii=False))
    return 0


def _cmd_path(args, text, cfg):
    log_ok(get_json_path_at_position(text, args.offset))
    return 0


def _cmd_query(args, text, cfg):
    return _emit(query_json_path(text, args.path))


def _cmd_escape(args, text, cfg):
    return _emit(escape_string(text))


def _cmd_unescape(args, text, cfg):
    return _emit(unescape_string(text))


def _cmd_csv2json(args, text, cfg):
    return _emit(csv_to_json(text, cfg))


def _cmd_json2csv(args, text, cfg):
    return _emit(json_to_csv(text))


def build_parser():
    parser = argparse.ArgumentParser(
        prog="jsonbench",
        description="JSON / XML / YAML 格式化、互转与修复",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "示例:\n"
            "  jsonbench convert --from yaml --to json config.yaml\n"
            "  jsonbench fix broken.json\n"
            "  pbpaste | jsonbench extract\n"
        ),
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="输出调试日志")
    parser.add_argument("--indent", type=int, default=None,
                        help="JSON / YAML / XML 缩进宽度 (默认 4)")
    sub = parser.add_subparsers(dest="command", required=True)

    def add(name, handler, help_text):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("input", nargs="?", default=None,
                       help="输入文件 (默认: 标准输入)")
        p.set_defaults(handler=handler)
        return p

    p = add("format", _cmd_format, "美化")
    p.add_argument("--fmt", choices=FORMATS, default="json")
    add("minify", _cmd_minify, "压缩 JSON")
    add("validate", _cmd_validate, "校验 JSON")
    add("detect", _cmd_detect, "识别格式")
    p = add("convert", _cmd_convert, "格式互转")
    p.add_argument("--from", dest="from_fmt", choices=FORMATS, default=None,
                   help="输入格式 (默认: 自动识别)")
    p.add_argument("--to", dest="to_fmt", choices=FORMATS, required=True)
    add("fix", _cmd_fix, "修复 JSON")
    add("extract", _cmd_extract, "从 cURL / Base64 / 日志中提取 JSON")
    add("stats", _cmd_stats, "节点数 / 深度 / 字节数")
    p = add("path", _cmd_path, "字符偏移对应的 JSONPath")
    p.add_argument("--offset", type=int, required=True)
    p = add("query", _cmd_query, "JSONPath 查询")
    p.add_argument("--path", required=True)
    add("escape", _cmd_escape, "字符串转义")
    add("unescape", _cmd_unescape, "字符串反转义")
    add("csv2json", _cmd_csv2json, "CSV → JSON")
    add("json2csv", _cmd_json2csv, "JSON → CSV")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="  [%(levelname)s] %(name)s: %(message)s")

    try:
        cfg = WorkbenchConfig.from_env()
        if args.indent is not None:
            cfg = WorkbenchConfig(json_indent=args.indent,
                                  yaml_indent=args.indent,
                                  xml_indent=args.indent,
                                  base64_min_length=cfg.base64_min_length)
        text = _read_input(args.input)
    except (OSError, ValueError) as e:
        log_err(e)
        return 1
    return args.handler(args, text, cfg)

# -*- coding: utf-8 -*-
"""JSONPath 查询（常用子集）

支持:
    $            根
    .key / ['key']   成员
    [n]          数组下标（可为负数）
    .* / [*]     通配
    ..key / ..*  递归下降
"""

import logging
import re

from .errors import ParseError
from .results import QueryResult
from .serializers import load_json

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r'[^.\[\]\s]+')
_BRACKET_RE = re.compile(
    r"\[\s*(?:(?P<star>\*)|(?P<index>-?\d+)|'(?P<sq>(?:[^'\\]|\\.)*)'"
    r'|"(?P<dq>(?:[^"\\]|\\.)*)")\s*\]')

WILDCARD = object()


def parse_path(path: str):
    """将 JSONPath 拆分为 [(selector, recursive), ...]

    selector: str 键名 / int 下标 / WILDCARD
    """
    path = path.strip()
    if not path.startswith('$'):
        raise ParseError(f"JSONPath 语法错误: 必须以 $ 开头: {path!r}")

    steps = []
    pos = 1
    while pos < len(path):
        recursive = False
        if path.startswith('..', pos):
            recursive = True
            pos += 2
        elif path[pos] == '.':
            pos += 1

        if pos < len(path) and path[pos] == '[':
            m = _BRACKET_RE.match(path, pos)
            if not m:
                raise ParseError(f"JSONPath 语法错误: 位置 {pos} 处的 [ ] 无法识别")
            if m.group('star'):
                selector = WILDCARD
            elif m.group('index') is not None:
                selector = int(m.group('index'))
            else:
                raw = m.group('sq') if m.group('sq') is not None else m.group('dq')
                selector = re.sub(r'\\(.)', r'\1', raw)
            pos = m.end()
        elif pos < len(path) and path[pos] == '*':
            selector = WILDCARD
            pos += 1
        else:
            m = _NAME_RE.match(path, pos)
            if not m:
                raise ParseError(f"JSONPath 语法错误: 位置 {pos} 处缺少键名")
            selector = m.group()
            pos = m.end()
        steps.append((selector, recursive))
    return steps


def _descendants(value):
    yield value
    if isinstance(value, dict):
        children = list(value.values())
    elif isinstance(value, list):
        children = value
    else:
        return
    for child in children:
        yield from _descendants(child)


def _select(value, selector):
    if selector is WILDCARD:
        if isinstance(value, dict):
            return list(value.values())
        if isinstance(value, list):
            return list(value)
        return []
    if isinstance(selector, int):
        if isinstance(value, list) and -len(value) <= selector < len(value):
            return [value[selector]]
        return []
    if isinstance(value, dict) and selector in value:
        return [value[selector]]
    return []


def evaluate(data, steps):
    nodes = [data]
    for selector, recursive in steps:
        if recursive:
            nodes = [d for node in nodes for d in _descendants(node)]
        nodes = [hit for node in nodes for hit in _select(node, selector)]
    return nodes


def query_json_path(text, path) -> QueryResult:
    """在 JSON 文本上执行 JSONPath 查询，result 为匹配值列表"""
    try:
        steps = parse_path(path)
        return QueryResult.ok(evaluate(load_json(text), steps))
    except Exception as e:
        logger.debug("query_json_path failed: %s", e)
        return QueryResult.fail(e)

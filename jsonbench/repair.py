# -*- coding: utf-8 -*-
"""JSON 修复引擎 — 按固定顺序做文本替换，直到能被严格解析

修复步骤（顺序固定，命中即记录）:
    1. 单引号字符串 → 双引号
    2. 去掉 } / ] 前的尾随逗号
    3. 给裸键名加引号
    4. 补齐缺失的 } / ]（全文计数，不区分字符串内外）
    5. 删除 // 行注释和 /* */ 块注释
"""

import logging
import re

from .config import resolve
from .errors import ParseError
from .results import FixResult
from .serializers import dump_json, load_json

logger = logging.getLogger(__name__)

FIX_SINGLE_QUOTES = 'Replaced single quotes with double quotes'
FIX_TRAILING_COMMAS = 'Removed trailing commas'
FIX_BARE_KEYS = 'Quoted bare keys'
FIX_COMMENTS = 'Removed comments'

# 每个模式的第一分支匹配双引号字符串，原样跳过
_DQ_STRING = r'"(?:[^"\\\n]|\\.)*"'
_SINGLE_QUOTED_RE = re.compile(_DQ_STRING + r"|(?<!\\)'((?:[^'\\]|\\.)*)'", re.S)
_TRAILING_COMMA_RE = re.compile(_DQ_STRING + r'|,(\s*[}\]])', re.S)
_BARE_KEY_RE = re.compile(_DQ_STRING + r'|([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)', re.S)
_COMMENT_RE = re.compile(_DQ_STRING + r'|(//[^\n]*|/\*[\s\S]*?\*/)', re.S)

_CLOSERS = {'{': '}', '[': ']'}


def _sub_outside_strings(pattern, text, repl):
    """只替换双引号字符串之外的命中，返回 (新文本, 命中次数)"""
    hits = 0

    def _replace(m):
        nonlocal hits
        if m.lastindex is None or m.group(1) is None:
            return m.group(0)
        hits += 1
        return repl(m)

    return pattern.sub(_replace, text), hits


def _to_double_quoted(m):
    body = m.group(1).replace("\\'", "'")
    body = re.sub(r'(?<!\\)"', r'\\"', body)
    return f'"{body}"'


def _balance_brackets(text):
    """按全文计数补齐缺失的闭合符，返回 (新文本, 缺 } 数, 缺 ] 数)"""
    need = {
        '}': text.count('{') - text.count('}'),
        ']': text.count('[') - text.count(']'),
    }
    missing_braces, missing_brackets = max(need['}'], 0), max(need[']'], 0)
    if not missing_braces and not missing_brackets:
        return text, 0, 0

    # 未闭合的开符号栈，决定追加顺序（内层先闭合）
    stack = []
    for ch in text:
        if ch in _CLOSERS:
            stack.append(ch)
        elif ch in '}]' and stack and _CLOSERS[stack[-1]] == ch:
            stack.pop()

    need = {'}': missing_braces, ']': missing_brackets}
    tail = []
    for opener in reversed(stack):
        closer = _CLOSERS[opener]
        if need[closer] > 0:
            tail.append(closer)
            need[closer] -= 1
    tail.append(']' * need[']'])
    tail.append('}' * need['}'])

    # 末行是 // 注释时另起一行，免得闭合符被当成注释删掉
    last_line = text.rsplit('\n', 1)[-1]
    sep = '\n' if '//' in last_line else ''
    return text + sep + ''.join(tail), missing_braces, missing_brackets


def try_fix_json(text, config=None) -> FixResult:
    """尝试修复常见 JSON 错误，返回修复后的格式化文本及已应用的修复列表"""
    cfg = resolve(config)
    fixes = []
    try:
        try:
            return FixResult.ok(dump_json(load_json(text), indent=cfg.json_indent),
                                fixes=fixes)
        except ParseError:
            pass

        fixed, hits = _sub_outside_strings(_SINGLE_QUOTED_RE, text, _to_double_quoted)
        if hits:
            fixes.append(FIX_SINGLE_QUOTES)

        fixed, hits = _sub_outside_strings(_TRAILING_COMMA_RE, fixed,
                                           lambda m: m.group(1))
        if hits:
            fixes.append(FIX_TRAILING_COMMAS)

        fixed, hits = _sub_outside_strings(
            _BARE_KEY_RE, fixed,
            lambda m: f'{m.group(1)}"{m.group(2)}"{m.group(3)}')
        if hits:
            fixes.append(FIX_BARE_KEYS)

        fixed, braces, brackets = _balance_brackets(fixed)
        if braces:
            fixes.append(f'Added {braces} missing closing brace(s)')
        if brackets:
            fixes.append(f'Added {brackets} missing closing bracket(s)')

        fixed, hits = _sub_outside_strings(_COMMENT_RE, fixed, lambda m: '')
        if hits:
            fixes.append(FIX_COMMENTS)

        value = load_json(fixed)
        return FixResult.ok(dump_json(value, indent=cfg.json_indent), fixes=fixes)
    except Exception as e:
        logger.debug("try_fix_json failed after %s: %s", fixes, e)
        return FixResult.fail(e, fixes=fixes)

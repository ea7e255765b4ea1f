# -*- coding: utf-8 -*-
"""编码/解码 — JSON 字符串转义、Base64、URL 编码"""

import base64
import binascii
import json
import logging
import re
import urllib.parse

from .results import Result

logger = logging.getLogger(__name__)

BASE64_RE = re.compile(r'^[A-Za-z0-9+/]+=*$')
_DATA_URI_RE = re.compile(r'^data:[^,]*,', re.IGNORECASE)

# 宽松反转义表（严格解析失败时按顺序替换）
_LENIENT_UNESCAPES = [
    ('\\n', '\n'),
    ('\\r', '\r'),
    ('\\t', '\t'),
    ('\\"', '"'),
    ('\\\\', '\\'),
    ("\\'", "'"),
]


# ── JSON 字符串转义 ──────────────────────────────────────────
def escape_string(text) -> Result:
    """转义特殊字符（按 JSON 字符串规则），不带外层引号"""
    try:
        return Result.ok(json.dumps(text, ensure_ascii=False)[1:-1])
    except Exception as e:
        logger.debug("escape_string failed: %s", e)
        return Result.fail(e)


def unescape_string(text) -> Result:
    """还原转义序列；严格解析失败时退回宽松替换"""
    try:
        return Result.ok(json.loads(f'"{text}"'))
    except ValueError:
        pass
    except Exception as e:
        logger.debug("unescape_string failed: %s", e)
        return Result.fail(e)

    result = text
    for escaped, raw in _LENIENT_UNESCAPES:
        result = result.replace(escaped, raw)
    return Result.ok(result)


# ── Base64 / URL ────────────────────────────────────────────
def strip_data_uri(text: str) -> str:
    """去掉 data:xxx;base64, 前缀"""
    return _DATA_URI_RE.sub('', text.strip(), count=1)


def looks_like_base64(text: str, min_length: int = 1) -> bool:
    cleaned = re.sub(r'\s', '', strip_data_uri(text))
    return len(cleaned.rstrip('=')) >= min_length and bool(BASE64_RE.match(cleaned))


def dec_base64(text: str) -> str:
    """Base64 解码为 UTF-8 文本（自动补齐 padding）"""
    cleaned = re.sub(r'\s', '', strip_data_uri(text))
    if not BASE64_RE.match(cleaned):
        raise ValueError("不是有效的 Base64 字符串")
    cleaned = cleaned.rstrip('=')
    cleaned += '=' * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Base64 解码失败: {e}")
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise ValueError("Base64 解码结果不是 UTF-8 文本")


def dec_url(text: str) -> str:
    return urllib.parse.unquote(text, errors='strict')

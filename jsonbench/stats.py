# -*- coding: utf-8 -*-
"""JSON 统计与光标路径 — 供树视图、状态栏等展示层使用"""

import logging
from typing import Optional

from .results import JsonStats
from .serializers import load_json

logger = logging.getLogger(__name__)


def _walk(value, depth, acc):
    """前序遍历：每个节点（容器和叶子）各计 1"""
    acc['count'] += 1
    acc['depth'] = max(acc['depth'], depth)
    if isinstance(value, dict):
        children = value.values()
    elif isinstance(value, list):
        children = value
    else:
        return
    for child in children:
        _walk(child, depth + 1, acc)


def get_json_stats(text) -> Optional[JsonStats]:
    """节点数、最大深度（根为 0）、UTF-8 字节数；解析失败返回 None"""
    try:
        data = load_json(text)
        acc = {'count': 0, 'depth': 0}
        _walk(data, 0, acc)
        return JsonStats(node_count=acc['count'], depth=acc['depth'],
                         byte_size=len(text.encode('utf-8')))
    except Exception as e:
        logger.debug("get_json_stats failed: %s", e)
        return None


def get_json_path_at_position(text, position) -> str:
    """返回光标位置对应的 JSONPath，如 $.a.b[2]

    只做一次从左到右的字符扫描，不完整解析；字符串中转义较复杂时可能不准。
    """
    try:
        stack = []          # [{'type': 'object'|'array', 'key': str|None, 'index': int}]
        current_key = ''
        in_string = False
        escaped = False

        for ch in text[:max(0, min(position, len(text)))]:
            if escaped:
                escaped = False
                continue
            if ch == '\\':
                escaped = True
                continue
            if ch == '"':
                in_string = not in_string
                continue
            if in_string:
                current_key += ch
                continue

            if ch == '{':
                stack.append({'type': 'object', 'key': None, 'index': 0})
            elif ch == '[':
                stack.append({'type': 'array', 'key': None, 'index': 0})
            elif ch in '}]':
                if stack:
                    stack.pop()
            elif ch == ':' and stack and stack[-1]['type'] == 'object':
                stack[-1]['key'] = current_key
                current_key = ''
            elif ch == ',' and stack:
                if stack[-1]['type'] == 'array':
                    stack[-1]['index'] += 1
                current_key = ''

        parts = ['$']
        for frame in stack:
            if frame['type'] == 'object' and frame['key']:
                parts.append(f".{frame['key']}")
            elif frame['type'] == 'array':
                parts.append(f"[{frame['index']}]")
        return ''.join(parts)
    except Exception as e:
        logger.debug("get_json_path_at_position failed: %s", e)
        return '$'

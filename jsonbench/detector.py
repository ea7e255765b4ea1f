# -*- coding: utf-8 -*-
"""格式识别 — 按固定优先级判断文本是 XML / YAML / JSON"""

from .serializers import JSON, XML, YAML, _yaml, load_json

UNKNOWN = 'unknown'


def _is_json(text: str) -> bool:
    try:
        load_json(text)
        return True
    except (ValueError, RecursionError):
        return False


def _is_yaml(text: str) -> bool:
    yaml = _yaml()
    try:
        yaml.safe_load(text)
        return True
    except (yaml.YAMLError, ValueError, TypeError, RecursionError):
        # 非法日期等标量在构造阶段抛 ValueError
        return False


def detect_format(text: str) -> str:
    """返回 'json' / 'xml' / 'yaml' / 'unknown'

    1. 以 < 开头且含闭合标签 </  → xml
    2. 含冒号且多行（或有连续空格），YAML 可解析而 JSON 不可解析 → yaml
    3. JSON 可解析 → json（JSON 语法是 YAML 的子集，严格语法优先）
    """
    if not text or not text.strip():
        return UNKNOWN
    trimmed = text.strip()

    if trimmed.startswith('<') and '>' in trimmed and '</' in trimmed:
        return XML

    if ':' in trimmed and ('\n' in trimmed or '  ' in trimmed):
        if _is_yaml(trimmed) and not _is_json(trimmed):
            return YAML

    if _is_json(trimmed):
        return JSON
    return UNKNOWN

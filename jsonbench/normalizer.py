# -*- coding: utf-8 -*-
"""XML 中间结构 ↔ 通用值 的双向归一化

XML 没有数组、布尔、数字的概念，属性和混合内容也无法放进 JSON 模型，
因此这里的映射是有损的：
    - 只有文本的元素  → 标量（"true"/"false" → bool，数字串 → 数字）
    - 文本与子元素并存 → 丢弃文本（已知的有损情形）
    - 属性 (@name)     → 丢弃
    - 顶层数组          → <root><item>…</item>…</root>
    - 数组中的数组      → <item><item>…</item></item>，读回时任意层级
                          只含 item 子元素的节点都还原为数组
"""

import re

from .serializers import ATTR_PREFIX, TEXT_KEY

ROOT_TAG = 'root'
ITEM_TAG = 'item'

_NUMBER_RE = re.compile(r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def coerce_scalar(text):
    """将文本解析为 bool / 数字，否则原样返回字符串"""
    if not isinstance(text, str):
        return text
    if text == 'true':
        return True
    if text == 'false':
        return False
    stripped = text.strip()
    if stripped and _NUMBER_RE.fullmatch(stripped):
        if re.fullmatch(r'-?\d+', stripped):
            return int(stripped)
        return float(stripped)
    return text


def to_generic(node):
    """XML 中间结构 → 通用值"""
    if isinstance(node, list):
        return [to_generic(item) for item in node]
    if isinstance(node, dict):
        keys = list(node)
        if keys == [TEXT_KEY]:
            return coerce_scalar(node[TEXT_KEY])
        result = {}
        for key in keys:
            if key == TEXT_KEY or key.startswith(ATTR_PREFIX):
                continue
            result[key] = to_generic(node[key])
        return result
    # None / str（属性值不会走到这里）
    return node


def _scalar_text(value) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _lift_nested_lists(value):
    """数组元素本身是数组时包成 {item: [...]}，否则 xmltodict 会把它 str() 成文本"""
    if isinstance(value, dict):
        return {key: _lift_nested_lists(child) for key, child in value.items()}
    if isinstance(value, list):
        return [{ITEM_TAG: _lift_nested_lists(child)} if isinstance(child, list)
                else _lift_nested_lists(child) for child in value]
    return value


def to_xml_shape(value):
    """通用值 → 可直接交给 XML 序列化器的中间结构"""
    if isinstance(value, list):
        return {ROOT_TAG: {ITEM_TAG: _lift_nested_lists(value)}}
    if isinstance(value, dict):
        # 已经带单一 root 键（多次往返转换的产物），避免重复包裹
        if list(value) == [ROOT_TAG]:
            return _lift_nested_lists(value)
        return {ROOT_TAG: _lift_nested_lists(value)}
    return {ROOT_TAG: {TEXT_KEY: _scalar_text(value)}}


def _items_to_lists(value):
    """只含 item 子元素的节点 → 数组

    单个 item 也按数组处理：单元素数组输出为 <x><item>v</item></x>，
    与 {"item": v} 无法区分。
    """
    if isinstance(value, list):
        return [_items_to_lists(child) for child in value]
    if not isinstance(value, dict):
        return value
    if list(value) == [ITEM_TAG]:
        items = value[ITEM_TAG]
        if not isinstance(items, list):
            items = [items]
        return [_items_to_lists(child) for child in items]
    return {key: _items_to_lists(child) for key, child in value.items()}


def unwrap_root(value):
    """去掉 to_xml_shape 加上的 root 包裹，并把各层 item 列表还原为数组

    文档根元素本身不参与还原（<item>5</item> 仍是 {"item": 5}）。
    """
    if isinstance(value, dict) and list(value) == [ROOT_TAG]:
        return _items_to_lists(value[ROOT_TAG])
    if isinstance(value, dict):
        return {key: _items_to_lists(child) for key, child in value.items()}
    return _items_to_lists(value)

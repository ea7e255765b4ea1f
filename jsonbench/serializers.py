# -*- coding: utf-8 -*-
"""三种记法的解析 / 序列化 — JSON ↔ 通用值 ↔ YAML / XML

依赖:
    pyyaml     — pip install pyyaml
    xmltodict  — pip install xmltodict
"""

import datetime
import json
import math
from xml.parsers.expat import ExpatError

from .errors import ParseError, StructuralError, UnsupportedOperationError


# ── 懒加载：给出清晰的错误提示 ───────────────────────────────
def _yaml():
    try:
        import yaml
        return yaml
    except ImportError:
        raise ImportError("请先安装 pyyaml：pip install pyyaml")


def _xmltodict():
    try:
        import xmltodict
        return xmltodict
    except ImportError:
        raise ImportError("请先安装 xmltodict：pip install xmltodict")


# ── 格式常量 ──────────────────────────────────────────────────
JSON = 'json'
XML = 'xml'
YAML = 'yaml'
FORMATS = [JSON, XML, YAML]

# XML 中间结构的哨兵键，只在 XML 边界内部使用
TEXT_KEY = '#text'
ATTR_PREFIX = '@'

NO_ROOT_MESSAGE = "XML 格式错误: 未找到唯一的根元素 (no root)，请确保 XML 只有一个根节点"


def normalize_format(fmt: str) -> str:
    name = (fmt or '').strip().lower()
    if name not in FORMATS:
        raise UnsupportedOperationError(f"不支持的格式: {fmt}")
    return name


def _json_default(obj):
    """YAML 可能产生 JSON 没有的标量（日期、集合、二进制）"""
    if isinstance(obj, (datetime.date, datetime.datetime, datetime.time)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    if isinstance(obj, bytes):
        return obj.decode('utf-8', errors='replace')
    return str(obj)


# ── JSON ─────────────────────────────────────────────────────
def reject_json_constant(name):
    """json.loads 默认接受 NaN / Infinity，严格模式下拒绝"""
    raise ParseError(f"JSON 解析错误: 不支持的常量 {name}")


def drop_non_finite(value):
    """NaN / ±Infinity 没有 JSON 写法，输出为 null"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: drop_non_finite(child) for key, child in value.items()}
    if isinstance(value, list):
        return [drop_non_finite(child) for child in value]
    return value


def load_json(text: str):
    try:
        return json.loads(text, parse_constant=reject_json_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"JSON 解析错误: {e}", position=e.pos)


def dump_json(value, indent=4) -> str:
    return json.dumps(drop_non_finite(value), indent=indent, ensure_ascii=False,
                      allow_nan=False, default=_json_default)


# ── YAML ─────────────────────────────────────────────────────
def load_yaml(text: str):
    yaml = _yaml()
    try:
        return yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as e:
        raise ParseError(f"YAML 解析错误: {e}")


def dump_yaml(value, indent=4) -> str:
    yaml = _yaml()
    return yaml.dump(value, allow_unicode=True, indent=indent,
                     default_flow_style=False, sort_keys=False)


# ── XML ──────────────────────────────────────────────────────
def load_xml(text: str) -> dict:
    """解析 XML 为中间结构（#text / @属性），不做归一化"""
    cleaned = text.strip()
    if not cleaned.startswith('<') or '>' not in cleaned:
        raise StructuralError(NO_ROOT_MESSAGE)

    xmltodict = _xmltodict()
    try:
        node = xmltodict.parse(cleaned, force_cdata=True,
                               attr_prefix=ATTR_PREFIX, cdata_key=TEXT_KEY)
    except ExpatError as e:
        msg = str(e)
        # 无元素 / 根元素之外还有内容
        if msg.startswith(('no element found', 'junk after document element')):
            raise StructuralError(NO_ROOT_MESSAGE)
        raise ParseError(f"XML 解析错误: {msg}")
    if not node:
        raise StructuralError(NO_ROOT_MESSAGE)
    return node


def dump_xml(node, indent=4) -> str:
    """中间结构 → XML 文本；node 必须已是 {根名: 内容} 形式"""
    if not isinstance(node, dict) or not node:
        raise StructuralError("XML 输出需要以对象作为根节点")
    xmltodict = _xmltodict()
    text = xmltodict.unparse(node, pretty=True, indent=' ' * indent,
                             full_document=False, attr_prefix=ATTR_PREFIX,
                             cdata_key=TEXT_KEY)
    return text.strip()


# ── 统一入口 ─────────────────────────────────────────────────
_LOADERS = {JSON: load_json, XML: load_xml, YAML: load_yaml}
_DUMPERS = {JSON: dump_json, XML: dump_xml, YAML: dump_yaml}


def load(text: str, fmt: str):
    return _LOADERS[normalize_format(fmt)](text)


def dump(value, fmt: str, indent: int = 4) -> str:
    return _DUMPERS[normalize_format(fmt)](value, indent=indent)

# -*- coding: utf-8 -*-
"""格式互转 — JSON ↔ XML ↔ YAML，一律经由通用值中转

依赖:
    pyyaml     — pip install pyyaml
    xmltodict  — pip install xmltodict
    lxml       — pip install lxml（仅 format_xml 使用）
"""

import logging

from .config import resolve
from .detector import UNKNOWN, detect_format
from .errors import ConversionError, ParseError, StructuralError
from .normalizer import to_generic, to_xml_shape, unwrap_root
from .results import Result
from .serializers import (
    JSON, XML, YAML,
    dump_json, dump_xml, dump_yaml, load, load_json, load_xml, load_yaml,
    normalize_format,
)

logger = logging.getLogger(__name__)


def _etree():
    try:
        from lxml import etree
        return etree
    except ImportError:
        raise ImportError("需要安装 lxml:\npip install lxml")


# ── 中转：文本 ↔ 通用值 ───────────────────────────────────────
def parse_generic(text: str, fmt: str):
    """按 fmt 解析文本，XML 额外做归一化与去包裹"""
    fmt = normalize_format(fmt)
    value = load(text, fmt)
    if fmt == XML:
        value = unwrap_root(to_generic(value))
    return value


def print_generic(value, fmt: str, config=None) -> str:
    cfg = resolve(config)
    fmt = normalize_format(fmt)
    if fmt == XML:
        return dump_xml(to_xml_shape(value), indent=cfg.xml_indent)
    if fmt == YAML:
        return dump_yaml(value, indent=cfg.yaml_indent)
    return dump_json(value, indent=cfg.json_indent)


# ── 单项转换 ─────────────────────────────────────────────────
def json_to_xml(text, config=None) -> Result:
    cfg = resolve(config)
    try:
        node = to_xml_shape(load_json(text))
        return Result.ok(dump_xml(node, indent=cfg.xml_indent))
    except Exception as e:
        logger.debug("json_to_xml failed: %s", e)
        return Result.fail(e)


def xml_to_json(text, config=None) -> Result:
    cfg = resolve(config)
    try:
        value = unwrap_root(to_generic(load_xml(text)))
        return Result.ok(dump_json(value, indent=cfg.json_indent))
    except Exception as e:
        logger.debug("xml_to_json failed: %s", e)
        return Result.fail(e)


def json_to_yaml(text, config=None) -> Result:
    cfg = resolve(config)
    try:
        return Result.ok(dump_yaml(load_json(text), indent=cfg.yaml_indent))
    except Exception as e:
        logger.debug("json_to_yaml failed: %s", e)
        return Result.fail(e)


def yaml_to_json(text, config=None) -> Result:
    cfg = resolve(config)
    try:
        return Result.ok(dump_json(load_yaml(text), indent=cfg.json_indent))
    except Exception as e:
        logger.debug("yaml_to_json failed: %s", e)
        return Result.fail(e)


# ── 同格式美化 ───────────────────────────────────────────────
def format_xml(text, config=None) -> Result:
    """美化 XML：保留属性，去掉注释、处理指令和 XML 声明"""
    cfg = resolve(config)
    try:
        cleaned = text.strip()
        if '<' not in cleaned or '>' not in cleaned:
            raise StructuralError("XML 格式错误: 未找到 <…> 标签结构")
        etree = _etree()
        parser = etree.XMLParser(remove_blank_text=True, remove_comments=True,
                                 remove_pis=True, resolve_entities=False,
                                 no_network=True)
        try:
            root = etree.fromstring(cleaned.encode('utf-8'), parser)
        except etree.XMLSyntaxError as e:
            raise ParseError(f"XML 解析错误: {e}")
        etree.indent(root, space=' ' * cfg.xml_indent)
        return Result.ok(etree.tostring(root, encoding='unicode').strip())
    except Exception as e:
        logger.debug("format_xml failed: %s", e)
        return Result.fail(e)


def format_yaml(text, config=None) -> Result:
    """YAML → JSON → YAML，借 JSON 统一标量写法"""
    as_json = yaml_to_json(text, config)
    if not as_json.success:
        return as_json
    return json_to_yaml(as_json.result, config)


# ── 通用互转 ─────────────────────────────────────────────────
def _source_format(text: str, from_fmt) -> str:
    if from_fmt is None:
        detected = detect_format(text)
        if detected == UNKNOWN:
            raise ConversionError("无法识别输入内容的格式")
        return detected
    return normalize_format(from_fmt)


def convert_to_json(text, from_fmt=None, config=None) -> Result:
    """任意格式 → JSON；输入本身就是 JSON 时原样返回"""
    cfg = resolve(config)
    try:
        source = _source_format(text, from_fmt)
        if source == JSON:
            load_json(text)
            return Result.ok(text)
        value = parse_generic(text, source)
        return Result.ok(dump_json(value, indent=cfg.json_indent))
    except Exception as e:
        logger.debug("convert_to_json failed: %s", e)
        return Result.fail(e)


def convert_format(text, from_fmt, to_fmt, config=None) -> Result:
    """from_fmt → to_fmt；from_fmt 为 None 时自动识别。

    同格式直接返回原文（不做往返，保留原有排版）。
    """
    try:
        try:
            target = normalize_format(to_fmt)
            source = _source_format(text, from_fmt)
            if source == target:
                return Result.ok(text)
            value = parse_generic(text, source)
            return Result.ok(print_generic(value, target, config))
        except ConversionError:
            raise
        except Exception as e:
            raise ConversionError(str(e)) from e
    except Exception as e:
        logger.debug("convert_format %s -> %s failed: %s", from_fmt, to_fmt, e)
        return Result.fail(e)

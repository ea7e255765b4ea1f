# -*- coding: utf-8 -*-
"""智能提取 — 从 cURL 命令、Base64、URL 编码串、日志行中取出 JSON

每种来源都按 严格解析 → 修复引擎 → 原样返回 的顺序逐级降级。
"""

import logging

from .config import resolve
from .curl_parser import parse_curl
from .encoding import dec_base64, dec_url, looks_like_base64
from .errors import ParseError, StructuralError
from .repair import try_fix_json
from .results import CurlResult, ExtractResult, Result
from .serializers import dump_json, load_json

logger = logging.getLogger(__name__)

TYPE_CURL = 'cURL'
TYPE_BASE64 = 'Base64'
TYPE_URL_ENCODED = 'URL-encoded'
TYPE_LOG_LINE = 'Log line'
TYPE_LOG_LINE_FIXED = 'Log line (fixed)'
TYPE_JSON = 'JSON'
TYPE_JSON_FIXED = 'JSON (fixed)'


def _reformat(text, cfg):
    """严格解析成功则返回格式化文本，否则返回 None"""
    try:
        return dump_json(load_json(text), indent=cfg.json_indent)
    except ParseError:
        return None


def _json_or_repair_or_raw(text, cfg):
    formatted = _reformat(text, cfg)
    if formatted is not None:
        return formatted
    fixed = try_fix_json(text, cfg)
    if fixed.success:
        return fixed.result
    return text


# ── cURL ────────────────────────────────────────────────────
def extract_from_curl(text, config=None) -> CurlResult:
    """从 curl 命令中提取 -d/--data 请求体，同时返回 URL、请求方法和请求头"""
    cfg = resolve(config)
    try:
        if not text.strip().lower().startswith('curl'):
            raise StructuralError("不是有效的 cURL 命令")
        req = parse_curl(text)
        request = {'url': req.url or None, 'method': req.effective_method,
                   'headers': req.headers}
        if req.data is None:
            return CurlResult.fail("cURL 命令中未找到 -d/--data 请求体", **request)
        return CurlResult.ok(_json_or_repair_or_raw(req.data, cfg), **request)
    except Exception as e:
        logger.debug("extract_from_curl failed: %s", e)
        return CurlResult.fail(e)


# ── Base64 ──────────────────────────────────────────────────
def decode_base64_json(text, config=None) -> Result:
    """Base64 解码后尝试按 JSON 解析，非 JSON 时返回解码文本"""
    cfg = resolve(config)
    try:
        decoded = dec_base64(text)
        return Result.ok(_json_or_repair_or_raw(decoded, cfg))
    except Exception as e:
        logger.debug("decode_base64_json failed: %s", e)
        return Result.fail(e)


# ── 智能识别 ─────────────────────────────────────────────────
def _try_curl(trimmed, cfg):
    if not trimmed.lower().startswith('curl'):
        return None
    res = extract_from_curl(trimmed, cfg)
    if res.success and res.result:
        return ExtractResult.ok(res.result, detected_type=TYPE_CURL,
                                url=res.url, method=res.method,
                                headers=res.headers)
    return None


def _try_base64(trimmed, cfg):
    if not looks_like_base64(trimmed, cfg.base64_min_length):
        return None
    res = decode_base64_json(trimmed, cfg)
    if res.success:
        return ExtractResult.ok(res.result, detected_type=TYPE_BASE64)
    return None


def _try_url_encoded(trimmed, cfg):
    upper = trimmed.upper()
    if '%7B' not in upper and '%5B' not in upper:
        return None
    try:
        decoded = dec_url(trimmed)
    except UnicodeDecodeError:
        return None
    formatted = _reformat(decoded, cfg)
    if formatted is not None:
        return ExtractResult.ok(formatted, detected_type=TYPE_URL_ENCODED)
    return None


def _try_log_line(trimmed, cfg):
    starts = [i for i in (trimmed.find('{'), trimmed.find('[')) if i >= 0]
    if not starts or min(starts) == 0:
        return None
    candidate = trimmed[min(starts):]
    formatted = _reformat(candidate, cfg)
    if formatted is not None:
        return ExtractResult.ok(formatted, detected_type=TYPE_LOG_LINE)
    fixed = try_fix_json(candidate, cfg)
    if fixed.success:
        return ExtractResult.ok(fixed.result, detected_type=TYPE_LOG_LINE_FIXED)
    return None


def _try_direct(trimmed, cfg):
    formatted = _reformat(trimmed, cfg)
    if formatted is not None:
        return ExtractResult.ok(formatted, detected_type=TYPE_JSON)
    return None


def _try_repair(trimmed, cfg):
    fixed = try_fix_json(trimmed, cfg)
    if fixed.success:
        return ExtractResult.ok(fixed.result, detected_type=TYPE_JSON_FIXED)
    return None


_STRATEGIES = [
    _try_curl,
    _try_base64,
    _try_url_encoded,
    _try_log_line,
    _try_direct,
    _try_repair,
]


def smart_extract(text, config=None) -> ExtractResult:
    """依次尝试 cURL / Base64 / URL 编码 / 日志行 / 直接解析 / 修复，首个成功者胜出"""
    cfg = resolve(config)
    try:
        trimmed = text.strip()
        for strategy in _STRATEGIES:
            found = strategy(trimmed, cfg)
            if found is not None:
                return found
    except Exception as e:
        logger.debug("smart_extract failed: %s", e)
        return ExtractResult.fail(e)
    return ExtractResult.fail("无法识别或解析该内容")

# -*- coding: utf-8 -*-
"""JSON 格式化引擎 — 纯函数，无 UI 依赖"""

import json
import logging

from .config import resolve
from .results import CompressResult, Result, ValidationResult
from .serializers import (
    drop_non_finite, dump_json, load_json, reject_json_constant,
)

logger = logging.getLogger(__name__)


def byte_size(text: str) -> int:
    return len(text.encode('utf-8'))


def format_json(text, config=None) -> Result:
    """格式化（美化）JSON"""
    cfg = resolve(config)
    try:
        obj = load_json(text)
        return Result.ok(dump_json(obj, indent=cfg.json_indent))
    except Exception as e:
        logger.debug("format_json failed: %s", e)
        return Result.fail(e)


def compress_json(text) -> CompressResult:
    """压缩 JSON（去除空白），同时返回压缩前后的字节数"""
    try:
        obj = load_json(text)
        compressed = json.dumps(drop_non_finite(obj), separators=(',', ':'),
                                ensure_ascii=False, allow_nan=False)
        return CompressResult.ok(compressed,
                                 original_size=byte_size(text),
                                 compressed_size=byte_size(compressed))
    except Exception as e:
        logger.debug("compress_json failed: %s", e)
        return CompressResult.fail(e)


def validate_json(text) -> ValidationResult:
    """验证 JSON 是否合法，出错时给出字符位置与行列号"""
    try:
        json.loads(text, parse_constant=reject_json_constant)
        return ValidationResult(valid=True)
    except json.JSONDecodeError as e:
        return ValidationResult(valid=False, error=f"JSON 语法错误: {e}",
                                position=e.pos, line=e.lineno, column=e.colno)
    except Exception as e:
        logger.debug("validate_json failed: %s", e)
        return ValidationResult(valid=False, error=str(e) or type(e).__name__)

# -*- coding: utf-8 -*-
"""结果信封 — 所有公共操作的返回结构

约定: success 为 True 时 result 非 None、error 为 None；反之亦然。
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(p.capitalize() for p in rest)


class _DictMixin:

    def to_dict(self) -> Dict[str, Any]:
        """转为 camelCase 键的字典，省略值为 None 的字段"""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out[_camel(f.name)] = value
        return out


@dataclass
class Result(_DictMixin):
    success: bool
    result: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result, **extra):
        return cls(success=True, result=result, **extra)

    @classmethod
    def fail(cls, error, **extra):
        return cls(success=False, error=str(error) or '未知错误', **extra)


@dataclass
class FixResult(Result):
    fixes: List[str] = field(default_factory=list)


@dataclass
class CompressResult(Result):
    original_size: Optional[int] = None
    compressed_size: Optional[int] = None


@dataclass
class CurlResult(Result):
    url: Optional[str] = None
    method: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ExtractResult(Result):
    detected_type: Optional[str] = None
    url: Optional[str] = None
    method: Optional[str] = None
    headers: Optional[Dict[str, str]] = None


@dataclass
class QueryResult(Result):
    """result 为匹配到的值列表（而非文本）"""


@dataclass
class ValidationResult(_DictMixin):
    valid: bool
    error: Optional[str] = None
    position: Optional[int] = None   # 出错字符偏移（0 起）
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class JsonStats(_DictMixin):
    node_count: int
    depth: int
    byte_size: int

# -*- coding: utf-8 -*-
"""JSON ↔ CSV 互转

CSV → JSON 为朴素实现：按逗号切分，不支持引号内含逗号。
"""

import csv
import io
import json
import logging

from .config import resolve
from .errors import StructuralError
from .normalizer import coerce_scalar
from .results import Result
from .serializers import drop_non_finite, dump_json, load_json

logger = logging.getLogger(__name__)


def _cell(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    return value


def json_to_csv(text) -> Result:
    """对象数组（或单个对象）→ CSV，表头为所有键按首次出现顺序的并集"""
    try:
        data = drop_non_finite(load_json(text))
        rows = data if isinstance(data, list) else [data]
        if not rows:
            raise StructuralError("JSON 数组为空，无法转换为 CSV")

        records = [r if isinstance(r, dict) else {'value': r} for r in rows]
        headers = []
        for rec in records:
            for key in rec:
                if key not in headers:
                    headers.append(key)

        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=headers, restval='',
                                lineterminator='\n')
        writer.writeheader()
        for rec in records:
            writer.writerow({k: _cell(v) for k, v in rec.items()})
        return Result.ok(buf.getvalue().rstrip('\n'))
    except Exception as e:
        logger.debug("json_to_csv failed: %s", e)
        return Result.fail(e)


def _unquote(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell


def csv_to_json(text, config=None) -> Result:
    """CSV（表头 + 至少一行数据）→ JSON 数组，true/false 与数字自动转换"""
    cfg = resolve(config)
    try:
        lines = text.strip().split('\n')
        if len(lines) < 2:
            raise StructuralError("CSV 数据格式不正确：至少需要表头和一行数据")

        headers = [_unquote(h) for h in lines[0].split(',')]
        rows = []
        for line in lines[1:]:
            values = [_unquote(v) for v in line.split(',')]
            row = {}
            for i, header in enumerate(headers):
                value = values[i] if i < len(values) else ''
                row[header] = coerce_scalar(value) if value else value
            rows.append(row)
        return Result.ok(dump_json(rows, indent=cfg.json_indent))
    except Exception as e:
        logger.debug("csv_to_json failed: %s", e)
        return Result.fail(e)

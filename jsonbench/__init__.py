# -*- coding: utf-8 -*-
"""jsonbench — JSON / XML / YAML 转换与修复引擎

所有公共操作都是纯函数，返回结果信封（见 results.py），从不向调用方抛出异常。
"""

from .config import DEFAULT_CONFIG, WorkbenchConfig
from .converter import (
    convert_format, convert_to_json, format_xml, format_yaml,
    json_to_xml, json_to_yaml, xml_to_json, yaml_to_json,
)
from .csv_convert import csv_to_json, json_to_csv
from .detector import detect_format
from .encoding import escape_string, unescape_string
from .extractor import decode_base64_json, extract_from_curl, smart_extract
from .json_fmt import compress_json, format_json, validate_json
from .jsonpath import query_json_path
from .repair import try_fix_json
from .stats import get_json_path_at_position, get_json_stats

__version__ = '1.0.0'

__all__ = [
    'DEFAULT_CONFIG', 'WorkbenchConfig',
    'format_json', 'format_xml', 'format_yaml', 'compress_json', 'validate_json',
    'json_to_csv', 'csv_to_json',
    'json_to_xml', 'xml_to_json', 'json_to_yaml', 'yaml_to_json',
    'detect_format', 'convert_format', 'convert_to_json',
    'try_fix_json',
    'extract_from_curl', 'decode_base64_json', 'smart_extract',
    'get_json_stats', 'get_json_path_at_position', 'query_json_path',
    'escape_string', 'unescape_string',
]

# -*- coding: utf-8 -*-
"""curl 命令解析器 — 只提取请求体、URL 与请求头，供 JSON 提取使用"""

import re
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional

_DATA_FLAGS = ('-d', '--data', '--data-raw', '--data-ascii', '--data-binary',
               '--json')

# 带参数的其他选项：跳过其值，避免被当成 URL
_VALUE_FLAGS = (
    '-u', '--user', '-b', '--cookie',
    '-A', '--user-agent', '-e', '--referer', '-F', '--form', '--form-string',
    '--data-urlencode', '-x', '--proxy', '--connect-timeout', '-m',
    '--max-time', '-o', '--output', '--oauth2-bearer', '-w', '--write-out',
    '--cacert', '--cert', '--key', '-T', '--upload-file', '-c',
    '--cookie-jar', '--resolve', '--retry',
)

_URL_RE = re.compile(r'^https?://', re.IGNORECASE)


@dataclass
class ParsedCurl:
    """解析后的 curl 请求（只保留提取 JSON 需要的部分）"""
    url: str = ''
    method: str = ''
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[str] = None

    @property
    def effective_method(self) -> str:
        if self.method:
            return self.method
        return 'POST' if self.data is not None else 'GET'


def _strip_quotes(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in '\'"':
        return token[1:-1]
    return token


def _tokenize(command: str) -> List[str]:
    """将 curl 命令字符串拆分为 token 列表"""
    cmd = command.strip()
    # 去掉行续接符
    cmd = re.sub(r'\\\s*\n', ' ', cmd)   # Unix
    cmd = re.sub(r'`\s*\n', ' ', cmd)    # PowerShell
    cmd = re.sub(r'\^\s*\r?\n', ' ', cmd)  # Windows CMD

    try:
        tokens = shlex.split(cmd, posix=True)
    except ValueError:
        # 引号不配对时退回非 POSIX 模式，再手动去掉外层引号
        try:
            tokens = [_strip_quotes(t) for t in shlex.split(cmd, posix=False)]
        except ValueError:
            tokens = [_strip_quotes(t) for t in cmd.split()]

    if not tokens:
        raise ValueError("空的 curl 命令")

    # 跳过开头的 curl / curl.exe
    first = tokens[0].lower()
    if first in ('curl', 'curl.exe'):
        tokens = tokens[1:]
    return tokens


def parse_curl(command: str) -> ParsedCurl:
    """解析 curl 命令字符串，返回 ParsedCurl 对象"""
    tokens = _tokenize(command)
    req = ParsedCurl()

    i = 0
    while i < len(tokens):
        t = tokens[i]
        has_value = i + 1 < len(tokens)

        if t == '--url' and has_value:
            i += 1; req.url = tokens[i]
        elif t in ('-X', '--request') and has_value:
            i += 1; req.method = tokens[i].upper()
        elif t in ('-H', '--header') and has_value:
            i += 1
            key, _, value = tokens[i].partition(':')
            if key.strip():
                req.headers[key.strip()] = value.strip()
        elif t in _DATA_FLAGS and has_value:
            i += 1
            # 多个 -d 时取第一个
            if req.data is None:
                req.data = tokens[i]
            if t == '--json':
                req.headers.setdefault('Content-Type', 'application/json')
        elif t in _VALUE_FLAGS:
            i += 1
        # 裸 URL
        elif not req.url and _URL_RE.match(t):
            req.url = t

        i += 1

    return req

# -*- coding: utf-8 -*-
"""引擎配置 — 显式传入，不保留任何全局可变状态"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class WorkbenchConfig:
    json_indent: int = 4
    yaml_indent: int = 4
    xml_indent: int = 4
    base64_min_length: int = 20   # smart_extract 识别 Base64 的最小长度

    @classmethod
    def from_env(cls, environ=None) -> 'WorkbenchConfig':
        """从 JSONBENCH_* 环境变量读取缩进设置，未设置的项保留默认值。"""
        env = os.environ if environ is None else environ
        kwargs = {}
        for name in ('json_indent', 'yaml_indent', 'xml_indent'):
            raw = env.get(f'JSONBENCH_{name.upper()}')
            if raw is None or not raw.strip():
                continue
            try:
                value = int(raw)
            except ValueError:
                raise ValueError(f"环境变量 JSONBENCH_{name.upper()} 不是整数: {raw!r}")
            if value < 0:
                raise ValueError(f"环境变量 JSONBENCH_{name.upper()} 不能为负数")
            kwargs[name] = value
        return cls(**kwargs)


DEFAULT_CONFIG = WorkbenchConfig()


def resolve(config):
    return DEFAULT_CONFIG if config is None else config

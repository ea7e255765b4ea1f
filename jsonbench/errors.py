# -*- coding: utf-8 -*-
"""异常分类 — 仅在引擎内部抛出，公共接口统一转换为结果信封"""


class WorkbenchError(ValueError):
    """所有引擎错误的基类"""


class ParseError(WorkbenchError):
    """输入文本不符合声明的格式（JSON / XML / YAML）"""

    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class StructuralError(WorkbenchError):
    """语法可解析，但结构前提不满足（无根元素、空 CSV、空数组等）"""


class UnsupportedOperationError(WorkbenchError):
    """不支持的格式或操作"""


class ConversionError(WorkbenchError):
    """格式互转过程中任一阶段失败，消息原样保留"""

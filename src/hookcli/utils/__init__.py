"""
hookcli工具模块

提供名称校验、文本处理和日志配置等工具功能。
"""

from .names import (
    GOOD_CMD_ID_PATTERN,
    GOOD_CMD_NAME_PATTERN,
    GOOD_NAME_PATTERN,
    is_good_cmd_id,
    is_good_cmd_name,
    is_good_name,
    split_cmd_id,
)
from .text import pad_right, render_text, similar_names, upper_first

__all__ = [
    "GOOD_NAME_PATTERN",
    "GOOD_CMD_NAME_PATTERN",
    "GOOD_CMD_ID_PATTERN",
    "is_good_name",
    "is_good_cmd_name",
    "is_good_cmd_id",
    "split_cmd_id",
    "pad_right",
    "render_text",
    "similar_names",
    "upper_first",
]

"""日志系统，为hookcli提供统一的日志配置。

所有模块都使用 ``logging.getLogger(__name__)``，本模块只负责在 ``hookcli``
日志器上安装一个输出到标准错误的处理器，并根据全局选项 ``--verbose`` 调整级别。

支持的输出格式：
- 人类友好格式
- 调试详细格式
- JSON格式（机器可读）
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Union

import psutil

from ..config import PERFORMANCE_THRESHOLD_MS
from ..types.enums import VerbLevel

ROOT_LOGGER_NAME = "hookcli"

logger = logging.getLogger(__name__)


class LogFormat(Enum):
    """日志格式枚举。"""
    HUMAN = "human"         # 人类友好格式
    DEBUG = "debug"         # 调试详细格式
    JSON = "json"           # JSON格式，机器可读


class JsonFormatter(logging.Formatter):
    """JSON格式化器。"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # 添加异常信息
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, separators=(',', ':'))


class HumanFormatter(logging.Formatter):
    """人类友好格式化器。"""

    def __init__(self):
        super().__init__(fmt='[%(levelname)s] %(message)s')


class DebugFormatter(logging.Formatter):
    """调试详细格式化器。"""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


class StderrHandler(logging.StreamHandler):
    """始终写入当前的 ``sys.stderr``，即使它在运行期间被替换。"""

    def __init__(self, level: int = logging.NOTSET):
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def _get_formatter(log_format: LogFormat) -> logging.Formatter:
    """获取指定格式的日志格式化器。"""
    if log_format == LogFormat.JSON:
        return JsonFormatter()
    elif log_format == LogFormat.DEBUG:
        return DebugFormatter()
    else:  # HUMAN
        return HumanFormatter()


def _find_handler(root: logging.Logger) -> Optional[logging.Handler]:
    for handler in root.handlers:
        if isinstance(handler, StderrHandler):
            return handler
    return None


def configure_logging(level: Union[int, str, VerbLevel, None] = None,
                      log_format: Union[str, LogFormat] = LogFormat.HUMAN) -> logging.Logger:
    """配置 ``hookcli`` 日志器，重复调用只会更新级别和格式。

    Args:
        level: 日志级别，可以是 logging 级别、级别名称或 VerbLevel
        log_format: 日志格式

    Returns:
        ``hookcli`` 根日志器
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    handler = _find_handler(root)
    if handler is None:
        handler = StderrHandler()
        root.addHandler(handler)

    if not isinstance(log_format, LogFormat):
        log_format = LogFormat(log_format)
    handler.setFormatter(_get_formatter(log_format))

    if level is not None:
        root.setLevel(_to_logging_level(level))
    return root


def set_verbose(verbose: VerbLevel) -> None:
    """按全局选项 ``--verbose`` 调整日志级别。"""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(verbose.to_logging_level())


def _to_logging_level(level: Union[int, str, VerbLevel]) -> int:
    if isinstance(level, VerbLevel):
        return level.to_logging_level()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Invalid log level '{level}'")
        return resolved
    return int(level)


def _memory_mb() -> Optional[float]:
    try:
        return psutil.Process().memory_info().rss / 1024 / 1024
    except psutil.Error:
        return None


@contextmanager
def operation_timer(operation_name: str, debug: bool = False,
                    threshold_ms: int = PERFORMANCE_THRESHOLD_MS) -> Iterator[None]:
    """操作计时上下文管理器。

    超过阈值时记录警告；调试模式下额外记录内存变化。
    """
    start_time = time.perf_counter()
    memory_start = _memory_mb() if debug else None

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if elapsed_ms > threshold_ms:
            logger.warning(f"{operation_name} took {elapsed_ms:.2f}ms (threshold: {threshold_ms}ms)")
        else:
            logger.debug(f"{operation_name} took {elapsed_ms:.2f}ms")

        # 内存使用报告（仅调试模式）
        if memory_start is not None:
            memory_end = _memory_mb()
            if memory_end is not None:
                logger.debug(
                    f"{operation_name} memory: {memory_end - memory_start:+.1f}MB "
                    f"(start: {memory_start:.1f}MB, end: {memory_end:.1f}MB)"
                )


__all__ = [
    "ROOT_LOGGER_NAME",
    "LogFormat",
    "JsonFormatter",
    "HumanFormatter",
    "DebugFormatter",
    "StderrHandler",
    "configure_logging",
    "set_verbose",
    "operation_timer",
]

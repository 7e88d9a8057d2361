"""自定义异常模块，为hookcli应用框架提供统一的错误处理。

异常分类（对应命令分派引擎的错误约定）：
- 配置错误：重复命令名、非法名称或别名、空钩子处理器。注册时立即抛出，不经过钩子。
- 解析错误：未知命令、非法命令名。转换为非零退出码并给出相似命令提示。
- 执行错误：命令自身失败。经过 cmd.exec.error / cmd.run.error / app.run.error 事件后转换为退出码。
- 用法错误：例如 help 命令参数过多。直接报告给用户，不经过钩子。
- 内部错误：程序状态异常，例如内部继续信号泄漏到进程退出。
"""

import os
import sys
import traceback
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import psutil


class ErrorSeverity(Enum):
    """错误严重程度枚举。"""
    LOW = "low"               # 警告或提示
    MEDIUM = "medium"         # 一般错误，用户可修复
    HIGH = "high"             # 严重错误，需要开发者介入
    CRITICAL = "critical"     # 不可恢复


class ErrorCategory(Enum):
    """错误分类枚举。"""
    USER = "user"             # 用户输入或应用作者的配置错误
    INTERNAL = "internal"     # 程序内部错误


class ErrorRecoveryAction(Enum):
    """错误恢复动作枚举。"""
    RETRY = "retry"           # 修正输入后重试
    ABORT = "abort"           # 中止整个流程
    MANUAL = "manual"         # 需要修改应用代码


class HookCLIError(Exception):
    """hookcli的基础异常类。

    属性:
        message: 用户可读的错误消息
        error_code: 标准化错误代码 (格式: CATEGORY_SPECIFIC_CODE)
        suggested_fix: 解决建议
        context: 错误上下文信息
        original_error: 原始异常对象（如果有）
        severity: 错误严重程度
        category: 错误分类
        recovery_actions: 建议的恢复动作列表
        error_id: 唯一错误标识符
        timestamp: 错误发生时间
        debug_info: 调试信息字典
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        suggested_fix: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
        severity: Union[str, ErrorSeverity] = ErrorSeverity.MEDIUM,
        category: Union[str, ErrorCategory] = ErrorCategory.INTERNAL,
        recovery_actions: Optional[List[ErrorRecoveryAction]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.suggested_fix = suggested_fix
        self.context = context or {}
        self.original_error = original_error

        # 处理枚举类型
        self.severity = severity if isinstance(severity, ErrorSeverity) else ErrorSeverity(severity)
        self.category = category if isinstance(category, ErrorCategory) else ErrorCategory(category)
        self.recovery_actions = recovery_actions or []

        self.error_id = str(uuid.uuid4())[:8]
        self.timestamp = datetime.now()
        self.debug_info = self._collect_debug_info()

    def _collect_debug_info(self) -> Dict[str, Any]:
        """收集调试信息。"""
        return {
            "python_version": sys.version,
            "platform": sys.platform,
            "argv": list(sys.argv),
            "traceback": traceback.format_exc() if self.original_error else None,
            "context_keys": list(self.context.keys()),
            "memory_usage": self._get_memory_usage(),
            "process_id": os.getpid(),
        }

    def _get_memory_usage(self) -> Optional[str]:
        """获取内存使用情况。"""
        try:
            process = psutil.Process()
            return f"{process.memory_info().rss / 1024 / 1024:.1f}MB"
        except psutil.Error:
            return None

    def get_user_message(self) -> str:
        """获取用户友好的错误消息。"""
        user_msg = self.message
        if self.suggested_fix:
            user_msg += f"\n\n{self.suggested_fix}"
        return user_msg

    def get_full_details(self) -> Dict[str, Any]:
        """获取完整的错误详情，用于调试和报告。"""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "suggested_fix": self.suggested_fix,
            "recovery_actions": [action.value for action in self.recovery_actions],
            "context": self.context,
            "debug_info": self.debug_info,
            "original_error": str(self.original_error) if self.original_error else None,
        }

    def add_context(self, key: str, value: Any) -> None:
        """添加上下文信息。"""
        self.context[key] = value

    def is_recoverable(self) -> bool:
        """判断错误是否可恢复。"""
        return len(self.recovery_actions) > 0 and ErrorRecoveryAction.ABORT not in self.recovery_actions


# ===== 用户错误类别 =====

class UserError(HookCLIError):
    """用户错误的基类。

    用于命令行输入错误，以及应用作者在注册阶段犯的配置错误。
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.USER)
        kwargs.setdefault("severity", ErrorSeverity.MEDIUM)
        kwargs.setdefault("recovery_actions", [ErrorRecoveryAction.RETRY])
        super().__init__(message, **kwargs)


class ConfigurationError(UserError):
    """应用配置错误，在注册阶段立即抛出。"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "USER_CONFIG_INVALID")
        kwargs.setdefault("severity", ErrorSeverity.CRITICAL)
        kwargs.setdefault("recovery_actions", [ErrorRecoveryAction.MANUAL])
        kwargs.setdefault("suggested_fix", "Fix the application setup code before running it")
        super().__init__(message, **kwargs)


class InvalidNameError(ConfigurationError):
    """命令名、别名或参数名不符合命名规则。"""

    def __init__(self, name: str, kind: str = "command", pattern: Optional[str] = None, **kwargs):
        self.name = name
        self.kind = kind
        message = f"the {kind} name '{name}' is invalid"
        if pattern:
            message += f", must match: {pattern}"
        kwargs.setdefault("error_code", "USER_INVALID_NAME")
        kwargs.setdefault("context", {}).update({"name": name, "kind": kind})
        super().__init__(message, **kwargs)


class DuplicateCommandError(ConfigurationError):
    """重复注册命令名。"""

    def __init__(self, name: str, **kwargs):
        self.name = name
        kwargs.setdefault("error_code", "USER_DUPLICATE_COMMAND")
        kwargs.setdefault("context", {})["name"] = name
        super().__init__(f"the command name '{name}' has been registered", **kwargs)


class AliasConflictError(ConfigurationError):
    """别名与命令名冲突，或指向了不存在的命令。"""

    def __init__(self, message: str, alias: Optional[str] = None, target: Optional[str] = None, **kwargs):
        self.alias = alias
        self.target = target
        kwargs.setdefault("error_code", "USER_ALIAS_CONFLICT")
        context = kwargs.setdefault("context", {})
        if alias:
            context["alias"] = alias
        if target:
            context["target"] = target
        super().__init__(message, **kwargs)


class InvalidHookHandlerError(ConfigurationError):
    """注册了空的钩子处理器。"""

    def __init__(self, event: str, **kwargs):
        self.event = event
        kwargs.setdefault("error_code", "USER_INVALID_HOOK_HANDLER")
        kwargs.setdefault("context", {})["event"] = event
        super().__init__(f"event {event!r} handler is nil", **kwargs)


class CommandNotFoundError(UserError):
    """命令未找到错误。"""

    def __init__(self, name: str, similar: Optional[List[str]] = None, message: Optional[str] = None, **kwargs):
        self.name = name
        self.similar = similar or []
        kwargs.setdefault("error_code", "USER_COMMAND_NOT_FOUND")
        kwargs.setdefault("severity", ErrorSeverity.LOW)

        context = kwargs.setdefault("context", {})
        context["name"] = name
        context["similar"] = self.similar
        if self.similar:
            kwargs.setdefault("suggested_fix", f"Maybe you mean: {', '.join(self.similar)}")

        super().__init__(message or f"unknown command name '{name}'", **kwargs)


class UsageError(UserError):
    """命令行用法错误。"""

    def __init__(self, message: str, usage: Optional[str] = None, **kwargs):
        self.usage = usage
        kwargs.setdefault("error_code", "USER_USAGE_ERROR")
        if usage:
            kwargs.setdefault("suggested_fix", f"Usage: {usage}")
            kwargs.setdefault("context", {})["usage"] = usage
        super().__init__(message, **kwargs)


class FlagParseError(UsageError):
    """选项解析错误，argparse 的报错被转换为此异常而不是直接退出进程。"""

    def __init__(self, message: str, prog: Optional[str] = None, **kwargs):
        self.prog = prog
        kwargs.setdefault("error_code", "USER_FLAG_PARSE_ERROR")
        if prog:
            kwargs.setdefault("context", {})["prog"] = prog
        super().__init__(message, **kwargs)


class GlobalOptionsError(FlagParseError):
    """全局选项解析错误。"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "USER_GLOBAL_OPTIONS_ERROR")
        super().__init__(message, **kwargs)


# ===== 内部错误类别 =====

class InternalError(HookCLIError):
    """内部程序错误的基类。"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.INTERNAL)
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        kwargs.setdefault("recovery_actions", [ErrorRecoveryAction.ABORT])
        super().__init__(message, **kwargs)


class StateError(InternalError):
    """程序状态错误。"""

    def __init__(self, message: str, expected_state: Optional[str] = None, actual_state: Optional[str] = None, **kwargs):
        self.expected_state = expected_state
        self.actual_state = actual_state
        kwargs.setdefault("error_code", "INTERNAL_STATE_ERROR")

        context = kwargs.setdefault("context", {})
        if self.expected_state:
            context["expected_state"] = self.expected_state
        if self.actual_state:
            context["actual_state"] = self.actual_state

        super().__init__(message, **kwargs)


__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorRecoveryAction",
    "HookCLIError",
    "UserError",
    "ConfigurationError",
    "InvalidNameError",
    "DuplicateCommandError",
    "AliasConflictError",
    "InvalidHookHandlerError",
    "CommandNotFoundError",
    "UsageError",
    "FlagParseError",
    "GlobalOptionsError",
    "InternalError",
    "StateError",
]

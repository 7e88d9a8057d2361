"""Lifecycle hooks: a single-slot event table and the context passed to handlers.

Usage:
    from hookcli import HookEvent, Hooks

    hooks = Hooks()

    def on_error(ctx):
        print(f"command failed: {ctx.err}")
        return False  # True stops the remaining pipeline

    hooks.on(HookEvent.APP_RUN_ERROR, on_error)
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, Optional, Union

from .exceptions import InvalidHookHandlerError
from .types import HookData
from .types.enums import HookEvent

logger = logging.getLogger(__name__)

EventName = Union[HookEvent, str]


class BackgroundContext:
    """Always-open cancellation handle.

    Placeholder for deadline and cancellation propagation: it is never done
    and carries no deadline.
    """

    deadline: Optional[datetime] = None

    def done(self) -> bool:
        return False

    @property
    def cancelled(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "BackgroundContext()"


_BACKGROUND = BackgroundContext()


class HookContext:
    """Mutable carrier passed to the handler of one fired event.

    Holds the event name, the application and command being processed, a
    free-form data bag, an error value and a stop flag. A handler may mutate
    it but must not keep it after the call returns.
    """

    def __init__(self, name: EventName, cmd: Any = None,
                 data: Optional[HookData] = None,
                 context: Optional[BackgroundContext] = None) -> None:
        self._name = _event_key(name)
        self._stop = False
        self._err: Optional[BaseException] = None
        self.cmd = cmd
        self.app = getattr(cmd, "app", None) if cmd is not None else None
        self.data: HookData = data if data is not None else {}
        self.context = context or _BACKGROUND

    @property
    def name(self) -> str:
        """Name of the event."""
        return self._name

    @property
    def stopped(self) -> bool:
        return self._stop

    @property
    def err(self) -> Optional[BaseException]:
        return self._err

    def set_stop(self, stop: bool) -> bool:
        self._stop = bool(stop)
        return self._stop

    def with_err(self, err: Optional[BaseException]) -> "HookContext":
        self._err = err
        return self

    def with_data(self, data: Optional[HookData]) -> "HookContext":
        """Replace the data bag; ``None`` keeps the current one."""
        if data is not None:
            self.data = data
        return self

    def with_app(self, app: Any) -> "HookContext":
        self.app = app
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def __repr__(self) -> str:
        return f"HookContext(name={self._name!r}, stopped={self._stop}, err={self._err!r})"


HookFunc = Callable[[HookContext], Optional[bool]]


def _event_key(name: EventName) -> str:
    return name.value if isinstance(name, HookEvent) else str(name)


class Hooks:
    """Named hook table with exactly one handler per event name.

    Handler returns:
        - True  to stop the remaining pipeline
        - False (or None) to continue with the next logic
    """

    def __init__(self) -> None:
        self._hooks: Dict[str, HookFunc] = {}

    def on(self, name: EventName, handler: HookFunc) -> None:
        """Register an event handler, replacing any previous one for the name.

        Raises:
            InvalidHookHandlerError: If handler is None or not callable
        """
        key = _event_key(name)
        if handler is None or not callable(handler):
            raise InvalidHookHandlerError(key)
        self._hooks[key] = handler

    def add_hook(self, name: EventName, handler: HookFunc) -> None:
        """Register the handler only when the name has none yet."""
        if _event_key(name) not in self._hooks:
            self.on(name, handler)

    def fire(self, name: EventName, ctx: HookContext) -> bool:
        """Call the handler registered for the event.

        Returns:
            True when the handler asks to stop, False otherwise or when no
            handler is registered.
        """
        handler = self._hooks.get(_event_key(name))
        if handler is None:
            return False

        logger.debug(f"trigger the event: {ctx.name}")
        stop = bool(handler(ctx))
        if stop:
            ctx.set_stop(True)
        return stop

    def has_hook(self, name: EventName) -> bool:
        return _event_key(name) in self._hooks

    def reset_hooks(self) -> None:
        """Clear all registered hooks."""
        self._hooks = {}

    def hook_names(self) -> Iterator[str]:
        return iter(list(self._hooks))

    def __len__(self) -> int:
        return len(self._hooks)

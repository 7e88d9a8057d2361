"""pytest configuration and shared fixtures for hookcli tests."""

import logging
from typing import Any, Callable, Dict, List

import pytest

from hookcli import App, Command, Config, HookEvent


class CallRecorder:
    """Record the calls of command bodies."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def make(self, name: str, fail: bool = False) -> Callable:
        def func(cmd, args):
            self.calls.append({"name": name, "args": list(args), "opts": cmd.opts, "cmd": cmd})
            if fail:
                raise RuntimeError(f"{name} failed")
        return func

    def names(self) -> List[str]:
        return [call["name"] for call in self.calls]


class EventRecorder:
    """Record every fired event through app level hooks."""

    def __init__(self) -> None:
        self.events: List[str] = []
        self.contexts: List[Any] = []

    def attach(self, app: App, stop_on: str = "") -> "EventRecorder":
        for event in HookEvent:
            app.on(event, self._handler(stop_on))
        return self

    def _handler(self, stop_on: str) -> Callable:
        def handler(ctx):
            self.events.append(ctx.name)
            self.contexts.append(ctx)
            return ctx.name == stop_on
        return handler

    def context(self, name: str):
        for ctx in self.contexts:
            if ctx.name == name:
                return ctx
        return None


def _configure_build(cmd: Command) -> None:
    cmd.flags.add_argument("--target", default="all")
    cmd.flags.add_argument("--count", type=int, default=1)


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep the verbose level changed by one test out of the others."""
    yield
    logging.getLogger("hookcli").setLevel(logging.NOTSET)


@pytest.fixture
def calls():
    """Recorder for command body calls."""
    return CallRecorder()


@pytest.fixture
def make_app():
    """Factory for applications that return the exit code instead of exiting."""

    def _make_app(**kwargs) -> App:
        kwargs.setdefault("name", "demo")
        kwargs.setdefault("desc", "demo application")
        kwargs.setdefault("version", "1.2.0")
        kwargs.setdefault("bin_name", "demo")
        kwargs.setdefault("exit_on_end", False)
        kwargs.setdefault("config", Config())
        return App(**kwargs)

    return _make_app


@pytest.fixture
def app(make_app, calls):
    """Application with the commands build (alias b) and deploy (alias d)."""
    app = make_app()
    app.add(
        Command("build", desc="build the project", func=calls.make("build"),
                aliases=["b"], config=_configure_build),
        Command("deploy", desc="deploy the project", func=calls.make("deploy"), aliases=["d"]),
    )
    return app


@pytest.fixture
def events(app):
    """Event recorder attached to the app fixture."""
    return EventRecorder().attach(app)


@pytest.fixture
def event_recorder():
    """Factory attaching a fresh event recorder to an app."""

    def _attach(app: App, stop_on: str = "") -> EventRecorder:
        return EventRecorder().attach(app, stop_on=stop_on)

    return _attach

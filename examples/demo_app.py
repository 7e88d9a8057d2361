#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Demo application built with hookcli.

Try:
    python examples/demo_app.py
    python examples/demo_app.py b --target web extra-arg
    python examples/demo_app.py help deploy
    python examples/demo_app.py deplo
    python examples/demo_app.py --verbose 4 git:status
"""

import sys

from hookcli import App, Command, HookEvent


def build(cmd: Command, args: list) -> None:
    print(f"building target '{cmd.opts.target}' with args {args}")


def deploy(cmd: Command, args: list) -> None:
    if not args:
        raise RuntimeError("deploy needs an environment name")

    # run another command in process, only command-level events fire
    cmd.app.exec("build", ["--target", "release"])
    print(f"deploying to {args[0]}")


def git_status(cmd: Command, args: list) -> None:
    print("nothing to commit, working tree clean")


def configure_build(cmd: Command) -> None:
    cmd.flags.add_argument("--target", default="all", help="Build target name")


def on_error(ctx) -> bool:
    print(f"[hook] {ctx.name}: {ctx.err}", file=sys.stderr)
    return False


def main() -> None:
    app = App(name="demo", desc="demo application for hookcli", version="1.0.0", logo="== DEMO ==")

    app.on(HookEvent.APP_RUN_ERROR, on_error)
    app.on(HookEvent.CMD_EXEC_BEFORE, lambda ctx: print(f"[hook] about to run {ctx.cmd.path}") and False)

    app.add(
        Command("build", desc="build the project", func=build, aliases=["b"], config=configure_build,
                examples="  {$binName} build --target web"),
        Command("deploy", desc="deploy the project", func=deploy, aliases=["d", "ship"]),
        Command("git:status", desc="show the working tree status", func=git_status),
    )
    app.run()


if __name__ == "__main__":
    main()

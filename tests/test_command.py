"""Tests for hookcli.command module: sub-commands, hooks and copies."""

import pytest

from hookcli import AliasConflictError, Command, DuplicateCommandError, ExitCode, HookEvent, InvalidNameError


@pytest.fixture
def git(calls):
    """A command group with two sub-commands."""
    return Command("git", desc="git helpers").add(
        Command("status", desc="show status", func=calls.make("status")),
        Command("pull", desc="pull changes", func=calls.make("pull"), aliases=["p"]),
    )


class TestCommandDefinition:
    """Test command attributes."""

    def test_module_from_name(self):
        """Test that the module label comes from the name prefix."""
        assert Command("git:status", func=print).module == "git"
        assert Command("status", func=print).module == ""
        assert Command("git:status", func=print, module="vcs").module == "vcs"

    def test_path(self, git):
        """Test the full path of a sub-command."""
        assert git.sub("status").path == "git status"
        assert git.path == "git"

    def test_copy(self, calls):
        """Test that a copy keeps metadata and drops the body."""
        cmd = Command("build", desc="build it", func=calls.make("build"), aliases=["b"], examples="x")
        cp = cmd.copy()

        assert cp.name == "build"
        assert cp.desc == "build it"
        assert cp.examples == "x"
        assert cp.func is None
        assert cp.aliases == ["b"]
        cp.aliases.append("bb")
        assert cmd.aliases == ["b"]

    def test_init_event_fires_once(self, make_app, calls):
        """Test that cmd.init.after fires once at registration."""
        app = make_app()
        seen = []
        app.on(HookEvent.CMD_INIT_AFTER, lambda ctx: seen.append(ctx.cmd.name))

        cmd = Command("build", func=calls.make("build"))
        app.add(cmd)
        cmd.initialize()

        assert seen == ["build"]

    def test_config_declares_options(self, calls):
        """Test that the config callback runs against the option parser."""
        declared = []

        def config(cmd):
            declared.append(cmd.name)
            cmd.flags.add_argument("--dry-run", action="store_true")

        cmd = Command("build", func=calls.make("build"), config=config)
        rest = cmd.parse_options(["--dry-run", "x", "--other"])

        assert declared == ["build"]
        assert cmd.opts.dry_run is True
        assert rest == ["x", "--other"]


class TestSubCommands:
    """Test sub-command registration and dispatch."""

    def test_duplicate_sub(self, git, calls):
        """Test that a sub-command name cannot be added twice."""
        with pytest.raises(DuplicateCommandError):
            git.add(Command("status", func=calls.make("status")))

    def test_sub_alias_conflict(self, git, calls):
        """Test that a sub-command alias cannot shadow a sibling name."""
        with pytest.raises(AliasConflictError):
            git.add(Command("push", func=calls.make("push"), aliases=["status"]))

    def test_invalid_sub_name(self, calls):
        """Test that sub-command names cannot be namespaced."""
        with pytest.raises(InvalidNameError):
            Command("git").add(Command("x:y", func=calls.make("x")))

    def test_sub_lookup(self, git):
        """Test finding a sub-command by name or alias."""
        assert git.sub("pull").name == "pull"
        assert git.sub("p").name == "pull"
        assert git.sub("nope") is None

    def test_dispatch_to_sub(self, make_app, git, calls):
        """Test that the first argument selects a sub-command."""
        app = make_app()
        app.add(git)

        assert app.run(["git", "status", "-s"]) == 0
        assert calls.names() == ["status"]
        assert calls.calls[0]["args"] == ["-s"]

    def test_dispatch_to_sub_alias(self, make_app, git, calls):
        """Test that sub-command aliases resolve."""
        app = make_app()
        app.add(git)

        assert app.run(["git", "p"]) == 0
        assert calls.names() == ["pull"]

    def test_sub_events_reach_parent(self, make_app, git, calls):
        """Test that sub-command events go through the parent hooks."""
        app = make_app()
        app.add(git)
        seen = []
        git.on(HookEvent.CMD_EXEC_BEFORE, lambda ctx: seen.append(ctx.cmd.path) or True)

        assert app.run(["git", "pull"]) == 0
        assert seen == ["git pull"]
        assert calls.calls == []

    def test_group_without_args_shows_help(self, make_app, git, capsys):
        """Test that a group without a func shows its help."""
        app = make_app()
        app.add(git)

        assert app.run(["git"]) == 0
        out = capsys.readouterr().out
        assert "Subcommands:" in out
        assert "status" in out
        assert "Pull changes" in out

    def test_unknown_sub(self, make_app, git, capsys):
        """Test that an unknown sub-command fails the run."""
        app = make_app()
        app.add(git)

        assert app.run(["git", "stat"]) == ExitCode.ERR
        err = capsys.readouterr().err
        assert "unknown sub-command 'stat' of 'git'" in err
        assert "Maybe you mean: status" in err

    def test_unknown_sub_handled_by_hook(self, make_app, git, capsys):
        """Test that a cmd.sub.not.found handler returning True ends the run quietly."""
        app = make_app()
        app.add(git)
        seen = []
        app.on(HookEvent.CMD_SUB_NOT_FOUND, lambda ctx: seen.append(ctx["name"]) or True)

        assert app.run(["git", "nope"]) == 0
        assert seen == ["nope"]
        assert capsys.readouterr().err == ""

    def test_group_with_func_gets_unknown_args(self, make_app, calls):
        """Test that a group with its own func runs it for non sub-command args."""
        app = make_app()
        app.add(Command("git", func=calls.make("git")).add(Command("status", func=calls.make("status"))))

        assert app.run(["git", "log"]) == 0
        assert calls.names() == ["git"]
        assert calls.calls[0]["args"] == ["log"]

    def test_sub_added_after_registration(self, make_app, git, calls):
        """Test that sub-commands added later are initialized."""
        app = make_app()
        app.add(git)
        git.add(Command("push", func=calls.make("push")))

        assert git.sub("push").flags is not None
        assert app.run(["git", "push"]) == 0
        assert calls.names() == ["push"]

    def test_subs_initialized_at_registration(self, make_app, git):
        """Test that cmd.init.after fires for the group and its sub-commands on add."""
        app = make_app()
        seen = []
        app.on(HookEvent.CMD_INIT_AFTER, lambda ctx: seen.append(ctx.cmd.path))

        app.add(git)

        assert seen == ["git", "git status", "git pull"]
        assert git.sub("status").flags is not None
        assert git.sub("status").flags.prog == "demo git status"

    def test_exec_group_shows_help(self, make_app, git, capsys):
        """Test that exec on a group without a body shows its help."""
        app = make_app()
        app.add(git)
        seen = []
        app.on(HookEvent.CMD_EXEC_BEFORE, lambda ctx: seen.append(ctx.name))

        app.exec("git", [])

        out = capsys.readouterr().out
        assert "Subcommands:" in out
        assert "status" in out
        assert seen == []

    def test_similar_subs_follow_containment_rule(self, make_app, calls, capsys):
        """Test that sub-command suggestions skip equal lengths and are capped."""
        group = Command("task")
        for i in range(7):
            group.add(Command(f"run{i}", func=calls.make(f"run{i}")))
        app = make_app()
        app.add(group)

        assert app.run(["task", "run"]) == ExitCode.ERR
        err = capsys.readouterr().err
        assert "Maybe you mean: run0, run1, run2, run3, run4\n" in err

        assert group._similar_subs("rnu0") == []


class TestCommandHelp:
    """Test the command help rendering."""

    def test_help_text(self, make_app, calls):
        """Test the sections of the command help."""
        app = make_app()
        cmd = Command("build", desc="build the project", func=calls.make("build"), aliases=["b"],
                      examples="  {$fullCmd} --target web", help="More details.",
                      config=lambda c: c.flags.add_argument("--target", help="Build target"))
        app.add(cmd)

        text = app.replace_vars(cmd.help_text(), cmd=cmd)

        assert text.startswith("Build the project\n")
        assert "demo [Global Options...] build [--option ...]" in text
        assert "Aliases: b" in text
        assert "--target TARGET" in text
        assert "Build target" in text
        assert "Examples:\n  demo build --target web" in text
        assert "More details." in text

    def test_help_without_description(self, calls):
        """Test the placeholder for a missing description."""
        assert Command("build", func=calls.make("build")).help_text().startswith("No description")

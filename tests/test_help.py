"""Tests for help rendering and the help variable replacer."""

from hookcli import Command, HelpReplacer


class TestHelpReplacer:
    """Test the {$name} variable replacer."""

    def test_replace_known_variables(self):
        """Test replacing registered variables."""
        replacer = HelpReplacer({"binName": "demo"})
        replacer.add_replace("cmd", "build")

        assert replacer.replace_pairs("{$binName} {$cmd} -h") == "demo build -h"

    def test_unknown_variable_untouched(self):
        """Test that unknown variables are left in place."""
        replacer = HelpReplacer({"binName": "demo"})
        assert replacer.replace_pairs("{$binName} {$other}") == "demo {$other}"

    def test_plain_braces_untouched(self):
        """Test that text without help variables is returned as is."""
        replacer = HelpReplacer({"binName": "demo"})
        text = "{COMMAND} and {binName}"
        assert replacer.replace_pairs(text) is text

    def test_get_replace(self):
        """Test reading single variables."""
        replacer = HelpReplacer()
        replacer.add_replaces({"a": "1", "b": "2"})

        assert replacer.get_replace("a") == "1"
        assert replacer.get_replace("missing") == ""

    def test_replaces_returns_copy(self):
        """Test that the variable map cannot be changed from outside."""
        replacer = HelpReplacer({"a": "1"})
        replacer.replaces()["a"] = "2"
        assert replacer.get_replace("a") == "1"


class TestApplicationHelp:
    """Test the application help output."""

    def test_lists_commands_with_aliases(self, app, capsys):
        """Test the command list of the application help."""
        app.initialize()
        app.show_application_help()
        out = capsys.readouterr().out

        assert out.startswith("Demo application (Version: 1.2.0)")
        assert "demo [Global Options...] {command}" in out
        assert "  build  Build the project (alias: b)" in out
        assert "  deploy Deploy the project (alias: d)" in out
        assert "  help   Display help information" in out
        assert 'Use "demo {COMMAND} -h" for more information about a command' in out

    def test_groups_modules_and_hides_hidden(self, make_app, calls, capsys):
        """Test module headers and hidden commands."""
        app = make_app()
        app.add(
            Command("git:status", desc="status", func=calls.make("s")),
            Command("secret", desc="secret", func=calls.make("x"), hidden=True),
        )
        app.initialize()
        app.show_application_help()
        out = capsys.readouterr().out

        assert "\n git\n  git:status" in out
        assert "secret" not in out

    def test_replace_vars_with_command(self, app):
        """Test the command variables added for command help."""
        app.initialize()
        cmd = app.command("build")

        assert app.replace_vars("{$fullCmd}|{$cmd}|{$binName}", cmd=cmd) == "demo build|build|demo"
        # command variables do not leak into the application replacer
        assert app.replace_vars("{$cmd}") == "{$cmd}"

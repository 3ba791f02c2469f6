"""Tests for the argument builder and quoting rules."""

import shlex

import pytest

from dotnetcli_mcp.dotnet.arguments import (
    REDACTED,
    Argument,
    ArgumentBuilder,
    quote_argument,
)


class TestQuoteArgument:
    """Tests for quote_argument."""

    def test_plain_values_unquoted(self):
        """Test that simple tokens are left as-is."""
        for value in ["build", "./src/App", "--output", "net8.0", "-warnaserror:CS1,CS2"]:
            assert quote_argument(value) == value

    def test_space_is_quoted(self):
        """Test that a value with a space is wrapped in double quotes."""
        assert quote_argument("./my project/App.csproj") == '"./my project/App.csproj"'

    def test_empty_is_quoted(self):
        """Test that an empty value still renders as one token."""
        assert quote_argument("") == '""'

    def test_shell_characters_are_quoted(self):
        """Test that shell-significant characters force quoting."""
        for value in ["a;b", "a&b", "a|b", "$HOME", "a*b", "it's"]:
            assert quote_argument(value).startswith('"'), value

    @pytest.mark.parametrize(
        "value",
        [
            "./my project/App.csproj",
            r"C:\Program Files\dotnet\dotnet.exe",
            'say "hi"',
            "trailing\\",
            "",
            "FullyQualifiedName~Api&Category=Unit",
        ],
    )
    def test_quoted_value_reparses_to_original(self, value):
        """Test that shlex.split returns the original string."""
        assert shlex.split(quote_argument(value)) == [value]


class TestArgument:
    """Tests for Argument rendering."""

    def test_secret_masked_only_when_safe(self):
        """Test that secrets are masked in safe renderings only."""
        arg = Argument("abc123", quoted=True, secret=True)
        assert arg.render() == "abc123"
        assert arg.render(safe=True) == REDACTED


class TestArgumentBuilder:
    """Tests for ArgumentBuilder."""

    def test_tokens_are_never_quoted(self):
        """Test that tokens() returns raw argv values."""
        builder = ArgumentBuilder().append("build").append_quoted("./my project")
        assert builder.tokens() == ["build", "./my project"]

    def test_render_quotes_values(self):
        """Test that render() quotes values needing it."""
        builder = ArgumentBuilder().append("build").append_quoted("./my project")
        assert builder.render() == 'build "./my project"'

    def test_render_round_trip(self):
        """Test that the rendered line reparses to the tokens."""
        builder = (
            ArgumentBuilder()
            .append("test")
            .append_quoted("./tests/My Tests")
            .append_switch("--filter", 'Name="Slow Test"')
            .append_switch("--logger", "console;verbosity=detailed")
        )
        assert shlex.split(builder.render()) == builder.tokens()

    def test_append_switch_secret(self):
        """Test that append_switch marks secret values."""
        builder = ArgumentBuilder().append_switch("--api-key", "k3y", secret=True)
        assert builder.tokens() == ["--api-key", "k3y"]
        assert builder.render(safe=True) == f"--api-key {REDACTED}"

    def test_prepend(self):
        """Test inserting a token at the front."""
        builder = ArgumentBuilder().append("build").prepend("--diagnostics")
        assert builder.tokens() == ["--diagnostics", "build"]

    def test_extend_and_len(self):
        """Test extending with another builder."""
        first = ArgumentBuilder().append("run")
        second = ArgumentBuilder().append("--").append_quoted("x")
        first.extend(second)
        assert first.tokens() == ["run", "--", "x"]
        assert len(first) == 3

    def test_copy_is_independent(self):
        """Test that copies do not share state."""
        original = ArgumentBuilder().append("build")
        copy = original.copy()
        copy.append("--no-restore")
        assert original.tokens() == ["build"]
        assert copy == ArgumentBuilder().append("build").append("--no-restore")

    def test_empty_builder_is_falsy(self):
        """Test truthiness."""
        assert not ArgumentBuilder()
        assert ArgumentBuilder().append("x")

    def test_from_string_splits_like_shell(self):
        """Test splitting a free-form argument string."""
        builder = ArgumentBuilder.from_string('--name "John Smith" --verbose')
        assert builder.tokens() == ["--name", "John Smith", "--verbose"]
        assert shlex.split(builder.render()) == builder.tokens()

    def test_repr_masks_secrets(self):
        """Test that repr never leaks secrets."""
        builder = ArgumentBuilder().append_switch("--api-key", "secret-value", secret=True)
        assert "secret-value" not in repr(builder)

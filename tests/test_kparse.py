"""
Tests for kparse - Kaleidoscope Parser CLI
==========================================

These tests run the kparse command through click's CliRunner and check
its output and exit codes.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from kaleidoscope import __version__
from kaleidoscope.cli.errors import ExitCode
from kaleidoscope.cli.kparse import main


PROGRAM = """\
# Sample program
extern sin(x)
def add(a b) a+b*2
add(1, 2);
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of the tests."""
    monkeypatch.delenv("KALEIDOSCOPE_STRICT_NUMBERS", raising=False)
    monkeypatch.delenv("KALEIDOSCOPE_PRECEDENCE", raising=False)


def invoke(source: str, *args):
    """Write source to a file and run kparse on it."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("program.ks").write_text(source, encoding="utf-8")
        return runner.invoke(main, [*args, "program.ks"])


# =============================================================================
# Successful Runs
# =============================================================================

class TestSummaryOutput:
    """Default one-line-per-construct output."""

    def test_summary(self):
        """Each construct is printed on its own line."""
        result = invoke(PROGRAM)
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.splitlines() == [
            "extern sin(x)",
            "def add(a, b) = (a + (b * 2))",
            "expr add(1, 2)",
        ]

    def test_empty_file(self):
        """A file with only comments prints nothing."""
        result = invoke("# nothing here\n")
        assert result.exit_code == 0
        assert result.output == ""

    def test_ast_output(self):
        """--ast prints the indented tree."""
        result = invoke("def f(x) x+1", "--ast")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Function",
            "  Prototype f(x)",
            "  Binary '+'",
            "    Variable x",
            "    Number 1",
        ]

    def test_tokens_output(self):
        """--tokens prints every token, ending with EOF."""
        result = invoke("def f(x) x", "--tokens")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Token(DEF, 'def', 1:1)"
        assert lines[-1] == "Token(EOF, 1:11)"
        assert len(lines) == 7

    def test_custom_precedence(self):
        """-p registers an extra operator."""
        result = invoke("a/b+c", "-p", "/=40")
        assert result.exit_code == 0
        assert result.output.strip() == "expr ((a / b) + c)"

    def test_precedence_from_environment(self, monkeypatch):
        """KALEIDOSCOPE_PRECEDENCE is picked up."""
        monkeypatch.setenv("KALEIDOSCOPE_PRECEDENCE", "/:40")
        result = invoke("a/b")
        assert result.output.strip() == "expr (a / b)"

    def test_verbose(self):
        """-v adds progress lines."""
        result = invoke("1", "-v")
        assert result.exit_code == 0
        assert "Parsing program.ks..." in result.output
        assert "Parsed 1 items, 0 errors" in result.output

    def test_utf8_source(self):
        """Source files are read as UTF-8 whatever the locale."""
        result = invoke("# café ☕\nextern sin(x)\n")
        assert result.exit_code == 0
        assert result.output.strip() == "extern sin(x)"

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# Failures
# =============================================================================

class TestErrors:
    """Exit codes and diagnostics for bad input."""

    def test_parse_error(self):
        """Syntax errors are reported and give exit code 1."""
        result = invoke("(1+2\n")
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "Error: expected ')'" in result.output

    def test_parse_error_does_not_stop_later_items(self):
        """Constructs after an error are still printed."""
        result = invoke("(1+2;\nextern cos(x)\n")
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "extern cos(x)" in result.output

    def test_strict_numbers(self):
        """--strict-numbers rejects '1.2.3'."""
        result = invoke("1.2.3", "--strict-numbers")
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "Error: Malformed number literal '1.2.3'" in result.output

    def test_permissive_numbers(self):
        """Without --strict-numbers '1.2.3' is 1.2."""
        result = invoke("1.2.3")
        assert result.exit_code == 0
        assert result.output.strip() == "expr 1.2"

    def test_strict_numbers_in_token_dump(self):
        """A lexical error while dumping tokens exits with code 1."""
        result = invoke("x 1.2.3", "--tokens", "--strict-numbers")
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "Malformed number literal '1.2.3'" in result.output

    @pytest.mark.parametrize("value", ["ab=3", "/=x", "/=0", "40", "é=5"])
    def test_bad_precedence_option(self, value):
        """Malformed -p values are usage errors."""
        result = invoke("1", "-p", value)
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self):
        """A missing input file is a usage error."""
        result = CliRunner().invoke(main, ["does-not-exist.ks"])
        assert result.exit_code == ExitCode.INVALID_ARGS

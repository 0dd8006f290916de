"""
kparse - Kaleidoscope Parser Command-Line Interface
===================================================

This module implements a batch command-line front end for the
Kaleidoscope parser. It reads a source file, parses every top-level
construct and prints a summary, the token stream, or the AST.
Diagnostics go to stderr, one ``Error: <message>`` line per failure.

Usage Examples
--------------
Summarise a file:
    $ kparse program.ks

Dump tokens:
    $ kparse --tokens program.ks

Dump the AST:
    $ kparse --ast program.ks

Add an operator:
    $ kparse -p /=40 -p '>=10' program.ks

Reject malformed numbers such as 1.2.3:
    $ kparse --strict-numbers program.ks
"""

import logging
import sys
from pathlib import Path

import click

from kaleidoscope import __version__
from kaleidoscope.cli.errors import ExitCode, handle_cli_exception
from kaleidoscope.frontend import (
    ASTPrinter,
    DiagnosticReporter,
    FrontendConfig,
    FunctionNode,
    Lexer,
    Parser,
    PrototypeNode,
    TopLevelDriver,
    format_expression,
)
from kaleidoscope.frontend.parser import ANONYMOUS_FUNCTION_NAME
from kaleidoscope.frontend.precedence import validate_operator


def _parse_precedence(ctx, param, values: tuple[str, ...]) -> dict[str, int]:
    """Turn repeated OP=PREC options into a mapping."""
    entries = {}
    for value in values:
        op, sep, prec = value.rpartition("=")
        if not sep:
            raise click.BadParameter(f"expected OP=PREC, got {value!r}")
        try:
            entries[op] = int(prec)
        except ValueError:
            raise click.BadParameter(f"precedence must be an integer, got {prec!r}")
        try:
            validate_operator(op, entries[op])
        except ValueError as e:
            raise click.BadParameter(str(e))
    return entries


def _describe_item(item) -> str:
    """One-line summary of a top-level construct."""
    if isinstance(item, PrototypeNode):
        return f"extern {item.name}({', '.join(item.params)})"
    if isinstance(item, FunctionNode) and item.name == ANONYMOUS_FUNCTION_NAME:
        return f"expr {format_expression(item.body)}"
    proto = item.prototype
    return f"def {proto.name}({', '.join(proto.params)}) = {format_expression(item.body)}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST of every top-level construct",
)
@click.option(
    "--strict-numbers",
    is_flag=True,
    help="Treat malformed numbers like 1.2.3 as errors",
)
@click.option(
    "-p", "--precedence",
    multiple=True,
    callback=_parse_precedence,
    metavar="OP=PREC",
    help="Register a binary operator (can be repeated)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="kparse")
def main(
    input_file: Path,
    tokens: bool,
    ast: bool,
    strict_numbers: bool,
    precedence: dict[str, int],
    verbose: bool,
) -> None:
    """
    Parse a Kaleidoscope source file.

    INPUT_FILE is the source file (.ks) to parse.

    \b
    Examples:
        kparse program.ks              # One line per construct
        kparse --ast program.ks        # Indented AST
        kparse --tokens program.ks     # Token stream
        kparse -p /=40 program.ks      # Add the '/' operator

    Defaults can also come from KALEIDOSCOPE_STRICT_NUMBERS and
    KALEIDOSCOPE_PRECEDENCE.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = FrontendConfig.from_env()
    config.filename = str(input_file)
    if strict_numbers:
        config.strict_numbers = True
    for op, prec in precedence.items():
        config.set_precedence(op, prec)

    try:
        source = input_file.read_text(encoding="utf-8")

        if verbose:
            click.echo(f"Parsing {input_file}...")
            ops = " ".join(f"{op}:{prec}" for op, prec in config.binop_precedence.items())
            click.echo(f"Operators: {ops}")

        # Token dump mode
        if tokens:
            lexer = Lexer(source, config.filename, strict_numbers=config.strict_numbers)
            for token in lexer.tokenize():
                click.echo(repr(token))
            return

        diagnostics = DiagnosticReporter()
        parser = Parser.from_source(source, config, diagnostics)
        summary = TopLevelDriver(parser).run()

        printer = ASTPrinter()
        for item in summary.items:
            if ast:
                click.echo(printer.print(item))
            else:
                click.echo(_describe_item(item))

        if verbose:
            click.echo(f"Parsed {len(summary.items)} items, {len(summary.errors)} errors")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if not summary.ok:
        sys.exit(ExitCode.PARSE_ERROR)


if __name__ == "__main__":
    main()

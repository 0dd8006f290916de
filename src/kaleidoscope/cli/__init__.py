"""
Kaleidoscope Command-Line Interface
===================================

This package provides the command-line tools for Kaleidoscope:

- **kparse**: parse a source file and print tokens, a summary, or the AST

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["kparse"]

"""
decafc Command-Line Interface
=============================

This package provides the command-line tools for decafc:

- **decafparse**: tokenize and parse a Decaf source file, printing the
  AST (or the token stream) or the first syntax error

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["decafparse"]

"""
decafc - Decaf Compiler Front End
=================================

This package provides the syntactic-analysis stage of a compiler for
Decaf, a small teaching language with int/bool/void types, global and
local variables and arrays, functions, if/else, while, break, continue
and return.

Main Components
---------------
- **frontend**: tokens, reference lexer, recursive descent parser and
    the AST node model produced by the parser

- **cli**: the decafparse command-line driver

Quick Start
-----------
Parse a program from source text:
    >>> from decafc import parse_source
    >>> program = parse_source("int x; def void main() { x = 1; }")
    >>> [v.name for v in program.variables]
    ['x']

Parse tokens produced by another lexer:
    >>> from decafc import Token, TokenType, parse
    >>> program = parse([
    ...     Token(TokenType.KEYWORD, "int", 1),
    ...     Token(TokenType.IDENTIFIER, "x", 1),
    ...     Token(TokenType.SYMBOL, ";", 1),
    ... ])

Or use the command-line tool:
    $ decafparse program.decaf

Version History
---------------
1.0.0 - Initial release with lexer, parser and AST printer
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from decafc.errors import DecafError, SourceLocation
from decafc.frontend import (
    DecafSyntaxError,
    Token,
    TokenType,
    TokenCursor,
    DecafLexer,
    DecafParser,
    ParserOptions,
    ProgramNode,
    parse,
    parse_source,
    tokenize,
)

__all__ = [
    "__version__",
    # Errors
    "DecafError",
    "DecafSyntaxError",
    "SourceLocation",
    # Tokens
    "Token",
    "TokenType",
    "TokenCursor",
    # Lexer and parser
    "DecafLexer",
    "DecafParser",
    "ParserOptions",
    "ProgramNode",
    "parse",
    "parse_source",
    "tokenize",
]

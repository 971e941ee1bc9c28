"""
decafc Error Hierarchy
======================

This module defines the root of the exception hierarchy for decafc.
All exceptions inherit from DecafError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
DecafError (base)
└── FrontEndError (lexer and parser, see decafc.frontend.errors)
    └── DecafSyntaxError - malformed tokens or grammar violations

Source Locations
----------------
Each front-end exception captures the location of the offending token
(filename, line and, when the lexer provides it, column). Messages follow
this format:

    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class DecafError(Exception):
    """
    Base exception for all decafc errors.

        try:
            program = parse_source(text)
        except DecafError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in Decaf source code, used by tokens, AST nodes and errors.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when the producer did not track it)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column', dropping an unknown column."""
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"

"""
Decaf Front-End Error Hierarchy
===============================

This module defines the exceptions raised by the Decaf lexer and parser.
All of them inherit from FrontEndError, which itself inherits from the
base DecafError for consistent handling across the package.

Exception Hierarchy
-------------------
FrontEndError (base for all front-end errors)
└── DecafSyntaxError - lexer and parser syntax errors
    ├── UnexpectedEndOfInputError - a rule needed a token but none remain
    ├── TokenMismatchError - expected token type/text not found
    ├── InvalidTypeError - not one of int, bool, void
    ├── InvalidIdentifierError - not an identifier token
    ├── InvalidLiteralError - not a literal, or a malformed literal
    ├── InvalidStatementError - no statement alternative matches
    ├── InvalidBaseExpressionError - no base expression alternative matches
    ├── NestingTooDeepError - nesting deeper than the parser can follow
    ├── UnterminatedStringError - missing closing quote (lexer)
    └── InvalidCharacterError - unexpected character (lexer)

The parser never recovers: the first error raised aborts the parse and
propagates unchanged to the caller.

Error Message Format
--------------------
    filename:line:column: error: description
    hint: suggestion for fixing

Example:
    prog.decaf:5: error: expected ';' but found '}'
"""

from typing import Optional

from decafc.errors import DecafError, SourceLocation


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontEndError(DecafError):
    """
    Base exception for all Decaf front-end errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Source line of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

            prog.decaf:3: error: invalid type 'x'
            hint: expected int, bool, or void
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class DecafSyntaxError(FrontEndError):
    """
    Syntax error in Decaf source code.

    Raised when the lexer cannot classify the input, or when the parser
    finds a token sequence that does not match the grammar.
    """
    pass


class UnexpectedEndOfInputError(DecafSyntaxError):
    """
    A grammar rule needed another token but the sequence was exhausted.

    Example:
        int x        // missing ';' at end of file
    """

    def __init__(
        self,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        message = "unexpected end of input"
        if expected:
            message = f"{message} (expected {expected})"
        super().__init__(message, location=location)


class TokenMismatchError(DecafSyntaxError):
    """
    The next token did not have the required type and text.

    Attributes:
        expected: Text of the token the grammar required
        found: Text of the token actually present
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected '{expected}' but found '{found}'",
            location=location,
        )


class InvalidTypeError(DecafSyntaxError):
    """A type name was required but the token is not int, bool or void."""

    def __init__(self, found: str, location: Optional[SourceLocation] = None):
        self.found = found
        super().__init__(
            f"invalid type '{found}'",
            location=location,
            hint="expected int, bool, or void",
        )


class InvalidIdentifierError(DecafSyntaxError):
    """An identifier was required but a different token was found."""

    def __init__(self, found: str, location: Optional[SourceLocation] = None):
        self.found = found
        super().__init__(f"invalid identifier '{found}'", location=location)


class InvalidLiteralError(DecafSyntaxError):
    """
    A literal was required but the token is not one, or its text cannot
    be converted (e.g. a decimal literal with stray characters).
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        super().__init__(f"invalid literal '{found}'", location=location, hint=hint)


class InvalidStatementError(DecafSyntaxError):
    """The leading token of a statement matches no statement form."""

    def __init__(self, found: str, location: Optional[SourceLocation] = None):
        self.found = found
        super().__init__(
            f"invalid statement starting with '{found}'",
            location=location,
            hint="statements begin with an identifier or one of "
                 "if, while, return, break, continue",
        )


class InvalidBaseExpressionError(DecafSyntaxError):
    """
    The leading token of an operand is not '(', an identifier or a literal.

    Example:
        x = * 2;
    """

    def __init__(self, found: str, location: Optional[SourceLocation] = None):
        self.found = found
        super().__init__(
            f"invalid base expression '{found}'",
            location=location,
            hint="expected a parenthesized expression, location, "
                 "function call, or literal",
        )


class NestingTooDeepError(DecafSyntaxError):
    """
    Expressions or other constructs nest deeper than the recursive descent
    parser can follow on the Python call stack.

    Example:
        x = ((((((((((((((((((((((((((((((((( ... 1 ... )))));
    """

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "expression nested too deeply",
            location=location,
            hint="split the expression using temporary variables",
        )


class UnterminatedStringError(DecafSyntaxError):
    """
    Unterminated string literal.

    Raised by the lexer when a string literal is not closed before the
    end of the line or file.
    """

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
        )


class InvalidCharacterError(DecafSyntaxError):
    """Raised by the lexer for a character that starts no Decaf token."""

    def __init__(self, char: str, location: Optional[SourceLocation] = None):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
        )

"""
Decaf Tokens and Token Cursor
=============================

This module defines the token data model shared by the lexer and the
parser, and the TokenCursor the parser consumes tokens through.

Token Categories
----------------
| Type            | Example text        |
|-----------------|---------------------|
| KEYWORD         | def, int, if, true  |
| IDENTIFIER      | main, count_1       |
| SYMBOL          | ( ) { } ; == && !   |
| DECIMAL_LITERAL | 42                  |
| HEX_LITERAL     | 0x2A                |
| STRING_LITERAL  | "a\\nb" (verbatim)  |

There is no end-of-file token: the end of input is the end of the
sequence.

Example Usage
-------------
>>> cursor = TokenCursor([Token(TokenType.IDENTIFIER, "x", 1)])
>>> cursor.check_type(TokenType.IDENTIFIER)
True
>>> cursor.consume().text
'x'
>>> cursor.is_empty()
True
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Iterable, Optional

from decafc.errors import SourceLocation
from decafc.frontend.errors import TokenMismatchError, UnexpectedEndOfInputError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Lexical categories produced by a Decaf lexer."""
    KEYWORD = auto()
    IDENTIFIER = auto()
    SYMBOL = auto()
    DECIMAL_LITERAL = auto()
    HEX_LITERAL = auto()
    STRING_LITERAL = auto()


# Filename tokens carry when their producer does not name one
DEFAULT_FILENAME = "<input>"

# Keywords that name a type; a block entry starting with one is a declaration
TYPE_KEYWORDS: frozenset[str] = frozenset({"int", "bool", "void"})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        type: The TokenType classification
        text: The exact source text (string literals keep their quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed, 0 if not tracked)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int
    column: int = 0
    filename: str = DEFAULT_FILENAME

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.column:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.text!r}, {self.line})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_type_keyword(self) -> bool:
        """Return True if this token is int, bool or void."""
        return self.type == TokenType.KEYWORD and self.text in TYPE_KEYWORDS


# =============================================================================
# Token Cursor
# =============================================================================

class TokenCursor:
    """
    Consumable, first-in first-out view over a token sequence.

    The parser only ever looks at the next token, except when it must tell
    an identifier used as a location apart from an identifier that starts
    a call, where it also looks at the token after it (peek_second).

    Tokens that do not name their source file are relabelled with the
    cursor's filename, so every location derived from them (errors and
    AST nodes alike) reports it.

    Attributes:
        filename: Source filename for tokens that carry none
    """

    def __init__(self, tokens: Iterable[Token], filename: str = DEFAULT_FILENAME):
        self._tokens: list[Token] = [
            replace(token, filename=filename)
            if token.filename == DEFAULT_FILENAME and filename != DEFAULT_FILENAME
            else token
            for token in tokens
        ]
        self._pos = 0
        self.filename = filename

    def __repr__(self) -> str:
        return f"TokenCursor(position={self._pos}, remaining={self.remaining})"

    @property
    def position(self) -> int:
        """Number of tokens consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of tokens not yet consumed."""
        return len(self._tokens) - self._pos

    def is_empty(self) -> bool:
        """Check if every token has been consumed."""
        return self._pos >= len(self._tokens)

    def peek(self, expected: Optional[str] = None) -> Token:
        """
        Return the next token without consuming it.

        Args:
            expected: Description of what the caller wanted, for the error

        Raises:
            UnexpectedEndOfInputError: If no tokens remain
        """
        if self.is_empty():
            raise UnexpectedEndOfInputError(expected, self._end_location())
        return self._tokens[self._pos]

    def peek_second(self) -> Optional[Token]:
        """Return the token after the next one, or None if there is none."""
        pos = self._pos + 1
        if pos >= len(self._tokens):
            return None
        return self._tokens[pos]

    def check_type(self, token_type: TokenType) -> bool:
        """Check the next token's type; False (not an error) when empty."""
        if self.is_empty():
            return False
        return self._tokens[self._pos].type == token_type

    def check(self, token_type: TokenType, text: str) -> bool:
        """Check the next token's type and text; False when empty."""
        if self.is_empty():
            return False
        token = self._tokens[self._pos]
        return token.type == token_type and token.text == text

    def consume(self, expected: Optional[str] = None) -> Token:
        """
        Consume and return the next token.

        Raises:
            UnexpectedEndOfInputError: If no tokens remain
        """
        token = self.peek(expected)
        self._pos += 1
        return token

    def expect(self, token_type: TokenType, text: str) -> Token:
        """
        Consume the next token only if it matches both type and text.

        The mismatch error is reported on the line of the token after the
        offending one, falling back to the offending token's own line when
        it is the last token.

        Returns:
            The consumed token

        Raises:
            UnexpectedEndOfInputError: If no tokens remain
            TokenMismatchError: If the next token does not match
        """
        token = self.peek(f"'{text}'")
        if token.type != token_type or token.text != text:
            following = self.peek_second()
            location = following.location if following else token.location
            raise TokenMismatchError(text, token.text, location)
        self._pos += 1
        return token

    def current_location(self) -> Optional[SourceLocation]:
        """Location of the next token, or of the last one when empty."""
        if self.is_empty():
            return self._end_location()
        return self._tokens[self._pos].location

    def _end_location(self) -> Optional[SourceLocation]:
        """Location of the last token, for errors raised at end of input."""
        if self._tokens:
            return self._tokens[-1].location
        return None

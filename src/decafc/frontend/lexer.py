"""
Decaf Lexer (Tokenizer)
=======================

This module implements a reference lexer for Decaf. It converts source
text into the classified Token sequence the parser consumes. The parser
does not depend on it: any producer of Token values can drive it.

Token Categories
----------------
- Keywords: def, int, bool, void, if, else, while, return, break,
  continue, true, false (plus reserved words)
- Identifiers: a letter followed by letters, digits or underscores
- Decimal literals: 123
- Hexadecimal literals: 0x7F
- Strings: "double quoted", kept verbatim with quotes and escapes
- Symbols: ( ) [ ] { } , ; = + - * / % < <= > >= == != && || !

Comments
--------
- Single-line: // comment

Example Usage
-------------
>>> from decafc.frontend.lexer import DecafLexer
>>> for token in DecafLexer("def int main() { return 0; }").tokenize():
...     print(token)
Token(KEYWORD, 'def', 1:1)
Token(KEYWORD, 'int', 1:5)
Token(IDENTIFIER, 'main', 1:9)
...
"""

import logging
import string
from typing import Iterator

from decafc.errors import SourceLocation
from decafc.frontend.errors import InvalidCharacterError, UnterminatedStringError
from decafc.frontend.tokens import Token, TokenType

logger = logging.getLogger(__name__)


# =============================================================================
# Keyword and Symbol Tables
# =============================================================================

KEYWORDS: frozenset[str] = frozenset({
    # Types
    "int", "bool", "void",
    # Declarations and control flow
    "def", "if", "else", "while", "return", "break", "continue",
    # Boolean literals
    "true", "false",
    # Reserved for future use
    "for", "callout", "class", "interface", "extends", "implements",
    "new", "this", "string", "float", "double", "null",
})

# Two-character symbols are tried before single characters
TWO_CHAR_SYMBOLS: frozenset[str] = frozenset({"<=", ">=", "==", "!=", "&&", "||"})

SINGLE_CHAR_SYMBOLS: frozenset[str] = frozenset("()[]{},;=+-*/%<>!")


class DecafLexer:
    """
    Lexer for Decaf source code.

    Attributes:
        source: The source text
        filename: Source filename for tokens and error messages
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        """
        Initialize the lexer with source code.

        Args:
            source: The Decaf source code to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = line_number
        self._column = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order

        Raises:
            DecafSyntaxError: If a character or string cannot be tokenized
        """
        count = 0
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()
            count += 1
        logger.debug("%s: produced %d tokens", self.filename, count)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, keeping line and column current."""
        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def _make_token(self, token_type: TokenType, text: str, line: int, column: int) -> Token:
        return Token(
            type=token_type,
            text=text,
            line=line,
            column=column,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\r\n":
                self._advance()
                continue

            # Single-line comment: //
            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        line, column = self._line, self._column
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_word(line, column)
        if char in string.digits:
            return self._scan_number(line, column)
        if char == '"':
            return self._scan_string(line, column)
        return self._scan_symbol(line, column)

    def _scan_word(self, line: int, column: int) -> Token:
        """Scan an identifier or keyword."""
        start = self._pos
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()
        text = self.source[start:self._pos]
        token_type = TokenType.KEYWORD if text in KEYWORDS else TokenType.IDENTIFIER
        return self._make_token(token_type, text, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """Scan a decimal or 0x-prefixed hexadecimal literal."""
        start = self._pos
        if self._peek() == "0" and self._peek(1) in ("x", "X") and self._peek(2) \
                and self._peek(2) in string.hexdigits:
            self._advance()
            self._advance()
            while self._peek() and self._peek() in string.hexdigits:
                self._advance()
            return self._make_token(
                TokenType.HEX_LITERAL, self.source[start:self._pos], line, column
            )

        while self._peek() and self._peek() in string.digits:
            self._advance()
        return self._make_token(
            TokenType.DECIMAL_LITERAL, self.source[start:self._pos], line, column
        )

    def _scan_string(self, line: int, column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The token text keeps the quotes and escape sequences verbatim; a
        backslash only protects the character after it from closing the
        string.
        """
        start = self._pos
        self._advance()  # opening quote

        while True:
            char = self._peek()
            if char == "" or char == "\n":
                raise UnterminatedStringError(SourceLocation(self.filename, line, column))
            self._advance()
            if char == '"':
                break
            if char == "\\" and self._peek() not in ("", "\n"):
                self._advance()

        return self._make_token(
            TokenType.STRING_LITERAL, self.source[start:self._pos], line, column
        )

    def _scan_symbol(self, line: int, column: int) -> Token:
        pair = self._peek() + self._peek(1)
        if pair in TWO_CHAR_SYMBOLS:
            self._advance()
            self._advance()
            return self._make_token(TokenType.SYMBOL, pair, line, column)

        char = self._peek()
        if char in SINGLE_CHAR_SYMBOLS:
            self._advance()
            return self._make_token(TokenType.SYMBOL, char, line, column)

        raise InvalidCharacterError(char, SourceLocation(self.filename, line, column))


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize Decaf source into a list of tokens."""
    return list(DecafLexer(source, filename).tokenize())

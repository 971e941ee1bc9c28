"""
Decaf Recursive Descent Parser
==============================

This module implements a predictive recursive descent parser for Decaf.
It consumes a sequence of classified tokens and builds an Abstract Syntax
Tree (AST). Every decision is made from the next token, or the next two
when an identifier could start either a location or a call; no rule ever
backtracks.

Grammar (EBNF)
--------------
program      ::= (func_decl | var_decl)*
var_decl     ::= type IDENTIFIER ('[' INT_LITERAL ']')? ';'
func_decl    ::= 'def' type IDENTIFIER '(' params? ')' block
params       ::= type IDENTIFIER (',' type IDENTIFIER)*
block        ::= '{' (var_decl | statement)* '}'
statement    ::= location '=' expr ';'
               | call ';'
               | 'if' '(' expr ')' block ('else' block)?
               | 'while' '(' expr ')' block
               | 'return' expr? ';'
               | 'break' ';'
               | 'continue' ';'
type         ::= 'int' | 'bool' | 'void'

Expression Precedence (lowest to highest)
-----------------------------------------
1. logical_or     ||
2. logical_and    &&
3. equality       == !=
4. relational     < <= > >=
5. additive       + -
6. multiplicative * / %
7. unary          - !        (at most one prefix operator)
8. base           '(' expr ')', call, location, literal

All binary operators are left-associative.

Error Handling
--------------
There is no error recovery. The first malformed construct raises a
DecafSyntaxError subclass, which propagates unchanged to the caller of
parse(); no partial tree is ever returned.

Example Usage
-------------
>>> from decafc.frontend.parser import parse_source
>>> program = parse_source("def int main() { return 1 + 2 * 3; }")
>>> program.functions[0].name
'main'
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from decafc.errors import SourceLocation
from decafc.frontend.lexer import DecafLexer
from decafc.frontend.tokens import Token, TokenCursor, TokenType
from decafc.frontend.ast import (
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    ParameterNode,
    BlockStatement,
    Statement,
    AssignmentStatement,
    CallStatement,
    IfStatement,
    WhileStatement,
    ReturnStatement,
    BreakStatement,
    ContinueStatement,
    Expression,
    BinaryExpression,
    UnaryExpression,
    LocationExpression,
    CallExpression,
    Literal,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    BinaryOperator,
    UnaryOperator,
    DecafType,
)
from decafc.frontend.errors import (
    DecafSyntaxError,
    InvalidTypeError,
    InvalidIdentifierError,
    InvalidLiteralError,
    InvalidStatementError,
    InvalidBaseExpressionError,
    NestingTooDeepError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Parser Configuration
# =============================================================================

# Legacy token buffer size; longer identifiers are truncated with a warning
DEFAULT_MAX_IDENTIFIER_LENGTH = 256


@dataclass
class ParserOptions:
    """
    Parser configuration options.

    Attributes:
        max_identifier_length: Longest identifier kept intact (at least 1).
                     Longer names are truncated to this many characters and
                     a warning is logged. None disables the limit.
        legacy_string_escapes: If False (default), every \\n, \\t, \\\\ and
                     \\" in a string literal is resolved in one left-to-right
                     scan. If True, only the first occurrence of the first
                     form found (checked in that order) is resolved, matching
                     older Decaf front ends bit for bit.
    """
    max_identifier_length: Optional[int] = DEFAULT_MAX_IDENTIFIER_LENGTH
    legacy_string_escapes: bool = False

    def __post_init__(self):
        if self.max_identifier_length is not None and self.max_identifier_length < 1:
            raise ValueError(
                f"max_identifier_length must be at least 1 or None, "
                f"got {self.max_identifier_length}"
            )


# =============================================================================
# Token Text Tables
# =============================================================================

TYPE_NAMES: dict[str, DecafType] = {
    "int": DecafType.INT,
    "bool": DecafType.BOOL,
    "void": DecafType.VOID,
}

BOOLEAN_LITERALS: dict[str, bool] = {
    "true": True,
    "false": False,
}

# Escape sequences in string literals, in legacy lookup priority order
STRING_ESCAPES: dict[str, str] = {
    "\\n": "\n",
    "\\t": "\t",
    "\\\\": "\\",
    '\\"': '"',
}

_ESCAPE_PATTERN = re.compile(r'\\[nt\\"]')

INT32_MODULUS = 1 << 32
INT32_MAX = (1 << 31) - 1


def wrap_int32(value: int) -> int:
    """Wrap an integer to the 32-bit two's complement range."""
    value %= INT32_MODULUS
    if value > INT32_MAX:
        value -= INT32_MODULUS
    return value


def decode_string_literal(text: str, legacy: bool = False) -> str:
    """
    Strip the quotes from a string literal token and resolve its escapes.

    Args:
        text: Token text including the enclosing quotes
        legacy: Resolve only the first escape of the first matching kind

    Returns:
        The decoded string value
    """
    body = text[1:-1]

    if not legacy:
        return _ESCAPE_PATTERN.sub(lambda m: STRING_ESCAPES[m.group(0)], body)

    for escape, replacement in STRING_ESCAPES.items():
        index = body.find(escape)
        if index >= 0:
            return body[:index] + replacement + body[index + len(escape):]
    return body


class DecafParser:
    """
    Recursive descent parser for Decaf.

    Parses a token sequence into an Abstract Syntax Tree. Operator
    precedence is handled by one method per precedence level, each
    parsing its operands with the next tighter-binding level.

    The only state is the token cursor; each grammar method leaves it
    just past the construct it parsed.

    Attributes:
        filename: Source filename for error reporting
        options: Parser configuration
    """

    def __init__(
        self,
        tokens: Union[Iterable[Token], TokenCursor],
        filename: str = "<input>",
        options: Optional[ParserOptions] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from a lexer, or a cursor over them
            filename: Source filename for tokens that do not name one
            options: Parser configuration (defaults if None)
        """
        if tokens is None:
            raise DecafSyntaxError("no tokens to parse")
        if isinstance(tokens, TokenCursor):
            self._cursor = tokens
        else:
            self._cursor = TokenCursor(tokens, filename)
        self.filename = filename
        self.options = options or ParserOptions()

    @property
    def cursor(self) -> TokenCursor:
        return self._cursor

    def parse(self) -> ProgramNode:
        """
        Parse the whole token sequence as a program.

        Returns:
            ProgramNode with global variables and functions in source order

        Raises:
            DecafSyntaxError: On the first malformed construct, or
                NestingTooDeepError when nesting exhausts the Python stack
        """
        if self._cursor.is_empty():
            location = SourceLocation(self.filename, 1)
        else:
            location = self._cursor.peek().location

        variables = []
        functions = []

        try:
            while not self._cursor.is_empty():
                if self._cursor.check(TokenType.KEYWORD, "def"):
                    functions.append(self._parse_function())
                else:
                    variables.append(self._parse_variable_declaration(is_global=True))
        except RecursionError:
            raise NestingTooDeepError(self._cursor.current_location()) from None

        logger.debug(
            "%s: parsed %d global variable(s), %d function(s)",
            self.filename, len(variables), len(functions),
        )

        return ProgramNode(
            location=location,
            variables=tuple(variables),
            functions=tuple(functions),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check_symbol(self, text: str) -> bool:
        return self._cursor.check(TokenType.SYMBOL, text)

    def _check_keyword(self, text: str) -> bool:
        return self._cursor.check(TokenType.KEYWORD, text)

    def _expect_symbol(self, text: str) -> Token:
        return self._cursor.expect(TokenType.SYMBOL, text)

    def _expect_keyword(self, text: str) -> Token:
        return self._cursor.expect(TokenType.KEYWORD, text)

    def _at_call(self) -> bool:
        """Check for an identifier immediately followed by '('."""
        if not self._cursor.check_type(TokenType.IDENTIFIER):
            return False
        following = self._cursor.peek_second()
        return (
            following is not None
            and following.type == TokenType.SYMBOL
            and following.text == "("
        )

    def _at_literal(self) -> bool:
        token = self._cursor.peek()
        if token.type in (
            TokenType.DECIMAL_LITERAL,
            TokenType.HEX_LITERAL,
            TokenType.STRING_LITERAL,
        ):
            return True
        return token.type == TokenType.KEYWORD and token.text in BOOLEAN_LITERALS

    # =========================================================================
    # Primitive Parsers
    # =========================================================================

    def _parse_type(self) -> DecafType:
        """Parse a type keyword: int, bool or void."""
        token = self._cursor.consume("int, bool, or void")
        if token.type != TokenType.KEYWORD or token.text not in TYPE_NAMES:
            raise InvalidTypeError(token.text, token.location)
        return TYPE_NAMES[token.text]

    def _parse_identifier(self) -> str:
        """Parse an identifier and return its name."""
        token = self._cursor.consume("identifier")
        if token.type != TokenType.IDENTIFIER:
            raise InvalidIdentifierError(token.text, token.location)

        name = token.text
        limit = self.options.max_identifier_length
        if limit is not None and len(name) > limit:
            logger.warning(
                "%s: identifier '%s...' is %d characters long; truncated to %d",
                token.location, name[:16], len(name), limit,
            )
            name = name[:limit]
        return name

    def _parse_integer(self, token: Token) -> int:
        """Convert a decimal or hex literal token to a wrapped 32-bit value."""
        base = 16 if token.type == TokenType.HEX_LITERAL else 10
        try:
            value = int(token.text, base)
        except ValueError:
            raise InvalidLiteralError(
                token.text,
                token.location,
                hint=f"not a valid base-{base} integer",
            ) from None
        return wrap_int32(value)

    def _parse_literal(self) -> Literal:
        """Parse an integer, boolean or string literal."""
        token = self._cursor.consume("literal")
        location = token.location

        if token.type in (TokenType.DECIMAL_LITERAL, TokenType.HEX_LITERAL):
            return IntegerLiteral(location=location, value=self._parse_integer(token))

        if token.type == TokenType.KEYWORD and token.text in BOOLEAN_LITERALS:
            return BooleanLiteral(location=location, value=BOOLEAN_LITERALS[token.text])

        if token.type == TokenType.STRING_LITERAL:
            if len(token.text) < 2 or token.text[0] != '"' or token.text[-1] != '"':
                raise InvalidLiteralError(
                    token.text, location, hint="string literals must be enclosed in '\"'"
                )
            value = decode_string_literal(token.text, self.options.legacy_string_escapes)
            return StringLiteral(location=location, value=value)

        raise InvalidLiteralError(
            token.text,
            location,
            hint="expected a decimal, hex, or string literal, true, or false",
        )

    # =========================================================================
    # Declaration Parsing
    # =========================================================================

    def _parse_variable_declaration(self, is_global: bool) -> VariableDeclaration:
        """Parse: type IDENTIFIER ('[' INT_LITERAL ']')? ';'"""
        location = self._cursor.peek("type").location
        var_type = self._parse_type()
        name = self._parse_identifier()

        is_array = False
        array_length = 1
        if self._check_symbol("["):
            self._cursor.consume()
            size_token = self._cursor.consume("array length")
            if size_token.type not in (TokenType.DECIMAL_LITERAL, TokenType.HEX_LITERAL):
                raise InvalidLiteralError(
                    size_token.text,
                    size_token.location,
                    hint="array length must be an integer literal",
                )
            array_length = self._parse_integer(size_token)
            if array_length < 0:
                raise InvalidLiteralError(
                    size_token.text,
                    size_token.location,
                    hint="array length is out of range",
                )
            is_array = True
            self._expect_symbol("]")

        self._expect_symbol(";")

        return VariableDeclaration(
            location=location,
            name=name,
            var_type=var_type,
            is_array=is_array,
            array_length=array_length,
            is_global=is_global,
        )

    def _parse_parameter(self) -> ParameterNode:
        location = self._cursor.peek("parameter type").location
        param_type = self._parse_type()
        name = self._parse_identifier()
        return ParameterNode(location=location, name=name, param_type=param_type)

    def _parse_parameter_list(self) -> list[ParameterNode]:
        """Parse a possibly empty parameter list, up to but not including ')'."""
        parameters = []

        if self._check_symbol(")"):
            return parameters

        parameters.append(self._parse_parameter())
        while self._check_symbol(","):
            self._cursor.consume()
            parameters.append(self._parse_parameter())

        return parameters

    def _parse_function(self) -> FunctionNode:
        """Parse: 'def' type IDENTIFIER '(' params? ')' block"""
        location = self._expect_keyword("def").location
        return_type = self._parse_type()
        name = self._parse_identifier()

        self._expect_symbol("(")
        parameters = self._parse_parameter_list()
        self._expect_symbol(")")

        body = self._parse_block()

        return FunctionNode(
            location=location,
            name=name,
            return_type=return_type,
            parameters=tuple(parameters),
            body=body,
        )

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_block(self) -> BlockStatement:
        """
        Parse a block.

        Local declarations and statements may interleave; each goes to its
        own list so both stay in source order.
        """
        location = self._expect_symbol("{").location

        declarations = []
        statements = []

        while not self._check_symbol("}"):
            if self._cursor.peek("'}'").is_type_keyword():
                declarations.append(self._parse_variable_declaration(is_global=False))
            else:
                statements.append(self._parse_statement())

        self._expect_symbol("}")

        return BlockStatement(
            location=location,
            declarations=tuple(declarations),
            statements=tuple(statements),
        )

    def _parse_statement(self) -> Statement:
        """Parse any statement."""
        token = self._cursor.peek("statement")

        if token.type == TokenType.KEYWORD:
            if token.text == "if":
                return self._parse_if_statement()
            if token.text == "while":
                return self._parse_while_statement()
            if token.text == "return":
                return self._parse_return_statement()
            if token.text == "break":
                self._cursor.consume()
                self._expect_symbol(";")
                return BreakStatement(location=token.location)
            if token.text == "continue":
                self._cursor.consume()
                self._expect_symbol(";")
                return ContinueStatement(location=token.location)

        if self._at_call():
            call = self._parse_call()
            self._expect_symbol(";")
            return CallStatement(location=token.location, call=call)

        if token.type == TokenType.IDENTIFIER:
            return self._parse_assignment()

        raise InvalidStatementError(token.text, token.location)

    def _parse_assignment(self) -> AssignmentStatement:
        """Parse: location '=' expr ';'"""
        target = self._parse_location()
        self._expect_symbol("=")
        value = self._parse_expression()
        self._expect_symbol(";")
        return AssignmentStatement(location=target.location, target=target, value=value)

    def _parse_if_statement(self) -> IfStatement:
        location = self._expect_keyword("if").location
        self._expect_symbol("(")
        condition = self._parse_expression()
        self._expect_symbol(")")

        then_branch = self._parse_block()

        else_branch = None
        if self._check_keyword("else"):
            self._cursor.consume()
            else_branch = self._parse_block()

        return IfStatement(
            location=location,
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _parse_while_statement(self) -> WhileStatement:
        location = self._expect_keyword("while").location
        self._expect_symbol("(")
        condition = self._parse_expression()
        self._expect_symbol(")")

        body = self._parse_block()

        return WhileStatement(location=location, condition=condition, body=body)

    def _parse_return_statement(self) -> ReturnStatement:
        location = self._expect_keyword("return").location

        value = None
        if not self._check_symbol(";"):
            value = self._parse_expression()
        self._expect_symbol(";")

        return ReturnStatement(location=location, value=value)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse expression (top level is logical OR)."""
        return self._parse_logical_or()

    def _parse_logical_or(self) -> Expression:
        return self._parse_binary(
            self._parse_logical_and,
            {"||": BinaryOperator.LOGICAL_OR},
        )

    def _parse_logical_and(self) -> Expression:
        return self._parse_binary(
            self._parse_equality,
            {"&&": BinaryOperator.LOGICAL_AND},
        )

    def _parse_equality(self) -> Expression:
        return self._parse_binary(
            self._parse_relational,
            {
                "==": BinaryOperator.EQUAL,
                "!=": BinaryOperator.NOT_EQUAL,
            },
        )

    def _parse_relational(self) -> Expression:
        return self._parse_binary(
            self._parse_additive,
            {
                "<": BinaryOperator.LESS,
                "<=": BinaryOperator.LESS_EQ,
                ">": BinaryOperator.GREATER,
                ">=": BinaryOperator.GREATER_EQ,
            },
        )

    def _parse_additive(self) -> Expression:
        return self._parse_binary(
            self._parse_multiplicative,
            {
                "+": BinaryOperator.ADD,
                "-": BinaryOperator.SUBTRACT,
            },
        )

    def _parse_multiplicative(self) -> Expression:
        return self._parse_binary(
            self._parse_unary,
            {
                "*": BinaryOperator.MULTIPLY,
                "/": BinaryOperator.DIVIDE,
                "%": BinaryOperator.MODULO,
            },
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: dict[str, BinaryOperator],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Parses operands at the next tighter level
            operators: Map of symbol text to binary operator at this level
        """
        expr = operand_parser()

        while (
            self._cursor.check_type(TokenType.SYMBOL)
            and self._cursor.peek().text in operators
        ):
            op_token = self._cursor.consume()
            right = operand_parser()
            expr = BinaryExpression(
                location=expr.location,
                operator=operators[op_token.text],
                left=expr,
                right=right,
            )

        return expr

    def _parse_unary(self) -> Expression:
        """Parse at most one prefix - or ! followed by a base expression."""
        token = self._cursor.peek("expression")

        unary_ops = {
            "-": UnaryOperator.NEGATE,
            "!": UnaryOperator.LOGICAL_NOT,
        }

        if token.type == TokenType.SYMBOL and token.text in unary_ops:
            self._cursor.consume()
            operand = self._parse_base_expression()
            return UnaryExpression(
                location=token.location,
                operator=unary_ops[token.text],
                operand=operand,
            )

        return self._parse_base_expression()

    def _parse_base_expression(self) -> Expression:
        """Parse a parenthesized expression, call, location or literal."""
        token = self._cursor.peek("expression")

        if token.type == TokenType.SYMBOL and token.text == "(":
            self._cursor.consume()
            expr = self._parse_expression()
            self._expect_symbol(")")
            return expr

        if self._at_call():
            return self._parse_call()

        if token.type == TokenType.IDENTIFIER:
            return self._parse_location()

        if self._at_literal():
            return self._parse_literal()

        raise InvalidBaseExpressionError(token.text, token.location)

    def _parse_location(self) -> LocationExpression:
        """Parse: IDENTIFIER ('[' expr ']')?"""
        location = self._cursor.peek("location").location
        name = self._parse_identifier()

        index = None
        if self._check_symbol("["):
            self._cursor.consume()
            index = self._parse_expression()
            self._expect_symbol("]")

        return LocationExpression(location=location, name=name, index=index)

    def _parse_call(self) -> CallExpression:
        """Parse: IDENTIFIER '(' (expr (',' expr)*)? ')'"""
        location = self._cursor.peek("function name").location
        name = self._parse_identifier()
        self._expect_symbol("(")

        arguments = []
        if not self._check_symbol(")"):
            arguments.append(self._parse_expression())
            while self._check_symbol(","):
                self._cursor.consume()
                arguments.append(self._parse_expression())

        self._expect_symbol(")")

        return CallExpression(
            location=location,
            function_name=name,
            arguments=tuple(arguments),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(
    tokens: Union[Iterable[Token], TokenCursor],
    options: Optional[ParserOptions] = None,
    filename: str = "<input>",
) -> ProgramNode:
    """
    Parse a token sequence into a program AST.

    Args:
        tokens: Tokens in source order, or a cursor over them
        options: Parser configuration
        filename: Source filename for tokens that do not name one

    Returns:
        The root ProgramNode; the token sequence is fully consumed

    Raises:
        DecafSyntaxError: If parsing fails
    """
    return DecafParser(tokens, filename, options).parse()


def parse_source(
    source: str,
    filename: str = "<input>",
    options: Optional[ParserOptions] = None,
) -> ProgramNode:
    """
    Parse Decaf source code into an AST.

    This is a convenience function that combines lexing and parsing.

    Args:
        source: The Decaf source code
        filename: Source filename for error messages
        options: Parser configuration

    Returns:
        The root ProgramNode of the AST

    Raises:
        DecafSyntaxError: If lexing or parsing fails
    """
    tokens = list(DecafLexer(source, filename).tokenize())
    return DecafParser(tokens, filename, options).parse()

"""
Decaf Front End
===============

Syntactic analysis for Decaf: a classified token stream goes in, an
immutable Abstract Syntax Tree comes out.

Pipeline
--------
    Decaf Source → Lexer → Tokens → Parser → AST

The parser only depends on the Token data model, so tokens can come from
the bundled reference lexer or from any other producer.

Usage
-----
>>> from decafc.frontend import parse_source, ASTPrinter
>>> program = parse_source("def int main() { return 1 + 2 * 3; }")
>>> print(ASTPrinter().print(program))
Program
  Function: int main()
    Block
      Return (1 + (2 * 3))

Not handled here
----------------
- Semantic checks (undeclared names, type mismatches, void variables)
- Error recovery: the first syntax error aborts the parse
"""

# =============================================================================
# Public API Imports
# =============================================================================

from decafc.frontend.errors import (
    FrontEndError,
    DecafSyntaxError,
    UnexpectedEndOfInputError,
    TokenMismatchError,
    InvalidTypeError,
    InvalidIdentifierError,
    InvalidLiteralError,
    InvalidStatementError,
    InvalidBaseExpressionError,
    NestingTooDeepError,
    UnterminatedStringError,
    InvalidCharacterError,
)
from decafc.frontend.tokens import Token, TokenType, TokenCursor
from decafc.frontend.lexer import DecafLexer, tokenize
from decafc.frontend.ast import (
    DecafType,
    ASTNode,
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    ParameterNode,
    BlockStatement,
    AssignmentStatement,
    CallStatement,
    IfStatement,
    WhileStatement,
    ReturnStatement,
    BreakStatement,
    ContinueStatement,
    BinaryExpression,
    UnaryExpression,
    LocationExpression,
    CallExpression,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    BinaryOperator,
    UnaryOperator,
    ASTVisitor,
    ASTPrinter,
)
from decafc.frontend.parser import DecafParser, ParserOptions, parse, parse_source

__all__ = [
    # Errors
    "FrontEndError",
    "DecafSyntaxError",
    "UnexpectedEndOfInputError",
    "TokenMismatchError",
    "InvalidTypeError",
    "InvalidIdentifierError",
    "InvalidLiteralError",
    "InvalidStatementError",
    "InvalidBaseExpressionError",
    "NestingTooDeepError",
    "UnterminatedStringError",
    "InvalidCharacterError",
    # Tokens
    "Token",
    "TokenType",
    "TokenCursor",
    # Lexer
    "DecafLexer",
    "tokenize",
    # Parser
    "DecafParser",
    "ParserOptions",
    "parse",
    "parse_source",
    # AST Nodes
    "DecafType",
    "ASTNode",
    "ProgramNode",
    "FunctionNode",
    "VariableDeclaration",
    "ParameterNode",
    "BlockStatement",
    "AssignmentStatement",
    "CallStatement",
    "IfStatement",
    "WhileStatement",
    "ReturnStatement",
    "BreakStatement",
    "ContinueStatement",
    "BinaryExpression",
    "UnaryExpression",
    "LocationExpression",
    "CallExpression",
    "IntegerLiteral",
    "BooleanLiteral",
    "StringLiteral",
    "BinaryOperator",
    "UnaryOperator",
    "ASTVisitor",
    "ASTPrinter",
]

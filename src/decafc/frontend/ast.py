"""
Decaf Abstract Syntax Tree (AST) Definitions
============================================

This module defines the AST node types produced by the Decaf parser.
The AST represents the hierarchical structure of a program after
parsing, ready for semantic analysis and code generation.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node: global variables and functions
├── Declarations
│   ├── FunctionNode - function declaration (def ...)
│   ├── VariableDeclaration - global or local variable / array
│   └── ParameterNode - function parameter
├── Statements
│   ├── BlockStatement - { locals... statements... }
│   ├── IfStatement - if/else
│   ├── WhileStatement - while loop
│   ├── ReturnStatement - return with optional value
│   ├── BreakStatement
│   ├── ContinueStatement
│   ├── AssignmentStatement - location = expr;
│   └── CallStatement - function call used as a statement
└── Expressions
    ├── BinaryExpression - binary operators
    ├── UnaryExpression - unary - and !
    ├── CallExpression - function call
    ├── LocationExpression - variable or array element reference
    ├── IntegerLiteral - 32-bit signed integer constant
    ├── BooleanLiteral - true / false
    └── StringLiteral - decoded string constant

Design Notes
------------
- All nodes are frozen dataclasses; sequences are tuples, so a tree is a
  pure value once the parser returns it
- Each node stores its source location; `node.line` is the source line
- Node families are closed: consumers dispatch on the concrete class
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

from decafc.errors import SourceLocation


# =============================================================================
# Types
# =============================================================================

class DecafType(Enum):
    """Decaf type names."""
    INT = auto()
    BOOL = auto()
    VOID = auto()

    def __str__(self) -> str:
        return self.name.lower()


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation

    @property
    def line(self) -> int:
        """Source line of the construct."""
        return self.location.line


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for all statement nodes."""
    pass


@dataclass(frozen=True)
class Declaration(ASTNode):
    """Base class for declarations (variables, parameters, functions)."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """Binary operator types."""
    # Arithmetic
    ADD = auto()        # +
    SUBTRACT = auto()   # -
    MULTIPLY = auto()   # *
    DIVIDE = auto()     # /
    MODULO = auto()     # %

    # Relational
    LESS = auto()       # <
    LESS_EQ = auto()    # <=
    GREATER = auto()    # >
    GREATER_EQ = auto() # >=

    # Equality
    EQUAL = auto()      # ==
    NOT_EQUAL = auto()  # !=

    # Logical
    LOGICAL_AND = auto()  # &&
    LOGICAL_OR = auto()   # ||


class UnaryOperator(Enum):
    """Unary operator types."""
    NEGATE = auto()      # -x
    LOGICAL_NOT = auto() # !x


BINARY_OPERATOR_SYMBOLS: dict[BinaryOperator, str] = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
    BinaryOperator.MODULO: "%",
    BinaryOperator.LESS: "<",
    BinaryOperator.LESS_EQ: "<=",
    BinaryOperator.GREATER: ">",
    BinaryOperator.GREATER_EQ: ">=",
    BinaryOperator.EQUAL: "==",
    BinaryOperator.NOT_EQUAL: "!=",
    BinaryOperator.LOGICAL_AND: "&&",
    BinaryOperator.LOGICAL_OR: "||",
}

UNARY_OPERATOR_SYMBOLS: dict[UnaryOperator, str] = {
    UnaryOperator.NEGATE: "-",
    UnaryOperator.LOGICAL_NOT: "!",
}


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operation expression (a op b).

    Attributes:
        operator: The binary operator
        left: Left operand expression
        right: Right operand expression
    """
    operator: BinaryOperator = None
    left: Expression = None
    right: Expression = None


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """
    Unary operation expression (op x).

    Attributes:
        operator: The unary operator
        operand: The operand expression
    """
    operator: UnaryOperator = None
    operand: Expression = None


@dataclass(frozen=True)
class LocationExpression(Expression):
    """
    Reference to a variable, or to an array element when indexed.

    Attributes:
        name: The variable name
        index: Index expression for array access, None for scalars
    """
    name: str = ""
    index: Optional[Expression] = None


@dataclass(frozen=True)
class CallExpression(Expression):
    """
    Function call expression.

    Attributes:
        function_name: Name of the function to call
        arguments: Argument expressions in source order
    """
    function_name: str = ""
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Literal(Expression):
    """Base class for literal constants."""
    pass


@dataclass(frozen=True)
class IntegerLiteral(Literal):
    """
    Integer literal (decimal or hexadecimal in source).

    Attributes:
        value: The value, wrapped to 32-bit signed range
    """
    value: int = 0


@dataclass(frozen=True)
class BooleanLiteral(Literal):
    """Boolean literal (true / false)."""
    value: bool = False


@dataclass(frozen=True)
class StringLiteral(Literal):
    """
    String literal.

    Attributes:
        value: The decoded string (quotes removed, escapes resolved)
    """
    value: str = ""


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class BlockStatement(Statement):
    """
    Block enclosed in braces.

    Local declarations and statements may interleave in the source; they
    are kept as two separate sequences, each in source order.

    Attributes:
        declarations: Local variable declarations
        statements: Statements in the block
    """
    declarations: tuple["VariableDeclaration", ...] = ()
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class AssignmentStatement(Statement):
    """
    Assignment statement (location = expr;).

    Attributes:
        target: The location assigned to
        value: The value to assign
    """
    target: LocationExpression = None
    value: Expression = None


@dataclass(frozen=True)
class CallStatement(Statement):
    """
    Function call used as a statement (foo(1, 2);).

    Attributes:
        call: The call expression
    """
    call: CallExpression = None


@dataclass(frozen=True)
class IfStatement(Statement):
    """
    If statement with optional else block.

    Attributes:
        condition: The condition expression
        then_branch: Block executed if condition is true
        else_branch: Optional block executed if condition is false
    """
    condition: Expression = None
    then_branch: BlockStatement = None
    else_branch: Optional[BlockStatement] = None


@dataclass(frozen=True)
class WhileStatement(Statement):
    """
    While loop statement.

    Attributes:
        condition: Loop condition
        body: Loop body block
    """
    condition: Expression = None
    body: BlockStatement = None


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """
    Return statement.

    Attributes:
        value: Optional return value expression
    """
    value: Optional[Expression] = None


@dataclass(frozen=True)
class BreakStatement(Statement):
    """Break statement for exiting loops."""
    pass


@dataclass(frozen=True)
class ContinueStatement(Statement):
    """Continue statement for skipping to the next loop iteration."""
    pass


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class VariableDeclaration(Declaration):
    """
    Variable declaration (global or local).

    Represents declarations like:
        int x;
        bool flags[8];

    `void` variables are accepted here; rejecting them is left to
    semantic analysis.

    Attributes:
        name: Variable name
        var_type: The declared element type
        is_array: True for array declarations
        array_length: Element count (1 for scalars)
        is_global: True for top-level declarations
    """
    name: str = ""
    var_type: DecafType = None
    is_array: bool = False
    array_length: int = 1
    is_global: bool = False


@dataclass(frozen=True)
class ParameterNode(Declaration):
    """
    Function parameter declaration.

    Attributes:
        name: Parameter name
        param_type: The parameter type
    """
    name: str = ""
    param_type: DecafType = None


@dataclass(frozen=True)
class FunctionNode(Declaration):
    """
    Function declaration.

    Attributes:
        name: Function name
        return_type: The return type
        parameters: Parameters in source order
        body: The function body
    """
    name: str = ""
    return_type: DecafType = None
    parameters: tuple[ParameterNode, ...] = ()
    body: BlockStatement = None


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """
    Root node of the AST representing a complete Decaf program.

    Attributes:
        variables: Global variable declarations in source order
        functions: Function declarations in source order
    """
    variables: tuple[VariableDeclaration, ...] = ()
    functions: tuple[FunctionNode, ...] = ()


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; everything else falls through to generic_visit, which visits
    the node's children.

    Usage:
        class CallCounter(ASTVisitor):
            def __init__(self):
                self.calls = 0

            def visit_CallExpression(self, node):
                self.calls += 1
                self.generic_visit(node)
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<ClassName>, defaulting to generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes in field order."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, tuple):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self._indent()
        for var in node.variables:
            self.visit(var)
        for func in node.functions:
            self.visit(func)
        self._dedent()

    def visit_FunctionNode(self, node: FunctionNode):
        params = ", ".join(f"{p.param_type} {p.name}" for p in node.parameters)
        self._emit(f"Function: {node.return_type} {node.name}({params})")
        self._indent()
        self.visit(node.body)
        self._dedent()

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        scope = "global" if node.is_global else "local"
        suffix = f"[{node.array_length}]" if node.is_array else ""
        self._emit(f"Variable ({scope}): {node.var_type} {node.name}{suffix}")

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("Block")
        self._indent()
        for decl in node.declarations:
            self.visit(decl)
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If ({self._expr_str(node.condition)})")
        self._indent()
        self._emit("Then:")
        self._indent()
        self.visit(node.then_branch)
        self._dedent()
        if node.else_branch is not None:
            self._emit("Else:")
            self._indent()
            self.visit(node.else_branch)
            self._dedent()
        self._dedent()

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"While ({self._expr_str(node.condition)})")
        self._indent()
        self.visit(node.body)
        self._dedent()

    def visit_ReturnStatement(self, node: ReturnStatement):
        if node.value is not None:
            self._emit(f"Return {self._expr_str(node.value)}")
        else:
            self._emit("Return")

    def visit_BreakStatement(self, node: BreakStatement):
        self._emit("Break")

    def visit_ContinueStatement(self, node: ContinueStatement):
        self._emit("Continue")

    def visit_AssignmentStatement(self, node: AssignmentStatement):
        self._emit(f"Assign: {self._expr_str(node.target)} = {self._expr_str(node.value)}")

    def visit_CallStatement(self, node: CallStatement):
        self._emit(f"Call: {self._expr_str(node.call)}")

    def _expr_str(self, expr: Expression) -> str:
        """Convert expression to a fully parenthesized string."""
        if isinstance(expr, BooleanLiteral):
            return "true" if expr.value else "false"
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, StringLiteral):
            return repr(expr.value)
        if isinstance(expr, LocationExpression):
            if expr.index is not None:
                return f"{expr.name}[{self._expr_str(expr.index)}]"
            return expr.name
        if isinstance(expr, CallExpression):
            args = ", ".join(self._expr_str(a) for a in expr.arguments)
            return f"{expr.function_name}({args})"
        if isinstance(expr, BinaryExpression):
            op_str = BINARY_OPERATOR_SYMBOLS[expr.operator]
            return f"({self._expr_str(expr.left)} {op_str} {self._expr_str(expr.right)})"
        if isinstance(expr, UnaryExpression):
            op_str = UNARY_OPERATOR_SYMBOLS[expr.operator]
            return f"({op_str}{self._expr_str(expr.operand)})"
        return f"<{type(expr).__name__}>"

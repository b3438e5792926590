"""
Abstract Syntax Tree node definitions for Kale.

Nodes are immutable value objects compared structurally, so an AST built in
one parse call equals the AST built from the same text across several
incremental calls. Each node supports the visitor pattern.

Author: xwest
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, List, Tuple, Union


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    EXTERN = "ExternNode"
    FUNCTION = "FunctionNode"

    # Declarations
    PROTOTYPE = "Prototype"
    FUNCTION_DEF = "Function"

    # Expressions
    LITERAL = "Literal"
    IDENTIFIER = "Identifier"
    UNARY_OP = "UnaryOp"
    BINARY_OP = "BinaryOp"
    FUNCTION_CALL = "FunctionCall"


class ASTVisitor(ABC):
    """
    Visitor for AST nodes.

    visit() dispatches to visit_<NodeType> (for example visit_BinaryOp) and
    falls back to generic_visit().
    """

    def visit(self, node: "ASTNode") -> Any:
        method = getattr(self, f"visit_{node.node_type.value}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: "ASTNode") -> Any:
        for child in node.children():
            self.visit(child)


class ASTNode(ABC):
    """Base class for all AST nodes."""
    node_type: ClassVar[ASTNodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> List["ASTNode"]:
        """Get all child nodes."""
        return []


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


@dataclass(frozen=True)
class Literal(Expression):
    """Numeric or string literal."""
    value: Union[float, str]
    literal_type: str  # "number" or "string"

    node_type: ClassVar[ASTNodeType] = ASTNodeType.LITERAL

    @classmethod
    def number(cls, value: float) -> "Literal":
        return cls(float(value), "number")

    @classmethod
    def string(cls, value: str) -> "Literal":
        return cls(value, "string")


@dataclass(frozen=True)
class Identifier(Expression):
    """Variable reference."""
    name: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER


@dataclass(frozen=True)
class UnaryOp(Expression):
    """Prefix operator applied to a primary expression."""
    operator: str
    operand: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.UNARY_OP

    def children(self) -> List[ASTNode]:
        return [self.operand]


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Binary operation expression."""
    left: Expression
    operator: str
    right: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BINARY_OP

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class FunctionCall(Expression):
    """Call of a named function with positional arguments."""
    callee: str
    args: Tuple[Expression, ...] = ()

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION_CALL

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def children(self) -> List[ASTNode]:
        return list(self.args)


# ============================================================================
# Declarations
# ============================================================================

@dataclass(frozen=True)
class Prototype(ASTNode):
    """Function signature: name plus ordered parameter names."""
    name: str
    args: Tuple[str, ...] = ()

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROTOTYPE

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def is_anonymous(self) -> bool:
        return self.name == ""


@dataclass(frozen=True)
class Function(ASTNode):
    """Function definition with exactly one body expression."""
    prototype: Prototype
    body: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION_DEF

    def children(self) -> List[ASTNode]:
        return [self.prototype, self.body]


# ============================================================================
# Top-level nodes
# ============================================================================

class Item(ASTNode):
    """Base class for top-level items."""
    pass


@dataclass(frozen=True)
class ExternNode(Item):
    """extern declaration."""
    prototype: Prototype

    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXTERN

    def children(self) -> List[ASTNode]:
        return [self.prototype]


@dataclass(frozen=True)
class FunctionNode(Item):
    """def declaration, or a bare top-level expression wrapped as an anonymous function."""
    function: Function

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION

    @classmethod
    def anonymous(cls, body: Expression) -> "FunctionNode":
        return cls(Function(Prototype("", ()), body))

    def children(self) -> List[ASTNode]:
        return [self.function]


# Convenience alias for type annotations
AST = List[Item]

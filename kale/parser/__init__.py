"""
Kale Parser Package

Implements an incremental recursive descent parser for Kale with precedence
climbing for binary expressions.

Key Features:
- Resumable parsing: incomplete input is handed back as leftover tokens
- Configurable operator precedence table
- Structural, immutable AST nodes with a visitor interface
- Message based syntax errors naming the expected construct

Author: xwest
"""

from .ast_nodes import (
    AST, ASTNode, ASTNodeType, ASTVisitor, Item, Expression,
    Literal, Identifier, UnaryOp, BinaryOp, FunctionCall,
    Prototype, Function, ExternNode, FunctionNode,
)
from .parser import Parser, ParseResult, parse, parse_string
from .settings import ParserSettings, DEFAULT_PRECEDENCE
from .token_buffer import TokenBuffer
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "ParseResult", "parse", "parse_string",
    "ParserSettings", "DEFAULT_PRECEDENCE", "TokenBuffer",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor", "Item", "Expression",
    "Literal", "Identifier", "UnaryOp", "BinaryOp", "FunctionCall",
    "Prototype", "Function", "ExternNode", "FunctionNode",

    # Error handling
    "ParseError",
]

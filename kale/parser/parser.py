"""
Kale Parser Implementation

Recursive descent for declarations (def, extern, bare expressions) and
precedence climbing for binary expressions.

The parser is incremental. When the tokens run out in the middle of a
construct, everything consumed for that construct is pushed back and the
call returns normally with those tokens as leftovers; the caller appends more
input and calls again. A syntax error raises ParseError and drops the call's
partial progress.

Author: xwest
"""

import logging
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer
from .ast_nodes import (
    Expression, Literal, Identifier, UnaryOp, BinaryOp, FunctionCall,
    Prototype, Function, Item, ExternNode, FunctionNode
)
from .errors import (
    ParseError, IncompleteInput, create_unexpected_token_error,
    create_unknown_operator_error, create_invalid_expression_error
)
from .settings import ParserSettings
from .token_buffer import TokenBuffer

logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    """AST accumulated so far plus the tokens that still need more input."""
    ast: List[Item]
    rest: List[Token]

    @property
    def is_complete(self) -> bool:
        return not self.rest


class Parser:
    """
    Kale incremental parser.

    One Parser may be reused for many calls; it keeps no state between calls
    other than its settings.
    """

    def __init__(self, settings: Optional[ParserSettings] = None, filename: str = "<input>"):
        """
        Initialize the parser.

        Args:
            settings: Operator precedence configuration (a fresh default table if omitted)
            filename: Name used in diagnostics
        """
        self.settings = settings if settings is not None else ParserSettings()
        self.filename = filename
        self.tokens = TokenBuffer()

        # Prefix parsing functions (for tokens that can start a primary expression)
        self.prefix_parsers: Dict[TokenType, Callable[[], Expression]] = {
            TokenType.NUMERIC: self._parse_number_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.LEFT_PAREN: self._parse_grouping,
        }

    def parse(self, tokens: Iterable[Token], parsed: Optional[Iterable[Item]] = None) -> ParseResult:
        """
        Parse as many top-level items as the tokens allow.

        Args:
            tokens: Leftovers from the previous call followed by new tokens
            parsed: AST accumulated by earlier calls (not modified)

        Returns:
            ParseResult with the extended AST and the unconsumed tokens

        Raises:
            ParseError: On a syntax or lexical error
        """
        self.tokens = TokenBuffer(tokens)
        ast = list(parsed) if parsed is not None else []

        while True:
            token = self.tokens.peek()
            if token is None:
                break

            if token.type == TokenType.DELIMITER:
                self.tokens.advance()
                continue

            mark = self.tokens.mark()
            try:
                item = self._parse_item(token)
            except IncompleteInput:
                self.tokens.rewind(mark)
                logger.debug("input ended mid-construct, %d token(s) pushed back", len(self.tokens))
                break
            except ParseError as e:
                logger.debug("parse failed: %s", e.message)
                raise

            logger.debug("parsed %s from %d token(s)",
                         item.node_type.value, len(self.tokens.consumed_since(mark)))
            ast.append(item)

        return ParseResult(ast, self.tokens.remaining())

    def _parse_item(self, token: Token) -> Item:
        """Parse a top-level item."""
        if token.type == TokenType.DEF:
            return self._parse_function()
        elif token.type == TokenType.EXTERN:
            return self._parse_extern()
        else:
            return self._parse_top_level_expression()

    def _parse_extern(self) -> ExternNode:
        self.tokens.advance()  # Consume 'extern'
        return ExternNode(self._parse_prototype())

    def _parse_function(self) -> FunctionNode:
        """Parse a function definition."""
        self.tokens.advance()  # Consume 'def'
        prototype = self._parse_prototype()
        body = self._parse_expression()
        return FunctionNode(Function(prototype, body))

    def _parse_top_level_expression(self) -> FunctionNode:
        """Wrap a bare expression as an anonymous zero-argument function."""
        return FunctionNode.anonymous(self._parse_expression())

    def _parse_prototype(self) -> Prototype:
        """Parse `name ( arg , arg ... )`."""
        name_token = self.tokens.advance()
        if name_token.type != TokenType.IDENTIFIER:
            raise create_unexpected_token_error("function name", name_token, self.filename)

        paren_token = self.tokens.advance()
        if paren_token.type != TokenType.LEFT_PAREN:
            raise create_unexpected_token_error("'('", paren_token, self.filename)

        args = []
        while True:
            token = self.tokens.advance()
            if token.type == TokenType.IDENTIFIER:
                args.append(token.value)
            elif token.type == TokenType.COMMA:
                continue
            elif token.type == TokenType.RIGHT_PAREN:
                break
            else:
                raise create_unexpected_token_error("')'", token, self.filename)

        return Prototype(name_token.value, tuple(args))

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self) -> Expression:
        """Parse an expression."""
        lhs = self._parse_unary()
        return self._parse_binary_rhs(0, lhs)

    def _parse_binary_rhs(self, min_precedence: int, lhs: Expression) -> Expression:
        """
        Precedence climbing.

        Folds operators whose precedence is at least min_precedence into lhs.
        A strictly tighter operator after the right operand is folded into
        that operand first; equal precedence combines left to right.
        """
        while True:
            operator_token = self.tokens.peek()
            if operator_token is None or operator_token.type != TokenType.OPERATOR:
                return lhs

            precedence = self._get_precedence(operator_token)
            if precedence < min_precedence:
                return lhs

            self.tokens.advance()
            rhs = self._parse_unary()

            while True:
                next_token = self.tokens.peek()
                if next_token is None or next_token.type != TokenType.OPERATOR:
                    break
                next_precedence = self._get_precedence(next_token)
                if next_precedence <= precedence:
                    break
                rhs = self._parse_binary_rhs(next_precedence, rhs)

            lhs = BinaryOp(lhs, operator_token.value, rhs)

    def _get_precedence(self, operator_token: Token) -> int:
        precedence = self.settings.precedence_of(operator_token.value)
        if precedence is None:
            raise create_unknown_operator_error(operator_token, self.filename)
        return precedence

    def _parse_unary(self) -> Expression:
        """Parse a primary expression, optionally behind a prefix operator."""
        token = self.tokens.expect_more()
        if token.type == TokenType.OPERATOR:
            self.tokens.advance()
            return UnaryOp(token.value, self._parse_primary())
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        token = self.tokens.expect_more()
        prefix_parser = self.prefix_parsers.get(token.type)
        if prefix_parser is None:
            raise create_invalid_expression_error(token, self.filename)
        return prefix_parser()

    def _parse_number_literal(self) -> Literal:
        token = self.tokens.advance()
        return Literal.number(token.value)

    def _parse_string_literal(self) -> Literal:
        token = self.tokens.advance()
        return Literal.string(token.value)

    def _parse_identifier(self) -> Expression:
        """Parse a variable reference or a call."""
        name = self.tokens.advance().value

        next_token = self.tokens.peek()
        if next_token is None or next_token.type != TokenType.LEFT_PAREN:
            return Identifier(name)

        self.tokens.advance()  # Consume (
        return FunctionCall(name, tuple(self._parse_call_arguments()))

    def _parse_call_arguments(self) -> List[Expression]:
        args: List[Expression] = []
        if self.tokens.expect_more().type == TokenType.RIGHT_PAREN:
            self.tokens.advance()
            return args

        while True:
            args.append(self._parse_expression())
            token = self.tokens.advance()
            if token.type == TokenType.COMMA:
                continue
            if token.type == TokenType.RIGHT_PAREN:
                return args
            raise create_unexpected_token_error("',' or ')' in argument list", token, self.filename)

    def _parse_grouping(self) -> Expression:
        """Parse a parenthesized expression."""
        self.tokens.advance()  # Consume (
        expr = self._parse_expression()

        closing = self.tokens.advance()
        if closing.type != TokenType.RIGHT_PAREN:
            raise create_unexpected_token_error("')'", closing, self.filename)
        return expr


def parse(
    tokens: Iterable[Token],
    parsed_tree: Optional[Iterable[Item]] = None,
    settings: Optional[ParserSettings] = None,
    filename: str = "<input>"
) -> ParseResult:
    """
    Parse tokens on top of a previously parsed AST.

    Args:
        tokens: Leftover tokens from the last call followed by new ones
        parsed_tree: AST from earlier calls
        settings: Operator precedence configuration
        filename: Name used in diagnostics

    Returns:
        ParseResult(ast, rest); rest is empty when every construct was completed

    Raises:
        ParseError: If the tokens contain a syntax or lexical error
    """
    return Parser(settings, filename).parse(tokens, parsed_tree)


def parse_string(
    source: str,
    settings: Optional[ParserSettings] = None,
    parsed_tree: Optional[Iterable[Item]] = None,
    filename: str = "<string>"
) -> ParseResult:
    """
    Convenience function to tokenize and parse a source string.

    Lexical errors surface as ParseError, like syntax errors.
    """
    tokens = Lexer(source, filename).tokenize()
    return parse(tokens, parsed_tree, settings, filename)

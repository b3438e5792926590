"""
Error handling for the Kale parser.

A parse call has three outcomes per construct: success, "needs more input"
and a syntax error. Syntax errors raise ParseError and abort the whole call.
Running out of tokens raises IncompleteInput, which the top-level loop turns
into leftover tokens; it never escapes Parser.parse().

Author: xwest
"""

from typing import Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic, LexerError


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    `message` names the expected construct; the offending token, when there
    is one, is kept separately and shown by str().
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        filename: str = "<input>",
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message if token is None else f"{message}, found {token}",
            line=token.line if token is not None else None,
            severity="error",
            filename=filename,
            code=code,
            help_text=help_text
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def filename(self) -> str:
        return self.diagnostic.filename

    def __str__(self) -> str:
        return str(self.diagnostic)


class IncompleteInput(Exception):
    """The token buffer ran out before the current construct was finished."""
    pass


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unknown operator",
    "P003": "Invalid expression",
    "P004": "Lexical error in input",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: str, found: Token, filename: str = "<input>") -> ParseError:
    """Create an error for a token that does not fit the construct being parsed."""
    if found.type == TokenType.ERROR:
        return create_lexical_error(found, filename)
    return ParseError(
        message=f"expected {expected}",
        token=found,
        filename=filename,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, "
                  f"but found {found.type.name} instead."
    )


def create_unknown_operator_error(found: Token, filename: str = "<input>") -> ParseError:
    """Create an error for a binary operator missing from the precedence table."""
    return ParseError(
        message="unknown operator found",
        token=found,
        filename=filename,
        code="P002",
        help_text=f"'{found.lexeme}' has no precedence; register it in ParserSettings to use it."
    )


def create_invalid_expression_error(found: Token, filename: str = "<input>") -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if found.type == TokenType.ERROR:
        return create_lexical_error(found, filename)
    return ParseError(
        message="unknown token when expecting an expression",
        token=found,
        filename=filename,
        code="P003",
        help_text="Expressions start with a number, string, identifier, '(' or a prefix operator."
    )


def create_lexical_error(found: Token, filename: str = "<input>") -> ParseError:
    """Wrap the lexer diagnostic carried by an ERROR token, keeping the lexer's filename."""
    error = found.value
    if isinstance(error, LexerError):
        return ParseError(
            message=error.message,
            token=found,
            filename=error.diagnostic.filename,
            code="P004",
            help_text=str(error)
        )
    return ParseError(
        message="lexical error",
        token=found,
        filename=filename,
        code="P004",
        help_text=str(error)
    )

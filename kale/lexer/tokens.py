"""
Token definitions for the Kale lexer.

This module defines every token type the Kale front end produces:
- Keywords (def, extern)
- Structural markers (delimiter, parentheses, brackets, comma)
- Literals (identifiers, numerics, strings)
- Operators and comments
- End of input and lexical error tokens

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in Kale.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    COMMENT = auto()                # // line comment
    ERROR = auto()                  # Lexical error, value holds the LexerError

    # ========================================================================
    # Keywords
    # ========================================================================
    DEF = auto()                    # def
    EXTERN = auto()                 # extern

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    IDENTIFIER = auto()             # foo, _bar, x1
    NUMERIC = auto()                # 42, 3.14, 20.
    STRING = auto()                 # "hello"

    # ========================================================================
    # Operators
    # ========================================================================
    OPERATOR = auto()               # + - * / ! < > = == != <= >=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    DELIMITER = auto()              # ; (statement terminator)
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    COMMA = auto()                  # ,


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Kale language.

    Contains the token type, lexeme (raw text) and semantic value. The line
    number is kept for diagnostics only and does not take part in equality.
    """
    type: TokenType
    lexeme: str = ""                # Raw text from source
    value: Any = None               # Payload (str, float or LexerError)
    line: int = field(default=1, compare=False)

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r}, line={self.line})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in (TokenType.NUMERIC, TokenType.STRING)

    @property
    def is_keyword(self) -> bool:
        return self.type in (TokenType.DEF, TokenType.EXTERN)

    @property
    def is_operator(self) -> bool:
        return self.type == TokenType.OPERATOR

    @property
    def is_trivia(self) -> bool:
        """Tokens the parser never sees: comments and end-of-input markers."""
        return self.type in (TokenType.COMMENT, TokenType.EOF)


# Lookup tables used by the lexer for keyword/punctuation recognition

KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}

PUNCTUATION = {
    ",": TokenType.COMMA,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ";": TokenType.DELIMITER,
}

# Characters that start an operator token
OPERATOR_CHARS = frozenset("+-*!<>=")

# Operators that pair with a following '='
COMPOUND_OPERATORS = frozenset({"==", "!=", ">=", "<="})

DIGITS = frozenset("0123456789")

"""
Kale Lexer Package

Implements the hand-written lexical analyzer (tokenizer) for Kale.

Key Features:
- Single character lookahead, one token per call
- Lazy iteration terminated by an EOF token
- Lexical errors returned as ERROR tokens instead of aborting
- Line tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
]

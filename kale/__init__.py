"""
Kale Front End Package

Tokenizer and incremental parser for Kale, a small expression-and-function
language (def/extern declarations, numeric and string literals, infix
operators, calls).

Architecture:
    kale/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Resumable syntax analysis and AST generation
    └── repl.py          # Line-by-line driver for the partial-parse protocol

Author: xwest
License: MIT
"""

import logging

__version__ = "0.1.0-alpha"
__author__ = "xwest"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .lexer import Lexer, Token, TokenType, LexerError, tokenize_string
from .parser import Parser, ParseResult, ParserSettings, ParseError, parse, parse_string

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParserSettings",
    "ParseResult",
    "Token",
    "TokenType",

    # Functions
    "tokenize_string",
    "parse",
    "parse_string",

    # Errors
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]

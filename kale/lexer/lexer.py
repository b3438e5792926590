"""
Kale Lexer - turns source text into tokens

Hand-written scanner with a single character of lookahead. Every call to
next_token() returns exactly one token; the position only moves forward.

Lexical errors never abort a scan. They come back as ERROR tokens (and are
collected in Lexer.errors) so the caller decides what to do with them.

xwest
"""

import logging
from typing import Iterator, List

from .tokens import (
    Token, TokenType, KEYWORDS, PUNCTUATION, OPERATOR_CHARS, COMPOUND_OPERATORS, DIGITS
)
from .errors import (
    LexerError, create_invalid_character_error,
    create_unterminated_string_error, create_malformed_numeric_error
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Kale lexical analyzer.

    Scans a materialized source string. The lexer is also a lazy iterator:
    iterating yields tokens up to and including the first EOF token and then
    stops. It cannot be restarted, create a new Lexer to scan again.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name used in diagnostics
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.errors: List[LexerError] = []
        self._finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._finished:
            raise StopIteration
        token = self.next_token()
        if token.type == TokenType.EOF:
            self._finished = True
        return token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining source code.

        Returns:
            List of tokens ending with the EOF token. Lexical errors are
            included in place as ERROR tokens.
        """
        return list(self)

    def next_token(self) -> Token:
        """Scan and return the next token. Returns EOF forever once the input is exhausted."""
        self._skip_whitespace()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", None, self.line)

        start_line = self.line
        current_char = self.source[self.pos]

        if current_char in DIGITS:
            return self._tokenize_number(start_line)

        if current_char.isalpha() or current_char == "_":
            return self._tokenize_identifier_or_keyword(start_line)

        if current_char == '"':
            return self._tokenize_string(start_line)

        if current_char in OPERATOR_CHARS:
            return self._tokenize_operator(start_line)

        if current_char == "/":
            return self._tokenize_operator_or_comment(start_line)

        if current_char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[current_char], current_char, None, start_line)

        # NUL and other control characters terminate the stream
        if current_char == "\0" or not current_char.isprintable():
            return Token(TokenType.EOF, "", None, start_line)

        self._advance()
        return self._error_token(
            create_invalid_character_error(current_char, start_line, self.filename),
            current_char,
            start_line
        )

    def _tokenize_number(self, line: int) -> Token:
        """Tokenize a numeric literal: digits with at most one decimal point."""
        start_pos = self.pos
        end_pos = None
        seen_dot = False

        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char in DIGITS:
                self._advance()
            elif char == ".":
                # 144.sqrt: the number ends at the dot, the dot is consumed
                # and the name after it is left for the next token
                if self._peek().isalpha():
                    end_pos = self.pos
                    self._advance()
                    break
                if seen_dot:
                    return self._malformed_number(
                        start_pos, line, "A numeric literal has at most one decimal point."
                    )
                seen_dot = True
                self._advance()
            elif char.isalpha() or char == "_":
                return self._malformed_number(
                    start_pos, line, "Digits cannot be followed directly by a letter."
                )
            else:
                break

        lexeme = self.source[start_pos:self.pos if end_pos is None else end_pos]
        try:
            value = float(lexeme)
        except ValueError as exc:
            # The scan above only accepts digits and one dot
            raise create_malformed_numeric_error(lexeme, line, self.filename) from exc

        return Token(TokenType.NUMERIC, lexeme, value, line)

    def _malformed_number(self, start_pos: int, line: int, reason: str) -> Token:
        # Skip the rest of the offending word so scanning resumes at a boundary
        while self.pos < len(self.source) and (
            self.source[self.pos].isalnum() or self.source[self.pos] in "_."
        ):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return self._error_token(
            create_malformed_numeric_error(lexeme, line, self.filename, reason),
            lexeme,
            line
        )

    def _tokenize_identifier_or_keyword(self, line: int) -> Token:
        """Tokenize an identifier, or the keywords def and extern."""
        start_pos = self.pos
        self._advance()

        while self.pos < len(self.source) and (
            self.source[self.pos].isalnum() or self.source[self.pos] == "_"
        ):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        return Token(token_type, lexeme, value, line)

    def _tokenize_string(self, line: int) -> Token:
        """Tokenize a string literal. Contents are taken verbatim, there are no escapes."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self._advance()

        if self.pos >= len(self.source):
            return self._error_token(
                create_unterminated_string_error(line, self.filename),
                self.source[start_pos:],
                line
            )

        value = self.source[start_pos + 1:self.pos]
        self._advance()  # Skip closing quote

        return Token(TokenType.STRING, self.source[start_pos:self.pos], value, line)

    def _tokenize_operator(self, line: int) -> Token:
        """Tokenize a one or two character operator (==, !=, >=, <=)."""
        lexeme = self.source[self.pos]
        self._advance()

        if self._current() == "=" and lexeme + "=" in COMPOUND_OPERATORS:
            lexeme += "="
            self._advance()

        return Token(TokenType.OPERATOR, lexeme, lexeme, line)

    def _tokenize_operator_or_comment(self, line: int) -> Token:
        """Tokenize '/' or a '//' comment running to the end of the line."""
        start_pos = self.pos
        self._advance()

        if self._current() != "/":
            return Token(TokenType.OPERATOR, "/", "/", line)

        while self.pos < len(self.source) and self.source[self.pos] != "\n":
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.COMMENT, lexeme, lexeme[2:], line)

    def _error_token(self, error: LexerError, lexeme: str, line: int) -> Token:
        logger.debug("lexical error at %s:%d: %s", self.filename, line, error.message)
        self.errors.append(error)
        return Token(TokenType.ERROR, lexeme, error, line)

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

    def _advance(self):
        """Advance position by one character, counting lines."""
        if self.pos < len(self.source):
            if self.source[self.pos] == "\n":
                self.line += 1
            self.pos += 1

    def _current(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return "\0"

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return "\0"

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens ending with EOF

    Raises:
        LexerError: If the source contains a lexical error
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens

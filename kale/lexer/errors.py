"""
Error handling for the Kale lexer.

Lexical errors are not raised while scanning. The lexer wraps them in an
ERROR token so the caller decides whether to abort or report and continue.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for front end diagnostics (errors, warnings)."""
    message: str
    line: Optional[int]
    severity: str  # "error", "warning"
    filename: str = "<unknown>"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}"
        if self.code:
            result = f"{severity_prefix}[{self.code}]: {self.message}"
        if self.line is not None:
            result += f"\n  --> {self.filename}:{self.line}"
        if self.help_text:
            result += f"\n  help: {self.help_text}"
        return result


class LexerError(Exception):
    """
    A lexical error (unterminated string, malformed numeric, bad character).

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        filename: str = "<unknown>",
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="error",
            filename=filename,
            code=code,
            help_text=help_text
        )

    @property
    def line(self) -> Optional[int]:
        return self.diagnostic.line

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __eq__(self, other) -> bool:
        if not isinstance(other, LexerError):
            return NotImplemented
        return self.message == other.message and self.code == other.code

    def __hash__(self) -> int:
        return hash((self.message, self.code))

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognized character",
    "L002": "Unterminated string literal",
    "L003": "Malformed numeric literal",
}


def create_invalid_character_error(char: str, line: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for a printable character no token starts with."""
    return LexerError(
        message=f"unrecognized character {char!r}",
        line=line,
        filename=filename,
        code="L001",
        help_text=f"The character {char!r} is not valid in Kale source code."
    )


def create_unterminated_string_error(line: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    return LexerError(
        message="unterminated string",
        line=line,
        filename=filename,
        code="L002",
        help_text='String literals must be closed with a matching " quote.'
    )


def create_malformed_numeric_error(lexeme: str, line: int, filename: str = "<unknown>",
                                   reason: Optional[str] = None) -> LexerError:
    """Create an error for an invalid numeric literal."""
    return LexerError(
        message=f"malformed numeric {lexeme!r}",
        line=line,
        filename=filename,
        code="L003",
        help_text=reason or "Numbers are digits with at most one decimal point."
    )

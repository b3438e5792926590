"""
Token buffer shared between lexer output and parser input.

An index cursor over an owned list of tokens. Constructs record a mark before
they start; when the input runs out mid-construct the parser rewinds to the
mark, which pushes every consumed token back in its original order.
"""

from typing import Iterable, List, Optional

from ..lexer.tokens import Token
from .errors import IncompleteInput


class TokenBuffer:
    """Already-lexed, not yet consumed tokens. Comments and EOF markers are dropped on load."""

    def __init__(self, tokens: Iterable[Token] = ()):
        self._tokens: List[Token] = []
        self._cursor = 0
        self.extend(tokens)

    def extend(self, tokens: Iterable[Token]):
        """Append newly lexed tokens after the unconsumed remainder."""
        self._tokens.extend(token for token in tokens if not token.is_trivia)

    def peek(self) -> Optional[Token]:
        """Next unconsumed token, or None when the buffer is exhausted."""
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    def advance(self) -> Token:
        """Consume the next token; raise IncompleteInput if there is none."""
        if self._cursor >= len(self._tokens):
            raise IncompleteInput()
        token = self._tokens[self._cursor]
        self._cursor += 1
        return token

    def expect_more(self) -> Token:
        """Peek, raising IncompleteInput instead of returning None."""
        token = self.peek()
        if token is None:
            raise IncompleteInput()
        return token

    def is_exhausted(self) -> bool:
        return self._cursor >= len(self._tokens)

    def mark(self) -> int:
        return self._cursor

    def rewind(self, mark: int):
        """Push back everything consumed since mark."""
        if not 0 <= mark <= self._cursor:
            raise ValueError(f"invalid mark {mark} for cursor {self._cursor}")
        self._cursor = mark

    def consumed_since(self, mark: int) -> List[Token]:
        return self._tokens[mark:self._cursor]

    def remaining(self) -> List[Token]:
        """Unconsumed tokens in original order."""
        return self._tokens[self._cursor:]

    def __len__(self) -> int:
        return len(self._tokens) - self._cursor

    def __bool__(self) -> bool:
        return not self.is_exhausted()

    def __repr__(self) -> str:
        return f"TokenBuffer({self.remaining()!r})"

"""
Parser configuration.

The operator precedence table lives in a ParserSettings value that is passed
to every parse call, so independent sessions never share state.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


# Higher binds tighter
DEFAULT_PRECEDENCE: Dict[str, int] = {
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
}


def _check_precedence(precedence: int):
    # The climbing loop starts at 0, a negative entry would never be folded
    if precedence < 0:
        raise ValueError(f"precedence must be non-negative, got {precedence}")


@dataclass
class ParserSettings:
    """Mutable parser configuration: the binary operator precedence table."""
    precedences: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_PRECEDENCE))

    def __post_init__(self):
        for precedence in self.precedences.values():
            _check_precedence(precedence)

    def precedence_of(self, operator: str) -> Optional[int]:
        """Return the precedence of a binary operator, or None if it is not registered."""
        return self.precedences.get(operator)

    def define_operator(self, operator: str, precedence: int):
        """Register (or re-rank) a binary operator."""
        _check_precedence(precedence)
        self.precedences[operator] = precedence

    def copy(self) -> "ParserSettings":
        return ParserSettings(dict(self.precedences))

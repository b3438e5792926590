"""
Interactive driver for the Kale front end.

Reads source a line at a time and feeds it through the partial-parse
protocol: a line that leaves a construct unfinished gets a continuation
prompt, and the leftover tokens are combined with the next line instead of
being re-tokenized. Nothing is evaluated; completed units are printed as
tokens or as an AST.

Usage:
    kale-repl            # print the AST of each completed unit
    kale-repl -l         # print the tokens of each line only
"""

import argparse
import logging
import sys
from enum import Enum
from typing import List, Optional, TextIO

from .lexer.lexer import Lexer
from .lexer.tokens import Token
from .parser.ast_nodes import (
    ASTVisitor, Item, Literal, Identifier, UnaryOp, BinaryOp, FunctionCall,
    Prototype, Function, ExternNode, FunctionNode
)
from .parser.errors import ParseError
from .parser.parser import parse
from .parser.settings import ParserSettings

logger = logging.getLogger(__name__)

PROMPT = "> "
CONTINUATION_PROMPT = ". "
QUIT_COMMAND = ".quit"


class Stage(Enum):
    """How far each input unit is taken before printing."""
    TOKENS = "tokens"
    AST = "ast"


class FeedStatus(Enum):
    COMPLETE = "complete"       # Every construct finished, nodes holds the unit's AST
    CONTINUE = "continue"       # Input ended mid-construct, feed another line
    ERROR = "error"             # Syntax or lexical error, unit discarded


class ReplSession:
    """
    Caller side of the incremental parser.

    Owns the leftover tokens and the AST of the unit being entered. The
    precedence table is per session.
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings if settings is not None else ParserSettings()
        self.pending: List[Token] = []
        self.nodes: List[Item] = []
        self.last_error: Optional[ParseError] = None

    @property
    def needs_more_input(self) -> bool:
        return bool(self.pending)

    def feed(self, line: str) -> FeedStatus:
        """Tokenize one line, append it to the leftovers and resume parsing."""
        if not self.pending:
            self.nodes = []

        self.pending.extend(Lexer(line, "<stdin>").tokenize())

        try:
            result = parse(self.pending, self.nodes, self.settings, "<stdin>")
        except ParseError as e:
            logger.debug("discarding input unit: %s", e.message)
            self.last_error = e
            self.reset()
            return FeedStatus.ERROR

        self.last_error = None
        self.nodes = result.ast
        self.pending = result.rest
        return FeedStatus.COMPLETE if result.is_complete else FeedStatus.CONTINUE

    def reset(self):
        """Drop the unit being entered."""
        self.pending = []
        self.nodes = []


class ASTPrinter(ASTVisitor):
    """Renders nodes back to a fully parenthesized, source-like form."""

    def visit_Literal(self, node: Literal) -> str:
        if node.literal_type == "string":
            return f'"{node.value}"'
        return repr(node.value)

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_UnaryOp(self, node: UnaryOp) -> str:
        return f"({node.operator}{self.visit(node.operand)})"

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        return f"({self.visit(node.left)} {node.operator} {self.visit(node.right)})"

    def visit_FunctionCall(self, node: FunctionCall) -> str:
        args = ", ".join(self.visit(arg) for arg in node.args)
        return f"{node.callee}({args})"

    def visit_Prototype(self, node: Prototype) -> str:
        return f"{node.name}({', '.join(node.args)})"

    def visit_Function(self, node: Function) -> str:
        if node.prototype.is_anonymous:
            return self.visit(node.body)
        return f"def {self.visit(node.prototype)} {self.visit(node.body)}"

    def visit_ExternNode(self, node: ExternNode) -> str:
        return f"extern {self.visit(node.prototype)}"

    def visit_FunctionNode(self, node: FunctionNode) -> str:
        return self.visit(node.function)


def format_ast(nodes: List[Item]) -> str:
    """One line per top-level node."""
    printer = ASTPrinter()
    return "\n".join(printer.visit(node) for node in nodes)


def format_tokens(tokens: List[Token]) -> str:
    return " ".join(str(token) for token in tokens)


def run(stdin: TextIO, stdout: TextIO, stage: Stage = Stage.AST,
        settings: Optional[ParserSettings] = None):
    """Read lines until end of input or .quit."""
    session = ReplSession(settings)

    while True:
        stdout.write(CONTINUATION_PROMPT if session.needs_more_input else PROMPT)
        stdout.flush()

        line = stdin.readline()
        if not line or line.strip() == QUIT_COMMAND:
            break

        if stage == Stage.TOKENS:
            stdout.write(format_tokens(Lexer(line, "<stdin>").tokenize()) + "\n")
            continue

        status = session.feed(line)
        if status == FeedStatus.ERROR:
            stdout.write(f"Error occurred: {session.last_error.diagnostic.message}\n")
        elif status == FeedStatus.COMPLETE and session.nodes:
            stdout.write(format_ast(session.nodes) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Kale REPL"""

    parser = argparse.ArgumentParser(
        prog="kale-repl",
        description="Interactive Kale tokenizer and parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    kale-repl          # Show the AST of each completed input unit
    kale-repl -l       # Show the tokens of each line
    kale-repl -p -v    # Show the AST with parser debug logging
        """
    )

    stage_group = parser.add_mutually_exclusive_group()
    stage_group.add_argument('-l', '--lexer', action='store_true',
                             help='Run only the lexer and show its output')
    stage_group.add_argument('-p', '--parser', action='store_true',
                             help='Run the lexer and parser and show the AST (default)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    stage = Stage.TOKENS if args.lexer else Stage.AST

    try:
        run(sys.stdin, sys.stdout, stage)
    except KeyboardInterrupt:
        print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())

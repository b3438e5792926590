"""
Test suite for the Kale lexer.

Tests cover:
- Single lexeme recognition for every token class
- Token sequences and whitespace concatenation
- Numeric, string, operator and comment edge cases
- Lexical errors returned as ERROR tokens
- Lazy iteration and end-of-input behaviour

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kale.lexer.lexer import Lexer, tokenize_string
from kale.lexer.tokens import Token, TokenType
from kale.lexer.errors import LexerError


# (lexeme, expected type, expected value)
SINGLE_LEXEMES = [
    ("def", TokenType.DEF, None),
    ("extern", TokenType.EXTERN, None),
    ("foo", TokenType.IDENTIFIER, "foo"),
    ("_bar1", TokenType.IDENTIFIER, "_bar1"),
    ("hello_world", TokenType.IDENTIFIER, "hello_world"),
    ("10", TokenType.NUMERIC, 10.0),
    ("20.", TokenType.NUMERIC, 20.0),
    ("0.20", TokenType.NUMERIC, 0.2),
    ("23.4", TokenType.NUMERIC, 23.4),
    ('"HelloWorld"', TokenType.STRING, "HelloWorld"),
    ('"two words"', TokenType.STRING, "two words"),
    ("+", TokenType.OPERATOR, "+"),
    ("-", TokenType.OPERATOR, "-"),
    ("*", TokenType.OPERATOR, "*"),
    ("/", TokenType.OPERATOR, "/"),
    ("!", TokenType.OPERATOR, "!"),
    ("<", TokenType.OPERATOR, "<"),
    (">", TokenType.OPERATOR, ">"),
    ("=", TokenType.OPERATOR, "="),
    ("==", TokenType.OPERATOR, "=="),
    ("!=", TokenType.OPERATOR, "!="),
    (">=", TokenType.OPERATOR, ">="),
    ("<=", TokenType.OPERATOR, "<="),
    (",", TokenType.COMMA, None),
    ("[", TokenType.LEFT_BRACKET, None),
    ("]", TokenType.RIGHT_BRACKET, None),
    ("(", TokenType.LEFT_PAREN, None),
    (")", TokenType.RIGHT_PAREN, None),
    (";", TokenType.DELIMITER, None),
]


def _kinds(tokens):
    return [(token.type, token.value) for token in tokens]


class TestSingleTokens(unittest.TestCase):
    """Every lexeme class yields one token followed by EOF."""

    def test_single_lexemes(self):
        for lexeme, token_type, value in SINGLE_LEXEMES:
            with self.subTest(lexeme=lexeme):
                tokens = Lexer(lexeme).tokenize()
                self.assertEqual(len(tokens), 2)
                self.assertEqual(tokens[0].type, token_type)
                self.assertEqual(tokens[0].value, value)
                self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_comment(self):
        tokens = Lexer("// a comment").tokenize()
        self.assertEqual(_kinds(tokens), [
            (TokenType.COMMENT, " a comment"),
            (TokenType.EOF, None),
        ])
        self.assertEqual(tokens[0].lexeme, "// a comment")

    def test_empty_source(self):
        self.assertEqual(_kinds(Lexer("").tokenize()), [(TokenType.EOF, None)])
        self.assertEqual(_kinds(Lexer(" \t\n ").tokenize()), [(TokenType.EOF, None)])

    def test_numeric_value_is_float(self):
        token = Lexer("42").next_token()
        self.assertIsInstance(token.value, float)
        self.assertEqual(token.lexeme, "42")


class TestTokenSequences(unittest.TestCase):
    """Multi-token inputs."""

    def test_whitespace_concatenation(self):
        lexemes = [lexeme for lexeme, _, _ in SINGLE_LEXEMES]
        for first in lexemes:
            for second in lexemes:
                with self.subTest(first=first, second=second):
                    combined = Lexer(first + " " + second).tokenize()
                    separate = Lexer(first).tokenize()[:-1] + Lexer(second).tokenize()
                    self.assertEqual(combined, separate)

    def test_consecutive_tokens(self):
        tokens = Lexer("def foo(x, y) extern, ; ()[]").tokenize()
        self.assertEqual([token.type for token in tokens], [
            TokenType.DEF, TokenType.IDENTIFIER, TokenType.LEFT_PAREN,
            TokenType.IDENTIFIER, TokenType.COMMA, TokenType.IDENTIFIER,
            TokenType.RIGHT_PAREN, TokenType.EXTERN, TokenType.COMMA,
            TokenType.DELIMITER, TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET, TokenType.EOF,
        ])

    def test_compound_operator_between_numbers(self):
        self.assertEqual(_kinds(Lexer("1 != 2").tokenize()), [
            (TokenType.NUMERIC, 1.0),
            (TokenType.OPERATOR, "!="),
            (TokenType.NUMERIC, 2.0),
            (TokenType.EOF, None),
        ])

    def test_operators_without_spaces(self):
        self.assertEqual(_kinds(Lexer("1+2*x").tokenize()), [
            (TokenType.NUMERIC, 1.0),
            (TokenType.OPERATOR, "+"),
            (TokenType.NUMERIC, 2.0),
            (TokenType.OPERATOR, "*"),
            (TokenType.IDENTIFIER, "x"),
            (TokenType.EOF, None),
        ])

    def test_only_comparison_operators_pair_with_equals(self):
        self.assertEqual(_kinds(Lexer("+=").tokenize()), [
            (TokenType.OPERATOR, "+"),
            (TokenType.OPERATOR, "="),
            (TokenType.EOF, None),
        ])

    def test_number_followed_by_punctuation(self):
        self.assertEqual([token.type for token in Lexer("f(1)").tokenize()], [
            TokenType.IDENTIFIER, TokenType.LEFT_PAREN, TokenType.NUMERIC,
            TokenType.RIGHT_PAREN, TokenType.EOF,
        ])

    def test_string_in_function(self):
        tokens = Lexer('def hello_world() "HelloWorld"').tokenize()
        self.assertEqual(tokens[-2], Token(TokenType.STRING, '"HelloWorld"', "HelloWorld"))

    def test_string_is_verbatim(self):
        token = Lexer('"a\\nb\nc"').next_token()
        self.assertEqual(token.value, "a\\nb\nc")

    def test_comment_stops_at_end_of_line(self):
        tokens = Lexer("// note\nfoo").tokenize()
        self.assertEqual(_kinds(tokens), [
            (TokenType.COMMENT, " note"),
            (TokenType.IDENTIFIER, "foo"),
            (TokenType.EOF, None),
        ])
        self.assertEqual(tokens[1].line, 2)

    def test_division_is_not_a_comment(self):
        self.assertEqual(_kinds(Lexer("a / b").tokenize())[1], (TokenType.OPERATOR, "/"))


class TestLexicalErrors(unittest.TestCase):
    """Errors come back as ERROR tokens and scanning continues."""

    def test_malformed_numeric(self):
        lexer = Lexer("1k0 foo")
        tokens = lexer.tokenize()
        self.assertEqual(tokens[0].type, TokenType.ERROR)
        self.assertEqual(tokens[0].lexeme, "1k0")
        self.assertEqual(tokens[0].value.code, "L003")
        self.assertEqual(_kinds(tokens[1:]), [(TokenType.IDENTIFIER, "foo"), (TokenType.EOF, None)])
        self.assertTrue(lexer.has_errors())
        self.assertEqual(len(lexer.errors), 1)

    def test_second_decimal_point(self):
        tokens = Lexer("1.2.3").tokenize()
        self.assertEqual(tokens[0].type, TokenType.ERROR)
        self.assertEqual(tokens[0].lexeme, "1.2.3")
        self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_leading_dot(self):
        tokens = Lexer(".10").tokenize()
        self.assertEqual(tokens[0].type, TokenType.ERROR)
        self.assertEqual(tokens[0].value.code, "L001")
        self.assertEqual(_kinds(tokens[1:]), [(TokenType.NUMERIC, 10.0), (TokenType.EOF, None)])

    def test_dot_before_letter_ends_number(self):
        lexer = Lexer("144.sqrt")
        tokens = lexer.tokenize()
        self.assertEqual(_kinds(tokens), [
            (TokenType.NUMERIC, 144.0),
            (TokenType.IDENTIFIER, "sqrt"),
            (TokenType.EOF, None),
        ])
        self.assertEqual(tokens[0].lexeme, "144")
        self.assertFalse(lexer.has_errors())

    def test_dot_before_letter_after_fraction(self):
        self.assertEqual(_kinds(Lexer("1.5.abs").tokenize()), [
            (TokenType.NUMERIC, 1.5),
            (TokenType.IDENTIFIER, "abs"),
            (TokenType.EOF, None),
        ])

    def test_unterminated_string(self):
        tokens = Lexer('"abc').tokenize()
        self.assertEqual(tokens[0].type, TokenType.ERROR)
        self.assertEqual(tokens[0].value.message, "unterminated string")
        self.assertEqual(tokens[0].value.code, "L002")
        self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_unrecognized_character(self):
        tokens = Lexer("a $ b").tokenize()
        self.assertEqual(tokens[1].type, TokenType.ERROR)
        self.assertEqual(tokens[1].value.code, "L001")
        self.assertEqual(tokens[2].value, "b")

    def test_tokenize_string_raises_first_error(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string('x "abc')
        self.assertEqual(ctx.exception.code, "L002")
        self.assertIn("unterminated string", str(ctx.exception))

    def test_tokenize_string_without_errors(self):
        tokens = tokenize_string("extern sin(x)")
        self.assertEqual(tokens[-1].type, TokenType.EOF)
        self.assertEqual(len(tokens), 6)


class TestLexerProtocol(unittest.TestCase):
    """Iteration, end of input and line tracking."""

    def test_lazy_iteration_stops_after_eof(self):
        lexer = Lexer("a b")
        iterator = iter(lexer)
        self.assertEqual(next(iterator).value, "a")
        self.assertEqual(next(iterator).value, "b")
        self.assertEqual(next(iterator).type, TokenType.EOF)
        with self.assertRaises(StopIteration):
            next(iterator)

    def test_iteration_is_not_restartable(self):
        lexer = Lexer("a")
        self.assertEqual(len(list(lexer)), 2)
        self.assertEqual(list(lexer), [])

    def test_next_token_keeps_returning_eof(self):
        lexer = Lexer("x")
        lexer.next_token()
        self.assertEqual(lexer.next_token().type, TokenType.EOF)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_nul_ends_the_stream(self):
        self.assertEqual(_kinds(Lexer("a\0b").tokenize()), [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.EOF, None),
        ])

    def test_line_numbers(self):
        tokens = Lexer('a\n"x\ny"\nb').tokenize()
        self.assertEqual([token.line for token in tokens], [1, 2, 4, 4])

    def test_line_does_not_affect_equality(self):
        token = Lexer("\n\nfoo").next_token()
        self.assertEqual(token.line, 3)
        self.assertEqual(token, Token(TokenType.IDENTIFIER, "foo", "foo"))


if __name__ == '__main__':
    unittest.main()

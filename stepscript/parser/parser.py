"""
Main parser entry point for StepScript.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`stepscript.parser.expressions` and `stepscript.parser.statements`.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from stepscript.exceptions import ParseError
from stepscript.lexer import Token

from . import expressions as _expr
from . import statements as _stmt


class Parser:
    """StepScript parser."""

    def __init__(self, tokens: list[Token], file: str = "<script>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``END``.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file

    def check(self, token_type: str, value=None) -> bool:
        """
        Return True if the current token has the given type (and value).
        """
        if self.curr_token.type != token_type:
            return False
        return value is None or self.curr_token.value == value

    def check_next(self, token_type: str, value=None) -> bool:
        """
        Return True if the token after the current one has the given type (and value).
        """
        if self.position + 1 >= len(self.tokens):
            return False
        tok = self.tokens[self.position + 1]
        if tok.type != token_type:
            return False
        return value is None or tok.value == value

    def advance(self) -> Token:
        """
        Consume the current token and return it. ``END`` is never consumed.
        """
        tok = self.curr_token
        if tok.type != 'END':
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def match(self, token_type: str, value=None) -> bool:
        """
        Consume the current token if it matches, returning whether it did.
        """
        if self.check(token_type, value):
            self.advance()
            return True
        return False

    def eat(self, token_type: str, value=None) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            value: The expected token value, if any.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.check(token_type, value):
            return self.advance()
        expected = token_type if value is None else f"{token_type} '{value}'"
        self.error(expected)

    def error(self, expected: str):
        """
        Raise a ParseError describing the current token.
        """
        raise ParseError(
            expected,
            self.curr_token.describe(),
            self.curr_token.line,
            self.source_file,
        )

    # Expression wrappers
    def primary(self) -> tuple:
        """
        Parse a literal, variable, cast, list display or parenthesized group,
        plus any index suffixes.
        """
        return _expr.parse_primary(self)

    def factor(self) -> tuple:
        """
        Parse a multiplication, division or modulus expression.
        """
        return _expr.parse_factor(self)

    def term(self) -> tuple:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_term(self)

    def comparison(self) -> tuple:
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def equality(self) -> tuple:
        """
        Parse an equality expression.
        """
        return _expr.parse_equality(self)

    def expr(self) -> tuple:
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)

    # Statement wrappers
    def block(self) -> list:
        """
        Parse an indented block of statements.
        """
        return _stmt.parse_block(self)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_print(self) -> tuple:
        """
        Parse a 'print' statement used for output.
        """
        return _stmt.parse_print(self)

    def parse_if(self) -> tuple:
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> tuple:
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_for(self) -> tuple:
        """
        Parse a 'for' loop over a list.
        """
        return _stmt.parse_for(self)

    def parse_assignment(self) -> tuple:
        """
        Parse a variable assignment statement.
        """
        return _stmt.parse_assignment(self)

    def parse(self) -> list:
        """
        Parse the full input into a list of statements.

        Raises:
            ParseError: On unexpected tokens, or when brackets nest deeper
                than the parser can follow.
        """
        statements = []
        while self.curr_token.type != 'END':
            try:
                statements.append(self.statement())
            except RecursionError:
                self.error("less deeply nested brackets")
        return statements

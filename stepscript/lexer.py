"""Lexer for StepScript.

The lexer walks the source with a single cursor, matching a combined regular
expression of named groups at each position. Each match yields a
:class:`Token` containing its type, value and source line number.

Blocks are delimited by indentation rather than braces, so the lexer keeps a
stack of open indentation widths. After every newline the leading whitespace
of the next line is measured: a deeper line pushes a width and emits
``INDENT``, a shallower one pops widths and emits one ``DEDENT`` per pop.
Blank lines and comment-only lines never touch the stack. At end of input the
stack is unwound completely, so ``INDENT`` and ``DEDENT`` always balance, and
a final ``END`` token is appended.

Newlines are otherwise transparent: no ``NEWLINE`` token reaches the parser.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import re

from stepscript.exceptions import LexError
from stepscript.values import make_number

KEYWORDS = frozenset({"print", "if", "while", "for", "in", "int", "float", "str"})


class Token:
    """
    Represents a lexical token with a type and value.
    """
    __slots__ = ("type", "value", "line")

    def __init__(self, type_, value, line):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): The source line the token starts on.
        """
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)

    def __setattr__(self, name, value):
        raise AttributeError("Token is read-only")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value, self.line) == (other.type, other.value, other.line)

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line))

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line})"

    def describe(self) -> str:
        """
        Return a short human readable form used in error messages.
        """
        if self.value is None:
            return self.type
        return f"{self.type} '{self.value}'"


token_specification: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',     r'[0-9]+(?:\.[0-9]+)?'),
    ('STRING',     r'"[^"]*"|\'[^\']*\''),
    ('UNTERMINATED', r'["\']'),

    # Identifiers and keywords
    ('IDENTIFIER', r'[A-Za-z_][A-Za-z0-9_]*'),

    # Two-character operators before their one-character prefixes
    ('OPERATOR',   r'==|!=|<=|>=|[-+*/%=<>()\[\]:,]'),

    # Miscellaneous
    ('COMMENT',    r'\#[^\n]*'),
    ('NEWLINE',    r'\n'),
    ('SKIP',       r'[ \t\r\f\v]+'),
    ('MISMATCH',   r'.'),
]

tok_regex = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)
indent_regex = re.compile(r'[ \t]*')
# Whitespace-only and comment-only lines leave the indentation stack alone.
blank_regex = re.compile(r'[ \t\r\f\v]*(?:#[^\n]*)?(?:\n|$)')


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: A list of Token instances ending with an ``END`` token.

    Raises:
        LexError: If an unexpected character is encountered, a string is never
            closed, or a dedent does not match an enclosing indentation level.
    """
    tokens: list[Token] = []
    indent_stack = [0]
    line_num = 1
    pos = 0

    while pos < len(code):
        match_obj = tok_regex.match(code, pos)
        kind = match_obj.lastgroup
        value = match_obj.group()
        pos = match_obj.end()

        if kind == 'SKIP' or kind == 'COMMENT':
            continue

        if kind == 'NEWLINE':
            line_num += 1
            indent = indent_regex.match(code, pos)
            pos = indent.end()
            if blank_regex.match(code, pos):
                continue
            width = len(indent.group())
            if width > indent_stack[-1]:
                indent_stack.append(width)
                tokens.append(Token('INDENT', None, line_num))
            elif width < indent_stack[-1]:
                while len(indent_stack) > 1 and indent_stack[-1] > width:
                    indent_stack.pop()
                    tokens.append(Token('DEDENT', None, line_num))
                if indent_stack[-1] != width:
                    raise LexError(
                        "Unindent does not match any outer indentation level", line_num
                    )
            continue

        if kind == 'MISMATCH':
            raise LexError(f"Unexpected character {value!r}", line_num)
        if kind == 'UNTERMINATED':
            raise LexError("Unterminated string literal", line_num)

        if kind == 'NUMBER':
            try:
                number = make_number(float(value)) if "." in value else int(value)
            except (ValueError, OverflowError) as e:
                raise LexError(f"Number literal out of range {value[:20]!r}", line_num) from e
            tokens.append(Token('NUMBER', number, line_num))
        elif kind == 'STRING':
            tokens.append(Token('STRING', value[1:-1], line_num))
            line_num += value.count('\n')
        elif kind == 'IDENTIFIER':
            type_ = 'KEYWORD' if value in KEYWORDS else 'IDENTIFIER'
            tokens.append(Token(type_, value, line_num))
        else:
            tokens.append(Token('OPERATOR', value, line_num))

    while len(indent_stack) > 1:
        indent_stack.pop()
        tokens.append(Token('DEDENT', None, line_num))

    tokens.append(Token('END', None, line_num))
    return tokens

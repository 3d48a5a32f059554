"""
Expression parsing utilities for StepScript.

These functions operate on a `stepscript.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity. From loosest to tightest binding:
equality, comparison, additive, multiplicative, primary. Every binary level
is left-associative.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from stepscript.operations import FROM_SYMBOL

if TYPE_CHECKING:
    from stepscript.parser import Parser


CAST_KEYWORDS = ('int', 'float', 'str')


def _binary_level(parser: 'Parser', operand, symbols: tuple) -> tuple:
    result = operand()
    while parser.curr_token.type == 'OPERATOR' and parser.curr_token.value in symbols:
        op_tok = parser.advance()
        result = (FROM_SYMBOL[op_tok.value], result, operand(), op_tok.line)
    return result


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a primary expression followed by zero or more index suffixes."""
    node = _parse_atom(parser)
    while parser.check('OPERATOR', '['):
        tok = parser.advance()
        index_expr = parser.expr()
        parser.eat('OPERATOR', ']')
        node = ('index', node, index_expr, tok.line)
    return node


def _parse_atom(parser: 'Parser') -> tuple:
    tok = parser.curr_token

    if tok.type in ('NUMBER', 'STRING'):
        parser.advance()
        return ('literal', tok.value, tok.line)

    if tok.type == 'IDENTIFIER':
        parser.advance()
        return ('ident', tok.value, tok.line)

    if tok.type == 'KEYWORD' and tok.value in CAST_KEYWORDS:
        parser.advance()
        parser.eat('OPERATOR', '(')
        operand = parser.expr()
        parser.eat('OPERATOR', ')')
        return ('cast', tok.value, operand, tok.line)

    if parser.match('OPERATOR', '('):
        node = parser.expr()
        parser.eat('OPERATOR', ')')
        return node

    if parser.match('OPERATOR', '['):
        elements = []
        if not parser.check('OPERATOR', ']'):
            elements.append(parser.expr())
            while parser.match('OPERATOR', ','):
                elements.append(parser.expr())
        parser.eat('OPERATOR', ']')
        return ('list', elements, tok.line)

    parser.error("an expression")


def parse_factor(parser: 'Parser') -> tuple:
    """Parse multiplication, division, and modulus expressions."""
    return _binary_level(parser, parser.primary, ('*', '/', '%'))


def parse_term(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    return _binary_level(parser, parser.factor, ('+', '-'))


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse comparison expressions (<, >, <=, >=, !=)."""
    return _binary_level(parser, parser.term, ('<', '>', '<=', '>=', '!='))


def parse_equality(parser: 'Parser') -> tuple:
    """Parse equality expressions (==)."""
    return _binary_level(parser, parser.comparison, ('==',))


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.equality()

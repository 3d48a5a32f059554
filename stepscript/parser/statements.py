"""Statement parsing utilities for StepScript.

These functions operate on a `stepscript.parser.parser.Parser` instance and
handle the statement forms of the language: output, assignment, conditionals,
loops and bare expressions. Compound statements own an indented block.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stepscript.parser import Parser


def parse_block(parser: 'Parser') -> list:
    """
    Parse a colon followed by an indented block of statements.

    Syntax:
        : INDENT <statement>* DEDENT

    Args:
        parser: The parser instance.

    Returns:
        list: The statements of the block, in source order.
    """
    parser.eat('OPERATOR', ':')
    parser.eat('INDENT')
    statements = []
    while not parser.check('DEDENT') and not parser.check('END'):
        statements.append(parser.statement())
    parser.eat('DEDENT')
    return statements


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    An identifier directly followed by ``=`` starts an assignment; any other
    line that is not introduced by a statement keyword is an expression.

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    if tok.type == 'KEYWORD':
        if tok.value == 'print':
            return parser.parse_print()
        if tok.value == 'if':
            return parser.parse_if()
        if tok.value == 'while':
            return parser.parse_while()
        if tok.value == 'for':
            return parser.parse_for()
    if tok.type == 'IDENTIFIER' and parser.check_next('OPERATOR', '='):
        return parser.parse_assignment()

    expr_node = parser.expr()
    return ('expr_stmt', expr_node, tok.line)


def parse_print(parser: 'Parser') -> tuple:
    """
    Parse a 'print' statement.

    Syntax:
        print(<expression>)

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('print', expression_node, line_number)
    """
    tok = parser.eat('KEYWORD', 'print')
    parser.eat('OPERATOR', '(')
    expr_node = parser.expr()
    parser.eat('OPERATOR', ')')
    return ('print', expr_node, tok.line)


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse a conditional 'if' statement.

    Syntax:
        if <condition>: <block>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('if', condition, body, line_number)
    """
    tok = parser.eat('KEYWORD', 'if')
    condition = parser.expr()
    body = parser.block()
    return ('if', condition, body, tok.line)


def parse_while(parser: 'Parser') -> tuple:
    """
    Parse a 'while' loop.

    Syntax:
        while <condition>: <block>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('while', condition, body, line_number)
    """
    tok = parser.eat('KEYWORD', 'while')
    condition = parser.expr()
    body = parser.block()
    return ('while', condition, body, tok.line)


def parse_for(parser: 'Parser') -> tuple:
    """
    Parse a 'for' loop.

    Syntax:
        for <identifier> in <expression>: <block>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('for', iterator_name, iterable, body, line_number)
    """
    tok = parser.eat('KEYWORD', 'for')
    name_tok = parser.eat('IDENTIFIER')
    parser.eat('KEYWORD', 'in')
    iterable = parser.expr()
    body = parser.block()
    return ('for', name_tok.value, iterable, body, tok.line)


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse assignment of a variable.

    Syntax:
        <identifier> = <expression>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('assign', name, expression_node, line_number)
    """
    id_tok = parser.eat('IDENTIFIER')
    parser.eat('OPERATOR', '=')
    expr_node = parser.expr()
    return ('assign', id_tok.value, expr_node, id_tok.line)

"""
Tests for the recursive descent parser of StepScript.
"""
import pytest

from stepscript.exceptions import ParseError
from stepscript.lexer import Token
from stepscript.operations import Op
from stepscript.parser import Parser

from stepscript.tests.utils import parse_source


def _expr(source: str):
    """
    Parse a single expression statement and return its expression node.
    """
    ast = parse_source(source)
    assert ast[0][0] == 'expr_stmt'
    return ast[0][1]


def test_multiplication_binds_tighter_than_addition():
    """
    Test that 1 + 2 * 3 groups the multiplication first.
    """
    ast = parse_source("x = 1 + 2 * 3")
    assert ast[0][0] == 'assign'
    assert ast[0][1] == 'x'
    value = ast[0][2]
    assert value[0] == Op.ADD
    assert value[1] == ('literal', 1, 1)
    assert value[2][0] == Op.MUL


def test_binary_operators_are_left_associative():
    """
    Test that 10 - 4 - 3 parses as (10 - 4) - 3.
    """
    node = _expr("10 - 4 - 3")
    assert node[0] == Op.SUB
    assert node[1][0] == Op.SUB
    assert node[2] == ('literal', 3, 1)


def test_parentheses_override_precedence():
    """
    Test that a parenthesized sum is multiplied as a whole.
    """
    node = _expr("(1 + 2) * 3")
    assert node[0] == Op.MUL
    assert node[1][0] == Op.ADD


def test_comparison_binds_tighter_than_equality():
    """
    Test that a < b == c < d compares both sides before testing equality.
    """
    node = _expr("a < b == c < d")
    assert node[0] == Op.EQ
    assert node[1][0] == Op.LT
    assert node[2][0] == Op.LT


def test_not_equal_sits_on_the_comparison_level():
    """
    Test that != groups with the relational operators, below ==.
    """
    node = _expr("a != b == c")
    assert node[0] == Op.EQ
    assert node[1][0] == Op.NE


def test_index_suffixes_chain_left_to_right():
    """
    Test that a[0][1] indexes the result of a[0].
    """
    node = _expr("a[0][1]")
    assert node[0] == 'index'
    assert node[2] == ('literal', 1, 1)
    inner = node[1]
    assert inner == ('index', ('ident', 'a', 1), ('literal', 0, 1), 1)


def test_cast_and_list_display():
    """
    Test cast calls and list displays, including empty and nested lists.
    """
    node = _expr("int(x)")
    assert node == ('cast', 'int', ('ident', 'x', 1), 1)

    node = _expr('[1, "a", [2], []]')
    assert node[0] == 'list'
    elements = node[1]
    assert [e[0] for e in elements] == ['literal', 'literal', 'list', 'list']
    assert elements[3][1] == []


def test_assignment_needs_identifier_followed_by_equals():
    """
    Test that x == 1 is an expression statement, not an assignment.
    """
    ast = parse_source("x == 1\nx = 1")
    assert ast[0][0] == 'expr_stmt'
    assert ast[1][0] == 'assign'


def test_compound_statements_and_lines():
    """
    Test if, while, for and print nodes, their bodies and their lines.
    """
    source = (
        "numbers = [1, 2, 3]\n"
        "for n in numbers:\n"
        "    if n > 1:\n"
        "        print(n)\n"
        "    total = n\n"
        "while total < 10:\n"
        "    total = total + 1\n"
    )
    ast = parse_source(source)
    assert [stmt[0] for stmt in ast] == ['assign', 'for', 'while']

    for_stmt = ast[1]
    assert for_stmt[1] == 'n'
    assert for_stmt[2] == ('ident', 'numbers', 2)
    assert for_stmt[-1] == 2
    body = for_stmt[3]
    assert [stmt[0] for stmt in body] == ['if', 'assign']
    assert body[0][2] == [('print', ('ident', 'n', 4), 4)]
    assert body[1][-1] == 5

    while_stmt = ast[2]
    assert while_stmt[1][0] == Op.LT
    assert while_stmt[-1] == 6
    assert len(while_stmt[2]) == 1


@pytest.mark.parametrize(
    "source, expected, found",
    [
        ("print(1", "OPERATOR ')'", "END"),
        ("print 1", "OPERATOR '('", "NUMBER '1'"),
        ("if x\n    y = 1\n", "OPERATOR ':'", "INDENT"),
        ("if x:\ny = 1\n", "INDENT", "IDENTIFIER 'y'"),
        ("for n of xs:\n    print(n)\n", "KEYWORD 'in'", "IDENTIFIER 'of'"),
        ("for 1 in xs:\n    print(n)\n", "IDENTIFIER", "NUMBER '1'"),
        ("x = [1, 2", "OPERATOR ']'", "END"),
        ("x = )", "an expression", "OPERATOR ')'"),
        ("x = int 3", "OPERATOR '('", "NUMBER '3'"),
    ],
)
def test_parse_errors_name_expected_and_found(source, expected, found):
    """
    Test that every missing token is reported with what was expected and found.
    """
    with pytest.raises(ParseError) as exc:
        parse_source(source)
    assert exc.value.expected == expected
    assert exc.value.found == found
    assert exc.value.label == 'ParseError'
    assert f"Expected {expected} but found {found}" in str(exc.value)


def test_parse_error_reports_line():
    """
    Test that the line of the offending token is reported.
    """
    with pytest.raises(ParseError) as exc:
        parse_source("a = 1\nb = 2\nc = (3 d\n")
    assert exc.value.line == 3
    assert "on line 3 in <test>" in str(exc.value)


def test_missing_dedent():
    """
    Test that a block that is never closed is rejected.
    """
    tokens = [
        Token('KEYWORD', 'if', 1),
        Token('IDENTIFIER', 'x', 1),
        Token('OPERATOR', ':', 1),
        Token('INDENT', None, 2),
        Token('IDENTIFIER', 'y', 2),
        Token('OPERATOR', '=', 2),
        Token('NUMBER', 1, 2),
        Token('END', None, 2),
    ]
    with pytest.raises(ParseError) as exc:
        Parser(tokens, "<test>").parse()
    assert exc.value.expected == 'DEDENT'


def test_nested_parentheses():
    """
    Test that moderately nested brackets parse and deep nesting is a ParseError.
    """
    ast = parse_source("x = " + "(" * 20 + "1" + ")" * 20 + "\n")
    assert ast == [('assign', 'x', ('literal', 1, 1), 1)]

    with pytest.raises(ParseError) as exc:
        parse_source("x = " + "(" * 300 + "1" + ")" * 300 + "\n")
    assert exc.value.expected == "less deeply nested brackets"
    assert exc.value.line == 1

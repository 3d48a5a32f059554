"""
Tests for tokenization and indentation tracking in StepScript.
"""
import pytest

from stepscript.exceptions import LexError
from stepscript.lexer import Token, tokenize


def _pairs(source: str):
    return [(t.type, t.value) for t in tokenize(source)]


def test_assignment_tokens():
    """
    Test that a simple assignment produces identifier, operator and number tokens.
    """
    assert _pairs("a = 10") == [
        ('IDENTIFIER', 'a'),
        ('OPERATOR', '='),
        ('NUMBER', 10),
        ('END', None),
    ]


def test_two_character_operators():
    """
    Test that ==, <=, >= and != are single tokens and their prefixes still work alone.
    """
    tokens = tokenize("a <= b >= c == d != e < f > g = h")
    operators = [t.value for t in tokens if t.type == 'OPERATOR']
    assert operators == ['<=', '>=', '==', '!=', '<', '>', '=']


def test_keywords_and_identifiers():
    """
    Test that reserved words are keywords while longer names are identifiers.
    """
    assert _pairs("print printer in inside int integer float str string")[:-1] == [
        ('KEYWORD', 'print'),
        ('IDENTIFIER', 'printer'),
        ('KEYWORD', 'in'),
        ('IDENTIFIER', 'inside'),
        ('KEYWORD', 'int'),
        ('IDENTIFIER', 'integer'),
        ('KEYWORD', 'float'),
        ('KEYWORD', 'str'),
        ('IDENTIFIER', 'string'),
    ]


def test_numbers():
    """
    Test integer and decimal literals; integral decimals collapse to integers.
    """
    values = [t.value for t in tokenize("7 3.14 2.0") if t.type == 'NUMBER']
    assert values == [7, 3.14, 2]
    assert isinstance(values[2], int)


def test_strings_without_escape_processing():
    """
    Test that both quote styles work and backslashes are kept verbatim.
    """
    tokens = tokenize("a = 'it' + \"x\\ny\"")
    strings = [t.value for t in tokens if t.type == 'STRING']
    assert strings == ['it', 'x\\ny']


def test_indent_and_dedent():
    """
    Test that a block produces one INDENT and one DEDENT on the right lines.
    """
    tokens = tokenize(
        "if x:\n"
        "    y = 1\n"
        "z = 2\n"
    )
    assert [t.type for t in tokens] == [
        'KEYWORD', 'IDENTIFIER', 'OPERATOR',
        'INDENT', 'IDENTIFIER', 'OPERATOR', 'NUMBER',
        'DEDENT', 'IDENTIFIER', 'OPERATOR', 'NUMBER',
        'END',
    ]
    assert tokens[3].line == 2
    assert tokens[7].line == 3


def test_end_of_input_unwinds_every_level():
    """
    Test that nested blocks still open at the end are closed before END.
    """
    tokens = tokenize(
        "while a:\n"
        "  if b:\n"
        "    c = 1\n"
    )
    types = [t.type for t in tokens]
    assert types[-3:] == ['DEDENT', 'DEDENT', 'END']
    assert types.count('INDENT') == 2


def test_blank_and_comment_lines_keep_indentation():
    """
    Test that blank lines and comments inside a block do not close it.
    """
    tokens = tokenize(
        "if x:\n"
        "    a = 1\n"
        "\n"
        "# a comment at column zero\n"
        "    b = 2  # trailing comment\n"
    )
    types = [t.type for t in tokens]
    assert types.count('INDENT') == 1
    assert types.count('DEDENT') == 1
    assert types.index('DEDENT') == len(types) - 2
    b = next(t for t in tokens if t.value == 'b')
    assert b.line == 5


def test_multiline_string_advances_lines_without_indentation():
    """
    Test that newlines inside a string count lines but never open blocks.
    """
    tokens = tokenize(
        'x = "first\n'
        '        second"\n'
        'y = 2\n'
    )
    assert 'INDENT' not in [t.type for t in tokens]
    y = next(t for t in tokens if t.value == 'y')
    assert y.line == 3


def test_tabs_and_custom_width():
    """
    Test that any consistent indentation width is accepted.
    """
    tokens = tokenize(
        "if a:\n"
        "\tb = 1\n"
        "\tif b:\n"
        "\t\tc = 2\n"
    )
    types = [t.type for t in tokens]
    assert types.count('INDENT') == types.count('DEDENT') == 2


@pytest.mark.parametrize(
    "source",
    [
        "",
        "a = 1",
        "if a:\n    b = 1\n",
        "for n in xs:\n  while n:\n      if n:\n          n = 0\n  print(n)\nprint(1)",
        "if a:\n    if b:\n        c = 1\nd = 2\nif e:\n    f = 3",
        "x = [1,\n2]\n   \n\n# done",
    ],
)
def test_indent_dedent_balance(source):
    """
    Test that INDENT and DEDENT counts always match and every line is valid.
    """
    tokens = tokenize(source)
    types = [t.type for t in tokens]
    assert types.count('INDENT') == types.count('DEDENT')
    assert types[-1] == 'END'
    assert all(t.line >= 1 for t in tokens)


def test_unexpected_character():
    """
    Test that an unknown character raises a LexError with its line.
    """
    with pytest.raises(LexError) as exc:
        tokenize("x = 1\ny = 2 $ 3\n")
    assert exc.value.line == 2
    assert exc.value.label == 'LexError'


def test_lone_exclamation_mark_is_rejected():
    """
    Test that '!' is only valid as part of '!='.
    """
    with pytest.raises(LexError):
        tokenize("x = !y")


def test_inconsistent_dedent():
    """
    Test that dedenting to a width that was never opened is an error.
    """
    with pytest.raises(LexError) as exc:
        tokenize(
            "if a:\n"
            "    b = 1\n"
            "  c = 2\n"
        )
    assert exc.value.line == 3


def test_unterminated_string():
    """
    Test that a string without its closing quote is an error.
    """
    with pytest.raises(LexError):
        tokenize('print("oops)')


def test_tokens_are_read_only():
    """
    Test that tokens cannot be modified once produced.
    """
    token = Token('NUMBER', 1, 1)
    with pytest.raises(AttributeError):
        token.value = 2
    assert token == Token('NUMBER', 1, 1)


def test_only_ascii_digits_form_numbers():
    """
    Test that digits from other scripts are not number literals.
    """
    with pytest.raises(LexError) as exc:
        tokenize("x = ٣\n")
    assert "Unexpected character" in str(exc.value)


def test_decimal_literal_out_of_range():
    """
    Test that a decimal literal too large to represent is rejected.
    """
    with pytest.raises(LexError) as exc:
        tokenize("x = " + "9" * 400 + ".5\n")
    assert "Number literal out of range" in str(exc.value)

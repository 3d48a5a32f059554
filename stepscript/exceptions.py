"""Errors.

Every failure the pipeline can produce derives from :class:`StepScriptError`
and carries a taxonomy ``label`` (``LexError``, ``ParseError``, ``NameError``,
``TypeError``, ``IndexError`` or ``ZeroDivisionError``) so drivers can tell
the categories apart without matching on message text.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class StepScriptError(Exception):
    """
    Base error for the lexer, parser and interpreter.
    """
    label = "Error"

    def __init__(self, detail, line=None, file=None):
        self.detail = detail
        self.line = line
        self.file = file
        message = detail
        if line is not None:
            message += f" on line {line}"
        if file is not None:
            message += f" in {file}"
        super().__init__(message)

    def describe(self) -> str:
        """
        Return the message prefixed with its taxonomy label.
        """
        return f"{self.label}: {self}"


class LexError(StepScriptError):
    """
    Error for unrecognized characters and inconsistent indentation.
    """
    label = "LexError"


class ParseError(StepScriptError):
    """
    Error for unexpected or missing tokens.
    """
    label = "ParseError"

    def __init__(self, expected, found, line=None, file=None):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} but found {found}", line, file)


class RuntimeFault(StepScriptError):
    """
    Base for errors raised while a program is running.
    """


class UndefinedVariableException(RuntimeFault):
    """
    Error for reads of variables that were never assigned.
    """
    label = "NameError"

    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"name '{varname}' is not defined", line, file)


class ValueTypeError(RuntimeFault):
    """
    Error for operands of the wrong kind.
    """
    label = "TypeError"


class ListIndexError(RuntimeFault):
    """
    Error for list indexes outside ``[0, length)``.
    """
    label = "IndexError"

    def __init__(self, index, length, line=None, file=None):
        self.index = index
        self.length = length
        super().__init__(
            f"list index {index} out of range for list of length {length}", line, file
        )


class DivisionByZeroError(RuntimeFault):
    """
    Error for division or modulo by zero.
    """
    label = "ZeroDivisionError"

"""Driver helpers.

The interpreter only ever advances one statement per ``step()``. Drivers that
simply want the outcome of a whole program use :func:`run_source`, which
compiles the source and keeps stepping until the program finishes, faults or
exceeds a step limit. The limit is the only protection against programs
that never terminate; the interpreter itself imposes none.

Setting ``STEPSCRIPT_DEBUG`` in the environment prints the token stream and
the AST whenever a program is compiled.


File: runner.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from stepscript.exceptions import StepScriptError
from stepscript.interpreter import Interpreter
from stepscript.lexer import tokenize
from stepscript.parser import Parser

DEFAULT_MAX_STEPS = 1000


@dataclass
class RunResult:
    """Everything observed while driving a program."""

    output: list[str] = field(default_factory=list)
    variables: dict = field(default_factory=dict)
    feedback: list[str] = field(default_factory=list)
    lines: list[int] = field(default_factory=list)
    error: Optional[StepScriptError] = None
    timed_out: bool = False

    @property
    def steps(self) -> int:
        """Number of suspension markers observed."""
        return len(self.lines)


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def compile_source(code: str, file: str = "<script>") -> list:
    """
    Tokenize and parse source code.

    Parameters:
        code (str): The program text.
        file (str): The name of the script, used in error messages.

    Returns:
        list: The program's statements.

    Raises:
        LexError: If the source cannot be tokenized.
        ParseError: If the tokens do not form a valid program.
    """
    tokens = tokenize(code)
    ast = Parser(tokens, file).parse()
    if os.environ.get('STEPSCRIPT_DEBUG'):
        debug_print_tokens_ast(tokens, ast)
    return ast


def run_source(
    code: str, file: str = "<script>", max_steps: int | None = DEFAULT_MAX_STEPS
) -> RunResult:
    """
    Compile a program and step it until it finishes.

    Parameters:
        code (str): The program text.
        file (str): The name of the script, used in error messages.
        max_steps (int | None): Maximum number of ``step()`` calls, or None
            for no limit.

    Returns:
        RunResult: Output, final variables, visited lines and any error.
            Lex and parse errors are reported in ``error`` with no output.
    """
    result = RunResult()
    try:
        ast = compile_source(code, file)
    except StepScriptError as e:
        result.error = e
        return result

    def on_variables(variables: dict) -> None:
        result.variables = variables

    interpreter = Interpreter(
        ast,
        on_output=result.output.append,
        on_variables=on_variables,
        on_feedback=result.feedback.append,
        file=file,
    )

    calls = 0
    while max_steps is None or calls < max_steps:
        step = interpreter.step()
        calls += 1
        if step.completed:
            result.error = step.error
            return result
        result.lines.append(step.line)

    result.timed_out = True
    return result

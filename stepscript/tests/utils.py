"""
Utility functions shared across StepScript tests.
"""
from stepscript.interpreter import Interpreter
from stepscript.lexer import tokenize
from stepscript.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    return Parser(tokenize(source), "<test>").parse()


class Recorder:
    """
    Collects everything an interpreter reports through its callbacks.
    """
    def __init__(self):
        self.output = []
        self.snapshots = []
        self.feedback = []

    def interpreter(self, source: str) -> Interpreter:
        """
        Build an interpreter for the source wired to this recorder.
        """
        return Interpreter(
            parse_source(source),
            self.output.append,
            self.snapshots.append,
            self.feedback.append,
            "<test>",
        )


def run_program(source: str):
    """
    Step a program to completion.

    Returns:
        tuple: (recorder, interpreter, marker lines, final StepResult)
    """
    recorder = Recorder()
    interpreter = recorder.interpreter(source)
    lines = []
    result = interpreter.step()
    while not result.completed:
        lines.append(result.line)
        result = interpreter.step()
    return recorder, interpreter, lines, result

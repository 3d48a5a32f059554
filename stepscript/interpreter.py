"""Interpreter.

This is a tree-walk interpreter for the AST produced by the parser. Unlike a
conventional interpreter it never runs a program to completion on its own:
the caller drives it one statement at a time through :meth:`Interpreter.step`
so that the current line and the live variables can be shown as the program
runs.

1. Execution Model
Every statement is visited in two halves. First ``step()`` returns the line of
the statement that is about to run (the suspension marker) without touching
any state. The next ``step()`` applies that statement's effect and then moves
on to the following statement, returning its line. Output and variable
changes therefore never appear before the caller has seen the line that
causes them.

2. Execution Cursor
Where to resume is kept in an explicit stack of :class:`Frame` objects rather
than in suspended Python call frames. Each frame holds one body (the program
itself, or the body of an ``if``/``while``/``for``) and the index of the next
child to visit. Loop frames also remember the loop statement, so that when the
body is exhausted the ``while`` condition can be re-tested or the next ``for``
element bound before starting the body again.

3. Environment
A single flat ``vars`` dictionary holds every variable. It is written only by
assignments and ``for`` bindings. Callers receive copies through the
variables callback or :attr:`Interpreter.variables`.

4. Error Handling
Runtime faults (undefined variables, operand kind mismatches, bad indexes,
division by zero) are raised as :class:`RuntimeFault` subclasses inside the
interpreter and reported as the ``error`` of a completed :class:`StepResult`.
Nothing raised by the program escapes ``step()``.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from stepscript.exceptions import (
    StepScriptError,
    UndefinedVariableException,
    ValueTypeError,
    ListIndexError,
)
from stepscript.operations import Op, apply_binary
from stepscript.values import Kind, format_value, is_truthy, kind_of, make_number, snapshot

# Text accepted by int() and float(): the number literals of the language,
# optionally signed. ASCII digits only.
int_text_regex = re.compile(r'[+-]?[0-9]+')
float_text_regex = re.compile(r'[+-]?[0-9]+(?:\.[0-9]+)?')


class State(str, Enum):
    """Lifecycle of an interpreter instance."""

    CREATED = "created"
    RUNNING = "running"
    DONE = "done"
    FAULTED = "faulted"


@dataclass
class StepResult:
    """Outcome of a single call to :meth:`Interpreter.step`."""

    completed: bool
    line: Optional[int] = None
    error: Optional[StepScriptError] = None


class Frame:
    """One body being executed, and the position of its next statement."""

    __slots__ = ("body", "index", "loop", "items")

    def __init__(self, body: list, loop: tuple | None = None, items=None):
        self.body = body
        self.index = 0
        # The 'while' or 'for' statement that owns this body, if any.
        self.loop = loop
        # Remaining elements of a 'for' iterable.
        self.items = items

    def __repr__(self) -> str:
        owner = self.loop[0] if self.loop else "block"
        return f"Frame({owner}, {self.index}/{len(self.body)})"


def _ignore(*_args):
    return None


class Interpreter:
    """Stepping tree-walk interpreter for StepScript."""

    def __init__(
        self,
        ast: list,
        on_output: Callable[[str], None],
        on_variables: Callable[[dict], None],
        on_feedback: Callable[[str], None] | None = None,
        file: str = "<script>",
    ):
        """
        Initialize the interpreter.

        Parameters:
            ast (list): The statements returned by ``Parser.parse``.
            on_output: Called with the display text of every printed value.
            on_variables: Called with a snapshot of all variables after every
                assignment and ``for`` binding.
            on_feedback: Optional, called with a short description of each
                statement once it has run.
            file (str): The name of the script, used in error messages.
        """
        self.ast = ast
        self.on_output = on_output
        self.on_variables = on_variables
        self.on_feedback = on_feedback or _ignore
        self.file = file
        self.vars: dict = {}
        self.state = State.CREATED
        self.current_line: int | None = None
        self.error: StepScriptError | None = None
        self.frames: list[Frame] = [Frame(ast)]
        self.pending: tuple | None = None

    @property
    def variables(self) -> dict:
        """A copy of the current environment."""
        return snapshot(self.vars)

    @property
    def finished(self) -> bool:
        """True once the program has completed or faulted."""
        return self.state in (State.DONE, State.FAULTED)

    def _format_expr(self, node) -> str:
        """
        Convert an expression node back to readable source text.

        Args:
            node (tuple): An expression node, structured as a tuple.

        Returns:
            str: A string representation of the expression.
        """
        op = node[0]
        if isinstance(op, Op):
            tail = []
            while isinstance(node[0], Op):
                tail.append(f" {node[0].symbol} {self._format_expr(node[2])}")
                node = node[1]
            return self._format_expr(node) + "".join(reversed(tail))
        match op:
            case 'literal':
                return format_value(node[1], nested=True)
            case 'ident':
                return node[1]
            case 'list':
                return '[' + ', '.join(self._format_expr(e) for e in node[1]) + ']'
            case 'cast':
                return f"{node[1]}({self._format_expr(node[2])})"
            case 'index':
                return f"{self._format_expr(node[1])}[{self._format_expr(node[2])}]"
            case _:
                return f"<expr {op}>"

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> StepResult:
        """
        Advance execution by one suspension marker.

        The statement announced by the previous call (if any) is executed,
        then the cursor moves to the next statement in program order and its
        line is returned.

        Returns:
            StepResult: ``completed=False`` with the line about to run, or
            ``completed=True`` once the program has finished, with ``error``
            set if it faulted.
        """
        if self.finished:
            return StepResult(completed=True, error=self.error)
        self.state = State.RUNNING

        try:
            if self.pending is not None:
                stmt, self.pending = self.pending, None
                self.execute(stmt)
            stmt = self._advance()
        except StepScriptError as e:
            return self._fault(e)
        except RecursionError:
            return self._fault(ValueTypeError(
                "value or expression is nested too deeply", self.current_line, self.file
            ))

        if stmt is None:
            self.state = State.DONE
            self.current_line = None
            return StepResult(completed=True)

        self.pending = stmt
        self.current_line = stmt[-1]
        return StepResult(completed=False, line=self.current_line)

    def _fault(self, error: StepScriptError) -> StepResult:
        self.state = State.FAULTED
        self.error = error
        self.frames.clear()
        return StepResult(completed=True, line=error.line, error=error)

    def _advance(self) -> tuple | None:
        """
        Move the cursor to the next statement to run, or return None at the end.
        """
        while self.frames:
            frame = self.frames[-1]
            if frame.index < len(frame.body):
                stmt = frame.body[frame.index]
                frame.index += 1
                return stmt
            if frame.loop is not None and frame.body and self._repeat(frame):
                frame.index = 0
                continue
            self.frames.pop()
        return None

    def _repeat(self, frame: Frame) -> bool:
        """
        Decide whether a finished loop body runs again, binding the next
        ``for`` element when it does.
        """
        loop = frame.loop
        if loop[0] == 'while':
            return is_truthy(self.eval_expr(loop[1]))
        try:
            item = next(frame.items)
        except StopIteration:
            return False
        self._bind_loop_variable(loop[1], item)
        return True

    def _bind(self, name: str, value) -> None:
        self.vars[name] = value
        self.on_variables(snapshot(self.vars))

    def _bind_loop_variable(self, name: str, value) -> None:
        self._bind(name, value)
        self.on_feedback(f"Set loop variable '{name}' to {format_value(value, nested=True)}")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt: tuple) -> None:
        """
        Apply the effect of a single statement.

        Compound statements do not run their bodies here; they push a frame
        that the cursor then walks one statement per step.

        Parameters:
            stmt (tuple): A ('print' | 'assign' | 'if' | 'while' | 'for' |
                'expr_stmt', ...) tuple.

        Raises:
            RuntimeFault: For any error raised by the program.
        """
        kind = stmt[0]
        line = stmt[-1]

        if kind == 'print':
            _, expr_node, _ = stmt
            text = format_value(self.eval_expr(expr_node))
            self.on_output(text)
            self.on_feedback(f"Printed {text}")

        elif kind == 'assign':
            _, var_name, expr_node, _ = stmt
            value = self.eval_expr(expr_node)
            self._bind(var_name, value)
            self.on_feedback(
                f"Assigned {format_value(value, nested=True)} to variable '{var_name}'"
            )

        elif kind == 'if':
            _, cond_node, body, _ = stmt
            if is_truthy(self.eval_expr(cond_node)):
                self.frames.append(Frame(body))
                self.on_feedback(f"Condition {self._format_expr(cond_node)} is true")
            else:
                self.on_feedback(f"Condition {self._format_expr(cond_node)} is false, skipped")

        elif kind == 'while':
            _, cond_node, body, _ = stmt
            if is_truthy(self.eval_expr(cond_node)):
                self.frames.append(Frame(body, loop=stmt))
            else:
                self.on_feedback(f"Condition {self._format_expr(cond_node)} is false, loop skipped")

        elif kind == 'for':
            _, var_name, iterable_node, body, _ = stmt
            iterable = self.eval_expr(iterable_node)
            if kind_of(iterable) != Kind.LIST:
                raise ValueTypeError(
                    f"'{kind_of(iterable)}' object is not iterable", line, self.file
                )
            if not iterable:
                self.on_feedback(f"Nothing to loop over in {self._format_expr(iterable_node)}")
                return
            items = iter(iterable)
            self._bind_loop_variable(var_name, next(items))
            self.frames.append(Frame(body, loop=stmt, items=items))

        elif kind == 'expr_stmt':
            _, expr_node, _ = stmt
            self.eval_expr(expr_node)

        else:
            raise ValueError(f"Unknown statement type: {kind} on line {line} in {self.file}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node, structured as a tuple.
                        The first element is the node type (e.g. ``Op.ADD``,
                        'ident'), followed by operands and the line number.

        Returns:
            The evaluated value.

        Raises:
            UndefinedVariableException: If a variable is read before assignment.
            ValueTypeError: If an operand has the wrong kind.
            ListIndexError: If an index is outside the list.
            DivisionByZeroError: If a divisor or modulus is zero.
        """
        op = node[0]
        line = node[-1]

        if isinstance(op, Op):
            # Operator chains nest on the left: fold them instead of recursing.
            chain = []
            while isinstance(node[0], Op):
                chain.append(node)
                node = node[1]
            value = self.eval_expr(node)
            for binary in reversed(chain):
                rhs = self.eval_expr(binary[2])
                try:
                    value = apply_binary(binary[0], value, rhs, binary[-1], self.file)
                except OverflowError as e:
                    raise ValueTypeError(
                        f"numeric result out of range: {binary[0].symbol}", binary[-1], self.file
                    ) from e
            return value

        if op == 'literal':
            return node[1]

        if op == 'list':
            return tuple(self.eval_expr(elem) for elem in node[1])

        if op == 'ident':
            varname = node[1]
            if varname not in self.vars:
                raise UndefinedVariableException(varname, line, self.file)
            return self.vars[varname]

        if op == 'cast':
            _, target, operand_node, _ = node
            return self._cast(target, self.eval_expr(operand_node), line)

        if op == 'index':
            _, target_node, index_node, _ = node
            target = self.eval_expr(target_node)
            index = self.eval_expr(index_node)
            if kind_of(target) != Kind.LIST:
                raise ValueTypeError(
                    f"'{kind_of(target)}' object is not subscriptable: "
                    f"{self._format_expr(node)}",
                    line,
                    self.file,
                )
            if kind_of(index) != Kind.NUMBER or not isinstance(index, int):
                raise ValueTypeError(
                    f"list indices must be integers, not {format_value(index, nested=True)}",
                    line,
                    self.file,
                )
            if not 0 <= index < len(target):
                raise ListIndexError(index, len(target), line, self.file)
            return target[index]

        raise ValueError(f"Invalid expression node: {node}")

    def _cast(self, target: str, value, line: int):
        """
        Convert a value for ``int()``, ``float()`` or ``str()``.
        """
        if target == 'str':
            return format_value(value)

        kind = kind_of(value)
        if kind == Kind.LIST:
            raise ValueTypeError(
                f"{target}() argument must be a number or text, not list", line, self.file
            )
        try:
            if kind == Kind.TEXT:
                pattern = int_text_regex if target == 'int' else float_text_regex
                if not pattern.fullmatch(value.strip()):
                    raise ValueError(f"not {target} text: {value!r}")
                number = int(value) if target == 'int' else float(value)
            elif kind == Kind.BOOLEAN:
                number = int(value)
            elif target == 'int':
                number = math.trunc(value)
            else:
                number = float(value)
            return make_number(number)
        except (ValueError, OverflowError) as e:
            raise ValueTypeError(
                f"invalid value for {target}(): {format_value(value, nested=True)}",
                line,
                self.file,
            ) from e

"""Binary operators.

:class:`Op` names every binary operator so the parser and the interpreter
label AST nodes the same way. :func:`apply_binary` holds the semantics for
each operator, dispatching on the kinds of both operands. Any pairing not
listed for an operator is a :class:`ValueTypeError`.

``!=`` is parsed on the comparison level but is exactly ``not ==``: like
``==`` it accepts operands of any kinds, so ``1 != "a"`` is ``True``. Only
the ordering operators ``< > <= >=`` fault on a kind mismatch.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum

from stepscript.exceptions import DivisionByZeroError, ValueTypeError
from stepscript.values import Kind, kind_of, make_number


class Op(str, Enum):
    """
    Enumeration of supported binary operators.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"

    # Equality
    EQ = "eq"

    # Comparison
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"

    @property
    def symbol(self) -> str:
        """
        Return the source spelling of the operator.
        """
        return SYMBOLS[self]

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


SYMBOLS = {
    Op.ADD: "+",
    Op.SUB: "-",
    Op.MUL: "*",
    Op.DIV: "/",
    Op.MOD: "%",
    Op.EQ: "==",
    Op.NE: "!=",
    Op.LT: "<",
    Op.GT: ">",
    Op.LE: "<=",
    Op.GE: ">=",
}

FROM_SYMBOL = {symbol: op for op, symbol in SYMBOLS.items()}


def values_equal(lhs, rhs) -> bool:
    """
    Structural equality: lists compare element-wise, other values must share
    a kind and be equal.
    """
    lhs_kind, rhs_kind = kind_of(lhs), kind_of(rhs)
    if lhs_kind != rhs_kind:
        return False
    if lhs_kind == Kind.LIST:
        return len(lhs) == len(rhs) and all(
            values_equal(a, b) for a, b in zip(lhs, rhs)
        )
    return lhs == rhs


def _mismatch(op: Op, lhs_kind: Kind, rhs_kind: Kind, line, file) -> ValueTypeError:
    return ValueTypeError(
        f"unsupported operand kinds for {op.symbol}: {lhs_kind} and {rhs_kind}",
        line,
        file,
    )


def apply_binary(op: Op, lhs, rhs, line=None, file=None):
    """
    Apply a binary operator to two evaluated operands.

    Parameters:
        op (Op): The operator.
        lhs: The left operand value.
        rhs: The right operand value.
        line (int): Source line used in error messages.
        file (str): Script name used in error messages.

    Returns:
        The resulting value.

    Raises:
        ValueTypeError: If the operand kinds are not valid for the operator.
        DivisionByZeroError: If the divisor or modulus is zero.
    """
    lhs_kind, rhs_kind = kind_of(lhs), kind_of(rhs)

    match op:
        case Op.EQ:
            return values_equal(lhs, rhs)
        case Op.NE:
            return not values_equal(lhs, rhs)

        case Op.ADD:
            if lhs_kind == rhs_kind == Kind.LIST:
                return lhs + rhs
            if lhs_kind == rhs_kind == Kind.TEXT:
                return lhs + rhs
            if lhs_kind == rhs_kind == Kind.NUMBER:
                return make_number(lhs + rhs)
            raise _mismatch(op, lhs_kind, rhs_kind, line, file)

        case Op.SUB | Op.MUL | Op.DIV | Op.MOD:
            if not lhs_kind == rhs_kind == Kind.NUMBER:
                raise _mismatch(op, lhs_kind, rhs_kind, line, file)
            if op == Op.SUB:
                return make_number(lhs - rhs)
            if op == Op.MUL:
                return make_number(lhs * rhs)
            if rhs == 0:
                detail = "division by zero" if op == Op.DIV else "modulo by zero"
                raise DivisionByZeroError(detail, line, file)
            if op == Op.DIV:
                return make_number(lhs / rhs)
            return make_number(lhs % rhs)

        case Op.LT | Op.GT | Op.LE | Op.GE:
            if not (lhs_kind == rhs_kind and lhs_kind in (Kind.NUMBER, Kind.TEXT)):
                raise _mismatch(op, lhs_kind, rhs_kind, line, file)
            match op:
                case Op.LT:
                    return lhs < rhs
                case Op.GT:
                    return lhs > rhs
                case Op.LE:
                    return lhs <= rhs
                case Op.GE:
                    return lhs >= rhs

    raise ValueError(f"Unknown binary operator '{op}'")


__all__ = ["Op", "FROM_SYMBOL", "apply_binary", "values_equal"]

"""Runtime values.

Programs manipulate four kinds of value. Each kind is carried by a plain
Python object and classified with :func:`kind_of`:

- ``Kind.NUMBER``: ``int`` or ``float``. Integral floats are folded back to
  ``int`` by :func:`make_number`, so ``3.0`` and ``3`` are the same number.
- ``Kind.TEXT``: ``str``.
- ``Kind.BOOLEAN``: ``bool``. Checked before numbers since ``bool`` is an
  ``int`` subclass.
- ``Kind.LIST``: ``tuple`` of values, never mutated in place.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from enum import Enum


class Kind(str, Enum):
    """
    Enumeration of value kinds.
    """
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


def kind_of(value) -> Kind:
    """
    Classify a runtime value.

    Raises:
        TypeError: If the object is not a valid runtime value.
    """
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, tuple):
        return Kind.LIST
    raise TypeError(f"Not a runtime value: {value!r}")


def make_number(value):
    """
    Normalize a numeric result so integral floats become ints.

    Raises:
        OverflowError: If the value is infinite or NaN, which no program can
            represent.
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise OverflowError(f"numeric value out of range: {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def is_truthy(value) -> bool:
    """
    Truthiness for conditions: zero, empty text and empty lists are false.
    """
    return bool(value)


def format_value(value, nested: bool = False) -> str:
    """
    Render a value the way ``print`` shows it.

    Parameters:
        value: The value to render.
        nested (bool): True when rendering a list element, which quotes text.

    Returns:
        str: The display form.
    """
    match kind_of(value):
        case Kind.BOOLEAN:
            return "True" if value else "False"
        case Kind.NUMBER:
            return repr(value)
        case Kind.TEXT:
            return repr(value) if nested else value
        case Kind.LIST:
            return "[" + ", ".join(format_value(v, nested=True) for v in value) + "]"


def snapshot(variables: dict) -> dict:
    """
    Return a copy of the environment safe to hand to callers.
    """
    return dict(variables)

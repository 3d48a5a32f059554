"""StepScript.

A small Python-like language whose interpreter runs one statement per
``step()`` call, so a driver can highlight the current line and show the
variables as a program executes.

    from stepscript.runner import compile_source
    from stepscript.interpreter import Interpreter

    interpreter = Interpreter(compile_source(code), print, show_vars)
    while not interpreter.step().completed:
        ...


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

__version__ = "0.1.0"

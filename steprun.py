"""
StepScript Runner

This is the command line entry point for the StepScript interpreter.

Workflow:
1. The source script is read from the file given on the command line (or stdin).
2. The Lexer tokenizes the source code into an indentation-aware token stream.
3. The Parser processes tokens into an AST following the language grammar.
4. The Interpreter is stepped one statement at a time, either straight through
   (bounded by --max-steps) or interactively with --step.
"""
import argparse
import os
import sys

from stepscript.exceptions import StepScriptError
from stepscript.interpreter import Interpreter
from stepscript.lexer import tokenize
from stepscript.parser import Parser
from stepscript.runner import DEFAULT_MAX_STEPS, compile_source, run_source
from stepscript.values import format_value


def step_limit(value: str) -> int:
    """
    Parse a step limit: a whole number, 0 meaning no limit.
    """
    try:
        limit = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid step limit: {value!r}") from None
    if limit < 0:
        raise argparse.ArgumentTypeError(f"step limit must not be negative: {limit}")
    return limit


def _default_max_steps(parser: argparse.ArgumentParser) -> int:
    value = os.environ.get('STEPSCRIPT_MAX_STEPS')
    if value is None:
        return DEFAULT_MAX_STEPS
    try:
        return step_limit(value)
    except argparse.ArgumentTypeError as e:
        parser.error(f"STEPSCRIPT_MAX_STEPS: {e}")


def read_source(script_name: str) -> str:
    """
    Read a script, with '-' meaning standard input.
    """
    if script_name == '-':
        return sys.stdin.read()
    with open(script_name, "r", encoding="utf-8") as f:
        return f.read()


def dump_compiled(code: str, script_name: str, show_tokens: bool, show_ast: bool) -> int:
    """
    Print the token stream and/or the AST of a script.
    """
    try:
        if show_tokens:
            for token in tokenize(code):
                print(token)
        if show_ast:
            for stmt in Parser(tokenize(code), script_name).parse():
                print(stmt)
    except StepScriptError as e:
        print(e.describe())
        return 1
    return 0


def run_script(code: str, script_name: str, max_steps: int) -> int:
    """
    Run a StepScript program straight through.
    """
    result = run_source(code, script_name, max_steps or None)
    for line in result.output:
        print(line)
    if result.error is not None:
        print(result.error.describe())
        return 1
    if result.timed_out:
        print(f"Execution stopped after {max_steps} steps (possible infinite loop)")
        return 2
    return 0


def format_variables(variables: dict) -> str:
    """
    Render a variables snapshot on one line.
    """
    if not variables:
        return "(no variables)"
    return ", ".join(f"{name} = {format_value(value, nested=True)}" for name, value in variables.items())


def run_stepper(code: str, script_name: str) -> int:
    """
    Step through a StepScript program interactively.
    """
    try:
        ast = compile_source(code, script_name)
    except StepScriptError as e:
        print(e.describe())
        return 1

    source_lines = code.splitlines()
    interpreter = Interpreter(
        ast,
        on_output=lambda text: print(f"  output: {text}"),
        on_variables=lambda variables: None,
        on_feedback=lambda message: print(f"  -> {message}"),
        file=script_name,
    )

    print("StepScript stepper")
    print("Press Enter to run the highlighted line, `q` to quit.")
    result = interpreter.step()
    while not result.completed:
        text = source_lines[result.line - 1].strip() if result.line <= len(source_lines) else ""
        try:
            answer = input(f"line {result.line}: {text}  ")
        except (KeyboardInterrupt, EOFError):
            print("\nInterrupted.")
            return 0
        if answer.strip().lower() in {"q", "quit", "exit"}:
            return 0

        result = interpreter.step()
        print(f"  vars:   {format_variables(interpreter.variables)}")

    if result.error is not None:
        print(result.error.describe())
        return 1
    print("Execution finished")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.
    """
    parser = argparse.ArgumentParser(
        prog="steprun",
        description="Run a StepScript program one statement at a time.",
    )
    parser.add_argument(
        "script", nargs="?", default="-",
        help="path to a script, or '-' to read from stdin (default)",
    )
    parser.add_argument(
        "--step", action="store_true",
        help="step through the program interactively",
    )
    parser.add_argument(
        "--max-steps", type=step_limit, default=None,
        help="stop after this many steps, 0 for no limit "
             f"(default: {DEFAULT_MAX_STEPS} or $STEPSCRIPT_MAX_STEPS)",
    )
    parser.add_argument("--tokens", action="store_true", help="print the token stream and exit")
    parser.add_argument("--ast", action="store_true", help="print the parsed AST and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - ``--tokens`` / ``--ast``: dump the compiled program and exit.
    - ``--step``: step through the program, waiting for Enter between lines.
    - Otherwise run the program and print its output; errors are printed as
      ``<label>: <message>``.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.max_steps is None:
        args.max_steps = _default_max_steps(parser)
    try:
        code = read_source(args.script)
    except OSError as e:
        print(f"{type(e).__name__}: {e}")
        return 1

    script_name = "<stdin>" if args.script == '-' else args.script
    if args.tokens or args.ast:
        return dump_compiled(code, script_name, args.tokens, args.ast)
    if args.step:
        return run_stepper(code, script_name)
    return run_script(code, script_name, args.max_steps)


if __name__ == "__main__":
    sys.exit(main())

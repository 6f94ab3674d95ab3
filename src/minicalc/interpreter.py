## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import operator
from typing import Callable

from .types import Expr, Stmt, Number, Variable, Binary, ExprStmt, PrintStmt, AssignStmt
from .errors import CalcNameError
from .environment import Environment
from .formatting import format_number, format_statement


def ieee_divide(left: float, right: float) -> float:
    """Division that follows IEEE-754 for a zero divisor instead of raising."""
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


ARITHMETIC: dict[str, Callable[[float, float], float]] = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': ieee_divide,
}


def evaluate(expr: Expr, env: Environment, verbosity: int = 0, stats: dict | None = None,
             trace: Callable[[str], None] = print) -> float:
    if stats is not None:
        stats['nodes'] = stats.get('nodes', 0) + 1

    match expr:
        case Number(value=value):
            return value
        case Variable(name=name):
            try:
                return env.get(name)
            except CalcNameError as exc:
                exc.position = expr.position
                raise
        case Binary():
            # Walk the left spine iteratively, so long operator chains don't grow the call stack.
            spine = []
            while isinstance(expr, Binary):
                spine.append(expr)
                expr = expr.left
            if stats is not None:
                stats['nodes'] += len(spine) - 1
            value = evaluate(expr, env, verbosity, stats, trace)
            for node in reversed(spine):
                right = evaluate(node.right, env, verbosity, stats, trace)
                result = ARITHMETIC[node.op](value, right)
                if verbosity >= 2:
                    trace(f"\033[90m    :\033[0m  {format_number(value)} {node.op} {format_number(right)} \033[36m=>\033[0m {format_number(result)}")
                value = result
            return value
    raise TypeError(f"Cannot evaluate {type(expr).__name__} node.")


def execute(stmt: Stmt, env: Environment, write: Callable[[str], None] = print,
            verbosity: int = 0, stats: dict | None = None, trace: Callable[[str], None] = print) -> float | None:
    """Run a single statement, returning the printed value if it was a print statement."""
    match stmt:
        case PrintStmt(expr=expr):
            value = evaluate(expr, env, verbosity, stats, trace)
            write(format_number(value))
            return value
        case AssignStmt(name=name, expr=expr):
            env.set(name, evaluate(expr, env, verbosity, stats, trace))
            return None
        case ExprStmt(expr=expr):
            evaluate(expr, env, verbosity, stats, trace)
            return None
    raise TypeError(f"Cannot execute {type(stmt).__name__} node.")


def interpret(program: list[Stmt], env: Environment, write: Callable[[str], None] = print,
              verbosity: int = 0, stats: dict | None = None, trace: Callable[[str], None] = print) -> list[float]:
    printed = []
    for step, stmt in enumerate(program):
        if stats is not None:
            stats['statements'] = stats.get('statements', 0) + 1
        if verbosity > 0:
            trace(f"\033[90m{step:>3} :\033[0m  {format_statement(stmt)}")
        if (value := execute(stmt, env, write, verbosity, stats, trace)) is not None:
            printed.append(value)
    return printed

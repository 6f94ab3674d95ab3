## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Token, Expr, Stmt, Number, Variable, Binary, ExprStmt, PrintStmt, AssignStmt
from .environment import Environment


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_number(value: float) -> str:
    """Shortest text that reads back to the same double, without a trailing `.0`."""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text


def format_token(token: Token) -> str:
    return f"{token.kind.value}: '{token.text}'"


def format_expr(expr: Expr) -> str:
    match expr:
        case Number(value=value):
            return format_number(value)
        case Variable(name=name):
            return name
        case Binary():
            spine = []
            while isinstance(expr, Binary):
                spine.append(expr)
                expr = expr.left
            text = format_expr(expr)
            for node in reversed(spine):
                text = f"({text} {node.op} {format_expr(node.right)})"
            return text
    raise TypeError(f"Not an expression node: {expr!r}")


def format_statement(stmt: Stmt) -> str:
    match stmt:
        case PrintStmt(expr=expr):
            return f"print {format_expr(expr)};"
        case AssignStmt(name=name, expr=expr):
            return f"{name} = {format_expr(expr)};"
        case ExprStmt(expr=expr):
            return f"{format_expr(expr)};"
    raise TypeError(f"Not a statement node: {stmt!r}")


def format_environment(env: Environment) -> str:
    if len(env) == 0:
        return '∅'
    width = max(len(name) for name in env)
    return '\n'.join(f"{name:<{width}} = \033[97m{format_number(value)}\033[0m" for name, value in sorted(env.items()))


def format_error_context(source: str, position: int | None, token_value: str | None, filename: str = '<INPUT>') -> str:
    lines = source.splitlines() or ['']
    if position is None:
        result = [f"\033[97m  File \"{filename}\"\033[0m"]
        result += [f"\033[97m{i+1:>5} |\033[0m {text}" for i, text in enumerate(lines)]
        return '\n' + '\n'.join(result) + '\n'

    line = source.count('\n', 0, position)
    if line >= len(lines):
        # End-of-input errors point just past the last character.
        line = len(lines) - 1
        column = len(lines[line])
    else:
        column = min(position - (source.rfind('\n', 0, position) + 1), len(lines[line]))
    line_content = lines[line]
    span = len(token_value or '')

    result = [f"\033[97m  File \"{filename}\", line {line+1}, column {column+1}\033[0m"]
    for i in range(max(0, line - 2), line):
        result.append(f"\033[90m{i+1:>5} |\033[0m {lines[i]}")
    line_content = (
        line_content[:column] +
        f"\033[48;5;30m\033[1;97m{line_content[column:column+span]}\033[0m" +
        line_content[column+span:]
    )
    result.append(f"\033[97m{line+1:>5} |\033[0m {line_content}")
    result.append(f"      | {' ' * column}\033[1;33m^{'~' * max(span - 1, 0)}\033[0m")
    return '\n' + '\n'.join(result) + '\n'

## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .types import Token, TokenKind, Expr, Stmt
from .errors import *
from .environment import Environment
from .runtime import Runtime
from .runner import execute, Outcome
from .lexer import tokenize
from .parser import parse


def run(source: str, env: Environment | None = None, write: Callable[[str], None] = print,
        bare_identifiers: bool = False) -> Environment:
    """Run one line; without an explicit `env` every call starts from an empty namespace."""
    env = Environment() if env is None else env
    Runtime(env, bare_identifiers=bare_identifiers, write=write).run(source)
    return env


def evaluate(source: str, env: Environment | None = None) -> float:
    return Runtime(env).evaluate(source)


def capture(source: str, env: Environment | None = None, bare_identifiers: bool = False) -> list[str]:
    """Run one line and return the printed lines instead of writing them out."""
    lines = []
    run(source, env=env, write=lines.append, bare_identifiers=bare_identifiers)
    return lines

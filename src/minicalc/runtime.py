## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable, Mapping

from .types import Token, Expr, Stmt
from .errors import CalcError
from .lexer import tokenize
from .parser import parse, parse_expression
from .environment import Environment
from .interpreter import interpret, evaluate, execute


class Runtime:
    """Minimal runtime facade for embedding; each instance owns exactly one Environment."""

    def __init__(self, env: Environment | Mapping[str, float] | None = None, *,
                 bare_identifiers: bool = False, write: Callable[[str], None] = print,
                 trace: Callable[[str], None] = print):
        self.env = env if isinstance(env, Environment) else Environment.from_mapping(env)
        self.bare_identifiers = bare_identifiers
        self.write = write
        self.trace = trace

    # Front-end ───────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str) -> list[Token]:
        return tokenize(source)

    def parse(self, source: str) -> list[Stmt]:
        return parse(source, bare_identifiers=self.bare_identifiers)

    def parse_expression(self, source: str) -> Expr:
        return parse_expression(source)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, verbosity: int = 0, stats: dict | None = None) -> list[float]:
        """Parse the whole line first, so nothing executes when any of it is malformed."""
        try:
            program = self.parse(source)
            return interpret(program, self.env, write=self.write, verbosity=verbosity, stats=stats, trace=self.trace)
        except CalcError as exc:
            if exc.source is None: exc.source = source
            raise

    def evaluate(self, source: str) -> float:
        try:
            return evaluate(self.parse_expression(source), self.env)
        except CalcError as exc:
            if exc.source is None: exc.source = source
            raise

    def execute(self, stmt: Stmt) -> float | None:
        return execute(stmt, self.env, write=self.write)

    # Environment ─────────────────────────────────────────────────────────────────────────────
    def get(self, name: str) -> float:
        return self.env.get(name)

    def set(self, name: str, value: float) -> None:
        self.env.set(name, float(value))

    @property
    def variables(self) -> dict[str, float]:
        return self.env.as_dict()

    def reset(self) -> None:
        self.env.clear()

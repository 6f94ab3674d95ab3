## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# minicalc — A minimal arithmetic and variable language, run one line at a time.
#

from typing import Callable
from dataclasses import dataclass, field

from .errors import CalcError, ErrorKind
from .environment import Environment
from .runtime import Runtime


@dataclass
class Outcome:
    output: list[str] = field(default_factory=list)   # printed lines, including those before a failure
    env: Environment = field(default_factory=Environment)
    error: CalcError | None = None

    @property
    def kind(self) -> ErrorKind | None:
        return None if self.error is None else self.error.kind

    @property
    def ok(self) -> bool:
        return self.error is None


def execute(source: str, env: Environment | None = None, write: Callable[[str], None] | None = None,
            bare_identifiers: bool = False, verbosity: int = 0, stats: dict | None = None,
            trace: Callable[[str], None] = print) -> Outcome:
    """Run one line and report language errors as a value instead of raising them.

    Printed values go to `write` and into `Outcome.output`; `-v` style traces go to `trace`.
    """
    outcome = Outcome(env=Environment() if env is None else env)

    def _write(text):
        outcome.output.append(text)
        if write is not None: write(text)

    runtime = Runtime(outcome.env, bare_identifiers=bare_identifiers, write=_write, trace=trace)
    try:
        runtime.run(source, verbosity=verbosity, stats=stats)
    except CalcError as exc:
        outcome.error = exc
    return outcome

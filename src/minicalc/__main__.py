## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# minicalc — A minimal arithmetic and variable language, run one line at a time.
#

import sys
import time
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import CalcError, CalcLexError, CalcParseError, CalcIncompleteParse, CalcRuntimeError
from .lexer import Lexer
from .runtime import Runtime
from .formatting import write_without_ansi, format_token, format_statement, format_environment, format_error_context


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool
    plain: bool
    bare_identifiers: bool


class CalcRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime(bare_identifiers=config.bare_identifiers, write=print)
        self.total_stats = {'statements': 0, 'nodes': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        if is_repl: return
        self.failure = True
        sys.exit(1)

    def _handle_exception(self, exc: CalcError, filename: str, source: str, is_repl: bool = False) -> bool:
        """Report the error; returns True when the REPL should keep reading the same statement."""
        if isinstance(exc, (CalcLexError, CalcParseError)):
            if is_repl and isinstance(exc, CalcIncompleteParse): return True
            context = format_error_context(source, exc.position, exc.token, filename=filename)
            context += f"\n\033[90m{exc.message}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        elif isinstance(exc, CalcRuntimeError):
            context = format_error_context(source, exc.position, exc.token, filename=filename)
            context += f"\n\033[90m{exc.message}\033[0m\n"
            self._maybe_fatal_error("RUNTIME ERROR.", f"Evaluating `\033[97m{filename}\033[0m` failed!", type(exc).__name__, context, is_repl)
        return False

    def read_line(self, stream) -> str:
        line = stream.readline()
        if line == '':
            self._maybe_fatal_error("INPUT ERROR.", "Error reading input.")
        return line

    def execute_line(self, source: str, filename: str, is_repl: bool = False) -> bool:
        try:
            self.runtime.run(source, verbosity=self.verbose, stats=self.total_stats)
        except CalcError as exc:
            return self._handle_exception(exc, filename, source, is_repl=is_repl)
        self.executed_items += 1
        return False

    def show_tokens(self, source: str, filename: str) -> None:
        try:
            for token in Lexer(source):
                print(format_token(token))
        except CalcError as exc:
            self._handle_exception(exc, filename, source)

    def show_ast(self, source: str, filename: str) -> None:
        try:
            program = self.runtime.parse(source)
        except CalcError as exc:
            self._handle_exception(exc, filename, source)
            return
        for stmt in program:
            print(format_statement(stmt))

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('minicalc - Arithmetic and variables REPL; type Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0: continue
                if not source and line.strip() in ('quit', 'exit'): break
                if not source and line.strip() == 'vars':
                    print(format_environment(self.runtime.env)); continue
                if not source and line.strip() == 'reset':
                    self.runtime.reset(); continue
                source += line + "\n"

                if not self.execute_line(source, '<REPL>', is_repl=True):
                    source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"stmt\t\033[97m{self.total_stats['statements']:,}\033[0m")
            print(f"node\t\033[97m{self.total_stats['nodes']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


def _source_name(stream) -> str:
    name = getattr(stream, 'name', None)
    return '<STDIN>' if name in (None, '-', '<stdin>') else str(name)


@click.group(invoke_without_command=True, context_settings={'auto_envvar_prefix': 'MINICALC'})
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements (-v) and every operation (-vv).')
@click.option('--stats', is_flag=True, help='Display execution statistics (statements, nodes, time).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--bare-identifiers', is_flag=True, help='Accept statements that start with a variable but are not assignments.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, stats: bool, plain: bool, bare_identifiers: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, stats=stats, plain=plain, bare_identifiers=bare_identifiers)

    if ctx.invoked_subcommand is not None:
        return

    # When invoked via module entry (python -m minicalc), we route in `main()`.
    return


@cli.command('run-line')
@click.argument('script', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_context
def run_line(ctx: click.Context, script) -> None:
    runner = CalcRunner(ctx.obj['config'])
    source = runner.read_line(script)
    runner.execute_line(source, _source_name(script))
    ctx.exit(runner.finalize())


@cli.command('run-code')
@click.argument('code')
@click.pass_context
def run_code(ctx: click.Context, code: str) -> None:
    runner = CalcRunner(ctx.obj['config'])
    runner.execute_line(code, '<INPUT>')
    ctx.exit(runner.finalize())


@cli.command('tokens')
@click.argument('script', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_context
def tokens(ctx: click.Context, script) -> None:
    runner = CalcRunner(ctx.obj['config'])
    runner.show_tokens(runner.read_line(script), _source_name(script))
    ctx.exit(runner.finalize())


@cli.command('ast')
@click.argument('script', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_context
def ast(ctx: click.Context, script) -> None:
    runner = CalcRunner(ctx.obj['config'])
    runner.show_ast(runner.read_line(script), _source_name(script))
    ctx.exit(runner.finalize())


@cli.command('repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = CalcRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


GLOBAL_FLAGS = ('--stats', '--plain', '-p', '--bare-identifiers', '--verbose')


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in GLOBAL_FLAGS or (t.startswith('-v') and set(t[1:]) == {'v'})]
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, run its first line, else REPL.
        cmd, tail = ('run-line', ['-']) if not sys.stdin.isatty() else ('repl', [])
    elif r[0] in cli.commands or r[0] == '--help':
        cmd, tail = None, r
    elif r[0] in ('-c', '--command'):
        if len(r) < 2: raise SystemExit("Expected code after -c/--command.")
        cmd, tail = 'run-code', ['--', r[1]]
    elif r == ['-']:
        cmd, tail = 'run-line', ['-']
    elif len(r) == 1 and Path(r[0]).is_file():
        cmd, tail = 'run-line', [r[0]]
    else:
        cmd, tail = None, r

    cli.main(args=[*g, *([cmd] if cmd else []), *tail], prog_name='minicalc')


if __name__ == "__main__":
    main()

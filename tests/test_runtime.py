## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from minicalc.runtime import Runtime
from minicalc.environment import Environment
from minicalc.types import PrintStmt, Number, TokenKind
from minicalc.errors import CalcNameError, CalcParseError, CalcIncompleteParse, CalcLexError


def make_runtime(**kwargs) -> tuple[Runtime, list[str]]:
    out = []
    return Runtime(write=out.append, **kwargs), out


def test_run_prints_and_binds():
    rt, out = make_runtime()
    assert rt.run("x = 5; print x + 1;") == [6.0]
    assert out == ["6"]
    assert rt.variables == {"x": 5.0}


def test_instance_keeps_its_environment_between_runs():
    rt, out = make_runtime()
    rt.run("x = 2;")
    rt.run("print x * 3;")
    assert out == ["6"]


def test_instances_do_not_share_environments():
    Runtime(write=lambda _: None).run("x = 1;")
    with pytest.raises(CalcNameError):
        Runtime(write=lambda _: None).run("print x;")


def test_parse_error_prevents_any_execution():
    rt, out = make_runtime()
    with pytest.raises(CalcParseError):
        rt.run("print 1; x = 2; y = ;")
    assert out == []
    assert rt.variables == {}


def test_lex_error_prevents_any_execution():
    rt, out = make_runtime()
    with pytest.raises(CalcLexError):
        rt.run("print 1; 1 @ 2;")
    assert out == []


def test_errors_carry_the_source_line():
    rt, _ = make_runtime()
    with pytest.raises(CalcNameError) as exc:
        rt.run("print y;")
    assert exc.value.source == "print y;"
    assert exc.value.position == 6


def test_evaluate_expression():
    rt, _ = make_runtime()
    rt.set("a", 4)
    assert rt.get("a") == 4.0
    assert rt.evaluate("a * a + 1") == 17.0
    with pytest.raises(CalcIncompleteParse):
        rt.evaluate("1 +")
    with pytest.raises(CalcParseError):
        rt.evaluate("1 2")


def test_bare_identifiers_option():
    rt, _ = make_runtime(bare_identifiers=True)
    rt.run("x = 1; x; x + 1;")
    strict, _ = make_runtime()
    with pytest.raises(CalcParseError) as exc:
        strict.run("x = 1; x;")
    assert exc.value.expected == [TokenKind.EQUAL]


def test_seeded_environment():
    rt, _ = make_runtime(env={"pi": 3})
    assert rt.evaluate("pi * 2") == 6.0
    env = Environment()
    rt, _ = make_runtime(env=env)
    rt.run("z = 9;")
    assert env.get("z") == 9.0


def test_reset_clears_bindings():
    rt, _ = make_runtime()
    rt.run("x = 1;")
    rt.reset()
    assert rt.variables == {}


def test_execute_single_statement():
    rt, out = make_runtime()
    assert rt.execute(PrintStmt(Number(2.0))) == 2.0
    assert out == ["2"]


def test_front_end_helpers():
    rt, _ = make_runtime()
    assert [t.kind for t in rt.tokenize("x=1;")] == [TokenKind.IDENTIFIER, TokenKind.EQUAL, TokenKind.NUMBER, TokenKind.SEMICOLON, TokenKind.EOF]
    assert len(rt.parse("x = 1; print x;")) == 2


def test_trace_writer_receives_verbose_lines(capsys):
    traced = []
    rt, out = make_runtime(trace=traced.append)
    rt.run("x = 2 * 3; print x;", verbosity=1)
    assert out == ["6"]
    assert len(traced) == 2
    assert "x = (2 * 3);" in traced[0] and "print x;" in traced[1]
    assert capsys.readouterr().out == ""

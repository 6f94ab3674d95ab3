## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math

import pytest

from minicalc.lexer import tokenize
from minicalc.parser import parse
from minicalc.environment import Environment
from minicalc.formatting import (format_number, format_token, format_statement, format_environment,
                                 format_error_context, write_without_ansi)


def strip(text: str) -> str:
    return re.sub(r'\033\[[0-9;]*m', '', text)


@pytest.mark.parametrize("value, text", [
    (6.0, "6"),
    (3.5, "3.5"),
    (0.1 + 0.2, "0.30000000000000004"),
    (1e16, "1e+16"),
    (1e-07, "1e-07"),
    (math.inf, "inf"),
    (-math.inf, "-inf"),
    (math.nan, "nan"),
    (-0.0, "-0"),
    (-12.0, "-12"),
])
def test_format_number(value, text):
    assert format_number(value) == text


def test_format_number_round_trips():
    for value in (1 / 3, 2 / 7, 1e300 * 7, 123456789.125):
        assert float(format_number(value)) == value


def test_format_token_matches_dump_rows():
    toks = tokenize("print x;")
    assert [format_token(t) for t in toks] == ["PRINT: 'print'", "IDENTIFIER: 'x'", "SEMICOLON: ';'", "EOF: ''"]


def test_format_statement_makes_grouping_explicit():
    program = parse("y = 1 + 2 * x; print (y - 1) - 2; 3;", bare_identifiers=True)
    assert [format_statement(s) for s in program] == ["y = (1 + (2 * x));", "print ((y - 1) - 2);", "3;"]


def test_format_environment():
    env = Environment.from_mapping({"bb": 2.0, "a": 1.5})
    assert strip(format_environment(env)) == "a  = 1.5\nbb = 2"
    assert format_environment(Environment()) == "∅"


def test_error_context_highlights_offending_character():
    lines = strip(format_error_context("x = 1 @ 2;", 6, "@")).splitlines()
    assert 'column 7' in lines[1]
    assert lines[2].endswith("x = 1 @ 2;")
    assert lines[3] == "      | " + " " * 6 + "^"


def test_error_context_at_end_of_input():
    lines = strip(format_error_context("print 1\n", 8, "")).splitlines()
    assert "line 1, column 8" in lines[1]
    assert lines[3] == "      | " + " " * 7 + "^"


def test_error_context_without_position():
    text = strip(format_error_context("print y;", None, "y"))
    assert "print y;" in text
    assert "^" not in text


def test_write_without_ansi():
    out = []
    write = write_without_ansi(out.append)
    write("\033[30;43m ERROR. \033[0m done")
    assert out == [" ERROR.  done"]


def test_format_statement_long_chain():
    [stmt] = parse("print " + " - ".join(["1"] * 3000) + ";")
    text = format_statement(stmt)
    assert text.startswith("print " + "(" * 2999 + "1 - 1)")
    assert text.endswith(" - 1);")
    assert text.count("-") == 2999

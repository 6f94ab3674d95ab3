## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum

import lark


class ErrorKind(Enum):
    LEX = 'lex'
    PARSE = 'parse'
    RUNTIME = 'runtime'


class CalcError(Exception):
    kind: ErrorKind

    def __init__(self, message: str = "", *, position=None, token=None, source=None):
        """Base class for all errors raised by a run of the language."""
        super().__init__(message)
        self.message: str = message
        self.position: int | None = position
        self.token: str | None = token
        self.source: str | None = source

    @property
    def column(self) -> int | None:
        return None if self.position is None else self.position + 1


class CalcLexError(CalcError, lark.exceptions.LexError):
    kind = ErrorKind.LEX

class CalcParseError(CalcError, lark.exceptions.ParseError):
    kind = ErrorKind.PARSE

    def __init__(self, message, *, position=None, token=None, source=None, expected=None):
        super().__init__(message, position=position, token=token, source=source)
        self.expected = expected

class CalcIncompleteParse(CalcParseError):
    """The input ended before the statement did."""
    pass

class CalcRuntimeError(CalcError, RuntimeError):
    kind = ErrorKind.RUNTIME

class CalcNameError(CalcRuntimeError):
    def __init__(self, message, *, name=None, position=None, source=None):
        super().__init__(message, position=position, token=name, source=source)
        self.name = name

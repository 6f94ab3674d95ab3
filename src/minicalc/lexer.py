## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import string

from .types import Token, TokenKind, PUNCTUATION, KEYWORDS
from .errors import CalcLexError


WHITESPACE = frozenset(' \t\r\n')
DIGITS = frozenset(string.digits)
IDENT_START = frozenset(string.ascii_letters + '_')
IDENT_CHARS = IDENT_START | DIGITS


class Lexer:
    """Pull-based scanner; the only state kept between calls is the cursor."""

    def __init__(self, source: str):
        self.source = source
        self.current = 0

    def _consume(self, chars: frozenset) -> None:
        while self.current < len(self.source) and self.source[self.current] in chars:
            self.current += 1

    def _make(self, kind: TokenKind, start: int) -> Token:
        return Token(kind, self.source, start, self.current - start)

    def next_token(self) -> Token:
        self._consume(WHITESPACE)
        start = self.current
        if start >= len(self.source):
            return self._make(TokenKind.EOF, start)

        c = self.source[start]
        self.current += 1

        if c in DIGITS:
            self._consume(DIGITS)
            return self._make(TokenKind.NUMBER, start)

        if c in IDENT_START:
            self._consume(IDENT_CHARS)
            token = self._make(TokenKind.IDENTIFIER, start)
            if (keyword := KEYWORDS.get(token.text)) is not None:
                return self._make(keyword, start)
            return token

        if (kind := PUNCTUATION.get(c)) is not None:
            return self._make(kind, start)

        raise CalcLexError(f"Unexpected character `{c}`.", position=start, token=c, source=self.source)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF: return


def tokenize(source: str) -> list[Token]:
    return list(Lexer(source))

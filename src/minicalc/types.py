## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from typing import Literal
from dataclasses import dataclass, field


class TokenKind(Enum):
    EOF = 'EOF'
    NUMBER = 'NUMBER'
    IDENTIFIER = 'IDENTIFIER'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    STAR = 'STAR'
    SLASH = 'SLASH'
    EQUAL = 'EQUAL'
    SEMICOLON = 'SEMICOLON'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    PRINT = 'PRINT'

    def __repr__(self):
        return f"{self.name}"


PUNCTUATION: dict[str, TokenKind] = {
    '+': TokenKind.PLUS, '-': TokenKind.MINUS,
    '*': TokenKind.STAR, '/': TokenKind.SLASH,
    '=': TokenKind.EQUAL, ';': TokenKind.SEMICOLON,
    '(': TokenKind.LPAREN, ')': TokenKind.RPAREN,
}

KEYWORDS: dict[str, TokenKind] = {'print': TokenKind.PRINT}


@dataclass(frozen=True)
class Token:
    """Classified lexeme; a view over the source buffer, the text is sliced on demand."""
    kind: TokenKind
    source: str = field(repr=False, compare=False)
    start: int
    length: int

    @property
    def text(self) -> str:
        return self.source[self.start:self.start + self.length]

    @property
    def end(self) -> int:
        return self.start + self.length

    def __str__(self) -> str:
        return f"{self.kind.value}({self.text})"


BinaryOp = Literal['+', '-', '*', '/']

OPERATOR_OF: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: '+', TokenKind.MINUS: '-',
    TokenKind.STAR: '*', TokenKind.SLASH: '/',
}


# Expression nodes ────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Number:
    value: float
    position: int | None = field(default=None, compare=False)

@dataclass(frozen=True)
class Variable:
    name: str
    position: int | None = field(default=None, compare=False)

@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    op: BinaryOp
    right: 'Expr'
    position: int | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.left is None or self.right is None:
            raise ValueError("Binary nodes need both operands.")


Expr = Number | Variable | Binary


# Statement nodes ─────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ExprStmt:
    expr: Expr

@dataclass(frozen=True)
class PrintStmt:
    expr: Expr

@dataclass(frozen=True)
class AssignStmt:
    name: str
    expr: Expr
    position: int | None = field(default=None, compare=False)


Stmt = ExprStmt | PrintStmt | AssignStmt

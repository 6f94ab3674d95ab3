## minicalc — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Recursive descent over the token stream, with a single token of lookahead:
#
#   program    := statement* EOF
#   statement  := "print" expression ";"
#               | IDENTIFIER "=" expression ";"
#               | expression ";"
#   factor     := NUMBER | IDENTIFIER | "(" expression ")"
#   term       := factor (("*"|"/") factor)*
#   expression := term (("+"|"-") term)*
#

from .types import Token, TokenKind, OPERATOR_OF, Expr, Stmt, Number, Variable, Binary, ExprStmt, PrintStmt, AssignStmt
from .errors import CalcParseError, CalcIncompleteParse
from .lexer import Lexer


ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
MULTIPLICATIVE = (TokenKind.STAR, TokenKind.SLASH)


class Parser:
    def __init__(self, lexer: Lexer, bare_identifiers: bool = False):
        self.lexer = lexer
        self.bare_identifiers = bare_identifiers
        self.current: Token = lexer.next_token()

    def _advance(self) -> Token:
        token, self.current = self.current, self.lexer.next_token()
        return token

    def _error(self, message: str, expected: list[TokenKind]) -> CalcParseError:
        tok = self.current
        error_class = CalcIncompleteParse if tok.kind is TokenKind.EOF else CalcParseError
        return error_class(message, position=tok.start, token=tok.text, source=self.lexer.source, expected=expected)

    def _expect(self, kind: TokenKind, message: str) -> Token:
        if self.current.kind is not kind:
            raise self._error(message, expected=[kind])
        return self._advance()

    # Statements ──────────────────────────────────────────────────────────────────────────
    def parse_program(self) -> list[Stmt]:
        statements = []
        while self.current.kind is not TokenKind.EOF:
            statements.append(self.statement())
        return statements

    def statement(self) -> Stmt:
        match self.current.kind:
            case TokenKind.PRINT:
                self._advance()
                expr = self.expression()
                self._expect(TokenKind.SEMICOLON, "Expected `;` after value.")
                return PrintStmt(expr)
            case TokenKind.IDENTIFIER:
                name = self._advance()
                if self.current.kind is TokenKind.EQUAL:
                    self._advance()
                    expr = self.expression()
                    self._expect(TokenKind.SEMICOLON, "Expected `;` after assignment.")
                    return AssignStmt(name.text, expr, position=name.start)
                if not self.bare_identifiers:
                    raise self._error("Expected `=` after variable name.", expected=[TokenKind.EQUAL])
                expr = self.expression(first=Variable(name.text, position=name.start))
            case _:
                expr = self.expression()
        self._expect(TokenKind.SEMICOLON, "Expected `;` after expression.")
        return ExprStmt(expr)

    # Expressions ─────────────────────────────────────────────────────────────────────────
    def parse_expression(self) -> Expr:
        expr = self.expression()
        self._expect(TokenKind.EOF, "Expected end of input after expression.")
        return expr

    def expression(self, first: Expr | None = None) -> Expr:
        left = self.term(first)
        while self.current.kind in ADDITIVE:
            op = self._advance()
            left = Binary(left, OPERATOR_OF[op.kind], self.term(), position=op.start)
        return left

    def term(self, first: Expr | None = None) -> Expr:
        left = self.factor() if first is None else first
        while self.current.kind in MULTIPLICATIVE:
            op = self._advance()
            left = Binary(left, OPERATOR_OF[op.kind], self.factor(), position=op.start)
        return left

    def factor(self) -> Expr:
        tok = self.current
        match tok.kind:
            case TokenKind.NUMBER:
                self._advance()
                return Number(float(tok.text), position=tok.start)
            case TokenKind.IDENTIFIER:
                self._advance()
                return Variable(tok.text, position=tok.start)
            case TokenKind.LPAREN:
                self._advance()
                expr = self.expression()
                self._expect(TokenKind.RPAREN, "Expected `)` after expression.")
                return expr
        raise self._error("Expected expression.", expected=[TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.LPAREN])


def _run_parser(source: str, rule: str, bare_identifiers: bool):
    parser = Parser(Lexer(source), bare_identifiers=bare_identifiers)
    try:
        return getattr(parser, rule)()
    except RecursionError:
        tok = parser.current
        raise CalcParseError("Expression is nested too deeply.", position=tok.start, token=tok.text, source=source) from None


def parse(source: str, bare_identifiers: bool = False) -> list[Stmt]:
    return _run_parser(source, 'parse_program', bare_identifiers)


def parse_expression(source: str) -> Expr:
    return _run_parser(source, 'parse_expression', False)

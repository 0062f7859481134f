"""A recursive descent parser for the Nix language, focused on recovery."""

from __future__ import annotations

import re
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from .diagnostic import Diagnostic, DiagnosticKind, NoteKind, TextEdit
from .lexer import Lexer
from .nodes import (
    Expr,
    ExprFloat,
    ExprInt,
    ExprParen,
    ExprPath,
    ExprString,
    InterpolablePart,
    InterpolatedParts,
    Misc,
    Node,
)
from .range import Point, Range
from .token import Token, TokenKind, spelling

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_FLOAT_PREFIX = re.compile(r"\d*\.?\d*(?:[eE][+-]?\d+)?")


class _State(Enum):
    EXPR = auto()
    STRING = auto()
    IND_STRING = auto()
    PATH = auto()


@dataclass
class ParseResult:
    """The root node (None if nothing parsed) and the diagnostics found."""

    node: Node | None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _diag_null_expr(diagnostics: list[Diagnostic], loc: Point, what: str) -> Diagnostic:
    diag = Diagnostic(DiagnosticKind.EXPECTED, Range.at(loc))
    diagnostics.append(diag)
    diag.arg(what + " expression")
    diag.fix("insert dummy expression").edit(TextEdit.insertion(loc, " expr"))
    return diag


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    try:
        return float(match.group(0)) if match else 0.0
    except ValueError:
        return 0.0


class Parser:
    """Parses Nix source, collecting diagnostics instead of stopping at errors."""

    def __init__(self, source: str, diagnostics: list[Diagnostic] | None = None) -> None:
        self.source = source
        self.diagnostics: list[Diagnostic] = [] if diagnostics is None else diagnostics
        self._lexer = Lexer(source, self.diagnostics)
        self._lookahead: deque[Token] = deque()
        self._last_token: Token | None = None
        self._states: list[_State] = []
        self._push_state(_State.EXPR)

    # -- lexing context ---------------------------------------------------

    def _reset_lookahead(self) -> None:
        """Rewind the lexer to the first buffered token and drop the buffer."""
        if self._lookahead:
            self._lexer.cur = self._lookahead[0].begin
            self._lookahead.clear()

    def _push_state(self, state: _State) -> None:
        self._reset_lookahead()
        self._states.append(state)

    def _pop_state(self) -> None:
        self._reset_lookahead()
        self._states.pop()

    @contextmanager
    def _with_state(self, state: _State) -> Iterator[None]:
        self._push_state(state)
        try:
            yield
        finally:
            self._pop_state()

    def _lex_one(self) -> Token:
        state = self._states[-1]
        if state is _State.EXPR:
            return self._lexer.lex()
        if state is _State.STRING:
            return self._lexer.lex_string()
        if state is _State.IND_STRING:
            return self._lexer.lex_ind_string()
        return self._lexer.lex_path()

    def _peek(self, n: int = 0) -> Token:
        while n >= len(self._lookahead):
            self._lookahead.append(self._lex_one())
        return self._lookahead[n]

    def _consume(self) -> Token:
        if not self._lookahead:
            self._peek()
        self._last_token = self._lookahead.popleft()
        return self._last_token

    @property
    def _last_end(self) -> Point:
        assert self._last_token is not None
        return self._last_token.end

    # -- grammar ----------------------------------------------------------

    def _parse_interpolation(self) -> Expr | None:
        """interpolation : "${" expr "}" """
        dollar_curly = self._peek()
        self._consume()
        with self._with_state(_State.EXPR):
            expr = self._parse_expr()
            if expr is None:
                _diag_null_expr(self.diagnostics, self._last_end, "interpolation")
            if self._peek().kind is TokenKind.R_CURLY:
                self._consume()
            else:
                loc = self._last_end
                diag = Diagnostic(DiagnosticKind.EXPECTED, Range.at(loc))
                self.diagnostics.append(diag)
                diag.arg(spelling(TokenKind.R_CURLY))
                diag.note(NoteKind.TO_MATCH_THIS, dollar_curly.range).arg(
                    spelling(TokenKind.DOLLAR_CURLY)
                )
                diag.fix("insert }").edit(TextEdit.insertion(loc, "}"))
            return expr

    def _parse_expr_path(self) -> ExprPath:
        """path : path_fragment (path_fragment | interpolation)* path_end"""
        begin = self._peek()
        fragments: list[InterpolablePart] = []
        end = begin.end
        with self._with_state(_State.PATH):
            while True:
                current = self._peek()
                fragments.append(InterpolablePart(current.view))
                self._consume()
                end = current.end
                following = self._peek()
                if following.kind is not TokenKind.DOLLAR_CURLY:
                    break
                expr = self._parse_interpolation()
                if expr is not None:
                    fragments.append(InterpolablePart(expr))
        span = Range(begin.begin, end)
        return ExprPath(span, InterpolatedParts(span, fragments))

    def _parse_string_parts(self) -> InterpolatedParts:
        parts: list[InterpolablePart] = []
        parts_begin = self._peek().begin
        while True:
            tok = self._peek()
            if tok.kind is TokenKind.DOLLAR_CURLY:
                expr = self._parse_interpolation()
                if expr is not None:
                    parts.append(InterpolablePart(expr))
            elif tok.kind is TokenKind.STRING_PART:
                parts.append(InterpolablePart(tok.view))
                self._consume()
            elif tok.kind is TokenKind.STRING_ESCAPE:
                self._consume()
            else:
                return InterpolatedParts(Range(parts_begin, self._last_end), parts)

    def _parse_string(self, indented: bool) -> ExprString:
        quote = self._peek()
        quote_kind = TokenKind.QUOTE2 if indented else TokenKind.DQUOTE
        quote_spelling = spelling(quote_kind)
        self._consume()
        with self._with_state(_State.IND_STRING if indented else _State.STRING):
            parts = self._parse_string_parts()
            end_tok = self._peek()
            if end_tok.kind is quote_kind:
                self._consume()
                return ExprString(Range(quote.begin, end_tok.end), parts)
            loc = self._last_end
            diag = Diagnostic(DiagnosticKind.EXPECTED, Range.at(loc))
            self.diagnostics.append(diag)
            diag.arg(quote_spelling)
            diag.note(NoteKind.TO_MATCH_THIS, quote.range).arg(quote_spelling)
            diag.fix("insert " + quote_spelling).edit(
                TextEdit.insertion(loc, quote_spelling)
            )
            return ExprString(Range(quote.begin, parts.end), parts)

    def _parse_expr_paren(self) -> ExprParen:
        """'(' expr ')'"""
        left = self._peek()
        lparen = Misc(left.range)
        self._consume()
        expr = self._parse_expr()
        if expr is None:
            _diag_null_expr(self.diagnostics, self._last_end, "parenthesized")
        right = self._peek()
        if right.kind is TokenKind.R_PAREN:
            self._consume()
            return ExprParen(Range(left.begin, right.end), expr, lparen, Misc(right.range))

        loc = self._last_end
        diag = Diagnostic(DiagnosticKind.EXPECTED, Range.at(loc))
        self.diagnostics.append(diag)
        diag.arg(spelling(TokenKind.R_PAREN))
        diag.note(NoteKind.TO_MATCH_THIS, left.range).arg(spelling(TokenKind.L_PAREN))
        diag.fix("insert )").edit(TextEdit.insertion(loc, spelling(TokenKind.R_PAREN)))
        return ExprParen(Range(left.begin, loc), expr, lparen, None)

    def _parse_expr_simple(self) -> Expr | None:
        tok = self._peek()
        kind = tok.kind
        if kind is TokenKind.INT:
            self._consume()
            value = int(tok.view)
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise OverflowError(f"integer literal {tok.view} does not fit in 64 bits")
            return ExprInt(tok.range, value)
        if kind is TokenKind.FLOAT:
            self._consume()
            return ExprFloat(tok.range, _parse_float(tok.view))
        if kind is TokenKind.DQUOTE:
            return self._parse_string(indented=False)
        if kind is TokenKind.QUOTE2:
            return self._parse_string(indented=True)
        if kind is TokenKind.PATH_FRAGMENT:
            return self._parse_expr_path()
        if kind is TokenKind.L_PAREN:
            return self._parse_expr_paren()
        return None

    def _parse_expr(self) -> Expr | None:
        return self._parse_expr_simple()

    def parse(self) -> Node | None:
        """Parse the source and return the root node, or None if there is none."""
        return self._parse_expr()


def parse(source: str) -> ParseResult:
    """Parse ``source``, returning the root node and the diagnostics found."""
    parser = Parser(source)
    node = parser.parse()
    return ParseResult(node, parser.diagnostics)
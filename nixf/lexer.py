"""A stateful lexer for the Nix language, driven by the parser."""

from __future__ import annotations

import string

from .diagnostic import Diagnostic, DiagnosticKind, NoteKind, TextEdit
from .range import Point, Range
from .token import KEYWORDS, Token, TokenKind

_DIGITS = frozenset(string.digits)
_ALPHA = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _ALPHA
_SPACE = frozenset(" \t\n\v\f\r")
_URI_SCHEME = _ALNUM | frozenset("+-.")
_URI_PATH = _ALNUM | frozenset("%/?:@&=+$,-_.!~*'")
_PATH = _ALNUM | frozenset("._-+")
_IDENTIFIER = _ALNUM | frozenset("_'-")

_SINGLE_CHAR_TOKENS = {
    "*": TokenKind.OP_MUL,
    '"': TokenKind.DQUOTE,
    "}": TokenKind.R_CURLY,
    "@": TokenKind.AT,
    ":": TokenKind.COLON,
    "?": TokenKind.QUESTION,
    ";": TokenKind.SEMI_COLON,
    "{": TokenKind.L_CURLY,
    "(": TokenKind.L_PAREN,
    ")": TokenKind.R_PAREN,
    "[": TokenKind.L_BRACKET,
    "]": TokenKind.R_BRACKET,
    ",": TokenKind.COMMA,
}

# (two-character prefix, its kind, kind of the single character or None)
_OPERATORS = {
    "'": ("''", TokenKind.QUOTE2, None),
    "+": ("++", TokenKind.OP_CONCAT, TokenKind.OP_ADD),
    "-": ("->", TokenKind.OP_IMPL, TokenKind.OP_NEGATE),
    "/": ("//", TokenKind.OP_UPDATE, TokenKind.OP_DIV),
    "|": ("||", TokenKind.OP_OR, None),
    "!": ("!=", TokenKind.OP_NEQ, TokenKind.OP_NOT),
    "<": ("<=", TokenKind.OP_LE, TokenKind.OP_LT),
    ">": (">=", TokenKind.OP_GE, TokenKind.OP_GT),
    "&": ("&&", TokenKind.OP_AND, None),
    "=": ("==", TokenKind.OP_EQ, TokenKind.EQ),
    "$": ("${", TokenKind.DOLLAR_CURLY, None),
}


class Lexer:
    """Splits Nix source into tokens.

    The lexer has several entry points, one per lexing context (expression,
    string, indented string, path); the parser picks which to call.
    Problems found while lexing are appended to ``diagnostics``.
    """

    def __init__(self, source: str, diagnostics: list[Diagnostic] | None = None) -> None:
        self.source = source
        self.diagnostics: list[Diagnostic] = [] if diagnostics is None else diagnostics
        self._cur = Point()
        self._tok_start = Point()
        self._tok_kind = TokenKind.UNKNOWN

    # -- cursor -----------------------------------------------------------

    @property
    def cur(self) -> Point:
        """The current cursor position."""
        return self._cur

    @cur.setter
    def cur(self, point: Point) -> None:
        if not 0 <= point.offset <= len(self.source):
            raise ValueError(f"cursor offset {point.offset} is outside the source")
        self._cur = point

    def _eof(self) -> bool:
        return self._cur.offset >= len(self.source)

    def _peek(self) -> str | None:
        if self._eof():
            return None
        return self.source[self._cur.offset]

    def _consume(self, count: int = 1) -> None:
        start = self._cur.offset
        stop = min(start + count, len(self.source))
        line, column = self._cur.line, self._cur.column
        for ch in self.source[start:stop]:
            if ch == "\n":
                line += 1
                column = 0
            else:
                column += 1
        self._cur = Point(line, column, stop)

    def _peek_prefix(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self._cur.offset)

    def _consume_prefix(self, prefix: str) -> Range | None:
        begin = self._cur
        if self._peek_prefix(prefix):
            self._consume(len(prefix))
            return Range(begin, self._cur)
        return None

    def _consume_one(self, ch: str) -> bool:
        if self._peek() == ch:
            self._consume()
            return True
        return False

    def _consume_one_of(self, chars: str) -> str | None:
        ch = self._peek()
        if ch is not None and ch in chars:
            self._consume()
            return ch
        return None

    def _consume_many(self, allowed) -> Range | None:
        ch = self._peek()
        if ch is None or ch not in allowed:
            return None
        begin = self._cur
        while (ch := self._peek()) is not None and ch in allowed:
            self._consume()
        return Range(begin, self._cur)

    def _consume_many_digits(self) -> Range | None:
        return self._consume_many(_DIGITS)

    # -- token recording --------------------------------------------------

    def _start_token(self) -> None:
        self._tok_kind = TokenKind.UNKNOWN
        self._tok_start = self._cur

    def _finish_token(self) -> Token:
        return Token(
            self._tok_kind,
            Range(self._tok_start, self._cur),
            self._tok_text(),
        )

    def _tok_text(self) -> str:
        return self.source[self._tok_start.offset:self._cur.offset]

    # -- trivia -----------------------------------------------------------

    def _consume_eol(self) -> bool:
        return bool(self._consume_prefix("\r\n") or self._consume_prefix("\n"))

    def _consume_whitespaces(self) -> bool:
        return self._consume_many(_SPACE) is not None

    def _consume_comments(self) -> bool:
        if self._eof():
            return False
        begin_range = self._consume_prefix("/*")
        if begin_range is not None:
            while True:
                if self._eof():
                    diag = Diagnostic(DiagnosticKind.UNTERMINATED_BCOMMENT, Range.at(self._cur))
                    self.diagnostics.append(diag)
                    diag.note(NoteKind.BCOMMENT_BEGIN, begin_range)
                    diag.fix("insert */").edit(TextEdit.insertion(self._cur, "*/"))
                    return True
                if self._consume_prefix("*/"):
                    return True
                self._consume()
        if self._consume_prefix("#"):
            while True:
                if self._eof() or self._consume_eol():
                    return True
                self._consume()
        return False

    def _consume_trivia(self) -> None:
        while not self._eof():
            if self._consume_whitespaces() or self._consume_comments():
                continue
            return

    # -- numbers, paths, URIs, identifiers --------------------------------

    def _lex_float_exp(self) -> bool:
        exp_char = self._consume_one_of("Ee")
        if exp_char is not None:
            self._consume_one_of("+-")
            if self._consume_many_digits() is None:
                diag = Diagnostic(DiagnosticKind.FLOAT_NO_EXP, Range.at(self._cur))
                self.diagnostics.append(diag)
                diag.arg(exp_char)
                return False
        return True

    def _lex_numbers(self) -> None:
        digits = self._consume_many_digits()
        if digits is None:
            raise ValueError("number must start with a digit")
        if self._peek() == ".":
            self._tok_kind = TokenKind.FLOAT
            self._consume()
            self._consume_many_digits()
            self._lex_float_exp()
            start = digits.begin.offset
            prefix = self.source[start:start + 2]
            if prefix.startswith("0") and prefix != "0.":
                diag = Diagnostic(DiagnosticKind.FLOAT_LEADING_ZERO, digits)
                self.diagnostics.append(diag)
                diag.arg(prefix)
        else:
            self._tok_kind = TokenKind.INT

    def _consume_path_start(self) -> bool:
        saved = self._cur
        self._consume_many(_PATH)
        if self._consume_one("/"):
            ch = self._peek()
            if ch is not None and ch in _PATH:
                return True
            if self._peek_prefix("${"):
                return True
        self._cur = saved
        return False

    def _consume_uri(self) -> bool:
        saved = self._cur
        self._consume_many(_URI_SCHEME)
        if self._consume_one(":") and self._consume_many(_URI_PATH) is not None:
            return True
        self._cur = saved
        return False

    def _lex_identifier(self) -> None:
        self._consume()
        self._consume_many(_IDENTIFIER)
        self._tok_kind = KEYWORDS.get(self._tok_text(), TokenKind.ID)

    # -- entry points -----------------------------------------------------

    def lex_path(self) -> Token:
        """Lex the continuation of a path, after its first fragment."""
        self._start_token()
        self._tok_kind = TokenKind.PATH_END
        if self._eof():
            return self._finish_token()
        if self._consume_prefix("${"):
            self._tok_kind = TokenKind.DOLLAR_CURLY
            return self._finish_token()
        ch = self._peek()
        if ch in _PATH or ch == "/":
            self._tok_kind = TokenKind.PATH_FRAGMENT
            while (ch := self._peek()) is not None and (ch in _PATH or ch == "/"):
                if self._peek_prefix("${"):
                    break
                self._consume()
        return self._finish_token()

    def lex_string(self) -> Token:
        """Lex inside a double-quoted string."""
        self._start_token()
        if self._eof():
            self._tok_kind = TokenKind.EOF
            return self._finish_token()
        ch = self._peek()
        if ch == '"':
            self._consume()
            self._tok_kind = TokenKind.DQUOTE
            return self._finish_token()
        if ch == "\\":
            self._consume(2)
            self._tok_kind = TokenKind.STRING_ESCAPE
            return self._finish_token()
        if ch == "$" and self._consume_prefix("${"):
            self._tok_kind = TokenKind.DOLLAR_CURLY
            return self._finish_token()
        self._tok_kind = TokenKind.STRING_PART
        while (ch := self._peek()) is not None:
            if ch in '\\"':
                break
            if self._consume_prefix("$${"):
                continue
            if self._peek_prefix("${"):
                break
            self._consume()
        return self._finish_token()

    def lex_ind_string(self) -> Token:
        """Lex inside an indented ('') string."""
        self._start_token()
        if self._eof():
            self._tok_kind = TokenKind.EOF
            return self._finish_token()
        if self._consume_prefix("''"):
            self._tok_kind = TokenKind.QUOTE2
            if (
                self._consume_prefix("$")
                or self._consume_prefix("\\")
                or self._consume_prefix("'")
            ):
                self._tok_kind = TokenKind.STRING_ESCAPE
            return self._finish_token()
        if self._consume_prefix("${"):
            self._tok_kind = TokenKind.DOLLAR_CURLY
            return self._finish_token()
        self._tok_kind = TokenKind.STRING_PART
        while not self._eof():
            if self._peek_prefix("''"):
                break
            if self._consume_prefix("$${"):
                continue
            if self._peek_prefix("${"):
                break
            self._consume()
        return self._finish_token()

    def lex(self) -> Token:
        """Lex one token in expression context, skipping leading trivia."""
        self._consume_trivia()
        self._start_token()

        ch = self._peek()
        if ch is None:
            self._tok_kind = TokenKind.EOF
            return self._finish_token()

        if (ch in _PATH or ch == "/") and self._consume_path_start():
            self._tok_kind = TokenKind.PATH_FRAGMENT
            return self._finish_token()

        if ch in _ALPHA and self._consume_uri():
            self._tok_kind = TokenKind.URI
            return self._finish_token()

        if ch in _DIGITS:
            self._lex_numbers()
            return self._finish_token()

        if ch in _ALPHA or ch == "_":
            self._lex_identifier()
            return self._finish_token()

        if ch in _SINGLE_CHAR_TOKENS:
            self._consume()
            self._tok_kind = _SINGLE_CHAR_TOKENS[ch]
        elif ch == ".":
            if self._consume_prefix("..."):
                self._tok_kind = TokenKind.ELLIPSIS
            else:
                self._consume()
                self._tok_kind = TokenKind.DOT
        elif ch in _OPERATORS:
            prefix, double_kind, single_kind = _OPERATORS[ch]
            if self._consume_prefix(prefix):
                self._tok_kind = double_kind
            elif single_kind is not None:
                self._consume()
                self._tok_kind = single_kind

        if self._tok_kind is TokenKind.UNKNOWN:
            self._consume()
        return self._finish_token()
"""Token kinds and tokens produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .range import Point, Range


class TokenKind(Enum):
    """Every kind of token the lexer can produce."""

    UNKNOWN = auto()
    EOF = auto()

    # Keywords.
    KW_IF = auto()
    KW_THEN = auto()
    KW_ELSE = auto()
    KW_ASSERT = auto()
    KW_WITH = auto()
    KW_LET = auto()
    KW_IN = auto()
    KW_REC = auto()
    KW_INHERIT = auto()
    KW_OR = auto()

    # Literals and names.
    ID = auto()
    INT = auto()
    FLOAT = auto()
    URI = auto()
    PATH_FRAGMENT = auto()
    PATH_END = auto()

    # Strings.
    DQUOTE = auto()
    QUOTE2 = auto()
    STRING_PART = auto()
    STRING_ESCAPE = auto()
    DOLLAR_CURLY = auto()

    # Operators.
    OP_CONCAT = auto()
    OP_ADD = auto()
    OP_IMPL = auto()
    OP_NEGATE = auto()
    OP_MUL = auto()
    OP_UPDATE = auto()
    OP_DIV = auto()
    OP_OR = auto()
    OP_AND = auto()
    OP_NEQ = auto()
    OP_NOT = auto()
    OP_LE = auto()
    OP_LT = auto()
    OP_GE = auto()
    OP_GT = auto()
    OP_EQ = auto()

    # Punctuation.
    EQ = auto()
    ELLIPSIS = auto()
    DOT = auto()
    AT = auto()
    COLON = auto()
    QUESTION = auto()
    SEMI_COLON = auto()
    COMMA = auto()
    L_CURLY = auto()
    R_CURLY = auto()
    L_PAREN = auto()
    R_PAREN = auto()
    L_BRACKET = auto()
    R_BRACKET = auto()

    @property
    def is_keyword(self) -> bool:
        return self.name.startswith("KW_")


KEYWORDS: dict[str, TokenKind] = {
    kind.name[len("KW_"):].lower(): kind for kind in TokenKind if kind.is_keyword
}

_SPELLINGS: dict[TokenKind, str] = {
    TokenKind.DQUOTE: '"',
    TokenKind.QUOTE2: "''",
    TokenKind.DOLLAR_CURLY: "${",
    TokenKind.R_CURLY: "}",
    TokenKind.L_PAREN: "(",
    TokenKind.R_PAREN: ")",
}


def spelling(kind: TokenKind) -> str:
    """Return the source text of a fixed-spelling token kind.

    Raises ValueError for kinds without a known spelling.
    """
    if kind.is_keyword:
        return kind.name[len("KW_"):].lower()
    try:
        return _SPELLINGS[kind]
    except KeyError:
        raise ValueError(f"no spelling known for {kind}") from None


@dataclass(frozen=True)
class Token:
    """A token: its kind, its range in the source, and its text."""

    kind: TokenKind
    range: Range
    view: str

    @property
    def begin(self) -> Point:
        return self.range.begin

    @property
    def end(self) -> Point:
        return self.range.end
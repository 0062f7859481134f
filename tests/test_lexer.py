import pytest

from nixf.diagnostic import DiagnosticKind, NoteKind
from nixf.lexer import Lexer
from nixf.range import Point
from nixf.token import TokenKind


def collect(method):
    tokens = []
    while True:
        tok = method()
        if tok.kind is TokenKind.EOF:
            return tokens
        tokens.append(tok)


@pytest.mark.parametrize("src", ["1", "1123123", "00023121123123"])
def test_integer(src):
    lexer = Lexer(src)
    tok = lexer.lex()
    assert tok.kind is TokenKind.INT
    assert tok.view == src
    assert lexer.diagnostics == []


def test_trivia():
    src = "\r\n /* */# line comment\n\f \v\r \n" + "3"
    lexer = Lexer(src)
    tok = lexer.lex()
    assert tok.kind is TokenKind.INT
    assert tok.view == "3"
    assert lexer.diagnostics == []


def test_trivia_line_comment():
    lexer = Lexer("# single line comment\n\n3\n")
    tok = lexer.lex()
    assert tok.kind is TokenKind.INT
    assert tok.view == "3"
    assert lexer.diagnostics == []


def test_trivia_block_comment():
    lexer = Lexer("/* block comment\naaa\n*/")
    tok = lexer.lex()
    assert tok.kind is TokenKind.EOF
    assert tok.view == ""
    assert lexer.diagnostics == []


def test_trivia_unterminated_block_comment():
    lexer = Lexer("/* block comment\naaa\n")
    tok = lexer.lex()
    assert tok.kind is TokenKind.EOF
    assert tok.view == ""
    assert len(lexer.diagnostics) == 1
    diag = lexer.diagnostics[0]
    assert diag.message() == "unterminated /* comment"
    assert diag.notes[0].message() == "/* comment begins at here"
    assert diag.notes[0].kind is NoteKind.BCOMMENT_BEGIN
    assert diag.fixes[0].message == "insert */"
    assert diag.fixes[0].edits[0].new_text == "*/"
    assert diag.fixes[0].edits[0].is_insertion()


def test_shared_diagnostics_list_is_appended():
    diags = []
    lexer = Lexer("/* open", diags)
    lexer.lex()
    assert len(diags) == 1
    assert lexer.diagnostics is diags


def test_float_leading_zero():
    lexer = Lexer("00.33")
    tok = lexer.lex()
    assert tok.kind is TokenKind.FLOAT
    assert tok.view == "00.33"
    assert lexer.diagnostics
    diag = lexer.diagnostics[0]
    assert diag.message() == "float begins with extra zeros `{}` is nixf extension"
    assert diag.args[0] == "00"


@pytest.mark.parametrize(("src", "exp"), [("0.33e", "e"), ("0.33E", "E")])
def test_float_no_exp(src, exp):
    lexer = Lexer(src)
    tok = lexer.lex()
    assert tok.kind is TokenKind.FLOAT
    assert tok.view == src
    assert lexer.diagnostics
    assert lexer.diagnostics[0].kind is DiagnosticKind.FLOAT_NO_EXP
    assert lexer.diagnostics[0].args[0] == exp


def test_float_without_leading_zero_has_no_diagnostic():
    lexer = Lexer("0.5e+10")
    tok = lexer.lex()
    assert tok.kind is TokenKind.FLOAT
    assert tok.view == "0.5e+10"
    assert lexer.diagnostics == []


def test_lex_string():
    lexer = Lexer(r'"aa bb \\ \t \" \n ${}"')
    expected = [
        TokenKind.DQUOTE,
        TokenKind.STRING_PART,
        TokenKind.STRING_ESCAPE,
        TokenKind.STRING_PART,
        TokenKind.STRING_ESCAPE,
        TokenKind.STRING_PART,
        TokenKind.STRING_ESCAPE,
        TokenKind.STRING_PART,
        TokenKind.STRING_ESCAPE,
        TokenKind.STRING_PART,
        TokenKind.DOLLAR_CURLY,
        TokenKind.STRING_PART,
        TokenKind.DQUOTE,
    ]
    tokens = collect(lexer.lex_string)
    assert [t.kind for t in tokens] == expected


def test_lex_string_double_dollar_is_part():
    lexer = Lexer('a$${b}"')
    tok = lexer.lex_string()
    assert tok.kind is TokenKind.STRING_PART
    assert tok.view == "a$${b}"


def test_lex_id_path():
    lexer = Lexer("id pa/t")
    tokens = collect(lexer.lex)
    assert [t.kind for t in tokens] == [
        TokenKind.ID,
        TokenKind.PATH_FRAGMENT,
        TokenKind.ID,
    ]
    assert [t.view for t in tokens] == ["id", "pa/", "t"]


def test_lex_keywords():
    lexer = Lexer("if then")
    tokens = collect(lexer.lex)
    assert [t.kind for t in tokens] == [TokenKind.KW_IF, TokenKind.KW_THEN]


def test_lex_uri():
    src = "https://github.com/inclyc/libnixf"
    lexer = Lexer(src)
    tokens = collect(lexer.lex)
    assert [t.kind for t in tokens] == [TokenKind.URI]
    assert tokens[0].view == src


@pytest.mark.parametrize(
    ("src", "kind"),
    [
        ("++", TokenKind.OP_CONCAT),
        ("+", TokenKind.OP_ADD),
        ("->", TokenKind.OP_IMPL),
        ("-", TokenKind.OP_NEGATE),
        ("//", TokenKind.OP_UPDATE),
        ("/", TokenKind.OP_DIV),
        ("||", TokenKind.OP_OR),
        ("&&", TokenKind.OP_AND),
        ("!=", TokenKind.OP_NEQ),
        ("!", TokenKind.OP_NOT),
        ("<=", TokenKind.OP_LE),
        ("<", TokenKind.OP_LT),
        (">=", TokenKind.OP_GE),
        (">", TokenKind.OP_GT),
        ("==", TokenKind.OP_EQ),
        ("=", TokenKind.EQ),
        ("...", TokenKind.ELLIPSIS),
        (".", TokenKind.DOT),
        ("${", TokenKind.DOLLAR_CURLY),
        ("''", TokenKind.QUOTE2),
        ("{", TokenKind.L_CURLY),
        ("]", TokenKind.R_BRACKET),
    ],
)
def test_lex_operators(src, kind):
    tokens = collect(Lexer(src).lex)
    assert [t.kind for t in tokens] == [kind]
    assert tokens[0].view == src


def test_unknown_character_is_single_token():
    tokens = collect(Lexer("|").lex)
    assert [t.kind for t in tokens] == [TokenKind.UNKNOWN]
    assert tokens[0].view == "|"


def test_token_positions_track_lines():
    tokens = collect(Lexer("a\nbc").lex)
    assert tokens[1].begin.is_at(1, 0, 2)
    assert tokens[1].end.is_at(1, 2, 4)


def test_lex_path_continuation():
    lexer = Lexer("/c${")
    first = lexer.lex_path()
    assert first.kind is TokenKind.PATH_FRAGMENT
    assert first.view == "/c"
    second = lexer.lex_path()
    assert second.kind is TokenKind.DOLLAR_CURLY
    assert lexer.lex_path().kind is TokenKind.PATH_END


def test_lex_ind_string_escape_and_quote():
    lexer = Lexer("ab''$''")
    kinds = [t.kind for t in collect(lexer.lex_ind_string)]
    assert kinds == [
        TokenKind.STRING_PART,
        TokenKind.STRING_ESCAPE,
        TokenKind.QUOTE2,
    ]


def test_set_cursor_relexes():
    lexer = Lexer("ab cd")
    lexer.lex()
    lexer.cur = Point()
    tok = lexer.lex()
    assert tok.view == "ab"


def test_set_cursor_out_of_range_raises():
    lexer = Lexer("ab")
    with pytest.raises(ValueError):
        lexer.cur = Point(0, 5, 5)
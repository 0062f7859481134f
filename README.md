# nixf

`nixf` is an error-tolerant lexer and recursive-descent parser for the Nix
expression language. The parser does not stop at the first problem. It
recovers, builds as much of the syntax tree as it can, and reports each
problem as a diagnostic. A diagnostic carries its source range, explanatory
notes and suggested fixes.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Parsing

`nixf.parser.parse(source)` returns a `ParseResult`. The result has two
fields:

- `node`: the root node, or `None` when no expression could be read
- `diagnostics`: a list of `Diagnostic` objects

```python
from nixf.parser import parse
from nixf.nodes import NodeKind

result = parse('"aaa ${1} bbb"')
expr = result.node
assert expr.kind is NodeKind.EXPR_STRING
print(len(expr.parts.fragments))   # 3
print(result.diagnostics)          # []
```

You can also create a `Parser` yourself, optionally passing a list that
diagnostics are appended to. Then call its `parse()` method.

The parser reads these expressions:

- integers, giving `ExprInt`; a literal outside the signed 64-bit range raises
  `OverflowError`
- floats, giving `ExprFloat`
- double-quoted strings `"..."` and indented strings `''...''`, including
  `${...}` interpolation, giving `ExprString`
- paths with interpolation such as `a/b/${x}/c`, giving `ExprPath`
- parenthesized expressions, giving `ExprParen`

String and path contents are held in an `InterpolatedParts` node. Its
`fragments` list holds `InterpolablePart` objects. Each part is one of two
kinds:

- literal text, returned by `escaped()`
- an expression, returned by `interpolation()`

Every node has a `kind`, a `range`, and `begin` and `end` points.

## Diagnostics

The parser recovers from these problems and reports each one as a diagnostic:

- a missing closing quote, `)` or `}`
- an empty interpolation or empty parentheses
- an unterminated `/* */` comment
- a float with an empty exponent, such as `1.0e`
- a float with leading zeros, such as `00.5`

Each `Diagnostic` has:

- a `kind` (a `DiagnosticKind`)
- a `range`
- the `args` used to build its message
- `notes` (a list of `Note`)
- `fixes` (a list of `Fix`, each made of `TextEdit`s)

Its `severity()`, `sname()`, `message()` and `format()` methods describe it.

```python
from nixf.parser import parse

result = parse("(1")
diag = result.diagnostics[0]
print(diag.format())                 # expected )
print(diag.notes[0].format())        # to match this (
fix = diag.fixes[0]
print(fix.message)                   # insert )
edit = fix.edits[0]
print(edit.is_insertion(), edit.new_text)   # True )
```

Positions are `Point` objects from `nixf.range`. Each has a zero-based
`line`, `column` and `offset`. A `Range` runs from a `begin` point to an
`end` point.

## Lexing

The `Lexer` in `nixf.lexer` has one entry point per context. The parser
switches between them as it goes:

- `lex()` for ordinary expressions, skipping whitespace and comments
- `lex_string()` inside double-quoted strings
- `lex_ind_string()` inside indented strings
- `lex_path()` for path continuations

Each call returns one `Token`, which has a `kind` (a `TokenKind`), a `range`
and the source text as `view`. `nixf.token.spelling(kind)` gives the fixed
text of keywords and a few punctuation tokens. For any other kind it raises
`ValueError`.

```python
from nixf.lexer import Lexer
from nixf.token import TokenKind

lexer = Lexer("00.33")
tok = lexer.lex()
assert tok.kind is TokenKind.FLOAT
print(lexer.diagnostics[0].format())
# float begins with extra zeros `00` is nixf extension
```

## What it does not do

- The lexer recognises the whole token set: identifiers, keywords, URIs and
  all operators. The parser, however, only builds the expressions listed
  above. Other input gives no node; for example, `x`, `1 + 2`, `{ a = 1; }`,
  `[ 1 ]` and `let ... in ...` leave `result.node` as `None`. The parser also
  stops after the first expression and ignores anything that follows it.
- Escape sequences in strings, such as `\n`, are consumed but are not decoded
  or kept in the string's fragments.
- The package does not evaluate expressions. It does not resolve variables,
  and it has no command-line tool.
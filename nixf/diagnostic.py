"""Diagnostics, notes and fix-it hints."""

from __future__ import annotations

from enum import Enum

from .range import Point, Range


class TextEdit:
    """Replace the text at ``old_range`` with ``new_text``.

    An edit whose range is empty is an insertion; one whose new text is
    empty is a removal. An edit that is both would do nothing and is refused.
    """

    def __init__(self, old_range: Range, new_text: str) -> None:
        if old_range.begin == old_range.end and not new_text:
            raise ValueError("a text edit must change something")
        self.old_range = old_range
        self.new_text = new_text

    @classmethod
    def insertion(cls, point: Point, new_text: str) -> TextEdit:
        """Insert ``new_text`` at ``point``."""
        return cls(Range.at(point), new_text)

    @classmethod
    def removal(cls, old_range: Range) -> TextEdit:
        """Remove the text in ``old_range``."""
        return cls(old_range, "")

    def is_replace(self) -> bool:
        return not self.is_removal() and not self.is_insertion()

    def is_removal(self) -> bool:
        return not self.new_text

    def is_insertion(self) -> bool:
        return self.old_range.begin == self.old_range.end

    def __repr__(self) -> str:
        return f"TextEdit({self.old_range!r}, {self.new_text!r})"


class Fix:
    """A named group of text edits that resolves a diagnostic."""

    def __init__(self, message: str, edits: list[TextEdit] | None = None) -> None:
        self.message = message
        self.edits: list[TextEdit] = list(edits) if edits else []

    def edit(self, text_edit: TextEdit) -> Fix:
        """Append an edit and return this fix, so calls can be chained."""
        self.edits.append(text_edit)
        return self

    def __repr__(self) -> str:
        return f"Fix({self.message!r}, {self.edits!r})"


class Severity(Enum):
    """How serious a diagnostic is.

    FATAL: the code should not be evaluated, e.g. a parse error.
    ERROR: evaluation would fail, but the code can be recovered.
    WARNING: just a warning.
    """

    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(Enum):
    """Every kind of diagnostic, with its short name, severity and message."""

    UNTERMINATED_BCOMMENT = (
        "lex-unterminated-bcomment",
        Severity.FATAL,
        "unterminated /* comment",
    )
    FLOAT_NO_EXP = (
        "lex-float-no-exp",
        Severity.FATAL,
        "float point has trailing `{}` but has no exponential part",
    )
    FLOAT_LEADING_ZERO = (
        "lex-float-leading-zero",
        Severity.WARNING,
        "float begins with extra zeros `{}` is nixf extension",
    )
    EXPECTED = ("parse-expected", Severity.FATAL, "expected {}")
    UNEXPECTED_BETWEEN = (
        "parse-unexpected-between",
        Severity.FATAL,
        "unexpected {} between {} and {}",
    )

    def __init__(self, sname: str, severity: Severity, message: str) -> None:
        self.sname = sname
        self.severity = severity
        self.message = message


class NoteKind(Enum):
    """Every kind of note, with its short name and message."""

    BCOMMENT_BEGIN = ("bcomment-begin", "/* comment begins at here")
    TO_MATCH_THIS = ("to-match-this", "to match this {}")

    def __init__(self, sname: str, message: str) -> None:
        self.sname = sname
        self.message = message


def _simple_format(template: str, args: list[str]) -> str:
    """Replace each ``{}`` in ``template`` with the next argument."""
    pieces = template.split("{}")
    if len(pieces) - 1 > len(args):
        raise ValueError(
            f"message needs {len(pieces) - 1} arguments, got {len(args)}"
        )
    out = [pieces[0]]
    for arg, piece in zip(args, pieces[1:]):
        out.append(arg)
        out.append(piece)
    return "".join(out)


class PartialDiagnostic:
    """Shared behaviour of diagnostics and notes: a message with arguments."""

    def __init__(self, range: Range) -> None:
        self.range = range
        self.args: list[str] = []

    def message(self) -> str:
        raise NotImplementedError

    def arg(self, value: str) -> PartialDiagnostic:
        """Append a message argument and return self, so calls can be chained."""
        self.args.append(value)
        return self

    def format(self) -> str:
        """Return the message with its arguments filled in."""
        return _simple_format(self.message(), self.args)


class Note(PartialDiagnostic):
    """Additional information attached to a diagnostic."""

    def __init__(self, kind: NoteKind, range: Range) -> None:
        super().__init__(range)
        self.kind = kind

    def message(self) -> str:
        return self.kind.message

    def __repr__(self) -> str:
        return f"Note({self.kind}, {self.range!r}, args={self.args!r})"


class Diagnostic(PartialDiagnostic):
    """A problem found in the source, with notes and suggested fixes."""

    def __init__(self, kind: DiagnosticKind, range: Range) -> None:
        super().__init__(range)
        self.kind = kind
        self.notes: list[Note] = []
        self.fixes: list[Fix] = []

    def message(self) -> str:
        return self.kind.message

    def severity(self) -> Severity:
        return self.kind.severity

    def sname(self) -> str:
        """Short name, usable to switch the diagnostic on or off."""
        return self.kind.sname

    def note(self, kind: NoteKind, range: Range) -> Note:
        """Attach a new note and return it."""
        new_note = Note(kind, range)
        self.notes.append(new_note)
        return new_note

    def fix(self, message: str) -> Fix:
        """Attach a new, empty fix and return it."""
        new_fix = Fix(message)
        self.fixes.append(new_fix)
        return new_fix

    def __repr__(self) -> str:
        return f"Diagnostic({self.kind}, {self.range!r}, args={self.args!r})"
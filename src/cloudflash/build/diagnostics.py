"""
Compiler diagnostic parsing.

The compile service reports failures as free-form compiler output. This
module recognizes GCC-style diagnostic lines:

    src/main.cpp:12:5: error: expected ';' before '}' token

and folds everything else (notes, code excerpts, caret markers, include
chains) into the message of the diagnostic that precedes it.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

# path:line:column: kind: message
_DIAGNOSTIC_PATTERN = re.compile(r"([^:]+):(\d+):(\d+):\s*(\w+):\s*(.*)")


class IssueKind(Enum):
    """Severity of a build issue."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class BuildIssue:
    """A warning or error reported by the compiler.

    Attributes:
        kind: Warning or error
        path: Path of the offending file as reported by the compiler
        filename: Last path segment of path
        line: Line number (1-based)
        column: Column number (1-based)
        message: Issue text, continuation lines joined with newlines
    """

    kind: IssueKind
    path: str
    filename: str
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}: {self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Diagnostic:
    """A line that opens a new build issue."""

    issue: BuildIssue


@dataclass(frozen=True)
class Continuation:
    """A line that belongs to the preceding build issue."""

    text: str


LineClass = Union[Diagnostic, Continuation]


def classify_line(line: str) -> LineClass:
    """Classify one line of compiler output.

    The diagnostic may follow a prefix such as ``make: ``, in which case
    the path keeps whatever non-colon text precedes it. Lines that do not
    contain the diagnostic shape, or whose kind is neither ``warning`` nor
    ``error``, are continuations.

    Args:
        line: A single line of compiler output

    Returns:
        Diagnostic carrying a new BuildIssue, or Continuation
    """
    match = _DIAGNOSTIC_PATTERN.search(line)
    if not match:
        return Continuation(line)

    path, line_no, column, kind, message = match.groups()
    try:
        issue_kind = IssueKind(kind)
    except ValueError:
        return Continuation(line)

    return Diagnostic(
        BuildIssue(
            kind=issue_kind,
            path=path,
            filename=path.split("/")[-1],
            line=int(line_no),
            column=int(column),
            message=message,
        )
    )


def aggregate_issues(errors: Iterable[str]) -> List[BuildIssue]:
    """Fold raw compiler error blobs into an ordered list of build issues.

    Blobs are scanned in order, lines within a blob in order. Lines are
    split with str.splitlines(), so CRLF, lone CR and form feed all end a
    line and a trailing line break adds no empty continuation. Continuation
    lines are appended to the most recent issue; those seen before any
    issue are dropped.

    Args:
        errors: Raw error strings as returned by the compile service

    Returns:
        Build issues in the order their diagnostic lines appeared
    """
    issues: List[BuildIssue] = []

    for blob in errors:
        for line in blob.splitlines():
            classified = classify_line(line)
            if isinstance(classified, Diagnostic):
                issues.append(classified.issue)
            elif issues:
                issues[-1].message += "\n" + classified.text

    return issues

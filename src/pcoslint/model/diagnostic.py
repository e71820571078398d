"""Diagnostic model: structured findings about a stylesheet project."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Higher is more severe."""
        return {"error": 2, "warning": 1, "info": 0}[self.value]

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        if isinstance(value, Severity):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Unknown severity: {value!r}") from None


@dataclass(frozen=True, order=True)
class SourceSpan:
    """A location range inside one source file (1-based lines and columns)."""

    file_id: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        return f"{self.file_id}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file_id,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced by the analyzer.

    Attributes:
        code: Identifier for the rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        span: Where the problem is, if it has a location.
        related: Other locations involved (e.g. the interface of a
            conformance violation, or the first of two duplicates).
        fix: Suggested remediation, if mechanically derivable.
    """

    code: str
    severity: Severity
    message: str
    span: SourceSpan | None = None
    related: tuple[SourceSpan, ...] = ()
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def sort_key(self) -> tuple[str, int, int, str, str]:
        if self.span is None:
            return ("", 0, 0, self.code, self.message)
        return (self.span.file_id, self.span.line, self.span.column, self.code, self.message)

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "span": self.span.to_dict() if self.span else None,
            "related": [s.to_dict() for s in self.related],
            "fix": self.fix,
        }

    def __str__(self) -> str:
        location = f"{self.span}: " if self.span else ""
        text = f"{location}{self.severity.value} [{self.code}] {self.message}"
        if self.fix:
            text += f" (suggestion: {self.fix})"
        return text

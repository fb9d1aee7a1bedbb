"""Diagnostic records reported by the rewrite engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    FATAL = "fatal"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Enumerated reasons a diagnostic can carry."""

    PARSE_ERROR = "PARSE_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    MISSING_ARGUMENTS = "MISSING_ARGUMENTS"
    INVALID_BASE_CLASSES = "INVALID_BASE_CLASSES"
    UNKNOWN_VARIANT = "UNKNOWN_VARIANT"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    code: DiagnosticCode
    message: str
    source_id: str
    offset: int | None = None

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def location(self) -> str:
        if self.offset is None:
            return self.source_id
        return f"{self.source_id}:{self.offset}"

    def to_dict(self) -> dict[str, object]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "source_id": self.source_id,
            "offset": self.offset,
        }


__all__ = ["Diagnostic", "DiagnosticCode", "Severity"]

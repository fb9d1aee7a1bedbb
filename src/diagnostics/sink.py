"""Reporting interface the engine calls into.

The sink belongs to the caller. The engine reports parse failures through
``report_fatal`` and per-call problems through ``report_warning``; what
happens next (log, fail the build, ignore) is the caller's decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from diagnostics.models import Diagnostic


class DiagnosticsSink(Protocol):
    def report_fatal(self, diagnostic: Diagnostic) -> None: ...

    def report_warning(self, diagnostic: Diagnostic) -> None: ...


@dataclass
class CollectingSink:
    """Sink that records every diagnostic in report order."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report_fatal(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def report_warning(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def fatal(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_fatal]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_fatal]

    @property
    def has_fatal(self) -> bool:
        return any(d.is_fatal for d in self.diagnostics)


__all__ = ["CollectingSink", "DiagnosticsSink"]

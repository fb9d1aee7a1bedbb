"""Diagnostics produced by the rewrite engine."""

from diagnostics.models import Diagnostic, DiagnosticCode, Severity
from diagnostics.sink import CollectingSink, DiagnosticsSink

__all__ = [
    "CollectingSink",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticsSink",
    "Severity",
]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .diagnostics import Diagnostic, DiagnosticKind
from .span import Span

__all__ = ["Diagnostic", "DiagnosticKind", "Span"]

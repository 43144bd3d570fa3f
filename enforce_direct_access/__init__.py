# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build-time policy check for JavaScript access paths.

Configured paths such as `process.env` or `import.meta.env` are meant to be
replaced textually by a bundler, which only works when code spells them out.
The checker reports optional chaining and object destructuring that would hide
such an access from the replacement.
"""

from .checker import CheckResult, EnforceDirectAccessChecker
from .config import PluginConfig, load_config
from .core import Diagnostic, DiagnosticKind, Span
from .driver import check_file, check_source
from .errors import ConfigError, EnforceAccessError

__all__ = [
	"CheckResult",
	"ConfigError",
	"Diagnostic",
	"DiagnosticKind",
	"EnforceAccessError",
	"EnforceDirectAccessChecker",
	"PluginConfig",
	"Span",
	"check_file",
	"check_source",
	"load_config",
]

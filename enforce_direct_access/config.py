# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Checker configuration.

The only recognised option is `paths`: the dotted access paths that must be
written out directly (no optional chaining, no destructuring). Host tools pass
their whole plugin option object through, so unrelated keys are ignored.

Config file shape (JSON):

	{"paths": ["process.env", "import.meta.env"]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginConfig:
	paths: Tuple[str, ...] = ()

	@classmethod
	def from_mapping(cls, options: Mapping[str, Any] | None, *, source: str | None = None) -> "PluginConfig":
		if options is None:
			return cls()
		if not isinstance(options, Mapping):
			raise ConfigError(
				reason_code="config-not-object",
				message=f"config must be an object, got {type(options).__name__}",
				path=source,
			)
		for key in options:
			if key != "paths":
				logger.debug("ignoring unknown config key %r", key)
		raw = options.get("paths", [])
		cls.validate_paths(raw, source=source)
		return cls(paths=tuple(raw))

	@staticmethod
	def validate_paths(raw: Any, *, source: str | None = None) -> None:
		if not isinstance(raw, list):
			raise ConfigError(
				reason_code="config-paths-not-list",
				message=f"'paths' must be a list of strings, got {type(raw).__name__}",
				path=source,
			)
		for idx, entry in enumerate(raw):
			if not isinstance(entry, str):
				raise ConfigError(
					reason_code="config-path-not-string",
					message=f"'paths[{idx}]' must be a string, got {type(entry).__name__}",
					path=source,
				)

	def validate(self) -> None:
		self.validate_paths(list(self.paths))

	def extended(self, extra: Tuple[str, ...] | list[str]) -> "PluginConfig":
		"""Return a config with `extra` appended after the existing paths."""
		return PluginConfig(paths=self.paths + tuple(extra))


def load_config(path: Path | str) -> PluginConfig:
	path = Path(path)
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as err:
		raise ConfigError(reason_code="config-unreadable", message=str(err), path=str(path)) from err
	try:
		data = json.loads(text)
	except json.JSONDecodeError as err:
		raise ConfigError(
			reason_code="config-invalid-json",
			message=f"invalid JSON at line {err.lineno} column {err.colno}: {err.msg}",
			path=str(path),
		) from err
	config = PluginConfig.from_mapping(data, source=str(path))
	logger.debug("loaded %d protected path(s) from %s", len(config.paths), path)
	return config


__all__ = ["PluginConfig", "load_config"]

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_IGNORE
from .errors import ValidationError
from .model import ConfigFile, Options


def load_config_file(path: str) -> ConfigFile:
	"""Read a JSON configuration file: root, entries, alias, ignore and debug keys."""
	try:
		with open(path, "r", encoding="utf-8") as fh:
			data = json.load(fh)
	except OSError as e:
		raise ValidationError(f"Couldn't read configuration file {path}: {e}") from e
	except json.JSONDecodeError as e:
		raise ValidationError(f"Invalid JSON in configuration file {path}: {e}") from e

	try:
		return ConfigFile.model_validate(data)
	except PydanticValidationError as e:
		raise ValidationError(f"Invalid configuration file {path}:\n{e}") from e


def parse_alias_args(values: Optional[Iterable[str]]) -> Dict[str, str]:
	alias: Dict[str, str] = {}
	for value in values or []:
		key, sep, target = value.partition("=")
		if not sep or not key or not target:
			raise ValidationError(f"Invalid alias {value!r}, expected KEY=PATH")
		alias[key] = target
	return alias


def build_options(
	config: ConfigFile,
	root: Optional[str] = None,
	debug: bool = False,
	ignore: Optional[str] = None,
	alias: Optional[Dict[str, str]] = None,
) -> Options:
	# Values from the configuration file take precedence over the command line.
	if config.ignore is not None:
		ignore = config.ignore
	return Options(
		root=os.path.abspath(config.root or root or os.getcwd()),
		debug=bool(config.debug or debug),
		ignore=DEFAULT_IGNORE if ignore is None else ignore,
		alias=config.alias or alias or {},
	)


def select_entries(config: ConfigFile, entries: Optional[List[str]]) -> List[str]:
	if config.entries:
		return [config.entries] if isinstance(config.entries, str) else list(config.entries)
	return list(entries or [])


def configure_logging(debug: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if debug else logging.WARNING,
		format="[%(levelname)s] %(name)s: %(message)s",
		force=True,
	)

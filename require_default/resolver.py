from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional, Sequence

from .constants import BUILTIN_PREFIX, DEPENDENCY_DIR, NODE_BUILTINS, RESOLVE_EXTENSIONS
from .errors import UnresolvableSpecifierError


logger = logging.getLogger(__name__)


def _is_relative_request(request: str) -> bool:
	return request in (".", "..") or request.startswith(("./", "../"))


def _load_as_file(path: str) -> Optional[str]:
	if os.path.isfile(path):
		return path
	for ext in RESOLVE_EXTENSIONS:
		if os.path.isfile(path + ext):
			return path + ext
	return None


def _load_index(path: str) -> Optional[str]:
	for ext in RESOLVE_EXTENSIONS:
		candidate = os.path.join(path, "index" + ext)
		if os.path.isfile(candidate):
			return candidate
	return None


def _load_as_directory(path: str) -> Optional[str]:
	if not os.path.isdir(path):
		return None
	manifest = os.path.join(path, "package.json")
	if os.path.isfile(manifest):
		try:
			with open(manifest, "r", encoding="utf-8") as fh:
				data = json.load(fh)
		except ValueError as e:
			raise ModuleNotFoundError(f"Invalid package.json at {manifest}: {e}") from e
		main = data.get("main") if isinstance(data, dict) else None
		if isinstance(main, str) and main:
			target = os.path.join(path, main)
			found = _load_as_file(target) or _load_index(target)
			if found:
				return found
	return _load_index(path)


def node_modules_paths(start: str) -> List[str]:
	"""Every node_modules directory Node would search from ``start``, nearest first."""
	dirs: List[str] = []
	current = os.path.abspath(start)
	while True:
		if os.path.basename(current) != DEPENDENCY_DIR:
			dirs.append(os.path.join(current, DEPENDENCY_DIR))
		parent = os.path.dirname(current)
		if parent == current:
			return dirs
		current = parent


def require_resolve(request: str, paths: Sequence[str]) -> str:
	"""Resolve ``request`` the way ``require.resolve(request, {paths})`` does.

	Absolute and relative requests are tried as a file, then as a directory
	(``package.json`` main, then index). Bare requests are looked up in the
	node_modules directories above each search path. Returns the real path of
	the file found, or raises ModuleNotFoundError.
	"""
	if os.path.isabs(request):
		bases = [request]
	elif _is_relative_request(request):
		bases = [os.path.join(p, request) for p in paths]
	else:
		bases = [os.path.join(d, request) for p in paths for d in node_modules_paths(p)]

	for base in bases:
		found = _load_as_file(base) or _load_as_directory(base)
		if found:
			return os.path.realpath(found)
	raise ModuleNotFoundError(f"Cannot find module '{request}'")


def normalize_file_path(path: str) -> str:
	"""Canonical separators; relative paths keep an explicit ./ or ../ prefix."""
	normalized = os.path.normpath(path)
	if os.path.isabs(normalized) or normalized in (".", ".."):
		return normalized
	if normalized.startswith(("." + os.sep, ".." + os.sep)):
		return normalized
	return "." + os.sep + normalized


def _extension_rank(entry: str) -> tuple:
	ext = os.path.splitext(entry)[1]
	if ext in RESOLVE_EXTENSIONS:
		return (0, RESOLVE_EXTENSIONS.index(ext), entry)
	return (1, 0, entry)


def _find_entry(directory: str, name: str) -> Optional[str]:
	# Listing may fail for paths that are not directories; that only means no match.
	try:
		entries = os.listdir(directory)
	except OSError as e:
		logger.debug("Cannot list %s: %s", directory, e)
		return None
	matches = [e for e in entries if os.path.splitext(e)[0] == name and os.path.splitext(e)[1]]
	if not matches:
		return None
	return min(matches, key=_extension_rank)


class PathResolver:
	"""Turns a specifier plus the file containing it into an absolute file path."""

	def __init__(self, root: str, alias: Optional[Dict[str, str]] = None):
		self.root = os.path.abspath(root)
		self.alias: Dict[str, str] = dict(alias or {})

	def is_builtin(self, specifier: str) -> bool:
		if specifier.startswith(BUILTIN_PREFIX):
			return True
		return specifier.split("/", 1)[0] not in self.alias and specifier in NODE_BUILTINS

	def replace_alias(self, specifier: str) -> str:
		parts = specifier.split("/")
		first = parts[0]
		if first in (".", ".."):
			return specifier
		if first in self.alias:
			parts[0] = self.alias[first]
			return os.path.normpath(os.path.join(self.root, *parts))
		return specifier

	def base_dir(self, referencing_file: Optional[str] = None) -> str:
		if referencing_file:
			return os.path.dirname(os.path.abspath(referencing_file))
		return self.root

	def resolve(self, specifier: str, referencing_file: Optional[str] = None) -> str:
		if not specifier:
			raise UnresolvableSpecifierError(specifier, referencing_file, "empty specifier")

		path = specifier if os.path.isabs(specifier) else self.replace_alias(specifier)
		base_dir = self.base_dir(referencing_file)
		try:
			resolved = self._resolve_with_extension(path, base_dir)
		except ModuleNotFoundError as e:
			raise UnresolvableSpecifierError(specifier, referencing_file, str(e)) from e

		logger.debug("Resolved %s from %s to %s", specifier, referencing_file or self.root, resolved)
		return resolved

	def _resolve_with_extension(self, path: str, base_dir: str) -> str:
		# Check the disk first; require_resolve only tries a fixed extension list.
		if os.path.splitext(os.path.basename(path))[1]:
			return require_resolve(path, [base_dir])

		full_path = path if os.path.isabs(path) else os.path.join(base_dir, path)

		dir_name = os.path.dirname(full_path)
		sibling = _find_entry(dir_name, os.path.basename(full_path))
		if sibling:
			return require_resolve(normalize_file_path(os.path.join(dir_name, sibling)), [base_dir])

		index_file = _find_entry(full_path, "index")
		if index_file:
			return require_resolve(normalize_file_path(os.path.join(path, index_file)), [base_dir])

		return require_resolve(path, [base_dir])

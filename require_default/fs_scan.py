from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Pattern, Union

from .constants import ALWAYS_IGNORE, ASSET_EXTENSIONS, DEPENDENCY_DIR, PARSEABLE_EXTENSIONS
from .errors import ValidationError
from .model import Options, QueueItem
from .work_queue import WorkQueue

if TYPE_CHECKING:
	from .analyzer import Analyzer


logger = logging.getLogger(__name__)


def build_ignore_pattern(ignore: str) -> Pattern[str]:
	terms = [rf"(?:^|[\\/]){re.escape(name)}(?:[\\/]|$)" for name in ALWAYS_IGNORE]
	if ignore:
		terms.insert(0, f"(?:{ignore})")
	try:
		return re.compile("|".join(terms))
	except re.error as e:
		raise ValidationError(f"Invalid ignore pattern {ignore!r}: {e}") from e


def in_dependency_dir(path: str) -> bool:
	return DEPENDENCY_DIR in re.split(r"[\\/]", path)


class Scanner:
	"""Decides which files get analyzed and walks directory trees for them."""

	def __init__(self, options: Options):
		self.root = os.path.abspath(options.root)
		self.ignore_pattern = build_ignore_pattern(options.ignore)

	def is_ignored(self, path: str) -> bool:
		return self.ignore_pattern.search(os.path.relpath(path, self.root)) is not None

	def is_parseable(self, path: str) -> bool:
		return os.path.splitext(path)[1] in PARSEABLE_EXTENSIONS

	def qualifies(self, path: str) -> bool:
		return self.is_parseable(path) and not self.is_ignored(path)

	def accepts_edge(self, specifier: str, parent: Optional[str]) -> bool:
		ext = os.path.splitext(specifier.rsplit("/", 1)[-1])[1]
		if ext.lower() in ASSET_EXTENSIONS:
			return False
		return not (parent and in_dependency_dir(parent))

	def walk(self, root: Optional[str] = None) -> Iterator[str]:
		"""Yield every qualifying file under ``root``, breadth first, lazily."""
		pending: WorkQueue[str] = WorkQueue()
		pending.enqueue(root or self.root)
		while not pending.is_empty():
			directory = pending.dequeue()
			with os.scandir(directory) as it:
				entries = sorted(it, key=lambda e: e.name)
			for entry in entries:
				if entry.is_dir(follow_symlinks=False):
					if self.is_ignored(entry.path):
						logger.debug("Skipping ignored directory %s", entry.path)
						continue
					pending.enqueue(entry.path)
				elif entry.is_file() and self.qualifies(entry.path):
					yield entry.path


class DirectorySeed:
	"""Analyze every parseable file below a root directory."""

	discovers_edges = False

	def __init__(self, root: Optional[str] = None):
		self.root = root

	def files(self, analyzer: "Analyzer") -> Iterator[str]:
		return analyzer.scanner.walk(self.root)


class EntrySeed:
	"""Start from explicit entry files and follow import/require edges."""

	discovers_edges = True

	def __init__(self, entries: Union[str, Iterable[str]]):
		self.entries: List[str] = [entries] if isinstance(entries, str) else list(entries)

	def files(self, analyzer: "Analyzer") -> Iterator[str]:
		for entry in self.entries:
			analyzer.queue.enqueue(QueueItem(file_path=os.path.join(analyzer.options.root, entry)))

		while not analyzer.queue.is_empty():
			item = analyzer.queue.dequeue()
			resolved = analyzer.resolver.resolve(item.file_path, item.parent)
			if resolved in analyzer.visited:
				continue
			if not analyzer.scanner.qualifies(resolved):
				logger.debug("Not analyzing %s", resolved)
				continue
			yield resolved


Seed = Union[DirectorySeed, EntrySeed]

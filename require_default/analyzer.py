from __future__ import annotations

import logging
import os
import time
from typing import Optional, Set

from tree_sitter import Node

from .ast_parse import (
	is_bound_to_identifier,
	is_default_export,
	location,
	parse,
	require_specifier,
	source_specifier,
	visit,
)
from .errors import ValidationError
from .fs_scan import DirectorySeed, Scanner, Seed
from .model import AnalysisReport, CallerRef, Options, QueueItem
from .registry import ModuleRegistry
from .resolver import PathResolver
from .summarize import build_report
from .work_queue import WorkQueue


logger = logging.getLogger(__name__)


class _ModuleVisitor:
	def __init__(self, analyzer: "Analyzer", path: str, source: bytes):
		self.analyzer = analyzer
		self.path = path
		self.source = source

	def on_export_statement(self, node: Node) -> None:
		if is_default_export(node):
			self.analyzer.registry.record_default_export(self.path)
		specifier = source_specifier(node)
		if specifier is not None:
			self.analyzer.push_edge(specifier, self.path)

	def on_import_statement(self, node: Node) -> None:
		specifier = source_specifier(node)
		if specifier is not None:
			self.analyzer.push_edge(specifier, self.path)

	def on_import_require_clause(self, node: Node) -> None:
		specifier = source_specifier(node)
		if specifier is not None:
			self.analyzer.push_edge(specifier, self.path)

	def on_call_expression(self, node: Node) -> None:
		specifier = require_specifier(node)
		if specifier is None:
			return
		self.analyzer.push_edge(specifier, self.path)

		# require('m').default, const { a } = require('m') and the like pick a
		# property explicitly and are safe.
		if not is_bound_to_identifier(node):
			return
		if self.analyzer.resolver.is_builtin(specifier):
			return
		resolved = self.analyzer.resolver.resolve(specifier, self.path)
		line, column = location(node, self.source)
		self.analyzer.registry.record_unsafe_require(resolved, CallerRef(path=self.path, line=line, column=column))


class Analyzer:
	"""Finds ES modules with a default export that are pulled in through require()."""

	def __init__(
		self,
		options: Options,
		resolver: Optional[PathResolver] = None,
		registry: Optional[ModuleRegistry] = None,
		scanner: Optional[Scanner] = None,
	):
		self.options = options.model_copy(update={"root": os.path.realpath(options.root)})
		self.resolver = resolver or PathResolver(self.options.root, self.options.alias)
		self.registry = registry or ModuleRegistry()
		self.scanner = scanner or Scanner(self.options)
		self.queue: WorkQueue[QueueItem] = WorkQueue()
		self.visited: Set[str] = set()
		self.discover_edges = False

	def validate(self) -> None:
		if not os.path.isdir(self.options.root):
			raise ValidationError(f"Couldn't find root directory {self.options.root}")

	def execute(self, seed: Optional[Seed] = None) -> AnalysisReport:
		self.validate()
		seed = seed or DirectorySeed()
		self.discover_edges = seed.discovers_edges

		start = time.perf_counter()
		for path in seed.files(self):
			self.analyze(path)
		elapsed_ms = (time.perf_counter() - start) * 1000

		return build_report(self.options.root, self.registry, len(self.visited), elapsed_ms)

	def analyze(self, path: str) -> None:
		path = os.path.realpath(path)
		if path in self.visited:
			logger.debug("Already analyzed %s", path)
			return

		with open(path, "rb") as fh:
			source = fh.read()
		tree = parse(source, path)

		self.visited.add(path)
		self.registry.touch(path)
		logger.debug("Analyzing %s", path)
		visit(tree, _ModuleVisitor(self, path, source))

	def push_edge(self, specifier: str, parent: str) -> None:
		if not self.discover_edges or self.resolver.is_builtin(specifier):
			return
		if not self.scanner.accepts_edge(specifier, parent):
			logger.debug("Not following %s from %s", specifier, parent)
			return
		self.queue.enqueue(QueueItem(file_path=specifier, parent=parent))

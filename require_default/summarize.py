from __future__ import annotations

import os
from typing import Iterable, List, Tuple

from .model import AnalysisReport, ModuleRecord, SuspiciousModule
from .registry import ModuleRegistry


def find_suspicious(snapshot: Iterable[Tuple[str, ModuleRecord]]) -> List[SuspiciousModule]:
	return [
		SuspiciousModule(path=path, callers=record.callers)
		for path, record in snapshot
		if record.has_default_export and record.callers
	]


def build_report(root: str, registry: ModuleRegistry, analyzed_modules: int, elapsed_ms: float) -> AnalysisReport:
	return AnalysisReport(
		root=root,
		analyzed_modules=analyzed_modules,
		elapsed_ms=elapsed_ms,
		suspicious=find_suspicious(registry.snapshot()),
	)


def format_elapsed(ms: float) -> str:
	if ms < 1000:
		return f"{ms:.0f}ms"
	seconds = ms / 1000
	if seconds < 60:
		return f"{seconds:.1f}s"
	minutes, seconds = divmod(int(seconds), 60)
	return f"{minutes}m {seconds}s"


def display_path(path: str, root: str) -> str:
	prefix = root.rstrip(os.sep) + os.sep
	return path[len(prefix):] if path.startswith(prefix) else path


def summarize_module(module: SuspiciousModule, root: str) -> str:
	callers = ", ".join(display_path(c.location(), root) for c in module.callers)
	return f"  - {display_path(module.path, root)} is required by {callers}"


def format_report(report: AnalysisReport) -> List[str]:
	lines = [
		f"Analyzed {report.analyzed_modules} modules in {format_elapsed(report.elapsed_ms)}",
		"",
	]
	if not report.suspicious:
		lines.append('Found 0 ES modules that are being "require"d without specifying "default"')
		return lines
	lines.append(
		f'Found {len(report.suspicious)} ES modules that are being "require"d without specifying "default":'
	)
	lines.extend(summarize_module(m, report.root) for m in report.suspicious)
	return lines

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .model import CallerRef, ModuleRecord


class ModuleRegistry:
	"""Facts gathered about each module, keyed by resolved path.

	A record may be created by whichever fact arrives first: the visit of the
	file, its default export, or an unsafe require pointing at it. Later facts
	fill in the same record, so the final state does not depend on discovery
	order. Nothing is ever removed.
	"""

	def __init__(self):
		self._records: Dict[str, ModuleRecord] = {}

	def _get_or_create(self, path: str) -> ModuleRecord:
		record = self._records.get(path)
		if record is None:
			record = ModuleRecord()
			self._records[path] = record
		return record

	def touch(self, path: str) -> None:
		self._get_or_create(path)

	def record_default_export(self, path: str) -> None:
		self._get_or_create(path).has_default_export = True

	def record_unsafe_require(self, path: str, caller: CallerRef) -> None:
		self._get_or_create(path).callers.append(caller)

	def get(self, path: str) -> Optional[ModuleRecord]:
		record = self._records.get(path)
		return record.model_copy(deep=True) if record is not None else None

	def snapshot(self) -> List[Tuple[str, ModuleRecord]]:
		"""Copies of all records, in the order their paths were first seen."""
		return [(path, record.model_copy(deep=True)) for path, record in self._records.items()]

	def __contains__(self, path: object) -> bool:
		return path in self._records

	def __len__(self) -> int:
		return len(self._records)

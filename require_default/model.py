from __future__ import annotations

import os
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_IGNORE


class Options(BaseModel):
	model_config = ConfigDict(extra="forbid")

	alias: Dict[str, str] = {}
	debug: bool = False
	ignore: str = DEFAULT_IGNORE
	root: str = Field(default_factory=os.getcwd)


class ConfigFile(Options):
	root: Optional[str] = None
	debug: Optional[bool] = None
	ignore: Optional[str] = None
	alias: Optional[Dict[str, str]] = None
	entries: Optional[Union[str, List[str]]] = None


class QueueItem(BaseModel):
	file_path: str
	parent: Optional[str] = None


class CallerRef(BaseModel):
	path: str
	line: Optional[int] = None
	column: Optional[int] = None

	def location(self) -> str:
		if self.line is None:
			return self.path
		return f"{self.path}:{self.line}:{self.column}"


class ModuleRecord(BaseModel):
	has_default_export: bool = False
	callers: List[CallerRef] = []


class SuspiciousModule(BaseModel):
	path: str
	callers: List[CallerRef]


class AnalysisReport(BaseModel):
	root: str
	analyzed_modules: int
	elapsed_ms: float
	suspicious: List[SuspiciousModule] = []

from __future__ import annotations

from typing import Optional


class AnalysisError(Exception):
	"""Base class for every error that aborts a run."""


class ValidationError(AnalysisError):
	pass


class ParseError(AnalysisError):
	def __init__(self, path: str, message: str, line: Optional[int] = None, column: Optional[int] = None):
		self.path = path
		self.line = line
		self.column = column
		location = f":{line}:{column}" if line is not None else ""
		super().__init__(f"Error while parsing {path}{location}: {message}")


class UnresolvableSpecifierError(AnalysisError):
	def __init__(self, specifier: str, referencing_file: Optional[str] = None, reason: str = ""):
		self.specifier = specifier
		self.referencing_file = referencing_file
		message = f"Couldn't resolve path to module {specifier}"
		if referencing_file:
			message += f" (required by {referencing_file})"
		if reason:
			message += f": {reason}"
		super().__init__(message)

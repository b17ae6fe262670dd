from require_default.model import AnalysisReport, CallerRef, ModuleRecord, SuspiciousModule
from require_default.summarize import display_path, find_suspicious, format_elapsed, format_report


def test_find_suspicious_needs_default_and_caller():
	caller = CallerRef(path="/p/c.js", line=1, column=11)
	snapshot = [
		("/p/a.js", ModuleRecord()),
		("/p/b.js", ModuleRecord(has_default_export=True, callers=[caller])),
		("/p/d.js", ModuleRecord(has_default_export=True)),
		("/p/e.js", ModuleRecord(callers=[caller])),
	]
	assert find_suspicious(snapshot) == [SuspiciousModule(path="/p/b.js", callers=[caller])]


def test_format_elapsed():
	assert format_elapsed(42.4) == "42ms"
	assert format_elapsed(1500) == "1.5s"
	assert format_elapsed(125000) == "2m 5s"


def test_display_path():
	assert display_path("/p/src/a.js", "/p") == "src/a.js"
	assert display_path("/other/a.js", "/p") == "/other/a.js"


def test_format_report_without_findings():
	report = AnalysisReport(root="/p", analyzed_modules=3, elapsed_ms=12)
	assert format_report(report) == [
		"Analyzed 3 modules in 12ms",
		"",
		'Found 0 ES modules that are being "require"d without specifying "default"',
	]


def test_format_report_lists_callers():
	report = AnalysisReport(
		root="/p",
		analyzed_modules=3,
		elapsed_ms=12,
		suspicious=[
			SuspiciousModule(
				path="/p/b.js",
				callers=[
					CallerRef(path="/p/c.js", line=1, column=11),
					CallerRef(path="/p/lib/d.js"),
				],
			)
		],
	)
	lines = format_report(report)
	assert lines[2] == 'Found 1 ES modules that are being "require"d without specifying "default":'
	assert lines[3] == "  - b.js is required by c.js:1:11, lib/d.js"

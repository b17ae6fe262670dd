"""Find ES modules with a default export that are consumed through require().

Modules:
- resolver.py: Node-style module resolution with aliases, extension and index fallback.
- work_queue.py: FIFO queue driving file discovery.
- registry.py: Per-module facts (default export, unsafe callers) merged by path.
- ast_parse.py: tree-sitter parsing of JS/JSX/TS and node visitor dispatch.
- fs_scan.py: Directory walking, ignore rules and seed strategies.
- analyzer.py: Per-file inspection and the run loop.
- summarize.py: Filtering and formatting of the final report.
- config.py: Configuration file loading and logging setup.
- model.py: Data structures for options, records and reports.
"""

__all__ = [
	"resolver",
	"work_queue",
	"registry",
	"ast_parse",
	"fs_scan",
	"analyzer",
	"summarize",
	"config",
	"model",
]

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import uvicorn

from require_default.analyzer import Analyzer
from require_default.config import (
	build_options,
	configure_logging,
	load_config_file,
	parse_alias_args,
	select_entries,
)
from require_default.errors import AnalysisError
from require_default.fs_scan import DirectorySeed, EntrySeed
from require_default.model import ConfigFile
from require_default.summarize import format_report


def cmd_analyze(args: argparse.Namespace) -> int:
	try:
		config = load_config_file(args.config) if args.config else ConfigFile()
		options = build_options(
			config,
			root=args.root,
			debug=args.debug,
			ignore=args.ignore,
			alias=parse_alias_args(args.alias),
		)
		configure_logging(options.debug)
		entries = select_entries(config, args.entries)
		seed = EntrySeed(entries) if entries else DirectorySeed()
		report = Analyzer(options).execute(seed)
	except (AnalysisError, OSError) as e:
		print(e, file=sys.stderr)
		return 1

	if args.json:
		print(report.model_dump_json(indent=2))
	else:
		print("\n".join(format_report(report)))
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="analyze-require-default")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser(
		"analyze",
		help="Report ES modules with a default export that are require()d without .default",
		epilog="Example: analyze-require-default analyze ./a.js ./b.js",
	)
	pa.add_argument("entries", nargs="*", help="Entry files; the whole root is scanned when omitted")
	pa.add_argument("-r", "--root", help="The project's root (default: current directory)")
	pa.add_argument("-d", "--debug", action="store_true", help="Output extra debugging information")
	pa.add_argument("-c", "--config", help="The path to a JSON configuration file")
	pa.add_argument("-i", "--ignore", help="Regular expression of paths to skip (default: node_modules)")
	pa.add_argument(
		"-a",
		"--alias",
		action="append",
		metavar="KEY=PATH",
		help="Replace a leading path segment, relative to the root (repeatable)",
	)
	pa.add_argument("--json", action="store_true", help="Print the report as JSON")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run the HTTP API")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())

from __future__ import annotations

from typing import FrozenSet, Tuple


PARSEABLE_EXTENSIONS: FrozenSet[str] = frozenset({".ts", ".js", ".jsx"})

DEFAULT_IGNORE = "node_modules"

# Path segments that are never scanned, whatever the ignore option says.
ALWAYS_IGNORE: Tuple[str, ...] = (".git", ".vscode", ".idea")

DEPENDENCY_DIR = "node_modules"

# Extensions tried by require_resolve when a request names no existing file.
# Node's own list first, then the ones ts-node / babel-register add.
RESOLVE_EXTENSIONS: Tuple[str, ...] = (".js", ".json", ".node", ".jsx", ".ts", ".tsx")

BUILTIN_PREFIX = "node:"

NODE_BUILTINS: FrozenSet[str] = frozenset(
	{
		"assert",
		"async_hooks",
		"buffer",
		"child_process",
		"cluster",
		"console",
		"constants",
		"crypto",
		"dgram",
		"diagnostics_channel",
		"dns",
		"domain",
		"events",
		"fs",
		"http",
		"http2",
		"https",
		"inspector",
		"module",
		"net",
		"os",
		"path",
		"perf_hooks",
		"process",
		"punycode",
		"querystring",
		"readline",
		"repl",
		"stream",
		"string_decoder",
		"sys",
		"timers",
		"tls",
		"trace_events",
		"tty",
		"url",
		"util",
		"v8",
		"vm",
		"wasi",
		"worker_threads",
		"zlib",
		"assert/strict",
		"dns/promises",
		"fs/promises",
		"path/posix",
		"path/win32",
		"readline/promises",
		"stream/consumers",
		"stream/promises",
		"stream/web",
		"timers/promises",
		"util/types",
	}
)

# Imports of these are never followed; anything else with a dotted name is
# resolved first and filtered on the file it lands on.
ASSET_EXTENSIONS: FrozenSet[str] = frozenset(
	{
		".css",
		".scss",
		".sass",
		".less",
		".styl",
		".html",
		".svg",
		".png",
		".jpg",
		".jpeg",
		".gif",
		".webp",
		".avif",
		".ico",
		".bmp",
		".woff",
		".woff2",
		".ttf",
		".otf",
		".eot",
		".mp3",
		".mp4",
		".webm",
		".wav",
		".json",
		".node",
		".wasm",
		".txt",
		".md",
		".yaml",
		".yml",
		".graphql",
		".gql",
		".vue",
		".svelte",
	}
)

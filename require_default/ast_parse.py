from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError


JAVASCRIPT_LANGUAGE = Language(tsjavascript.language())
TYPESCRIPT_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())

# Plain .js/.jsx go through the JavaScript grammar, which handles JSX and
# accepts TypeScript contextual keywords (`as`, `abstract`) as identifiers.
_GRAMMARS: Dict[str, str] = {
	".ts": "typescript",
	".mts": "typescript",
	".cts": "typescript",
	".tsx": "tsx",
}

_LANGUAGES: Dict[str, Language] = {
	"javascript": JAVASCRIPT_LANGUAGE,
	"typescript": TYPESCRIPT_LANGUAGE,
	"tsx": TSX_LANGUAGE,
}

_parsers: Dict[str, Parser] = {}


def _parser_for(path: str) -> Parser:
	grammar = _GRAMMARS.get(os.path.splitext(path)[1].lower(), "javascript")
	parser = _parsers.get(grammar)
	if parser is None:
		parser = Parser(_LANGUAGES[grammar])
		_parsers[grammar] = parser
	return parser


def _first_error(node: Node) -> Node:
	stack = [node]
	while stack:
		current = stack.pop()
		if current.type == "ERROR" or current.is_missing:
			return current
		stack.extend(reversed([c for c in current.children if c.has_error or c.is_missing]))
	return node


def location(node: Node, source: bytes) -> Tuple[int, int]:
	"""1-based (line, column) of the start of ``node``, the column counted in characters."""
	line_start = source.rfind(b"\n", 0, node.start_byte) + 1
	column = len(source[line_start:node.start_byte].decode("utf-8", errors="replace"))
	return node.start_point[0] + 1, column + 1


def parse(source: bytes, path: str) -> Tree:
	tree = _parser_for(path).parse(source)
	if tree.root_node.has_error:
		bad = _first_error(tree.root_node)
		line, column = location(bad, source)
		message = f"missing {bad.type}" if bad.is_missing else "unexpected syntax"
		raise ParseError(path, message, line, column)
	return tree


def visit(tree: Tree, visitor: object) -> None:
	"""Pre-order walk calling ``visitor.on_<node type>(node)`` for each named node."""
	stack: List[Node] = [tree.root_node]
	while stack:
		node = stack.pop()
		handler = getattr(visitor, f"on_{node.type}", None)
		if handler is not None:
			handler(node)
		stack.extend(reversed(node.named_children))


def node_text(node: Node) -> str:
	return node.text.decode("utf-8")


def string_value(node: Optional[Node]) -> Optional[str]:
	# Template literals are skipped even without substitutions.
	if node is None or node.type != "string":
		return None
	return node_text(node)[1:-1]


def require_specifier(call: Node) -> Optional[str]:
	"""The literal argument of ``require('<specifier>')``, else None."""
	callee = call.child_by_field_name("function")
	if callee is None or callee.type != "identifier" or node_text(callee) != "require":
		return None
	arguments = call.child_by_field_name("arguments")
	if arguments is None or not arguments.named_children:
		return None
	return string_value(arguments.named_children[0])


def is_bound_to_identifier(node: Node) -> bool:
	"""True for ``const x = <node>``: the whole initializer, bound to a plain name."""
	child = node
	parent = node.parent
	while parent is not None and parent.type == "parenthesized_expression":
		child = parent
		parent = parent.parent
	if parent is None or parent.type != "variable_declarator":
		return False
	name = parent.child_by_field_name("name")
	value = parent.child_by_field_name("value")
	return name is not None and name.type == "identifier" and value is not None and value.id == child.id


def is_default_export(export: Node) -> bool:
	"""``export default ...``, or an export clause naming ``default``."""
	for child in export.children:
		if child.type == "default":
			return True
		if child.type == "export_clause":
			for specifier in child.named_children:
				if specifier.type != "export_specifier":
					continue
				exported = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
				if exported is not None and node_text(exported) == "default":
					return True
	return False


def source_specifier(statement: Node) -> Optional[str]:
	"""The ``from '<specifier>'`` part of an import or re-export, if any."""
	return string_value(statement.child_by_field_name("source"))

"""Thin wrapper around tree-sitter's Rust grammar.

Everything above this module works on tree-sitter nodes; nothing here knows
about modules or entities.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import tree_sitter
import tree_sitter_rust

from .errors import RustSyntaxError

logger = logging.getLogger(__name__)

RUST = tree_sitter.Language(tree_sitter_rust.language())

PATH_NODES = frozenset(
	{
		"identifier",
		"type_identifier",
		"primitive_type",
		"scoped_identifier",
		"scoped_type_identifier",
		"crate",
		"self",
		"super",
		"metavariable",
	}
)


def node_text(node: Optional[tree_sitter.Node]) -> str:
	if node is None or node.text is None:
		return ""
	return node.text.decode("utf-8")


def path_segments(node: Optional[tree_sitter.Node]) -> List[str]:
	"""Split a (possibly scoped) path node into its `::` segments."""
	if node is None:
		return []
	if node.type in ("scoped_identifier", "scoped_type_identifier"):
		head = path_segments(node.child_by_field_name("path"))
		return head + [node_text(node.child_by_field_name("name"))]
	return [node_text(node)]


def _first_error(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def parse_source(text: str, path: Path) -> tree_sitter.Node:
	"""Parse Rust source and return the `source_file` node.

	tree-sitter always produces a tree; any error or missing node is turned
	into a RustSyntaxError so callers can skip the file.
	"""
	parser = tree_sitter.Parser(RUST)
	tree = parser.parse(text.encode("utf-8"))
	root = tree.root_node
	if root.has_error:
		bad = _first_error(root) or root
		raise RustSyntaxError(path, bad.start_point[0] + 1)
	return root


def parse_file(path: Path) -> tree_sitter.Node:
	"""Parse one source file; undecodable bytes are reported like a syntax error."""
	logger.debug("Parsing %s", path)
	try:
		text = path.read_text(encoding="utf-8")
	except UnicodeDecodeError as e:
		raise RustSyntaxError(path, e.object[: e.start].count(b"\n") + 1) from e
	return parse_source(text, path)

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import tree_sitter

from .syntax import PATH_NODES, node_text, path_segments

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "::"
ROOT_SEGMENT = "crate"
PARENT_SEGMENT = "super"
SELF_SEGMENT = "self"


def collapse_path(path: str) -> str:
	"""Strip a leading `crate` and fold each `super` into the segment before it.

	Folding is textual and left to right: "a::b::super::c" becomes "a::c".
	A `super` with nothing left to fold against is dropped, so "super::c"
	becomes "c". `self` segments are dropped.
	"""
	segments = [segment for segment in path.split(PATH_SEPARATOR) if segment]
	if segments and segments[0] == ROOT_SEGMENT:
		segments = segments[1:]
	collapsed: List[str] = []
	for segment in segments:
		if segment == PARENT_SEGMENT:
			if collapsed:
				collapsed.pop()
		elif segment != SELF_SEGMENT:
			collapsed.append(segment)
	return PATH_SEPARATOR.join(collapsed)


def qualify_path(segments: List[str], module_path: str) -> str:
	"""Turn a use-path into a crate-relative path as seen from `module_path`."""
	if segments and segments[0] in (PARENT_SEGMENT, SELF_SEGMENT) and module_path:
		segments = module_path.split(PATH_SEPARATOR) + segments
	return collapse_path(PATH_SEPARATOR.join(segments))


def _bind(segments: List[str], alias: Optional[str], module_path: str, imports: Dict[str, str]) -> None:
	# `use a::b::{self}` binds `b`
	if segments and segments[-1] == SELF_SEGMENT:
		segments = segments[:-1]
	if not segments:
		return
	local = alias or segments[-1]
	if local == "_":
		return
	imports[local] = qualify_path(segments, module_path)


def _walk(node: Optional[tree_sitter.Node], prefix: List[str], module_path: str, imports: Dict[str, str]) -> None:
	if node is None:
		return
	kind = node.type
	if kind == "use_as_clause":
		segments = prefix + path_segments(node.child_by_field_name("path"))
		_bind(segments, node_text(node.child_by_field_name("alias")), module_path, imports)
	elif kind == "use_list":
		for child in node.named_children:
			_walk(child, prefix, module_path, imports)
	elif kind == "scoped_use_list":
		shared = prefix + path_segments(node.child_by_field_name("path"))
		_walk(node.child_by_field_name("list"), shared, module_path, imports)
	elif kind == "use_wildcard":
		logger.debug("Wildcard import %s left unresolved", node_text(node))
	elif kind in PATH_NODES:
		_bind(prefix + path_segments(node), None, module_path, imports)


def collect_imports(node: tree_sitter.Node, module_path: str, imports: Dict[str, str]) -> None:
	"""Add the aliases declared by one `use_declaration` to `imports`."""
	_walk(node.child_by_field_name("argument"), [], module_path, imports)

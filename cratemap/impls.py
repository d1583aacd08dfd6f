from __future__ import annotations

import logging

import tree_sitter

from .extract import build_function
from .model import Module
from .syntax import node_text, path_segments

logger = logging.getLogger(__name__)

# `impl Foo` and `impl a::Foo`; generic and trait-object targets are not bound.
SIMPLE_TARGETS = ("type_identifier", "scoped_type_identifier")


def bind_impl(module: Module, node: tree_sitter.Node) -> int:
	"""Attach the functions of one `impl_item` to a struct of `module`.

	Returns the number of methods bound. Blocks whose target cannot be bound
	are logged and dropped.
	"""
	target = node.child_by_field_name("type")
	if target is None or target.type not in SIMPLE_TARGETS:
		logger.warning("Unsupported impl target %r in module %s, skipping", node_text(target), module.path or module.name)
		return 0

	name = path_segments(target)[-1]
	struct = module.entities.get(name)
	if struct is None or struct.kind != "struct":
		logger.warning("Struct not found for impl %s in module %s", name, module.path or module.name)
		return 0

	bound = 0
	body = node.child_by_field_name("body")
	if body is not None:
		for item in body.named_children:
			if item.type != "function_item":
				continue
			method = build_function(item)
			struct.methods[method.name] = method
			bound += 1
	return bound

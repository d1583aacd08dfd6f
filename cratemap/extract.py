from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import tree_sitter

from .model import Constant, Entity, Enum, Field, Function, Macro, Module, Struct, Trait, TypeAlias
from .syntax import node_text
from .typenames import type_from_node

logger = logging.getLogger(__name__)

# Top-level nodes that carry nothing worth a note.
IGNORED_ITEMS = frozenset(
	{
		"attribute_item",
		"inner_attribute_item",
		"line_comment",
		"block_comment",
		"empty_statement",
		"extern_crate_declaration",
		"shebang",
	}
)


def _name(node: tree_sitter.Node) -> str:
	return node_text(node.child_by_field_name("name"))


def _fields(body: Optional[tree_sitter.Node]) -> List[Field]:
	fields: List[Field] = []
	if body is None:
		return fields
	if body.type == "field_declaration_list":
		for decl in body.named_children:
			if decl.type == "field_declaration":
				fields.append(Field(name=_name(decl), type=type_from_node(decl.child_by_field_name("type"))))
	elif body.type == "ordered_field_declaration_list":
		for type_node in body.children_by_field_name("type"):
			fields.append(Field(name="", type=type_from_node(type_node)))
	return fields


def build_function(node: tree_sitter.Node) -> Function:
	"""Build a Function from a `function_item` or `function_signature_item`.

	The receiver (`self`, `&self`, `self: Box<Self>`) is not an argument.
	"""
	args: List[Field] = []
	parameters = node.child_by_field_name("parameters")
	if parameters is not None:
		for param in parameters.named_children:
			if param.type != "parameter":
				continue
			pattern = param.child_by_field_name("pattern")
			if pattern is not None and pattern.type == "self":
				continue
			# Destructuring patterns keep their source text as the name
			args.append(Field(name=node_text(pattern), type=type_from_node(param.child_by_field_name("type"))))
	return Function(name=_name(node), args=args)


def _struct(node: tree_sitter.Node) -> Struct:
	return Struct(name=_name(node), fields=_fields(node.child_by_field_name("body")))


def _enum(node: tree_sitter.Node) -> Enum:
	variants: List[str] = []
	body = node.child_by_field_name("body")
	if body is not None:
		variants = [_name(v) for v in body.named_children if v.type == "enum_variant"]
	return Enum(name=_name(node), variants=variants)


def _trait(node: tree_sitter.Node) -> Trait:
	trait = Trait(name=_name(node))
	body = node.child_by_field_name("body")
	if body is not None:
		for child in body.named_children:
			if child.type in ("function_signature_item", "function_item"):
				method = build_function(child)
				trait.methods[method.name] = method
	return trait


def _constant(node: tree_sitter.Node) -> Constant:
	return Constant(
		name=_name(node),
		type=type_from_node(node.child_by_field_name("type")),
		value=node_text(node.child_by_field_name("value")),
	)


def _macro_invocation(node: tree_sitter.Node) -> Macro:
	tokens = ""
	for child in node.named_children:
		if child.type == "token_tree":
			tokens = node_text(child)
	return Macro(name=node_text(node.child_by_field_name("macro")), tokens=tokens)


def _macro_definition(node: tree_sitter.Node) -> Macro:
	rules = [node_text(child) for child in node.named_children if child.type == "macro_rule"]
	return Macro(name=_name(node), tokens="\n".join(rules))


def _type_alias(node: tree_sitter.Node) -> TypeAlias:
	return TypeAlias(name=_name(node), type=type_from_node(node.child_by_field_name("type")))


ENTITY_BUILDERS: Dict[str, Callable[[tree_sitter.Node], Entity]] = {
	"struct_item": _struct,
	"enum_item": _enum,
	"trait_item": _trait,
	"function_item": build_function,
	"const_item": _constant,
	"static_item": _constant,
	"macro_invocation": _macro_invocation,
	"macro_definition": _macro_definition,
	"type_item": _type_alias,
}


def unwrap_item(node: tree_sitter.Node) -> tree_sitter.Node:
	"""`foo!(...);` at the top level may arrive wrapped in an expression statement."""
	if node.type == "expression_statement" and node.named_child_count == 1:
		return node.named_children[0]
	return node


def add_entity(module: Module, node: tree_sitter.Node) -> Optional[Entity]:
	"""Record one top-level declaration in `module`, replacing any same-named entity."""
	node = unwrap_item(node)
	if node.type in IGNORED_ITEMS:
		return None
	builder = ENTITY_BUILDERS.get(node.type)
	if builder is None:
		logger.warning(
			"Unsupported item %s in module %s (line %d), skipping",
			node.type,
			module.path or module.name,
			node.start_point[0] + 1,
		)
		return None
	entity = builder(node)
	module.entities[entity.name] = entity
	return entity

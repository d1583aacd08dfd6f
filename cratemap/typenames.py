from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional

import tree_sitter

from .model import ArrayType, PathType, ReferenceType, TupleType, TypeRef, UnknownType
from .syntax import PATH_NODES, node_text, path_segments

UNKNOWN = "unknown"

PRIMITIVE_TYPES = frozenset(
	{
		"bool",
		"char",
		"str",
		"i8",
		"i16",
		"i32",
		"i64",
		"i128",
		"isize",
		"u8",
		"u16",
		"u32",
		"u64",
		"u128",
		"usize",
		"f32",
		"f64",
	}
)


def is_primitive(type_name: str) -> bool:
	return type_name in PRIMITIVE_TYPES


def _generic_type(node: tree_sitter.Node) -> TypeRef:
	generics: List[TypeRef] = []
	arguments = node.child_by_field_name("type_arguments")
	if arguments is not None:
		for arg in arguments.named_children:
			# Lifetimes are not types
			if arg.type == "lifetime":
				continue
			generics.append(type_from_node(arg))
	return PathType(segments=path_segments(node.child_by_field_name("type")), generics=generics)


def _reference_type(node: tree_sitter.Node) -> TypeRef:
	lifetime: Optional[str] = None
	mutable = False
	for child in node.named_children:
		if child.type == "lifetime":
			lifetime = node_text(child)
		elif child.type == "mutable_specifier":
			mutable = True
	return ReferenceType(
		lifetime=lifetime,
		mutable=mutable,
		inner=type_from_node(node.child_by_field_name("type")),
	)


def _array_type(node: tree_sitter.Node) -> TypeRef:
	return ArrayType(element=type_from_node(node.child_by_field_name("element")))


def _tuple_type(node: tree_sitter.Node) -> TypeRef:
	return TupleType(elements=[type_from_node(child) for child in node.named_children])


_TYPE_BUILDERS: Dict[str, Callable[[tree_sitter.Node], TypeRef]] = {
	"generic_type": _generic_type,
	"reference_type": _reference_type,
	"array_type": _array_type,
	"tuple_type": _tuple_type,
}


def type_from_node(node: Optional[tree_sitter.Node]) -> TypeRef:
	"""Capture a type node as an unresolved TypeRef."""
	if node is None:
		return UnknownType()
	if node.type in PATH_NODES:
		return PathType(segments=path_segments(node))
	builder = _TYPE_BUILDERS.get(node.type)
	if builder is None:
		return UnknownType()
	return builder(node)


def _resolve_path(type_ref: PathType, imports: Mapping[str, str]) -> str:
	if not type_ref.segments:
		return UNKNOWN
	first, *rest = type_ref.segments
	name = "::".join([imports.get(first, first), *rest])
	if type_ref.generics:
		args = ", ".join(resolve_type_name(arg, imports) for arg in type_ref.generics)
		name = f"{name}<{args}>"
	return name


def _resolve_reference(type_ref: ReferenceType, imports: Mapping[str, str]) -> str:
	prefix = "&"
	if type_ref.lifetime:
		prefix += f"{type_ref.lifetime} "
	if type_ref.mutable:
		prefix += "mut "
	return prefix + resolve_type_name(type_ref.inner, imports)


def _resolve_array(type_ref: ArrayType, imports: Mapping[str, str]) -> str:
	return resolve_type_name(type_ref.element, imports)


def _resolve_tuple(type_ref: TupleType, imports: Mapping[str, str]) -> str:
	return ", ".join(resolve_type_name(element, imports) for element in type_ref.elements)


def _resolve_unknown(type_ref: UnknownType, imports: Mapping[str, str]) -> str:
	return UNKNOWN


_RESOLVERS: Dict[str, Callable[..., str]] = {
	"path": _resolve_path,
	"reference": _resolve_reference,
	"array": _resolve_array,
	"tuple": _resolve_tuple,
	"unknown": _resolve_unknown,
}


def resolve_type_name(type_ref: TypeRef, imports: Mapping[str, str]) -> str:
	"""Render a TypeRef as its canonical string, substituting import aliases.

	Only the first path segment is looked up; names with no import pass
	through unchanged.
	"""
	return _RESOLVERS[type_ref.kind](type_ref, imports)

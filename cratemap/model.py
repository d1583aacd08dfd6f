from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field as PydanticField


class PathType(BaseModel):
	kind: Literal["path"] = "path"
	segments: List[str]
	generics: List[TypeRef] = []


class ReferenceType(BaseModel):
	kind: Literal["reference"] = "reference"
	lifetime: Optional[str] = None
	mutable: bool = False
	inner: TypeRef


class ArrayType(BaseModel):
	# Arrays and slices alike; the length is not kept.
	kind: Literal["array"] = "array"
	element: TypeRef


class TupleType(BaseModel):
	kind: Literal["tuple"] = "tuple"
	elements: List[TypeRef] = []


class UnknownType(BaseModel):
	kind: Literal["unknown"] = "unknown"


TypeRef = Annotated[
	Union[PathType, ReferenceType, ArrayType, TupleType, UnknownType],
	PydanticField(discriminator="kind"),
]


class Field(BaseModel):
	"""A named slot with a type: struct field, function argument, alias target."""

	name: str
	type: TypeRef


class Function(BaseModel):
	kind: Literal["function"] = "function"
	name: str
	args: List[Field] = []


class Struct(BaseModel):
	kind: Literal["struct"] = "struct"
	name: str
	fields: List[Field] = []
	methods: Dict[str, Function] = {}


class Enum(BaseModel):
	kind: Literal["enum"] = "enum"
	name: str
	variants: List[str] = []


class Trait(BaseModel):
	kind: Literal["trait"] = "trait"
	name: str
	methods: Dict[str, Function] = {}


class Constant(BaseModel):
	kind: Literal["constant"] = "constant"
	name: str
	type: TypeRef
	value: str = ""


class Macro(BaseModel):
	kind: Literal["macro"] = "macro"
	name: str
	tokens: str = ""


class TypeAlias(BaseModel):
	kind: Literal["type_alias"] = "type_alias"
	name: str
	type: TypeRef


Entity = Annotated[
	Union[Struct, Enum, Trait, Function, Constant, Macro, TypeAlias],
	PydanticField(discriminator="kind"),
]

ENTITY_KINDS = ("struct", "enum", "trait", "function", "constant", "macro", "type_alias")


class Module(BaseModel):
	name: str
	path: str = ""
	entities: Dict[str, Entity] = {}
	imports: Dict[str, str] = {}
	submodules: Dict[str, Module] = {}

	def child_path(self, name: str) -> str:
		return f"{self.path}::{name}" if self.path else name


for _model in (PathType, ReferenceType, ArrayType, TupleType, Field, Constant, TypeAlias, Module):
	_model.model_rebuild()

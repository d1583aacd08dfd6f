from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .config import RenderOptions
from .model import Constant, Enum, Field, Function, Macro, Module, Struct, Trait, TypeAlias
from .typenames import is_primitive, resolve_type_name

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"

Note = Tuple[str, str]


def type_display(field: Field, imports: Mapping[str, str], options: RenderOptions) -> str:
	type_name = resolve_type_name(field.type, imports)
	if is_primitive(type_name) and not options.primitives:
		return type_name
	return f"[[{type_name}]]"


def _field_line(field: Field, imports: Mapping[str, str], options: RenderOptions) -> str:
	return f"{field.name} : {type_display(field, imports, options)}"


def _note(kind: str, name: str, lines: List[str]) -> str:
	return "\n".join([f"#{kind} {name}", "", *lines]) + "\n"


def _methods_block(methods: Mapping[str, Function]) -> List[str]:
	if not methods:
		return []
	return ["Methods", *(f"[[{name}]]" for name in methods)]


def _function(fn: Function, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	lines = [_field_line(arg, imports, options) for arg in fn.args]
	yield fn.name, _note("Function", fn.name, lines)


def _struct(struct: Struct, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	lines = [_field_line(field, imports, options) for field in struct.fields]
	if lines and struct.methods:
		lines.append("")
	lines += _methods_block(struct.methods)
	yield struct.name, _note("Struct", struct.name, lines)
	for method in struct.methods.values():
		yield from _function(method, imports, options)


def _enum(enum: Enum, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	yield enum.name, _note("Enum", enum.name, [f"[[{variant}]]" for variant in enum.variants])


def _trait(trait: Trait, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	yield trait.name, _note("Trait", trait.name, _methods_block(trait.methods))
	for method in trait.methods.values():
		yield from _function(method, imports, options)


def _constant(constant: Constant, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	lines = [
		_field_line(Field(name=constant.name, type=constant.type), imports, options),
		f"value : {constant.value}",
	]
	yield constant.name, _note("Constant", constant.name, lines)


def _macro(macro: Macro, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	lines = ["```", macro.tokens, "```"] if macro.tokens else []
	yield macro.name, _note("Macro", macro.name, lines)


def _type_alias(alias: TypeAlias, imports: Mapping[str, str], options: RenderOptions) -> Iterator[Note]:
	lines = [_field_line(Field(name=alias.name, type=alias.type), imports, options)]
	yield alias.name, _note("TypeAlias", alias.name, lines)


_RENDERERS: Dict[str, Callable[..., Iterator[Note]]] = {
	"struct": _struct,
	"enum": _enum,
	"trait": _trait,
	"function": _function,
	"constant": _constant,
	"macro": _macro,
	"type_alias": _type_alias,
}


def iter_notes(module: Module, options: RenderOptions) -> Iterator[Note]:
	"""Yield (note name, body) for every entity in `module` and its submodules, depth first."""
	for entity in module.entities.values():
		yield from _RENDERERS[entity.kind](entity, module.imports, options)
	for submodule in module.submodules.values():
		yield from iter_notes(submodule, options)


def render(tree: Module, out_dir: Path, options: Optional[RenderOptions] = None) -> List[str]:
	"""Write one note per entity under `out_dir` and return the note names.

	`out_dir` is removed and recreated first. Notes with the same name
	overwrite each other; the last one reached wins. Write errors propagate
	and may leave the directory partly written.
	"""
	options = options or RenderOptions()
	out_dir = Path(out_dir)
	notes: Dict[str, str] = {}
	for name, body in iter_notes(tree, options):
		if name in notes:
			logger.debug("Note %s overwritten", name)
		notes[name] = body

	if out_dir.exists():
		shutil.rmtree(out_dir)
	out_dir.mkdir(parents=True)
	for name, body in notes.items():
		(out_dir / f"{name}{NOTE_SUFFIX}").write_text(body, encoding="utf-8")
	logger.info("Wrote %d notes to %s", len(notes), out_dir)
	return list(notes)

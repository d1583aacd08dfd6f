"""cratemap: turn a Rust crate into cross-linked markdown notes.

Modules:
- syntax.py: tree-sitter parsing of Rust source.
- typenames.py: Type expressions and their canonical display names.
- imports.py: `use` declarations and crate-relative path resolution.
- extract.py: Top-level declarations into entity records.
- impls.py: Binding `impl` blocks to structs.
- fs_scan.py: Cargo manifests, submodule file candidates and source scans.
- resolver.py: Building the Module tree (`parse`).
- render.py: Writing one note per entity (`render`).
- model.py: Data structures for modules, entities and type references.
- config.py, pipeline.py, watch.py: Settings, full passes and the watch loop.
"""

__all__ = [
	"syntax",
	"typenames",
	"imports",
	"extract",
	"impls",
	"fs_scan",
	"resolver",
	"render",
	"model",
	"config",
	"pipeline",
	"watch",
]

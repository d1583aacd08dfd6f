from cratemap.config import RenderOptions
from cratemap.render import render
from cratemap.resolver import parse


def _read_notes(out_dir):
	return {p.name: p.read_bytes() for p in sorted(out_dir.iterdir())}


def test_point_end_to_end(write_tree, tmp_path):
	root = write_tree(
		{
			"point.rs": """
			struct Point {
				x: f64,
				y: f64,
			}

			impl Point {
				fn len(&self) -> f64 {
					(self.x * self.x + self.y * self.y).sqrt()
				}
			}
			"""
		}
	)
	out = tmp_path / "notes"
	names = render(parse(root / "point.rs"), out)

	assert names == ["Point", "len"]
	assert (out / "Point.md").read_text() == "#Struct Point\n\nx : f64\ny : f64\n\nMethods\n[[len]]\n"
	assert (out / "len.md").read_text() == "#Function len\n\n"


def test_primitive_linking(write_tree, tmp_path):
	root = write_tree({"lib.rs": "struct Counter { field: u32, label: String }\n"})
	tree = parse(root / "lib.rs")

	render(tree, tmp_path / "plain")
	plain = (tmp_path / "plain" / "Counter.md").read_text().splitlines()
	assert "field : u32" in plain
	assert "label : [[String]]" in plain

	render(tree, tmp_path / "linked", RenderOptions(primitives=True))
	linked = (tmp_path / "linked" / "Counter.md").read_text().splitlines()
	assert "field : [[u32]]" in linked


def test_imported_type_links_to_qualified_name(write_tree, tmp_path):
	root = write_tree(
		{
			"lib.rs": """
			use a::b::C;
			use a::b::{C as Sea, D as E};
			struct S { c: C, e: E }
			"""
		}
	)
	render(parse(root / "lib.rs"), tmp_path / "out")
	lines = (tmp_path / "out" / "S.md").read_text().splitlines()
	assert lines[2:] == ["c : [[a::b::C]]", "e : [[a::b::D]]"]


def test_every_entity_kind_has_a_note(write_tree, tmp_path):
	root = write_tree(
		{
			"lib.rs": """
			enum Color { Red, Green }
			trait Paint { fn paint(&self, color: Color); }
			fn mix(a: Color, b: &Color) {}
			const LIMIT: usize = 4 + 4;
			type Palette = Vec<Color>;
			macro_rules! shade { () => {}; }
			"""
		}
	)
	out = tmp_path / "out"
	names = render(parse(root / "lib.rs"), out)
	assert names == ["Color", "Paint", "paint", "mix", "LIMIT", "Palette", "shade"]

	assert (out / "Color.md").read_text() == "#Enum Color\n\n[[Red]]\n[[Green]]\n"
	assert (out / "Paint.md").read_text() == "#Trait Paint\n\nMethods\n[[paint]]\n"
	assert (out / "paint.md").read_text() == "#Function paint\n\ncolor : [[Color]]\n"
	assert (out / "mix.md").read_text() == "#Function mix\n\na : [[Color]]\nb : [[&Color]]\n"
	assert (out / "LIMIT.md").read_text() == "#Constant LIMIT\n\nLIMIT : usize\nvalue : 4 + 4\n"
	assert (out / "Palette.md").read_text() == "#TypeAlias Palette\n\nPalette : [[Vec<Color>]]\n"
	assert (out / "shade.md").read_text().startswith("#Macro shade\n\n```\n")


def test_same_name_in_two_modules_last_wins(write_tree, tmp_path):
	root = write_tree(
		{
			"Cargo.toml": '[package]\nname = "dup"\n',
			"src/lib.rs": "mod one;\nmod two;\n",
			"src/one.rs": "struct Config { a: u8 }\n",
			"src/two.rs": "struct Config { b: u16 }\n",
		}
	)
	out = tmp_path / "out"
	assert render(parse(root), out) == ["Config"]
	assert "b : u16" in (out / "Config.md").read_text()


def test_output_directory_is_recreated(write_tree, tmp_path):
	root = write_tree({"lib.rs": "struct Fresh;\n"})
	out = tmp_path / "out"
	out.mkdir()
	(out / "Stale.md").write_text("old")

	render(parse(root / "lib.rs"), out)
	assert sorted(p.name for p in out.iterdir()) == ["Fresh.md"]


def test_two_passes_are_byte_identical(write_tree, tmp_path):
	root = write_tree(
		{
			"Cargo.toml": '[package]\nname = "same"\n',
			"src/lib.rs": """
			use std::collections::HashMap;
			mod shapes;
			pub struct Registry { shapes: HashMap<String, shapes::Shape> }
			impl Registry { pub fn add(&mut self, name: &str) {} }
			""",
			"src/shapes.rs": "pub enum Shape { Dot }\npub fn area(s: &Shape) -> f64 { 0.0 }\n",
		}
	)
	out = tmp_path / "out"
	render(parse(root), out)
	first = _read_notes(out)
	render(parse(root), out)
	assert _read_notes(out) == first


def test_render_leaves_tree_untouched(write_tree, tmp_path):
	root = write_tree({"lib.rs": "struct Kept { a: u8 }\n"})
	tree = parse(root / "lib.rs")
	render(tree, tmp_path / "out")
	assert "Kept" in tree.entities

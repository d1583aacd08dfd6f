import pytest

from cli import main


def test_render_command(write_tree, tmp_path):
	root = write_tree({"lib.rs": "struct Cli { verbose: bool }\n"})
	main(["render", "-i", str(root / "lib.rs"), "-o", str(tmp_path / "vault"), "-p", "-s"])
	note = tmp_path / "vault" / "cratemap_generated" / "Cli.md"
	assert note.read_text() == "#Struct Cli\n\nverbose : [[bool]]\n"


def test_render_command_fails_on_missing_module(write_tree, tmp_path):
	root = write_tree({"Cargo.toml": '[package]\nname = "x"\n', "src/lib.rs": "mod lost;\n"})
	with pytest.raises(SystemExit) as excinfo:
		main(["render", "-i", str(root), "-o", str(tmp_path / "vault")])
	assert excinfo.value.code == 1


def test_render_command_rejects_missing_input(tmp_path):
	with pytest.raises(SystemExit) as excinfo:
		main(["render", "-i", str(tmp_path / "nope"), "-o", str(tmp_path / "vault")])
	assert excinfo.value.code == 1


def test_render_command_skips_undecodable_file(write_tree, tmp_path):
	root = write_tree({"Cargo.toml": '[package]\nname = "x"\n', "src/lib.rs": "mod bad;\npub struct Kept;\n"})
	(root / "src" / "bad.rs").write_bytes(b"struct \xff\xfe;\n")
	main(["render", "-i", str(root), "-o", str(tmp_path / "vault"), "-s"])
	notes = tmp_path / "vault" / "cratemap_generated"
	assert sorted(p.name for p in notes.iterdir()) == ["Kept.md"]

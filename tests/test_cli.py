# tests/test_cli.py
import os
import sys
import pytest
from pathlib import Path
from unittest.mock import patch

from dircontents.cli import get_default_output_name, main
from dircontents.utils.tokenizer import Tokenizer

@pytest.fixture(autouse=True)
def offline_tokenizer(monkeypatch):
    """Keeps tiktoken from downloading encodings during tests."""
    monkeypatch.setattr(Tokenizer, "count", staticmethod(lambda text: len(text) // 4))

@pytest.fixture
def project(tmp_path):
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("def hello():\n  print('hello')", encoding="utf-8")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "dep.js").write_text("module.exports = 1", encoding="utf-8")
    (root / "Main.class").write_bytes(b"\xca\xfe\xba\xbe")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (root / "README.md").write_text("# My Project", encoding="utf-8")

    config = tmp_path / "config.properties"
    config.write_text(
        "max.file.size=1048576\n"
        "excluded.dirs=node_modules\n"
        "excluded.extensions=class\n",
        encoding="utf-8",
    )
    return root, config

# --- Test 1: End-to-end run ---

def test_end_to_end_run(project):
    root, config = project
    test_args = ["dircontents", str(root), "-c", str(config), "-y"]

    with patch.object(sys, "argv", test_args):
        main()

    output_file = root / "proj_contents.txt"
    assert output_file.exists()
    content = output_file.read_text(encoding="utf-8")

    assert "Directory Structure: proj\n" in content
    assert "File: src/main.py" in content
    assert "def hello():" in content
    assert "File: README.md" in content
    assert "File: logo.png\n================\nContent: Skipped binary file" in content

    # Excluded by configuration
    assert "node_modules/\n" in content
    assert "node_modules/dep.js" not in content
    assert "module.exports" not in content
    assert "Main.class" not in content

def test_rerun_does_not_pack_previous_output(project):
    root, config = project
    main([str(root), "-c", str(config), "-y"])
    main([str(root), "-c", str(config), "-y"])

    content = (root / "proj_contents.txt").read_text(encoding="utf-8")
    assert "proj_contents.txt" not in content
    assert content.count("DIRCONTENTS OUTPUT FILE") == 1

def test_multiple_roots_and_custom_output(project, tmp_path):
    root, config = project
    other = tmp_path / "other"
    other.mkdir()
    (other / "notes.txt").write_text("other notes", encoding="utf-8")

    main([str(root), str(other), "-c", str(config), "-o", "packed.txt", "-y"])

    content = (root / "packed.txt").read_text(encoding="utf-8")
    assert content.index("Directory Structure: proj") < content.index("Directory Structure: other")
    assert "other notes" in content

def test_ignore_file_option(project, tmp_path):
    root, config = project
    ignore_file = tmp_path / ".mergeignore"
    ignore_file.write_text("*.md\n", encoding="utf-8")

    main([str(root), "-c", str(config), "--ignore-file", str(ignore_file), "-y"])

    content = (root / "proj_contents.txt").read_text(encoding="utf-8")
    assert "README.md" not in content
    assert "File: src/main.py" in content

@pytest.mark.skipif(sys.platform != "linux", reason="needs byte-oriented filenames")
def test_undecodable_filename_does_not_break_run(project):
    root, config = project
    (root / os.fsdecode(b"caf\xe9.txt")).write_text("bonjour", encoding="utf-8")
    output_file = root / "proj_contents.txt"
    output_file.write_text("PREVIOUS ARTIFACT", encoding="utf-8")

    main([str(root), "-c", str(config), "-y"])

    content = output_file.read_text(encoding="utf-8")
    assert "PREVIOUS ARTIFACT" not in content
    assert "File: caf\ufffd.txt\n================\nContent:\nbonjour" in content
    assert not (root / "proj_contents.txt.tmp").exists()

# --- Test 2: Overwrite confirmation ---

def test_overwrite_declined_keeps_file(project, monkeypatch, capsys):
    root, config = project
    output_file = root / "proj_contents.txt"
    output_file.write_text("keep me", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda _: "n")

    main([str(root), "-c", str(config)])

    assert output_file.read_text(encoding="utf-8") == "keep me"
    assert "Cancelled" in capsys.readouterr().out

def test_overwrite_accepted(project, monkeypatch):
    root, config = project
    output_file = root / "proj_contents.txt"
    output_file.write_text("old", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda _: "y")

    main([str(root), "-c", str(config)])

    assert "File: src/main.py" in output_file.read_text(encoding="utf-8")

# --- Test 3: Fatal conditions ---

def test_no_valid_root_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing"), "-c", str(tmp_path / "none.properties")])
    assert exc.value.code == 1

def test_write_failure_exits(project, capsys):
    root, config = project
    with pytest.raises(SystemExit) as exc:
        main([str(root), "-c", str(config), "-o", "no/such/dir/out.txt", "-y"])
    assert exc.value.code == 1
    assert "Error writing file" in capsys.readouterr().err

# --- Test 4: Helpers ---

def test_default_output_name(tmp_path):
    root = tmp_path / "my project"
    root.mkdir()
    assert get_default_output_name(root) == "my_project_contents.txt"

def test_tokenizer_falls_back_without_encoding(monkeypatch):
    monkeypatch.undo()

    def no_encoding():
        raise RuntimeError("offline")

    monkeypatch.setattr(Tokenizer, "get_encoding", staticmethod(no_encoding))
    assert Tokenizer.count("abcdefgh") == 2

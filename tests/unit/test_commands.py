"""Tests for the swatch CLI commands."""
import argparse
import sys
from unittest.mock import patch

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]

import pytest

from swatch.commands import get_version
from swatch.commands.categories import cmd_categories, cmd_reset
from swatch.commands.classify import cmd_classify
from swatch.commands.du import UNCATEGORIZED, _human_size, cmd_du, summarize
from swatch.classify import get_classifier
from swatch.defaults import DEFAULT_CATEGORIES


class TestClassifyCommand:
    def test_prints_category_and_color(self, capsys):
        cmd_classify(argparse.Namespace(names=["main.cpp", "README"], as_path=False))
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "C/C++\t#170000\tmain.cpp"
        assert lines[1] == "-\t-\tREADME"

    def test_path_mode_skips_directories(self, tmp_path, capsys):
        (tmp_path / "lib.py").mkdir()
        cmd_classify(argparse.Namespace(names=[str(tmp_path / "lib.py")], as_path=True))
        assert capsys.readouterr().out.startswith("-\t-\t")

    def test_bad_config_exits(self, isolated_config, capsys):
        isolated_config.write_text("[broken\n")
        with pytest.raises(SystemExit) as exc:
            cmd_classify(argparse.Namespace(names=["a.c"], as_path=False))
        assert exc.value.code == 1
        assert "cannot read configuration" in capsys.readouterr().err


class TestCategoriesCommand:
    def test_lists_defaults(self, capsys):
        cmd_categories(argparse.Namespace(conflicts=False))
        out = capsys.readouterr().out
        assert "C/C++" in out
        assert "*.cpp *.c *.h" in out

    def test_conflicts(self, isolated_config, capsys):
        isolated_config.write_text(
            '[MimeCategory_01]\nName = "A"\nPatternsCaseSensitive = ["*.x"]\n'
            '[MimeCategory_02]\nName = "B"\nPatternsCaseSensitive = ["*.x"]\n'
        )
        cmd_categories(argparse.Namespace(conflicts=True))
        assert "*.x (case-sensitive): A -> B" in capsys.readouterr().out

    def test_no_conflicts(self, capsys):
        cmd_categories(argparse.Namespace(conflicts=True))
        assert "No suffix conflicts." in capsys.readouterr().out


class TestResetCommand:
    def test_writes_defaults(self, isolated_config, capsys):
        isolated_config.write_text('[MimeCategory_01]\nName = "Custom"\n')
        cmd_reset(argparse.Namespace())
        raw = tomllib.loads(isolated_config.read_text())
        names = [raw[k]["Name"] for k in raw if k.startswith("MimeCategory_")]
        assert names == [name for name, _, _ in DEFAULT_CATEGORIES]
        assert "Saved 20 default categories" in capsys.readouterr().out


class TestDu:
    @pytest.fixture
    def tree(self, tmp_path):
        root = tmp_path / "tree"
        (root / "sub").mkdir(parents=True)
        (root / "main.py").write_bytes(b"x" * 10)
        (root / "lib.cpp").write_bytes(b"x" * 20)
        (root / "notes.XYZ").write_bytes(b"x" * 5)
        (root / "sub" / "api.h").write_bytes(b"x" * 7)
        (root / "sub" / "Makefile").write_bytes(b"x" * 3)
        (root / "dir.py").mkdir()
        return root

    def test_summarize(self, tree):
        by_cat, by_suffix = summarize(get_classifier(), str(tree))
        assert by_cat == {"C/C++": 27, "Python": 10, UNCATEGORIZED: 8}
        assert by_suffix == {"*.xyz": 5, "Makefile": 3}

    def test_output(self, tree, capsys):
        cmd_du(argparse.Namespace(path=str(tree), human=False, uncategorized=False))
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "27\tC/C++",
            "10\tPython",
            f"8\t{UNCATEGORIZED}",
            "45\ttotal",
        ]

    def test_uncategorized_listing(self, tree, capsys):
        cmd_du(argparse.Namespace(path=str(tree), human=False, uncategorized=True))
        out = capsys.readouterr().out
        assert "5\t*.xyz" in out
        assert "3\tMakefile" in out

    def test_not_a_directory(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            cmd_du(argparse.Namespace(path=str(tmp_path / "missing"), human=False))
        assert "not a directory" in capsys.readouterr().err

    def test_human_size(self):
        assert _human_size(None) == "0"
        assert _human_size(512) == "512B"
        assert _human_size(2048) == "2.0K"
        assert _human_size(5 * 1024 * 1024) == "5.0M"


class TestMain:
    def test_no_command_prints_help(self, capsys):
        from swatch.main import main
        with patch.object(sys, "argv", ["swatch"]), pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 0
        assert "COMMAND" in capsys.readouterr().out

    def test_dispatches_classify(self, capsys):
        from swatch.main import main
        with patch.object(sys, "argv", ["swatch", "classify", "x.rb"]):
            main()
        assert capsys.readouterr().out.startswith("Ruby\t")

    def test_version(self, capsys):
        from swatch.main import main
        with patch.object(sys, "argv", ["swatch", "--version"]), pytest.raises(SystemExit):
            main()
        assert capsys.readouterr().out.startswith("swatch ")

    def test_get_version_string(self):
        assert isinstance(get_version(), str)

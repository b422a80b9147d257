"""Built-in categories used when no configuration defines any."""
from __future__ import annotations

from swatch.category import Category, Color
from swatch.store import CategoryStore

# (name, color, case-sensitive suffixes)
DEFAULT_CATEGORIES: tuple[tuple[str, Color, tuple[str, ...]], ...] = (
    ("Ada",          Color(0x00, 0x54, 0xE1), tuple("ada a adb ads".split())),
    ("ASP, ASP.NET", Color(0x00, 0x40, 0x80), tuple("asp aspx".split())),
    ("Bash",         Color(0x00, 0xDD, 0xFF), tuple("sh ksh".split())),
    ("C Shell",      Color(0xFF, 0xFD, 0xCE), tuple("csh tcsh".split())),
    ("C#",           Color(0x21, 0x1B, 0x0C), tuple("cs".split())),
    ("C/C++",        Color(0x17, 0x00, 0x00), tuple("cpp c h hpp cc hh".split())),
    ("ColdFusion",   Color(0x00, 0x1A, 0x64), tuple("cfs".split())),
    ("CSS",          Color(0x95, 0xBB, 0xEF), tuple("css".split())),
    ("Fortran",      Color(0x00, 0x1D, 0x36), tuple("f for f77 f90 f95 f03 hpf".split())),
    ("HTML",         Color(0xDC, 0xFF, 0xFF), tuple("htm html shtml stm sht oth xhtml".split())),
    # lower-case so "Main.java" matches; these suffixes are case-sensitive
    ("Java",         Color(0xAF, 0x8E, 0x00), tuple("java".split())),
    ("JavaScript",   Color(0x3E, 0x3B, 0x34), tuple("js".split())),
    ("Pascal",       Color(0x24, 0x00, 0x00), tuple("pas p pp pa3 pa4 pa5".split())),
    ("Perl",         Color(0xBD, 0xC7, 0xD9), tuple("pl pm".split())),
    ("PHP",          Color(0x49, 0x60, 0x7F), tuple("php".split())),
    ("Python",       Color(0x00, 0x8D, 0xFF), tuple("py".split())),
    ("Ruby",         Color(0xFF, 0xFB, 0x58), tuple("rb".split())),
    ("SQL",          Color(0x88, 0x75, 0x43), tuple("sql".split())),
    ("VB",           Color(0x41, 0x22, 0x00), tuple("vb frm mod cls bas".split())),
    ("VHDL",         Color(0x26, 0x00, 0x00), tuple("vhd vhdl".split())),
)


def add_default_categories(store: CategoryStore) -> CategoryStore:
    for name, color, suffixes in DEFAULT_CATEGORIES:
        category = Category(name, color)
        category.add_suffixes(suffixes, case_sensitive=True)
        store.add(category)
    return store

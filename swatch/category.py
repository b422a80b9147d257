"""Category definitions: name, color, suffix and pattern rules."""
from __future__ import annotations

import fnmatch
import logging
import re
from typing import Iterable, NamedTuple

logger = logging.getLogger("swatch.category")

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")
_GLOB_CHARS = frozenset("*?[")


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def parse(cls, value) -> "Color":
        """Accept '#rrggbb', '#rgb', an (r, g, b) sequence or a Color."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            m = _HEX_RE.match(value.strip())
            if not m:
                raise ValueError(f"not a color: {value!r}")
            digits = m.group(1)
            if len(digits) == 3:
                digits = "".join(c * 2 for c in digits)
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        if isinstance(value, (list, tuple)) and len(value) == 3:
            if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
                return cls(*value)
        raise ValueError(f"not a color: {value!r}")

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class Pattern(NamedTuple):
    source: str
    case_sensitive: bool
    regex: re.Pattern

    def matches(self, filename: str) -> bool:
        return self.regex.match(filename) is not None


class InvalidPattern(NamedTuple):
    source: str
    reason: str


def compile_pattern(source: str, case_sensitive: bool = True) -> Pattern:
    """
    Compile a glob expression matched against a whole filename.
    Raises ValueError when the expression cannot be used.
    """
    if not isinstance(source, str) or not source.strip():
        raise ValueError("empty pattern")
    if "/" in source or "\\" in source:
        raise ValueError("patterns match a filename, not a path")
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        # fnmatch.translate anchors at both ends, so .match() is an exact match
        regex = re.compile(fnmatch.translate(source), flags)
    except re.error as e:
        raise ValueError(str(e)) from e
    return Pattern(source, case_sensitive, regex)


def _strip_suffix(raw: str) -> str:
    suffix = raw.strip()
    if suffix.startswith("*."):
        suffix = suffix[2:]
    return suffix.lstrip(".")


def _is_plain_suffix_rule(rule: str) -> bool:
    """True for '*.ext' where ext has no further glob characters."""
    if not rule.startswith("*.") or len(rule) <= 2:
        return False
    return not (_GLOB_CHARS & set(rule[2:]))


class Category:
    """
    A named, colored bucket of filename rules.

    Suffixes never carry a leading dot. Case-insensitive suffixes are kept
    lower-cased; case-sensitive ones exactly as given.
    """

    def __init__(self, name: str, color=None) -> None:
        self.name = name
        self.color = Color.parse(color) if color is not None else Color(0xB0, 0xB0, 0xB0)
        self.case_sensitive_suffixes: list[str] = []
        self.case_insensitive_suffixes: list[str] = []
        self.patterns: list[Pattern] = []

    def __repr__(self) -> str:
        return f"<Category {self.name!r} {self.color.hex}>"

    # -- Rule setup ---------------------------------------------------------

    def add_suffixes(self, suffixes: Iterable[str], case_sensitive: bool = True) -> None:
        target = self.case_sensitive_suffixes if case_sensitive else self.case_insensitive_suffixes
        for raw in suffixes:
            suffix = _strip_suffix(raw)
            if not suffix:
                continue
            target.append(suffix if case_sensitive else suffix.lower())

    def add_patterns(self, patterns: Iterable[str], case_sensitive: bool = True) -> list[InvalidPattern]:
        """Compile and append glob patterns; bad ones are skipped and returned."""
        invalid: list[InvalidPattern] = []
        for source in patterns:
            try:
                self.patterns.append(compile_pattern(source, case_sensitive))
            except ValueError as e:
                logger.warning("Skipping pattern %r for %s: %s", source, self.name, e)
                invalid.append(InvalidPattern(str(source), str(e)))
        return invalid

    def add_rules(self, rules: Iterable[str], case_sensitive: bool = True) -> list[InvalidPattern]:
        """
        Add rules in their persisted form: '*.ext' becomes a suffix,
        anything else a pattern. Empty entries are ignored.
        """
        suffixes: list[str] = []
        patterns: list[str] = []
        for rule in rules:
            rule = rule.strip()
            if not rule:
                continue
            if _is_plain_suffix_rule(rule):
                suffixes.append(rule)
            else:
                patterns.append(rule)
        self.add_suffixes(suffixes, case_sensitive)
        return self.add_patterns(patterns, case_sensitive)

    # -- Display / persistence ---------------------------------------------

    def suffixes(self, case_sensitive: bool = True) -> list[str]:
        return self.case_sensitive_suffixes if case_sensitive else self.case_insensitive_suffixes

    def pattern_sources(self, case_sensitive: bool = True) -> list[str]:
        return [p.source for p in self.patterns if p.case_sensitive == case_sensitive]

    def human_readable_suffix_list(self, case_sensitive: bool = True) -> list[str]:
        return [f"*.{s}" for s in self.suffixes(case_sensitive)]

    def human_readable_pattern_list(self, case_sensitive: bool = True) -> list[str]:
        return self.human_readable_suffix_list(case_sensitive) + self.pattern_sources(case_sensitive)


def make_category(
    name: str,
    color=None,
    suffixes: Iterable[str] = (),
    icase_suffixes: Iterable[str] = (),
    patterns: Iterable[str] = (),
    icase_patterns: Iterable[str] = (),
) -> tuple[Category, list[InvalidPattern]]:
    """Build a Category in one call. Returns (category, invalid_patterns)."""
    category = Category(name, color)
    category.add_suffixes(suffixes, case_sensitive=True)
    category.add_suffixes(icase_suffixes, case_sensitive=False)
    invalid = category.add_patterns(patterns, case_sensitive=True)
    invalid += category.add_patterns(icase_patterns, case_sensitive=False)
    return category, invalid

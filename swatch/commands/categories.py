"""swatch categories / swatch reset — inspect and reset the category set."""
from __future__ import annotations

import sys

from swatch.commands import load_classifier
from swatch.config import config_path, write_categories
from swatch.defaults import add_default_categories
from swatch.store import CategoryStore


def _rules(label: str, rules: list[str]) -> str:
    return f"    {label:<17}{' '.join(rules)}"


def cmd_categories(args) -> None:
    classifier = load_classifier()
    store = classifier.store

    for i, category in enumerate(store.all(), start=1):
        print(f"{i:>3}  {category.name}  {category.color.hex}")
        cs = category.human_readable_pattern_list(case_sensitive=True)
        ci = category.human_readable_pattern_list(case_sensitive=False)
        if cs:
            print(_rules("case-sensitive", cs))
        if ci:
            print(_rules("case-insensitive", ci))

    if getattr(args, "conflicts", False):
        store.index.ensure_built(store)
        conflicts = store.index.conflicts
        print()
        if not conflicts:
            print("No suffix conflicts.")
        for c in conflicts:
            kind = "case-sensitive" if c.case_sensitive else "case-insensitive"
            print(f"*.{c.suffix} ({kind}): {c.previous.name} -> {c.current.name}")


def cmd_reset(args) -> None:
    store = add_default_categories(CategoryStore())
    try:
        path = write_categories(store)
    except (OSError, ValueError) as e:
        print(f"swatch: cannot write {config_path()}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved {len(store)} default categories to {path}")

"""swatch du — disk usage summary by category."""
from __future__ import annotations

import logging
import os
import sys
from typing import Iterator, Optional

from swatch.classify import Classifier
from swatch.commands import load_classifier

logger = logging.getLogger("swatch.du")

UNCATEGORIZED = "(uncategorized)"


def _human_size(n: Optional[int]) -> str:
    if n is None:
        return "0"
    for unit in ("B", "K", "M", "G", "T", "P"):
        if abs(n) < 1024:
            return f"{n:.1f}{unit}" if unit != "B" else f"{n}B"
        n /= 1024
    return f"{n:.1f}P"


def _walk(root: str) -> Iterator[os.DirEntry]:
    """Yield every non-directory entry under root. Symlinks are not followed."""
    stack = [root]
    while stack:
        dirpath = stack.pop()
        try:
            with os.scandir(dirpath) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                    else:
                        yield entry
        except OSError as e:
            logger.warning("Skipping %s: %s", dirpath, e)


def summarize(classifier: Classifier, root: str) -> tuple[dict[str, int], dict[str, int]]:
    """
    Return (bytes per category name, bytes per uncategorized suffix).
    Files without a category are counted under UNCATEGORIZED.
    """
    by_cat: dict[str, int] = {}
    by_suffix: dict[str, int] = {}
    for entry in _walk(root):
        try:
            size = entry.stat(follow_symlinks=False).st_size
        except OSError as e:
            logger.warning("Cannot stat %s: %s", entry.path, e)
            continue
        category = classifier.classify_entry(entry)
        if category is None:
            by_cat[UNCATEGORIZED] = by_cat.get(UNCATEGORIZED, 0) + size
            _, dot, suffix = entry.name.rpartition(".")
            key = f"*.{suffix.lower()}" if dot and suffix else entry.name
            by_suffix[key] = by_suffix.get(key, 0) + size
        else:
            by_cat[category.name] = by_cat.get(category.name, 0) + size
    return by_cat, by_suffix


def cmd_du(args) -> None:
    root = getattr(args, "path", ".") or "."
    human = getattr(args, "human", False)

    if not os.path.isdir(root):
        print(f"swatch: not a directory: {root}", file=sys.stderr)
        sys.exit(1)

    classifier = load_classifier()
    by_cat, by_suffix = summarize(classifier, root)

    # Sort by size descending
    rows = sorted(by_cat.items(), key=lambda x: x[1], reverse=True)
    for name, total in rows:
        size_str = _human_size(total) if human else str(total)
        print(f"{size_str}\t{name}")

    total_all = sum(v for _, v in rows)
    total_str = _human_size(total_all) if human else str(total_all)
    print(f"{total_str}\ttotal")

    if getattr(args, "uncategorized", False) and by_suffix:
        print()
        for key, total in sorted(by_suffix.items(), key=lambda x: x[1], reverse=True):
            size_str = _human_size(total) if human else str(total)
            print(f"{size_str}\t{key}")

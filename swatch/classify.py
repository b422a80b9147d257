"""File classification: filename → Category (suffix maps first, then patterns)."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from swatch.category import Category
from swatch.store import CategoryStore


def suffix_candidates(filename: str) -> Iterator[str]:
    """
    Yield every suffix starting after the first dot, then after each
    following dot: "archive.tar.bz2" -> "tar.bz2", "bz2".
    """
    _, _, suffix = filename.partition(".")
    while suffix:
        yield suffix
        _, _, suffix = suffix.partition(".")


def match_patterns(categories: Iterable[Category], filename: str) -> Optional[Category]:
    """First category, in the given order, owning a pattern that matches filename."""
    for category in categories:
        for pattern in category.patterns:
            if pattern.matches(filename):
                return category
    return None


class Classifier:
    def __init__(self, store: CategoryStore) -> None:
        self.store = store

    @property
    def index(self):
        return self.store.index

    def classify(self, filename: str, is_dir: bool = False) -> Optional[Category]:
        """
        Return the Category for filename, or None when uncategorized.
        Directories are never categorized.
        """
        if filename is None:
            raise TypeError("filename must not be None")
        if is_dir or not filename:
            return None

        index = self.store.index
        index.ensure_built(self.store)

        for suffix in suffix_candidates(filename):
            category = index.case_sensitive_map.get(suffix)
            if category is None:
                category = index.case_insensitive_map.get(suffix.lower())
            if category is not None:
                return category

        return match_patterns(self.store.all(), filename)

    def classify_entry(self, entry: Union[os.DirEntry, Path]) -> Optional[Category]:
        """Classify an os.scandir() entry or a Path; symlinks are not followed."""
        if entry is None:
            raise TypeError("entry must not be None")
        if isinstance(entry, Path):
            is_dir = entry.is_dir() and not entry.is_symlink()
        else:
            is_dir = entry.is_dir(follow_symlinks=False)
        return self.classify(entry.name, is_dir=is_dir)

    def classify_path(self, path: str) -> Optional[Category]:
        if path is None:
            raise TypeError("path must not be None")
        return self.classify(os.path.basename(path.rstrip("/\\")), is_dir=os.path.isdir(path))


# Module-level singleton — loaded once per process
_classifier: Optional[Classifier] = None


def get_classifier() -> Classifier:
    global _classifier
    if _classifier is None:
        from swatch.config import read_categories
        _classifier = Classifier(read_categories(CategoryStore()))
    return _classifier


def reset_classifier() -> None:
    global _classifier
    _classifier = None

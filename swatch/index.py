"""Suffix → category lookup maps, rebuilt lazily from a CategoryStore."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from swatch.category import Category

if TYPE_CHECKING:
    from swatch.store import CategoryStore

logger = logging.getLogger("swatch.index")


class SuffixConflict(NamedTuple):
    suffix: str
    case_sensitive: bool
    previous: Category
    current: Category


class ClassificationIndex:
    """
    Derived lookup structure. Holds non-owning references to categories
    owned by the store; only valid while `dirty` is False.
    """

    def __init__(self) -> None:
        self.case_sensitive_map: dict[str, Category] = {}
        self.case_insensitive_map: dict[str, Category] = {}
        self.conflicts: list[SuffixConflict] = []
        self.dirty = True
        self.builds = 0

    def mark_dirty(self) -> None:
        self.dirty = True

    def ensure_built(self, store: "CategoryStore") -> None:
        if not self.dirty:
            return

        self.case_sensitive_map.clear()
        self.case_insensitive_map.clear()
        self.conflicts = []

        for category in store.all():
            self._insert(self.case_sensitive_map, category, category.case_sensitive_suffixes, True)
            # Already lower-cased by Category.add_suffixes
            self._insert(self.case_insensitive_map, category, category.case_insensitive_suffixes, False)

        self.dirty = False
        self.builds += 1
        logger.debug(
            "Index rebuilt: %d case-sensitive, %d case-insensitive suffixes, %d conflicts",
            len(self.case_sensitive_map), len(self.case_insensitive_map), len(self.conflicts),
        )

    def _insert(
        self,
        suffix_map: dict[str, Category],
        category: Category,
        suffixes: list[str],
        case_sensitive: bool,
    ) -> None:
        for suffix in suffixes:
            previous = suffix_map.get(suffix)
            if previous is not None and previous is not category:
                logger.warning(
                    "Duplicate suffix %r: %s and %s (using %s)",
                    suffix, previous.name, category.name, category.name,
                )
                self.conflicts.append(SuffixConflict(suffix, case_sensitive, previous, category))
            # Last inserted wins, in store order
            suffix_map[suffix] = category

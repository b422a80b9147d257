"""Ordered, owning collection of categories."""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from swatch.category import Category
from swatch.index import ClassificationIndex

logger = logging.getLogger("swatch.store")


def _check_category(category) -> None:
    if not isinstance(category, Category):
        raise TypeError(f"expected a Category, got {type(category).__name__}")


class CategoryStore:
    """
    Insertion order matters: it is the pattern-matching order, the
    conflict tie-break order and the persisted order.

    Every mutation marks the index dirty; the index itself is never
    touched here.
    """

    def __init__(self, index: Optional[ClassificationIndex] = None) -> None:
        self.index = index if index is not None else ClassificationIndex()
        self._categories: list[Category] = []

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(tuple(self._categories))

    def __contains__(self, category) -> bool:
        return any(c is category for c in self._categories)

    def add(self, category: Category) -> Category:
        _check_category(category)
        if category in self:
            raise ValueError(f"category {category.name!r} is already in the store")
        self._categories.append(category)
        self.index.mark_dirty()
        return category

    def remove(self, category: Category) -> bool:
        _check_category(category)
        for i, c in enumerate(self._categories):
            if c is category:
                del self._categories[i]
                self.index.mark_dirty()
                return True
        logger.warning("Cannot remove %s: not found", category.name)
        return False

    def clear(self) -> None:
        self._categories.clear()
        self.index.mark_dirty()

    def touch(self) -> None:
        """Call after changing the rules of a category already in the store."""
        self.index.mark_dirty()

    def all(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    def find(self, name: str) -> Optional[Category]:
        for c in self._categories:
            if c.name == name:
                return c
        return None

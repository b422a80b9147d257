"""Pydantic request/response models for the swatch server API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from swatch.category import Category, Color


# ---------------------------------------------------------------------------
# Category models
# ---------------------------------------------------------------------------

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = "#b0b0b0"
    suffixes: list[str] = []
    suffixes_case_insensitive: list[str] = []
    patterns: list[str] = []
    patterns_case_insensitive: list[str] = []

    @field_validator("color")
    @classmethod
    def _color(cls, v: str) -> str:
        # Raises ValueError → 422
        return Color.parse(v).hex


class PatternEntry(BaseModel):
    pattern: str
    case_sensitive: bool


class CategoryEntry(BaseModel):
    position: int
    name: str
    color: str
    suffixes: list[str]
    suffixes_case_insensitive: list[str]
    patterns: list[PatternEntry]

    @classmethod
    def from_category(cls, position: int, category: Category) -> "CategoryEntry":
        return cls(
            position=position,
            name=category.name,
            color=category.color.hex,
            suffixes=list(category.case_sensitive_suffixes),
            suffixes_case_insensitive=list(category.case_insensitive_suffixes),
            patterns=[PatternEntry(pattern=p.source, case_sensitive=p.case_sensitive)
                      for p in category.patterns],
        )


class CategoryCreatedResponse(BaseModel):
    category: CategoryEntry
    invalid_patterns: list[str]


class RemovedResponse(BaseModel):
    removed: str


# ---------------------------------------------------------------------------
# Classification models
# ---------------------------------------------------------------------------

class ClassifyRequest(BaseModel):
    names: list[str]


class ClassifyResponse(BaseModel):
    name: str
    category: Optional[str] = None
    color: Optional[str] = None


class ConflictEntry(BaseModel):
    suffix: str
    case_sensitive: bool
    previous: str
    current: str

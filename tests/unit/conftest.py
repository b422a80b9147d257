"""Shared fixtures for unit tests."""
import pytest

import swatch.classify as classify_module
import swatch.config as config_module
from swatch.category import make_category as build_category
from swatch.classify import Classifier
from swatch.store import CategoryStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point SWATCH_CONFIG_PATH at a temp file and drop cached singletons."""
    path = tmp_path / "swatch.config"
    monkeypatch.setenv("SWATCH_CONFIG_PATH", str(path))
    classify_module.reset_classifier()
    config_module._config = None
    yield path
    classify_module.reset_classifier()
    config_module._config = None


def _category(name, color="#808080", suffixes=(), icase=(), patterns=(), icase_patterns=()):
    c, _ = build_category(name, color, suffixes, icase, patterns, icase_patterns)
    return c


@pytest.fixture
def make_category():
    """Factory: make_category(name, suffixes=..., icase=..., patterns=..., icase_patterns=...)."""
    return _category


@pytest.fixture
def store():
    return CategoryStore()


@pytest.fixture
def classifier(store):
    return Classifier(store)

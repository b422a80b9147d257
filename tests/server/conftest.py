"""
Fixtures shared by all server tests.

Each test gets its own config file: SWATCH_CONFIG_PATH points into tmp_path
and the module-level classifier is reset, so the lifespan's
init_classifier() loads fresh categories.
"""
import pytest
from fastapi.testclient import TestClient

import server.main as main_module
from server.main import app


@pytest.fixture(autouse=True)
def fresh_classifier(tmp_path, monkeypatch):
    path = tmp_path / "swatch.config"
    monkeypatch.setenv("SWATCH_CONFIG_PATH", str(path))
    main_module._classifier = None
    main_module._config_path = None
    yield path
    main_module._classifier = None
    main_module._config_path = None


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def custom_config(fresh_classifier):
    """A small category set instead of the built-in defaults."""
    fresh_classifier.write_text(
        '[MimeCategory_01]\n'
        'Name = "Images"\n'
        'Color = "#6a5acd"\n'
        'PatternsCaseInsensitive = ["*.jpg", "*.png"]\n'
        'PatternsCaseSensitive = []\n'
        '\n'
        '[MimeCategory_02]\n'
        'Name = "Build"\n'
        'Color = "#4682b4"\n'
        'PatternsCaseInsensitive = []\n'
        'PatternsCaseSensitive = ["*.mk", "Makefile"]\n'
    )
    return fresh_classifier

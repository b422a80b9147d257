"""FastAPI application — category and classification endpoints."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("swatch.server")

from server.models import (
    CategoryCreate,
    CategoryCreatedResponse,
    CategoryEntry,
    ClassifyRequest,
    ClassifyResponse,
    ConflictEntry,
    RemovedResponse,
)
from swatch.category import make_category
from swatch.classify import Classifier
from swatch.config import config_path, read_categories, write_categories
from swatch.store import CategoryStore

# Store mutation and classification share one lock; the classifier itself
# assumes a single owner thread.
_lock = threading.Lock()
_classifier: Optional[Classifier] = None
_config_path: Optional[Path] = None


def init_classifier(path: Optional[Path] = None) -> Classifier:
    """Load categories once. No-op when already initialised."""
    global _classifier, _config_path
    if _classifier is None:
        _config_path = path or config_path()
        _classifier = Classifier(read_categories(CategoryStore(), _config_path))
        logger.info("Loaded %d categories from %s", len(_classifier.store), _config_path)
    return _classifier


def _get() -> Classifier:
    return init_classifier()


def _persist() -> None:
    write_categories(_get().store, _config_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_classifier()
    yield


app = FastAPI(title="swatch", version="0.1.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    elapsed = time.monotonic() - start
    if elapsed > 1.0:
        logger.warning(
            "%s %s %d — %.1fs", request.method, request.url.path, response.status_code, elapsed
        )
    elif request.method in ("POST", "DELETE"):
        logger.info(
            "%s %s %d — %.3fs", request.method, request.url.path, response.status_code, elapsed
        )
    return response


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@app.get("/categories", response_model=list[CategoryEntry])
def list_categories():
    with _lock:
        return [CategoryEntry.from_category(i, c) for i, c in enumerate(_get().store.all())]


@app.post("/categories", response_model=CategoryCreatedResponse)
def create_category(body: CategoryCreate):
    category, invalid = make_category(
        body.name,
        body.color,
        suffixes=body.suffixes,
        icase_suffixes=body.suffixes_case_insensitive,
        patterns=body.patterns,
        icase_patterns=body.patterns_case_insensitive,
    )

    with _lock:
        store = _get().store
        store.add(category)
        position = len(store) - 1
        _persist()

    return CategoryCreatedResponse(
        category=CategoryEntry.from_category(position, category),
        invalid_patterns=[p.source for p in invalid],
    )


@app.delete("/categories/{position}", response_model=RemovedResponse)
def delete_category(position: int):
    with _lock:
        store = _get().store
        categories = store.all()
        if not 0 <= position < len(categories):
            raise HTTPException(status_code=404, detail=f"No category at position {position}")
        category = categories[position]
        store.remove(category)
        _persist()
    return RemovedResponse(removed=category.name)


@app.get("/conflicts", response_model=list[ConflictEntry])
def list_conflicts():
    with _lock:
        classifier = _get()
        classifier.index.ensure_built(classifier.store)
        return [
            ConflictEntry(
                suffix=c.suffix,
                case_sensitive=c.case_sensitive,
                previous=c.previous.name,
                current=c.current.name,
            )
            for c in classifier.index.conflicts
        ]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _result(classifier: Classifier, name: str, is_dir: bool = False) -> ClassifyResponse:
    category = classifier.classify(name, is_dir=is_dir)
    if category is None:
        return ClassifyResponse(name=name)
    return ClassifyResponse(name=name, category=category.name, color=category.color.hex)


@app.get("/classify", response_model=ClassifyResponse)
def classify_one(
    name: str = Query(...),
    is_dir: bool = Query(False),
):
    with _lock:
        return _result(_get(), name, is_dir)


@app.post("/classify", response_model=list[ClassifyResponse])
def classify_many(body: ClassifyRequest):
    with _lock:
        classifier = _get()
        return [_result(classifier, name) for name in body.names]

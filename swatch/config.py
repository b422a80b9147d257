"""Load/save ~/.swatch.config (TOML): settings plus [MimeCategory_NN] groups."""
from __future__ import annotations

import logging
import os
import re
import tempfile
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]  # Python < 3.11 backport
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swatch.category import Category, Color
from swatch.defaults import add_default_categories
from swatch.store import CategoryStore

logger = logging.getLogger("swatch.config")

GROUP_PREFIX = "MimeCategory_"
DEFAULT_COLOR = "#b0b0b0"

_DEFAULT: dict[str, Any] = {
    "swatch": {
        "default_color": DEFAULT_COLOR,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8766,
    },
}


def config_path() -> Path:
    # Resolution order:
    #   1. SWATCH_CONFIG_PATH env var
    #   2. ~/.swatch.config
    if "SWATCH_CONFIG_PATH" in os.environ:
        return Path(os.environ["SWATCH_CONFIG_PATH"])
    return Path.home() / ".swatch.config"


def _deep_merge(base: dict, override: dict) -> dict:
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def read_raw(path: Optional[Path] = None) -> dict[str, Any]:
    """Return the parsed TOML file, or {} when it does not exist."""
    path = path or config_path()
    if not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


def _settings(raw: dict[str, Any]) -> dict[str, Any]:
    """Merge the non-group tables over _DEFAULT. A section that is not a table keeps its default."""
    cfg = {section: dict(values) for section, values in _DEFAULT.items()}
    cfg = _deep_merge(cfg, {k: v for k, v in raw.items() if not k.startswith(GROUP_PREFIX)})
    for section, default in _DEFAULT.items():
        if not isinstance(cfg[section], dict):
            logger.warning("Ignoring malformed [%s] section %r", section, cfg[section])
            cfg[section] = dict(default)
    return cfg


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    cfg = _settings(read_raw(path))

    # Env var overrides
    if host := os.environ.get("SWATCH_SERVER_HOST"):
        cfg["server"]["host"] = host
    if port := os.environ.get("SWATCH_SERVER_PORT"):
        cfg["server"]["port"] = int(port)

    return cfg


# Module-level singleton — loaded once per process
_config: dict[str, Any] | None = None


def get_config() -> dict[str, Any]:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_server_config() -> dict[str, Any]:
    return get_config()["server"]


# ---------------------------------------------------------------------------
# Category groups
# ---------------------------------------------------------------------------

class CategoryGroup(BaseModel):
    """One persisted [MimeCategory_NN] table. Bad fields degrade to None / []."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(default=None, alias="Name")
    color: Optional[Color] = Field(default=None, alias="Color")
    patterns_case_insensitive: list[str] = Field(default_factory=list, alias="PatternsCaseInsensitive")
    patterns_case_sensitive: list[str] = Field(default_factory=list, alias="PatternsCaseSensitive")

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        if v is None or (isinstance(v, str) and v.strip()):
            return v
        logger.warning("Ignoring malformed category name %r", v)
        return None

    @field_validator("color", mode="before")
    @classmethod
    def _color(cls, v):
        if v is None:
            return None
        try:
            return Color.parse(v)
        except ValueError:
            logger.warning("Ignoring malformed category color %r", v)
            return None

    @field_validator("patterns_case_insensitive", "patterns_case_sensitive", mode="before")
    @classmethod
    def _patterns(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            logger.warning("Ignoring malformed pattern list %r", v)
            return []
        kept = [p for p in v if isinstance(p, str)]
        if len(kept) != len(v):
            logger.warning("Dropping %d non-string pattern(s)", len(v) - len(kept))
        return kept

    def to_category(self, group_name: str, default_color: Color) -> Category:
        category = Category(self.name or group_name, self.color or default_color)
        category.add_rules(self.patterns_case_insensitive, case_sensitive=False)
        category.add_rules(self.patterns_case_sensitive, case_sensitive=True)
        return category

    @classmethod
    def from_category(cls, category: Category) -> "CategoryGroup":
        return cls(
            name=category.name,
            color=category.color,
            patterns_case_insensitive=category.human_readable_pattern_list(case_sensitive=False),
            patterns_case_sensitive=category.human_readable_pattern_list(case_sensitive=True),
        )


_GROUP_RE = re.compile(rf"^{GROUP_PREFIX}(\d+)$")


def _group_sort_key(name: str) -> tuple[int, str]:
    m = _GROUP_RE.match(name)
    return (int(m.group(1)) if m else 1 << 30, name)


def find_groups(raw: dict[str, Any]) -> list[str]:
    return sorted((k for k in raw if k.startswith(GROUP_PREFIX)), key=_group_sort_key)


def read_categories(store: CategoryStore, path: Optional[Path] = None) -> CategoryStore:
    """
    Replace the store's content with the persisted categories.
    Falls back to the built-in defaults when none are defined.
    """
    raw = read_raw(path)
    cfg = _settings(raw)
    try:
        default_color = Color.parse(cfg["swatch"].get("default_color", DEFAULT_COLOR))
    except ValueError:
        logger.warning("Ignoring malformed default_color %r", cfg["swatch"].get("default_color"))
        default_color = Color.parse(DEFAULT_COLOR)

    store.clear()

    for group_name in find_groups(raw):
        values = raw[group_name]
        if not isinstance(values, dict):
            logger.warning("Skipping %s: not a table", group_name)
            continue
        group = CategoryGroup.model_validate(values)
        store.add(group.to_category(group_name, default_color))

    if not len(store):
        logger.info("No categories configured, using built-in defaults")
        add_default_categories(store)

    return store


def write_categories(store: CategoryStore, path: Optional[Path] = None) -> Path:
    """
    Persist the store in order as [MimeCategory_01], [MimeCategory_02], ...
    Existing category groups are dropped first; other tables are kept.
    """
    path = path or config_path()
    raw = read_raw(path)
    cfg: dict[str, Any] = {k: v for k, v in raw.items() if not k.startswith(GROUP_PREFIX)}

    for i, category in enumerate(store.all()):
        group = CategoryGroup.from_category(category)
        cfg[f"{GROUP_PREFIX}{i + 1:02d}"] = {
            "Name": category.name,
            "Color": category.color.hex,
            "PatternsCaseInsensitive": group.patterns_case_insensitive,
            "PatternsCaseSensitive": group.patterns_case_sensitive,
        }

    _write_toml(path, cfg)
    return path


# ---------------------------------------------------------------------------
# TOML writer
# ---------------------------------------------------------------------------

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\b": "\\b", "\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r"}


def _toml_str(s: str) -> str:
    out = []
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            # TOML basic strings cannot hold raw control characters
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _toml_value(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, str):
        return _toml_str(val)
    if isinstance(val, dict):
        return "{" + ", ".join(f"{_toml_key(k)} = {_toml_value(v)}" for k, v in val.items()) + "}"
    if isinstance(val, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in val) + "]"
    if hasattr(val, "isoformat"):
        return val.isoformat()
    return str(val)


def _toml_key(key: str) -> str:
    return key if re.fullmatch(r"[A-Za-z0-9_-]+", key) else _toml_str(key)


def _is_table_array(val: Any) -> bool:
    return isinstance(val, list) and bool(val) and all(isinstance(v, dict) for v in val)


def _table_lines(header: Optional[str], values: dict, lines: list[str], array: bool = False) -> None:
    """Emit one table; header None is the document root, array=True emits [[header]]."""
    scalars = {k: v for k, v in values.items() if not isinstance(v, dict) and not _is_table_array(v)}
    tables = {k: v for k, v in values.items() if isinstance(v, dict)}
    arrays = {k: v for k, v in values.items() if _is_table_array(v)}

    if header is not None and (array or scalars or not (tables or arrays)):
        lines.append(f"[[{header}]]" if array else f"[{header}]")
        for key, val in scalars.items():
            lines.append(f"{_toml_key(key)} = {_toml_value(val)}")
        lines.append("")
    elif scalars:
        for key, val in scalars.items():
            lines.append(f"{_toml_key(key)} = {_toml_value(val)}")
        lines.append("")

    prefix = f"{header}." if header is not None else ""
    for key, sub in tables.items():
        _table_lines(prefix + _toml_key(key), sub, lines)
    for key, items in arrays.items():
        for item in items:
            _table_lines(prefix + _toml_key(key), item, lines, array=True)


def _write_toml(path: Path, cfg: dict) -> None:
    """Write config dict as TOML, preserving section order. Atomic."""
    lines: list[str] = []
    _table_lines(None, cfg, lines)

    text = "\n".join(lines).rstrip("\n") + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".swatch-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise

import sys

from swatch.classify import Classifier, get_classifier


def load_classifier() -> Classifier:
    """get_classifier() with config errors reported as a CLI failure."""
    try:
        return get_classifier()
    except (OSError, ValueError) as e:
        # tomllib.TOMLDecodeError is a ValueError
        print(f"swatch: cannot read configuration: {e}", file=sys.stderr)
        sys.exit(1)


def get_version() -> str:
    # Prefer pyproject.toml so editable installs always reflect the latest version
    try:
        import tomllib
        from pathlib import Path
        pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except Exception:
        pass
    try:
        from importlib.metadata import version
        return version("swatch")
    except Exception:
        return "unknown"

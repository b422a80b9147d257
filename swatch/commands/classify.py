"""swatch classify — print the category of each name."""
from __future__ import annotations

from swatch.commands import load_classifier


def cmd_classify(args) -> None:
    classifier = load_classifier()
    as_path = getattr(args, "as_path", False)

    for name in args.names:
        if as_path:
            category = classifier.classify_path(name)
        else:
            category = classifier.classify(name)
        if category is None:
            print(f"-\t-\t{name}")
        else:
            print(f"{category.name}\t{category.color.hex}\t{name}")

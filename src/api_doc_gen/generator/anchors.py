"""Anchor generation for in-document Markdown links."""

from collections.abc import Callable, Iterable

UNKNOWN_ANCHOR = "unknown"


def to_anchor(text: str | None) -> str:
    """Lowercase ``text`` and map spaces and dots to hyphens.

    Nothing else is escaped, so names that differ only in punctuation
    may still collide (see find_collisions).
    """
    if text is None or not text.strip():
        return UNKNOWN_ANCHOR
    return text.lower().replace(" ", "-").replace(".", "-")


def endpoint_anchor(method: str, path: str) -> str:
    """Anchor shared by a Quick Reference row and its endpoint heading."""
    stripped = path.replace("/", "").replace("{", "").replace("}", "")
    return f"{method.lower()}-{stripped}"


def schema_anchor(name: str) -> str:
    return f"schema-{to_anchor(name)}"


def find_collisions(
    names: Iterable[str], anchor: Callable[[str], str] = to_anchor
) -> dict[str, list[str]]:
    """Return anchors produced by more than one distinct name.

    ``anchor`` maps a name to its anchor; tag names use to_anchor.
    """
    by_anchor: dict[str, list[str]] = {}
    for name in names:
        owners = by_anchor.setdefault(anchor(name), [])
        if name not in owners:
            owners.append(name)
    return {key: owners for key, owners in by_anchor.items() if len(owners) > 1}

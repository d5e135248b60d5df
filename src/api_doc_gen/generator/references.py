"""Resolve ``$ref`` schema nodes to display names and component targets."""

import logging
from collections.abc import Mapping

from api_doc_gen.parser.base import Schema, SchemaKind

logger = logging.getLogger(__name__)


def resolve_name(schema: Schema | None) -> str | None:
    """Return the component name a reference points to.

    Uses the name recorded at parse time and falls back to the last
    ``/``-separated segment of the pointer. Malformed pointers give None.
    """
    if schema is None or not schema.is_reference:
        return None
    if schema.ref_name:
        return schema.ref_name

    pointer = schema.ref or ""
    last_slash = pointer.rfind("/")
    if 0 <= last_slash < len(pointer) - 1:
        return pointer[last_slash + 1:]

    logger.warning("Cannot derive a schema name from reference %r", pointer)
    return None


def resolve_array_item_name(schema: Schema | None) -> str | None:
    """Name of the referenced item type for an inline array of references."""
    if schema is None or schema.is_reference or schema.primary_type is not SchemaKind.ARRAY:
        return None
    if schema.items is None or not schema.items.is_reference:
        return None
    return resolve_name(schema.items)


def resolve_target(schema: Schema | None, components: Mapping[str, Schema]) -> Schema | None:
    """Follow a reference chain to the concrete component schema.

    Non-reference schemas are returned as-is. Unknown names and cyclic
    chains resolve to None.
    """
    seen: set[str] = set()
    while schema is not None and schema.is_reference:
        name = resolve_name(schema)
        if name is None or name in seen:
            return None
        seen.add(name)
        schema = components.get(name)
    return schema

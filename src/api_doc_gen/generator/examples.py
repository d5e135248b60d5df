"""Example value synthesis for schemas.

Explicit ``example`` values always win. Otherwise a placeholder is built
from the schema's primary type (see TYPE_PRECEDENCE in parser.base):
fixed strings per format, zero-like numbers, one-element arrays and objects
carrying every declared property.
"""

import copy
import json
from collections.abc import Mapping
from typing import Any

from api_doc_gen.generator.references import resolve_name
from api_doc_gen.parser.base import Schema, SchemaKind

STRING_FORMAT_EXAMPLES = {
    "date-time": "2025-01-01T00:00:00Z",
    "date": "2025-01-01",
    "email": "user@example.com",
    "uri": "https://example.com",
    "uuid": "00000000-0000-0000-0000-000000000000",
}
DEFAULT_STRING_EXAMPLE = "string"


def synthesize(
    schema: Schema | None,
    components: Mapping[str, Schema] | None = None,
    _expanding: frozenset[str] = frozenset(),
) -> Any:
    """Build a representative example value for ``schema``.

    References are expanded through ``components``; a reference that is
    unknown, or already being expanded higher up, yields None.
    """
    if schema is None:
        return None
    if schema.example is not None:
        return copy.deepcopy(schema.example)

    kind = schema.kind
    if kind is SchemaKind.REFERENCE:
        name = resolve_name(schema)
        if name is None or name in _expanding or not components or name not in components:
            return None
        return synthesize(components[name], components, _expanding | {name})
    if kind is SchemaKind.STRING:
        return STRING_FORMAT_EXAMPLES.get(schema.format or "", DEFAULT_STRING_EXAMPLE)
    if kind is SchemaKind.INTEGER:
        return 0
    if kind is SchemaKind.NUMBER:
        return 0.0
    if kind is SchemaKind.BOOLEAN:
        return True
    if kind is SchemaKind.ARRAY:
        if schema.items is None:
            return []
        return [synthesize(schema.items, components, _expanding)]
    if kind is SchemaKind.OBJECT:
        return {
            name: synthesize(prop, components, _expanding)
            for name, prop in schema.properties.items()
        }
    if kind is SchemaKind.ENUM:
        return copy.deepcopy(schema.enum[0])
    return None


def example_json(
    schema: Schema | None,
    components: Mapping[str, Schema] | None = None,
    indent: int | None = 2,
) -> str:
    """Serialize the synthesized example; ``indent=None`` gives one line."""
    value = synthesize(schema, components)
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)

"""Read-only data model for a parsed OpenAPI 3.x document.

The loader in ``parser.openapi`` converts raw documents into these models;
the Markdown generator only ever reads them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class SchemaKind(str, Enum):
    """Variant of a schema node."""

    REFERENCE = "reference"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"


# Tie-break for schemas declaring several types (e.g. ["integer", "string"]).
# The first match wins; "null" never takes part.
TYPE_PRECEDENCE = (
    SchemaKind.STRING,
    SchemaKind.INTEGER,
    SchemaKind.NUMBER,
    SchemaKind.BOOLEAN,
    SchemaKind.ARRAY,
    SchemaKind.OBJECT,
)


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True)


class Schema(_Model):
    """A schema node: primitive, array, object, enum or reference."""

    ref: str | None = None  # raw $ref pointer
    ref_name: str | None = None  # component name, when the pointer is local
    types: list[str] = []
    format: str | None = None
    description: str = ""
    items: "Schema | None" = None
    properties: dict[str, "Schema"] = {}
    required: list[str] = []
    enum: list[Any] = []
    example: Any = None

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def primary_type(self) -> SchemaKind | None:
        """The declared type that wins under TYPE_PRECEDENCE, if any."""
        declared = set(self.types)
        for kind in TYPE_PRECEDENCE:
            if kind.value in declared:
                return kind
        return None

    @property
    def kind(self) -> SchemaKind | None:
        if self.is_reference:
            return SchemaKind.REFERENCE
        primary = self.primary_type
        if primary is not None:
            return primary
        if self.properties:
            return SchemaKind.OBJECT
        if self.enum:
            return SchemaKind.ENUM
        return None


class Server(_Model):
    url: str
    description: str = ""


class SecurityScheme(_Model):
    """A security scheme; only the fields relevant to ``type`` are set."""

    type: str  # http / apiKey / oauth2 / openIdConnect
    description: str = ""
    scheme: str | None = None
    bearer_format: str | None = None
    location: str | None = None  # apiKey: header / query / cookie
    name: str | None = None


class Parameter(_Model):
    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    schema_: Schema | None = None
    description: str = ""


class MediaType(_Model):
    schema_: Schema | None = None


class RequestBody(_Model):
    description: str = ""
    content: dict[str, MediaType] = {}


class Response(_Model):
    description: str = ""
    content: dict[str, MediaType] = {}


class Operation(_Model):
    summary: str = ""
    description: str = ""
    tags: list[str] = []
    parameters: list[Parameter] = []
    request_body: RequestBody | None = None
    responses: dict[str, Response] = {}


class PathItem(_Model):
    operations: dict[str, Operation] = {}  # lowercase method -> operation


class Components(_Model):
    security_schemes: dict[str, SecurityScheme] = {}
    schemas: dict[str, Schema] = {}


class Specification(_Model):
    """The whole parsed document."""

    title: str = ""
    version: str = ""
    description: str = ""
    servers: list[Server] = []
    components: Components = Components()
    paths: dict[str, PathItem] = {}

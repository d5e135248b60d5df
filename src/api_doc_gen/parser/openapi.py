"""OpenAPI 3.x document parser.

Loads an OpenAPI JSON (or YAML) file and converts it into the read-only
Specification model consumed by the Markdown generator.
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from api_doc_gen.errors import SpecParseError
from api_doc_gen.parser.base import (
    Components,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Schema,
    SecurityScheme,
    Server,
    Specification,
)
from api_doc_gen.parser.detect import detect_version

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

SCHEMA_POINTER_PREFIX = "#/components/schemas/"


def parse_openapi(file_path: Path) -> Specification:
    """Parse an OpenAPI 3.x file into a Specification."""
    return parse_document(load_document(file_path))


def load_document(file_path: Path) -> dict:
    """Read a JSON or YAML document into plain Python data."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecParseError(f"Cannot read {file_path}: {e}") from e

    try:
        doc = json.loads(text)
    except json.JSONDecodeError:
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SpecParseError(f"{file_path} is neither valid JSON nor YAML: {e}") from e

    if not isinstance(doc, dict):
        raise SpecParseError(f"{file_path} does not contain an OpenAPI object.")
    return doc


def parse_document(doc: dict) -> Specification:
    """Convert a loaded OpenAPI document into a Specification."""
    detect_version(doc)

    problems = []
    info = doc.get("info")
    if not isinstance(info, dict):
        problems.append("'info' must be an object")
        info = {}
    paths = doc.get("paths", {})
    if not isinstance(paths, dict):
        problems.append("'paths' must be an object")
    if problems:
        raise SpecParseError("Invalid OpenAPI document.", problems)

    for key in ("title", "version"):
        if key not in info:
            logger.warning("OpenAPI document has no info.%s", key)

    raw_components = doc.get("components") or {}
    components = Components(
        security_schemes={
            name: _parse_security_scheme(raw)
            for name, raw in (raw_components.get("securitySchemes") or {}).items()
            if isinstance(raw, dict)
        },
        schemas={
            name: _parse_schema(raw)
            for name, raw in (raw_components.get("schemas") or {}).items()
        },
    )

    return Specification(
        title=_text(info.get("title")),
        version=_text(info.get("version")),
        description=_text(info.get("description")),
        servers=[
            Server(url=_text(s.get("url")), description=_text(s.get("description")))
            for s in doc.get("servers") or []
            if isinstance(s, dict)
        ],
        components=components,
        paths={
            str(path): _parse_path_item(item, raw_components)
            for path, item in paths.items()
            if isinstance(item, dict)
        },
    )


def _text(value: Any) -> str:
    """Coerce to str and normalize line endings to LF."""
    if value is None:
        return ""
    return str(value).replace("\r\n", "\n").replace("\r", "\n")


def _deref(raw: Any, components: dict, section: str) -> dict | None:
    """Follow a ``#/components/<section>/<name>`` pointer, if raw is one."""
    if not isinstance(raw, dict):
        return None
    pointer = raw.get("$ref")
    if pointer is None:
        return raw

    prefix = f"#/components/{section}/"
    target = None
    if isinstance(pointer, str) and pointer.startswith(prefix):
        target = (components.get(section) or {}).get(pointer[len(prefix):])
    if not isinstance(target, dict):
        logger.warning("Skipping unresolvable reference %r", pointer)
        return None
    return target


def _parse_path_item(item: dict, components: dict) -> PathItem:
    operations = {}
    for method, raw in item.items():
        method = str(method).lower()
        if method not in HTTP_METHODS or not isinstance(raw, dict):
            continue
        operations[method] = _parse_operation(raw, components)
    return PathItem(operations=operations)


def _parse_operation(raw: dict, components: dict) -> Operation:
    parameters = []
    for p in raw.get("parameters") or []:
        resolved = _deref(p, components, "parameters")
        if resolved is not None:
            parameters.append(_parse_parameter(resolved))

    request_body = None
    if raw.get("requestBody") is not None:
        resolved = _deref(raw["requestBody"], components, "requestBodies")
        if resolved is not None:
            request_body = RequestBody(
                description=_text(resolved.get("description")),
                content=_parse_content(resolved.get("content")),
            )

    responses = {}
    for status_code, resp in (raw.get("responses") or {}).items():
        resolved = _deref(resp, components, "responses")
        if resolved is not None:
            responses[str(status_code)] = Response(
                description=_text(resolved.get("description")),
                content=_parse_content(resolved.get("content")),
            )

    return Operation(
        summary=_text(raw.get("summary")),
        description=_text(raw.get("description")),
        tags=[str(t) for t in raw.get("tags") or []],
        parameters=parameters,
        request_body=request_body,
        responses=responses,
    )


def _parse_security_scheme(raw: dict) -> SecurityScheme:
    return SecurityScheme(
        type=_text(raw.get("type")),
        description=_text(raw.get("description")),
        scheme=raw.get("scheme"),
        bearer_format=raw.get("bearerFormat"),
        location=raw.get("in"),
        name=raw.get("name"),
    )


def _parse_parameter(raw: dict) -> Parameter:
    schema = raw.get("schema")
    return Parameter(
        name=_text(raw.get("name")),
        location=_text(raw.get("in", "query")),
        required=bool(raw.get("required", False)),
        schema_=_parse_schema(schema) if schema is not None else None,
        description=_text(raw.get("description")),
    )


def _parse_content(content: Any) -> dict[str, MediaType]:
    if not isinstance(content, dict):
        return {}
    result = {}
    for content_type, media in content.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        result[str(content_type)] = MediaType(
            schema_=_parse_schema(schema) if schema is not None else None
        )
    return result


def _parse_schema(raw: Any) -> Schema:
    if not isinstance(raw, dict):
        return Schema()

    if "$ref" in raw:
        pointer = str(raw["$ref"])
        name = pointer[len(SCHEMA_POINTER_PREFIX):] if pointer.startswith(SCHEMA_POINTER_PREFIX) else ""
        return Schema(
            ref=pointer,
            ref_name=name if name and "/" not in name else None,
            description=_text(raw.get("description")),
        )

    raw_type = raw.get("type")
    if isinstance(raw_type, str):
        types = [raw_type]
    elif isinstance(raw_type, list):
        types = [str(t) for t in raw_type]
    else:
        types = []
    if raw.get("nullable") is True and "null" not in types:
        types.append("null")

    items = raw.get("items")
    if isinstance(items, list):
        # Tuple-style items: the first entry stands for the element type.
        items = items[0] if items else None

    example = raw.get("example")
    if example is None and isinstance(raw.get("examples"), list) and raw["examples"]:
        example = raw["examples"][0]

    return Schema(
        types=types,
        format=raw.get("format"),
        description=_text(raw.get("description")),
        items=_parse_schema(items) if isinstance(items, dict) else None,
        properties={
            str(name): _parse_schema(prop)
            for name, prop in (raw.get("properties") or {}).items()
        },
        required=[str(r) for r in raw.get("required") or []],
        enum=[_json_value(v) for v in raw.get("enum") or []],
        example=_json_value(example),
    )


def _json_value(value: Any) -> Any:
    """Turn YAML-only scalars (dates, timestamps) into their JSON text form."""
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_value(v) for v in value]
    return value

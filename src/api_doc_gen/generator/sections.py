"""Section composers for the generated Markdown document.

Each ``render_*`` function turns part of the specification into a list of
Markdown lines. They never raise on missing optional data; an empty
section renders a placeholder line instead.
"""

import json
from collections.abc import Mapping
from typing import NamedTuple

from api_doc_gen.generator.anchors import endpoint_anchor, schema_anchor, to_anchor
from api_doc_gen.generator.examples import example_json
from api_doc_gen.generator.references import resolve_array_item_name, resolve_name, resolve_target
from api_doc_gen.generator.samples import render_code_samples
from api_doc_gen.parser.base import (
    Operation,
    Parameter,
    RequestBody,
    Response,
    Schema,
    SchemaKind,
    Specification,
)

UNTAGGED_GROUP = "Other"
GENERATION_MARKER_PREFIX = "*Generated by api-doc-gen"
GENERATION_MARKER = f"{GENERATION_MARKER_PREFIX} - Do not edit manually.*"
BACK_TO_QUICK_REFERENCE = "[↑ Quick Reference](#quick-reference)"

METHOD_DOTS = {
    "GET": "🟢",
    "POST": "🔵",
    "PUT": "🟠",
    "PATCH": "🟡",
    "DELETE": "🔴",
}
DEFAULT_METHOD_DOT = "⚪"


class Endpoint(NamedTuple):
    path: str
    method: str  # uppercase
    operation: Operation


# -- helpers -----------------------------------------------------------------


def sanitize_cell(text: str | None) -> str:
    """Make text safe for a single Markdown table cell."""
    if text is None or not text.strip():
        return ""
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ").replace("|", "\\|")


def first_sentence(summary: str | None) -> str:
    """Summary up to and including the first period, or an em dash if empty."""
    if summary is None or not summary.strip():
        return "—"
    period = summary.find(".")
    result = summary[: period + 1] if period > 0 else summary
    return sanitize_cell(result)


def method_dot(method: str) -> str:
    return METHOD_DOTS.get(method.upper(), DEFAULT_METHOD_DOT)


def status_emoji(status_code: str) -> str:
    if status_code.startswith("2"):
        return "✅"
    if status_code.startswith("4"):
        return "⚠️"
    if status_code.startswith("5"):
        return "❌"
    return "ℹ️"


def schema_type_string(schema: Schema | None) -> str:
    """Short type label for property tables, e.g. ``User[]`` or ``string (uuid)``."""
    if schema is None:
        return "object"
    if schema.is_reference:
        return resolve_name(schema) or "object"

    primary = schema.primary_type
    type_str = primary.value if primary is not None else "object"

    if primary is SchemaKind.ARRAY and schema.items is not None:
        if schema.items.is_reference:
            item_type = resolve_name(schema.items) or "object"
        else:
            item_primary = schema.items.primary_type
            item_type = item_primary.value if item_primary is not None else "object"
        return f"{item_type}[]"

    if schema.format and schema.format.strip():
        return f"{type_str} ({schema.format})"
    return type_str


def group_endpoints(spec: Specification) -> dict[str, list[Endpoint]]:
    """Group operations by first tag, sorted by tag, then path, then method."""
    groups: dict[str, list[Endpoint]] = {}
    for path, item in spec.paths.items():
        for method, operation in item.operations.items():
            tag = operation.tags[0] if operation.tags else UNTAGGED_GROUP
            groups.setdefault(tag, []).append(Endpoint(path, method.upper(), operation))
    return {
        tag: sorted(groups[tag], key=lambda ep: (ep.path, ep.method))
        for tag in sorted(groups)
    }


# -- header / toc / auth -------------------------------------------------------


def render_header(spec: Specification, title: str) -> list[str]:
    lines = [f"# {title}", ""]
    if spec.description.strip():
        lines.extend([spec.description, ""])
    lines.extend([f"**Version:** `{spec.version}`", ""])
    if spec.servers:
        lines.append("**Base URL:**")
        for server in spec.servers:
            suffix = f" - {server.description}" if server.description.strip() else ""
            lines.append(f"- `{server.url}`{suffix}")
        lines.append("")
    lines.extend(["---", ""])
    return lines


def render_table_of_contents(groups: Mapping[str, list[Endpoint]]) -> list[str]:
    lines = [
        "## Table of Contents",
        "",
        "- [Authentication](#authentication)",
        "- [Endpoints](#endpoints)",
        "  - [Quick Reference](#quick-reference)",
    ]
    for tag in groups:
        lines.append(f"  - [{tag}](#{to_anchor(tag)})")
    lines.extend(["- [Schemas](#schemas)", ""])
    return lines


def render_authentication(spec: Specification) -> list[str]:
    lines = ["## Authentication", ""]
    schemes = spec.components.security_schemes
    if not schemes:
        lines.extend(["No authentication required.", ""])
        return lines

    for name, scheme in schemes.items():
        lines.extend([f"### {name}", "", f"- **Type:** `{scheme.type}`"])
        if scheme.type == "http":
            lines.append(f"- **Scheme:** `{scheme.scheme or ''}`")
            if scheme.bearer_format and scheme.bearer_format.strip():
                lines.append(f"- **Bearer Format:** `{scheme.bearer_format}`")
        elif scheme.type == "apiKey":
            lines.append(f"- **In:** `{scheme.location or ''}`")
            lines.append(f"- **Name:** `{scheme.name or ''}`")
        if scheme.description.strip():
            lines.extend(["", scheme.description])
        lines.append("")
    return lines


# -- endpoints -----------------------------------------------------------------


def render_quick_reference(groups: Mapping[str, list[Endpoint]]) -> list[str]:
    lines = [
        "### Quick Reference",
        "",
        "| Method | Endpoint | Description |",
        "|--------|----------|-------------|",
    ]
    for endpoints in groups.values():
        for ep in endpoints:
            anchor = endpoint_anchor(ep.method, ep.path)
            lines.append(
                f"| {method_dot(ep.method)} {ep.method} | [`{ep.path}`](#{anchor}) "
                f"| {first_sentence(ep.operation.summary)} |"
            )
    lines.append("")
    return lines


def render_schema_reference(
    schema: Schema, components: Mapping[str, Schema], indent: int | None = 2
) -> list[str]:
    """Link to a named schema, or show an inline example for anonymous objects."""
    if schema.is_reference:
        name = resolve_name(schema)
        if not name:
            return []
        return [f"Schema: [`{name}`](#{schema_anchor(name)})", ""]

    item_name = resolve_array_item_name(schema)
    if item_name:
        return [f"Schema: Array of [`{item_name}`](#{schema_anchor(item_name)})", ""]

    if schema.properties:
        return ["```json", example_json(schema, components, indent=indent), "```", ""]
    return []


def render_parameters(parameters: list[Parameter], components: Mapping[str, Schema]) -> list[str]:
    lines = [
        "<details>",
        "<summary><strong>Parameters</strong></summary>",
        "",
        "| Name | In  | Type | Required | Description |",
        "|------|-----|------|----------|-------------|",
    ]
    for param in parameters:
        target = resolve_target(param.schema_, components)
        primary = target.primary_type if target is not None else None
        type_str = primary.value if primary is not None else "string"
        required = "✓" if param.required else ""
        lines.append(
            f"| `{sanitize_cell(param.name)}` | {param.location} | `{type_str}` | {required} "
            f"| {sanitize_cell(param.description)} |"
        )
    lines.extend(["", "</details>", ""])
    return lines


def render_request_body(
    request_body: RequestBody, components: Mapping[str, Schema], indent: int | None = 2
) -> list[str]:
    lines = ["**Request Body**", ""]
    if request_body.description.strip():
        lines.extend([request_body.description, ""])
    for content_type, media in request_body.content.items():
        lines.extend([f"**Content-Type:** `{content_type}`", ""])
        if media.schema_ is not None:
            lines.extend(render_schema_reference(media.schema_, components, indent))
    return lines


def render_responses(
    responses: Mapping[str, Response], components: Mapping[str, Schema], indent: int | None = 2
) -> list[str]:
    if not responses:
        return []

    lines = ["**Responses**", "", "| Status | Description |", "|--------|-------------|"]
    success_schemas = []
    for status_code in sorted(responses):
        response = responses[status_code]
        lines.append(f"| {status_emoji(status_code)} {status_code} | {sanitize_cell(response.description)} |")
        if status_code.startswith("2"):
            for media in response.content.values():
                if media.schema_ is not None:
                    success_schemas.append((status_code, media.schema_))
    lines.append("")

    for status_code, schema in success_schemas:
        reference = render_schema_reference(schema, components, indent)
        if reference:
            lines.append(f"**{status_code} Response:**")
            lines.extend(reference)
    return lines


def render_endpoint(
    endpoint: Endpoint,
    languages: frozenset[str],
    components: Mapping[str, Schema],
    indent: int | None = 2,
) -> list[str]:
    path, method, operation = endpoint
    lines = [
        f'<a id="{endpoint_anchor(method, path)}"></a>',
        f"#### {method_dot(method)} {method} `{path}`",
        "",
    ]
    if operation.summary.strip():
        lines.extend([operation.summary, ""])
    if operation.description.strip() and operation.description != operation.summary:
        lines.extend([operation.description, ""])
    if operation.parameters:
        lines.extend(render_parameters(operation.parameters, components))
    if operation.request_body is not None:
        lines.extend(render_request_body(operation.request_body, components, indent))
    lines.extend(render_responses(operation.responses, components, indent))
    lines.extend(render_code_samples(method, path, operation, languages, components))
    lines.extend(["", BACK_TO_QUICK_REFERENCE, "", "---", ""])
    return lines


def render_endpoints(
    groups: Mapping[str, list[Endpoint]],
    languages: frozenset[str],
    components: Mapping[str, Schema],
    indent: int | None = 2,
) -> list[str]:
    lines = ["## Endpoints", ""]
    lines.extend(render_quick_reference(groups))
    for tag, endpoints in groups.items():
        lines.extend([f"### {tag}", ""])
        for ep in endpoints:
            lines.extend(render_endpoint(ep, languages, components, indent))
    return lines


# -- schemas / footer ----------------------------------------------------------


def _is_scalar(value) -> bool:
    return isinstance(value, (str, int, float, bool))


def _enum_literal(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def render_schemas(spec: Specification, indent: int | None = 2) -> list[str]:
    lines = ["## Schemas", ""]
    components = spec.components.schemas
    if not components:
        lines.extend(["No schemas defined.", ""])
        return lines

    for name in sorted(components):
        schema = components[name]
        if schema.is_reference:
            continue
        lines.extend([f'### <a id="{schema_anchor(name)}"></a>`{name}`', ""])
        if schema.description.strip():
            lines.extend([schema.description, ""])

        if schema.properties:
            lines.extend([
                "| Property | Type | Required | Description |",
                "|----------|------|----------|-------------|",
            ])
            for prop_name, prop in schema.properties.items():
                required = "✓" if prop_name in schema.required else ""
                lines.append(
                    f"| `{sanitize_cell(prop_name)}` | `{schema_type_string(prop)}` | {required} "
                    f"| {sanitize_cell(prop.description)} |"
                )
            lines.extend([
                "",
                "<details>",
                "<summary><strong>Example</strong></summary>",
                "",
                "```json",
                example_json(schema, components, indent=indent),
                "```",
                "",
                "</details>",
                "",
            ])
        elif schema.enum:
            lines.extend(["**Enum Values:**", ""])
            lines.extend(f"- `{_enum_literal(value)}`" for value in schema.enum if _is_scalar(value))
            lines.append("")
    return lines


def render_footer() -> list[str]:
    return ["---", "", GENERATION_MARKER]

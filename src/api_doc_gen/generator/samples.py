"""Per-endpoint code samples for the enabled client languages."""

from collections.abc import Mapping

from api_doc_gen.generator.examples import example_json
from api_doc_gen.generator.references import resolve_target
from api_doc_gen.parser.base import Operation, RequestBody, Schema

CSHARP_METHODS = {
    "GET": "Get",
    "POST": "Post",
    "PUT": "Put",
    "DELETE": "Delete",
    "PATCH": "Patch",
}


def request_body_example(
    request_body: RequestBody | None,
    components: Mapping[str, Schema],
    indent: int | None = 2,
) -> str | None:
    """Example JSON for the first JSON media type with a usable schema."""
    if request_body is None:
        return None
    for content_type, media in request_body.content.items():
        if "json" not in content_type.lower() or media.schema_ is None:
            continue
        if resolve_target(media.schema_, components) is None:
            continue
        return example_json(media.schema_, components, indent=indent)
    return None


def render_shell(method: str, path: str, body_json: str | None) -> list[str]:
    lines = [
        "**Shell (curl)**",
        "",
        "```bash",
        f'curl -X {method.upper()} "{{BASE_URL}}{path}" \\',
        '  -H "Authorization: Bearer $TOKEN" \\',
    ]
    if body_json is not None:
        lines.append('  -H "Content-Type: application/json" \\')
        lines.append(f"  -d '{body_json}'")
    else:
        lines.append('  -H "Content-Type: application/json"')
    lines.extend(["```", ""])
    return lines


def render_csharp(method: str, path: str, has_body: bool) -> list[str]:
    call = CSHARP_METHODS.get(method.upper(), "Send")
    lines = [
        "**C# (HttpClient)**",
        "",
        "```csharp",
        "using var client = new HttpClient();",
        "client.DefaultRequestHeaders.Authorization =",
        '    new AuthenticationHeaderValue("Bearer", token);',
        "",
    ]
    if has_body:
        lines.extend([
            "var content = new StringContent(",
            "    JsonSerializer.Serialize(requestBody),",
            "    Encoding.UTF8,",
            '    "application/json");',
            "",
            f"var response = await client.{call}Async(",
            f'    $"{{baseUrl}}{path}",',
            "    content);",
        ])
    else:
        lines.extend([
            f"var response = await client.{call}Async(",
            f'    $"{{baseUrl}}{path}");',
        ])
    lines.extend(["```", ""])
    return lines


def render_javascript(method: str, path: str, has_body: bool) -> list[str]:
    lines = [
        "**JavaScript (fetch)**",
        "",
        "```javascript",
        f"const response = await fetch(`${{BASE_URL}}{path}`, {{",
        f"  method: '{method.upper()}',",
        "  headers: {",
        "    'Authorization': `Bearer ${token}`,",
        "    'Content-Type': 'application/json'",
    ]
    if has_body:
        lines.extend(["  },", "  body: JSON.stringify(requestBody)"])
    else:
        lines.append("  }")
    lines.extend(["});", "```", ""])
    return lines


def render_python(method: str, path: str, has_body: bool) -> list[str]:
    lines = [
        "**Python (requests)**",
        "",
        "```python",
        "import requests",
        "",
        f"response = requests.{method.lower()}(",
        f'    f"{{BASE_URL}}{path}",',
    ]
    if has_body:
        lines.extend([
            '    headers={"Authorization": f"Bearer {token}"},',
            "    json=request_body",
        ])
    else:
        lines.append('    headers={"Authorization": f"Bearer {token}"}')
    lines.extend([")", "```", ""])
    return lines


def render_code_samples(
    method: str,
    path: str,
    operation: Operation,
    languages: frozenset[str],
    components: Mapping[str, Schema],
) -> list[str]:
    """Collapsible block of samples, one per enabled language in fixed order."""
    if not languages:
        return []

    has_body = operation.request_body is not None and bool(operation.request_body.content)
    body_json = request_body_example(operation.request_body, components, indent=None) if has_body else None

    lines = ["<details>", "<summary><strong>Code Samples</strong></summary>", ""]
    if "shell" in languages:
        lines.extend(render_shell(method, path, body_json))
    if "csharp" in languages:
        lines.extend(render_csharp(method, path, has_body))
    if "javascript" in languages:
        lines.extend(render_javascript(method, path, has_body))
    if "python" in languages:
        lines.extend(render_python(method, path, has_body))
    lines.extend(["</details>", ""])
    return lines

import pytest

from api_doc_gen.generator import sections
from api_doc_gen.parser.base import (
    Components,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    Response,
    Schema,
    SecurityScheme,
    Server,
    Specification,
)


def _ref(name):
    return Schema(ref=f"#/components/schemas/{name}", ref_name=name)


class TestTableHelpers:
    @pytest.mark.parametrize(
        "text",
        ["line one\nline two", "a | b", "x\r\ny|z\n", "||\n\n|"],
    )
    def test_sanitize_cell_is_table_safe(self, text):
        cell = sections.sanitize_cell(text)
        assert "\n" not in cell and "\r" not in cell
        assert "|" not in cell.replace("\\|", "")

    def test_sanitize_cell_blank(self):
        assert sections.sanitize_cell(None) == ""
        assert sections.sanitize_cell("  ") == ""

    def test_first_sentence(self):
        assert sections.first_sentence("List pets. With paging.") == "List pets."
        assert sections.first_sentence("No period") == "No period"
        assert sections.first_sentence(".starts with dot") == ".starts with dot"
        assert sections.first_sentence("") == "—"

    @pytest.mark.parametrize(
        "code, emoji",
        [("200", "✅"), ("204", "✅"), ("404", "⚠️"), ("503", "❌"), ("default", "ℹ️"), ("301", "ℹ️")],
    )
    def test_status_emoji(self, code, emoji):
        assert sections.status_emoji(code) == emoji

    def test_method_dot(self):
        assert sections.method_dot("get") == "🟢"
        assert sections.method_dot("OPTIONS") == "⚪"


class TestSchemaTypeString:
    def test_reference(self):
        assert sections.schema_type_string(_ref("User")) == "User"

    def test_array_of_reference(self):
        assert sections.schema_type_string(Schema(types=["array"], items=_ref("User"))) == "User[]"

    def test_array_of_primitive(self):
        assert sections.schema_type_string(Schema(types=["array"], items=Schema(types=["string"]))) == "string[]"

    def test_array_without_items(self):
        assert sections.schema_type_string(Schema(types=["array"])) == "array"

    def test_format(self):
        assert sections.schema_type_string(Schema(types=["integer"], format="int64")) == "integer (int64)"

    def test_untyped(self):
        assert sections.schema_type_string(Schema()) == "object"
        assert sections.schema_type_string(None) == "object"


class TestGroupEndpoints:
    @pytest.fixture
    def spec(self):
        return Specification(paths={
            "/b": PathItem(operations={
                "post": Operation(tags=["Beta", "Alpha"]),
                "get": Operation(tags=["Beta"]),
            }),
            "/a": PathItem(operations={"get": Operation(tags=["Beta"])}),
            "/health": PathItem(operations={"get": Operation()}),
            "/z": PathItem(operations={"delete": Operation(tags=["Alpha"])}),
        })

    def test_first_tag_or_other(self, spec):
        groups = sections.group_endpoints(spec)
        assert list(groups) == ["Alpha", "Beta", "Other"]
        assert [(e.method, e.path) for e in groups["Other"]] == [("GET", "/health")]

    def test_sorted_by_path_then_method(self, spec):
        groups = sections.group_endpoints(spec)
        assert [(e.path, e.method) for e in groups["Beta"]] == [("/a", "GET"), ("/b", "GET"), ("/b", "POST")]

    def test_every_operation_in_exactly_one_group(self, spec):
        groups = sections.group_endpoints(spec)
        grouped = [(e.path, e.method) for eps in groups.values() for e in eps]
        expected = [(p, m.upper()) for p, item in spec.paths.items() for m in item.operations]
        assert sorted(grouped) == sorted(expected)
        assert len(grouped) == len(set(grouped))


class TestHeaderAndAuth:
    def test_header_with_servers(self):
        spec = Specification(
            version="2.0",
            description="Desc",
            servers=[Server(url="https://x", description="Prod"), Server(url="http://y")],
        )
        assert sections.render_header(spec, "My API") == [
            "# My API",
            "",
            "Desc",
            "",
            "**Version:** `2.0`",
            "",
            "**Base URL:**",
            "- `https://x` - Prod",
            "- `http://y`",
            "",
            "---",
            "",
        ]

    def test_header_minimal(self):
        assert sections.render_header(Specification(version="1"), "T") == [
            "# T", "", "**Version:** `1`", "", "---", "",
        ]

    def test_no_security_schemes(self):
        assert sections.render_authentication(Specification()) == [
            "## Authentication",
            "",
            "No authentication required.",
            "",
        ]

    def test_security_schemes(self):
        spec = Specification(components=Components(security_schemes={
            "bearer": SecurityScheme(type="http", scheme="bearer", bearer_format="JWT"),
            "key": SecurityScheme(type="apiKey", location="query", name="api_key", description="Ask us."),
        }))
        assert sections.render_authentication(spec) == [
            "## Authentication",
            "",
            "### bearer",
            "",
            "- **Type:** `http`",
            "- **Scheme:** `bearer`",
            "- **Bearer Format:** `JWT`",
            "",
            "### key",
            "",
            "- **Type:** `apiKey`",
            "- **In:** `query`",
            "- **Name:** `api_key`",
            "",
            "Ask us.",
            "",
        ]


class TestSchemaReference:
    def test_named_reference(self):
        assert sections.render_schema_reference(_ref("User"), {}) == ["Schema: [`User`](#schema-user)", ""]

    def test_array_of_reference(self):
        schema = Schema(types=["array"], items=_ref("User"))
        assert sections.render_schema_reference(schema, {}) == ["Schema: Array of [`User`](#schema-user)", ""]

    def test_inline_object(self):
        schema = Schema(types=["object"], properties={"ok": Schema(types=["boolean"])})
        assert sections.render_schema_reference(schema, {}) == ["```json", '{\n  "ok": true\n}', "```", ""]

    def test_malformed_reference_omitted(self):
        assert sections.render_schema_reference(Schema(ref="broken"), {}) == []

    def test_primitive_renders_nothing(self):
        assert sections.render_schema_reference(Schema(types=["string"]), {}) == []


class TestParameters:
    def test_names_escaped_and_types_resolved(self):
        params = [
            Parameter(name="filter|sort", location="query", description="One | two"),
            Parameter(name="id", location="path", required=True, schema_=_ref("Id")),
        ]
        components = {"Id": Schema(types=["integer"])}
        assert sections.render_parameters(params, components)[3:7] == [
            "| Name | In  | Type | Required | Description |",
            "|------|-----|------|----------|-------------|",
            "| `filter\\|sort` | query | `string` |  | One \\| two |",
            "| `id` | path | `integer` | ✓ |  |",
        ]


class TestResponses:
    def test_table_and_success_schema(self):
        responses = {
            "404": Response(description="Not | found"),
            "200": Response(
                description="OK\nfine",
                content={"application/json": MediaType(schema_=_ref("User"))},
            ),
        }
        assert sections.render_responses(responses, {}) == [
            "**Responses**",
            "",
            "| Status | Description |",
            "|--------|-------------|",
            "| ✅ 200 | OK fine |",
            "| ⚠️ 404 | Not \\| found |",
            "",
            "**200 Response:**",
            "Schema: [`User`](#schema-user)",
            "",
        ]

    def test_no_responses(self):
        assert sections.render_responses({}, {}) == []


class TestSchemas:
    def test_placeholder_when_empty(self):
        assert sections.render_schemas(Specification()) == ["## Schemas", "", "No schemas defined.", ""]

    def test_sorted_and_rendered(self):
        spec = Specification(components=Components(schemas={
            "Zed": Schema(types=["string"], enum=["a", 1, True, None, {"k": 1}, [2]]),
            "Alias": _ref("Zed"),
            "Account.Info": Schema(
                types=["object"],
                description="An account.",
                required=["id"],
                properties={
                    "id": Schema(types=["integer"], description="Key\nvalue"),
                    "a|b": Schema(types=["string"]),
                },
            ),
        }))
        assert sections.render_schemas(spec) == [
            "## Schemas",
            "",
            '### <a id="schema-account-info"></a>`Account.Info`',
            "",
            "An account.",
            "",
            "| Property | Type | Required | Description |",
            "|----------|------|----------|-------------|",
            "| `id` | `integer` | ✓ | Key value |",
            "| `a\\|b` | `string` |  |  |",
            "",
            "<details>",
            "<summary><strong>Example</strong></summary>",
            "",
            "```json",
            '{\n  "id": 0,\n  "a|b": "string"\n}',
            "```",
            "",
            "</details>",
            "",
            '### <a id="schema-zed"></a>`Zed`',
            "",
            "**Enum Values:**",
            "",
            "- `a`",
            "- `1`",
            "- `true`",
            "",
        ]


def test_footer():
    assert sections.render_footer() == ["---", "", sections.GENERATION_MARKER]

"""Markdown generator: assembles all sections into one document."""

import logging
from collections.abc import Iterable

from api_doc_gen.config import GeneratorConfig
from api_doc_gen.errors import ConfigurationError
from api_doc_gen.generator import sections
from api_doc_gen.generator.anchors import endpoint_anchor, find_collisions, schema_anchor, to_anchor
from api_doc_gen.parser.base import Specification

logger = logging.getLogger(__name__)


class MarkdownGenerator:
    """Renders a Specification as GitHub-flavoured Markdown.

    Sections are emitted in a fixed order: header, table of contents,
    authentication, endpoints, schemas, footer. The same input always
    produces byte-identical output.
    """

    def __init__(self, title: str, code_samples: Iterable[str], *, json_indent: int | None = 2):
        if title is None:
            raise ConfigurationError("A documentation title is required.")
        if code_samples is None:
            raise ConfigurationError("A code sample language set is required (it may be empty).")
        self.config = GeneratorConfig(title=title, code_samples=code_samples, json_indent=json_indent)

    def generate(self, spec: Specification) -> str:
        """Return the complete Markdown document for ``spec``."""
        groups = sections.group_endpoints(spec)
        schemas = spec.components.schemas
        indent = self.config.json_indent
        self._warn_on_anchor_collisions(groups, schemas)

        lines: list[str] = []
        lines.extend(sections.render_header(spec, self.config.title))
        lines.extend(sections.render_table_of_contents(groups))
        lines.extend(sections.render_authentication(spec))
        lines.extend(sections.render_endpoints(groups, self.config.code_samples, schemas, indent))
        lines.extend(sections.render_schemas(spec, indent))
        lines.extend(sections.render_footer())
        return "\n".join(lines) + "\n"

    def _warn_on_anchor_collisions(self, groups, schemas) -> None:
        endpoints = [f"{ep.method} {ep.path}" for eps in groups.values() for ep in eps]
        checks = (
            ("tag", groups.keys(), to_anchor),
            ("schema", schemas.keys(), schema_anchor),
            ("endpoint", endpoints, _endpoint_label_anchor),
        )
        for kind, names, anchor in checks:
            for key, owners in find_collisions(names, anchor).items():
                logger.warning(
                    "%s names %s share the anchor '%s'; links will point to the first one",
                    kind.capitalize(), ", ".join(repr(o) for o in owners), key,
                )


def _endpoint_label_anchor(label: str) -> str:
    method, path = label.split(" ", 1)
    return endpoint_anchor(method, path)

"""CLI entry point for api-doc-gen."""

import logging
from pathlib import Path

import click

from api_doc_gen.config import DEFAULT_CODE_SAMPLES, DEFAULT_TITLE, parse_languages
from api_doc_gen.errors import ApiDocGenError
from api_doc_gen.generator.markdown import MarkdownGenerator
from api_doc_gen.generator.verify import diff_documents
from api_doc_gen.parser.openapi import parse_openapi


def _render(doc_path: Path, title: str | None, code_samples: str) -> str:
    """Parse the OpenAPI document and render it as Markdown."""
    click.echo(f"Reading OpenAPI spec from {doc_path}...")
    try:
        spec = parse_openapi(doc_path)
        click.echo(f"Parsed: {spec.title} {spec.version}")
        generator = MarkdownGenerator(title or spec.title or DEFAULT_TITLE, parse_languages(code_samples))
        return generator.generate(spec)
    except ApiDocGenError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", count=True, help="Enable log output: -v for INFO, -vv for DEBUG.")
def main(verbose: int):
    """api-doc-gen: GitHub-friendly Markdown from OpenAPI 3.x specifications."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Output Markdown file.")
@click.option("-t", "--title", default=None, envvar="API_DOC_GEN_TITLE", help="Documentation title (defaults to info.title).")
@click.option("-c", "--code-samples", default=DEFAULT_CODE_SAMPLES, show_default=True, envvar="API_DOC_GEN_CODE_SAMPLES",
              help="Comma-separated code sample languages: shell, csharp, javascript, python.")
def generate(doc_path: Path, output: Path, title: str | None, code_samples: str):
    """Generate Markdown documentation from an OpenAPI document."""
    markdown = _render(doc_path, title, code_samples)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    click.echo(f"Generated {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--against", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Committed Markdown file to compare with.")
@click.option("-t", "--title", default=None, envvar="API_DOC_GEN_TITLE", help="Documentation title (defaults to info.title).")
@click.option("-c", "--code-samples", default=DEFAULT_CODE_SAMPLES, show_default=True, envvar="API_DOC_GEN_CODE_SAMPLES",
              help="Comma-separated code sample languages: shell, csharp, javascript, python.")
def check(doc_path: Path, against: Path, title: str | None, code_samples: str):
    """Fail if the committed documentation differs from a fresh rendering."""
    markdown = _render(doc_path, title, code_samples)
    committed = against.read_text(encoding="utf-8")

    diff = diff_documents(committed, markdown, expected_name=str(against), actual_name="generated")
    if diff:
        click.echo(diff)
        raise click.ClickException(f"{against} is out of date; regenerate it with 'api-doc-gen generate'.")
    click.echo(f"{against} is up to date.")

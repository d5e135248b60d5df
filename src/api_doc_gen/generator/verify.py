"""Compare generated documents, ignoring the generation marker line.

Used to check that committed documentation is still up to date with its
OpenAPI source.
"""

import difflib

from api_doc_gen.generator.sections import GENERATION_MARKER_PREFIX


def strip_generation_marker(text: str) -> list[str]:
    """Return the document's lines without the footer marker line.

    Only the last non-blank line is considered; it matches the marker
    written by any api-doc-gen version.
    """
    lines = text.splitlines()
    last = len(lines) - 1
    while last >= 0 and not lines[last].strip():
        last -= 1
    if last >= 0 and lines[last].strip().startswith(GENERATION_MARKER_PREFIX):
        del lines[last]
    return lines


def documents_match(expected: str, actual: str) -> bool:
    return strip_generation_marker(expected) == strip_generation_marker(actual)


def diff_documents(expected: str, actual: str, expected_name: str = "committed", actual_name: str = "generated") -> str:
    """Unified diff of two documents, empty when they match."""
    diff = difflib.unified_diff(
        strip_generation_marker(expected),
        strip_generation_marker(actual),
        fromfile=expected_name,
        tofile=actual_name,
        lineterm="",
    )
    return "\n".join(diff)

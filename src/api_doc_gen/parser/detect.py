"""Detect which OpenAPI dialect a loaded document uses."""

from api_doc_gen.errors import UnsupportedSpecError

SUPPORTED_MAJOR = "3"


def detect_version(doc: dict) -> str:
    """Return the document's OpenAPI version string.

    Raises UnsupportedSpecError for Swagger 2.0, non-3.x versions and
    documents that do not declare ``openapi`` at all.
    """
    if "swagger" in doc:
        raise UnsupportedSpecError(
            f"Swagger {doc['swagger']} documents are not supported; convert to OpenAPI 3.x first."
        )
    version = doc.get("openapi")
    if version is None:
        raise UnsupportedSpecError("Document does not declare an 'openapi' version.")

    version = str(version)
    if version.split(".")[0] != SUPPORTED_MAJOR:
        raise UnsupportedSpecError(f"Unsupported OpenAPI version: {version}")
    return version

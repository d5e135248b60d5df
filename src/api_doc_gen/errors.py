"""Error types raised by api-doc-gen.

Generation itself never fails on missing optional data; these errors cover
bad configuration and documents that cannot be turned into a specification.
"""


class ApiDocGenError(Exception):
    """Base class for all api-doc-gen errors."""


class ConfigurationError(ApiDocGenError):
    """Raised when the generator is created with missing or invalid settings."""


class SpecParseError(ApiDocGenError):
    """Raised when an OpenAPI document cannot be read or is structurally broken."""

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.problems = problems or []

    def __str__(self) -> str:
        if not self.problems:
            return self.message
        details = "\n".join(f"  - {p}" for p in self.problems)
        return f"{self.message}\n{details}"


class UnsupportedSpecError(SpecParseError):
    """Raised for documents that are not OpenAPI 3.x (e.g. Swagger 2.0)."""

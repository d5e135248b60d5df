"""Generator settings shared by the CLI and the Markdown generator."""

from pydantic import BaseModel, ConfigDict, field_validator

SUPPORTED_LANGUAGES = ("shell", "csharp", "javascript", "python")
DEFAULT_CODE_SAMPLES = "shell,csharp"
DEFAULT_TITLE = "API Documentation"


def parse_languages(text: str) -> list[str]:
    """Split a comma-separated language list, dropping blanks."""
    return [part.strip() for part in text.split(",") if part.strip()]


class GeneratorConfig(BaseModel):
    """Per-call generation settings.

    Unrecognised code sample languages are dropped silently; matching is
    case-insensitive. ``json_indent=None`` renders schema examples compactly.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    code_samples: frozenset[str] = frozenset()
    json_indent: int | None = 2

    @field_validator("code_samples", mode="before")
    @classmethod
    def _keep_supported(cls, value):
        if value is None:
            raise ValueError("code_samples must not be None")
        if isinstance(value, str):
            value = parse_languages(value)
        return frozenset(
            lang.lower() for lang in value if lang.lower() in SUPPORTED_LANGUAGES
        )

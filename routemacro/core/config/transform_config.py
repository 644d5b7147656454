"""Transform configuration for routemacro.

Environment Variables:
    ROUTEMACRO_MACRO_NAME=definePage
    ROUTEMACRO_EXPORT_PREFIX="export default "
    ROUTEMACRO_ISOLATE_MARKER=definePage
    ROUTEMACRO_SOURCEMAP=true
    ROUTEMACRO_SOURCEMAP_HIRES=true
"""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MACRO_NAME = "definePage"
DEFAULT_EXPORT_PREFIX = "export default "

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TransformConfig(BaseSettings):
    """Settings shared by the transform and the route info extractor."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEMACRO_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    macro_name: str = Field(
        default=DEFAULT_MACRO_NAME,
        description="Callee name recognised as the route macro",
    )

    export_prefix: str = Field(
        default=DEFAULT_EXPORT_PREFIX,
        description="Text prepended to the macro argument in isolate mode",
    )

    isolate_marker: str | None = Field(
        default=None,
        description=(
            "Substring of the document id selecting isolate mode "
            "(defaults to the macro name)"
        ),
    )

    sourcemap: bool = Field(
        default=True, description="Generate a source map for changed output"
    )

    sourcemap_hires: bool = Field(
        default=True,
        description="Emit one mapping segment per character instead of per line",
    )

    @field_validator("macro_name")
    @classmethod
    def validate_macro_name(cls, v: str) -> str:
        """Validate that the macro name is a plain JavaScript identifier."""
        if not _JS_IDENTIFIER.match(v):
            raise ValueError(f"Invalid macro name '{v}'. Must be a JavaScript identifier")
        return v

    @field_validator("isolate_marker")
    @classmethod
    def validate_isolate_marker(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Isolate marker cannot be empty")
        return v

    @property
    def effective_isolate_marker(self) -> str:
        """Marker used to derive isolate mode from a document id."""
        return self.isolate_marker or self.macro_name

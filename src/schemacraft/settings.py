"""Rendering settings for complete schema documents."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"


class RenderSettings(BaseModel):
    """Options for ``render_document`` and ``dumps_schema``."""
    dialect: str = Field(DRAFT_2020_12, description="URI emitted as the document's $schema")
    include_dialect: bool = Field(True, description="Emit $schema at the document root")
    indent: Optional[int] = Field(2, description="Indentation for dumps_schema; None for one line")
    ensure_ascii: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"indent must be >= 0, got {v}")
        return v

    @field_validator("dialect")
    @classmethod
    def validate_dialect(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"dialect must be an http(s) URI, got '{v}'")
        return v

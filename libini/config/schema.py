"""Configuration schema definitions using Pydantic for validation.

Using Pydantic ensures configuration errors are caught early with clear
error messages instead of surfacing as decode failures mid-parse.
"""

import codecs
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

_ERROR_HANDLERS = {
    "strict",
    "ignore",
    "replace",
    "backslashreplace",
    "surrogateescape",
}


class ParserConfig(BaseModel):
    """Configuration for IniParser.

    Attributes:
        encoding: Text encoding of the INI source.
        errors: Codec error handler used while decoding.
        max_workers: Thread count of the shared async parse pool.
        strip_section_names: Drop whitespace around section names.
    """

    encoding: str = "utf-8"
    errors: str = "strict"
    max_workers: int = Field(default=4, ge=1, le=64)
    strip_section_names: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known to the codecs registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding '{v}'") from e
        return v

    @field_validator("errors")
    @classmethod
    def validate_errors(cls, v: str) -> str:
        """Validate the codec error handler name."""
        if v not in _ERROR_HANDLERS:
            raise ValueError(
                f"Invalid error handler '{v}'. Valid handlers: {sorted(_ERROR_HANDLERS)}"
            )
        return v

    @classmethod
    def default(cls) -> "ParserConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

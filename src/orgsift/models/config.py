"""Configuration models for orgsift."""

import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from org_outline.markup import RenderMode
from orgsift.services.exceptions import RenderModeConflictError, UnsupportedFormatError


SUPPORTED_FORMATS = ("json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_render_mode(html: bool, markdown: bool) -> RenderMode:
    """Turn the --html/--markdown flags into a single render mode.

    Raises:
        RenderModeConflictError: If both flags are set
    """
    if html and markdown:
        raise RenderModeConflictError()
    if html:
        return RenderMode.HTML
    if markdown:
        return RenderMode.MARKDOWN
    return RenderMode.PLAIN


def resolve_output_format(output_format: str) -> str:
    """Normalize and check an output format name.

    Raises:
        UnsupportedFormatError: If the format is not json or yaml
    """
    normalized = output_format.strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(output_format, SUPPORTED_FORMATS)
    return normalized


class OutputConfig(BaseModel):
    """Defaults for serialized output."""

    format: str = Field(
        default="json",
        description="Output format: json or yaml"
    )

    include_level: bool = Field(
        default=False,
        description="Include the headline level in each record"
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Reject formats we cannot write."""
        try:
            return resolve_output_format(v)
        except UnsupportedFormatError as e:
            raise ValueError(str(e)) from e

    model_config = {"frozen": True}


class RenderConfig(BaseModel):
    """Default render mode for titles and content."""

    mode: RenderMode = Field(
        default=RenderMode.PLAIN,
        description="plain, html or markdown"
    )

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Structured logging settings."""

    level: str = Field(
        default="INFO",
        description="DEBUG, INFO, WARNING or ERROR"
    )

    file: Optional[Path] = Field(
        default=None,
        description="Log file (default: ~/.cache/orgsift/logs/orgsift.log)"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v} (must be one of: {', '.join(LOG_LEVELS)})")
        return level

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for orgsift. Every section is optional."""

    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
    render: RenderConfig = Field(default_factory=RenderConfig, description="Render settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    model_config = {"frozen": True}


class ParseOptions(BaseModel):
    """Everything one `orgsift parse` run needs besides the input text.

    Patterns are compiled regular expressions; None disables the filter.
    """

    min_level: Optional[int] = Field(default=None, ge=1)
    max_level: Optional[int] = Field(default=None, ge=1)
    title_pattern: Optional[re.Pattern] = None
    custom_id_pattern: Optional[re.Pattern] = None
    section_title_pattern: Optional[re.Pattern] = None
    section_custom_id_pattern: Optional[re.Pattern] = None
    render_mode: RenderMode = RenderMode.PLAIN
    include_level: bool = False
    output_format: str = "json"

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        try:
            return resolve_output_format(v)
        except UnsupportedFormatError as e:
            raise ValueError(str(e)) from e

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def from_flags(cls, html: bool = False, markdown: bool = False, **fields) -> "ParseOptions":
        """Build options from CLI-style flags.

        The render mode is resolved before anything else so that a conflict
        is reported without touching the input.

        Raises:
            RenderModeConflictError: If html and markdown are both set
            UnsupportedFormatError: If output_format is not supported
        """
        render_mode = resolve_render_mode(html, markdown)
        if "output_format" in fields:
            fields["output_format"] = resolve_output_format(fields["output_format"])
        return cls(render_mode=render_mode, **fields)

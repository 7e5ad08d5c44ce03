"""
Configuration for renderkit.

RenderSettings groups the per-renderer configuration models and can be
loaded from a YAML or JSON file. Values not present in the file keep their
defaults, which match the renderer factories (json(), xml(), yaml()).

Example settings file:
    json:
      escape_html: true
      indent: "    "
    xml:
      header: false
    templates:
      directories: [templates, vendor/templates]
      extension: .html
    logging:
      level: debug
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from renderkit.buffer import BufferConfig, BufferRenderer
from renderkit.renderer import Renderer
from renderkit.renderers import (
    BinaryRenderer,
    CSVRenderer,
    JSONConfig,
    JSONRenderer,
    TextRenderer,
    XMLConfig,
    XMLRenderer,
    YAMLConfig,
    YAMLRenderer,
)
from renderkit.templates.loaders import CompositeLoader, FSLoader, Loader, LoaderConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FORMATS = ("text", "json", "xml", "csv", "yaml", "binary")

# Renderer fields that differ from the bare config models
_FACTORY_DEFAULTS: dict[str, dict[str, Any]] = {
    "json": {"escape_html": True, "indent": "  "},
    "xml": {"indent": "  ", "header": True},
}


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Log level",
    )
    format: str = Field(
        default=LOG_FORMAT,
        description="Log record format string",
    )


class BufferSettings(BaseModel):
    """Buffering applied to every renderer built from settings."""

    enabled: bool = Field(
        default=False,
        description="Render into memory and write only on success",
    )
    initial_size: int = Field(
        default=0,
        ge=0,
        description="Expected output size in bytes; a sizing hint only",
    )


class TemplateSettings(BaseModel):
    """Where the CLI looks for templates."""

    directories: list[str] = Field(
        default_factory=list,
        description="Template directories in priority order; earlier entries win",
    )
    extension: str = Field(
        default="",
        description="Only files with this extension are templates; empty keeps all",
    )
    html: bool = Field(
        default=True,
        description="Render templates with HTML autoescaping",
    )

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Validate the extension includes its leading dot."""
        if v and not v.startswith("."):
            raise ValueError(f"Extension must start with '.': {v!r}")
        return v

    def loader(self) -> Loader:
        """Build a loader over the configured directories.

        Raises:
            ValueError: If no directories are configured
            InvalidRootError: If a directory does not exist
        """
        if not self.directories:
            raise ValueError("No template directories configured")
        loaders = [FSLoader(LoaderConfig(root=d, extension=self.extension)) for d in self.directories]
        if len(loaders) == 1:
            return loaders[0]
        return CompositeLoader(loaders, LoaderConfig(extension=self.extension))


class RenderSettings(BaseModel):
    """Top-level renderkit configuration."""

    model_config = ConfigDict(populate_by_name=True)

    json_: JSONConfig = Field(
        default_factory=lambda: JSONConfig(**_FACTORY_DEFAULTS["json"]),
        alias="json",
        description="JSON renderer configuration",
    )
    xml: XMLConfig = Field(
        default_factory=lambda: XMLConfig(**_FACTORY_DEFAULTS["xml"]),
        description="XML renderer configuration",
    )
    yaml: YAMLConfig = Field(
        default_factory=YAMLConfig,
        description="YAML renderer configuration",
    )
    buffer: BufferSettings = Field(
        default_factory=BufferSettings,
        description="Buffering configuration",
    )
    templates: TemplateSettings = Field(
        default_factory=TemplateSettings,
        description="Template lookup configuration",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @model_validator(mode="before")
    @classmethod
    def apply_factory_defaults(cls, data: Any) -> Any:
        """Fill renderer fields missing from a section with the factory defaults."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("json", "json_", "xml"):
            section = data.get(key)
            if isinstance(section, dict):
                data[key] = {**_FACTORY_DEFAULTS[key.rstrip("_")], **section}
        return data

    def renderer(self, format_name: str, buffered: bool | None = None) -> Renderer:
        """Build the renderer for format_name from these settings.

        Args:
            format_name: One of FORMATS
            buffered: Override buffer.enabled

        Raises:
            ValueError: If format_name is unknown
        """
        if format_name == "text":
            renderer: Renderer = TextRenderer()
        elif format_name == "json":
            renderer = JSONRenderer(self.json_)
        elif format_name == "xml":
            renderer = XMLRenderer(self.xml)
        elif format_name == "csv":
            renderer = CSVRenderer()
        elif format_name == "yaml":
            renderer = YAMLRenderer(self.yaml)
        elif format_name == "binary":
            renderer = BinaryRenderer()
        else:
            raise ValueError(f"Unknown format {format_name!r}; expected one of {', '.join(FORMATS)}")

        if buffered is None:
            buffered = self.buffer.enabled
        if buffered:
            renderer = BufferRenderer(renderer, BufferConfig(initial_size=self.buffer.initial_size))
        return renderer


def load_yaml(config_file: str | Path) -> dict[str, Any]:
    """Load a YAML or JSON settings file.

    Args:
        config_file: Path to a .yaml, .yml or .json file

    Returns:
        Parsed mapping; empty when the file does not exist or is empty

    Raises:
        ValueError: If the file has the wrong extension or cannot be parsed
    """
    config_path = Path(config_file).expanduser()

    if not config_path.exists():
        return {}

    file_ext = config_path.suffix.lower()
    if file_ext not in [".yaml", ".yml", ".json"]:
        raise ValueError(
            f"Config file must have .yaml, .yml, or .json extension, got: {file_ext}\n"
            f"File: {config_path}"
        )

    try:
        content = config_path.read_text(encoding="utf-8")
        if file_ext == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at the top level: {config_path}")
    return data


def load_settings(config_file: str | Path | None = None) -> RenderSettings:
    """Load and validate settings, falling back to defaults.

    Args:
        config_file: Optional path to a settings file

    Returns:
        Validated RenderSettings

    Raises:
        ValueError: If the file is invalid
    """
    if config_file is None:
        return RenderSettings()

    config_dict = load_yaml(config_file)
    try:
        settings = RenderSettings.model_validate(config_dict)
    except Exception as e:
        raise ValueError(
            f"Configuration validation failed: {e}\nPlease check your config file: {config_file}"
        ) from e

    logger.debug(f"Loaded settings from {config_file}")
    return settings


def setup_logging(verbose: bool = False, level: str | None = None, fmt: str = LOG_FORMAT) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: If True, enable DEBUG level logging regardless of level
        level: Level name such as "info"; defaults to WARNING
        fmt: Log record format string
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "warning").upper())
    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt=LOG_DATE_FORMAT,
    )

"""Configuration management for refviz using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".refviz.json"


class Direction(str, Enum):
    """Graphviz ``rankdir`` layout directions."""
    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"


class OutputFormat(str, Enum):
    """Output format types."""
    DOT = "dot"
    SVG = "svg"
    PNG = "png"
    PDF = "pdf"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DrawConfig(BaseModel):
    """Traversal and filtering configuration section."""
    direction: Direction = Direction.TB
    treat_as_primitive: list[str] = Field(alias="treatAsPrimitive", default_factory=list)
    ignore_fields: list[str] = Field(alias="ignoreFields", default_factory=list)
    show_field_names_in_labels: bool = Field(alias="showFieldNamesInLabels", default=True)
    ignore_private_fields: bool = Field(alias="ignorePrivateFields", default=False)
    ignore_null_valued_fields: bool = Field(alias="ignoreNullValuedFields", default=False)

    @field_validator("treat_as_primitive")
    @classmethod
    def validate_class_names(cls, v):
        for name in v:
            if not name or name.startswith(".") or name.endswith("."):
                raise ValueError(f"invalid class or module name: '{name}'")
        return v

    model_config = ConfigDict(populate_by_name=True)


class StylingConfig(BaseModel):
    """Styling configuration section."""
    field_attributes: dict[str, str] = Field(alias="fieldAttributes", default_factory=dict)
    class_attributes: dict[str, str] = Field(alias="classAttributes", default_factory=dict)
    highlight_new_objects: bool = Field(alias="highlightNewObjects", default=False)
    highlight_changing_array_elements: bool = Field(alias="highlightChangingArrayElements", default=False)

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.DOT
    dot_executable: str = Field(alias="dotExecutable", default="dot")

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class RefvizConfig(BaseModel):
    """Complete refviz configuration model."""
    draw: DrawConfig = Field(default_factory=DrawConfig)
    styling: StylingConfig = Field(default_factory=StylingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> RefvizConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .refviz.json

    Returns:
        RefvizConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return RefvizConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .refviz.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> RefvizConfig:
    """Create default configuration."""
    return RefvizConfig()

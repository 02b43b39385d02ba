"""
Configuration loading and validation for OpenAPI Autodoc.

This module reads the optional YAML configuration file and validates it
into nested section models whose defaults apply to every missing key.
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


class ParserConfig(BaseModel):
    """Configuration for source unit discovery and parsing."""

    exclude_patterns: list[str] = Field(
        default=["test_*.py", "*_test.py", "conftest.py", "*_pb2.py", "*_pb2_grpc.py"],
        description="File name patterns skipped when scanning a package directory.",
    )
    generated_markers: list[str] = Field(
        default=["# Code generated", "# Generated by", "DO NOT EDIT"],
        description="Markers on the first line of a generated source unit.",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to read source units.",
    )
    status_fields: list[str] = Field(
        default=["status", "status_code"],
        description="Keyword names read as the status of a returned response.",
    )


class GeneratorConfig(BaseModel):
    """Configuration for document assembly."""

    openapi_version: str = Field(
        default="3.1.0",
        description="Value of the document's `openapi` field.",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads used to resolve handler information.",
    )
    strict_annotations: bool = Field(
        default=False,
        description="Abort the build on malformed annotation values.",
    )
    require_source: bool = Field(
        default=False,
        description="Abort the build when a handler's source cannot be located.",
    )
    default_media_type: str = Field(
        default="application/json",
        description="Media type used for error responses.",
    )


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    format: Literal["json", "yaml", "html"] = Field(
        default="json",
        description="Serialization format of the generated document.",
    )
    indent: int = Field(
        default=2,
        ge=0,
        description="Indentation used by the JSON formatter.",
    )


class Config(BaseModel):
    """Root configuration model for OpenAPI Autodoc."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


CONFIG_FILE_NAMES = (".openapi-autodoc.yaml", ".openapi-autodoc.yml")


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load a YAML configuration file.

    Missing sections and keys keep their defaults.

    Args:
        config_path: The file to read, or None for the defaults.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the file is not YAML or does not validate.
    """
    if config_path is None:
        return Config()

    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping of sections")

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Find the nearest `.openapi-autodoc.yaml` (or `.yml`) at or above start_path.

    Returns:
        The file, or None if no directory up to the root holds one.
    """
    start = start_path.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None

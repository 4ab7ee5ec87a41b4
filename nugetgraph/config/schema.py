"""Configuration schema definitions using Pydantic for validation.

Strongly-typed configuration for the parser, the lock-file detector and the
exporters. Using Pydantic ensures configuration errors are caught early with
clear error messages.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ParserConfig(BaseModel):
    """Configuration for the lock-file parser.

    Attributes:
        max_depth: Depth at which tree expansion stops (the node at this
            depth is emitted without children).
        framework: Default target framework filter (substring match).
    """

    max_depth: int = Field(default=10, ge=1, le=100)
    framework: Optional[str] = None

    model_config = {"extra": "allow"}


class DetectorConfig(BaseModel):
    """Configuration for lock-file discovery.

    Attributes:
        lock_file_name: File name to look for.
        ignore_dirs: Directory names never descended into. ``bin`` is the
            build output folder; lock-files live under ``obj``.
        extra_ignore_patterns: Additional glob patterns to ignore.
        respect_gitignore: Whether root .gitignore patterns apply. Off by
            default because .NET .gitignore files usually exclude ``obj/``.
    """

    lock_file_name: str = "project.assets.json"
    ignore_dirs: List[str] = Field(
        default_factory=lambda: ["bin", ".vs", ".idea", "node_modules"]
    )
    extra_ignore_patterns: List[str] = Field(default_factory=list)
    respect_gitignore: bool = False

    model_config = {"extra": "allow"}

    @field_validator("lock_file_name")
    @classmethod
    def validate_lock_file_name(cls, v: str) -> str:
        """Reject empty names and names containing path separators."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid lock_file_name: {v!r}")
        return v


class ExportConfig(BaseModel):
    """Configuration for graph export.

    Attributes:
        indent: JSON indentation.
        include_summary: Whether JSON output carries a summary block.
    """

    indent: int = Field(default=2, ge=0, le=8)
    include_summary: bool = True

    model_config = {"extra": "allow"}


class GraphBuildConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        parser: Lock-file parser configuration.
        detector: Lock-file discovery configuration.
        export: Export configuration.
    """

    parser: ParserConfig = Field(default_factory=ParserConfig)
    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @classmethod
    def default(cls) -> "GraphBuildConfig":
        """Return configuration with built-in defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphBuildConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            GraphBuildConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

"""Configuration schema and validation for nugetgraph."""

from .schema import (
    DetectorConfig,
    ExportConfig,
    GraphBuildConfig,
    ParserConfig,
)

__all__ = [
    "DetectorConfig",
    "ExportConfig",
    "GraphBuildConfig",
    "ParserConfig",
]

"""Lock-file parsers and detectors."""

from nugetgraph.parsers.base import (
    BaseDetector,
    ConfigurationError,
    DetectionError,
    FileReader,
    LocalFileReader,
    RecoverableError,
)

__all__ = [
    "BaseDetector",
    "ConfigurationError",
    "DetectionError",
    "FileReader",
    "LocalFileReader",
    "RecoverableError",
]

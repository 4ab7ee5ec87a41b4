"""Load GraphBuildConfig from the ``--config`` option.

The option accepts a path to a ``.toml`` / ``.json`` file or the same
content inline. Library callers may also pass an already-parsed dict.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from nugetgraph.config.schema import GraphBuildConfig

logger = logging.getLogger("nugetgraph.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _decode(text: str, suffix: str = "") -> Any:
    """Decode TOML or JSON; JSON when the suffix says so or text opens with "{"."""
    if suffix == ".json" or (suffix != ".toml" and text.lstrip().startswith("{")):
        return json.loads(text)
    return tomllib.loads(text)


def _read_source(source: Union[str, Path]) -> Any:
    path = Path(source)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # inline content may be too long or contain NULs for a path
        is_file = False

    if is_file:
        logger.info("Loading configuration from %s", path)
        return _decode(path.read_text(encoding="utf-8"), path.suffix.lower())

    logger.info("Loading inline configuration")
    return _decode(str(source))


def load_graph_build_config(source: ConfigSource) -> GraphBuildConfig:
    """Build a GraphBuildConfig from ``source``.

    Args:
        source: None for defaults, a parsed mapping, a config file path, or
            inline TOML/JSON text.

    Raises:
        ValueError: If the content is not a TOML/JSON mapping.
        TypeError: If ``source`` has an unsupported type.
        pydantic.ValidationError: If values fail validation.
    """
    if source is None:
        return GraphBuildConfig.default()

    if isinstance(source, dict):
        data: Any = source
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping")
    return GraphBuildConfig.from_dict(data)


__all__ = ["ConfigSource", "load_graph_build_config"]

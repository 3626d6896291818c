"""Helpers for loading parser configuration from TOML/JSON sources.

This module provides a single entry point `load_parser_config`
that accepts various configuration sources:

* None -> default ParserConfig
* ParserConfig -> returned unchanged
* dict -> ParserConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from libini.config.schema import ParserConfig

logger = logging.getLogger("libini.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], ParserConfig, None]


def load_parser_config(source: ConfigSource) -> ParserConfig:
    """Load ParserConfig from various configuration sources.

    Args:
        source: None, a ParserConfig, a mapping, or a path to a .toml or
            .json file. Files whose suffix is neither are sniffed: content
            starting with ``{`` is JSON, anything else TOML.

    Returns:
        ParserConfig instance.

    Raises:
        FileNotFoundError: If a path is given that does not exist.
        ValueError: If the file does not hold a mapping.
        ValidationError: If the values are invalid.
    """
    if source is None:
        logger.debug("No config source provided; using default ParserConfig")
        return ParserConfig.default()

    if isinstance(source, ParserConfig):
        return source

    if isinstance(source, dict):
        logger.debug("Loading ParserConfig from provided dict")
        return ParserConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix == ".json":
            fmt = "json"
        elif suffix in {".toml", ".tml"}:
            fmt = "toml"
        else:
            fmt = "json" if text.lstrip().startswith("{") else "toml"
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)

        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        # Allow a [libini] table inside a shared project config
        if isinstance(data.get("libini"), dict):
            data = data["libini"]

        return ParserConfig.from_dict(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_parser_config"]

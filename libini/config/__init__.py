"""Configuration schema and loading for libini."""

from .loader import ConfigSource, load_parser_config
from .schema import ParserConfig

__all__ = [
    "ConfigSource",
    "ParserConfig",
    "load_parser_config",
]

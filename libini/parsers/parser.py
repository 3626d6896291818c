"""Parser facade binding a named INI source to the lexer and tree builder.

Usage:
    parser = IniParser("example.ini")
    result = parser.parse()
    if result.has_member("my_string"):
        print(result.get_string("my_string"))

    future = parser.parse_async()
    same = future.result()
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Tuple

from libini.config.loader import ConfigSource, load_parser_config
from libini.model.tree import IniParseResult
from libini.parsers.builder import build_tree
from libini.parsers.lexer import IniLexer, SourcePath, tokenize_text
from libini.parsers.tokens import Token
from libini.runtime.pool import get_parse_pool

logger = logging.getLogger("libini.parsers.parser")


class IniParser:
    """Parse one named INI file into an IniParseResult.

    A parser serializes its own parses, so the bound file is never read
    by two threads at once. Distinct parsers share nothing but the
    async thread pool.

    Attributes:
        config: Validated parser configuration.
        lexer: Tokenizer bound to the source file.
    """

    def __init__(self, source: SourcePath, config: ConfigSource = None) -> None:
        """Initialize parser.

        Args:
            source: Path of the INI file. It is only opened during a parse.
            config: ParserConfig, mapping or config file path; defaults apply
                when omitted.
        """
        self.config = load_parser_config(config)
        self.lexer = IniLexer(source, encoding=self.config.encoding, errors=self.config.errors)
        self._parse_lock = threading.Lock()

    @property
    def source(self) -> str:
        return str(self.lexer.source)

    def __call__(self) -> IniParseResult:
        """Dispatch to parse()."""
        return self.parse()

    def tokenize(self) -> Tuple[Token, ...]:
        """Tokenize the source without building a tree."""
        with self._parse_lock:
            return self.lexer.tokenize()

    def parse(self) -> IniParseResult:
        """Tokenize the source and build the section tree.

        Returns:
            IniParseResult for the whole document.

        Raises:
            IniSourceError: If the file cannot be read.
            StructuralError: If the document is malformed.
        """
        with self._parse_lock:
            tokens = self.lexer.tokenize()
            result = build_tree(tokens, strip_section_names=self.config.strip_section_names)

        logger.debug("Parsed %s: %d sections", self.source, len(result))
        return result

    def parse_async(self) -> "Future[IniParseResult]":
        """Run parse() on the shared thread pool.

        Returns:
            Future resolving to the same result parse() would return, or
            raising the same exception. The result may be read repeatedly.
        """
        pool = get_parse_pool(self.config.max_workers)
        logger.debug("Dispatching async parse of %s", self.source)
        return pool.submit(self.parse)

    def __repr__(self) -> str:
        return f"IniParser(source={self.source!r})"


def parse_string(text: str, strip_section_names: bool = False) -> IniParseResult:
    """Parse an in-memory INI document.

    Raises:
        StructuralError: If the document is malformed.
    """
    return build_tree(tokenize_text(text), strip_section_names=strip_section_names)


def parse_file(source: SourcePath, config: ConfigSource = None) -> IniParseResult:
    """Parse an INI file in one call."""
    return IniParser(source, config).parse()


__all__ = ["IniParser", "parse_file", "parse_string"]

"""Runtime support for asynchronous parsing."""

from .pool import ParsePool, get_parse_pool, shutdown_pool

__all__ = ["ParsePool", "get_parse_pool", "shutdown_pool"]

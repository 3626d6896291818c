"""Shared thread pool for asynchronous parses.

This module provides a single global ThreadPoolExecutor used by
``IniParser.parse_async``. Each submission is one complete synchronous
parse; the returned Future yields its result or re-raises its error.

Key features:
- Lazy executor creation on first submission
- Singleton access with reset support for tests
- Explicit shutdown; the next submission starts a fresh executor
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

logger = logging.getLogger("libini.runtime.pool")

R = TypeVar("R")

DEFAULT_MAX_WORKERS = 4


class ParsePool:
    """Single global thread pool for asynchronous parse work.

    Usage:
        pool = ParsePool.get_instance()
        future = pool.submit(parser.parse)
        result = future.result()
    """

    _instance: Optional["ParsePool"] = None
    _lock: threading.Lock = threading.Lock()

    def __init__(self, max_workers: Optional[int] = None) -> None:
        """Initialize the pool.

        Args:
            max_workers: Maximum number of worker threads.
        """
        self._owner_pid = os.getpid()
        self.max_workers = max_workers or DEFAULT_MAX_WORKERS
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

        logger.debug("ParsePool initialized with %d max workers", self.max_workers)

    @classmethod
    def get_instance(cls, max_workers: Optional[int] = None) -> "ParsePool":
        """Get the singleton instance.

        Args:
            max_workers: Maximum workers; applied while no executor exists.

        Returns:
            ParsePool: Global instance.
        """
        if cls._instance is None:
            with cls._lock:
                # Double-check locking
                if cls._instance is None:
                    cls._instance = cls(max_workers)

        instance = cls._instance

        # Threads do not survive a fork
        if instance._owner_pid != os.getpid():
            with cls._lock:
                logger.debug(
                    "Resetting ParsePool after fork (owner=%s, current=%s)",
                    instance._owner_pid,
                    os.getpid(),
                )
                cls._instance = cls(max_workers)
                return cls._instance

        if (
            max_workers is not None
            and instance._executor is None
            and max_workers != instance.max_workers
        ):
            instance.max_workers = max_workers
            logger.debug("Reconfigured ParsePool max_workers to %d", max_workers)

        return instance

    @classmethod
    def reset_instance(cls) -> None:
        """Shut down and drop the singleton (mainly for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.shutdown(wait=True)
            cls._instance = None

    def _ensure_executor(self) -> ThreadPoolExecutor:
        # Caller holds _executor_lock
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="libini-parse",
            )
            logger.info("Parse pool started with %d workers", self.max_workers)
        return self._executor

    @property
    def started(self) -> bool:
        return self._executor is not None

    def submit(self, func: Callable[[], R]) -> "Future[R]":
        """Submit one unit of parse work.

        Args:
            func: Zero-argument callable performing a complete parse.

        Returns:
            Future resolving to the callable's return value.
        """
        # shutdown() cannot close the executor mid-submit
        with self._executor_lock:
            future = self._ensure_executor().submit(func)
        logger.debug("Submitted parse work %r", func)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Shut the executor down.

        Args:
            wait: Block until submitted parses have finished.
        """
        with self._executor_lock:
            if self._executor is None:
                return
            executor = self._executor
            self._executor = None

        logger.info("Shutting down ParsePool (wait=%s)", wait)
        executor.shutdown(wait=wait)

    def __enter__(self) -> "ParsePool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)


# =============================================================================
# Convenience Functions
# =============================================================================

def get_parse_pool(max_workers: Optional[int] = None) -> ParsePool:
    """Get the global parse pool instance."""
    return ParsePool.get_instance(max_workers)


def shutdown_pool(wait: bool = True) -> None:
    """Shut down the global parse pool if it was created."""
    pool = ParsePool._instance
    if pool is not None:
        pool.shutdown(wait=wait)


__all__ = ["ParsePool", "get_parse_pool", "shutdown_pool"]

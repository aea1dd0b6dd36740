#!/usr/bin/env python3
"""
Last-request-wins sequencing for ranking recomputation.

Filter changes can trigger overlapping recomputations. Each request takes a
token from the gate; a result is applied only while its token is still the
most recently issued one.
"""

import itertools
import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


class RecomputeGate:
    """
    Issues monotonically increasing request tokens and discards stale results.

    The gate is the only stateful piece around the ranking engine; the engine
    functions themselves know nothing about requests.
    """

    def __init__(self, name: str = "ranking"):
        """
        Initialize the gate.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        """Issue a new token; every earlier token becomes stale."""
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def apply(self, token: int, result: Any, callback: Callable[[Any], None]) -> bool:
        """
        Hand a result to callback if its token is still current.

        Args:
            token: Token returned by issue() when the request started
            result: Computed result
            callback: Receives the result when applied

        Returns:
            True if the result was applied, False if it was stale
        """
        with self._lock:
            current = token == self._latest
        if not current:
            logger.debug(f"[{self.name}] dropping stale result for token {token} (latest={self._latest})")
            return False
        callback(result)
        return True

#!/usr/bin/env python3
"""
Sequential Store Steps

Multi-document operations are not atomic. StepRunner issues each store call
in order and records which ones committed, so a failure part-way through can
be reported as a PartialFailureError. Nothing is rolled back or retried.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from .errors import PartialFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StepRunner:
    """
    Runs store calls in order and reports partial progress on failure.

    A failure before any mutating step committed re-raises the original
    error. Later failures raise PartialFailureError chained from it.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.completed: list[str] = []

    def run(self, step: str, action: Callable[[], T], mutates: bool = True) -> T:
        """
        Run one step.

        Args:
            step: Step description used in logs and errors
            action: The store call
            mutates: False for reads, which never count as committed
        """
        try:
            result = action()
        except Exception as e:
            if not self.completed:
                raise
            logger.error(
                "%s failed at '%s' after %d committed step(s): %s",
                self.operation,
                step,
                len(self.completed),
                e,
            )
            raise PartialFailureError(self.operation, self.completed, step, e) from e

        if mutates:
            self.completed.append(step)
        logger.debug("%s: %s", self.operation, step)
        return result

"""Outcome of an operation that can fail for a business reason.

An ``Outcome`` is a ``returns`` ``Result`` whose failure branch always
carries a human-readable message.  Handlers return it instead of raising,
so "book out of stock" is data while a genuine bug still blows up.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

T = TypeVar("T")
R = TypeVar("R")

Outcome = Result[T, str]

__all__ = ["Outcome", "Success", "Failure", "handle", "is_successful"]


def handle(
    outcome: Outcome[T],
    on_success: Callable[[T], R],
    on_failure: Callable[[str], R],
) -> R:
    """Fold either branch of *outcome* into a single value."""
    if is_successful(outcome):
        return on_success(outcome.unwrap())
    return on_failure(outcome.failure())

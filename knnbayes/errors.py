"""Error hierarchy for the classification engine.

Every failure the core can report is one of these exceptions. None of them
is fatal: callers catch them and decide how to present the problem.
"""

from __future__ import annotations

import textwrap
from typing import Optional


class KnnBayesError(Exception):
    """Base error for all classification engine failures."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        final_message = message
        if hint:
            final_message = f"{message}\n{self._format_hint(hint)}"
        super().__init__(final_message)
        self.message = message
        self.hint = hint

    @staticmethod
    def _format_hint(hint: str) -> str:
        return textwrap.indent(f"Hint: {hint}", prefix="  ")


class ValidationError(KnnBayesError, ValueError):
    """Raised when a DataSet violates its class or attribute invariants."""


class ConfigError(KnnBayesError, ValueError):
    """Raised when a classifier or split is configured with invalid settings."""


class UntrainedModelError(KnnBayesError, RuntimeError):
    """Raised when a classifier is tested before it has been trained."""


class DataError(KnnBayesError):
    """Raised when training data is absent, unreadable, or cannot be split."""


__all__ = [
    "KnnBayesError",
    "ValidationError",
    "ConfigError",
    "UntrainedModelError",
    "DataError",
]

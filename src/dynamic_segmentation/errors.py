"""Central error types used across the package."""

from __future__ import annotations


class SegmentationError(RuntimeError):
    """Base error for dynamic segmentation failures."""


class ValidationError(SegmentationError, ValueError):
    """Raised when an attribute collection or GeoJSON document is invalid.

    The whole collection is rejected; ``failures`` lists every offending entry.
    """

    def __init__(self, message: str, failures: list[str] | None = None):
        self.failures = list(failures or [])
        if self.failures:
            message = f"{message}: " + "; ".join(self.failures)
        super().__init__(message)


class StyleConfigError(SegmentationError, ValueError):
    """Raised when a style configuration key cannot be parsed."""


__all__ = [
    "SegmentationError",
    "StyleConfigError",
    "ValidationError",
]

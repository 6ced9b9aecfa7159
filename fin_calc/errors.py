"""Exceptions raised by the calculation engines."""

from typing import Optional


class CalculatorValidationError(ValueError):
    """Raised when a calculator receives inputs it cannot compute a result for.

    The engines never return a partial or stale result: callers that want to
    keep showing an earlier result must catch this error and decide for
    themselves. ``field`` names the offending input when there is one.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

# trussworks/errors.py
"""Input validation errors."""

from dataclasses import dataclass
from typing import Hashable, List


@dataclass(frozen=True)
class ValidationIssue:
    """
    One rejected input record.

    kind is one of: 'duplicate_node', 'missing_node', 'zero_length',
    'bad_property', 'invalid_load', 'too_small', 'too_large'.
    """
    kind: str
    ref: Hashable
    message: str


class ValidationError(ValueError):
    """Raised when the model is rejected before assembly."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        lines = [issue.message for issue in self.issues]
        super().__init__("; ".join(lines) if lines else "Invalid model")

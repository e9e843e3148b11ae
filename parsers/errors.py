"""
Error types for document parsing.

Only structurally invalid input raises. Lines or rows that simply fail to
match are recorded as ParseWarning entries and skipped.
"""

from dataclasses import dataclass


class SchemaError(ValueError):
    """CSV input is missing rows or required columns, or the run date is invalid."""


@dataclass
class ParseWarning:
    """A non-fatal record of something that was skipped during extraction."""
    location: int      # 1-based line or row number in the source
    reason: str        # Short machine-friendly reason, e.g. "no_catalog_match"
    text: str = ""     # The offending source text

    def __str__(self):
        return f"{self.location}: {self.reason} ({self.text!r})"

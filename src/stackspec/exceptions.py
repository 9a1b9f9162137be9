"""Custom exceptions for stackspec."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from stackspec.schemas.issues import ValidationIssue


class StackSpecError(Exception):
    """Base exception for stackspec operations."""


class SchemaDefinitionError(StackSpecError):
    """A tree schema was declared inconsistently."""


class TreeValidationError(StackSpecError, ValueError):
    """Input did not conform to a tree schema.

    Attributes:
        issues: Every issue found in the rejected input, in document order.
    """

    def __init__(self, issues: Sequence["ValidationIssue"], schema_name: str | None = None) -> None:
        self.issues = list(issues)
        self.schema_name = schema_name
        subject = f"{schema_name} " if schema_name else ""
        count = len(self.issues)
        noun = "issue" if count == 1 else "issues"
        lines = [f"Invalid {subject}input: {count} {noun}"]
        lines.extend(f"  {issue}" for issue in self.issues)
        super().__init__("\n".join(lines))

"""Validation issue and result models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from stackspec.exceptions import TreeValidationError

PathSegment = Union[str, int]

_MAX_RECEIVED_REPR = 40


class IssueKind(str, Enum):
    """Enumeration of validation issue categories."""

    UNRECOGNIZED_VARIANT = "unrecognized_variant"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_MISMATCH = "type_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"
    CYCLIC_STRUCTURE = "cyclic_structure"


class ValidationIssue(BaseModel):
    """A single validation failure located by its path in the input.

    Attributes
    ----------
    kind : IssueKind
        Category of the failure.
    path : list[str | int]
        Keys and list indices leading from the validated value to the offender.
    message : str
        Human-readable description.
    expected : str
        The constraint that was not met.
    received : str | None
        Type (or short repr) of the offending value; ``None`` when it is missing.

    """

    model_config = ConfigDict(frozen=True)

    kind: IssueKind = Field(..., description="Issue category")
    path: list[PathSegment] = Field(default_factory=list, description="Location of the offending value")
    message: str = Field(..., description="Human-readable description")
    expected: str = Field(..., description="Expected constraint")
    received: str | None = Field(default=None, description="Type or short repr of the received value")

    @property
    def location(self) -> str:
        """Render the path as ``children[2].type``; the root is ``<root>``."""
        return format_path(self.path)

    def __str__(self) -> str:
        return f"{self.location}: {self.message} ({self.kind.value})"


class ValidationErrorResponse(BaseModel):
    """Error payload for rejected input at an API boundary.

    Attributes
    ----------
    error : str
        Summary of what went wrong.
    issues : list[ValidationIssue]
        Every issue found, in document order.

    """

    error: str = Field(..., description="Error summary")
    issues: list[ValidationIssue] = Field(default_factory=list, description="Validation issues")


class ValidationResult(BaseModel):
    """Outcome of a validation call: either a value or a non-empty issue list."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None
    errors: list[ValidationIssue] = Field(default_factory=list)
    schema_name: str | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Any:
        """Return the validated value.

        Raises:
            TreeValidationError: If validation failed.
        """
        if self.errors:
            raise TreeValidationError(self.errors, schema_name=self.schema_name)
        return self.value

    def to_error_response(self) -> ValidationErrorResponse:
        """Build the API error payload for a failed result."""
        count = len(self.errors)
        subject = self.schema_name or "input"
        noun = "issue" if count == 1 else "issues"
        return ValidationErrorResponse(error=f"Invalid {subject}: {count} {noun}", issues=list(self.errors))


def format_path(path: Sequence[PathSegment]) -> str:
    """Render a path as ``navigation[0].children[2].type``."""
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = str(segment)
    return rendered or "<root>"


def describe_value(value: Any) -> str:
    """Name the JSON type of ``value``, or repr it when it is a short scalar."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return repr(value).lower()
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return repr(value) if len(value) <= _MAX_RECEIVED_REPR else "string"
    return json_type_name(value)


def json_type_name(value: Any) -> str:
    """Name the JSON type of ``value``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return f"python:{type(value).__name__}"

"""stackspec: validate recursive navigation and UI component trees."""

from stackspec.component import (
    COMPONENT_TREE,
    create_component,
    dump_component,
    validate_component,
    validate_components,
)
from stackspec.exceptions import (
    SchemaDefinitionError,
    StackSpecError,
    TreeValidationError,
)
from stackspec.navigation import (
    NAVIGATION_TREE,
    define_app,
    dump_app,
    validate_app,
    validate_navigation,
    validate_navigation_item,
)
from stackspec.schemas import (
    App,
    IssueKind,
    ValidationErrorResponse,
    ValidationIssue,
    ValidationResult,
)
from stackspec.tree import TreeSchema, Variant

__all__ = [
    "App",
    "COMPONENT_TREE",
    "IssueKind",
    "NAVIGATION_TREE",
    "SchemaDefinitionError",
    "StackSpecError",
    "TreeSchema",
    "TreeValidationError",
    "ValidationErrorResponse",
    "ValidationIssue",
    "ValidationResult",
    "Variant",
    "create_component",
    "define_app",
    "dump_app",
    "dump_component",
    "validate_app",
    "validate_component",
    "validate_components",
    "validate_navigation",
    "validate_navigation_item",
]

"""Shared schemas for stackspec."""

from stackspec.schemas.component import COMPONENT_TYPES, BaseComponent, GenericComponent
from stackspec.schemas.issues import IssueKind, ValidationErrorResponse, ValidationIssue, ValidationResult
from stackspec.schemas.navigation import App, AppBranding, GroupNavItem, NavigationItem, ObjectNavItem

__all__ = [
    "COMPONENT_TYPES",
    "App",
    "AppBranding",
    "BaseComponent",
    "GenericComponent",
    "GroupNavItem",
    "IssueKind",
    "NavigationItem",
    "ObjectNavItem",
    "ValidationErrorResponse",
    "ValidationIssue",
    "ValidationResult",
]

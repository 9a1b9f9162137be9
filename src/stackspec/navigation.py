"""Navigation trees and the apps that carry them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from stackspec.schemas.issues import IssueKind, ValidationIssue, ValidationResult, json_type_name
from stackspec.schemas.navigation import (
    App,
    DashboardNavItem,
    GroupNavItem,
    InterfaceNavItem,
    ObjectNavItem,
    PageNavItem,
    UrlNavItem,
)
from stackspec.tree import TreeSchema, Variant, dump_model, issues_from_validation_error
from stackspec.utils.logging_config import get_logger

logger = get_logger(__name__)

NAVIGATION_TREE = TreeSchema(
    "navigation",
    [
        # Object items may list their views as children.
        Variant("object", ObjectNavItem, children="children"),
        Variant("dashboard", DashboardNavItem),
        Variant("page", PageNavItem),
        Variant("url", UrlNavItem),
        Variant("interface", InterfaceNavItem),
        Variant("group", GroupNavItem, children="children", children_required=True),
    ],
    discriminator="type",
    id_field="id",
)


def validate_navigation_item(
    raw: Any,
    *,
    unique_ids: bool = False,
    max_depth: int | None = None,
) -> ValidationResult:
    """Validate one navigation item and its descendants."""
    return NAVIGATION_TREE.validate(raw, unique_ids=unique_ids, max_depth=max_depth)


def validate_navigation(
    raw: Any,
    *,
    unique_ids: bool = False,
    max_depth: int | None = None,
) -> ValidationResult:
    """Validate a navigation menu: a list of navigation items."""
    return NAVIGATION_TREE.validate_many(raw, unique_ids=unique_ids, max_depth=max_depth)


def validate_app(
    raw: Any,
    *,
    unique_ids: bool = False,
    max_depth: int | None = None,
) -> ValidationResult:
    """Validate an app definition, including its navigation tree.

    App-level issues come first, followed by navigation issues located under
    ``["navigation", i, ...]``.

    Args:
        raw: Untyped app definition.
        unique_ids: Report navigation item IDs used more than once.
        max_depth: Maximum navigation nesting; see ``TreeSchema.validate``.

    Returns:
        A result holding the ``App``, or every issue found.
    """
    if not isinstance(raw, Mapping):
        issue = ValidationIssue(
            kind=IssueKind.TYPE_MISMATCH,
            path=[],
            message="Expected an app definition object",
            expected="object",
            received=json_type_name(raw),
        )
        return ValidationResult(errors=[issue], schema_name="app")

    payload = {key: value for key, value in raw.items() if key != "navigation"}
    navigation_raw = raw.get("navigation")
    if navigation_raw is not None:
        payload["navigation"] = []

    issues: list[ValidationIssue] = []
    app: App | None
    try:
        app = App.model_validate(payload)
    except ValidationError as exc:
        issues.extend(issues_from_validation_error(exc))
        app = None

    navigation = None
    if navigation_raw is not None:
        nav_result = NAVIGATION_TREE.validate_many(
            navigation_raw,
            unique_ids=unique_ids,
            max_depth=max_depth,
            path=("navigation",),
        )
        issues.extend(nav_result.errors)
        navigation = nav_result.value

    if issues or app is None:
        logger.debug("Rejected app definition with %d issue(s)", len(issues), extra={"app": raw.get("name")})
        return ValidationResult(errors=issues, schema_name="app")
    if navigation is not None:
        app = app.model_copy(update={"navigation": navigation})
    return ValidationResult(value=app, schema_name="app")


def define_app(raw: Any, **options: Any) -> App:
    """Validate an app definition and return it.

    Raises:
        TreeValidationError: If the definition is invalid.
    """
    return validate_app(raw, **options).unwrap()


def dump_app(app: App) -> dict[str, Any]:
    """Serialize an app back to plain data using input keys."""
    data = dump_model(app, exclude={"navigation"})
    if app.navigation is not None:
        data["navigation"] = [NAVIGATION_TREE.dump(item) for item in app.navigation]
    return data

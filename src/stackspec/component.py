"""UI component trees."""

from __future__ import annotations

from typing import Any, get_args

from stackspec.schemas.component import COMPONENT_TYPES, TYPED_COMPONENTS, BaseComponent, GenericComponent
from stackspec.schemas.issues import ValidationResult
from stackspec.tree import TreeSchema, Variant


def _component_variants() -> list[Variant]:
    typed = {get_args(model.model_fields["type"].annotation)[0]: model for model in TYPED_COMPONENTS}
    return [
        Variant(tag, typed.get(tag, GenericComponent), children="children")
        for tag in COMPONENT_TYPES
    ]


COMPONENT_TREE = TreeSchema("component", _component_variants(), discriminator="type")


def validate_component(raw: Any, *, max_depth: int | None = None) -> ValidationResult:
    """Validate a component and its nested children."""
    return COMPONENT_TREE.validate(raw, max_depth=max_depth)


def validate_components(raw: Any, *, max_depth: int | None = None) -> ValidationResult:
    """Validate a list of sibling components."""
    return COMPONENT_TREE.validate_many(raw, max_depth=max_depth)


def create_component(raw: Any, **options: Any) -> BaseComponent:
    """Validate a component definition and return it.

    Raises:
        TreeValidationError: If the definition is invalid.
    """
    return COMPONENT_TREE.parse(raw, **options)


def dump_component(component: BaseComponent) -> dict[str, Any]:
    """Serialize a component tree back to plain data."""
    return COMPONENT_TREE.dump(component)

"""Validation of recursive, variant-tagged trees.

A tree schema maps discriminator values to pydantic models. Each node is
validated by the model of its variant; child nodes are not handed to pydantic
but walked by an explicit stack, so arbitrarily deep input never touches the
interpreter's recursion limit and cyclic object graphs are reported instead of
looping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Iterable

from pydantic import BaseModel, ValidationError

from stackspec.config import STACKSPEC_MAX_TREE_DEPTH
from stackspec.exceptions import SchemaDefinitionError
from stackspec.schemas.issues import (
    IssueKind,
    PathSegment,
    ValidationIssue,
    ValidationResult,
    describe_value,
    format_path,
    json_type_name,
)

logger = logging.getLogger(__name__)

Path = tuple[PathSegment, ...]

_MISSING: Final = object()

_TYPE_ERROR_NAMES: Final[frozenset[str]] = frozenset(
    {"is_instance_of", "is_subclass_of", "int_from_float", "none_required"}
)

_EXPECTED_TYPES: Final[dict[str, str]] = {
    "string_type": "string",
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "float_type": "number",
    "float_parsing": "number",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "list_type": "array",
    "callable_type": "callable",
    "i18n_label_type": "string or translation object",
}

_BOUNDS: Final[dict[str, tuple[str, str]]] = {
    "greater_than": ("gt", ">"),
    "greater_than_equal": ("ge", ">="),
    "less_than": ("lt", "<"),
    "less_than_equal": ("le", "<="),
}


@dataclass(frozen=True)
class Variant:
    """One node shape of a tree.

    Attributes:
        tag: Discriminator value selecting this variant.
        model: pydantic model for the variant's fields, including the
            discriminator and (when ``children`` is set) the child field.
        children: Input key of the field holding child nodes; ``None`` for leaves.
        children_required: Whether the child field must be present.
    """

    tag: str
    model: type[BaseModel]
    children: str | None = None
    children_required: bool = False


@dataclass
class _Frame:
    raw: Mapping[str, Any]
    path: Path
    depth: int
    variant: Variant
    node: BaseModel | None
    children: Sequence[Any] = ()
    has_children: bool = False
    next_index: int = 0
    built: list[BaseModel | None] = field(default_factory=list)


def classify_error(error_type: str) -> IssueKind:
    """Map a pydantic error type onto the issue taxonomy."""
    if error_type == "missing":
        return IssueKind.MISSING_REQUIRED_FIELD
    if error_type in _TYPE_ERROR_NAMES or error_type in _EXPECTED_TYPES:
        return IssueKind.TYPE_MISMATCH
    if error_type.endswith("_type"):
        return IssueKind.TYPE_MISMATCH
    return IssueKind.CONSTRAINT_VIOLATION


def _expected_for(error: Mapping[str, Any]) -> str:
    error_type = error["type"]
    ctx = error.get("ctx") or {}
    if error_type == "missing":
        return "required field"
    if error_type in _EXPECTED_TYPES:
        return _EXPECTED_TYPES[error_type]
    if error_type in ("literal_error", "enum"):
        return f"one of {ctx.get('expected', '?')}"
    if error_type == "string_pattern_mismatch":
        return f"string matching {ctx.get('pattern', '?')}"
    if error_type in ("string_too_short", "too_short"):
        return f"length >= {ctx.get('min_length', '?')}"
    if error_type in ("string_too_long", "too_long"):
        return f"length <= {ctx.get('max_length', '?')}"
    if error_type in _BOUNDS:
        key, operator = _BOUNDS[error_type]
        return f"number {operator} {ctx.get(key, '?')}"
    if error_type == "extra_forbidden":
        return "no unrecognized fields"
    if error_type == "value_error":
        return "valid value"
    return f"valid value ({error_type})"


def issues_from_validation_error(exc: ValidationError, prefix: Path = ()) -> list[ValidationIssue]:
    """Convert a pydantic ``ValidationError`` into issues located under ``prefix``.

    Args:
        exc: The error raised by a model or adapter.
        prefix: Path of the validated value within the enclosing input.

    Returns:
        One issue per pydantic error, in pydantic's order.
    """
    issues: list[ValidationIssue] = []
    for error in exc.errors(include_url=False):
        kind = classify_error(error["type"])
        loc = tuple(error["loc"])
        message = error["msg"]
        if error["type"] == "extra_forbidden" and loc:
            message = f"Unrecognized field '{loc[-1]}'"
        issues.append(
            ValidationIssue(
                kind=kind,
                path=[*prefix, *loc],
                message=message,
                expected=_expected_for(error),
                received=None if kind is IssueKind.MISSING_REQUIRED_FIELD else describe_value(error.get("input")),
            )
        )
    return issues


def _field_name(model: type[BaseModel], key: str) -> str | None:
    """Resolve an input key (alias or attribute name) to a model attribute."""
    for name, info in model.model_fields.items():
        if key in (name, info.alias):
            return name
    return None


def dump_model(model: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """Dump ``model`` using input keys, leaving out declared fields that are ``None``.

    Unknown keys kept by ``extra="allow"`` models are dumped as stored, ``None``
    included, so the output validates back to an equal model.

    Args:
        model: The model to serialize.
        exclude: Attribute names to leave out of the top-level mapping.

    Returns:
        Plain data keyed by alias.
    """
    data = model.model_dump(by_alias=True, exclude=exclude)
    stack: list[tuple[Any, Any]] = [(model, data)]
    while stack:
        value, dumped = stack.pop()
        if isinstance(value, BaseModel) and isinstance(dumped, dict):
            for name, info in type(value).model_fields.items():
                key = info.alias or name
                if key not in dumped:
                    continue
                attr = getattr(value, name)
                if attr is None:
                    del dumped[key]
                else:
                    stack.append((attr, dumped[key]))
        elif isinstance(value, (list, tuple)) and isinstance(dumped, list):
            stack.extend(zip(value, dumped))
        elif isinstance(value, Mapping) and isinstance(dumped, dict):
            stack.extend((item, dumped[key]) for key, item in value.items() if key in dumped)
    return data


class TreeSchema:
    """A recursive tree of tagged variants.

    Args:
        name: Human-readable schema name used in messages and logs.
        variants: The node shapes; tags must be unique.
        discriminator: Input key holding the variant tag.
        id_field: Input key of node identifiers, checked when ``unique_ids`` is requested.

    Raises:
        SchemaDefinitionError: If variants are inconsistent with the discriminator
            or declare child fields their model does not have.
    """

    def __init__(
        self,
        name: str,
        variants: Iterable[Variant],
        *,
        discriminator: str = "type",
        id_field: str | None = None,
    ) -> None:
        self.name = name
        self.discriminator = discriminator
        self.id_field = id_field
        self._variants: dict[str, Variant] = {}
        self._tag_attrs: dict[str, str] = {}
        self._slot_attrs: dict[str, str] = {}
        self._id_attrs: dict[str, str] = {}

        for variant in variants:
            if variant.tag in self._variants:
                raise SchemaDefinitionError(f"Duplicate variant tag {variant.tag!r} in {name} schema")
            tag_attr = _field_name(variant.model, discriminator)
            if tag_attr is None:
                raise SchemaDefinitionError(
                    f"{variant.model.__name__} has no discriminator field {discriminator!r}"
                )
            if variant.children is not None:
                slot_attr = _field_name(variant.model, variant.children)
                if slot_attr is None:
                    raise SchemaDefinitionError(
                        f"{variant.model.__name__} has no child field {variant.children!r}"
                    )
                self._slot_attrs[variant.tag] = slot_attr
            elif variant.children_required:
                raise SchemaDefinitionError(f"Variant {variant.tag!r} requires children but names no child field")
            if id_field is not None:
                id_attr = _field_name(variant.model, id_field)
                if id_attr is not None:
                    self._id_attrs[variant.tag] = id_attr
            self._variants[variant.tag] = variant
            self._tag_attrs[variant.tag] = tag_attr

        if not self._variants:
            raise SchemaDefinitionError(f"{name} schema declares no variants")

    def __repr__(self) -> str:
        return f"TreeSchema({self.name!r}, tags={list(self._variants)!r})"

    @property
    def tags(self) -> tuple[str, ...]:
        """Known discriminator values, in declaration order."""
        return tuple(self._variants)

    def variant(self, tag: str) -> Variant:
        """Return the variant registered for ``tag``."""
        return self._variants[tag]

    def validate(
        self,
        raw: Any,
        *,
        unique_ids: bool = False,
        max_depth: int | None = None,
        path: Sequence[PathSegment] = (),
    ) -> ValidationResult:
        """Validate a single tree.

        Args:
            raw: Untyped input, typically parsed JSON.
            unique_ids: Report repeated ``id_field`` values across the tree.
            max_depth: Maximum nesting (the root is depth 1). ``None`` uses
                ``STACKSPEC_MAX_TREE_DEPTH``; ``0`` disables the limit.
            path: Location of ``raw`` within an enclosing document; prefixes
                every issue path.

        Returns:
            A result holding the normalized tree, or every issue found.
        """
        walk = _TreeWalk(self, unique_ids=unique_ids, max_depth=max_depth)
        node = walk.walk(raw, tuple(path), top=True)
        return walk.result(node)

    def validate_many(
        self,
        raw: Any,
        *,
        unique_ids: bool = False,
        max_depth: int | None = None,
        path: Sequence[PathSegment] = (),
    ) -> ValidationResult:
        """Validate a sequence of trees; the result value is a list of nodes.

        Identifier uniqueness, when requested, spans the whole sequence.
        """
        walk = _TreeWalk(self, unique_ids=unique_ids, max_depth=max_depth)
        base = tuple(path)
        if not isinstance(raw, (list, tuple)):
            walk.add(
                IssueKind.TYPE_MISMATCH,
                base,
                f"Expected a list of {self.name} nodes",
                expected="array",
                received=json_type_name(raw),
            )
            return walk.result(None)
        nodes = [walk.walk(item, base + (index,), top=False) for index, item in enumerate(raw)]
        return walk.result(nodes)

    def parse(self, raw: Any, **options: Any) -> BaseModel:
        """Validate ``raw`` and return the tree.

        Raises:
            TreeValidationError: If the input is invalid.
        """
        return self.validate(raw, **options).unwrap()

    def dump(self, node: BaseModel) -> dict[str, Any]:
        """Serialize a validated tree to plain data using input keys.

        Declared fields holding ``None`` are omitted (see ``dump_model``), so the
        output validates back to an equal tree.
        """
        root = self._dump_node(node)
        stack = [(node, root)]
        while stack:
            current, data = stack.pop()
            tag = self._tag_of(current)
            slot = self.variant(tag).children
            if slot is None:
                continue
            kids = getattr(current, self._slot_attrs[tag])
            if kids is None:
                continue
            dumped: list[dict[str, Any]] = []
            data[slot] = dumped
            for kid in kids:
                kid_data = self._dump_node(kid)
                dumped.append(kid_data)
                stack.append((kid, kid_data))
        return root

    def _tag_of(self, node: BaseModel) -> str:
        for tag_attr in dict.fromkeys(self._tag_attrs.values()):
            tag = getattr(node, tag_attr, None)
            variant = self._variants.get(tag) if isinstance(tag, str) else None
            if variant is not None and type(node) is variant.model:
                return tag
        raise TypeError(f"{type(node).__name__} is not a {self.name} node")

    def _dump_node(self, node: BaseModel) -> dict[str, Any]:
        tag = self._tag_of(node)
        exclude = {self._slot_attrs[tag]} if tag in self._slot_attrs else None
        return dump_model(node, exclude=exclude)


class _TreeWalk:
    """State of one validation call."""

    def __init__(self, schema: TreeSchema, *, unique_ids: bool, max_depth: int | None) -> None:
        self.schema = schema
        self.unique_ids = unique_ids and schema.id_field is not None
        self.max_depth = STACKSPEC_MAX_TREE_DEPTH if max_depth is None else max_depth
        self.issues: list[ValidationIssue] = []
        self.node_count = 0
        self._seen_ids: dict[Any, Path] = {}

    def add(
        self,
        kind: IssueKind,
        path: Path,
        message: str,
        *,
        expected: str,
        received: str | None,
    ) -> None:
        self.issues.append(
            ValidationIssue(kind=kind, path=list(path), message=message, expected=expected, received=received)
        )

    def walk(self, raw: Any, path: Path, *, top: bool) -> BaseModel | None:
        root = self._enter(raw, path, depth=1, top=top)
        if root is None:
            return None

        result: BaseModel | None = None
        stack = [root]
        # ids of the mappings on the current ancestor chain
        active = {id(root.raw)}
        while stack:
            frame = stack[-1]
            if frame.next_index < len(frame.children):
                index = frame.next_index
                frame.next_index += 1
                child_raw = frame.children[index]
                child_path = frame.path + (frame.variant.children, index)
                if id(child_raw) in active:
                    self.add(
                        IssueKind.CYCLIC_STRUCTURE,
                        child_path,
                        f"{self.schema.name} node contains itself through its children",
                        expected="acyclic tree",
                        received="object",
                    )
                    frame.built.append(None)
                    continue
                child = self._enter(child_raw, child_path, depth=frame.depth + 1, top=False)
                if child is None:
                    frame.built.append(None)
                    continue
                active.add(id(child_raw))
                stack.append(child)
                continue

            stack.pop()
            active.discard(id(frame.raw))
            node = self._finish(frame)
            if stack:
                stack[-1].built.append(node)
            else:
                result = node
        return result

    def result(self, value: Any) -> ValidationResult:
        schema_name = self.schema.name
        if self.issues:
            logger.debug(
                "Rejected %s input with %d issue(s)",
                schema_name,
                len(self.issues),
                extra={"schema": schema_name, "nodes": self.node_count},
            )
            return ValidationResult(errors=self.issues, schema_name=schema_name)
        logger.debug("Validated %s input (%d nodes)", schema_name, self.node_count, extra={"schema": schema_name})
        return ValidationResult(value=value, schema_name=schema_name)

    def _enter(self, raw: Any, path: Path, *, depth: int, top: bool) -> _Frame | None:
        schema = self.schema
        if not isinstance(raw, Mapping):
            self.add(
                IssueKind.TYPE_MISMATCH,
                path,
                f"Expected a {schema.name} node object",
                expected="object",
                received=json_type_name(raw),
            )
            return None

        tag = raw.get(schema.discriminator, _MISSING)
        variant = schema._variants.get(tag) if isinstance(tag, str) else None
        if variant is None:
            # The root is rejected as a whole; nested nodes point at their tag.
            tag_path = path if top else path + (schema.discriminator,)
            if tag is _MISSING:
                message = f"Missing discriminator field '{schema.discriminator}'"
                received = None
            else:
                message = f"Unrecognized {schema.name} variant {describe_value(tag)}"
                received = describe_value(tag)
            self.add(
                IssueKind.UNRECOGNIZED_VARIANT,
                tag_path,
                message,
                expected="one of " + ", ".join(repr(known) for known in schema.tags),
                received=received,
            )
            return None

        if self.max_depth and depth > self.max_depth:
            self.add(
                IssueKind.CONSTRAINT_VIOLATION,
                path,
                f"{schema.name} tree is nested deeper than {self.max_depth} levels",
                expected=f"depth <= {self.max_depth}",
                received=f"depth {depth}",
            )
            return None

        self.node_count += 1
        slot = variant.children
        payload = {key: value for key, value in raw.items() if key != slot}
        children: Sequence[Any] = ()
        has_children = False
        slot_issues: list[ValidationIssue] = []
        if slot is not None:
            value = raw.get(slot, _MISSING)
            if isinstance(value, (list, tuple)):
                children = value
                has_children = True
                payload[slot] = []
            elif value is _MISSING:
                if variant.children_required:
                    slot_issues.append(
                        ValidationIssue(
                            kind=IssueKind.MISSING_REQUIRED_FIELD,
                            path=[*path, slot],
                            message=f"Field required: '{slot}'",
                            expected="required field",
                        )
                    )
                    payload[slot] = []
            elif value is None and not variant.children_required:
                payload[slot] = None
            else:
                slot_issues.append(
                    ValidationIssue(
                        kind=IssueKind.TYPE_MISMATCH,
                        path=[*path, slot],
                        message=f"Expected a list of {schema.name} nodes",
                        expected="array",
                        received=json_type_name(value),
                    )
                )
                payload[slot] = []

        try:
            node: BaseModel | None = variant.model.model_validate(payload)
        except ValidationError as exc:
            self.issues.extend(issues_from_validation_error(exc, path))
            node = None
        self.issues.extend(slot_issues)

        if node is not None and self.unique_ids:
            self._check_identifier(variant, node, path)

        return _Frame(
            raw=raw,
            path=path,
            depth=depth,
            variant=variant,
            node=node,
            children=children,
            has_children=has_children,
        )

    def _check_identifier(self, variant: Variant, node: BaseModel, path: Path) -> None:
        id_attr = self.schema._id_attrs.get(variant.tag)
        if id_attr is None:
            return
        ident = getattr(node, id_attr)
        if ident is None:
            return
        first = self._seen_ids.get(ident)
        if first is None:
            self._seen_ids[ident] = path
            return
        self.add(
            IssueKind.CONSTRAINT_VIOLATION,
            path + (self.schema.id_field,),
            f"Duplicate identifier {ident!r} (first used at {format_path(first)})",
            expected="unique identifier",
            received=describe_value(ident),
        )

    def _finish(self, frame: _Frame) -> BaseModel | None:
        if self.issues or frame.node is None:
            return None
        if not frame.has_children:
            return frame.node
        slot_attr = self.schema._slot_attrs[frame.variant.tag]
        return frame.node.model_copy(update={slot_attr: frame.built})

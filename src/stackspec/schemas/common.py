"""Field types shared by the navigation and component schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    StringConstraints,
    ValidatorFunctionWrapHandler,
    WrapSerializer,
    WrapValidator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

SNAKE_CASE_PATTERN = r"^[a-z_][a-z0-9_]*$"
URL_PATTERN = r"^[A-Za-z][A-Za-z0-9+.\-]*://\S+$"

# Machine names used in URLs and configuration, e.g. ``nav_settings``.
SnakeCaseIdentifier = Annotated[str, StringConstraints(pattern=SNAKE_CASE_PATTERN)]
UrlString = Annotated[str, StringConstraints(pattern=URL_PATTERN)]


class SpecModel(BaseModel):
    """Base for declarative schemas: strict, immutable, camelCase on the wire."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class I18nText(SpecModel):
    """A translatable label resolved at render time."""

    key: str = Field(..., description="Translation key")
    default_value: str | None = Field(default=None, description="Fallback text")
    params: dict[str, Any] | None = Field(default=None, description="Interpolation parameters")


def _validate_i18n_label(value: Any, handler: ValidatorFunctionWrapHandler) -> Union[str, I18nText]:
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, I18nText)):
        # Field errors of the translation object keep their own location.
        return handler(value)
    raise PydanticCustomError(
        "i18n_label_type",
        "Input should be a string or a translation object",
    )


def _serialize_i18n_label(value: Union[str, I18nText], handler: SerializerFunctionWrapHandler) -> Any:
    if isinstance(value, str):
        return value
    return handler(value)


# A plain string, or a translation object {key, defaultValue?, params?}.
I18nLabel = Annotated[
    I18nText,
    WrapValidator(_validate_i18n_label),
    WrapSerializer(_serialize_i18n_label),
]


class AriaProps(SpecModel):
    """ARIA accessibility attributes."""

    aria_label: str | None = Field(default=None, description="Accessible label")
    aria_described_by: str | None = Field(default=None, description="ID of the describing element")
    role: str | None = Field(default=None, description="ARIA role")

"""Pydantic models for extractor options.

Extractor factories accept either these models or plain dicts with the same
shape; dicts are validated through `validate_options`.
"""

import re
from collections.abc import Callable
from typing import Annotated, Any, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)

from potextract.errors import ConfigurationError

ArgumentIndex = Annotated[StrictInt, Field(ge=0)]


class ContentOptions(BaseModel):
    """How raw extracted text is cleaned up before it becomes a message."""

    model_config = ConfigDict(extra="forbid")

    trim_white_space: StrictBool = Field(
        default=False, description="Strip leading/trailing whitespace"
    )
    preserve_indentation: StrictBool = Field(
        default=True, description="Keep leading spaces/tabs of each line"
    )
    replace_new_lines: Literal[False] | StrictStr = Field(
        default=False, description="Replacement for newlines, or False to keep them"
    )


class ArgumentMapping(BaseModel):
    """Positions of the text, plural and context arguments of a call."""

    model_config = ConfigDict(extra="forbid")

    text: ArgumentIndex
    text_plural: ArgumentIndex | None = None
    context: ArgumentIndex | None = None


class CommentOptions(BaseModel):
    """Which comments around a call are attached to its message."""

    model_config = ConfigDict(extra="forbid")

    regex: re.Pattern[str] | None = Field(
        default=None, description="Only keep matching comments; group 1 replaces the text"
    )
    other_line_leading: StrictBool | None = None
    same_line_leading: StrictBool | None = None
    same_line_trailing: StrictBool | None = None


class CallExpressionOptions(BaseModel):
    """Options for the call expression extractor."""

    model_config = ConfigDict(extra="forbid")

    arguments: ArgumentMapping
    comments: CommentOptions | None = None
    content: ContentOptions | None = None


class ElementAttributes(BaseModel):
    """Attribute names holding the plural, context and comment of an element."""

    model_config = ConfigDict(extra="forbid")

    text_plural: StrictStr | None = None
    context: StrictStr | None = None
    comment: StrictStr | None = None


class ElementOptions(BaseModel):
    """Options for the element content / element attribute extractors."""

    model_config = ConfigDict(extra="forbid")

    attributes: ElementAttributes | None = None
    content: ContentOptions | None = None


M = TypeVar("M", bound=BaseModel)


def validate_options(model: type[M], options: Any, name: str = "options") -> M:
    """Validate extractor options into `model`.

    Raises:
        ConfigurationError: If the options do not match the model.
    """
    if isinstance(options, model):
        return options
    if options is None:
        options = {}
    try:
        return model.model_validate(options)
    except ValidationError as e:
        problems = "; ".join(
            f"{name}.{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid {name}: {problems}") from e


def get_content_options(options: ContentOptions | None, **defaults: Any) -> ContentOptions:
    """Overlay the fields the user explicitly set onto per-extractor defaults."""
    merged = dict(defaults)
    if options is not None:
        merged.update(options.model_dump(include=options.model_fields_set))
    return ContentOptions(**merged)


def require_callable(value: Callable | None, name: str) -> Callable:
    """Check that a required callable argument was provided."""
    if value is None:
        raise ConfigurationError(f"Missing argument '{name}'")
    if not callable(value):
        raise ConfigurationError(f"Argument '{name}' must be callable, got {value!r}")
    return value


def require_non_empty_string(value: Any, name: str) -> str:
    """Check that a required string argument is present and non-empty."""
    if value is None:
        raise ConfigurationError(f"Missing argument '{name}'")
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"Argument '{name}' must be a non-empty string")
    return value

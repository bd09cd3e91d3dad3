"""
Options recognized by the schema validator.

Options can be given as a ValidateOptions instance or as a plain mapping
using either snake_case names or the camelCase names used by the original
callers (``applyDefaults``, ``removeUnknown``).
"""

from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import OptionsError


class ValidateOptions(BaseModel):
    """Policy switches for a single validation call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    strict: bool = Field(
        False, description="Report undeclared properties as 'unknown' errors"
    )
    apply_defaults: bool = Field(
        True,
        alias="applyDefaults",
        description="Fill absent optional properties with their defaults",
    )
    remove_unknown: bool = Field(
        False,
        alias="removeUnknown",
        description="Drop undeclared properties instead of passing them through (non-strict only)",
    )


DEFAULT_OPTIONS = ValidateOptions()

OptionsLike = Union[ValidateOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None, **overrides: Any) -> ValidateOptions:
    """
    Build a ValidateOptions from an options object, a mapping and/or keyword overrides.

    Raises:
        OptionsError: If an option is unknown or has the wrong type
    """
    if options is None and not overrides:
        return DEFAULT_OPTIONS

    if isinstance(options, ValidateOptions):
        if not overrides:
            return options
        merged = options.model_dump()
    elif options is None:
        merged = {}
    elif isinstance(options, Mapping):
        merged = dict(options)
    else:
        raise OptionsError(
            f"Options must be a mapping or ValidateOptions, got {type(options).__name__}"
        )

    merged.update(overrides)
    try:
        return ValidateOptions.model_validate(_dealias(merged))
    except PydanticValidationError as e:
        raise OptionsError(f"Invalid validation options: {e}") from e


def _dealias(values: dict) -> dict:
    # camelCase spellings map onto field names; later keys win
    result = {}
    for key, value in values.items():
        field_name = _ALIASES.get(key, key)
        result[field_name] = value
    return result


_ALIASES = {
    field.alias: name
    for name, field in ValidateOptions.model_fields.items()
    if field.alias
}


__all__ = [
    "ValidateOptions",
    "DEFAULT_OPTIONS",
    "OptionsLike",
    "resolve_options",
]

"""Number, string, boolean, array and object rules."""

import numbers
import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Pattern, Union

from ...exceptions import RuleDefinitionError
from ..base import MISSING, ErrorKind, Evaluator, Outcome, Rule, RuleKind


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a number for configuration purposes
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def _check_length(value, rule: Rule, unit: str) -> Optional[Outcome]:
    length = len(value)
    if rule.min_length is not None and length < rule.min_length:
        return Outcome.failure(ErrorKind.MIN_LENGTH, limit=rule.min_length, unit=unit)
    if rule.max_length is not None and length > rule.max_length:
        return Outcome.failure(ErrorKind.MAX_LENGTH, limit=rule.max_length, unit=unit)
    return None


def evaluate_number(value: Any, rule: Rule) -> Outcome:
    if not _is_number(value):
        return Outcome.failure(ErrorKind.TYPE, expected=RuleKind.NUMBER.value)
    if rule.min is not None and value < rule.min:
        return Outcome.failure(ErrorKind.MIN, limit=rule.min)
    if rule.max is not None and value > rule.max:
        return Outcome.failure(ErrorKind.MAX, limit=rule.max)
    return Outcome.success(value)


def evaluate_string(value: Any, rule: Rule) -> Outcome:
    if not isinstance(value, str):
        return Outcome.failure(ErrorKind.TYPE, expected=RuleKind.STRING.value)
    failed = _check_length(value, rule, unit="characters")
    if failed is not None:
        return failed
    if rule.pattern is not None and not rule.pattern.search(value):
        return Outcome.failure(ErrorKind.PATTERN, pattern=rule.pattern.pattern)
    return Outcome.success(value)


def evaluate_boolean(value: Any, rule: Rule) -> Outcome:
    if not isinstance(value, bool):
        return Outcome.failure(ErrorKind.TYPE, expected=RuleKind.BOOLEAN.value)
    return Outcome.success(value)


def evaluate_array(value: Any, rule: Rule) -> Outcome:
    if not _is_array(value):
        return Outcome.failure(ErrorKind.TYPE, expected=RuleKind.ARRAY.value)
    failed = _check_length(value, rule, unit="items")
    if failed is not None:
        return failed
    return Outcome.success(value)


def evaluate_object(value: Any, rule: Rule) -> Outcome:
    if not _is_object(value):
        return Outcome.failure(ErrorKind.TYPE, expected=RuleKind.OBJECT.value)
    missing = [key for key in rule.required_keys if key not in value]
    if missing:
        return Outcome.failure(ErrorKind.REQUIRED, missing=missing)
    return Outcome.success(value)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _check_bound(name: str, bound: Any) -> None:
    if bound is not None and not _is_number(bound):
        raise RuleDefinitionError(f"'{name}' must be a number, got {bound!r}")


def _check_length_bound(name: str, bound: Any) -> None:
    if bound is None:
        return
    if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
        raise RuleDefinitionError(
            f"'{name}' must be a non-negative integer, got {bound!r}"
        )


def _compile_pattern(pattern: Union[str, Pattern[str], None]) -> Optional[Pattern[str]]:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise RuleDefinitionError(
            f"'pattern' must be a string or compiled regex, got {type(pattern).__name__}"
        )
    try:
        return re.compile(pattern)
    except re.error as e:
        raise RuleDefinitionError(f"Invalid pattern {pattern!r}: {e}") from e


def create_rule(
    kind: Union[str, RuleKind],
    *,
    required: bool = False,
    default: Any = MISSING,
    min: Optional[float] = None,
    max: Optional[float] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Union[str, Pattern[str], None] = None,
    required_keys: Iterable[str] = (),
    evaluator: Optional[Evaluator] = None,
    description: Optional[str] = None,
) -> Rule:
    """
    Build a rule of any kind.

    The kind is not checked against the registry here: a rule whose kind
    cannot be resolved at validation time is reported as 'unsupported_type'.

    Raises:
        RuleDefinitionError: If a constraint has the wrong type or the
            bounds are inverted
    """
    _check_bound("min", min)
    _check_bound("max", max)
    if min is not None and max is not None and min > max:
        raise RuleDefinitionError(f"'min' ({min}) is greater than 'max' ({max})")

    _check_length_bound("min_length", min_length)
    _check_length_bound("max_length", max_length)
    if min_length is not None and max_length is not None and min_length > max_length:
        raise RuleDefinitionError(
            f"'min_length' ({min_length}) is greater than 'max_length' ({max_length})"
        )

    if isinstance(required_keys, str):
        raise RuleDefinitionError("'required_keys' must be a list of keys, not a string")
    if evaluator is not None and not callable(evaluator):
        raise RuleDefinitionError("'evaluator' must be callable")

    return Rule(
        kind=kind,
        required=bool(required),
        default=default,
        min=min,
        max=max,
        min_length=min_length,
        max_length=max_length,
        pattern=_compile_pattern(pattern),
        required_keys=tuple(required_keys),
        evaluator=evaluator,
        description=description,
    )


def number(
    *,
    min: Optional[float] = None,
    max: Optional[float] = None,
    required: bool = False,
    default: Any = MISSING,
    **options: Any,
) -> Rule:
    return create_rule(
        RuleKind.NUMBER, min=min, max=max, required=required, default=default, **options
    )


def string(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Union[str, Pattern[str], None] = None,
    required: bool = False,
    default: Any = MISSING,
    **options: Any,
) -> Rule:
    return create_rule(
        RuleKind.STRING,
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        required=required,
        default=default,
        **options,
    )


def boolean(*, required: bool = False, default: Any = MISSING, **options: Any) -> Rule:
    return create_rule(RuleKind.BOOLEAN, required=required, default=default, **options)


def array(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    required: bool = False,
    default: Any = MISSING,
    **options: Any,
) -> Rule:
    return create_rule(
        RuleKind.ARRAY,
        min_length=min_length,
        max_length=max_length,
        required=required,
        default=default,
        **options,
    )


def object(
    *,
    required_keys: Iterable[str] = (),
    required: bool = False,
    default: Any = MISSING,
    **options: Any,
) -> Rule:
    """
    Mapping rule.

    ``required_keys`` lists sub-keys that must be present on the value;
    ``required`` only controls whether the property itself must be present.
    """
    return create_rule(
        RuleKind.OBJECT,
        required_keys=required_keys,
        required=required,
        default=default,
        **options,
    )

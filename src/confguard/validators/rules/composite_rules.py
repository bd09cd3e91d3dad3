"""Higher-order rules built from other rules.

Every builder returns an ordinary Rule whose evaluator closes over the
builder's arguments. Nested rules are dispatched through the
EvaluationContext, so composites work with whichever ConfigValidator is
running them.

Composites are fail-fast: ``array_of``, ``shape`` and ``compose`` stop at the
first nested failure and summarize it as a single outcome.
"""

import math
from typing import Any, Callable, Mapping, Optional

from ...exceptions import RuleDefinitionError
from ..base import (
    MISSING,
    ErrorKind,
    EvaluationContext,
    Evaluator,
    Outcome,
    Rule,
    RuleKind,
)
from .primitive_rules import create_rule, evaluate_array, evaluate_object


def _ensure_rules(builder: str, rules) -> None:
    if not rules:
        raise RuleDefinitionError(f"{builder}() needs at least one rule")
    for rule in rules:
        if not isinstance(rule, Rule):
            raise RuleDefinitionError(
                f"{builder}() expects Rule instances, got {type(rule).__name__}"
            )


def array_of(
    item_rule: Rule,
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """
    Array whose every element satisfies ``item_rule``.

    Length constraints are checked first. Elements are then checked in
    index order and the first invalid one is reported as 'item_invalid'
    with its ``index`` and the ``inner`` error kind; later elements are
    not inspected.
    """
    _ensure_rules("array_of", [item_rule])
    length_rule = create_rule(
        RuleKind.ARRAY, min_length=min_length, max_length=max_length
    )

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        outcome = evaluate_array(value, length_rule)
        if not outcome.valid:
            return outcome

        for index, item in enumerate(value):
            item_outcome = context.check(item, item_rule)
            if not item_outcome.valid:
                return Outcome.failure(
                    ErrorKind.ITEM_INVALID,
                    message=f"Item at index {index} is invalid: {item_outcome.error_kind}",
                    index=index,
                    inner=item_outcome.error_kind,
                )

        return Outcome.success(value)

    return create_rule(
        RuleKind.ARRAY,
        min_length=min_length,
        max_length=max_length,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def shape(
    property_rules: Mapping[str, Rule],
    *,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """
    Mapping whose known keys satisfy their rules.

    Only keys present on the value are checked. A key listed in
    ``property_rules`` but absent from the value is NOT an error here;
    use ``object(required_keys=...)`` inside ``compose`` or a schema-level
    ``required`` flag to demand presence. Keys not listed are ignored.
    """
    if not isinstance(property_rules, Mapping):
        raise RuleDefinitionError("shape() expects a mapping of property name to Rule")
    rules = dict(property_rules)
    if rules:
        _ensure_rules("shape", list(rules.values()))
    type_rule = create_rule(RuleKind.OBJECT)

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        outcome = evaluate_object(value, type_rule)
        if not outcome.valid:
            return outcome

        for key, rule in rules.items():
            if key not in value:
                continue
            key_outcome = context.check(value[key], rule)
            if not key_outcome.valid:
                return Outcome.failure(
                    ErrorKind.PROPERTY_INVALID,
                    message=f"Property {key} is invalid: {key_outcome.error_kind}",
                    key=key,
                    inner=key_outcome.error_kind,
                )

        return Outcome.success(value)

    return create_rule(
        RuleKind.OBJECT,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def union(
    *rules: Rule,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """
    Value must satisfy at least one of ``rules``.

    Candidates are tried in declaration order and the first success wins,
    even if a later candidate would be a closer match.
    """
    _ensure_rules("union", rules)
    candidates = tuple(rules)

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        attempted = []
        for rule in candidates:
            outcome = context.check(value, rule)
            if outcome.valid:
                return outcome
            attempted.append(outcome.error_kind)

        return Outcome.failure(
            ErrorKind.UNION,
            message=(
                "Value must match one of the allowed types. "
                f"Got errors: {', '.join(str(k) for k in attempted)}"
            ),
            attempted=attempted,
        )

    return create_rule(
        RuleKind.UNION,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def _same_value(a: Any, b: Any) -> bool:
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def enum(
    *values: Any,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """Value must equal one of ``values`` (booleans never match numbers)."""
    if not values:
        raise RuleDefinitionError("enum() needs at least one allowed value")
    allowed = tuple(values)

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        if any(_same_value(value, candidate) for candidate in allowed):
            return Outcome.success(value)
        return Outcome.failure(
            ErrorKind.ENUM,
            message=f"Value must be one of: {', '.join(str(v) for v in allowed)}",
            allowed=list(allowed),
        )

    return create_rule(
        RuleKind.ENUM,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def conditional(
    predicate: Callable[[Mapping[str, Any]], bool],
    rule: Rule,
    *,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """
    Apply ``rule`` only when ``predicate`` holds.

    ``predicate`` receives the entire input configuration (read-only), not
    the value being checked. When it returns false the value is accepted
    as-is.
    """
    if not callable(predicate):
        raise RuleDefinitionError("conditional() predicate must be callable")
    _ensure_rules("conditional", [rule])

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        if predicate(context.config):
            return context.check(value, rule)
        return Outcome.success(value)

    return create_rule(
        RuleKind.CONDITIONAL,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def compose(
    *rules: Rule,
    required: bool = False,
    default: Any = MISSING,
    description: Optional[str] = None,
) -> Rule:
    """All of ``rules`` must hold; the first failure is returned."""
    _ensure_rules("compose", rules)
    chain = tuple(rules)

    def evaluate(value: Any, context: EvaluationContext) -> Outcome:
        for rule in chain:
            outcome = context.check(value, rule)
            if not outcome.valid:
                return outcome
        return Outcome.success(value)

    return create_rule(
        RuleKind.COMPOSE,
        required=required,
        default=default,
        evaluator=evaluate,
        description=description,
    )


def custom(evaluator: Evaluator, **options: Any) -> Rule:
    """
    Rule backed by a user function ``evaluator(value)`` or
    ``evaluator(value, context)``.

    The two-argument form receives the EvaluationContext. The function may
    return a bool or an Outcome.
    """
    if not callable(evaluator):
        raise RuleDefinitionError("custom() evaluator must be callable")
    return create_rule(RuleKind.CUSTOM, evaluator=evaluator, **options)

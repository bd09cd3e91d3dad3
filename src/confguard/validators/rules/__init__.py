"""Built-in rule evaluators and rule builders."""

from types import MappingProxyType
from typing import Any, Callable, Mapping

from ..base import Outcome, Rule, RuleKind
from .composite_rules import array_of, compose, conditional, custom, enum, shape, union
from .primitive_rules import (
    array,
    boolean,
    create_rule,
    evaluate_array,
    evaluate_boolean,
    evaluate_number,
    evaluate_object,
    evaluate_string,
    number,
    object,
    string,
)

RegistryEvaluator = Callable[[Any, Rule], Outcome]

BUILTIN_EVALUATORS: Mapping[str, RegistryEvaluator] = MappingProxyType(
    {
        RuleKind.NUMBER.value: evaluate_number,
        RuleKind.STRING.value: evaluate_string,
        RuleKind.BOOLEAN.value: evaluate_boolean,
        RuleKind.ARRAY.value: evaluate_array,
        RuleKind.OBJECT.value: evaluate_object,
    }
)


def get_builtin_evaluators() -> Mapping[str, RegistryEvaluator]:
    """Read-only registry of the primitive kinds, keyed by kind name."""
    return BUILTIN_EVALUATORS


__all__ = [
    "BUILTIN_EVALUATORS",
    "RegistryEvaluator",
    "get_builtin_evaluators",
    # Primitive builders
    "create_rule",
    "number",
    "string",
    "boolean",
    "array",
    "object",
    # Composite builders
    "array_of",
    "shape",
    "union",
    "enum",
    "conditional",
    "compose",
    "custom",
]

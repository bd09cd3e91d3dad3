"""Base abstractions for validation rules."""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Mapping,
    Optional,
    Pattern,
    Tuple,
    Union,
)

if TYPE_CHECKING:
    from .engine import ConfigValidator


class _Missing:
    """Marker for an absent default or normalized value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING: Any = _Missing()

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class RuleKind(str, Enum):
    """Kinds a rule can declare."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"
    ENUM = "enum"
    CONDITIONAL = "conditional"
    COMPOSE = "compose"
    CUSTOM = "custom"


class ErrorKind(str, Enum):
    """Classification of a validation failure."""

    REQUIRED = "required"
    TYPE = "type"
    MIN = "min"
    MAX = "max"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    UNKNOWN = "unknown"
    UNSUPPORTED_TYPE = "unsupported_type"
    ITEM_INVALID = "item_invalid"
    PROPERTY_INVALID = "property_invalid"
    UNION = "union"
    ENUM = "enum"
    INVALID = "invalid"


def _kind_value(kind: Union[str, Enum, None]) -> Optional[str]:
    if isinstance(kind, Enum):
        return kind.value
    return kind


@dataclass(frozen=True)
class Outcome:
    """Result of validating a single value against a single rule."""

    valid: bool
    error_kind: Optional[str] = None
    normalized_value: Any = MISSING
    message: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self):
        object.__setattr__(self, "error_kind", _kind_value(self.error_kind))
        if not isinstance(self.details, MappingProxyType):
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(valid=True, normalized_value=value)

    @classmethod
    def failure(
        cls,
        error_kind: Union[str, ErrorKind],
        message: Optional[str] = None,
        **details: Any,
    ) -> "Outcome":
        return cls(valid=False, error_kind=error_kind, message=message, details=details)

    @classmethod
    def coerce(cls, result: Any, value: Any) -> "Outcome":
        """
        Normalize whatever an evaluator returned into an Outcome.

        Accepts a bare boolean (predicate-style rules), an Outcome, or a
        mapping shaped like ``{"valid": ..., "error": ..., "value": ...}``.
        """
        if isinstance(result, Outcome):
            if result.valid and result.normalized_value is MISSING:
                return cls(
                    valid=True,
                    normalized_value=value,
                    message=result.message,
                    details=result.details,
                )
            if not result.valid and result.error_kind is None:
                return cls(
                    valid=False,
                    error_kind=ErrorKind.INVALID,
                    message=result.message,
                    details=result.details,
                )
            return result

        if isinstance(result, bool):
            if result:
                return cls.success(value)
            return cls.failure(ErrorKind.INVALID)

        if isinstance(result, Mapping) and "valid" in result:
            if result["valid"]:
                return cls.success(result.get("value", value))
            kind = result.get("error_kind", result.get("error")) or ErrorKind.INVALID
            return cls(
                valid=False,
                error_kind=kind,
                message=result.get("message"),
                details=result.get("details") or {},
            )

        return cls.failure(
            ErrorKind.INVALID,
            message=f"Evaluator returned unsupported result type {type(result).__name__}",
        )


@dataclass(frozen=True)
class EvaluationContext:
    """
    Everything an evaluator may look at besides the value itself.

    ``config`` is the whole input configuration being validated (read-only),
    so rules such as ``conditional`` can inspect sibling fields. ``validator``
    dispatches nested rules.
    """

    validator: "ConfigValidator"
    config: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self):
        if not isinstance(self.config, MappingProxyType):
            object.__setattr__(self, "config", MappingProxyType(dict(self.config)))

    def check(self, value: Any, rule: "Rule") -> Outcome:
        """Validate a nested value against a rule with this same context."""
        return self.validator.validate_value(value, rule, self)


EvaluatorResult = Union[Outcome, bool, Mapping[str, Any]]
Evaluator = Union[
    Callable[[Any], EvaluatorResult],
    Callable[[Any, EvaluationContext], EvaluatorResult],
]


def takes_context(evaluator: Callable) -> bool:
    """
    Whether ``evaluator`` accepts a second positional argument.

    One-argument predicates are called with the value alone; anything that
    cannot be introspected is assumed to take ``(value, context)``.
    """
    try:
        parameters = inspect.signature(evaluator).parameters.values()
    except (TypeError, ValueError):
        return True
    positional = 0
    for parameter in parameters:
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


@dataclass(frozen=True, eq=False)
class Rule:
    """A declarative contract a single value must satisfy."""

    kind: str
    required: bool = False
    default: Any = MISSING
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Pattern[str]] = None
    required_keys: Tuple[str, ...] = ()
    evaluator: Optional[Evaluator] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", _kind_value(self.kind))
        object.__setattr__(self, "required_keys", tuple(self.required_keys))

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True, eq=False)
class Schema:
    """Ordered set of property rules plus optional fallback defaults."""

    properties: Mapping[str, Rule]
    defaults: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    def __contains__(self, property_name: str) -> bool:
        return property_name in self.properties

    def default_for(self, property_name: str) -> Any:
        """Default for an absent property: the rule's own, else the schema map."""
        rule = self.properties.get(property_name)
        if rule is not None and rule.has_default:
            return rule.default
        return self.defaults.get(property_name, MISSING)


def create_schema(
    properties: Mapping[str, Rule],
    defaults: Optional[Mapping[str, Any]] = None,
    name: Optional[str] = None,
) -> Schema:
    """
    Build a Schema.

    Args:
        properties: Property name -> Rule, in the order they should be checked
        defaults: Fallback defaults for properties whose rule has none
        name: Optional schema name used in reports and errors

    Raises:
        SchemaDefinitionError: If a property maps to something other than a
            Rule, or a default is given for an undeclared property
    """
    from ..exceptions import SchemaDefinitionError

    if not isinstance(properties, Mapping):
        raise SchemaDefinitionError(
            f"Schema properties must be a mapping, got {type(properties).__name__}"
        )
    for prop, rule in properties.items():
        if not isinstance(prop, str):
            raise SchemaDefinitionError(f"Property names must be strings, got {prop!r}")
        if not isinstance(rule, Rule):
            raise SchemaDefinitionError(
                f"Property '{prop}' must map to a Rule, got {type(rule).__name__}"
            )

    defaults = dict(defaults or {})
    undeclared = [key for key in defaults if key not in properties]
    if undeclared:
        raise SchemaDefinitionError(
            f"Defaults given for undeclared properties: {', '.join(map(str, undeclared))}"
        )

    return Schema(properties=properties, defaults=defaults, name=name)

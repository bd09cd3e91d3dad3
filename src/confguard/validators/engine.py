"""Validation engine that checks configurations and produces ValidationReport."""

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..config import OptionsLike, resolve_options
from ..schemas.base import ConfigError, ValidationReport
from .base import (
    MISSING,
    ErrorKind,
    EvaluationContext,
    Outcome,
    Rule,
    Schema,
    create_schema,
    takes_context,
)

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES: Mapping[str, str] = MappingProxyType(
    {
        "required": "{property} is required",
        "required_keys": "{property} is missing required keys: {missing}",
        "type": "{property} must be of type {expected}",
        "min": "{property} must be at least {limit}",
        "max": "{property} must be at most {limit}",
        "minLength": "{property} must contain at least {limit} {unit}",
        "maxLength": "{property} must contain at most {limit} {unit}",
        "pattern": "{property} must match the pattern {pattern}",
        "unknown": "{property} is not a recognized configuration option",
        "unsupported_type": "{property} uses unsupported validation type {kind}",
        "item_invalid": "{property} item at index {index} is invalid ({inner})",
        "property_invalid": "{property}.{key} is invalid ({inner})",
        "union": "{property} must match one of the allowed types (got: {attempted})",
        "enum": "{property} must be one of: {allowed}",
        "invalid": "{property} is invalid",
    }
)

_FALLBACK_TEMPLATE = "{property} is invalid"


class ConfigValidator:
    """
    Validates configuration mappings against schemas.

    Instances hold nothing but a read-only registry of primitive evaluators,
    so one instance can be shared freely or a fresh one built per caller.

    Usage:
        validator = ConfigValidator()  # built-in number/string/boolean/array/object
        report = validator.validate({"delay": 250}, schema, strict=True)

        # Extra primitive kinds:
        validator = ConfigValidator(evaluators={"date": evaluate_date})
    """

    def __init__(
        self,
        evaluators: Optional[Mapping[str, Callable[[Any, Rule], Any]]] = None,
        include_defaults: bool = True,
    ):
        registry: Dict[str, Callable[[Any, Rule], Any]] = {}
        if include_defaults:
            registry.update(self._get_default_evaluators())
        if evaluators:
            for kind, evaluator in evaluators.items():
                registry[getattr(kind, "value", kind)] = evaluator
        self._evaluators = MappingProxyType(registry)

    @staticmethod
    def _get_default_evaluators() -> Mapping[str, Callable[[Any, Rule], Any]]:
        from .rules import get_builtin_evaluators

        return get_builtin_evaluators()

    @property
    def evaluators(self) -> Mapping[str, Callable[[Any, Rule], Any]]:
        return self._evaluators

    def supports(self, kind: str) -> bool:
        return getattr(kind, "value", kind) in self._evaluators

    def with_evaluator(
        self, kind: str, evaluator: Callable[[Any, Rule], Any]
    ) -> "ConfigValidator":
        """Return a new validator with ``kind`` added to (or replaced in) the registry."""
        registry = dict(self._evaluators)
        registry[getattr(kind, "value", kind)] = evaluator
        return ConfigValidator(evaluators=registry, include_defaults=False)

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------

    def validate_value(
        self,
        value: Any,
        rule: Rule,
        context: Optional[EvaluationContext] = None,
    ) -> Outcome:
        """
        Validate one value against one rule.

        A rule's own evaluator takes precedence over the registry. Never
        raises: an unknown kind yields 'unsupported_type' and an evaluator
        that raises yields 'invalid'.
        """
        if context is None:
            context = EvaluationContext(validator=self)

        if rule.evaluator is not None:
            if takes_context(rule.evaluator):
                return self._run(rule, rule.evaluator, value, context)
            return self._run(rule, rule.evaluator, value)

        evaluator = self._evaluators.get(rule.kind)
        if evaluator is None:
            logger.debug("No evaluator registered for kind %r", rule.kind)
            return Outcome.failure(
                ErrorKind.UNSUPPORTED_TYPE,
                message=f"Unsupported validation type: {rule.kind}",
                kind=rule.kind,
            )
        return self._run(rule, evaluator, value, rule)

    @staticmethod
    def _run(rule: Rule, evaluator: Callable, value: Any, *args: Any) -> Outcome:
        try:
            result = evaluator(value, *args)
        except Exception as e:
            logger.warning(
                "Evaluator for %r rule raised %s: %s", rule.kind, type(e).__name__, e
            )
            return Outcome.failure(
                ErrorKind.INVALID,
                message=f"Evaluator raised {type(e).__name__}: {e}",
                exception=type(e).__name__,
            )
        return Outcome.coerce(result, value)

    # ------------------------------------------------------------------
    # Whole configurations
    # ------------------------------------------------------------------

    def validate(
        self,
        config: Optional[Mapping[str, Any]],
        schema: Union[Schema, Mapping[str, Rule]],
        options: OptionsLike = None,
        **overrides: Any,
    ) -> ValidationReport:
        """
        Validate ``config`` against ``schema``.

        Every declared property is checked and every failure is recorded;
        properties are visited in schema order, undeclared keys afterwards
        in input order.

        Args:
            config: Configuration mapping (None is treated as empty)
            schema: Schema, or a plain mapping of property name to Rule
            options: ValidateOptions or mapping (strict, apply_defaults, remove_unknown)
            **overrides: Individual options, overriding ``options``

        Returns:
            ValidationReport

        Raises:
            TypeError: If ``config`` is not a mapping
            OptionsError: If an option is unknown or ill-typed
            SchemaDefinitionError: If a plain-mapping schema is malformed
        """
        opts = resolve_options(options, **overrides)
        if not isinstance(schema, Schema):
            schema = create_schema(schema)
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise TypeError(
                f"Configuration must be a mapping, got {type(config).__name__}"
            )

        context = EvaluationContext(validator=self, config=config)
        errors: List[ConfigError] = []
        normalized: Dict[Any, Any] = {}

        for name, rule in schema.properties.items():
            if name not in config:
                if rule.required:
                    errors.append(
                        self._error(name, rule, Outcome.failure(ErrorKind.REQUIRED))
                    )
                    continue
                if opts.apply_defaults:
                    default = schema.default_for(name)
                    if default is not MISSING:
                        normalized[name] = copy.deepcopy(default)
                continue

            outcome = self.validate_value(config[name], rule, context)
            if outcome.valid:
                normalized[name] = outcome.normalized_value
            else:
                errors.append(self._error(name, rule, outcome))

        for key, value in config.items():
            if key in schema.properties:
                continue
            if opts.strict:
                errors.append(
                    self._error(key, None, Outcome.failure(ErrorKind.UNKNOWN))
                )
            elif not opts.remove_unknown:
                normalized[key] = value

        logger.debug(
            "Validated configuration against schema %s: %d error(s)",
            schema.name or "<anonymous>",
            len(errors),
        )

        return ValidationReport(
            valid=len(errors) == 0,
            errors=errors,
            normalized_config=normalized,
            schema_name=schema.name,
        )

    def create_validator(
        self,
        schema: Union[Schema, Mapping[str, Rule]],
        options: OptionsLike = None,
        **overrides: Any,
    ) -> Callable[..., ValidationReport]:
        """
        Bind a schema (and default options) into a reusable callable.

        The returned function accepts ``(config, **overrides)``.
        """
        if not isinstance(schema, Schema):
            schema = create_schema(schema)
        bound = resolve_options(options, **overrides)

        def run(config: Optional[Mapping[str, Any]], **call_overrides: Any) -> ValidationReport:
            return self.validate(config, schema, bound, **call_overrides)

        return run

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _error(self, name: Any, rule: Optional[Rule], outcome: Outcome) -> ConfigError:
        return ConfigError(
            property=str(name),
            error_kind=outcome.error_kind,
            message=self.format_message(str(name), rule, outcome),
            details=dict(outcome.details),
        )

    @staticmethod
    def format_message(property_name: str, rule: Optional[Rule], outcome: Outcome) -> str:
        """Render the fixed English template for an outcome's error kind."""
        kind = outcome.error_kind
        if kind == ErrorKind.REQUIRED.value and "missing" in outcome.details:
            kind = "required_keys"

        params: Dict[str, Any] = {"property": property_name}
        if rule is not None:
            params["kind"] = rule.kind
            params["expected"] = rule.kind
        for key, value in outcome.details.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value)
            params[key] = value

        template = MESSAGE_TEMPLATES.get(kind)
        if template is None:
            if outcome.message:
                return f"{property_name} is invalid: {outcome.message}"
            template = _FALLBACK_TEMPLATE

        try:
            return template.format(**params)
        except (KeyError, IndexError):
            if outcome.message:
                return f"{property_name} is invalid: {outcome.message}"
            return _FALLBACK_TEMPLATE.format(property=property_name)

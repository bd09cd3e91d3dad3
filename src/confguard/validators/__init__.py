"""
Validation engine for configuration mappings.

Provides primitive and composite rules, schemas, and a validator that
checks a configuration, applies defaults and reports every violation.
"""

from ..config import OptionsLike
from ..schemas.base import ValidationReport
from .base import (
    MISSING,
    ErrorKind,
    EvaluationContext,
    Outcome,
    Rule,
    RuleKind,
    Schema,
    create_schema,
)
from .engine import MESSAGE_TEMPLATES, ConfigValidator


def validate(config, schema, options: OptionsLike = None, **overrides) -> ValidationReport:
    """
    One-liner validation function.

    Args:
        config: Configuration mapping to check
        schema: Schema (or mapping of property name to Rule)
        options: Optional ValidateOptions or mapping
        **overrides: strict / apply_defaults / remove_unknown

    Returns:
        ValidationReport
    """
    validator = ConfigValidator()
    return validator.validate(config, schema, options, **overrides)


__all__ = [
    "MISSING",
    "MESSAGE_TEMPLATES",
    "ConfigValidator",
    "ErrorKind",
    "EvaluationContext",
    "Outcome",
    "Rule",
    "RuleKind",
    "Schema",
    "create_schema",
    "validate",
]

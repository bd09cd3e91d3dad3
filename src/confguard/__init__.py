"""
Confguard - Declarative validation for configuration mappings

Check configuration overrides against a schema, fill in defaults, handle
unknown keys and report every violation as data.
"""

__version__ = "0.1.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("Confguard requires Python 3.10 or higher")

from .config import DEFAULT_OPTIONS, ValidateOptions
from .exceptions import (
    ConfguardError,
    ConfigValidationError,
    OptionsError,
    RuleDefinitionError,
    SchemaDefinitionError,
)
from .schemas.base import ConfigError, ValidationReport
from .validators import (
    MISSING,
    ConfigValidator,
    ErrorKind,
    EvaluationContext,
    Outcome,
    Rule,
    RuleKind,
    Schema,
    create_schema,
    validate,
)
from .validators.rules import (
    array,
    array_of,
    boolean,
    compose,
    conditional,
    create_rule,
    custom,
    enum,
    number,
    object,
    shape,
    string,
    union,
)
from .schemas.defaults import DEFAULT_SCHEMAS, get_schema, list_schemas

__all__ = [
    "__version__",
    # Main API
    "validate",
    "ConfigValidator",
    "create_schema",
    # Rule builders
    "create_rule",
    "number",
    "string",
    "boolean",
    "array",
    "object",
    "array_of",
    "shape",
    "union",
    "enum",
    "conditional",
    "compose",
    "custom",
    # Data model
    "MISSING",
    "Rule",
    "RuleKind",
    "Schema",
    "Outcome",
    "ErrorKind",
    "EvaluationContext",
    # Result types
    "ConfigError",
    "ValidationReport",
    # Options
    "ValidateOptions",
    "DEFAULT_OPTIONS",
    # Built-in schemas
    "DEFAULT_SCHEMAS",
    "get_schema",
    "list_schemas",
    # Errors
    "ConfguardError",
    "ConfigValidationError",
    "OptionsError",
    "RuleDefinitionError",
    "SchemaDefinitionError",
]

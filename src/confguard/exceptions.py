"""Exceptions raised by confguard.

Validation failures are never raised; they are returned as data inside a
ValidationReport. These exceptions signal programming errors made while
building rules, schemas or options, plus an opt-in error for callers that
prefer to abort on an invalid report.
"""

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .schemas.base import ConfigError


class ConfguardError(Exception):
    """Base exception for confguard."""
    pass


class RuleDefinitionError(ConfguardError, ValueError):
    """Exception raised when a rule builder receives invalid arguments."""
    pass


class SchemaDefinitionError(ConfguardError, ValueError):
    """Exception raised when a schema is malformed."""
    pass


class OptionsError(ConfguardError, ValueError):
    """Exception raised for unrecognized or ill-typed validation options."""
    pass


class ConfigValidationError(ConfguardError):
    """Raised by ValidationReport.raise_for_errors() when a report is invalid."""

    def __init__(self, errors: "List[ConfigError]", schema_name: str = None):
        self.errors = list(errors)
        self.schema_name = schema_name
        target = f" for schema '{schema_name}'" if schema_name else ""
        details = "\n".join(f"  - {e.message}" for e in self.errors)
        super().__init__(f"Configuration validation failed{target}:\n{details}")

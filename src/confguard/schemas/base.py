"""Result types returned by the schema validator."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..exceptions import ConfigValidationError


class ConfigError(BaseModel):
    """A single violation found while validating a configuration."""

    property: str = Field(..., description="Top-level property the error refers to")
    error_kind: str = Field(..., description="Error classification, e.g. 'min'")
    message: str = Field(..., description="Human-readable description")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Error-specific data (limit, index, ...)"
    )


class ValidationReport(BaseModel):
    """Outcome of validating a whole configuration against a schema."""

    valid: bool = Field(..., description="True iff no errors were recorded")
    errors: List[ConfigError] = Field(default_factory=list)
    normalized_config: Dict[Any, Any] = Field(
        default_factory=dict,
        description="Configuration after defaults and unknown-key policy",
    )
    schema_name: Optional[str] = Field(None, description="Name of the schema used")

    @property
    def config(self) -> Dict[Any, Any]:
        return self.normalized_config

    def messages(self) -> List[str]:
        """Error messages in the order they were found."""
        return [e.message for e in self.errors]

    def errors_for(self, property_name: str) -> List[ConfigError]:
        return [e for e in self.errors if e.property == property_name]

    def raise_for_errors(self) -> "ValidationReport":
        """
        Raise if the report is invalid, otherwise return it unchanged.

        Raises:
            ConfigValidationError: If any error was recorded
        """
        if not self.valid:
            raise ConfigValidationError(self.errors, schema_name=self.schema_name)
        return self

    def to_summary(self) -> str:
        if self.valid:
            return "Configuration is valid"
        lines = [f"Configuration has {len(self.errors)} error(s):"]
        lines.extend(f"  - [{e.error_kind}] {e.message}" for e in self.errors)
        return "\n".join(lines)

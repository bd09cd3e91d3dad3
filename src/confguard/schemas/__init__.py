"""Data models and built-in schemas for confguard."""

from .base import ConfigError, ValidationReport

__all__ = [
    "ConfigError",
    "ValidationReport",
]

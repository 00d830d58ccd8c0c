"""Módulo de utilidades"""
from .validators import DataValidator, ValidationResult, ValidationIssue, ValidationSeverity
from .helpers import (
    js_round,
    safe_divide,
    clamp,
    format_number,
    format_currency,
    format_money,
    format_plain,
    to_camel,
)

__all__ = [
    "DataValidator",
    "ValidationResult",
    "ValidationIssue",
    "ValidationSeverity",
    "js_round",
    "safe_divide",
    "clamp",
    "format_number",
    "format_currency",
    "format_money",
    "format_plain",
    "to_camel",
]

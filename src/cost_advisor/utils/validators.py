"""
validators.py - Utilidades de validación de datos (v1.2)

- ValidationResult: resultado acumulado (costos normalizados + errores)
- DataValidator: comprobaciones atómicas que nunca lanzan excepciones
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
from enum import Enum

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from .helpers import to_camel


_FLOAT = TypeAdapter(float)


class ValidationSeverity(Enum):
    """Severidad"""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """Problema de validación"""
    field: str
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR


@dataclass
class ValidationResult:
    """Resultado de validación: costos normalizados + mensajes"""
    costs: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str):
        """Agrega un error"""
        self.errors.append(message)
        self.issues.append(ValidationIssue(field=field_name, message=message))

    def add_warning(self, field_name: str, message: str):
        """Agrega una advertencia"""
        self.warnings.append(message)
        self.issues.append(
            ValidationIssue(field=field_name, message=message, severity=ValidationSeverity.WARNING)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "costs": {to_camel(name): value for name, value in self.costs.items()},
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "isValid": self.is_valid,
        }


class DataValidator:
    """Validador de datos

    Cada método devuelve el mensaje de error (o None si el valor es válido).
    """

    @staticmethod
    def to_number(value: Any, label: str) -> Tuple[float, Optional[str]]:
        """Convierte números o cadenas numéricas a float"""
        if isinstance(value, bool):
            return 0.0, f"{label}: el valor debe ser un número válido"
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return 0.0, None
        try:
            number = _FLOAT.validate_python(value)
        except PydanticValidationError:
            return 0.0, f"{label}: el valor debe ser un número válido"
        if not math.isfinite(number):
            return 0.0, f"{label}: el valor debe ser un número válido"
        return number, None

    @staticmethod
    def non_negative(value: float, label: str) -> Optional[str]:
        """0 o mayor"""
        if value < 0:
            return f"{label}: el valor no puede ser negativo"
        return None

    @staticmethod
    def positive(value: float, label: str) -> Optional[str]:
        """Mayor a 0"""
        if value <= 0:
            return f"{label} debe ser mayor a 0"
        return None

    @staticmethod
    def range_check(
        value: float,
        label: str,
        min_val: Optional[float] = None,
        max_val: Optional[float] = None,
    ) -> Optional[str]:
        """Dentro de [min, max]"""
        if min_val is not None and value < min_val:
            return f"{label} debe estar entre {_fmt(min_val)} y {_fmt(max_val)}" if max_val is not None \
                else f"{label} debe ser al menos {_fmt(min_val)}"
        if max_val is not None and value > max_val:
            return f"{label} debe estar entre {_fmt(min_val or 0)} y {_fmt(max_val)}"
        return None

    @staticmethod
    def choice(value: Any, label: str, choices: Sequence[str]) -> Optional[str]:
        """Valor dentro de las opciones"""
        if not isinstance(value, str) or value.strip().lower() not in choices:
            return f"{label}: opción no válida"
        return None

    @staticmethod
    def suspiciously_high(value: float, label: str, limit: Optional[float]) -> Optional[str]:
        """Advertencia para valores muy altos"""
        if limit is not None and value > limit:
            return f"{label}: el valor parece muy alto, por favor verifica"
        return None


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)

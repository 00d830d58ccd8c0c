"""
Excepciones personalizadas

Todas las excepciones propias del motor de costos. La validación de
entradas del usuario NO lanza excepciones (devuelve una lista de errores);
estas clases señalan errores de programación o de configuración.
"""

from typing import Optional, Dict, Any


class CostAdvisorError(Exception):
    """Excepción base"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        """
        Args:
            message: mensaje de error
            error_code: código de error
            details: información adicional
            cause: excepción original
        """
        self.message = message
        self.error_code = error_code or self._default_code()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _default_code(self) -> str:
        return "CA_UNKNOWN"

    def to_dict(self) -> Dict[str, Any]:
        """Conversión a diccionario"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ValidationError(CostAdvisorError):
    """Error de validación de datos"""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", {})
        details["field"] = field
        details["value"] = str(value)[:100]  # limitar longitud
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "CA_VALIDATION"


class ConfigurationError(CostAdvisorError):
    """Error de configuración"""

    def __init__(
        self,
        message: str,
        config_key: str = None,
        **kwargs
    ):
        self.config_key = config_key
        details = kwargs.pop("details", {})
        details["config_key"] = config_key
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "CA_CONFIG"


class AnalysisError(CostAdvisorError):
    """Error en una etapa del análisis"""

    def __init__(
        self,
        message: str,
        archetype: Optional[str] = None,
        stage: Optional[str] = None,
        **kwargs
    ):
        self.archetype = archetype
        self.stage = stage
        details = kwargs.pop("details", {})
        details["archetype"] = archetype
        details["stage"] = stage
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "CA_ANALYSIS"


class UnknownArchetypeError(AnalysisError):
    """Arquetipo de negocio no soportado por una etapa"""

    def _default_code(self) -> str:
        return "CA_UNKNOWN_ARCHETYPE"


# Constantes de códigos de error
class ErrorCodes:
    """Códigos de error"""

    # General
    UNKNOWN = "CA_UNKNOWN"
    VALIDATION = "CA_VALIDATION"
    CONFIG = "CA_CONFIG"

    # Análisis
    ANALYSIS_FAILED = "CA_ANALYSIS"
    UNKNOWN_ARCHETYPE = "CA_UNKNOWN_ARCHETYPE"
    PRICING_FAILED = "CA_PRICING"
    METRICS_FAILED = "CA_METRICS"
    RECOMMENDATIONS_FAILED = "CA_RECOMMENDATIONS"

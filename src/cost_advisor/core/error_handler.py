"""
Manejador de errores

Manejo centralizado de errores del pipeline de análisis. Ninguna etapa
debe dejar escapar una excepción hacia la capa de presentación: el error se
registra, se decide una acción de recuperación y se devuelve un valor de
respaldo bien formado.
"""

import functools
import logging
import traceback
from typing import Callable, Optional, Type, Any, Dict, List
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime

from .exceptions import (
    CostAdvisorError,
    ValidationError,
    AnalysisError,
    UnknownArchetypeError,
)


class RecoveryAction(Enum):
    """Acción de recuperación"""
    SKIP = "skip"
    FALLBACK = "fallback"
    ABORT = "abort"
    LOG_AND_CONTINUE = "log_and_continue"


@dataclass
class ErrorRecord:
    """Registro de error"""
    error_code: str
    message: str
    timestamp: str
    traceback: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    recovery_action: Optional[RecoveryAction] = None


class ErrorHandler:
    """Manejador de errores"""

    def __init__(self, logger: logging.Logger = None, max_history: int = 100):
        self.logger = logger or logging.getLogger(__name__)
        self.max_history = max_history
        self.error_history: List[ErrorRecord] = []

        # estrategia por tipo de error (el primero que coincide gana)
        self._recovery_strategies = {
            ValidationError: RecoveryAction.SKIP,
            UnknownArchetypeError: RecoveryAction.FALLBACK,
            AnalysisError: RecoveryAction.FALLBACK,
            ArithmeticError: RecoveryAction.FALLBACK,
        }

    def handle(
        self,
        error: Exception,
        context: Dict[str, Any] = None
    ) -> RecoveryAction:
        """
        Procesa un error

        Args:
            error: excepción capturada
            context: contexto (session_id, archetype, stage...)

        Returns:
            acción de recuperación
        """
        context = context or {}

        record = self._create_record(error, context)
        self.error_history.append(record)
        if len(self.error_history) > self.max_history:
            del self.error_history[0]

        self._log_error(error, context)

        recovery = self._determine_recovery(error)
        record.recovery_action = recovery

        return recovery

    def _create_record(
        self,
        error: Exception,
        context: Dict[str, Any]
    ) -> ErrorRecord:
        """Crea el registro"""
        error_code = "UNKNOWN"
        details = {}

        if isinstance(error, CostAdvisorError):
            error_code = error.error_code
            details = error.details

        return ErrorRecord(
            error_code=error_code,
            message=str(error),
            timestamp=datetime.now().isoformat(),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            details={**details, **context}
        )

    def _log_error(self, error: Exception, context: Dict[str, Any]):
        """Registro en el log"""
        if isinstance(error, CostAdvisorError):
            self.logger.error(
                f"[{error.error_code}] {error.message}",
                extra={"context": {**error.details, **context}},
                exc_info=error
            )
        else:
            self.logger.error(
                f"Unhandled error: {str(error)}",
                extra={"context": context},
                exc_info=error
            )

    def _determine_recovery(self, error: Exception) -> RecoveryAction:
        """Decide la estrategia de recuperación"""
        for error_type, action in self._recovery_strategies.items():
            if isinstance(error, error_type):
                return action

        if isinstance(error, CostAdvisorError):
            return RecoveryAction.LOG_AND_CONTINUE
        return RecoveryAction.ABORT

    def get_error_summary(self) -> Dict[str, Any]:
        """Resumen de errores"""
        if not self.error_history:
            return {"total_errors": 0, "by_code": {}}

        by_code = {}
        for record in self.error_history:
            code = record.error_code
            by_code[code] = by_code.get(code, 0) + 1

        return {
            "total_errors": len(self.error_history),
            "by_code": by_code,
            "recent_errors": [
                {"code": r.error_code, "message": r.message, "time": r.timestamp}
                for r in self.error_history[-5:]
            ]
        }

    def clear_history(self):
        """Limpia el historial"""
        self.error_history.clear()


def error_handler(
    fallback_value: Any = None,
    fallback_factory: Optional[Callable[[], Any]] = None,
    reraise: bool = False,
    log_level: str = "error",
    recovery_actions: Dict[Type[Exception], RecoveryAction] = None,
    stage: Optional[str] = None,
    error_code: Optional[str] = None,
):
    """
    Decorador de manejo de errores

    Uso:
        @error_handler(fallback_factory=list, stage="alerts")
        def _alerts(self, ..., context=None):
            pass

    Si el método pertenece a un objeto con atributo `handler` (ErrorHandler),
    el error se registra allí junto con el contexto recibido en `context=`
    (session_id, archetype...) y la acción de recuperación la decide el
    manejador. Los errores ajenos al motor se envuelven en AnalysisError con
    `error_code`.

    Args:
        fallback_value: valor devuelto ante un error
        fallback_factory: construye el valor de respaldo (listas, dicts...)
        reraise: relanzar en caso de ABORT
        log_level: nivel de log
        recovery_actions: acción por tipo de excepción
        stage: nombre de la etapa del pipeline
        error_code: código para errores ajenos al motor
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)

            try:
                return func(*args, **kwargs)

            except Exception as e:
                context = dict(kwargs.get("context") or {})
                if stage:
                    context["stage"] = stage

                override = None
                for exc_type, act in (recovery_actions or {}).items():
                    if isinstance(e, exc_type):
                        override = act
                        break

                handler = getattr(args[0], "handler", None) if args else None
                if isinstance(handler, ErrorHandler):
                    error = e
                    if not isinstance(e, CostAdvisorError):
                        error = AnalysisError(
                            f"Error in {func.__name__}: {str(e)}",
                            archetype=context.get("archetype"),
                            stage=stage,
                            error_code=error_code,
                            cause=e,
                        )
                        error.__cause__ = e
                    action = handler.handle(error, context)
                    if override is not None:
                        action = override
                else:
                    action = override or RecoveryAction.ABORT
                    log_method = getattr(logger, log_level)
                    log_method(
                        f"Error in {func.__name__}: {str(e)}",
                        exc_info=True,
                        extra={"context": {**context, "action": action.value}}
                    )

                if action == RecoveryAction.ABORT and reraise:
                    raise

                if fallback_factory is not None:
                    return fallback_factory()
                return fallback_value

        return wrapper
    return decorator

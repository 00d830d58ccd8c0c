"""Módulo core (v1.2)"""
from .exceptions import (
    CostAdvisorError,
    ValidationError,
    ConfigurationError,
    AnalysisError,
    UnknownArchetypeError,
    ErrorCodes,
)
from .error_handler import ErrorHandler, RecoveryAction, error_handler
from .config import (
    ArchetypeProfile,
    FieldSpec,
    EngineSettings,
    ENGINE_CONSTANTS,
    EXPERIENCE_LEVELS,
    get_settings,
    reload_settings,
)
from .profiles import PROFILES, get_profile
from .logging import setup_logger

__all__ = [
    # excepciones
    "CostAdvisorError",
    "ValidationError",
    "ConfigurationError",
    "AnalysisError",
    "UnknownArchetypeError",
    "ErrorCodes",
    "ErrorHandler",
    "RecoveryAction",
    "error_handler",
    # configuración
    "ArchetypeProfile",
    "FieldSpec",
    "EngineSettings",
    "ENGINE_CONSTANTS",
    "EXPERIENCE_LEVELS",
    "get_settings",
    "reload_settings",
    "PROFILES",
    "get_profile",
    "setup_logger",
]

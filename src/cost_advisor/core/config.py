"""
config.py - Configuración del motor (v1.2)

Configuración central del motor de costos:
- Tipos inmutables que describen cada arquetipo (campos, bandas, reglas)
- Constantes del motor (días por mes, proyectos por mes, pesos del score)
- EngineSettings cargado desde variables de entorno (.env)

Las tablas concretas por arquetipo viven en profiles.py.
"""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


# ============================================================
# Constantes del motor
# ============================================================

@dataclass(frozen=True)
class EngineConstants:
    """Constantes fijas de los cálculos"""
    DAYS_PER_MONTH: int = 30               # gastos mensuales → diarios
    PROJECTS_PER_MONTH: int = 4            # supuesto de ingreso mensual (servicio)
    COHERENCE_WEIGHT: float = 0.6          # overall = 0.6·coherencia + 0.4·completitud
    COMPLETENESS_WEIGHT: float = 0.4
    EXCELLENT_SCORE: float = 0.8           # umbrales de mensajes de evaluación
    ACCEPTABLE_SCORE: float = 0.6


ENGINE_CONSTANTS = EngineConstants()


# Multiplicadores por experiencia (servicio profesional)
EXPERIENCE_LEVELS: Dict[str, Tuple[str, float]] = {
    "junior": ("1-2 años (Junior)", 1.0),
    "mid": ("3-5 años (Intermedio)", 1.3),
    "senior": ("5-10 años (Senior)", 1.7),
    "expert": ("+10 años (Expert)", 2.2),
}
DEFAULT_EXPERIENCE = "mid"


# ============================================================
# Tipos de configuración por arquetipo
# ============================================================

@dataclass(frozen=True)
class FieldSpec:
    """Campo de entrada de un arquetipo"""
    name: str                               # nombre canónico (snake_case)
    label: str                              # vocabulario de negocio (mensajes)
    required: bool = False                  # requerido ⇒ debe ser > 0
    min: float = 0
    max: Optional[float] = None
    default: object = 0
    kind: str = "number"                    # "number" | "choice"
    choices: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()           # nombres camelCase aceptados
    range_message: Optional[str] = None     # mensaje único para ≤0 / fuera de rango
    warn_above: Optional[float] = None      # valor "sospechosamente alto"

    # indicador de progreso
    indicator: str = ""
    icon: str = ""
    color: str = ""

    @property
    def keys(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "label": self.label,
            "required": self.required,
            "min": self.min,
            "max": self.max,
            "default": self.default,
            "kind": self.kind,
            "choices": list(self.choices),
        }


@dataclass(frozen=True)
class CoherenceRule:
    """Penalización aditiva del score de coherencia

    source:
        "share"     → proporción del componente (0~1)
        "input"     → valor crudo del campo
        "zero"      → penaliza si alguno de `keys` (componentes) es 0
    """
    keys: Tuple[str, ...]
    penalty: float
    source: str = "share"
    low: Optional[float] = None
    high: Optional[float] = None


@dataclass(frozen=True)
class AlertRule:
    """Regla umbral → alerta

    op ">" / "<" sobre la proporción (source="share") o el valor crudo
    (source="input"). El mensaje admite {pct} y {value}.
    """
    key: str
    op: str
    threshold: float
    type: str                               # "warning" | "danger" | "info"
    title: str
    message: str
    suggestion: Optional[str] = None
    source: str = "share"


# (etiqueta, mínimo, máximo) – None = sin límite, ambos inclusivos
Tier = Tuple[str, Optional[float], Optional[float]]


@dataclass(frozen=True)
class Ladder:
    """Escalera de clasificación: primera banda que contiene el valor"""
    tiers: Tuple[Tier, ...]
    otherwise: str

    def classify(self, value: float) -> str:
        for label, low, high in self.tiers:
            if low is not None and value < low:
                continue
            if high is not None and value > high:
                continue
            return label
        return self.otherwise


@dataclass(frozen=True)
class BenchmarkSpec:
    """Comparación contra un rango de referencia "de industria"

    source: "share:<componente>", "input:<campo>", "component:<componente>",
    "total" o None (métrica fija con `fixed_value`).
    display: "pct" | "money" | "hours" | "text"
    """
    metric: str
    source: Optional[str]
    display: str
    industry_range: str
    status: Ladder
    comparison: Ladder
    advice: Tuple[str, str, str]            # (good, average, poor)
    fixed_value: str = ""


@dataclass(frozen=True)
class PriorityTemplate:
    """Texto fijo de una recomendación prioritaria"""
    title: str
    target_value: str
    steps: Tuple[str, ...]


@dataclass(frozen=True)
class StrategicItem:
    """Recomendación estratégica cualitativa"""
    title: str
    description: str
    impact: str
    investment: str
    timeline: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "investment": self.investment,
            "timeline": self.timeline,
        }


@dataclass(frozen=True)
class ArchetypeProfile:
    """Configuración completa de un arquetipo de negocio"""
    key: str                                # "manufactura", "reventa", ...
    name: str                               # nombre para mensajes
    fields: Tuple[FieldSpec, ...]
    coherence_rules: Tuple[CoherenceRule, ...] = ()
    completeness_weights: Tuple[Tuple[str, float], ...] = ()
    alert_rules: Tuple[AlertRule, ...] = ()
    benchmarks: Tuple[BenchmarkSpec, ...] = ()
    priority: Tuple[PriorityTemplate, ...] = ()
    strategic: Tuple[StrategicItem, ...] = ()

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def required_fields(self) -> List[str]:
        return [f.name for f in self.fields if f.required]


# ============================================================
# Settings (variables de entorno)
# ============================================================

@dataclass
class EngineSettings:
    """Configuración de ejecución"""

    log_level: str = "INFO"
    currency: str = "COP"
    debug_mode: bool = False
    supported_currencies: Tuple[str, ...] = ("COP", "USD", "MXN", "PEN", "CLP")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Carga la configuración desde el entorno"""
        return cls(
            log_level=os.getenv("COST_ADVISOR_LOG_LEVEL", "INFO").upper(),
            currency=os.getenv("COST_ADVISOR_CURRENCY", "COP").upper(),
            debug_mode=os.getenv("COST_ADVISOR_DEBUG", "false").lower() == "true",
        )

    def validate(self) -> List[str]:
        """Validación de la configuración"""
        errors = []

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Nivel de log no válido: {self.log_level}")

        if self.currency not in self.supported_currencies:
            errors.append(f"Moneda no soportada: {self.currency}")

        return errors

    def ensure_valid(self) -> "EngineSettings":
        """validate() sin problemas, o ConfigurationError con la lista"""
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors), details={"errors": errors})
        return self


settings = EngineSettings.from_env()


def get_settings() -> EngineSettings:
    """Instancia global de configuración"""
    return settings


def reload_settings() -> EngineSettings:
    """Recarga la configuración desde el entorno"""
    global settings
    settings = EngineSettings.from_env()
    return settings

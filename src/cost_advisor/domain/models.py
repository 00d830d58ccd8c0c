"""
models.py - Modelos de dominio (v1.2)

Dataclasses puras, sin dependencias externas. Todos los objetos se crean
por solicitud de análisis, no se mutan y se serializan con to_dict()
(claves camelCase, listas para JSON).
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from enum import Enum

from ..utils.helpers import to_camel


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def _as_dict(obj) -> Dict[str, Any]:
    return {to_camel(f.name): _jsonable(getattr(obj, f.name)) for f in fields(obj)}


class BusinessArchetype(Enum):
    """Arquetipo de negocio"""
    MANUFACTURING = "manufactura"
    RESALE = "reventa"
    SERVICE = "servicio"
    HYBRID = "hibrido"
    PACKAGE = "paquete"

    @classmethod
    def parse(cls, value: Any) -> Optional["BusinessArchetype"]:
        """Acepta el miembro, su valor ("reventa") o su nombre ("Resale")"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        return None


class AlertType(Enum):
    """Tipo de alerta"""
    WARNING = "warning"
    DANGER = "danger"
    INFO = "info"


class BenchmarkStatus(Enum):
    """Estado frente al rango de referencia"""
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


# ============================================================
# Análisis de costos (uno por arquetipo)
# ============================================================

@dataclass(frozen=True)
class CostAnalysis:
    """Base de los resultados de precio"""
    ARCHETYPE: ClassVar[BusinessArchetype]

    @property
    def archetype(self) -> BusinessArchetype:
        return self.ARCHETYPE

    @property
    def cost_basis(self) -> float:
        raise NotImplementedError

    @property
    def canonical_price(self) -> float:
        raise NotImplementedError

    @property
    def canonical_profit(self) -> float:
        return self.canonical_price - self.cost_basis

    def to_dict(self) -> Dict[str, Any]:
        data = {"archetype": self.archetype.value}
        data.update(_as_dict(self))
        return data


@dataclass(frozen=True)
class ManufacturingAnalysis(CostAnalysis):
    """Manufactura: costo unitario + tres niveles de precio"""
    ARCHETYPE: ClassVar[BusinessArchetype] = BusinessArchetype.MANUFACTURING

    total_cost: float
    min_price: int                  # margen 20%
    optimal_price: int              # margen 50%
    premium_price: int              # margen 100%
    profit: float

    @property
    def cost_basis(self) -> float:
        return self.total_cost

    @property
    def canonical_price(self) -> float:
        return self.optimal_price


@dataclass(frozen=True)
class ResaleAnalysis(CostAnalysis):
    """Reventa: costo puesto + margen deseado"""
    ARCHETYPE: ClassVar[BusinessArchetype] = BusinessArchetype.RESALE

    logistics_cost: float
    total_cost: float
    selling_price: int
    profit: float
    roi: int

    @property
    def cost_basis(self) -> float:
        return self.total_cost

    @property
    def canonical_price(self) -> float:
        return self.selling_price


@dataclass(frozen=True)
class ServiceAnalysis(CostAnalysis):
    """Servicio profesional: horas × tarifa × experiencia"""
    ARCHETYPE: ClassVar[BusinessArchetype] = BusinessArchetype.SERVICE

    base_price: float
    experience_level: str
    experience_multiplier: float
    final_price: int
    monthly_income: int
    total_cost: float
    profit: float

    @property
    def cost_basis(self) -> float:
        return self.base_price

    @property
    def canonical_price(self) -> float:
        return self.final_price


@dataclass(frozen=True)
class HybridAnalysis(CostAnalysis):
    """Híbrido: componente servicio + productos"""
    ARCHETYPE: ClassVar[BusinessArchetype] = BusinessArchetype.HYBRID

    service_component: float
    total_per_client: float
    service_margin: int
    product_margin: int
    suggested_price: int
    total_profit: float

    @property
    def cost_basis(self) -> float:
        return self.total_per_client

    @property
    def canonical_price(self) -> float:
        return self.suggested_price


@dataclass(frozen=True)
class PackageAnalysis(CostAnalysis):
    """Paquete/combo con descuento"""
    ARCHETYPE: ClassVar[BusinessArchetype] = BusinessArchetype.PACKAGE

    total_components_cost: float
    presentation_cost: float
    total_base_cost: float
    discount_percentage: float
    avg_item_price: float
    suggested_price: int
    total_savings: int
    total_profit: float
    profit_margin: int

    @property
    def cost_basis(self) -> float:
        return self.total_base_cost

    @property
    def canonical_price(self) -> float:
        return self.suggested_price


# ============================================================
# Métricas, alertas, benchmarks
# ============================================================

@dataclass(frozen=True)
class Metrics:
    """Proporciones y scores de calidad de datos"""
    proportions: Dict[str, float]
    components: Dict[str, float]            # montos de cada componente
    component_total: float
    coherence_score: float
    completeness: float
    overall_score: float

    def to_dict(self) -> Dict[str, Any]:
        data = _as_dict(self)
        data["proportions"] = {to_camel(k): v for k, v in self.proportions.items()}
        data["components"] = {to_camel(k): v for k, v in self.components.items()}
        return data


@dataclass(frozen=True)
class Alert:
    """Alerta para el usuario"""
    type: AlertType
    title: str
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _as_dict(self)
        if self.suggestion is None:
            data.pop("suggestion")
        return data


@dataclass(frozen=True)
class Benchmark:
    """Comparación con referencia de industria"""
    metric: str
    your_value: float
    industry_range: str
    status: BenchmarkStatus
    recommendation: str
    value: str = ""                         # valor formateado para mostrar
    comparison: str = ""                    # etiqueta ("Óptimo", "Alto"...)

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class ProgressIndicator:
    """Avance del formulario por campo"""
    name: str
    completion: int                         # 0 | 100
    icon: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


# ============================================================
# Recomendaciones
# ============================================================

@dataclass(frozen=True)
class PriorityRecommendation:
    """Recomendación de alto impacto"""
    title: str
    impact: str                             # "Alto" | "Medio" | "Bajo"
    roi: str
    current_value: str
    target_value: str
    steps: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class OptimizationItem:
    """Oportunidad de ahorro estimada"""
    category: str
    opportunity: str
    savings: float
    savings_label: str
    timeframe: str

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class BenchmarkRecommendation:
    """Benchmark orientado a la acción"""
    metric: str
    your_value: str
    industry: str
    status: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class StrategicRecommendation:
    """Recomendación estratégica"""
    title: str
    description: str
    impact: str
    investment: str
    timeline: str

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class RecommendationSet:
    """Conjunto de recomendaciones de un análisis"""
    priority: Tuple[PriorityRecommendation, ...] = ()
    optimization: Tuple[OptimizationItem, ...] = ()
    benchmarks: Tuple[BenchmarkRecommendation, ...] = ()
    strategic: Tuple[StrategicRecommendation, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


# ============================================================
# Reporte completo
# ============================================================

@dataclass(frozen=True)
class AnalysisReport:
    """Resultado del pipeline completo"""
    archetype: Optional[BusinessArchetype]
    session_id: Optional[str]
    validation: Any                         # utils.validators.ValidationResult
    analysis: Optional[CostAnalysis] = None
    metrics: Optional[Metrics] = None
    alerts: Tuple[Alert, ...] = ()
    benchmarks: Tuple[Benchmark, ...] = ()
    recommendations: Optional[RecommendationSet] = None
    coherence_message: Optional[str] = None
    overall_assessment: Optional[str] = None
    progress: Tuple[ProgressIndicator, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.validation.errors

    @property
    def errors(self) -> List[str]:
        return list(self.validation.errors)

    def to_dict(self) -> Dict[str, Any]:
        data = _as_dict(self)
        data["ok"] = self.ok
        return data

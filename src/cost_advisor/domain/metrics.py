"""
metrics.py - Métricas y coherencia de costos (v1.2)

- Proporción de cada componente sobre el total (0 si el total es 0)
- Coherencia: 1.0 menos penalizaciones aditivas por bandas "saludables"
- Completitud: suma de pesos de los campos informados
- overall = 0.6·coherencia + 0.4·completitud
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from ..core.config import ArchetypeProfile, CoherenceRule, EngineConstants, ENGINE_CONSTANTS
from ..core.profiles import get_profile
from ..utils.helpers import clamp, safe_divide
from .models import BusinessArchetype, CostAnalysis, Metrics, ProgressIndicator
from .schema import canonical_costs, cost_value, resolve_archetype


# ============================================================
# Componentes de costo por arquetipo
# ============================================================

def _manufacturing_components(costs: Mapping[str, Any]) -> Dict[str, float]:
    # indirectos mensuales sin prorratear
    return {
        "materials": cost_value(costs, "materials"),
        "labor": cost_value(costs, "labor"),
        "packaging": cost_value(costs, "packaging"),
        "overhead": cost_value(costs, "overhead"),
    }


def _resale_components(costs: Mapping[str, Any]) -> Dict[str, float]:
    purchase = cost_value(costs, "purchase_cost")
    return {
        "purchase": purchase,
        "logistics": purchase * cost_value(costs, "logistics_pct") / 100,
        "storage": cost_value(costs, "storage"),
    }


def _service_components(costs: Mapping[str, Any]) -> Dict[str, float]:
    return {
        "hourly_value": cost_value(costs, "hourly_rate") * cost_value(costs, "project_hours"),
        "operational": cost_value(costs, "operational_cost") / ENGINE_CONSTANTS.DAYS_PER_MONTH,
    }


def _hybrid_components(costs: Mapping[str, Any]) -> Dict[str, float]:
    return {
        "service": cost_value(costs, "professional_rate") * cost_value(costs, "client_hours"),
        "products": cost_value(costs, "products_cost"),
        "additional": cost_value(costs, "additional_cost"),
    }


def _package_components(costs: Mapping[str, Any]) -> Dict[str, float]:
    return {
        "components": cost_value(costs, "components_cost"),
        "presentation": cost_value(costs, "presentation_cost"),
    }


_COMPONENTS: Dict[BusinessArchetype, Callable[[Mapping[str, Any]], Dict[str, float]]] = {
    BusinessArchetype.MANUFACTURING: _manufacturing_components,
    BusinessArchetype.RESALE: _resale_components,
    BusinessArchetype.SERVICE: _service_components,
    BusinessArchetype.HYBRID: _hybrid_components,
    BusinessArchetype.PACKAGE: _package_components,
}
assert set(_COMPONENTS) == set(BusinessArchetype), "faltan componentes de costo"


def cost_components(archetype: Any, costs: Mapping[str, Any]) -> Dict[str, float]:
    """Monto de cada componente de costo (base de las proporciones)"""
    member, profile = resolve_archetype(archetype, stage="metrics")
    return _COMPONENTS[member](canonical_costs(profile, costs))


# ============================================================
# Scorer
# ============================================================

class MetricsScorer:
    """Calcula proporciones, coherencia y completitud"""

    def __init__(self, constants: Optional[EngineConstants] = None):
        self.constants = constants or ENGINE_CONSTANTS

    def compute(
        self,
        archetype: Any,
        costs: Mapping[str, Any],
        analysis: Optional[CostAnalysis] = None,
    ) -> Metrics:
        """
        Métricas del análisis

        Args:
            archetype: arquetipo de negocio
            costs: costos validados (acepta alias camelCase)
            analysis: resultado de precio (no cambia las proporciones)

        Raises:
            UnknownArchetypeError: arquetipo no soportado
        """
        member, profile = resolve_archetype(archetype, stage="metrics")
        costs = canonical_costs(profile, costs)
        components = _COMPONENTS[member](costs)
        total = sum(components.values())
        proportions = {key: safe_divide(value, total) for key, value in components.items()}

        coherence = self.coherence_score(profile, costs, components, proportions, total)
        completeness = self.completeness(profile, costs)
        overall = (
            self.constants.COHERENCE_WEIGHT * coherence
            + self.constants.COMPLETENESS_WEIGHT * completeness
        )

        return Metrics(
            proportions=proportions,
            components=components,
            component_total=total,
            coherence_score=coherence,
            completeness=completeness,
            overall_score=overall,
        )

    def coherence_score(
        self,
        profile: ArchetypeProfile,
        costs: Mapping[str, Any],
        components: Mapping[str, float],
        proportions: Mapping[str, float],
        total: float,
    ) -> float:
        """1.0 menos penalizaciones, mínimo 0"""
        score = 1.0
        for rule in profile.coherence_rules:
            if self._violates(rule, costs, components, proportions, total):
                score -= rule.penalty
        return clamp(score, 0.0, 1.0)

    @staticmethod
    def _violates(
        rule: CoherenceRule,
        costs: Mapping[str, Any],
        components: Mapping[str, float],
        proportions: Mapping[str, float],
        total: float,
    ) -> bool:
        if rule.source == "zero":
            return any(components.get(key, 0) == 0 for key in rule.keys)

        if rule.source == "share":
            # sin total no hay proporciones que evaluar
            if total == 0:
                return False
            value = proportions.get(rule.keys[0], 0.0)
        else:
            value = cost_value(costs, rule.keys[0])

        if rule.low is not None and value < rule.low:
            return True
        if rule.high is not None and value > rule.high:
            return True
        return False

    @staticmethod
    def completeness(profile: ArchetypeProfile, costs: Mapping[str, Any]) -> float:
        """Suma de pesos de los campos informados"""
        score = 0.0
        for name, weight in profile.completeness_weights:
            if _is_present(costs.get(name)):
                score += weight
        return clamp(score, 0.0, 1.0)


def _is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value) and value > 0


_DEFAULT_SCORER = MetricsScorer()


def compute_metrics(
    archetype: Any,
    costs: Mapping[str, Any],
    analysis: Optional[CostAnalysis] = None,
) -> Metrics:
    """Atajo con las constantes por defecto"""
    return _DEFAULT_SCORER.compute(archetype, costs, analysis)


# ============================================================
# Mensajes de evaluación e indicadores de progreso
# ============================================================

def _display_name(archetype: Any) -> str:
    member = BusinessArchetype.parse(archetype)
    if member is None:
        return str(archetype)
    return get_profile(member.value).name


def coherence_message(score: float, archetype: Any) -> str:
    """Mensaje según el score de coherencia"""
    name = _display_name(archetype)
    if score >= ENGINE_CONSTANTS.EXCELLENT_SCORE:
        return f"Excelente coherencia para {name}. Los costos están bien balanceados."
    if score >= ENGINE_CONSTANTS.ACCEPTABLE_SCORE:
        return f"Coherencia aceptable para {name}. Algunas proporciones pueden mejorarse."
    return f"Coherencia baja para {name}. Revisa las proporciones de costos."


def overall_assessment(metrics: Metrics, archetype: Any) -> str:
    """Evaluación general según overall_score"""
    name = _display_name(archetype)
    if metrics.overall_score >= ENGINE_CONSTANTS.EXCELLENT_SCORE:
        return f"Excelente estructura de costos para {name}. Análisis completo y coherente."
    if metrics.overall_score >= ENGINE_CONSTANTS.ACCEPTABLE_SCORE:
        return f"Buen análisis para {name}. Algunas áreas pueden optimizarse."
    return f"El análisis de {name} necesita refinamiento. Revisa los componentes principales."


def progress_indicators(archetype: Any, costs: Mapping[str, Any]) -> List[ProgressIndicator]:
    """Un indicador por campo del formulario (arquetipo desconocido → [])"""
    member = BusinessArchetype.parse(archetype)
    if member is None:
        return []

    profile = get_profile(member.value)
    costs = canonical_costs(profile, costs)
    return [
        ProgressIndicator(
            name=spec.indicator or spec.label,
            completion=100 if _is_present(costs.get(spec.name)) else 0,
            icon=spec.icon,
            color=spec.color,
        )
        for spec in profile.fields
    ]

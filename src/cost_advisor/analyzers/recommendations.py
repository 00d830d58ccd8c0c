"""
recommendations.py - Motor de recomendaciones

Por arquetipo genera cuatro secciones:
1. priority: 1-2 acciones de alto impacto (impacto/ROI según proporciones)
2. optimization: ahorros estimados sobre el costo total
3. benchmarks: comparación orientada a la acción
4. strategic: iniciativas cualitativas de mediano plazo

Los porcentajes salen de los componentes de costo (metrics.cost_components)
sobre el total recibido; total 0 ⇒ porcentajes 0.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.config import ArchetypeProfile, PriorityTemplate, StrategicItem, get_settings
from ..core.profiles import get_profile, GENERIC_PRIORITY, GENERIC_STRATEGIC
from ..domain.metrics import cost_components
from ..domain.schema import canonical_costs, cost_value
from ..domain.models import (
    BusinessArchetype,
    PriorityRecommendation,
    OptimizationItem,
    BenchmarkRecommendation,
    StrategicRecommendation,
    RecommendationSet,
)
from ..utils.helpers import safe_divide, format_money

logger = logging.getLogger(__name__)

# carga horaria máxima coherente de un proyecto
MAX_PROJECT_HOURS = 200


def _pct(part: float, total: float) -> float:
    return safe_divide(part, total) * 100


def _fixed(value: float) -> str:
    return f"{value:.1f}"


def _priority(
    template: PriorityTemplate,
    impact: str,
    roi: str,
    current_value: str,
) -> PriorityRecommendation:
    return PriorityRecommendation(
        title=template.title,
        impact=impact,
        roi=roi,
        current_value=current_value,
        target_value=template.target_value,
        steps=template.steps,
    )


def _saving(category: str, opportunity: str, amount: float, timeframe: str) -> OptimizationItem:
    return OptimizationItem(
        category=category,
        opportunity=opportunity,
        savings=amount,
        savings_label=format_money(amount, get_settings().currency),
        timeframe=timeframe,
    )


def _strategic(item: StrategicItem) -> StrategicRecommendation:
    return StrategicRecommendation(
        title=item.title,
        description=item.description,
        impact=item.impact,
        investment=item.investment,
        timeline=item.timeline,
    )


def _strategic_set(profile: ArchetypeProfile):
    return tuple(_strategic(item) for item in profile.strategic)


# ============================================================
# Generadores por arquetipo
# ============================================================

def _manufacturing(profile: ArchetypeProfile, parts: Mapping[str, float], total: float,
                   costs: Mapping[str, Any]) -> RecommendationSet:
    materials = _pct(parts["materials"], total)
    labor = _pct(parts["labor"], total)
    packaging = _pct(parts["packaging"], total)

    materials_excess = max(materials - 50, 5)
    return RecommendationSet(
        priority=(
            _priority(
                profile.priority[0],
                impact="Alto" if materials > 70 else "Medio" if materials > 50 else "Bajo",
                roi="25-40%" if materials > 70 else "15-25%",
                current_value=_fixed(materials),
            ),
            _priority(
                profile.priority[1],
                impact="Alto" if labor > 40 else "Medio",
                roi="30-50%",
                current_value=_fixed(labor),
            ),
        ),
        optimization=(
            _saving("Materiales", f"Reducir desperdicio en {_fixed(materials_excess)}%",
                    total * materials_excess / 100, "2-3 meses"),
            _saving("Producción", "Aumentar eficiencia por lote", total * 0.15, "1-2 meses"),
            _saving("Empaque", "Optimizar packaging" if packaging > 10 else "Packaging eficiente",
                    total * max(packaging - 8, 3) / 100, "1 mes"),
        ),
        benchmarks=(
            BenchmarkRecommendation(
                "Materia Prima", f"{_fixed(materials)}%", "45-55%",
                "Por encima" if materials > 55 else "Por debajo" if materials < 45 else "En rango",
                "Reducir" if materials > 55 else "Revisar calidad" if materials < 45 else "Mantener",
            ),
            BenchmarkRecommendation(
                "Mano de Obra", f"{_fixed(labor)}%", "25-35%",
                "Por encima" if labor > 35 else "Por debajo" if labor < 25 else "En rango",
                "Automatizar" if labor > 35 else "Optimizar",
            ),
            BenchmarkRecommendation(
                "Otros gastos", f"{_fixed(packaging)}%", "5-15%",
                "Por encima" if packaging > 15 else "En rango",
                "Optimizar" if packaging > 15 else "Mantener",
            ),
        ),
        strategic=_strategic_set(profile),
    )


def _resale(profile: ArchetypeProfile, parts: Mapping[str, float], total: float,
            costs: Mapping[str, Any]) -> RecommendationSet:
    purchase = _pct(parts["purchase"], total)
    logistics = _pct(parts["logistics"], total)
    storage = _pct(parts["storage"], total)

    purchase_excess = max(purchase - 65, 5)
    return RecommendationSet(
        priority=(
            _priority(
                profile.priority[0],
                impact="Alto" if purchase > 75 else "Medio",
                roi="20-35%",
                current_value=_fixed(purchase),
            ),
            _priority(
                profile.priority[1],
                impact="Alto" if storage > 15 else "Medio",
                roi="15-30%",
                current_value=_fixed(storage),
            ),
        ),
        optimization=(
            _saving("Compras", f"Reducir costo compra en {_fixed(purchase_excess)}%",
                    total * purchase_excess / 100, "1-2 meses"),
            _saving("Logística", "Consolidar envíos y rutas", total * 0.05, "1 mes"),
            _saving("Almacenamiento",
                    "Reducir espacio físico" if storage > 12 else "Optimizar espacio",
                    total * max(storage - 10, 2) / 100, "2-3 meses"),
        ),
        benchmarks=(
            BenchmarkRecommendation(
                "Costo de Compra", f"{_fixed(purchase)}%", "60-70%",
                "Por encima" if purchase > 70 else "Excelente" if purchase < 60 else "En rango",
                "Negociar" if purchase > 70 else "Mantener",
            ),
            BenchmarkRecommendation(
                "Logística", f"{_fixed(logistics)}%", "5-15%",
                "Por encima" if logistics > 15 else "En rango",
                "Optimizar rutas" if logistics > 15 else "Mantener",
            ),
            BenchmarkRecommendation(
                "Almacenamiento", f"{_fixed(storage)}%", "8-12%",
                "Por encima" if storage > 12 else "En rango",
                "Reducir inventario" if storage > 12 else "Optimizar",
            ),
        ),
        strategic=_strategic_set(profile),
    )


def _service(
    profile: ArchetypeProfile,
    parts: Mapping[str, float],
    total: float,
    costs: Mapping[str, Any],
) -> RecommendationSet:
    hourly = _pct(parts["hourly_value"], total)
    expenses = _pct(parts["operational"], total)
    hours = cost_value(costs, "project_hours")
    time_load = min(hours / MAX_PROJECT_HOURS, 1) * 100

    return RecommendationSet(
        priority=(
            _priority(
                profile.priority[0],
                impact="Alto" if hourly < 60 else "Medio",
                roi="Inmediato 25-50%",
                current_value=_fixed(hourly),
            ),
            _priority(
                profile.priority[1],
                impact="Alto" if time_load > 40 else "Medio",
                roi="30-45%",
                current_value=_fixed(time_load),
            ),
        ),
        optimization=(
            _saving("Productividad", "Reducir tiempo por proyecto", total * 0.25, "1-2 meses"),
            _saving("Tarifas", "Aumentar valor hora" if hourly < 65 else "Optimizar paquetes",
                    total * max(65 - hourly, 10) / 100, "Inmediato"),
            _saving("Gastos", "Reducir gastos operativos" if expenses > 20 else "Optimizar gastos",
                    total * max(expenses - 15, 5) / 100, "1 mes"),
        ),
        benchmarks=(
            BenchmarkRecommendation(
                "Valor por Hora", f"{_fixed(hourly)}%", "65-75%",
                "En rango" if hourly > 65 else "Por debajo",
                "Aumentar tarifas" if hourly < 65 else "Mantener",
            ),
            BenchmarkRecommendation(
                "Eficiencia Tiempo", f"{_fixed(time_load)}%", "25-35%",
                "Ineficiente" if time_load > 35 else "Eficiente",
                "Automatizar" if time_load > 35 else "Optimizar",
            ),
            BenchmarkRecommendation(
                "Gastos Operativos", f"{_fixed(expenses)}%", "10-20%",
                "Por encima" if expenses > 20 else "En rango",
                "Reducir" if expenses > 20 else "Controlar",
            ),
        ),
        strategic=_strategic_set(profile),
    )


def _hybrid(profile: ArchetypeProfile, parts: Mapping[str, float], total: float,
            costs: Mapping[str, Any]) -> RecommendationSet:
    products = _pct(parts["products"], total)
    service = _pct(parts["service"], total)
    additional = _pct(parts["additional"], total)

    return RecommendationSet(
        priority=(
            _priority(
                profile.priority[0],
                impact="Alto" if abs(products - service) > 30 else "Medio",
                roi="25-40%",
                current_value=f"{_fixed(products)}% / {_fixed(service)}%",
            ),
            _priority(profile.priority[1], impact="Alto", roi="30-50%", current_value="Mixto"),
        ),
        optimization=(
            _saving("Balance P/S", "Optimizar proporción producto-servicio", total * 0.20, "2-3 meses"),
            _saving("Productos",
                    "Reducir costo productos" if products > 60 else "Aumentar margen productos",
                    total * 0.15, "1-2 meses"),
            _saving("Servicios",
                    "Aumentar valor servicios" if service < 40 else "Optimizar eficiencia",
                    total * 0.25, "1 mes"),
        ),
        benchmarks=(
            BenchmarkRecommendation(
                "Componente Productos", f"{_fixed(products)}%", "40-60%",
                "Producto-heavy" if products > 60 else "Servicio-heavy" if products < 40 else "Balanceado",
                "Aumentar servicios" if products > 60
                else "Incluir más productos" if products < 40 else "Mantener",
            ),
            BenchmarkRecommendation(
                "Componente Servicios", f"{_fixed(service)}%", "40-60%",
                "Servicio-heavy" if service > 60 else "Producto-heavy" if service < 40 else "Balanceado",
                "Estandarizar procesos" if service > 60 else "Aumentar valor servicios",
            ),
            BenchmarkRecommendation(
                "Otros Gastos", f"{_fixed(additional)}%", "5-15%",
                "Por encima" if additional > 15 else "En rango",
                "Reducir gastos" if additional > 15 else "Controlar",
            ),
        ),
        strategic=_strategic_set(profile),
    )


def generic_recommendations(total: float) -> RecommendationSet:
    """Recomendaciones sin pasos específicos de arquetipo"""
    return RecommendationSet(
        priority=(_priority(GENERIC_PRIORITY, impact="Medio", roi="15-25%", current_value="N/A"),),
        optimization=(_saving("General", "Reducir costos operativos", total * 0.10, "2-3 meses"),),
        benchmarks=(
            BenchmarkRecommendation(
                "Eficiencia General", "Por determinar", "Variable", "Evaluando", "Análisis detallado",
            ),
        ),
        strategic=(_strategic(GENERIC_STRATEGIC),),
    )


_Generator = Callable[[ArchetypeProfile, Mapping[str, float], float, Mapping[str, Any]], RecommendationSet]

_GENERATORS: Dict[BusinessArchetype, Optional[_Generator]] = {
    BusinessArchetype.MANUFACTURING: _manufacturing,
    BusinessArchetype.RESALE: _resale,
    BusinessArchetype.SERVICE: _service,
    BusinessArchetype.HYBRID: _hybrid,
    BusinessArchetype.PACKAGE: None,       # sin plantillas propias → genérico
}
assert set(_GENERATORS) == set(BusinessArchetype), "falta un generador de recomendaciones"


def generate_recommendations(
    archetype: Any,
    costs: Mapping[str, Any],
    total_cost: Optional[float] = None,
) -> RecommendationSet:
    """
    Genera el conjunto de recomendaciones

    Args:
        archetype: arquetipo de negocio (desconocido → genérico)
        costs: costos validados (acepta alias camelCase)
        total_cost: total de componentes (metrics.component_total).
            None lo calcula a partir de `costs`.

    Returns:
        RecommendationSet
    """
    member = BusinessArchetype.parse(archetype)
    generator = _GENERATORS.get(member) if member else None

    if generator is None:
        total = total_cost
        if total is None:
            total = sum(cost_components(member, costs).values()) if member else 0.0
        return generic_recommendations(total)

    profile = get_profile(member.value)
    costs = canonical_costs(profile, costs)
    parts = cost_components(member, costs)
    total = sum(parts.values()) if total_cost is None else total_cost
    logger.debug(f"Recomendaciones para {member.value} (total={total})")
    return generator(profile, parts, total, costs)

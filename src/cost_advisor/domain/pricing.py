"""
pricing.py - Calculadora de precios por arquetipo (v1.2)

Código Python puro, sin dependencias externas.
- Manufactura: costo unitario + precios mínimo/óptimo/premium (20/50/100%)
- Reventa: costo puesto + margen deseado + ROI
- Servicio: horas × tarifa × multiplicador de experiencia
- Híbrido: servicio (margen 60%) + productos (margen 25%)
- Paquete: componentes + presentación, descuento y markup de 30%

Los multiplicadores se conservan exactos por compatibilidad con los
precios ya publicados. Redondeo "half up" (js_round), nunca NaN/inf.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from ..core.config import EngineConstants, ENGINE_CONSTANTS, EXPERIENCE_LEVELS, DEFAULT_EXPERIENCE
from ..utils.helpers import js_round, safe_divide
from .models import (
    BusinessArchetype,
    CostAnalysis,
    ManufacturingAnalysis,
    ResaleAnalysis,
    ServiceAnalysis,
    HybridAnalysis,
    PackageAnalysis,
)
from .schema import canonical_costs, cost_value, resolve_archetype


# Márgenes fijos
MIN_MARKUP = 1.2
OPTIMAL_MARKUP = 1.5
PREMIUM_MARKUP = 2.0
SERVICE_MARGIN_PCT = 60
PRODUCT_MARGIN_PCT = 25
PACKAGE_MARKUP = 1.3


def _experience_level(level: Any) -> str:
    if not isinstance(level, str) or not level.strip():
        return DEFAULT_EXPERIENCE
    return level


def experience_multiplier(level: Any) -> float:
    """Multiplicador por nivel (desconocido o no textual → intermedio)"""
    key = _experience_level(level).strip().lower()
    _, multiplier = EXPERIENCE_LEVELS.get(key, EXPERIENCE_LEVELS[DEFAULT_EXPERIENCE])
    return multiplier


class PricingCalculator:
    """Calculadora de precios

    Una fórmula por arquetipo; entrada ya validada por schema.validate().
    """

    def __init__(self, constants: Optional[EngineConstants] = None):
        """
        Args:
            constants: constantes del motor. None usa los valores por defecto.
        """
        self.constants = constants or ENGINE_CONSTANTS

    def compute(self, archetype: Any, costs: Mapping[str, Any]) -> CostAnalysis:
        """
        Calcula el análisis de precio

        `costs` acepta nombres canónicos o sus alias camelCase.

        Raises:
            UnknownArchetypeError: arquetipo no soportado
            ValidationError: un costo no es numérico
        """
        member, profile = resolve_archetype(archetype, stage="pricing")
        return _CALCULATORS[member](self, canonical_costs(profile, costs))

    def manufacturing(self, costs: Mapping[str, Any]) -> ManufacturingAnalysis:
        """total = materias + mano de obra + empaque + indirectos/30"""
        total = (
            cost_value(costs, "materials")
            + cost_value(costs, "labor")
            + cost_value(costs, "packaging")
            + cost_value(costs, "overhead") / self.constants.DAYS_PER_MONTH
        )
        optimal = js_round(total * OPTIMAL_MARKUP)
        return ManufacturingAnalysis(
            total_cost=total,
            min_price=js_round(total * MIN_MARKUP),
            optimal_price=optimal,
            premium_price=js_round(total * PREMIUM_MARKUP),
            profit=optimal - total,
        )

    def resale(self, costs: Mapping[str, Any]) -> ResaleAnalysis:
        """total = compra + logística + almacenamiento/30"""
        purchase = cost_value(costs, "purchase_cost")
        logistics = purchase * cost_value(costs, "logistics_pct") / 100
        total = purchase + logistics + cost_value(costs, "storage") / self.constants.DAYS_PER_MONTH

        selling = js_round(total * (1 + cost_value(costs, "desired_margin_pct") / 100))
        profit = selling - total
        return ResaleAnalysis(
            logistics_cost=logistics,
            total_cost=total,
            selling_price=selling,
            profit=profit,
            roi=js_round(safe_divide(profit, total) * 100),
        )

    def service(self, costs: Mapping[str, Any]) -> ServiceAnalysis:
        """base = tarifa × horas, final = base × experiencia"""
        base = cost_value(costs, "hourly_rate") * cost_value(costs, "project_hours")
        level = _experience_level(costs.get("experience_level"))
        multiplier = experience_multiplier(level)
        final = js_round(base * multiplier)
        monthly = js_round(final * self.constants.PROJECTS_PER_MONTH - cost_value(costs, "operational_cost"))
        return ServiceAnalysis(
            base_price=base,
            experience_level=level,
            experience_multiplier=multiplier,
            final_price=final,
            monthly_income=monthly,
            total_cost=base,
            profit=final - base,
        )

    def hybrid(self, costs: Mapping[str, Any]) -> HybridAnalysis:
        """servicio × 1.6 + productos × 1.25 + adicionales"""
        service = cost_value(costs, "professional_rate") * cost_value(costs, "client_hours")
        products = cost_value(costs, "products_cost")
        additional = cost_value(costs, "additional_cost")

        total = service + products + additional
        suggested = js_round(
            service * (1 + SERVICE_MARGIN_PCT / 100)
            + products * (1 + PRODUCT_MARGIN_PCT / 100)
            + additional
        )
        return HybridAnalysis(
            service_component=service,
            total_per_client=total,
            service_margin=SERVICE_MARGIN_PCT,
            product_margin=PRODUCT_MARGIN_PCT,
            suggested_price=suggested,
            total_profit=suggested - total,
        )

    def package(self, costs: Mapping[str, Any]) -> PackageAnalysis:
        """(componentes + presentación) × (1 - descuento) × 1.3"""
        components = cost_value(costs, "components_cost")
        presentation = cost_value(costs, "presentation_cost")
        discount = cost_value(costs, "discount_pct")

        total = components + presentation
        suggested = js_round(total * (1 - discount / 100) * PACKAGE_MARKUP)
        profit = suggested - total
        return PackageAnalysis(
            total_components_cost=components,
            presentation_cost=presentation,
            total_base_cost=total,
            discount_percentage=discount,
            avg_item_price=safe_divide(components, cost_value(costs, "items_count")),
            suggested_price=suggested,
            total_savings=js_round(total - suggested),
            total_profit=profit,
            profit_margin=js_round(safe_divide(profit, suggested) * 100),
        )


_CALCULATORS: Dict[BusinessArchetype, Callable[[PricingCalculator, Mapping[str, Any]], CostAnalysis]] = {
    BusinessArchetype.MANUFACTURING: PricingCalculator.manufacturing,
    BusinessArchetype.RESALE: PricingCalculator.resale,
    BusinessArchetype.SERVICE: PricingCalculator.service,
    BusinessArchetype.HYBRID: PricingCalculator.hybrid,
    BusinessArchetype.PACKAGE: PricingCalculator.package,
}
assert set(_CALCULATORS) == set(BusinessArchetype), "falta una fórmula de precio"


_DEFAULT_CALCULATOR = PricingCalculator()


def compute_analysis(archetype: Any, costs: Mapping[str, Any]) -> CostAnalysis:
    """Atajo con las constantes por defecto"""
    return _DEFAULT_CALCULATOR.compute(archetype, costs)

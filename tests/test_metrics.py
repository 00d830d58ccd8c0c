"""
test_metrics.py - Pruebas de proporciones, coherencia y completitud
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cost_advisor.domain.models import BusinessArchetype
from cost_advisor.domain.metrics import (
    compute_metrics,
    cost_components,
    coherence_message,
    overall_assessment,
    progress_indicators,
)


SAMPLES = {
    BusinessArchetype.MANUFACTURING: {"materials": 3000, "labor": 2000, "packaging": 300, "overhead": 9000},
    BusinessArchetype.RESALE: {"purchase_cost": 10000, "logistics_pct": 5, "storage": 3000,
                               "desired_margin_pct": 30},
    BusinessArchetype.SERVICE: {"hourly_rate": 50000, "project_hours": 20, "operational_cost": 300000,
                                "experience_level": "senior"},
    BusinessArchetype.HYBRID: {"professional_rate": 40000, "client_hours": 5, "products_cost": 100000,
                               "additional_cost": 20000},
    BusinessArchetype.PACKAGE: {"components_cost": 50000, "items_count": 5, "presentation_cost": 5000,
                                "discount_pct": 10},
}


class TestProportions:
    """Proporciones"""

    @pytest.mark.parametrize("archetype", list(BusinessArchetype))
    def test_sum_to_one(self, archetype):
        metrics = compute_metrics(archetype, SAMPLES[archetype])
        assert sum(metrics.proportions.values()) == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("archetype", list(BusinessArchetype))
    def test_zero_total(self, archetype):
        metrics = compute_metrics(archetype, {})
        assert metrics.component_total == 0
        assert all(value == 0 for value in metrics.proportions.values())

    def test_manufacturing_uses_raw_overhead(self):
        components = cost_components("manufactura", SAMPLES[BusinessArchetype.MANUFACTURING])
        assert components["overhead"] == 9000

    def test_service_components(self):
        components = cost_components("servicio", SAMPLES[BusinessArchetype.SERVICE])
        assert components["hourly_value"] == pytest.approx(1_000_000)
        assert components["operational"] == pytest.approx(10_000)


class TestCoherence:
    """Coherencia"""

    def test_manufacturing_penalties(self):
        # materials 3000/14300 ≈ 0.21 (<0.3) → -0.2, resto dentro de bandas
        metrics = compute_metrics("manufactura", SAMPLES[BusinessArchetype.MANUFACTURING])
        assert metrics.coherence_score == pytest.approx(0.8)

    def test_manufacturing_zero_overhead(self):
        costs = {"materials": 500, "labor": 300, "packaging": 100}
        metrics = compute_metrics("manufactura", costs)
        # materials 0.56, labor 0.33, packaging 0.11, sin indirectos → -0.2
        assert metrics.coherence_score == pytest.approx(0.8)

    def test_resale_input_bands(self):
        costs = {"purchase_cost": 1000, "logistics_pct": 1, "desired_margin_pct": 150}
        metrics = compute_metrics("reventa", costs)
        # compra 100% (>0.8) -0.2, logística <2 -0.15, margen >100 -0.2
        assert metrics.coherence_score == pytest.approx(0.45)

    def test_service_low_rate(self):
        costs = {"hourly_rate": 5000, "project_hours": 10, "experience_level": "mid"}
        metrics = compute_metrics("servicio", costs)
        assert metrics.coherence_score == pytest.approx(0.8)

    def test_hybrid_without_products(self):
        costs = {"professional_rate": 10000, "client_hours": 10}
        metrics = compute_metrics("hibrido", costs)
        # servicio 100% (>0.8) -0.2, productos 0 (<0.1) -0.2, productos 0 -0.3
        assert metrics.coherence_score == pytest.approx(0.3)

    def test_package_has_no_bands(self):
        metrics = compute_metrics("paquete", SAMPLES[BusinessArchetype.PACKAGE])
        assert metrics.coherence_score == 1.0

    @pytest.mark.parametrize("archetype", list(BusinessArchetype))
    def test_scores_bounded(self, archetype):
        for costs in (SAMPLES[archetype], {}):
            metrics = compute_metrics(archetype, costs)
            assert 0 <= metrics.coherence_score <= 1
            assert 0 <= metrics.completeness <= 1
            assert metrics.overall_score == pytest.approx(
                0.6 * metrics.coherence_score + 0.4 * metrics.completeness
            )


class TestCompleteness:
    """Completitud"""

    @pytest.mark.parametrize("archetype", list(BusinessArchetype))
    def test_full_input(self, archetype):
        metrics = compute_metrics(archetype, SAMPLES[archetype])
        assert metrics.completeness == pytest.approx(1.0)

    def test_partial_manufacturing(self):
        metrics = compute_metrics("manufactura", {"materials": 10, "labor": 5})
        assert metrics.completeness == pytest.approx(0.7)

    def test_resale_weights(self):
        metrics = compute_metrics("reventa", {"purchase_cost": 10, "desired_margin_pct": 30})
        assert metrics.completeness == pytest.approx(0.7)


class TestMessages:
    """Mensajes de evaluación"""

    @pytest.mark.parametrize("score,prefix", [
        (0.9, "Excelente coherencia para manufactura"),
        (0.8, "Excelente coherencia"),
        (0.65, "Coherencia aceptable"),
        (0.2, "Coherencia baja"),
    ])
    def test_coherence_message(self, score, prefix):
        assert coherence_message(score, "manufactura").startswith(prefix)

    def test_overall_assessment(self):
        metrics = compute_metrics("paquete", SAMPLES[BusinessArchetype.PACKAGE])
        assert overall_assessment(metrics, "paquete").startswith("Excelente estructura de costos para paquete")

    def test_overall_assessment_low(self):
        metrics = compute_metrics("hibrido", {})
        assert "necesita refinamiento" in overall_assessment(metrics, BusinessArchetype.HYBRID)


class TestProgressIndicators:
    """Indicadores de progreso"""

    def test_one_per_field(self):
        indicators = progress_indicators("manufactura", {"materials": 10, "labor": 0})
        assert [i.name for i in indicators] == [
            "Materias Primas", "Mano de Obra", "Empaque", "Gastos Indirectos",
        ]
        assert [i.completion for i in indicators] == [100, 0, 0, 0]
        assert indicators[0].icon == "fa-boxes"

    def test_choice_field(self):
        indicators = progress_indicators("servicio", {"experience_level": "mid"})
        assert indicators[-1].completion == 100

    def test_unknown_archetype(self):
        assert progress_indicators("franquicia", {}) == []

    def test_camel_case_input(self):
        indicators = progress_indicators("paquete", {"componentsCost": 100, "itemsCount": 2})
        assert [i.completion for i in indicators] == [100, 100, 0, 0]


class TestInputNames:
    """Nombres camelCase del formulario"""

    def setup_method(self):
        self.camel = {"purchaseCost": 10000, "logisticsPct": 5, "storage": 3000, "desiredMarginPct": 30}

    def test_same_metrics_as_snake_case(self):
        metrics = compute_metrics("reventa", self.camel)
        assert metrics == compute_metrics("reventa", SAMPLES[BusinessArchetype.RESALE])
        assert metrics.proportions["purchase"] == pytest.approx(10000 / 13500)
        assert metrics.completeness == pytest.approx(1.0)

    def test_cost_components(self):
        assert cost_components("reventa", self.camel) == {
            "purchase": 10000, "logistics": 500, "storage": 3000,
        }


class TestMetricsSerialization:
    """to_dict en camelCase"""

    def test_component_keys(self):
        data = compute_metrics("servicio", SAMPLES[BusinessArchetype.SERVICE]).to_dict()
        assert set(data["components"]) == {"hourlyValue", "operational"}
        assert set(data["proportions"]) == {"hourlyValue", "operational"}
        assert "componentTotal" in data

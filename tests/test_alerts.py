"""
test_alerts.py - Pruebas del generador de alertas
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cost_advisor.domain.metrics import compute_metrics
from cost_advisor.domain.models import AlertType
from cost_advisor.analyzers.alerts import generate_alerts


def _alerts(archetype, costs, with_costs=True):
    metrics = compute_metrics(archetype, costs)
    return generate_alerts(archetype, metrics, costs if with_costs else None)


class TestManufacturingAlerts:
    """Manufactura"""

    def test_high_materials(self):
        alerts = _alerts("manufactura", {"materials": 8000, "labor": 1500, "packaging": 200, "overhead": 300})
        assert [a.title for a in alerts] == ["Materias Primas Muy Altas"]
        assert alerts[0].type is AlertType.WARNING
        assert alerts[0].message == "80% del costo son materias primas (óptimo: 40-60%)"
        assert alerts[0].suggestion

    def test_low_materials_and_high_labor(self):
        alerts = _alerts("manufactura", {"materials": 1000, "labor": 6000, "packaging": 500, "overhead": 2500})
        titles = [a.title for a in alerts]
        assert titles == ["Materias Primas Bajas", "Mano de Obra Excesiva"]
        assert alerts[1].type is AlertType.DANGER
        assert alerts[0].message.startswith("Solo 10% son materias primas")

    def test_balanced_costs(self):
        alerts = _alerts("manufactura", {"materials": 5000, "labor": 2500, "packaging": 500, "overhead": 2000})
        assert alerts == []


class TestResaleAlerts:
    """Reventa"""

    def test_high_purchase(self):
        alerts = _alerts("reventa", {"purchase_cost": 10000, "logistics_pct": 5, "storage": 300})
        assert [a.title for a in alerts] == ["Costo de Compra Alto"]

    def test_low_purchase(self):
        alerts = _alerts("reventa", {"purchase_cost": 1000, "logistics_pct": 5, "storage": 3000})
        assert [a.title for a in alerts] == ["Margen Muy Alto"]
        assert alerts[0].type is AlertType.INFO


class TestServiceAlerts:
    """Servicio"""

    def test_long_project(self):
        alerts = _alerts("servicio", {"hourly_rate": 50000, "project_hours": 120})
        assert [a.title for a in alerts] == ["Proyecto Extenso"]
        assert alerts[0].message == "120 horas por proyecto es considerable"

    def test_long_project_needs_costs(self):
        alerts = _alerts("servicio", {"hourly_rate": 50000, "project_hours": 120}, with_costs=False)
        assert alerts == []

    def test_low_hourly_share(self):
        costs = {"hourly_rate": 1000, "project_hours": 1, "operational_cost": 300000}
        alerts = _alerts("servicio", costs)
        assert [a.title for a in alerts] == ["Valor Hora Bajo"]


class TestHybridAlerts:
    """Híbrido"""

    def test_product_oriented(self):
        costs = {"professional_rate": 1000, "client_hours": 10, "products_cost": 90000}
        alerts = _alerts("hibrido", costs)
        assert [a.title for a in alerts] == ["Componente Servicio Bajo", "Orientado a Productos"]


class TestAlertEdgeCases:
    """Casos límite"""

    def test_zero_total_no_alerts(self):
        assert _alerts("manufactura", {}) == []
        assert _alerts("hibrido", {}) == []

    def test_package_has_no_rules(self):
        assert _alerts("paquete", {"components_cost": 100, "items_count": 2}) == []

    def test_unknown_archetype(self):
        metrics = compute_metrics("manufactura", {"materials": 1})
        assert generate_alerts("franquicia", metrics) == []

    def test_to_dict(self):
        alert = _alerts("reventa", {"purchase_cost": 10000, "storage": 100})[0]
        data = alert.to_dict()
        assert data["type"] == "warning"
        assert set(data) == {"type", "title", "message", "suggestion"}


class TestInputNames:
    """Reglas sobre valores crudos con nombres camelCase"""

    def test_long_project(self):
        alerts = _alerts("servicio", {"hourlyRate": 50000, "projectHours": 120, "operationalCost": 300000})
        assert [a.title for a in alerts] == ["Proyecto Extenso"]
        assert alerts[0].message == "120 horas por proyecto es considerable"

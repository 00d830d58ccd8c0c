"""
test_schema.py - Pruebas del registro de esquemas y la validación
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cost_advisor.core.exceptions import UnknownArchetypeError
from cost_advisor.domain.models import BusinessArchetype
from cost_advisor.domain.schema import get_schema, validate


class TestArchetypeParse:
    """BusinessArchetype.parse"""

    @pytest.mark.parametrize("value,expected", [
        ("manufactura", BusinessArchetype.MANUFACTURING),
        ("Manufactura", BusinessArchetype.MANUFACTURING),
        ("MANUFACTURING", BusinessArchetype.MANUFACTURING),
        ("resale", BusinessArchetype.RESALE),
        (" servicio ", BusinessArchetype.SERVICE),
        ("hibrido", BusinessArchetype.HYBRID),
        ("paquete", BusinessArchetype.PACKAGE),
        (BusinessArchetype.HYBRID, BusinessArchetype.HYBRID),
    ])
    def test_accepted_values(self, value, expected):
        assert BusinessArchetype.parse(value) is expected

    @pytest.mark.parametrize("value", ["franquicia", "", None, 3, object()])
    def test_rejected_values(self, value):
        assert BusinessArchetype.parse(value) is None


class TestGetSchema:
    """get_schema"""

    def test_manufacturing_fields(self):
        names = [spec.name for spec in get_schema("manufactura")]
        assert names == ["materials", "labor", "packaging", "overhead"]

    @pytest.mark.parametrize("archetype,required", [
        ("manufactura", ["materials", "labor"]),
        ("reventa", ["purchase_cost", "desired_margin_pct"]),
        ("servicio", ["hourly_rate", "project_hours"]),
        ("hibrido", ["professional_rate", "client_hours", "products_cost"]),
        ("paquete", ["components_cost", "items_count"]),
    ])
    def test_required_fields(self, archetype, required):
        assert [s.name for s in get_schema(archetype) if s.required] == required

    def test_resale_margin_bounds(self):
        margin = next(s for s in get_schema("reventa") if s.name == "desired_margin_pct")
        assert margin.max == 200
        assert margin.default == 30

    def test_unknown_archetype(self):
        with pytest.raises(UnknownArchetypeError):
            get_schema("franquicia")


class TestValidateRequired:
    """Campos requeridos"""

    def test_valid_input(self):
        result = validate("manufactura", {"materials": 3000, "labor": 2000})
        assert result.is_valid
        assert result.errors == []
        assert result.costs == {"materials": 3000, "labor": 2000, "packaging": 0, "overhead": 0}

    def test_all_zero_manufacturing(self):
        costs = {"materials": 0, "labor": 0, "packaging": 0, "overhead": 0}
        result = validate("manufactura", costs)

        assert result.errors == [
            "Materias primas debe ser mayor a 0",
            "Mano de obra debe ser mayor a 0",
        ]

    def test_missing_required(self):
        result = validate("hibrido", {"professional_rate": 50000})
        assert "Horas por cliente debe ser mayor a 0" in result.errors
        assert "Costo de productos debe ser mayor a 0" in result.errors
        assert len(result.errors) == 2

    def test_none_input(self):
        result = validate("servicio", None)
        assert "Valor por hora debe ser mayor a 0" in result.errors
        assert "Horas por proyecto debe ser mayor a 0" in result.errors


class TestValidateValues:
    """Valores numéricos, rangos y opciones"""

    def test_numeric_strings(self):
        result = validate("manufactura", {"materials": "3000", "labor": " 2000.5 "})
        assert result.is_valid
        assert result.costs["labor"] == pytest.approx(2000.5)

    def test_non_numeric(self):
        result = validate("manufactura", {"materials": "mucho", "labor": 100})
        assert result.errors == ["Materias primas: el valor debe ser un número válido"]
        assert result.costs["materials"] == 0

    def test_negative(self):
        result = validate("manufactura", {"materials": 100, "labor": 100, "packaging": -5})
        assert result.errors == ["Empaque y presentación: el valor no puede ser negativo"]

    @pytest.mark.parametrize("margin", [0, 250, 200.5])
    def test_margin_out_of_range(self, margin):
        result = validate("reventa", {"purchase_cost": 1000, "desired_margin_pct": margin})
        assert result.errors == ["Margen debe estar entre 1% y 200%"]

    def test_margin_default(self):
        result = validate("reventa", {"purchase_cost": 1000})
        assert result.is_valid
        assert result.costs["desired_margin_pct"] == 30

    def test_margin_upper_bound_inclusive(self):
        result = validate("reventa", {"purchase_cost": 1000, "desired_margin_pct": 200})
        assert result.is_valid

    @pytest.mark.parametrize("items", [0.5, 0.99])
    def test_items_count_below_one(self, items):
        result = validate("paquete", {"components_cost": 1000, "items_count": items})
        assert result.errors == ["Número de items debe ser al menos 1"]

    def test_items_count_of_one(self):
        assert validate("paquete", {"components_cost": 1000, "items_count": 1}).is_valid

    def test_logistics_above_100(self):
        result = validate("reventa", {"purchase_cost": 1000, "logistics_pct": 120})
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Logística")

    def test_experience_choice(self):
        result = validate("servicio", {"hourly_rate": 1, "project_hours": 1, "experience_level": "Senior"})
        assert result.costs["experience_level"] == "senior"

    def test_invalid_experience(self):
        result = validate("servicio", {"hourly_rate": 1, "project_hours": 1, "experience_level": "guru"})
        assert result.errors == ["Nivel de experiencia: opción no válida"]
        assert result.costs["experience_level"] == "mid"

    def test_camel_case_aliases(self):
        raw = {"purchaseCost": 10000, "logisticsPct": 5, "storage": 3000, "desiredMarginPct": 30}
        result = validate("reventa", raw)
        assert result.is_valid
        assert result.costs["purchase_cost"] == 10000
        assert result.costs["logistics_pct"] == 5

    def test_suspicious_value_is_warning(self):
        result = validate("manufactura", {"materials": 9_000_000, "labor": 100})
        assert result.is_valid
        assert result.warnings == ["Materias primas: el valor parece muy alto, por favor verifica"]


class TestValidateTotality:
    """validate nunca lanza excepciones"""

    def test_unknown_archetype(self):
        result = validate("franquicia", {"materials": 1})
        assert result.errors == ["Tipo de negocio no reconocido: franquicia"]

    @pytest.mark.parametrize("raw", [
        {"materials": None, "labor": [1, 2]},
        {"materials": float("nan"), "labor": float("inf")},
        {"materials": True, "labor": {}},
        "no es un diccionario",
        42,
    ])
    def test_garbage_input(self, raw):
        result = validate("manufactura", raw)
        assert result.errors
        assert not result.is_valid

    def test_to_dict(self):
        data = validate("manufactura", {"materials": 1, "labor": 1}).to_dict()
        assert data["isValid"] is True
        assert data["errors"] == []

"""
cost_advisor - Motor de análisis de costos y recomendaciones (v1.2)

Convierte los costos de un negocio (manufactura, reventa, servicio,
híbrido o paquete) en precios sugeridos, métricas de coherencia,
alertas, benchmarks y recomendaciones.
"""
from .domain.models import BusinessArchetype, AnalysisReport
from .domain.schema import get_schema, validate
from .domain.pricing import compute_analysis
from .domain.metrics import compute_metrics
from .analyzers.alerts import generate_alerts
from .analyzers.benchmarks import compare_benchmarks
from .analyzers.recommendations import generate_recommendations
from .engine import CostAdvisor, analyze

__version__ = "1.2.0"

__all__ = [
    "BusinessArchetype",
    "AnalysisReport",
    "get_schema",
    "validate",
    "compute_analysis",
    "compute_metrics",
    "generate_alerts",
    "compare_benchmarks",
    "generate_recommendations",
    "CostAdvisor",
    "analyze",
]

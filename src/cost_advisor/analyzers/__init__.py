"""Módulo de análisis"""
from .alerts import AlertGenerator, generate_alerts
from .benchmarks import BenchmarkComparator, compare_benchmarks
from .recommendations import generate_recommendations, generic_recommendations

__all__ = [
    "AlertGenerator", "generate_alerts",
    "BenchmarkComparator", "compare_benchmarks",
    "generate_recommendations", "generic_recommendations",
]

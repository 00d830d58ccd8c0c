"""Módulo de dominio (v1.2) - lógica de negocio pura"""
from .models import (
    BusinessArchetype,
    CostAnalysis,
    ManufacturingAnalysis,
    ResaleAnalysis,
    ServiceAnalysis,
    HybridAnalysis,
    PackageAnalysis,
    Metrics,
    Alert,
    AlertType,
    Benchmark,
    BenchmarkStatus,
    ProgressIndicator,
    PriorityRecommendation,
    OptimizationItem,
    BenchmarkRecommendation,
    StrategicRecommendation,
    RecommendationSet,
    AnalysisReport,
)
from .schema import get_schema, validate
from .pricing import PricingCalculator, compute_analysis
from .metrics import (
    MetricsScorer,
    compute_metrics,
    cost_components,
    coherence_message,
    overall_assessment,
    progress_indicators,
)

__all__ = [
    # modelos
    "BusinessArchetype",
    "CostAnalysis",
    "ManufacturingAnalysis",
    "ResaleAnalysis",
    "ServiceAnalysis",
    "HybridAnalysis",
    "PackageAnalysis",
    "Metrics",
    "Alert",
    "AlertType",
    "Benchmark",
    "BenchmarkStatus",
    "ProgressIndicator",
    "PriorityRecommendation",
    "OptimizationItem",
    "BenchmarkRecommendation",
    "StrategicRecommendation",
    "RecommendationSet",
    "AnalysisReport",
    # esquema
    "get_schema",
    "validate",
    # cálculo
    "PricingCalculator",
    "compute_analysis",
    "MetricsScorer",
    "compute_metrics",
    "cost_components",
    "coherence_message",
    "overall_assessment",
    "progress_indicators",
]

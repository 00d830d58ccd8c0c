"""
engine.py - Fachada del motor de análisis de costos (v1.2)

Pipeline:
1. validate()            → errores ⇒ se detiene (reporte con errores)
2. compute_analysis()    → precios
3. compute_metrics()     → proporciones y scores
4. alertas + benchmarks  → a partir de las métricas
5. recomendaciones       → una sola vez por análisis

CostAdvisor.analyze() nunca lanza excepciones: cada etapa tiene un valor de
respaldo y los errores quedan en el ErrorHandler con session_id, arquetipo
y etapa. get_advisor() valida la configuración una sola vez.
"""

import logging
from typing import Any, Mapping, Optional

from .core.config import get_settings
from .core.error_handler import ErrorHandler, error_handler
from .core.exceptions import ErrorCodes
from .core.logging import setup_logger
from .domain.models import (
    AnalysisReport,
    BusinessArchetype,
    CostAnalysis,
    Metrics,
    RecommendationSet,
)
from .domain.schema import validate
from .domain.pricing import PricingCalculator
from .domain.metrics import (
    MetricsScorer,
    coherence_message,
    overall_assessment,
    progress_indicators,
)
from .analyzers.alerts import AlertGenerator
from .analyzers.benchmarks import BenchmarkComparator
from .analyzers.recommendations import generate_recommendations, generic_recommendations
from .utils.validators import ValidationResult

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "No fue posible completar el análisis de costos"


class CostAdvisor:
    """Motor de análisis de costos y recomendaciones

    Uso:
        advisor = CostAdvisor()
        report = advisor.analyze("manufactura", {"materials": 3000, "labor": 2000})
        if report.ok:
            print(report.analysis.optimal_price)
    """

    def __init__(
        self,
        pricing: Optional[PricingCalculator] = None,
        scorer: Optional[MetricsScorer] = None,
        alerts: Optional[AlertGenerator] = None,
        benchmarks: Optional[BenchmarkComparator] = None,
        handler: Optional[ErrorHandler] = None,
    ):
        self.pricing = pricing or PricingCalculator()
        self.scorer = scorer or MetricsScorer()
        self.alerts = alerts or AlertGenerator()
        self.benchmarks = benchmarks or BenchmarkComparator()
        self.handler = handler or ErrorHandler(logger)

    def analyze(
        self,
        archetype: Any,
        raw_input: Optional[Mapping[str, Any]],
        session_id: Optional[str] = None,
    ) -> AnalysisReport:
        """
        Ejecuta el pipeline completo

        Args:
            archetype: BusinessArchetype o su valor ("manufactura", ...)
            raw_input: {campo: número | cadena numérica}
            session_id: identificador opaco (solo se devuelve y se registra)

        Returns:
            AnalysisReport (report.ok == False si hubo errores de validación)
        """
        member = BusinessArchetype.parse(archetype)
        context = {
            "session_id": session_id,
            "archetype": member.value if member else str(archetype),
        }

        try:
            return self._run(member, archetype, raw_input, session_id, context)
        except Exception as e:
            self.handler.handle(e, {**context, "stage": "analyze"})
            validation = ValidationResult()
            validation.add_error("engine", INTERNAL_ERROR_MESSAGE)
            return AnalysisReport(archetype=member, session_id=session_id, validation=validation)

    def _run(
        self,
        member: Optional[BusinessArchetype],
        archetype: Any,
        raw_input: Optional[Mapping[str, Any]],
        session_id: Optional[str],
        context: dict,
    ) -> AnalysisReport:
        logger.debug("Inicio de análisis", extra={"context": context})

        validation = validate(archetype, raw_input)

        if member is None:
            # arquetipo desconocido: solo el camino genérico
            logger.info(
                f"Tipo de negocio no reconocido: {archetype}",
                extra={"context": context},
            )
            return AnalysisReport(
                archetype=None,
                session_id=session_id,
                validation=validation,
                benchmarks=tuple(self.benchmarks.compare(archetype, {}, _empty_metrics())),
                recommendations=generic_recommendations(0.0),
            )

        progress = tuple(progress_indicators(member, validation.costs))

        if not validation.is_valid:
            logger.info(
                f"Validación fallida ({len(validation.errors)} errores)",
                extra={"context": {**context, "errors": list(validation.errors)}},
            )
            return AnalysisReport(
                archetype=member,
                session_id=session_id,
                validation=validation,
                progress=progress,
            )

        costs = validation.costs
        analysis = self._price(member, costs, context=context)
        metrics = self._score(member, costs, analysis, context=context)

        if metrics is None:
            return AnalysisReport(
                archetype=member,
                session_id=session_id,
                validation=validation,
                analysis=analysis,
                progress=progress,
            )

        report = AnalysisReport(
            archetype=member,
            session_id=session_id,
            validation=validation,
            analysis=analysis,
            metrics=metrics,
            alerts=tuple(self._alerts(member, metrics, costs, context=context)),
            benchmarks=tuple(self._benchmarks(member, costs, metrics, context=context)),
            recommendations=self._recommend(member, costs, metrics.component_total, context=context),
            coherence_message=coherence_message(metrics.coherence_score, member),
            overall_assessment=overall_assessment(metrics, member),
            progress=progress,
        )
        logger.debug(
            f"Análisis completo: score={metrics.overall_score:.2f}, alertas={len(report.alerts)}",
            extra={"context": context},
        )
        return report

    # ============================================================
    # Etapas (valor de respaldo ante errores)
    # ============================================================

    @error_handler(fallback_value=None, stage="pricing", error_code=ErrorCodes.PRICING_FAILED)
    def _price(
        self,
        member: BusinessArchetype,
        costs: Mapping[str, Any],
        context: Optional[dict] = None,
    ) -> Optional[CostAnalysis]:
        logger.debug(f"Etapa precios: {member.value}", extra={"context": context})
        return self.pricing.compute(member, costs)

    @error_handler(fallback_value=None, stage="metrics", error_code=ErrorCodes.METRICS_FAILED)
    def _score(
        self,
        member: BusinessArchetype,
        costs: Mapping[str, Any],
        analysis: Optional[CostAnalysis],
        context: Optional[dict] = None,
    ) -> Optional[Metrics]:
        logger.debug(f"Etapa métricas: {member.value}", extra={"context": context})
        return self.scorer.compute(member, costs, analysis)

    @error_handler(fallback_factory=list, stage="alerts", error_code=ErrorCodes.ANALYSIS_FAILED)
    def _alerts(self, member: BusinessArchetype, metrics: Metrics, costs: Mapping[str, Any],
                context: Optional[dict] = None):
        return self.alerts.generate(member, metrics, costs)

    @error_handler(fallback_factory=list, stage="benchmarks", error_code=ErrorCodes.ANALYSIS_FAILED)
    def _benchmarks(self, member: BusinessArchetype, costs: Mapping[str, Any], metrics: Metrics,
                    context: Optional[dict] = None):
        return self.benchmarks.compare(member, costs, metrics)

    @error_handler(
        fallback_factory=RecommendationSet,
        stage="recommendations",
        error_code=ErrorCodes.RECOMMENDATIONS_FAILED,
    )
    def _recommend(
        self,
        member: BusinessArchetype,
        costs: Mapping[str, Any],
        total: float,
        context: Optional[dict] = None,
    ) -> RecommendationSet:
        return generate_recommendations(member, costs, total)


def _empty_metrics() -> Metrics:
    return Metrics(
        proportions={},
        components={},
        component_total=0.0,
        coherence_score=0.0,
        completeness=0.0,
        overall_score=0.0,
    )


_DEFAULT_ADVISOR: Optional[CostAdvisor] = None


def get_advisor() -> CostAdvisor:
    """
    Instancia compartida

    La primera llamada valida EngineSettings e instala el logger del paquete
    con COST_ADVISOR_LOG_LEVEL / COST_ADVISOR_DEBUG.

    Raises:
        ConfigurationError: variables de entorno no válidas
    """
    global _DEFAULT_ADVISOR
    if _DEFAULT_ADVISOR is None:
        get_settings().ensure_valid()
        setup_logger()
        _DEFAULT_ADVISOR = CostAdvisor()
    return _DEFAULT_ADVISOR


def analyze(
    archetype: Any,
    raw_input: Optional[Mapping[str, Any]],
    session_id: Optional[str] = None,
) -> AnalysisReport:
    """Atajo: get_advisor().analyze(...)"""
    return get_advisor().analyze(archetype, raw_input, session_id)

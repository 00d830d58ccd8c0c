"""
benchmarks.py - Comparación con rangos de referencia de industria

Clasifica ratios y valores absolutos como good / average / poor.
Los rangos son parámetros de negocio fijos (ver profiles.py).
"""

from typing import Any, List, Mapping, Tuple

from ..core.config import BenchmarkSpec
from ..core.profiles import get_profile, GENERIC_BENCHMARK
from ..domain.models import Benchmark, BenchmarkStatus, BusinessArchetype, Metrics
from ..domain.schema import canonical_costs, cost_value
from ..utils.helpers import js_round, format_currency, format_plain


_STATUS_ORDER = (BenchmarkStatus.GOOD, BenchmarkStatus.AVERAGE, BenchmarkStatus.POOR)


class BenchmarkComparator:
    """Comparador de benchmarks"""

    def compare(
        self,
        archetype: Any,
        costs: Mapping[str, Any],
        metrics: Metrics,
    ) -> List[Benchmark]:
        """
        Compara el negocio con las referencias del arquetipo

        Arquetipos sin rangos propios (o desconocidos) reciben un único
        benchmark genérico.
        """
        member = BusinessArchetype.parse(archetype)
        specs = ()
        if member is not None:
            profile = get_profile(member.value)
            specs = profile.benchmarks
            costs = canonical_costs(profile, costs)
        if not specs:
            specs = (GENERIC_BENCHMARK,)
        return [self._evaluate(spec, costs, metrics) for spec in specs]

    def _evaluate(
        self,
        spec: BenchmarkSpec,
        costs: Mapping[str, Any],
        metrics: Metrics,
    ) -> Benchmark:
        value, shown = self._measure(spec, costs, metrics)
        status = BenchmarkStatus(spec.status.classify(value))
        return Benchmark(
            metric=spec.metric,
            your_value=value,
            industry_range=spec.industry_range,
            status=status,
            recommendation=spec.advice[_STATUS_ORDER.index(status)],
            value=shown,
            comparison=spec.comparison.classify(value),
        )

    @staticmethod
    def _measure(
        spec: BenchmarkSpec,
        costs: Mapping[str, Any],
        metrics: Metrics,
    ) -> Tuple[float, str]:
        """(valor comparado, valor para mostrar)"""
        if spec.source is None:
            return 0.0, spec.fixed_value

        kind, _, key = spec.source.partition(":")
        if kind == "share":
            value = metrics.proportions.get(key, 0.0) * 100
            return value, f"{js_round(value)}%"
        if kind == "component":
            value = metrics.components.get(key, 0.0)
        elif kind == "total":
            value = metrics.component_total
        else:
            value = cost_value(costs, key)

        if spec.display == "money":
            return value, format_currency(value)
        if spec.display == "hours":
            return value, f"{format_plain(value)}h"
        return value, f"{format_plain(value)}%"


_DEFAULT_COMPARATOR = BenchmarkComparator()


def compare_benchmarks(
    archetype: Any,
    costs: Mapping[str, Any],
    metrics: Metrics,
) -> List[Benchmark]:
    """Atajo del comparador por defecto"""
    return _DEFAULT_COMPARATOR.compare(archetype, costs, metrics)

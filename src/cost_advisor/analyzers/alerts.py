"""
alerts.py - Alertas por proporción de costos

Cada arquetipo tiene un conjunto fijo de reglas umbral; reglas
independientes (a lo sumo una alerta por condición).
"""

import logging
from typing import Any, List, Mapping, Optional

from ..core.config import AlertRule
from ..core.profiles import get_profile
from ..domain.models import Alert, AlertType, BusinessArchetype, Metrics
from ..domain.schema import canonical_costs, cost_value
from ..utils.helpers import js_round, format_plain

logger = logging.getLogger(__name__)


class AlertGenerator:
    """Generador de alertas"""

    def generate(
        self,
        archetype: Any,
        metrics: Metrics,
        costs: Optional[Mapping[str, Any]] = None,
    ) -> List[Alert]:
        """
        Alertas para el usuario

        Args:
            archetype: arquetipo de negocio
            metrics: métricas calculadas
            costs: costos validados (reglas sobre valores crudos, acepta alias camelCase)

        Returns:
            lista de alertas; vacía para arquetipos sin reglas o desconocidos
        """
        member = BusinessArchetype.parse(archetype)
        if member is None:
            return []

        profile = get_profile(member.value)
        if costs is not None:
            costs = canonical_costs(profile, costs)

        alerts = []
        for rule in profile.alert_rules:
            alert = self._apply(rule, metrics, costs)
            if alert is not None:
                alerts.append(alert)
        return alerts

    @staticmethod
    def _apply(
        rule: AlertRule,
        metrics: Metrics,
        costs: Optional[Mapping[str, Any]],
    ) -> Optional[Alert]:
        if rule.source == "share":
            # total 0: todas las proporciones son 0, sin datos no hay alerta
            if metrics.component_total == 0:
                return None
            value = metrics.proportions.get(rule.key, 0.0)
        else:
            if costs is None:
                return None
            value = cost_value(costs, rule.key)

        if rule.op == ">":
            fired = value > rule.threshold
        elif rule.op == "<":
            fired = value < rule.threshold
        else:
            logger.warning(f"Operador de alerta desconocido: {rule.op}")
            return None

        if not fired:
            return None

        message = rule.message.format(pct=js_round(value * 100), value=format_plain(value))
        return Alert(
            type=AlertType(rule.type),
            title=rule.title,
            message=message,
            suggestion=rule.suggestion,
        )


_DEFAULT_GENERATOR = AlertGenerator()


def generate_alerts(
    archetype: Any,
    metrics: Metrics,
    costs: Optional[Mapping[str, Any]] = None,
) -> List[Alert]:
    """Atajo del generador por defecto"""
    return _DEFAULT_GENERATOR.generate(archetype, metrics, costs)

"""
schema.py - Registro de esquemas por arquetipo (v1.2)

get_schema(): campos legales de un arquetipo
validate(): normaliza la entrada cruda y devuelve la lista de errores.
            Nunca lanza excepciones.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.config import ArchetypeProfile, FieldSpec
from ..core.exceptions import UnknownArchetypeError, ValidationError
from ..core.profiles import get_profile
from ..utils.validators import DataValidator, ValidationResult
from .models import BusinessArchetype

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_archetype(
    archetype: Any,
    stage: Optional[str] = None,
) -> Tuple[BusinessArchetype, ArchetypeProfile]:
    """Arquetipo + perfil, o UnknownArchetypeError"""
    member = BusinessArchetype.parse(archetype)
    if member is None:
        raise UnknownArchetypeError(
            f"Tipo de negocio no reconocido: {archetype}",
            archetype=str(archetype),
            stage=stage,
        )
    return member, get_profile(member.value)


def get_schema(archetype: Any) -> List[FieldSpec]:
    """Campos del arquetipo en orden de formulario"""
    _, profile = resolve_archetype(archetype, stage="schema")
    return list(profile.fields)


def _lookup(raw_input: Mapping[str, Any], spec: FieldSpec) -> Any:
    """Primer nombre aceptado presente en la entrada (snake_case o camelCase)"""
    for key in spec.keys:
        value = raw_input.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return _MISSING


def canonical_costs(profile: ArchetypeProfile, costs: Mapping[str, Any]) -> Dict[str, Any]:
    """Costos con nombres canónicos

    Acepta los mismos alias camelCase que validate(); los campos ausentes
    o vacíos se omiten.
    """
    resolved = {}
    for spec in profile.fields:
        value = _lookup(costs, spec)
        if value is not _MISSING:
            resolved[spec.name] = value
    return resolved


def cost_value(costs: Mapping[str, Any], key: str) -> float:
    """
    Valor numérico de un costo canónico (ausente → 0)

    Raises:
        ValidationError: el valor no es un número válido
    """
    raw = costs.get(key)
    if raw is None:
        return 0.0
    value, error = DataValidator.to_number(raw, key)
    if error:
        raise ValidationError(error, field=key, value=raw)
    return value


def _validate_choice(spec: FieldSpec, raw: Any, result: ValidationResult):
    if raw is _MISSING:
        result.costs[spec.name] = spec.default
        return
    error = DataValidator.choice(raw, spec.label, spec.choices)
    if error:
        result.add_error(spec.name, error)
        result.costs[spec.name] = spec.default
        return
    result.costs[spec.name] = raw.strip().lower()


def _validate_number(spec: FieldSpec, raw: Any, result: ValidationResult):
    if raw is _MISSING:
        raw = spec.default

    value, error = DataValidator.to_number(raw, spec.label)
    if error:
        result.add_error(spec.name, error)
        result.costs[spec.name] = 0.0
        return
    result.costs[spec.name] = value

    error = DataValidator.non_negative(value, spec.label)
    if error:
        result.add_error(spec.name, error)
        return

    if spec.range_message:
        # un solo mensaje para "≤ 0" y "fuera de rango"
        out_of_range = (
            value < spec.min
            or (spec.max is not None and value > spec.max)
            or (spec.required and value <= 0)
        )
        if out_of_range:
            result.add_error(spec.name, spec.range_message)
            return
    else:
        if spec.required:
            error = DataValidator.positive(value, spec.label)
            if error:
                result.add_error(spec.name, error)
                return
        if spec.min > 0 or spec.max is not None:
            error = DataValidator.range_check(value, spec.label, spec.min, spec.max)
            if error:
                result.add_error(spec.name, error)
                return

    warning = DataValidator.suspiciously_high(value, spec.label, spec.warn_above)
    if warning:
        result.add_warning(spec.name, warning)


def validate(archetype: Any, raw_input: Optional[Mapping[str, Any]]) -> ValidationResult:
    """
    Valida y normaliza la entrada de costos

    Args:
        archetype: BusinessArchetype o su valor/nombre
        raw_input: {campo: número | cadena numérica}

    Returns:
        ValidationResult con `costs` (nombres canónicos) y `errors`
        (vacío ⇒ se puede calcular el precio)
    """
    result = ValidationResult()

    member = BusinessArchetype.parse(archetype)
    if member is None:
        result.add_error("archetype", f"Tipo de negocio no reconocido: {archetype}")
        return result

    if raw_input is None:
        raw_input = {}
    if not isinstance(raw_input, Mapping):
        result.add_error("raw_input", "Datos de entrada no válidos")
        return result

    profile = get_profile(member.value)
    for spec in profile.fields:
        raw = _lookup(raw_input, spec)
        if spec.kind == "choice":
            _validate_choice(spec, raw, result)
        else:
            _validate_number(spec, raw, result)

    if result.errors:
        logger.debug(
            f"Validación con {len(result.errors)} error(es) para {member.value}",
            extra={"context": {"archetype": member.value}},
        )
    return result

"""
helpers.py - Utilidades (v1.2)
"""

import math


def js_round(value: float) -> int:
    """Redondeo "half up" (el .5 siempre sube), no el redondeo bancario de round()"""
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """División segura"""
    if denominator == 0:
        return default
    result = numerator / denominator
    if not math.isfinite(result):
        return default
    return result


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Limita el valor al rango"""
    return max(min_val, min(value, max_val))


def format_number(value: float, decimals: int = 3) -> str:
    """Número con formato es-CO: 1.234.567,5"""
    text = f"{value:,.{decimals}f}"
    integer, _, fraction = text.partition(".")
    integer = integer.replace(",", ".")
    fraction = fraction.rstrip("0")
    return f"{integer},{fraction}" if fraction else integer


def format_currency(amount: float, symbol: str = "$") -> str:
    """Moneda: $1.234.567"""
    return f"{symbol}{format_number(amount)}"


def format_money(amount: float, currency: str = "COP") -> str:
    """Ahorro estimado con código de moneda: $1.234 COP"""
    return f"{format_currency(amount)} {currency}"


def format_plain(value: float) -> str:
    """Valor crudo sin ".0" sobrante: 30.0 → "30", 7.5 → "7.5" """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def to_camel(name: str) -> str:
    """snake_case → camelCase"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)

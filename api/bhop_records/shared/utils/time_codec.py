"""
Codec de tiempos de records.

Convierte los tiempos textuales de los feeds ("12.345", "1:02.500",
"1:02:03.456") a segundos y formatea segundos para mostrar.

Funciones puras, sin I/O.
"""
from __future__ import annotations

import math
import re
from typing import Optional

# Valor centinela: el texto no es un tiempo valido y el record se descarta.
INVALID_TIME = -1.0

# Componente numerico no negativo: "12", "12.5", "12.", ".5"
_COMPONENT_RE = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)")

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


def _parse_component(part: str) -> Optional[float]:
    if not _COMPONENT_RE.fullmatch(part):
        return None
    return float(part)


def parse_time(text: Optional[str]) -> float:
    """
    Parsea un tiempo en segundos.

    Formatos aceptados:
    - "S"      -> segundos ("12.345")
    - "M:S"    -> minutos:segundos ("1:02.500")
    - "H:M:S"  -> horas:minutos:segundos ("1:02:03.456")

    Cualquier otro formato, o un componente que no sea un real no negativo,
    retorna INVALID_TIME (-1.0). No se limita el valor de las horas.
    """
    if text is None:
        return INVALID_TIME

    parts = text.strip().split(":")
    if len(parts) > 3:
        return INVALID_TIME

    values = [_parse_component(p) for p in parts]
    if any(v is None for v in values):
        return INVALID_TIME

    total = 0.0
    for value in values:
        total = total * 60 + value
    return total


def is_valid_time(seconds: Optional[float]) -> bool:
    """Indica si un valor en segundos es un tiempo valido (finito y no negativo)."""
    return seconds is not None and math.isfinite(seconds) and seconds >= 0


def format_seconds(seconds: float) -> str:
    """
    Formatea segundos para mostrar, con precision de milisegundos.

    - >= 1 hora:   "H:MM:SS.mmm"
    - >= 1 minuto: "M:SS.mmm"
    - resto:       "S.mmm"

    El redondeo a milisegundos propaga el acarreo (59.9996 -> "1:00.000").
    """
    if seconds < 0:
        raise ValueError(f"Tiempo negativo no formateable: {seconds}")

    total_ms = int(round(seconds * _MS_PER_SECOND))
    hours, rest = divmod(total_ms, _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    secs, millis = divmod(rest, _MS_PER_SECOND)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}.{millis:03d}"
    if minutes > 0:
        return f"{minutes}:{secs:02d}.{millis:03d}"
    return f"{secs}.{millis:03d}"

"""
Extraccion de hashes desde la tabla HTML del host FastDL.

El sitio no ofrece un esquema: la extraccion depende de la forma exacta de
cada fila. Gramatica esperada (espacios opcionales entre celdas):

    <td><a href="...">NOMBRE_MAPA</a></td> <td>HASH</td>

- NOMBRE_MAPA: cualquier texto sin '<'
- HASH: hexadecimal en minusculas ([a-f0-9]+)

Filas con otra forma se ignoran en silencio.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

_ROW_TEMPLATE = r'<td><a\s+href="[^"]*">{name}</a></td>\s*<td>([a-f0-9]+)</td>'

_TABLE_ROW_RE = re.compile(_ROW_TEMPLATE.format(name=r"([^<]+)"))


def parse_fastdl_table(html: str) -> Dict[str, str]:
    """
    Extrae todas las filas mapa -> hash del HTML.

    Si un mapa aparece mas de una vez, gana la ultima fila.
    """
    return {name: file_hash for name, file_hash in _TABLE_ROW_RE.findall(html)}


def find_map_hash(html: str, map_name: str) -> Optional[str]:
    """
    Busca el hash de un mapa concreto (nombre exacto, escapado para regex).

    Returns:
        El hash, o None si no hay fila para ese mapa.
    """
    pattern = re.compile(_ROW_TEMPLATE.format(name=re.escape(map_name)))
    match = pattern.search(html)
    return match.group(1) if match else None

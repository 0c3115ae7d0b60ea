"""
Excepciones relacionadas con la lógica de dominio.
"""
from typing import Any

from bhop_records.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class EntityNotFoundException(DomainException):
    """Excepción cuando no se encuentra una entidad."""

    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(
            message=f"{entity_name} '{entity_id}' no encontrado",
            error_code="ENTITY_NOT_FOUND",
            details={"entity": entity_name, "id": str(entity_id)}
        )
        self.status_code = 404


class UpstreamFeedException(AppException):
    """Excepcion cuando un feed externo no responde o devuelve datos invalidos."""

    def __init__(self, feed_name: str, reason: str):
        super().__init__(
            message=f"Feed '{feed_name}' no disponible: {reason}",
            status_code=502,
            error_code="UPSTREAM_FEED_ERROR",
            details={"feed": feed_name}
        )

"""
Excepción base de la aplicación y forma del cuerpo JSON de error.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Excepción base de la aplicación.

    Lleva el status HTTP y un código estable para que el handler global
    la convierta en {"error", "message", "details"} sin lógica extra.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response_body(self) -> Dict[str, Any]:
        """Cuerpo JSON que devuelve la API para esta excepción."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InternalServerError(AppException):
    """Error no controlado; nunca expone el detalle interno al cliente."""

    def __init__(self):
        super().__init__(
            message="Ha ocurrido un error interno del servidor",
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
        )

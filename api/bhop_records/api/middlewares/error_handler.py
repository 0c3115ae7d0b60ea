"""
Middleware para errores no controlados.

Las AppException las renderiza el handler registrado en main.py; aquí solo
llega lo que se escapó (bugs, errores de base de datos fuera de un caso de
uso) y se responde con un 500 genérico.
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from bhop_records.shared.exceptions.base import InternalServerError


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convierte excepciones no controladas en una respuesta JSON 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            # Incluye el traceback en el log
            logger.opt(exception=True).error(
                "Error no manejado en {} {}", request.method, request.url.path
            )
            error = InternalServerError()
            return JSONResponse(status_code=error.status_code, content=error.to_response_body())

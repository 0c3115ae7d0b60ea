"""
Punto de entrada principal de la aplicación FastAPI.

La app solo expone consultas y disparadores manuales; el trabajo periódico
lo hace el scheduler que arranca en el lifespan (ver bhop_records.core.events).
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from bhop_records.api.middlewares.error_handler import ErrorHandlerMiddleware
from bhop_records.api.v1.router import api_router
from bhop_records.core.config import Settings, settings
from bhop_records.core.events import lifespan
from bhop_records.shared.exceptions.base import AppException


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Renderiza cualquier AppException como {"error", "message", "details"}."""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())


def create_application(app_settings: Settings = settings) -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Args:
        app_settings: Configuración a usar (los tests inyectan la suya)

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="Sincronización y consulta de records de bunnyhop",
        lifespan=lifespan,
    )
    application.state.settings = app_settings

    application.add_middleware(ErrorHandlerMiddleware)
    application.add_exception_handler(AppException, app_exception_handler)
    application.include_router(api_router, prefix="/api")

    @application.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Estado de la aplicación y del scheduler."""
        scheduler = getattr(request.app.state, "scheduler", None)
        return {
            "status": "healthy",
            "app_name": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "environment": app_settings.ENVIRONMENT,
            "scheduler_running": bool(scheduler and scheduler.running),
        }

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    access_host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    logger.info(f"Swagger UI: http://{access_host}:{settings.PORT}/docs")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

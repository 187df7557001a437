# backend/app/core/exceptions.py
"""
Excepciones de dominio de la aplicación y su traducción a respuestas HTTP.

Taxonomía:
- ValidationError: entrada mal formada, incompleta o fuera de rango (400).
- NotFoundError: el carrito o la línea referenciada no existe (404).
- ServiceError: cualquier fallo inesperado capturado en el endpoint (500).

Todas las respuestas de error comparten la forma
``{"error": str, "details": <lista de issues | str>}``, donde ``details``
se omite cuando no aplica.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Error base con la información necesaria para construir la respuesta."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, details: Any = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """La entrada viola tipo, presencia o rango de algún campo."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, issues: List[Dict[str, Any]], error: str = "Invalid input"):
        super().__init__(error, details=issues)
        self.issues = issues


class NotFoundError(AppError):
    """El carrito o la línea referenciada no existe."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str):
        super().__init__(message)


class ServiceError(AppError):
    """Fallo inesperado; el mensaje es el de la operación que falló."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error, details=details)


def issues_from_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Convierte la lista de errores de pydantic en issues por campo.

    Cada issue tiene ``path`` (lista de claves/índices), ``message`` y
    ``code``. Se descarta el prefijo de localización que añade FastAPI
    (``body``, ``query``) para que el path apunte al campo.
    """
    issues = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        message = err.get("msg", "")
        ctx = err.get("ctx") or {}
        # los mensajes propios de los validadores llegan como "Value error, ..."
        if err.get("type") == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        issues.append({
            "path": loc,
            "message": message,
            "code": err.get("type", "invalid"),
        })
    return issues


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """JSON mal formado o parámetros con tipo incorrecto: mismo formato que ValidationError."""
    issues = issues_from_errors(exc.errors())
    logger.info(f"Petición rechazada en {request.url.path}: {len(issues)} issue(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationError(issues).to_dict(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra los manejadores de errores en la aplicación."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

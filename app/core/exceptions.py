"""
Excepciones tipadas del sistema de acceso temporal.

Cada excepción lleva un ``code`` legible por máquina y el ``status_code`` HTTP
con el que se reporta. Los servicios lanzan estas excepciones; solo la capa
HTTP (``register_exception_handlers``) las traduce a respuestas.

    StockControlError
    |
    +-- NotFoundError (404)
    |   +-- InventoryNotFoundError
    |   +-- UserNotFoundError
    |   +-- AccessCodeInvalidError
    |   +-- NoActiveCodeError
    |
    +-- ConflictError (409)
    |   +-- ActiveCodeExistsError
    |   +-- AccessAlreadyGrantedError
    |
    +-- ForbiddenError (403)
    |   +-- RoleNotAllowedError
    |
    +-- InvalidArgumentError (400)
    |   +-- InvalidDurationError
    |
    +-- InternalError (500)
        +-- CodeGenerationError
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class StockControlError(Exception):
    """Base de todas las excepciones del dominio"""

    code: str = "STOCKCONTROL_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ===== CATEGORÍAS =====

class NotFoundError(StockControlError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(StockControlError):
    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(StockControlError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN


class InvalidArgumentError(StockControlError):
    code = "INVALID_ARGUMENT"
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(StockControlError):
    code = "INTERNAL"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ===== NO ENCONTRADO =====

class InventoryNotFoundError(NotFoundError):
    code = "INVENTORY_NOT_FOUND"

    def __init__(self, inventario_id: int):
        self.inventario_id = inventario_id
        super().__init__("El inventario especificado no existe")


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, usuario_id: int):
        self.usuario_id = usuario_id
        super().__init__("El usuario especificado no existe")


class AccessCodeInvalidError(NotFoundError):
    """Código inexistente o expirado; ambos casos comparten mensaje"""
    code = "ACCESS_CODE_INVALID"

    def __init__(self):
        super().__init__("Código inválido o expirado")


class NoActiveCodeError(NotFoundError):
    code = "NO_ACTIVE_CODE"

    def __init__(self, inventario_id: int):
        self.inventario_id = inventario_id
        super().__init__("No hay código activo para este inventario")


# ===== CONFLICTOS =====

class ActiveCodeExistsError(ConflictError):
    code = "ACTIVE_CODE_EXISTS"

    def __init__(self, inventario_id: int):
        self.inventario_id = inventario_id
        super().__init__(
            "Ya existe un código activo para este inventario. "
            "Espere a que expire antes de generar uno nuevo."
        )


class AccessAlreadyGrantedError(ConflictError):
    code = "ACCESS_ALREADY_GRANTED"

    def __init__(self, usuario_id: int, codigo_acceso_id: int):
        self.usuario_id = usuario_id
        self.codigo_acceso_id = codigo_acceso_id
        super().__init__("Este usuario ya cuenta con acceso al inventario")


# ===== PERMISOS / ARGUMENTOS / INTERNOS =====

class RoleNotAllowedError(ForbiddenError):
    code = "ROLE_NOT_ALLOWED"

    def __init__(self, usuario_id: int):
        self.usuario_id = usuario_id
        super().__init__(
            "Solo los usuarios con rol de usuario corriente pueden usar códigos de acceso"
        )


class InvalidDurationError(InvalidArgumentError):
    code = "INVALID_DURATION"

    def __init__(self, horas: int, minutos: int, message: str = "La duración del código debe ser mayor a cero"):
        self.horas = horas
        self.minutos = minutos
        super().__init__(message)


class CodeGenerationError(InternalError):
    code = "CODE_GENERATION_FAILED"

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No se pudo generar un código único tras {attempts} intentos")


# ===== MAPEO HTTP =====

def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}}
    )


def register_exception_handlers(app: FastAPI):
    """Traducir excepciones del dominio y de almacenamiento a respuestas JSON"""

    @app.exception_handler(StockControlError)
    async def stockcontrol_error_handler(request: Request, exc: StockControlError):
        if isinstance(exc, InternalError):
            logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        return _error_response(exc.status_code, exc.code, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Error de almacenamiento en {request.method} {request.url.path}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            InternalError.code,
            "Error interno en el servidor"
        )

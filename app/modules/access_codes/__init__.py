"""
Módulo de Códigos de Acceso - StockControl

El administrador de un inventario genera un código corto y temporal que los
usuarios corrientes canjean para acceder al inventario.

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Ciclo de vida del código (generar, validar, revocar, depurar)
- repository.py: Acceso a datos
- generator.py: Generación de valores de código
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as access_codes_router
from .service import AccessCodeService
from .repository import AccessCodeRepository
from .generator import CodeGenerator

__all__ = [
    "access_codes_router",
    "AccessCodeService",
    "AccessCodeRepository",
    "CodeGenerator"
]

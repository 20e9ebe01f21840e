"""
Módulo de Accesos Temporales - StockControl

Registra qué usuarios corrientes han canjeado qué código de acceso y resuelve
las consultas derivadas:

- Canje de un código vigente por un usuario corriente
- Usuarios con acceso al código activo de un inventario
- Inventarios a los que un usuario tiene acceso vigente

Un acceso está vigente mientras su código lo esté; la vigencia no se
almacena, se calcula al consultar.
"""

from .router import router as access_grants_router
from .service import AccessGrantService
from .repository import AccessGrantRepository

__all__ = [
    "access_grants_router",
    "AccessGrantService",
    "AccessGrantRepository"
]

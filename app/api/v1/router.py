# app/api/v1/router.py
from fastapi import APIRouter

from app.config.settings import settings
from app.modules.access_codes import access_codes_router
from app.modules.access_grants import access_grants_router


# Crear router principal de la API v1
api_router = APIRouter(prefix="/api/v1")

# ==================== MÓDULOS ====================

api_router.include_router(access_codes_router)
api_router.include_router(access_grants_router)


# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "StockControl API v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "access_codes": "/api/v1/codigos-acceso",
            "access_grants": "/api/v1/accesos-temporales"
        }
    }

@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "modules": {
            "access_codes": {
                "status": "active",
                "features": ["Generar", "Validar", "Código activo", "Revocar", "Depurar expirados"]
            },
            "access_grants": {
                "status": "active",
                "features": ["Canjear código", "Usuarios con acceso", "Inventarios por usuario"]
            }
        }
    }

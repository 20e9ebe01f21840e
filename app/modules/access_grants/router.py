from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.clock import Clock, get_clock
from app.modules.access_grants.service import AccessGrantService
from app.modules.access_grants.schemas import (
    RedeemRequest, RedeemEnvelope, AccessGrantResponse,
    AccessGrantListEnvelope, InventorySummaryListEnvelope
)

router = APIRouter(prefix="/accesos-temporales", tags=["Accesos temporales"])


@router.post(
    "/acceder/{codigo}",
    response_model=RedeemEnvelope,
    status_code=status.HTTP_201_CREATED
)
async def redeem_access_code(
    codigo: str,
    acceso: RedeemRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Acceder a un inventario con un código

    **Validaciones:**
    - El usuario debe existir (404) y tener rol de usuario corriente (403)
    - El código debe estar vigente (404, sin distinguir inexistente de expirado)
    - El usuario no puede canjear dos veces el mismo código (409)
    """
    service = AccessGrantService(db, clock)
    data = service.redeem(codigo, acceso.usuario_id)
    return RedeemEnvelope(message="Acceso exitoso", data=data)


@router.get("/inventario/{inventario_id}", response_model=AccessGrantListEnvelope)
async def get_users_with_access(
    inventario_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Usuarios que han canjeado el código activo del inventario

    404 si el inventario no existe o no tiene código activo.
    """
    service = AccessGrantService(db, clock)
    accesos = service.list_users_with_access(inventario_id)
    message = (
        "Usuarios con acceso obtenidos correctamente"
        if accesos
        else "No hay usuarios con acceso temporal actualmente"
    )
    return AccessGrantListEnvelope(
        message=message,
        data=[AccessGrantResponse.model_validate(a) for a in accesos]
    )


@router.get("/usuario/{usuario_id}", response_model=InventorySummaryListEnvelope)
async def get_inventories_for_user(
    usuario_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Inventarios a los que el usuario tiene acceso temporal vigente

    Incluye cantidad de elementos, valor monetario total y ambientes cubiertos.
    """
    service = AccessGrantService(db, clock)
    inventarios = service.list_inventories_for_user(usuario_id)
    message = (
        "Inventarios con acceso obtenidos correctamente"
        if inventarios
        else "No hay inventarios activos para este usuario"
    )
    return InventorySummaryListEnvelope(message=message, data=inventarios)

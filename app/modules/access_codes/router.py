from datetime import timedelta
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.clock import Clock, get_clock
from app.modules.access_codes.service import AccessCodeService
from app.modules.access_codes.schemas import (
    DurationRequest, AccessCodeEnvelope, RevocationEnvelope, PurgeEnvelope
)

router = APIRouter(prefix="/codigos-acceso", tags=["Códigos de acceso"])

# ===== ADMINISTRADOR DEL INVENTARIO =====

@router.post(
    "/generar/{inventario_id}",
    response_model=AccessCodeEnvelope,
    status_code=status.HTTP_201_CREATED
)
async def generate_access_code(
    inventario_id: int,
    duracion: DurationRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Generar un código de acceso temporal para un inventario

    **Validaciones:**
    - El inventario debe existir (404)
    - No puede haber otro código activo para el inventario (409)
    - La duración (horas + minutos) debe ser mayor a cero (400)
    """
    service = AccessCodeService(db, clock)
    codigo = service.generate(inventario_id, duracion.horas, duracion.minutos)
    return AccessCodeEnvelope(
        message="Código generado exitosamente",
        data=service.build_response(codigo)
    )


@router.get("/inventario/{inventario_id}", response_model=AccessCodeEnvelope)
async def get_active_access_code(
    inventario_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Código activo del inventario

    Responde 204 sin contenido si el inventario no tiene código vigente.
    """
    service = AccessCodeService(db, clock)
    codigo = service.get_active(inventario_id)
    if codigo is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return AccessCodeEnvelope(
        message="Código activo del inventario",
        data=service.build_response(codigo)
    )


@router.delete("/inventario/{inventario_id}", response_model=RevocationEnvelope)
async def revoke_inventory_access(
    inventario_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Eliminar los códigos del inventario y todos los accesos otorgados con ellos

    Operación idempotente: si no hay nada que eliminar responde con total 0.
    """
    service = AccessCodeService(db, clock)
    result = service.revoke_for_inventory(inventario_id)
    message = (
        "Accesos del inventario eliminados correctamente"
        if result.total_eliminados
        else "No hay accesos ni códigos para eliminar"
    )
    return RevocationEnvelope(message=message, data=result)


@router.delete("/expirados", response_model=PurgeEnvelope)
async def purge_expired_access_codes(
    horas_antiguedad: Optional[int] = Query(
        None, ge=0, description="Solo códigos expirados hace al menos estas horas"
    ),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """Depurar el historial de códigos expirados y sus accesos"""
    service = AccessCodeService(db, clock)
    before = None
    if horas_antiguedad:
        before = clock.now() - timedelta(hours=horas_antiguedad)
    result = service.purge_expired(before)
    return PurgeEnvelope(message="Códigos expirados depurados", data=result)

# ===== USUARIO CORRIENTE =====

@router.get("/validar/{codigo}", response_model=AccessCodeEnvelope)
async def validate_access_code(
    codigo: str,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Validar un código de acceso

    Responde 404 con el mismo mensaje si el código no existe o ya expiró.
    """
    service = AccessCodeService(db, clock)
    encontrado = service.validate(codigo)
    return AccessCodeEnvelope(
        message="Código válido",
        data=service.build_response(encontrado, include_inventory_name=True)
    )

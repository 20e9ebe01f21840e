from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

# ==================== CLASE BASE PARA RESPUESTAS ====================

class AccessCodeBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class DurationRequest(BaseModel):
    """Duración de validez del código. La suma debe ser mayor a cero"""
    horas: int = Field(default=0, description="Horas de validez")
    minutos: int = Field(default=0, description="Minutos de validez")

# ==================== RESPONSE SCHEMAS ====================

class AccessCodeResponse(AccessCodeBaseModel):
    id: int
    codigo: str
    inventario_id: int
    fecha_creacion: Optional[datetime] = None
    fecha_expiracion: datetime

    # Se completa al consultar, no se almacena
    nombre_inventario: Optional[str] = None

class AccessCodeEnvelope(AccessCodeBaseModel):
    success: bool = True
    message: str
    data: AccessCodeResponse

class RevocationResult(AccessCodeBaseModel):
    inventario_id: int
    accesos_eliminados: int
    codigos_eliminados: int
    total_eliminados: int

class RevocationEnvelope(AccessCodeBaseModel):
    success: bool = True
    message: str
    data: RevocationResult

class PurgeResult(AccessCodeBaseModel):
    fecha_corte: datetime
    accesos_eliminados: int
    codigos_eliminados: int
    dry_run: bool = False

class PurgeEnvelope(AccessCodeBaseModel):
    success: bool = True
    message: str
    data: PurgeResult

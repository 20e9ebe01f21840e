from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

from app.modules.access_codes.schemas import AccessCodeResponse
from app.shared.services.lookups import InventorySummary

# ==================== REQUEST SCHEMAS ====================

class RedeemRequest(BaseModel):
    """Usuario que canjea el código"""
    usuario_id: int = Field(..., gt=0, description="ID del usuario corriente")

# ==================== RESPONSE SCHEMAS ====================

class UserInfo(BaseModel):
    """Información básica de usuario"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombres: Optional[str] = None
    apellidos: Optional[str] = None
    correo: Optional[str] = None

class AccessGrantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    codigo_acceso_id: int
    fecha_acceso: Optional[datetime] = None
    usuario: Optional[UserInfo] = None

class RedeemEnvelope(BaseModel):
    success: bool = True
    message: str
    data: AccessCodeResponse

class AccessGrantListEnvelope(BaseModel):
    success: bool = True
    message: str
    data: List[AccessGrantResponse]

class InventorySummaryListEnvelope(BaseModel):
    success: bool = True
    message: str
    data: List[InventorySummary]

# app/shared/services/lookups.py
"""
Consultas de solo lectura sobre inventarios y usuarios.

El módulo de acceso temporal no administra inventarios, usuarios ni
elementos; solo los consulta a través de estas clases.
"""
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.shared.database.models import Elemento, Inventario, Usuario


class RoleKind(str, Enum):
    ADMIN = "admin"
    CURRENT_USER = "current_user"
    OTHER = "other"


def role_kind_from_id(rol_id: Optional[int]) -> RoleKind:
    """Traducir el rol_id numérico de la tabla roles"""
    if rol_id == settings.admin_role_id:
        return RoleKind.ADMIN
    if rol_id == settings.current_user_role_id:
        return RoleKind.CURRENT_USER
    return RoleKind.OTHER


class InventorySummary(BaseModel):
    """Inventario con totales calculados para mostrar"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: Optional[str] = None
    usuario_admin_id: Optional[int] = None
    fecha_creacion: Optional[date] = None
    cantidad_elementos: int = 0
    valor_monetario: Decimal = Decimal("0")
    ambientes_cubiertos: int = 0


class InventoryLookup:

    def __init__(self, db: Session):
        self.db = db

    def get(self, inventario_id: int) -> Optional[Inventario]:
        return self.db.query(Inventario).filter(Inventario.id == inventario_id).first()

    def exists(self, inventario_id: int) -> bool:
        return self.db.query(
            self.db.query(Inventario.id).filter(Inventario.id == inventario_id).exists()
        ).scalar()

    def get_name(self, inventario_id: int) -> Optional[str]:
        return self.db.query(Inventario.nombre).filter(Inventario.id == inventario_id).scalar()


class UserLookup:

    def __init__(self, db: Session):
        self.db = db

    def exists(self, usuario_id: int) -> bool:
        return self.db.query(
            self.db.query(Usuario.id).filter(Usuario.id == usuario_id).exists()
        ).scalar()

    def get_role(self, usuario_id: int) -> Optional[RoleKind]:
        """None si el usuario no existe"""
        row = self.db.query(Usuario.rol_id).filter(Usuario.id == usuario_id).first()
        if row is None:
            return None
        return role_kind_from_id(row.rol_id)


class InventoryEnrichment:

    def __init__(self, db: Session):
        self.db = db
        self.inventories = InventoryLookup(db)

    def enrich(self, inventario_id: int) -> Optional[InventorySummary]:
        """Cantidad de elementos, valor monetario total y ambientes cubiertos"""
        inventario = self.inventories.get(inventario_id)
        if inventario is None:
            return None

        cantidad, valor = self.db.query(
            func.count(Elemento.id),
            func.coalesce(func.sum(Elemento.valor_monetario), 0)
        ).filter(Elemento.inventario_id == inventario_id).one()

        ambientes = self.db.query(
            func.count(func.distinct(Elemento.ambiente_id))
        ).filter(
            Elemento.inventario_id == inventario_id,
            Elemento.ambiente_id.isnot(None)
        ).scalar()

        return InventorySummary(
            id=inventario.id,
            nombre=inventario.nombre,
            usuario_admin_id=inventario.usuario_admin_id,
            fecha_creacion=inventario.fecha_creacion,
            cantidad_elementos=cantidad or 0,
            valor_monetario=Decimal(str(valor or 0)),
            ambientes_cubiertos=ambientes or 0
        )

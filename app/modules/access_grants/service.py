# app/modules/access_grants/service.py
import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import Clock, SystemClock
from app.core.exceptions import (
    AccessAlreadyGrantedError, InventoryNotFoundError, NoActiveCodeError,
    RoleNotAllowedError, UserNotFoundError
)
from app.core.logging_config import mask_code
from app.modules.access_codes.schemas import AccessCodeResponse
from app.modules.access_codes.service import AccessCodeService
from app.shared.database.models import AccesoTemporal
from app.shared.services.lookups import (
    InventoryEnrichment, InventoryLookup, InventorySummary, RoleKind, UserLookup
)
from .repository import AccessGrantRepository

logger = logging.getLogger(__name__)


class AccessGrantService:
    """Canje de códigos y consultas de quién accede a qué inventario"""

    def __init__(self, db: Session, clock: Clock = None, code_service: AccessCodeService = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.code_service = code_service or AccessCodeService(db, self.clock)
        self.repository = AccessGrantRepository(db)
        self.users = UserLookup(db)
        self.inventories = InventoryLookup(db)
        self.enrichment = InventoryEnrichment(db)

    # ==================== CANJEAR ====================

    def redeem(self, codigo: str, usuario_id: int) -> AccessCodeResponse:
        """
        Registrar que un usuario corriente canjeó un código vigente.
        Retorna el código con el nombre del inventario al que da acceso.
        """
        role = self.users.get_role(usuario_id)
        if role is None:
            raise UserNotFoundError(usuario_id)
        if role != RoleKind.CURRENT_USER:
            logger.warning(f"Usuario {usuario_id} con rol {role.value} intentó canjear un código")
            raise RoleNotAllowedError(usuario_id)

        encontrado = self.code_service.validate(codigo)

        codigos_vigentes = self.repository.get_live_codes_for_user(usuario_id, self.clock.now())
        if any(c.id == encontrado.id for c in codigos_vigentes):
            raise AccessAlreadyGrantedError(usuario_id, encontrado.id)

        try:
            self.repository.create(usuario_id, encontrado.id, self.clock.now())
        except IntegrityError:
            # Canje simultáneo del mismo par (usuario, código)
            raise AccessAlreadyGrantedError(usuario_id, encontrado.id)

        logger.info(
            f"Usuario {usuario_id}: acceso al inventario {encontrado.inventario_id} "
            f"con código {mask_code(encontrado.codigo)}"
        )
        return self.code_service.build_response(encontrado, include_inventory_name=True)

    # ==================== CONSULTAS ====================

    def list_users_with_access(self, inventario_id: int) -> List[AccesoTemporal]:
        """
        Accesos otorgados con el código activo del inventario.
        Lista vacía si el código aún no se ha canjeado; NoActiveCodeError si no hay código.
        """
        if not self.inventories.exists(inventario_id):
            raise InventoryNotFoundError(inventario_id)

        activo = self.code_service.find_active(inventario_id)
        if activo is None:
            raise NoActiveCodeError(inventario_id)

        return self.repository.get_by_code(activo.id)

    def list_inventories_for_user(self, usuario_id: int) -> List[InventorySummary]:
        """Inventarios a los que el usuario tiene acceso vigente, con totales"""
        if not self.users.exists(usuario_id):
            raise UserNotFoundError(usuario_id)

        inventarios = []
        for codigo in self.repository.get_live_codes_for_user(usuario_id, self.clock.now()):
            summary = self.enrichment.enrich(codigo.inventario_id)
            if summary is not None:
                inventarios.append(summary)
        return inventarios

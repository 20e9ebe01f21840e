# app/modules/access_codes/service.py
import logging
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.clock import Clock, SystemClock
from app.core.exceptions import (
    AccessCodeInvalidError, ActiveCodeExistsError, CodeGenerationError,
    InvalidDurationError, InventoryNotFoundError
)
from app.core.logging_config import mask_code
from app.shared.database.models import CodigoAcceso
from app.shared.services.lookups import InventoryLookup
from .generator import CodeGenerator, normalize_code
from .repository import AccessCodeRepository
from .schemas import AccessCodeResponse, PurgeResult, RevocationResult

logger = logging.getLogger(__name__)


class AccessCodeService:
    """
    Ciclo de vida de los códigos de acceso de un inventario:
    sin código -> activo -> expirado (historial) -> eliminado

    Un inventario tiene como máximo un código activo a la vez.
    """

    def __init__(self, db: Session, clock: Clock = None, generator: CodeGenerator = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.generator = generator or CodeGenerator()
        self.repository = AccessCodeRepository(db)
        self.inventories = InventoryLookup(db)
        self.max_attempts = settings.access_code_max_attempts

    # ==================== GENERAR ====================

    def generate(self, inventario_id: int, horas: int = 0, minutos: int = 0) -> CodigoAcceso:
        """Generar un código nuevo válido por horas + minutos"""
        total_seconds = horas * 3600 + minutos * 60
        if total_seconds <= 0:
            raise InvalidDurationError(horas, minutos)
        if total_seconds > settings.access_code_max_hours * 3600:
            raise InvalidDurationError(
                horas, minutos,
                f"La duración del código no puede superar {settings.access_code_max_hours} horas"
            )

        for attempt in range(1, self.max_attempts + 1):
            # El bloqueo se libera con el commit del insert o con el rollback
            if self.repository.lock_inventory(inventario_id) is None:
                self.db.rollback()
                raise InventoryNotFoundError(inventario_id)

            now = self.clock.now()
            if self.repository.get_active_by_inventory(inventario_id, now) is not None:
                self.db.rollback()
                logger.info(f"Inventario {inventario_id}: ya tiene un código activo")
                raise ActiveCodeExistsError(inventario_id)

            codigo = self.generator.generate()
            if self.repository.code_exists(codigo):
                self.db.rollback()
                logger.warning(
                    f"Inventario {inventario_id}: colisión de código {mask_code(codigo)} "
                    f"(intento {attempt}/{self.max_attempts})"
                )
                continue

            try:
                fecha_expiracion = now + timedelta(seconds=total_seconds)
            except OverflowError:
                self.db.rollback()
                raise InvalidDurationError(
                    horas, minutos, "La fecha de expiración queda fuera del rango admitido"
                )

            try:
                codigo_acceso = self.repository.create(codigo, inventario_id, now, fecha_expiracion)
            except IntegrityError:
                # Otra petición insertó primero: decidir si fue el código o el inventario
                if self.repository.get_active_by_inventory(inventario_id, self.clock.now()) is not None:
                    raise ActiveCodeExistsError(inventario_id)
                if not self.repository.code_exists(codigo):
                    raise
                logger.warning(
                    f"Inventario {inventario_id}: código {mask_code(codigo)} insertado "
                    f"por otra petición (intento {attempt}/{self.max_attempts})"
                )
                continue

            logger.info(
                f"Inventario {inventario_id}: código {mask_code(codigo_acceso.codigo)} "
                f"generado, expira {codigo_acceso.fecha_expiracion.isoformat()}"
            )
            return codigo_acceso

        raise CodeGenerationError(self.max_attempts)

    # ==================== CONSULTAR ====================

    def validate(self, codigo: str) -> CodigoAcceso:
        """
        Código vigente con ese valor. No distingue entre código inexistente y
        expirado para no revelar qué códigos existieron.
        """
        encontrado = self.repository.get_valid_by_code(normalize_code(codigo), self.clock.now())
        if encontrado is None:
            raise AccessCodeInvalidError()
        return encontrado

    def get_active(self, inventario_id: int) -> Optional[CodigoAcceso]:
        """Código activo del inventario, o None"""
        self._ensure_inventory(inventario_id)
        return self.find_active(inventario_id)

    def find_active(self, inventario_id: int) -> Optional[CodigoAcceso]:
        """Como get_active, sin verificar que el inventario exista"""
        return self.repository.get_active_by_inventory(inventario_id, self.clock.now())

    # ==================== ELIMINAR ====================

    def revoke_for_inventory(self, inventario_id: int) -> RevocationResult:
        """
        Eliminar todos los códigos del inventario y sus accesos.
        Sin nada que eliminar también es un resultado exitoso.
        """
        self._ensure_inventory(inventario_id)

        accesos, codigos = self.repository.delete_with_grants_by_inventory(inventario_id)
        if accesos or codigos:
            logger.info(
                f"Inventario {inventario_id}: {accesos} accesos y {codigos} códigos eliminados"
            )

        return RevocationResult(
            inventario_id=inventario_id,
            accesos_eliminados=accesos,
            codigos_eliminados=codigos,
            total_eliminados=accesos + codigos
        )

    def purge_expired(self, before: datetime = None, dry_run: bool = False) -> PurgeResult:
        """Eliminar el historial de códigos expirados hasta `before` (por defecto, ahora)"""
        fecha_corte = before or self.clock.now()

        if dry_run:
            accesos, codigos = self.repository.count_expired(fecha_corte)
        else:
            accesos, codigos = self.repository.delete_expired_with_grants(fecha_corte)
            logger.info(
                f"Depuración hasta {fecha_corte.isoformat()}: "
                f"{accesos} accesos y {codigos} códigos eliminados"
            )

        return PurgeResult(
            fecha_corte=fecha_corte,
            accesos_eliminados=accesos,
            codigos_eliminados=codigos,
            dry_run=dry_run
        )

    # ==================== MÉTODOS AUXILIARES ====================

    def build_response(self, codigo_acceso: CodigoAcceso,
                       include_inventory_name: bool = False) -> AccessCodeResponse:
        """Respuesta del código; el nombre del inventario se agrega en la consulta"""
        response = AccessCodeResponse.model_validate(codigo_acceso)
        if include_inventory_name:
            response.nombre_inventario = self.inventories.get_name(codigo_acceso.inventario_id)
        return response

    def _ensure_inventory(self, inventario_id: int):
        if not self.inventories.exists(inventario_id):
            raise InventoryNotFoundError(inventario_id)

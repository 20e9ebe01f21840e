from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError

from app.shared.database.models import CodigoAcceso, AccesoTemporal, Inventario

class AccessCodeRepository:
    """Acceso a datos de codigos_acceso. Sin lógica de negocio"""

    def __init__(self, db: Session):
        self.db = db

    # ===== ESCRITURA =====

    def create(self, codigo: str, inventario_id: int,
               fecha_creacion: datetime, fecha_expiracion: datetime) -> CodigoAcceso:
        """Insertar un código. Propaga IntegrityError tras hacer rollback"""
        try:
            codigo_acceso = CodigoAcceso(
                codigo=codigo,
                inventario_id=inventario_id,
                fecha_creacion=fecha_creacion,
                fecha_expiracion=fecha_expiracion
            )
            self.db.add(codigo_acceso)
            self.db.commit()
            self.db.refresh(codigo_acceso)
            return codigo_acceso
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def delete_with_grants_by_inventory(self, inventario_id: int) -> Tuple[int, int]:
        """
        Eliminar accesos y códigos de un inventario en una sola transacción.
        Retorna (accesos_eliminados, codigos_eliminados)
        """
        codigo_ids = select(CodigoAcceso.id).where(CodigoAcceso.inventario_id == inventario_id)
        try:
            accesos = self.db.query(AccesoTemporal).filter(
                AccesoTemporal.codigo_acceso_id.in_(codigo_ids)
            ).delete(synchronize_session=False)

            codigos = self.db.query(CodigoAcceso).filter(
                CodigoAcceso.inventario_id == inventario_id
            ).delete(synchronize_session=False)

            self.db.commit()
            return accesos, codigos
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def delete_expired_with_grants(self, before: datetime) -> Tuple[int, int]:
        """Eliminar códigos con fecha_expiracion <= before y sus accesos"""
        codigo_ids = select(CodigoAcceso.id).where(CodigoAcceso.fecha_expiracion <= before)
        try:
            accesos = self.db.query(AccesoTemporal).filter(
                AccesoTemporal.codigo_acceso_id.in_(codigo_ids)
            ).delete(synchronize_session=False)

            codigos = self.db.query(CodigoAcceso).filter(
                CodigoAcceso.fecha_expiracion <= before
            ).delete(synchronize_session=False)

            self.db.commit()
            return accesos, codigos
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    # ===== CONSULTAS =====

    def lock_inventory(self, inventario_id: int) -> Optional[Inventario]:
        """
        Bloquear la fila del inventario hasta el próximo commit/rollback.
        Serializa la generación de códigos del mismo inventario.

        SQLite ignora FOR UPDATE; ahí se toma el bloqueo de escritura de la
        base con BEGIN IMMEDIATE, y otra conexión que intente lo mismo espera
        (o falla con "database is locked") hasta el commit/rollback.
        """
        connection = self.db.connection()
        if connection.dialect.name == "sqlite":
            if not connection.connection.driver_connection.in_transaction:
                connection.exec_driver_sql("BEGIN IMMEDIATE")

        return self.db.query(Inventario).filter(
            Inventario.id == inventario_id
        ).with_for_update().first()

    def get_active_by_inventory(self, inventario_id: int, now: datetime) -> Optional[CodigoAcceso]:
        """Código vigente más reciente del inventario"""
        return self.db.query(CodigoAcceso).filter(
            CodigoAcceso.inventario_id == inventario_id,
            CodigoAcceso.fecha_expiracion > now
        ).order_by(desc(CodigoAcceso.fecha_expiracion)).first()

    def get_valid_by_code(self, codigo: str, now: datetime) -> Optional[CodigoAcceso]:
        return self.db.query(CodigoAcceso).filter(
            CodigoAcceso.codigo == codigo,
            CodigoAcceso.fecha_expiracion > now
        ).first()

    def code_exists(self, codigo: str) -> bool:
        """Existe el valor en cualquier código, vigente o expirado"""
        return self.db.query(
            self.db.query(CodigoAcceso.id).filter(CodigoAcceso.codigo == codigo).exists()
        ).scalar()

    def count_expired(self, before: datetime) -> Tuple[int, int]:
        """(accesos, codigos) que eliminaría delete_expired_with_grants"""
        codigos = self.db.query(CodigoAcceso).filter(
            CodigoAcceso.fecha_expiracion <= before
        ).count()
        accesos = self.db.query(AccesoTemporal).join(
            CodigoAcceso, AccesoTemporal.codigo_acceso_id == CodigoAcceso.id
        ).filter(CodigoAcceso.fecha_expiracion <= before).count()
        return accesos, codigos

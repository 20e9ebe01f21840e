from datetime import datetime
from typing import List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError

from app.shared.database.models import AccesoTemporal, CodigoAcceso

class AccessGrantRepository:
    """Acceso a datos de accesos_temporales. Sin lógica de negocio"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, usuario_id: int, codigo_acceso_id: int, fecha_acceso: datetime) -> AccesoTemporal:
        """Registrar un acceso. IntegrityError si el par (usuario, código) ya existe"""
        try:
            acceso = AccesoTemporal(
                usuario_id=usuario_id,
                codigo_acceso_id=codigo_acceso_id,
                fecha_acceso=fecha_acceso
            )
            self.db.add(acceso)
            self.db.commit()
            self.db.refresh(acceso)
            return acceso
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def get_by_code(self, codigo_acceso_id: int) -> List[AccesoTemporal]:
        """Accesos otorgados con un código, con el usuario cargado"""
        return self.db.query(AccesoTemporal).options(
            joinedload(AccesoTemporal.usuario)
        ).filter(
            AccesoTemporal.codigo_acceso_id == codigo_acceso_id
        ).order_by(asc(AccesoTemporal.id)).all()

    def get_live_codes_for_user(self, usuario_id: int, now: datetime) -> List[CodigoAcceso]:
        """Códigos vigentes que el usuario ha canjeado"""
        return self.db.query(CodigoAcceso).join(
            AccesoTemporal, AccesoTemporal.codigo_acceso_id == CodigoAcceso.id
        ).filter(
            AccesoTemporal.usuario_id == usuario_id,
            CodigoAcceso.fecha_expiracion > now
        ).order_by(asc(CodigoAcceso.id)).all()

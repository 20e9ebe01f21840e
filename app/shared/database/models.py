from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, ForeignKey, Numeric, BigInteger, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.config.database import Base

# ===== TABLAS DE REFERENCIA (solo lectura para el módulo de accesos) =====

class Rol(Base):
    """Modelo de Rol"""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(30))
    descripcion = Column(Text)

    usuarios = relationship("Usuario", back_populates="rol")

class Usuario(Base):
    """Modelo de Usuario"""
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nombres = Column(String(100))
    apellidos = Column(String(100))
    correo = Column(String(100), unique=True, nullable=False)
    rol_id = Column(Integer, ForeignKey("roles.id"), default=3)
    activo = Column(Boolean, default=True)

    # Relationships
    rol = relationship("Rol", back_populates="usuarios")
    accesos = relationship("AccesoTemporal", back_populates="usuario")

    @property
    def nombre_completo(self):
        return f"{self.nombres} {self.apellidos}"

class Inventario(Base):
    """Modelo de Inventario"""
    __tablename__ = "inventarios"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(50))
    fecha_creacion = Column(Date)
    ultima_actualizacion = Column(Date)
    usuario_admin_id = Column(Integer, ForeignKey("usuarios.id"))

    # Relationships
    elementos = relationship("Elemento", back_populates="inventario")
    codigos_acceso = relationship(
        "CodigoAcceso",
        back_populates="inventario",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

class Ambiente(Base):
    """Modelo de Ambiente (espacio físico dentro de un centro)"""
    __tablename__ = "ambientes"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(50))

    elementos = relationship("Elemento", back_populates="ambiente")

class Elemento(Base):
    """Modelo de Elemento inventariado"""
    __tablename__ = "elementos"

    id = Column(Integer, primary_key=True, index=True)
    placa = Column(BigInteger, unique=True)
    serial = Column(String(50))
    valor_monetario = Column(Numeric(12, 2), default=0)
    estado_activo = Column(Boolean, default=True)
    ambiente_id = Column(Integer, ForeignKey("ambientes.id"), nullable=True)
    inventario_id = Column(Integer, ForeignKey("inventarios.id"), index=True)

    # Relationships
    ambiente = relationship("Ambiente", back_populates="elementos")
    inventario = relationship("Inventario", back_populates="elementos")

# ===== ACCESO TEMPORAL =====

class CodigoAcceso(Base):
    """Código de acceso temporal a un inventario. Activo mientras fecha_expiracion > ahora"""
    __tablename__ = "codigos_acceso"

    id = Column(Integer, primary_key=True, index=True)
    codigo = Column(String(10), unique=True, nullable=False, index=True)
    inventario_id = Column(
        Integer, ForeignKey("inventarios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    fecha_creacion = Column(DateTime, server_default=func.current_timestamp(), nullable=False)
    fecha_expiracion = Column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint('inventario_id', 'fecha_expiracion', name='codigos_acceso_inventario_expiracion'),
    )

    # Relationships
    inventario = relationship("Inventario", back_populates="codigos_acceso")
    accesos = relationship(
        "AccesoTemporal",
        back_populates="codigo_acceso",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

class AccesoTemporal(Base):
    """Registro de que un usuario canjeó un código de acceso"""
    __tablename__ = "accesos_temporales"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    codigo_acceso_id = Column(
        Integer, ForeignKey("codigos_acceso.id", ondelete="CASCADE"), nullable=False, index=True
    )
    fecha_acceso = Column(DateTime, server_default=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint('usuario_id', 'codigo_acceso_id', name='accesos_temporales_usuario_codigo'),
    )

    # Relationships
    usuario = relationship("Usuario", back_populates="accesos")
    codigo_acceso = relationship("CodigoAcceso", back_populates="accesos")

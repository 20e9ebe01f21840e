"""
Pytest fixtures for the StockControl test suite.

Provides:
- In-memory SQLite database (shared connection via StaticPool)
- DeterministicClock injected into services and endpoints
- Reference data: roles, users, inventories, environments and elements
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, enable_sqlite_foreign_keys, get_db
from app.config.settings import settings
from app.core.clock import DeterministicClock, get_clock
from app.shared.database.models import (
    Ambiente, Elemento, Inventario, Rol, Usuario
)

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


class ScriptedGenerator:
    """Generador que entrega valores predefinidos en orden"""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return self.codes.pop(0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def clock():
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def roles(session):
    session.add_all([
        Rol(id=1, nombre="Superadministrador", descripcion="Gestión global"),
        Rol(id=settings.admin_role_id, nombre="Administrativo", descripcion="Gestiona los inventarios a su cargo."),
        Rol(id=settings.current_user_role_id, nombre="Corriente", descripcion="Apoya en la gestión de los inventarios con acceso."),
    ])
    session.commit()


@pytest.fixture
def admin_user(session, roles):
    user = Usuario(
        id=1, nombres="Enzy Zulay", apellidos="Angarita Bermudez",
        correo="admin@example.com", rol_id=settings.admin_role_id
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def current_user(session, roles):
    user = Usuario(
        id=7, nombres="Laura", apellidos="Pérez",
        correo="laura@example.com", rol_id=settings.current_user_role_id
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def other_current_user(session, roles):
    user = Usuario(
        id=8, nombres="Andrés", apellidos="Gómez",
        correo="andres@example.com", rol_id=settings.current_user_role_id
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def inventory(session, admin_user):
    """Inventario 42 con tres elementos repartidos en dos ambientes"""
    inventario = Inventario(
        id=42, nombre="Laboratorio de Software",
        fecha_creacion=date(2024, 1, 1), usuario_admin_id=admin_user.id
    )
    session.add(inventario)
    session.add_all([
        Ambiente(id=1, nombre="Ambiente 101"),
        Ambiente(id=2, nombre="Ambiente 102"),
    ])
    session.flush()
    session.add_all([
        Elemento(placa=1001, serial="SN-1", valor_monetario=Decimal("100.50"), ambiente_id=1, inventario_id=42),
        Elemento(placa=1002, serial="SN-2", valor_monetario=Decimal("200.25"), ambiente_id=1, inventario_id=42),
        Elemento(placa=1003, serial="SN-3", valor_monetario=Decimal("50.00"), ambiente_id=2, inventario_id=42),
    ])
    session.commit()
    return inventario


@pytest.fixture
def empty_inventory(session, admin_user):
    inventario = Inventario(
        id=43, nombre="Bodega Vacía",
        fecha_creacion=date(2024, 1, 1), usuario_admin_id=admin_user.id
    )
    session.add(inventario)
    session.commit()
    return inventario


@pytest.fixture
def client(session_factory, clock):
    """TestClient con la base de datos y el reloj de prueba"""
    from app.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def scripted_generator():
    return ScriptedGenerator

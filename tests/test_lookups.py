"""Tests for the read-only inventory and user lookups."""

from decimal import Decimal

from app.config.settings import settings
from app.shared.database.models import Elemento
from app.shared.services.lookups import (
    InventoryEnrichment, InventoryLookup, RoleKind, UserLookup, role_kind_from_id
)


class TestRoleKind:

    def test_numeric_roles_map_to_kinds(self):
        assert role_kind_from_id(settings.admin_role_id) == RoleKind.ADMIN
        assert role_kind_from_id(settings.current_user_role_id) == RoleKind.CURRENT_USER
        assert role_kind_from_id(1) == RoleKind.OTHER
        assert role_kind_from_id(None) == RoleKind.OTHER


class TestUserLookup:

    def test_role_of_existing_users(self, session, admin_user, current_user):
        users = UserLookup(session)
        assert users.get_role(admin_user.id) == RoleKind.ADMIN
        assert users.get_role(current_user.id) == RoleKind.CURRENT_USER

    def test_missing_user(self, session, roles):
        users = UserLookup(session)
        assert users.exists(999) is False
        assert users.get_role(999) is None


class TestInventoryLookup:

    def test_exists_and_name(self, session, inventory):
        inventories = InventoryLookup(session)
        assert inventories.exists(42) is True
        assert inventories.get_name(42) == "Laboratorio de Software"

    def test_missing_inventory(self, session, roles):
        inventories = InventoryLookup(session)
        assert inventories.exists(1) is False
        assert inventories.get_name(1) is None
        assert inventories.get(1) is None


class TestInventoryEnrichment:

    def test_totals(self, session, inventory):
        summary = InventoryEnrichment(session).enrich(42)

        assert summary.cantidad_elementos == 3
        assert summary.valor_monetario == Decimal("350.75")
        assert summary.ambientes_cubiertos == 2
        assert summary.usuario_admin_id == 1

    def test_elements_without_environment_not_counted_as_coverage(self, session, inventory):
        session.add(Elemento(placa=2001, valor_monetario=Decimal("10.00"), ambiente_id=None, inventario_id=42))
        session.commit()

        summary = InventoryEnrichment(session).enrich(42)
        assert summary.cantidad_elementos == 4
        assert summary.ambientes_cubiertos == 2

    def test_missing_inventory(self, session, roles):
        assert InventoryEnrichment(session).enrich(404) is None

import pytest

from ultrabms.auth.catalog import Scope, all_permissions
from ultrabms.auth.matrix import DEFAULT_ROLE_GRANTS, Role, RolePermissionMatrix
from ultrabms.errors import ConfigurationError

ALL, OWN, ASSIGNED = Scope.ALL, Scope.OWN, Scope.ASSIGNED

EXPECTED_GRANTS = {
    Role.PROPERTY_MANAGER: {
        "property:update": ASSIGNED,
        "property:read:assigned": ALL,
        "tenant:create": ALL,
        "tenant:read": ALL,
        "tenant:update": ALL,
        "workorder:create": ALL,
        "workorder:read": ALL,
        "workorder:update": ALL,
        "workorder:assign": ALL,
        "financial:read": ASSIGNED,
        "financial:report": ASSIGNED,
        "vendor:read": ALL,
        "amenity:manage": ALL,
    },
    Role.MAINTENANCE_SUPERVISOR: {
        "workorder:read": ALL,
        "workorder:update": ALL,
        "workorder:assign": ALL,
        "vendor:read": ALL,
        "vendor:update": ALL,
        "vendor:performance": ALL,
    },
    Role.FINANCE_MANAGER: {
        "property:read:all": ALL,
        "tenant:read": ALL,
        "financial:read": ALL,
        "financial:create": ALL,
        "financial:update": ALL,
        "financial:report": ALL,
        "financial:pdc": ALL,
        "payment:process": ALL,
        "payment:refund": ALL,
    },
    Role.TENANT: {
        "tenant:read:own": ALL,
        "workorder:create": ALL,
        "workorder:read": OWN,
        "amenity:book": ALL,
        "payment:make": ALL,
    },
    Role.VENDOR: {
        "workorder:read": ASSIGNED,
        "workorder:update": ASSIGNED,
    },
}


class TestDefaultMatrix:
    def test_super_admin_holds_every_declared_permission(self, matrix):
        for permission in all_permissions():
            assert matrix.has_permission(Role.SUPER_ADMIN, permission)
            assert matrix.grant_scope(Role.SUPER_ADMIN, permission) is Scope.ALL

    def test_super_admin_permission_list_is_full_catalog(self, matrix):
        assert matrix.permissions_for(Role.SUPER_ADMIN) == all_permissions()

    def test_tenant_holds_exactly_five_permissions(self, matrix):
        assert matrix.permissions_for(Role.TENANT) == frozenset({
            "tenant:read:own",
            "workorder:create",
            "workorder:read",
            "payment:make",
            "amenity:book",
        })

    def test_vendor_holds_exactly_two_permissions(self, matrix):
        assert matrix.permissions_for(Role.VENDOR) == frozenset({
            "workorder:read",
            "workorder:update",
        })

    def test_restricted_grants_carry_their_scope(self, matrix):
        assert matrix.grant_scope(Role.TENANT, "workorder:read") is Scope.OWN
        assert matrix.grant_scope(Role.VENDOR, "workorder:update") is Scope.ASSIGNED
        assert matrix.grant_scope(Role.PROPERTY_MANAGER, "financial:read") is Scope.ASSIGNED

    def test_finance_manager_cannot_delete_financial_records(self, matrix):
        assert not matrix.has_permission(Role.FINANCE_MANAGER, "financial:delete")
        assert matrix.has_permission(Role.FINANCE_MANAGER, "financial:report")

    def test_maintenance_supervisor_cannot_approve_work_orders(self, matrix):
        assert matrix.has_permission(Role.MAINTENANCE_SUPERVISOR, "workorder:assign")
        assert not matrix.has_permission(Role.MAINTENANCE_SUPERVISOR, "workorder:approve")

    def test_has_any_permission(self, matrix):
        assert matrix.has_any_permission(Role.TENANT, "user:delete", "amenity:book")
        assert not matrix.has_any_permission(Role.TENANT, "user:delete", "vendor:read")

    def test_has_all_permissions(self, matrix):
        assert matrix.has_all_permissions(Role.FINANCE_MANAGER, "financial:read", "financial:pdc")
        assert not matrix.has_all_permissions(Role.FINANCE_MANAGER, "financial:read", "financial:delete")

    def test_permission_strings_are_sorted(self, matrix):
        strings = matrix.permission_strings(Role.MAINTENANCE_SUPERVISOR)
        assert strings == sorted(strings)
        assert "vendor:performance" in strings

    def test_role_accepts_string_value(self, matrix):
        assert matrix.has_permission("TENANT", "amenity:book")

    def test_unknown_role_raises(self, matrix):
        with pytest.raises(ConfigurationError, match="Unknown role"):
            matrix.has_permission("JANITOR", "amenity:book")

    def test_undeclared_permission_raises(self, matrix):
        with pytest.raises(ConfigurationError):
            matrix.has_permission(Role.SUPER_ADMIN, "amenity:demolish")

    def test_matrix_is_immutable(self, matrix):
        with pytest.raises(AttributeError):
            matrix._grants = {}
        with pytest.raises(TypeError):
            matrix._grants[Role.TENANT]["user:delete"] = Scope.ALL


class TestMatrixValidation:
    def _grants(self, **overrides):
        grants = {role: dict(perms) for role, perms in DEFAULT_ROLE_GRANTS.items()}
        grants.update(overrides)
        return grants

    def test_undeclared_permission_in_grants_fails_construction(self):
        grants = self._grants()
        grants[Role.VENDOR]["workorder:teleport"] = Scope.ALL

        with pytest.raises(ConfigurationError, match="workorder:teleport"):
            RolePermissionMatrix(grants)

    def test_wildcard_grant_fails_construction(self):
        grants = self._grants()
        grants[Role.FINANCE_MANAGER]["financial:*"] = Scope.ALL

        with pytest.raises(ConfigurationError, match="Wildcard"):
            RolePermissionMatrix(grants)

    def test_missing_role_fails_construction(self):
        grants = self._grants()
        del grants[Role.VENDOR]

        with pytest.raises(ConfigurationError, match="VENDOR"):
            RolePermissionMatrix(grants)

    def test_declaring_super_admin_fails_construction(self):
        grants = self._grants()
        grants[Role.SUPER_ADMIN] = {"user:read": Scope.ALL}

        with pytest.raises(ConfigurationError, match="SUPER_ADMIN"):
            RolePermissionMatrix(grants)

    def test_non_scope_grant_value_fails_construction(self):
        grants = self._grants()
        grants[Role.TENANT]["amenity:book"] = "all"

        with pytest.raises(ConfigurationError, match="must be a Scope"):
            RolePermissionMatrix(grants)

    def test_later_mutation_of_source_dict_does_not_leak(self):
        grants = self._grants()
        matrix = RolePermissionMatrix(grants)

        grants[Role.TENANT]["user:delete"] = Scope.ALL

        assert not matrix.has_permission(Role.TENANT, "user:delete")


@pytest.mark.parametrize("role", sorted(EXPECTED_GRANTS, key=lambda role: role.value))
def test_role_holds_exactly_its_declared_grants(matrix, role):
    expected = EXPECTED_GRANTS[role]

    assert matrix.permissions_for(role) == frozenset(expected)
    for permission, scope in expected.items():
        assert matrix.grant_scope(role, permission) is scope


@pytest.mark.parametrize("role", sorted(EXPECTED_GRANTS, key=lambda role: role.value))
def test_role_is_denied_everything_outside_its_grants(matrix, role):
    for permission in all_permissions() - frozenset(EXPECTED_GRANTS[role]):
        assert not matrix.has_permission(role, permission)
        assert matrix.grant_scope(role, permission) is None

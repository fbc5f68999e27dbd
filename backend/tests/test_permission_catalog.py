import pytest

from ultrabms.auth.catalog import (
    ALL_PERMISSIONS,
    PERMISSIONS_BY_RESOURCE,
    Resource,
    Scope,
    all_permissions,
    parse_permission,
    permissions_for_resource,
    validate_permission,
)
from ultrabms.errors import ConfigurationError


def test_every_declared_key_parses_to_itself():
    for key in all_permissions():
        assert str(parse_permission(key)) == key


def test_catalog_is_union_of_resource_groups():
    union = frozenset().union(*PERMISSIONS_BY_RESOURCE.values())
    assert union == ALL_PERMISSIONS
    assert set(PERMISSIONS_BY_RESOURCE) == set(Resource)


def test_every_key_belongs_to_its_resource_group():
    for resource, keys in PERMISSIONS_BY_RESOURCE.items():
        for key in keys:
            assert parse_permission(key).resource is resource


@pytest.mark.parametrize(
    "key",
    ["user:manage:all", "financial:pdc", "tenant:read:own", "property:read:assigned"],
)
def test_supplementary_and_scoped_keys_are_declared(key):
    assert key in all_permissions()


def test_parse_scoped_key():
    parsed = parse_permission("tenant:read:own")

    assert parsed.resource is Resource.TENANT
    assert parsed.action == "read"
    assert parsed.scope is Scope.OWN
    assert parsed.base == "tenant:read"


def test_parse_unscoped_key_has_no_scope():
    assert parse_permission("workorder:assign").scope is None


@pytest.mark.parametrize("key", ["user:*", "financial:*", "*"])
def test_wildcards_are_rejected(key):
    with pytest.raises(ConfigurationError, match="Wildcard"):
        parse_permission(key)


@pytest.mark.parametrize(
    "key",
    ["", "user", "user:", ":read", "user:read:own:extra"],
)
def test_malformed_keys_are_rejected(key):
    with pytest.raises(ConfigurationError):
        parse_permission(key)


def test_unknown_resource_is_rejected():
    with pytest.raises(ConfigurationError, match="Unknown resource"):
        parse_permission("spaceship:launch")


def test_unknown_scope_is_rejected():
    with pytest.raises(ConfigurationError, match="Unknown scope"):
        parse_permission("tenant:read:everyone")


def test_validate_rejects_well_formed_but_undeclared_key():
    with pytest.raises(ConfigurationError, match="Undeclared permission 'workorder:teleport'"):
        validate_permission("workorder:teleport")


def test_permissions_for_resource_accepts_string():
    assert permissions_for_resource("amenity") == frozenset({"amenity:book", "amenity:manage"})


def test_permissions_for_unknown_resource_raises():
    with pytest.raises(ConfigurationError):
        permissions_for_resource("garage")

import pytest

from edithub.core.roles import Role, _ELEVATED, _MANAGES_CODES, parse_role


def test_every_role_is_classified():
    assert set(_ELEVATED) == set(Role)
    assert set(_MANAGES_CODES) == set(Role)


@pytest.mark.parametrize("role,elevated,manages", [
    (Role.MAIN_ADMIN, True, True),
    (Role.ADMIN, True, True),
    (Role.MODERATOR, True, False),
    (Role.CLIENT, False, False),
])
def test_role_capabilities(role, elevated, manages):
    assert role.is_elevated is elevated
    assert role.manages_codes is manages


def test_parse_role():
    assert parse_role("main_admin") is Role.MAIN_ADMIN
    assert parse_role("Admin") is None
    assert parse_role(None) is None

import pytest

from khakhra_dashboard.roles import ROLE_OPTIONS, ROLES, can_manage, normalize_role


@pytest.mark.parametrize("role,area,allowed", [
    ("admin", "orders", True),
    ("admin", "billing", True),
    ("staff", "orders", True),
    ("staff", "inventory", True),
    ("staff", "billing", False),
    ("staff", "expenses", False),
    ("accountant", "billing", True),
    ("accountant", "expenses", True),
    ("accountant", "orders", False),
    ("accountant", "inventory", False),
    (None, "orders", False),
    ("admin", "reports", False),
])
def test_can_manage(role, area, allowed):
    assert can_manage(role, area) is allowed


def test_normalize_role():
    assert normalize_role("staff") == "staff"
    assert normalize_role("owner") is None
    assert normalize_role(None) is None


def test_every_role_has_an_option():
    assert [o["value"] for o in ROLE_OPTIONS] == list(ROLES)

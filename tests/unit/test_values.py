from tests.helpers.webpilot_imports import Role, values


def test_every_role_has_a_value():
    for role in Role:
        assert values.provide_value(role)


def test_fixed_literals():
    assert values.provide_value(Role.EMAIL) == "testuser@example.com"
    assert values.provide_value(Role.PASSWORD) == "TestPassword123!"
    assert values.provide_value(Role.PHONE) == "+1-555-123-4567"
    assert values.provide_value(Role.FULL_NAME) == "Test User"
    assert values.provide_value(Role.GENERIC) == "Test"


def test_overrides_take_precedence():
    overrides = {Role.PASSWORD: "s3cret"}

    assert values.provide_value(Role.PASSWORD, overrides=overrides) == "s3cret"
    assert values.provide_value(Role.EMAIL, overrides=overrides) == "testuser@example.com"

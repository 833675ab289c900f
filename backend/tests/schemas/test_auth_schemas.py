"""Auth schemas — registration rules."""

import pytest
from pydantic import ValidationError

from app.schemas.auth import LoginRequest, RegisterRequest


def test_register_accepts_valid_payload():
    body = RegisterRequest(name="Ann", email="ann@x.com", password="secret1")
    assert body.email == "ann@x.com"


def test_register_lowercases_email():
    assert RegisterRequest(name="Ann", email="Ann@X.com", password="secret1").email == "ann@x.com"


def test_register_rejects_short_name():
    with pytest.raises(ValidationError):
        RegisterRequest(name="A", email="ann@x.com", password="secret1")


def test_register_rejects_bad_email():
    with pytest.raises(ValidationError):
        RegisterRequest(name="Ann", email="not-an-email", password="secret1")


def test_register_rejects_short_password():
    with pytest.raises(ValidationError):
        RegisterRequest(name="Ann", email="ann@x.com", password="12345")


def test_login_requires_password():
    with pytest.raises(ValidationError):
        LoginRequest(email="ann@x.com", password="")


def test_register_accepts_password_at_bcrypt_limit():
    assert len(RegisterRequest(name="Ann", email="ann@x.com", password="a" * 72).password) == 72


def test_register_rejects_multibyte_password_over_72_bytes():
    # 40 characters, 80 bytes
    with pytest.raises(ValidationError):
        RegisterRequest(name="Ann", email="ann@x.com", password="é" * 40)

import jwt
import pytest

from inventory_sales.config import settings
from inventory_sales.errors import InvalidToken
from inventory_sales.schemas.auth import Identity
from inventory_sales.services import auth_service
from inventory_sales.services.auth_service import (
    check_password,
    create_token,
    hash_password,
    token_from_header,
    verify_token,
)


def test_create_token_payload() -> None:
    token = create_token(Identity(id=1, username="user1", is_admin=False))
    payload = jwt.decode(token, settings.secret_key, algorithms=["HS256"])
    assert payload == {"id": 1, "username": "user1", "isAdmin": False}


def test_create_token_defaults_admin_flag_to_false() -> None:
    class Someone:
        id = 5
        username = "someone"

    payload = jwt.decode(create_token(Someone()), settings.secret_key, algorithms=["HS256"])
    assert payload["isAdmin"] is False
    assert "exp" not in payload


def test_verify_token_round_trip_for_admin() -> None:
    identity = verify_token(create_token(Identity(id=3, username="admin", is_admin=True)))
    assert identity == Identity(id=3, username="admin", is_admin=True)


def test_verify_token_rejects_bad_signature() -> None:
    token = jwt.encode({"id": 1, "username": "user1", "isAdmin": True}, "not-the-key", algorithm="HS256")
    with pytest.raises(InvalidToken):
        verify_token(token)


def test_verify_token_rejects_garbage() -> None:
    with pytest.raises(InvalidToken):
        verify_token("not.a.token")


def test_verify_token_rejects_payload_without_identity() -> None:
    token = jwt.encode({"username": "user1"}, settings.secret_key, algorithm="HS256")
    with pytest.raises(InvalidToken) as exc_info:
        verify_token(token)
    assert exc_info.value.status_code == 401


def test_token_expiry_when_configured(monkeypatch) -> None:
    monkeypatch.setattr(auth_service.settings, "token_expire_minutes", -1)
    token = create_token(Identity(id=1, username="user1"))
    with pytest.raises(InvalidToken):
        verify_token(token)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc.def.ghi ", "abc.def.ghi"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer", None),
        ("", None),
        (None, None),
    ],
)
def test_token_from_header(header, expected) -> None:
    assert token_from_header(header) == expected


def test_password_hashing() -> None:
    hashed = hash_password("password1")
    assert hashed != "password1"
    assert hashed.startswith("$2")
    assert check_password("password1", hashed)
    assert not check_password("password2", hashed)

import jwt

from conftest import auth, make_admin
from inventory_sales.config import settings

NEW_USER = {
    "username": "new",
    "password": "password",
    "email": "new@user.com",
    "firstName": "New",
    "lastName": "User",
}


async def test_root(client) -> None:
    response = await client.get("/")
    assert response.status_code == 200


async def test_register(client) -> None:
    response = await client.post("/users/register", json=NEW_USER)
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["username"] == "new"
    assert body["user"]["isAdmin"] is False
    assert "password" not in body["user"]
    payload = jwt.decode(body["token"], settings.secret_key, algorithms=["HS256"])
    assert payload == {"id": body["user"]["id"], "username": "new", "isAdmin": False}


async def test_register_cannot_set_admin(client) -> None:
    response = await client.post("/users/register", json={**NEW_USER, "isAdmin": True})
    assert response.status_code == 400


async def test_register_duplicate_username(client, seed) -> None:
    response = await client.post("/users/register", json={**NEW_USER, "username": "user1"})
    assert response.status_code == 409
    assert response.json() == {"error": {"message": "username taken: user1", "status": 409}}


async def test_register_invalid_body(client) -> None:
    response = await client.post("/users/register", json={"username": "x"})
    assert response.status_code == 400
    assert isinstance(response.json()["error"]["message"], list)


async def test_login(client, seed) -> None:
    response = await client.post("/users/login", json={"username": "user1", "password": "password1"})
    assert response.status_code == 200
    payload = jwt.decode(response.json()["token"], settings.secret_key, algorithms=["HS256"])
    assert payload["id"] == seed["user1"]
    assert payload["username"] == "user1"


async def test_login_wrong_password(client, seed) -> None:
    response = await client.post("/users/login", json={"username": "user1", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Incorrect username/password"


async def test_login_unknown_user(client, seed) -> None:
    response = await client.post("/users/login", json={"username": "ghost", "password": "password1"})
    assert response.status_code == 404


async def test_list_users_admin_only(client, seed, tokens) -> None:
    response = await client.get("/users", headers=auth(tokens["admin"]))
    assert response.status_code == 200
    assert len(response.json()["users"]) == 3

    response = await client.get("/users", headers=auth(tokens["user1"]))
    assert response.status_code == 401
    assert response.json() == {"error": {"message": "Unauthorized", "status": 401}}

    response = await client.get("/users")
    assert response.status_code == 401


async def test_admin_flag_from_login(client, database, seed) -> None:
    await make_admin(database, seed["user3"])
    response = await client.post("/users/login", json={"username": "user3", "password": "password3"})
    token = response.json()["token"]
    assert response.json()["user"]["isAdmin"] is True

    response = await client.get("/users", headers=auth(token))
    assert response.status_code == 200


async def test_get_user(client, seed, tokens) -> None:
    response = await client.get(f"/users/{seed['user1']}", headers=auth(tokens["user1"]))
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "user1"
    assert "token" not in response.json()

    response = await client.get(f"/users/{seed['user1']}", headers=auth(tokens["user2"]))
    assert response.status_code == 401

    response = await client.get(f"/users/{seed['user1']}", headers=auth(tokens["admin"]))
    assert response.status_code == 200


async def test_get_user_bad_token(client, seed) -> None:
    response = await client.get(f"/users/{seed['user1']}", headers=auth("garbage"))
    assert response.status_code == 401


async def test_get_missing_user_as_admin(client, seed, tokens) -> None:
    response = await client.get("/users/9999", headers=auth(tokens["admin"]))
    assert response.status_code == 404


async def test_non_numeric_user_id(client, seed, tokens) -> None:
    response = await client.get("/users/abc", headers=auth(tokens["user1"]))
    assert response.status_code == 401

    response = await client.get("/users/abc", headers=auth(tokens["admin"]))
    assert response.status_code == 400


async def test_update_own_username_reissues_token(client, seed, tokens) -> None:
    response = await client.patch(
        f"/users/{seed['user1']}", json={"username": "renamed"}, headers=auth(tokens["user1"])
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["username"] == "renamed"
    payload = jwt.decode(body["token"], settings.secret_key, algorithms=["HS256"])
    assert payload["username"] == "renamed"


async def test_update_without_rename_has_no_token(client, seed, tokens) -> None:
    response = await client.patch(
        f"/users/{seed['user1']}", json={"firstName": "Changed"}, headers=auth(tokens["user1"])
    )
    assert response.status_code == 200
    assert response.json()["user"]["firstName"] == "Changed"
    assert "token" not in response.json()


async def test_admin_rename_does_not_reissue(client, seed, tokens) -> None:
    response = await client.patch(
        f"/users/{seed['user1']}", json={"username": "byadmin"}, headers=auth(tokens["admin"])
    )
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "byadmin"
    assert "token" not in response.json()


async def test_update_empty_body(client, seed, tokens) -> None:
    response = await client.patch(f"/users/{seed['user1']}", json={}, headers=auth(tokens["user1"]))
    assert response.status_code == 400


async def test_update_cannot_grant_admin(client, seed, tokens) -> None:
    response = await client.patch(
        f"/users/{seed['user1']}", json={"isAdmin": True}, headers=auth(tokens["user1"])
    )
    assert response.status_code == 400


async def test_update_other_user(client, seed, tokens) -> None:
    # authorization is decided before the body is looked at
    response = await client.patch(f"/users/{seed['user1']}", json={}, headers=auth(tokens["user2"]))
    assert response.status_code == 401


async def test_delete_user(client, seed, tokens) -> None:
    response = await client.delete(f"/users/{seed['user1']}", headers=auth(tokens["user1"]))
    assert response.status_code == 200
    assert response.json() == {"message": "user1 deleted."}

    response = await client.delete(f"/users/{seed['user2']}", headers=auth(tokens["user1"]))
    assert response.status_code == 401


async def test_user_sales_reports(client, seed, tokens) -> None:
    headers = auth(tokens["user1"])

    response = await client.get(f"/users/{seed['user1']}/sales", headers=headers)
    assert response.status_code == 200
    rows = response.json()["userSales"]
    assert rows[0]["name"] == "Product1"
    assert rows[0]["quantitySold"] == 2

    response = await client.get(f"/users/{seed['user1']}/businessSales", headers=headers)
    assert response.status_code == 200
    assert response.json()["businessSales"][0]["businessName"] == "Business1"

    response = await client.get(f"/users/{seed['user1']}/allSalesInfo", headers=headers)
    assert response.status_code == 200
    assert len(response.json()["sales"]) == 2


async def test_user_sales_reports_empty(client, seed, tokens) -> None:
    response = await client.get(f"/users/{seed['user3']}/allSalesInfo", headers=auth(tokens["admin"]))
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "No sales for user"


async def test_user_sales_reports_other_user(client, seed, tokens) -> None:
    response = await client.get(f"/users/{seed['user1']}/sales", headers=auth(tokens["user2"]))
    assert response.status_code == 401

from conftest import auth


def business_sale(product_id: int, **overrides) -> dict:
    return {
        "productId": product_id,
        "quantitySold": 2,
        "salePrice": 85,
        "businessPercentage": 20,
        "saleDate": "2024-06-02T09:30:00Z",
        **overrides,
    }


async def test_create_business_sale(client, seed, tokens) -> None:
    response = await client.post(
        f"/businesses/{seed['business1']}/businessSales",
        json=business_sale(seed["product1"]),
        headers=auth(tokens["user1"]),
    )
    assert response.status_code == 201
    created = response.json()["businessSale"]
    assert created["businessId"] == seed["business1"]
    assert created["businessPercentage"] == 20


async def test_create_business_sale_skips_inventory_check(client, seed, tokens) -> None:
    response = await client.post(
        f"/businesses/{seed['business1']}/businessSales",
        json=business_sale(seed["product1"], quantitySold=1000),
        headers=auth(tokens["user1"]),
    )
    assert response.status_code == 201


async def test_unknown_product_is_not_found(client, seed, tokens) -> None:
    response = await client.post(
        f"/businesses/{seed['business1']}/businessSales",
        json=business_sale(9999),
        headers=auth(tokens["user1"]),
    )
    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Product not found with ID of: 9999", "status": 404}}

    response = await client.patch(
        f"/businesses/{seed['business1']}/businessSales/{seed['business_sale1']}",
        json={"productId": 9999},
        headers=auth(tokens["user1"]),
    )
    assert response.status_code == 404


async def test_percentage_out_of_range(client, seed, tokens) -> None:
    response = await client.post(
        f"/businesses/{seed['business1']}/businessSales",
        json=business_sale(seed["product1"], businessPercentage=150),
        headers=auth(tokens["user1"]),
    )
    assert response.status_code == 400


async def test_other_users_business_looks_missing(client, seed, tokens) -> None:
    response = await client.get(
        f"/businesses/{seed['business1']}/businessSales", headers=auth(tokens["user2"])
    )
    assert response.status_code == 404

    response = await client.get(f"/businesses/{seed['business1']}/businessSales")
    assert response.status_code == 401

    response = await client.get(
        f"/businesses/{seed['business1']}/businessSales", headers=auth(tokens["admin"])
    )
    assert response.status_code == 404


async def test_list_and_get(client, seed, tokens) -> None:
    headers = auth(tokens["user1"])
    response = await client.get(f"/businesses/{seed['business1']}/businessSales", headers=headers)
    assert response.status_code == 200
    rows = response.json()["businessSales"]
    assert [r["id"] for r in rows] == [seed["business_sale1"]]
    assert rows[0]["sku"] == "SKU1"

    response = await client.get(
        f"/businesses/{seed['business1']}/businessSales/{seed['business_sale1']}", headers=headers
    )
    assert response.status_code == 200
    assert response.json()["businessSale"]["businessPercentage"] == 30


async def test_update_business_sale(client, seed, tokens) -> None:
    url = f"/businesses/{seed['business1']}/businessSales/{seed['business_sale1']}"
    response = await client.patch(url, json={"businessPercentage": 35}, headers=auth(tokens["user1"]))
    assert response.status_code == 200
    assert response.json()["businessSale"]["businessPercentage"] == 35


async def test_delete_business_sale(client, seed, tokens) -> None:
    url = f"/businesses/{seed['business1']}/businessSales/{seed['business_sale1']}"
    response = await client.delete(url, headers=auth(tokens["user1"]))
    assert response.status_code == 200
    assert response.json() == {"message": f"Business sale with ID of: {seed['business_sale1']} deleted."}

    response = await client.delete(url, headers=auth(tokens["user1"]))
    assert response.status_code == 404

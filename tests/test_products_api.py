"""Tests for /products endpoints."""
import uuid
from decimal import Decimal

import pytest

from storefront.shopcore import services
from storefront.shopcore.models import Product

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    payload = {
        "name": "Cast Iron Skillet",
        "description": "Pre-seasoned, 26cm",
        "category": "KITCHENWARE",
        "price": 34.00,
        "stock": 12,
    }
    payload.update(overrides)
    return payload


def test_created_product_is_retrievable(api_client):
    response = api_client.post("/products", _payload())

    assert response.status_code == 201
    created = response.json()

    body = api_client.get(f"/products/{created['id']}").json()
    assert body["name"] == "Cast Iron Skillet"
    assert body["category"] == "KITCHENWARE"
    assert Decimal(str(body["price"])) == Decimal("34.00")
    assert body["stock"] == 12


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"price": -1}, "price"),
        ({"stock": -3}, "stock"),
        ({"stock": 1.5}, "stock"),
        ({"category": "GROCERIES"}, "category"),
        ({"name": "x" * 61}, "name"),
    ],
)
def test_create_product_validates_the_body(api_client, overrides, field):
    response = api_client.post("/products", _payload(**overrides))

    assert response.status_code == 400
    assert response.json()["message"].startswith(f"{field}:")
    assert Product.objects.count() == 0


def test_patch_keeps_untouched_fields(api_client, make_product):
    product = make_product(price="10.00", stock=5)

    response = api_client.patch(f"/products/{product.pk}", {"price": 12.5})

    assert response.status_code == 200
    product.refresh_from_db()
    assert product.price == Decimal("12.50")
    assert product.stock == 5
    assert product.name == "Yoga Mat"


def test_get_unknown_product_is_not_found(api_client):
    response = api_client.get(f"/products/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.content == b""


def test_malformed_id_is_not_found(api_client):
    response = api_client.get("/products/not-a-uuid")

    assert response.status_code == 404
    assert response.content == b""


def test_delete_then_fetch_is_not_found(api_client, make_product):
    product = make_product()

    assert api_client.delete(f"/products/{product.pk}").status_code == 204
    assert api_client.get(f"/products/{product.pk}").status_code == 404


def test_product_referenced_by_an_order_cannot_be_deleted(api_client, user, make_product):
    product = make_product(stock=5)
    services.place_order(user.pk, [{"product_id": product.pk, "unit_price": product.price, "quantity": 1}])

    response = api_client.delete(f"/products/{product.pk}")

    assert response.status_code == 400
    assert "referenced by existing orders" in response.json()["message"]
    assert Product.objects.filter(pk=product.pk).exists()


def test_list_sorts_by_price(api_client, make_product):
    make_product(name="Mid", price="20.00")
    make_product(name="Cheap", price="5.00")
    make_product(name="Pricey", price="90.00")

    lowest = [p["name"] for p in api_client.get("/products?order=priceLowest").json()]
    highest = [p["name"] for p in api_client.get("/products?order=priceHighest").json()]

    assert lowest == ["Cheap", "Mid", "Pricey"]
    assert highest == ["Pricey", "Mid", "Cheap"]


def test_list_filters_by_category(api_client, make_product):
    make_product(name="Earbuds", category=Product.Category.ELECTRONICS)
    make_product(name="Yoga Mat", category=Product.Category.SPORTS)

    body = api_client.get("/products?category=ELECTRONICS").json()

    assert [p["name"] for p in body] == ["Earbuds"]


def test_list_pages_are_disjoint_and_ordered(api_client, make_product):
    for i in range(4):
        make_product(name=f"Product {i}", price=f"{i + 1}.00")

    everything = [p["id"] for p in api_client.get("/products?order=priceLowest&limit=4").json()]
    first = [p["id"] for p in api_client.get("/products?order=priceLowest&limit=2&offset=0").json()]
    second = [p["id"] for p in api_client.get("/products?order=priceLowest&limit=2&offset=2").json()]

    assert first + second == everything
    assert not set(first) & set(second)


def test_oversized_limit_is_a_client_error(api_client):
    response = api_client.get("/products?limit=100000000000000000000")

    assert response.status_code == 400
    assert response.json()["message"].startswith("limit:")

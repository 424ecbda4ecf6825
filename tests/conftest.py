"""Pytest fixtures for the storefront API."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from storefront.shopcore.models import Product, User, UserPreference


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make(email="ana.kim@example.com", first_name="Ana", last_name="Kim", receive_email=True) -> User:
        user = User.objects.create(
            email=email,
            first_name=first_name,
            last_name=last_name,
            address="1 Market Street",
        )
        UserPreference.objects.create(user=user, receive_email=receive_email)
        return user

    return _make


@pytest.fixture
def user(make_user) -> User:
    return make_user()


@pytest.fixture
def make_product(db):
    def _make(name="Yoga Mat", price="10.00", stock=5, category=Product.Category.SPORTS) -> Product:
        return Product.objects.create(
            name=name,
            price=Decimal(price),
            stock=stock,
            category=category,
        )

    return _make

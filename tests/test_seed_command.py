from io import StringIO

import pytest
from django.core.management import call_command

from storefront.shopcore.models import Product, User, UserPreference

pytestmark = pytest.mark.django_db


def test_seed_creates_users_with_preferences_and_products():
    out = StringIO()

    call_command("seed_shopcore", users=3, products=5, stdout=out)

    assert User.objects.count() == 3
    assert UserPreference.objects.count() == 3
    assert Product.objects.count() == 5
    assert all(p.stock >= 0 and p.price >= 0 for p in Product.objects.all())
    assert "users_created=3" in out.getvalue()


def test_seed_skips_existing_users():
    call_command("seed_shopcore", users=2, products=0, stdout=StringIO())
    out = StringIO()

    call_command("seed_shopcore", users=2, products=0, stdout=out)

    assert User.objects.count() == 2
    assert "users_existing=2" in out.getvalue()

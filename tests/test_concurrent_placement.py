"""Order placement under concurrent writers.

These run with real commits (``transaction=True``) so each thread sees the
others' work through its own database connection.
"""
import threading

import pytest
from django.db import connection
from django.db.models.query import QuerySet

from storefront.shopcore import services
from storefront.shopcore.exceptions import InsufficientStock
from storefront.shopcore.models import Order, OrderItem, Product

pytestmark = pytest.mark.django_db(transaction=True)


def _place_concurrently(user, product, attempts: int) -> list[str]:
    barrier = threading.Barrier(attempts)
    outcomes: list[str] = []
    lock = threading.Lock()

    def worker():
        try:
            barrier.wait()
            services.place_order(
                user.pk,
                [{"product_id": product.pk, "unit_price": product.price, "quantity": 1}],
            )
            outcome = "ok"
        except InsufficientStock:
            outcome = "short"
        except Exception as exc:  # surfaced through the assertions below
            outcome = repr(exc)
        finally:
            connection.close()
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(attempts)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return outcomes


def test_concurrent_orders_never_oversell(user, make_product):
    """Eight buyers race for five units; exactly five orders go through."""
    product = make_product(stock=5)

    outcomes = _place_concurrently(user, product, attempts=8)

    assert set(outcomes) <= {"ok", "short"}, outcomes
    placed = outcomes.count("ok")
    stock = Product.objects.get(pk=product.pk).stock
    assert stock >= 0
    assert stock == 5 - placed
    assert placed == 5
    assert Order.objects.count() == placed


def test_concurrent_orders_all_succeed_when_stock_allows(user, make_product):
    product = make_product(stock=100)

    outcomes = _place_concurrently(user, product, attempts=8)

    assert outcomes == ["ok"] * 8
    assert Product.objects.get(pk=product.pk).stock == 92
    assert OrderItem.objects.count() == 8


def test_guarded_decrement_matching_no_rows_rolls_back(user, make_product, monkeypatch):
    """Stock drained between the lock read and the decrement still fails cleanly."""
    product = make_product(stock=3)
    original_update = QuerySet.update

    def drain_then_update(self, **kwargs):
        if self.model is Product and "stock" in kwargs:
            original_update(Product.objects.filter(pk=product.pk), stock=0)
        return original_update(self, **kwargs)

    monkeypatch.setattr(QuerySet, "update", drain_then_update)

    with pytest.raises(InsufficientStock) as exc_info:
        services.place_order(
            user.pk,
            [{"product_id": product.pk, "unit_price": product.price, "quantity": 2}],
        )

    shortage = exc_info.value.shortages[0]
    assert shortage.requested == 2
    assert shortage.available == 0
    assert Order.objects.count() == 0
    assert OrderItem.objects.count() == 0
    assert Product.objects.get(pk=product.pk).stock == 3

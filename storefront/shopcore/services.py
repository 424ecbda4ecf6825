from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.db.models import F, ProtectedError
from django.utils import timezone

from storefront.utils.logging import get_logger

from .exceptions import DuplicateEmail, InsufficientStock, NotFound, ProductInUse, Shortage
from .models import Order, OrderItem, Product, User, UserPreference

logger = get_logger(__name__)

# Primary key is always the last key so offset/limit paging is stable.
USER_ORDERINGS = {
    "newest": ("-created_at", "-pk"),
    "oldest": ("created_at", "pk"),
}

ORDER_ORDERINGS = USER_ORDERINGS

PRODUCT_ORDERINGS = {
    "newest": ("-created_at", "-pk"),
    "oldest": ("created_at", "pk"),
    "priceLowest": ("price", "pk"),
    "priceHighest": ("-price", "-pk"),
}


def _page(queryset, offset: int, limit: int) -> list:
    return list(queryset[offset:offset + limit])


def _get_or_raise(queryset, model_name: str, pk):
    obj = queryset.filter(pk=pk).first()
    if obj is None:
        raise NotFound(model_name, pk)
    return obj


def _apply(instance, fields: dict, using: str) -> None:
    if not fields:
        return
    for name, value in fields.items():
        setattr(instance, name, value)
    instance.save(using=using, update_fields=[*fields, "updated_at"])


def _raise_if_email_taken(email: str | None, using: str, exclude_pk=None) -> None:
    if not email:
        return
    qs = User.objects.using(using).filter(email=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise DuplicateEmail(email)


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------

def list_users(*, offset: int = 0, limit: int = 10, order: str = "newest", using: str = DEFAULT_DB_ALIAS):
    qs = (
        User.objects.using(using)
        .select_related("user_preference")
        .order_by(*USER_ORDERINGS[order])
    )
    return _page(qs, offset, limit)


def get_user(user_id, *, using: str = DEFAULT_DB_ALIAS) -> User:
    qs = (
        User.objects.using(using)
        .select_related("user_preference")
        .prefetch_related("saved_products")
    )
    return _get_or_raise(qs, "User", user_id)


def create_user(data: dict, *, using: str = DEFAULT_DB_ALIAS) -> User:
    """Create a user together with its preference record."""
    fields = dict(data)
    preference = fields.pop("user_preference", None) or {}

    try:
        with transaction.atomic(using=using):
            user = User.objects.using(using).create(**fields)
            UserPreference.objects.using(using).create(user=user, **preference)
    except IntegrityError:
        _raise_if_email_taken(fields.get("email"), using)
        raise

    logger.info(f"[USER] created user={user.pk}")
    return get_user(user.pk, using=using)


def update_user(user_id, data: dict, *, using: str = DEFAULT_DB_ALIAS) -> User:
    fields = dict(data)
    preference = fields.pop("user_preference", None) or {}

    try:
        with transaction.atomic(using=using):
            user = _get_or_raise(User.objects.using(using).select_for_update(), "User", user_id)
            _apply(user, fields, using)
            if preference:
                user_preference = UserPreference.objects.using(using).get(user=user)
                _apply(user_preference, preference, using)
    except IntegrityError:
        _raise_if_email_taken(fields.get("email"), using, exclude_pk=user_id)
        raise

    return get_user(user_id, using=using)


def delete_user(user_id, *, using: str = DEFAULT_DB_ALIAS) -> None:
    deleted, _ = User.objects.using(using).filter(pk=user_id).delete()
    if not deleted:
        raise NotFound("User", user_id)
    logger.info(f"[USER] deleted user={user_id}")


def list_saved_products(user_id, *, using: str = DEFAULT_DB_ALIAS) -> list[Product]:
    user = get_user(user_id, using=using)
    return list(user.saved_products.all())


def toggle_saved_product(user_id, product_id, *, using: str = DEFAULT_DB_ALIAS) -> list[Product]:
    """Save ``product_id`` for the user if absent, otherwise remove it.

    The user row stays locked for the whole read-then-write, so two toggles
    for the same user never interleave.
    """
    with transaction.atomic(using=using):
        user = _get_or_raise(User.objects.using(using).select_for_update(), "User", user_id)

        if user.saved_products.filter(pk=product_id).exists():
            user.saved_products.remove(product_id)
            action = "removed"
        else:
            product = _get_or_raise(Product.objects.using(using), "Product", product_id)
            user.saved_products.add(product)
            action = "saved"

        saved = list(user.saved_products.all())

    logger.info(f"[SAVED] user={user_id} product={product_id} {action}")
    return saved


def list_user_orders(
    user_id,
    *,
    offset: int = 0,
    limit: int = 10,
    order: str = "newest",
    using: str = DEFAULT_DB_ALIAS,
) -> list[Order]:
    if not User.objects.using(using).filter(pk=user_id).exists():
        raise NotFound("User", user_id)
    qs = Order.objects.using(using).filter(user_id=user_id).order_by(*ORDER_ORDERINGS[order])
    return _page(qs, offset, limit)


# ---------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------

def list_products(
    *,
    offset: int = 0,
    limit: int = 10,
    order: str = "newest",
    category: str | None = None,
    using: str = DEFAULT_DB_ALIAS,
) -> list[Product]:
    qs = Product.objects.using(using)
    if category:
        qs = qs.filter(category=category)
    return _page(qs.order_by(*PRODUCT_ORDERINGS[order]), offset, limit)


def get_product(product_id, *, using: str = DEFAULT_DB_ALIAS) -> Product:
    return _get_or_raise(Product.objects.using(using), "Product", product_id)


def create_product(data: dict, *, using: str = DEFAULT_DB_ALIAS) -> Product:
    product = Product.objects.using(using).create(**data)
    logger.info(f"[PRODUCT] created product={product.pk} stock={product.stock}")
    return product


def update_product(product_id, data: dict, *, using: str = DEFAULT_DB_ALIAS) -> Product:
    with transaction.atomic(using=using):
        product = _get_or_raise(Product.objects.using(using).select_for_update(), "Product", product_id)
        _apply(product, dict(data), using)
    return product


def delete_product(product_id, *, using: str = DEFAULT_DB_ALIAS) -> None:
    try:
        deleted, _ = Product.objects.using(using).filter(pk=product_id).delete()
    except ProtectedError as exc:
        raise ProductInUse(product_id) from exc
    if not deleted:
        raise NotFound("Product", product_id)
    logger.info(f"[PRODUCT] deleted product={product_id}")


# ---------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------

def _with_total(order: Order) -> Order:
    # Derived at read time, never stored.
    order.total = sum(
        (item.unit_price * item.quantity for item in order.order_items.all()),
        Decimal("0.00"),
    )
    return order


def list_orders(*, offset: int = 0, limit: int = 10, order: str = "newest", using: str = DEFAULT_DB_ALIAS):
    qs = Order.objects.using(using).order_by(*ORDER_ORDERINGS[order])
    return _page(qs, offset, limit)


def get_order(order_id, *, using: str = DEFAULT_DB_ALIAS) -> Order:
    qs = Order.objects.using(using).prefetch_related("order_items")
    return _with_total(_get_or_raise(qs, "Order", order_id))


def requested_quantities(order_items: list[dict]) -> dict:
    """Sum line-item quantities per distinct product id, keeping first-seen order.

    Ids are normalised to ``uuid.UUID`` so string and UUID forms of the same
    product land on one key.
    """
    demand: dict = {}
    for item in order_items:
        product_id = uuid.UUID(str(item["product_id"]))
        demand[product_id] = demand.get(product_id, 0) + item["quantity"]
    return demand


def place_order(user_id, order_items: list[dict], *, using: str = DEFAULT_DB_ALIAS) -> Order:
    """Create an order and take its quantities out of stock as one unit.

    ``order_items`` are dicts with ``product_id``, ``unit_price`` and
    ``quantity``. Line items naming the same product are summed into a single
    demand before stock is checked. The requested products are locked with
    ``SELECT ... FOR UPDATE`` (in primary key order) so a concurrent placement
    waits until this one commits or rolls back.

    Raises:
        NotFound: the user does not exist.
        InsufficientStock: any product is missing or has less stock than
            demanded. Nothing is written in that case.
    """
    demand = requested_quantities(order_items)

    with transaction.atomic(using=using):
        if not User.objects.using(using).filter(pk=user_id).exists():
            raise NotFound("User", user_id)

        locked = (
            Product.objects.using(using)
            .select_for_update()
            .filter(pk__in=list(demand))
            .order_by("pk")
        )
        stock_by_id = {product.pk: product.stock for product in locked}

        shortages = [
            Shortage(product_id=str(product_id), requested=quantity, available=stock_by_id.get(product_id))
            for product_id, quantity in demand.items()
            if stock_by_id.get(product_id) is None or stock_by_id[product_id] < quantity
        ]
        if shortages:
            logger.warning(f"[ORDER] rejected user={user_id} shortages={len(shortages)}")
            raise InsufficientStock(shortages)

        order = Order.objects.using(using).create(user_id=user_id)
        OrderItem.objects.using(using).bulk_create([
            OrderItem(
                order=order,
                product_id=item["product_id"],
                unit_price=item["unit_price"],
                quantity=item["quantity"],
            )
            for item in order_items
        ])

        now = timezone.now()
        for product_id, quantity in demand.items():
            updated = (
                Product.objects.using(using)
                .filter(pk=product_id, stock__gte=quantity)
                .update(stock=F("stock") - quantity, updated_at=now)
            )
            if not updated:
                available = (
                    Product.objects.using(using)
                    .filter(pk=product_id)
                    .values_list("stock", flat=True)
                    .first()
                )
                raise InsufficientStock([Shortage(str(product_id), quantity, available)])

    logger.info(f"[ORDER] placed order={order.pk} user={user_id} items={len(order_items)}")
    return get_order(order.pk, using=using)


def update_order(order_id, data: dict, *, using: str = DEFAULT_DB_ALIAS) -> Order:
    with transaction.atomic(using=using):
        order = _get_or_raise(Order.objects.using(using).select_for_update(), "Order", order_id)
        _apply(order, dict(data), using)
    return order


def delete_order(order_id, *, using: str = DEFAULT_DB_ALIAS) -> None:
    deleted, _ = Order.objects.using(using).filter(pk=order_id).delete()
    if not deleted:
        raise NotFound("Order", order_id)
    logger.info(f"[ORDER] deleted order={order_id}")

"""ShopCore domain exceptions.

Raised by the service layer. The API gateway translates them into HTTP
responses in ``storefront.api_gateway.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ShopcoreError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(ShopcoreError):
    """A referenced entity does not exist."""

    def __init__(self, model_name: str, pk) -> None:
        super().__init__(f"{model_name} {pk} not found")
        self.model_name = model_name
        self.pk = pk


class BusinessRuleViolation(ShopcoreError):
    """The request is well-formed but breaks a domain rule."""


@dataclass(frozen=True, slots=True)
class Shortage:
    product_id: str
    requested: int
    available: int | None  # None when the product does not exist


class InsufficientStock(BusinessRuleViolation):
    def __init__(self, shortages: list[Shortage]) -> None:
        parts = []
        for s in shortages:
            if s.available is None:
                parts.append(f"{s.product_id} (not found)")
            else:
                parts.append(f"{s.product_id} (requested={s.requested}, available={s.available})")
        super().__init__("Insufficient Stock: " + ", ".join(parts))
        self.shortages = shortages


class DuplicateEmail(BusinessRuleViolation):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already in use")
        self.email = email


class ProductInUse(BusinessRuleViolation):
    def __init__(self, product_id) -> None:
        super().__init__(f"Product {product_id} is referenced by existing orders")
        self.product_id = product_id

import random
import re
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS, transaction

from storefront.shopcore.models import Product, User, UserPreference

FIRST_NAMES = ["Ana", "Ben", "Chloe", "Dev", "Emma", "Farid", "Grace", "Hiro", "Ines", "Jonas"]
LAST_NAMES = ["Kim", "Lopez", "Martin", "Nakamura", "Okafor", "Park", "Quinn", "Rossi", "Silva", "Tan"]

PRODUCT_NAMES = {
    Product.Category.FASHION: ["Denim Jacket", "Linen Shirt", "Wool Scarf"],
    Product.Category.BEAUTY: ["Hydrating Serum", "Clay Mask"],
    Product.Category.SPORTS: ["Yoga Mat", "Running Shoes", "Kettlebell 12kg"],
    Product.Category.ELECTRONICS: ["Wireless Earbuds", "USB-C Hub", "Smart Speaker"],
    Product.Category.HOME_INTERIOR: ["Floor Lamp", "Throw Pillow"],
    Product.Category.HOUSEHOLD_SUPPLIES: ["Laundry Pods", "Microfiber Cloths"],
    Product.Category.KITCHENWARE: ["Cast Iron Skillet", "Chef Knife", "French Press"],
}


class Command(BaseCommand):
    help = "Seed ShopCore users (with preferences) and products"

    def add_arguments(self, parser):
        parser.add_argument("--users", type=int, default=10, help="Number of users to create")
        parser.add_argument("--products", type=int, default=15, help="Number of products to create")
        parser.add_argument("--database", default=DEFAULT_DB_ALIAS, help="Database alias to seed")

    def handle(self, *args, **options):
        user_limit = int(options.get("users") or 0)
        product_limit = int(options.get("products") or 0)
        using = options.get("database") or DEFAULT_DB_ALIAS

        catalog = [(category, name) for category, names in PRODUCT_NAMES.items() for name in names]

        created_users = 0
        existing_users = 0
        created_products = 0

        with transaction.atomic(using=using):
            for i in range(user_limit):
                first = FIRST_NAMES[i % len(FIRST_NAMES)]
                last = LAST_NAMES[(i // len(FIRST_NAMES) + i) % len(LAST_NAMES)]
                email = self._email_for_name(f"{first} {last}", i)

                if User.objects.using(using).filter(email=email).exists():
                    existing_users += 1
                    continue

                user = User.objects.using(using).create(
                    email=email,
                    first_name=first,
                    last_name=last,
                    address=f"{random.randint(1, 999)} Market Street",
                )
                UserPreference.objects.using(using).create(
                    user=user,
                    receive_email=random.choice([True, False]),
                )
                created_users += 1

            for i in range(product_limit):
                category, name = catalog[i % len(catalog)]
                Product.objects.using(using).create(
                    name=name,
                    description=f"{name} from the {category.label.lower()} range",
                    category=category,
                    price=Decimal(str(random.choice([4.99, 12.50, 19.99, 34.00, 59.90, 129.00]))),
                    stock=random.randint(0, 50),
                )
                created_products += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded ShopCore. users_created={created_users} users_existing={existing_users} products_created={created_products}"
            )
        )

    def _email_for_name(self, name: str, index: int) -> str:
        local = (name or "").strip().lower()
        local = re.sub(r"[^a-z0-9]+", ".", local)
        local = re.sub(r"\.+", ".", local).strip(".")
        if not local:
            local = "user"
        return f"{local}.{index}@example.com"

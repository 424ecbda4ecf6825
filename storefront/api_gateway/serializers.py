"""Request and response schemas.

Wire fields are camelCase and map onto the snake_case model attributes via
``source``. Create requests validate against the full serializer; patch
requests use the same serializer with ``partial=True``.
"""

from decimal import Decimal

from rest_framework import serializers

from storefront.shopcore.models import Order, OrderItem, Product, User, UserPreference
from storefront.shopcore.services import ORDER_ORDERINGS, PRODUCT_ORDERINGS, USER_ORDERINGS


# ---------------------------------------------------------------------
# Query strings
# ---------------------------------------------------------------------

# Both bounds fit a signed 32-bit column so every backend accepts them.
MAX_OFFSET = 2**31 - 1
MAX_LIMIT = 1000


class ListQuerySerializer(serializers.Serializer):
    offset = serializers.IntegerField(min_value=0, max_value=MAX_OFFSET, default=0)
    limit = serializers.IntegerField(min_value=0, max_value=MAX_LIMIT, default=10)
    order = serializers.ChoiceField(choices=list(USER_ORDERINGS), default="newest")


class OrderListQuerySerializer(ListQuerySerializer):
    order = serializers.ChoiceField(choices=list(ORDER_ORDERINGS), default="newest")


class ProductListQuerySerializer(ListQuerySerializer):
    order = serializers.ChoiceField(choices=list(PRODUCT_ORDERINGS), default="newest")
    category = serializers.CharField(required=False, allow_blank=True)


# ---------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------

class ProductSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=1, max_length=60)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Product.Category.choices)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    stock = serializers.IntegerField(min_value=0)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "description", "category", "price", "stock", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------

class UserPreferenceSerializer(serializers.ModelSerializer):
    receiveEmail = serializers.BooleanField(source="receive_email")

    class Meta:
        model = UserPreference
        fields = ["receiveEmail"]


class UserSerializer(serializers.ModelSerializer):
    email = serializers.EmailField()
    firstName = serializers.CharField(source="first_name", min_length=1, max_length=30)
    lastName = serializers.CharField(source="last_name", min_length=1, max_length=30)
    address = serializers.CharField(max_length=255)
    userPreference = UserPreferenceSerializer(source="user_preference")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "firstName", "lastName", "address", "userPreference", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


class UserDetailSerializer(UserSerializer):
    savedProducts = ProductSerializer(source="saved_products", many=True, read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["savedProducts"]


class SavedProductSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")


# ---------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------

class OrderItemSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source="product_id")
    unitPrice = serializers.DecimalField(
        source="unit_price",
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0"),
    )
    quantity = serializers.IntegerField(min_value=1)

    class Meta:
        model = OrderItem
        fields = ["id", "productId", "unitPrice", "quantity"]
        read_only_fields = ["id"]


class OrderSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source="user_id")
    status = serializers.ChoiceField(choices=Order.Status.choices, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "userId", "status", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


class OrderDetailSerializer(OrderSerializer):
    orderItems = OrderItemSerializer(source="order_items", many=True, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["orderItems", "total"]


class CreateOrderSerializer(serializers.Serializer):
    userId = serializers.UUIDField(source="user_id")
    orderItems = OrderItemSerializer(source="order_items", many=True, allow_empty=False)


class PatchOrderSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)

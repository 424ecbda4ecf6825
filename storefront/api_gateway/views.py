# api_gateway/views.py
from django.db import DEFAULT_DB_ALIAS
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from storefront.shopcore import services

from .serializers import (
    CreateOrderSerializer,
    ListQuerySerializer,
    OrderDetailSerializer,
    OrderListQuerySerializer,
    OrderSerializer,
    PatchOrderSerializer,
    ProductListQuerySerializer,
    ProductSerializer,
    SavedProductSerializer,
    UserDetailSerializer,
    UserSerializer,
)


class ShopcoreAPIView(APIView):
    """Base view: validates input with serializers and hands the database alias to services."""

    database = DEFAULT_DB_ALIAS

    def validated_query(self, serializer_class):
        serializer = serializer_class(data=self.request.query_params)
        serializer.is_valid(raise_exception=True)
        return dict(serializer.validated_data)

    def validated_body(self, serializer_class, partial=False):
        serializer = serializer_class(data=self.request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        return dict(serializer.validated_data)


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------

class UserListView(ShopcoreAPIView):

    def get(self, request):
        params = self.validated_query(ListQuerySerializer)
        users = services.list_users(using=self.database, **params)
        return Response(UserSerializer(users, many=True).data)

    def post(self, request):
        data = self.validated_body(UserSerializer)
        user = services.create_user(data, using=self.database)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class UserDetailView(ShopcoreAPIView):

    def get(self, request, user_id):
        user = services.get_user(user_id, using=self.database)
        return Response(UserDetailSerializer(user).data)

    def patch(self, request, user_id):
        data = self.validated_body(UserSerializer, partial=True)
        user = services.update_user(user_id, data, using=self.database)
        return Response(UserSerializer(user).data)

    def delete(self, request, user_id):
        services.delete_user(user_id, using=self.database)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserSavedProductsView(ShopcoreAPIView):

    def get(self, request, user_id):
        products = services.list_saved_products(user_id, using=self.database)
        return Response(ProductSerializer(products, many=True).data)

    def post(self, request, user_id):
        data = self.validated_body(SavedProductSerializer)
        products = services.toggle_saved_product(user_id, data["product_id"], using=self.database)
        return Response(ProductSerializer(products, many=True).data)


class UserOrdersView(ShopcoreAPIView):

    def get(self, request, user_id):
        params = self.validated_query(OrderListQuerySerializer)
        orders = services.list_user_orders(user_id, using=self.database, **params)
        return Response(OrderSerializer(orders, many=True).data)


# ---------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------

class ProductListView(ShopcoreAPIView):

    def get(self, request):
        params = self.validated_query(ProductListQuerySerializer)
        products = services.list_products(using=self.database, **params)
        return Response(ProductSerializer(products, many=True).data)

    def post(self, request):
        data = self.validated_body(ProductSerializer)
        product = services.create_product(data, using=self.database)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(ShopcoreAPIView):

    def get(self, request, product_id):
        product = services.get_product(product_id, using=self.database)
        return Response(ProductSerializer(product).data)

    def patch(self, request, product_id):
        data = self.validated_body(ProductSerializer, partial=True)
        product = services.update_product(product_id, data, using=self.database)
        return Response(ProductSerializer(product).data)

    def delete(self, request, product_id):
        services.delete_product(product_id, using=self.database)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------

class OrderListView(ShopcoreAPIView):

    def get(self, request):
        params = self.validated_query(OrderListQuerySerializer)
        orders = services.list_orders(using=self.database, **params)
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request):
        data = self.validated_body(CreateOrderSerializer)
        order = services.place_order(data["user_id"], data["order_items"], using=self.database)
        return Response(OrderDetailSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(ShopcoreAPIView):

    def get(self, request, order_id):
        order = services.get_order(order_id, using=self.database)
        return Response(OrderDetailSerializer(order).data)

    def patch(self, request, order_id):
        data = self.validated_body(PatchOrderSerializer, partial=True)
        order = services.update_order(order_id, data, using=self.database)
        return Response(OrderSerializer(order).data)

    def delete(self, request, order_id):
        services.delete_order(order_id, using=self.database)
        return Response(status=status.HTTP_204_NO_CONTENT)

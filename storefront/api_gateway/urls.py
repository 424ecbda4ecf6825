from django.http import JsonResponse
from django.urls import path

from .views import (
    OrderDetailView,
    OrderListView,
    ProductDetailView,
    ProductListView,
    UserDetailView,
    UserListView,
    UserOrdersView,
    UserSavedProductsView,
)


def api_root(request):
    """API root endpoint with available endpoints"""
    if request.method == 'GET':
        return JsonResponse({
            "message": "Storefront API",
            "version": "1.0.0",
            "endpoints": {
                "users": "/users",
                "user": "/users/<id>",
                "saved_products": "/users/<id>/saved-products",
                "user_orders": "/users/<id>/orders",
                "products": "/products",
                "product": "/products/<id>",
                "orders": "/orders",
                "order": "/orders/<id>",
            },
        })
    return JsonResponse({"message": "Method not allowed"}, status=405)


urlpatterns = [
    path("", api_root, name="api-root"),
    path("users", UserListView.as_view(), name="user-list"),
    path("users/<uuid:user_id>", UserDetailView.as_view(), name="user-detail"),
    path("users/<uuid:user_id>/saved-products", UserSavedProductsView.as_view(), name="user-saved-products"),
    path("users/<uuid:user_id>/orders", UserOrdersView.as_view(), name="user-orders"),
    path("products", ProductListView.as_view(), name="product-list"),
    path("products/<uuid:product_id>", ProductDetailView.as_view(), name="product-detail"),
    path("orders", OrderListView.as_view(), name="order-list"),
    path("orders/<uuid:order_id>", OrderDetailView.as_view(), name="order-detail"),
]

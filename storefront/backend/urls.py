from django.urls import include, path

urlpatterns = [
    path("", include("storefront.api_gateway.urls")),
]

handler404 = "storefront.api_gateway.errors.not_found"
handler500 = "storefront.api_gateway.errors.server_error"

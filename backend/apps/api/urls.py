from django.urls import include, path

# Paths carry no trailing slash; the storefront calls e.g. /api/v1/cart
urlpatterns = [
    path("", include("apps.catalog.urls")),
    path("", include("apps.carts.urls")),
    path("auth/", include("apps.auth.urls")),
]

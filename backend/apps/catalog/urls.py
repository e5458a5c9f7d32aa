from django.urls import path

from .views import ProductListView, ProductSearchView

urlpatterns = [
    path("products", ProductListView.as_view(), name="api-products-list"),
    path(
        "products/search", ProductSearchView.as_view(), name="api-products-search"
    ),
]

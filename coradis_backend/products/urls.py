# products/urls.py

"""
PRODUCTS URLS

Mounted under /api/products/:
    GET    /api/products/            (AllowAny)
    GET    /api/products/<slug>/     (AllowAny)
    POST   /api/products/            (catalog.edit)
    PATCH  /api/products/<slug>/     (catalog.edit)
    DELETE /api/products/<slug>/     (catalog.edit)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import ProductViewSet

app_name = "products"

router = SimpleRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]

# products/serializers/__init__.py

from .product import ProductSerializer, PublicProductSerializer

__all__ = [
    "ProductSerializer",
    "PublicProductSerializer",
]
